"""
异常定义

布局算法本身不抛异常（畸形数据和搜索耗尽都在本地恢复），
这里只定义会话层和存储层需要向调用方传播的错误
"""

from typing import List


class WidgetGridError(Exception):
    """基础异常"""


class WidgetNotFoundError(WidgetGridError):
    """会话中不存在该 widget"""

    def __init__(self, widget_id: str):
        self.widget_id = widget_id
        super().__init__(f"Widget not found: {widget_id}")


class NoActiveDragError(WidgetGridError):
    """没有进行中的拖拽"""

    def __init__(self):
        super().__init__("No drag in progress")


class PersistenceError(WidgetGridError):
    """存储层写入失败"""

    def __init__(self, operation: str, widget_id: str, message: str = ""):
        self.operation = operation
        self.widget_id = widget_id
        detail = f": {message}" if message else ""
        super().__init__(f"Persistence failed ({operation} {widget_id}){detail}")


class ConfigValidationError(WidgetGridError):
    """配置校验错误"""

    def __init__(self, violations: List[str]):
        self.violations = violations
        super().__init__(f"Config validation failed: {violations}")
