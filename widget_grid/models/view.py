"""
视图模式

两个独立的坐标空间：
- DESKTOP: 自由布局，按 size 标签取尺寸（存储字段 web_position）
- MOBILE: 两列网格，所有 widget 统一为正方形（存储字段 mobile_position）
"""

from enum import Enum
from typing import Dict, Set


class ViewMode(Enum):
    """
    视图模式枚举
    
    value 为存储/前端使用的字符串
    """
    DESKTOP = "web"
    MOBILE = "mobile"
    
    @property
    def record_field(self) -> str:
        """存储记录中对应的位置字段名"""
        return VIEW_RECORD_FIELDS[self]
    
    @property
    def other(self) -> "ViewMode":
        """另一种视图"""
        return ViewMode.MOBILE if self == ViewMode.DESKTOP else ViewMode.DESKTOP
    
    @classmethod
    def parse(cls, value: str) -> "ViewMode":
        """
        解析视图字符串
        
        接受 "web" / "desktop" / "mobile"（大小写不敏感）
        """
        normalized = str(value).strip().lower()
        if normalized in ("web", "desktop"):
            return cls.DESKTOP
        if normalized == "mobile":
            return cls.MOBILE
        raise ValueError(f"Unknown view mode: {value!r}")


VIEW_RECORD_FIELDS: Dict[ViewMode, str] = {
    ViewMode.DESKTOP: "web_position",
    ViewMode.MOBILE: "mobile_position",
}

# 旧版通用位置字段
LEGACY_POSITION_FIELD = "widget_position"


# 状态迁移图：两种视图之间可以自由切换，没有终止状态
VALID_TRANSITIONS: Dict[ViewMode, Set[ViewMode]] = {
    ViewMode.DESKTOP: {ViewMode.MOBILE},
    ViewMode.MOBILE: {ViewMode.DESKTOP},
}


def is_valid_transition(from_mode: ViewMode, to_mode: ViewMode) -> bool:
    """检查视图切换是否合法"""
    if from_mode == to_mode:
        return True  # 保持不变是合法的
    return to_mode in VALID_TRANSITIONS.get(from_mode, set())
