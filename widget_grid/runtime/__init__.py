"""
运行时模块

包含:
- session: 编辑会话
- demo: 演示入口
"""

from widget_grid.runtime.session import LayoutSession, DragState, Notification

__all__ = [
    "LayoutSession",
    "DragState",
    "Notification",
]
