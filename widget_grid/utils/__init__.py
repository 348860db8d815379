"""
工具模块
"""

from widget_grid.utils.types import WidgetId, PageId, SessionId, ConfigHash
from widget_grid.utils.timeutils import generate_session_id
from widget_grid.utils.log import configure_logging

__all__ = [
    "WidgetId",
    "PageId",
    "SessionId",
    "ConfigHash",
    "generate_session_id",
    "configure_logging",
]
