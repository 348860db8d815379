"""
存储层模块

包含:
- records: 存储记录解析与序列化（系统边界）
- memory_store: 内存存储实现
"""

from widget_grid.persistence.records import (
    LoadResult,
    parse_position,
    position_to_record,
    widget_to_record,
    widgets_from_records,
)
from widget_grid.persistence.memory_store import InMemoryWidgetStore

__all__ = [
    "LoadResult",
    "parse_position",
    "position_to_record",
    "widget_to_record",
    "widgets_from_records",
    "InMemoryWidgetStore",
]
