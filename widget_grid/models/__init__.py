"""
数据模型模块

包含:
- geometry: 点、尺寸、包围盒
- view: 视图模式与迁移规则
- widget: widget 类型、尺寸标签与 widget 本体
"""

from widget_grid.models.geometry import Point, Dimensions, BoundingBox
from widget_grid.models.view import ViewMode, is_valid_transition
from widget_grid.models.widget import Widget, WidgetType, WidgetSize

__all__ = [
    # Geometry
    "Point",
    "Dimensions",
    "BoundingBox",
    # View
    "ViewMode",
    "is_valid_transition",
    # Widget
    "Widget",
    "WidgetType",
    "WidgetSize",
]
