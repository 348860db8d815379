"""
画布度量
"""

from typing import Iterable

from widget_grid.layout_engine.dimensions import MOBILE_TILE_SIZE, resolve_dimensions
from widget_grid.models.geometry import Number
from widget_grid.models.view import ViewMode
from widget_grid.models.widget import Widget


def lowest_bottom(
    widgets: Iterable[Widget],
    view_mode: ViewMode,
    mobile_tile_size: int = MOBILE_TILE_SIZE,
) -> Number:
    """视图中最低的 widget 底边，没有 widget 时为 0"""
    bottom = 0
    for widget in widgets:
        dims = resolve_dimensions(widget.size, view_mode, mobile_tile_size)
        bottom = max(bottom, widget.position_in(view_mode).y + dims.height)
    return bottom


def canvas_height(
    widgets: Iterable[Widget],
    view_mode: ViewMode,
    min_height: Number = 600,
    bottom_padding: Number = 40,
    mobile_tile_size: int = MOBILE_TILE_SIZE,
) -> Number:
    """
    渲染所需的画布高度
    
    画布向下无限增长，这里给出容纳所有 widget 加底部留白的最小高度
    """
    widgets = list(widgets)
    if not widgets:
        return min_height
    return max(min_height, lowest_bottom(widgets, view_mode, mobile_tile_size) + bottom_padding)
