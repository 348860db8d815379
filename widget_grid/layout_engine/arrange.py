"""
移动端自动排列

加载时的一次性数据清洗：旧数据在引入分视图位置之前保存，多个 widget
可能共享同一个 mobile 位置。只要发现重复，就把全部 widget 重新排成
确定性的两列网格；没有重复时原样返回，保留用户手动调整过的布局
"""

from typing import List, Sequence

from loguru import logger

from widget_grid.models.geometry import Point
from widget_grid.models.view import ViewMode
from widget_grid.models.widget import Widget

MOBILE_GRID_ORIGIN = 20
MOBILE_GRID_STRIDE = 144
MOBILE_GRID_COLUMNS = 2


def has_duplicate_positions(widgets: Sequence[Widget], view_mode: ViewMode) -> bool:
    """是否有两个 widget 在该视图下位置完全相同"""
    seen = set()
    for widget in widgets:
        pos = widget.position_in(view_mode)
        key = (pos.x, pos.y)
        if key in seen:
            return True
        seen.add(key)
    return False


def mobile_grid_position(
    index: int,
    origin: int = MOBILE_GRID_ORIGIN,
    stride: int = MOBILE_GRID_STRIDE,
    columns: int = MOBILE_GRID_COLUMNS,
) -> Point:
    """第 index 个格子的左上角"""
    column = index % columns
    row = index // columns
    return Point(origin + column * stride, origin + row * stride)


def auto_arrange_mobile(
    widgets: Sequence[Widget],
    origin: int = MOBILE_GRID_ORIGIN,
    stride: int = MOBILE_GRID_STRIDE,
    columns: int = MOBILE_GRID_COLUMNS,
) -> List[Widget]:
    """
    检测重复的 mobile 位置并重新排列
    
    Returns:
        无重复时返回原列表；否则返回新列表，第 i 个 widget 放到第 i 格，
        desktop 位置不变
    """
    if not has_duplicate_positions(widgets, ViewMode.MOBILE):
        return widgets
    
    logger.info("Duplicate mobile positions found, re-arranging {} widgets", len(widgets))
    return [
        widget.with_position(
            ViewMode.MOBILE,
            mobile_grid_position(i, origin, stride, columns),
            update_legacy=False,
        )
        for i, widget in enumerate(widgets)
    ]
