"""
碰撞检测

包围盒 = 视图位置 + 视图尺寸，按固定 margin 膨胀后做 AABB 分离测试。
批量版本用 numpy 一次测试一组候选位置
"""

from typing import Iterable, List, Optional

import numpy as np

from widget_grid.layout_engine.dimensions import MOBILE_TILE_SIZE, resolve_dimensions
from widget_grid.models.geometry import BoundingBox, Dimensions, Number
from widget_grid.models.view import ViewMode
from widget_grid.models.widget import Widget

DEFAULT_MARGIN = 8


def widget_box(
    widget: Widget,
    view_mode: ViewMode,
    mobile_tile_size: int = MOBILE_TILE_SIZE,
) -> BoundingBox:
    """计算 widget 在指定视图下的包围盒"""
    dims = resolve_dimensions(widget.size, view_mode, mobile_tile_size)
    return BoundingBox.from_point(widget.position_in(view_mode), dims)


def collides(
    a: Widget,
    b: Widget,
    view_mode: ViewMode,
    margin: Number = DEFAULT_MARGIN,
    mobile_tile_size: int = MOBILE_TILE_SIZE,
) -> bool:
    """
    两个 widget 是否重叠（对称）
    
    调用方负责排除自身比较
    """
    box_a = widget_box(a, view_mode, mobile_tile_size)
    box_b = widget_box(b, view_mode, mobile_tile_size)
    return box_a.overlaps(box_b, margin)


def find_collisions(
    widget: Widget,
    widgets: Iterable[Widget],
    view_mode: ViewMode,
    margin: Number = DEFAULT_MARGIN,
    mobile_tile_size: int = MOBILE_TILE_SIZE,
) -> List[str]:
    """返回与 widget 重叠的其他 widget id（按输入顺序）"""
    return [
        other.id
        for other in widgets
        if other.id != widget.id
        and collides(widget, other, view_mode, margin, mobile_tile_size)
    ]


def occupied_boxes(
    widgets: Iterable[Widget],
    view_mode: ViewMode,
    exclude_id: Optional[str] = None,
    mobile_tile_size: int = MOBILE_TILE_SIZE,
) -> np.ndarray:
    """
    收集已占用的包围盒
    
    Returns:
        shape (N, 4) 数组，列为 left, top, right, bottom
    """
    rows = [
        widget_box(w, view_mode, mobile_tile_size).as_tuple()
        for w in widgets
        if w.id != exclude_id
    ]
    if not rows:
        return np.empty((0, 4), dtype=float)
    return np.asarray(rows, dtype=float)


def candidate_hits(
    candidates: np.ndarray,
    dims: Dimensions,
    boxes: np.ndarray,
    margin: Number = DEFAULT_MARGIN,
) -> np.ndarray:
    """
    批量碰撞测试
    
    Args:
        candidates: shape (M, 2) 的候选左上角
        dims: 被放置 widget 的尺寸
        boxes: occupied_boxes 的结果
        margin: 间距
        
    Returns:
        shape (M,) 布尔数组，True 表示与至少一个已占用盒子重叠
    """
    if boxes.shape[0] == 0:
        return np.zeros(candidates.shape[0], dtype=bool)
    
    x = candidates[:, 0:1]
    y = candidates[:, 1:2]
    right = x + dims.width
    bottom = y + dims.height
    
    left_b = boxes[:, 0][np.newaxis, :]
    top_b = boxes[:, 1][np.newaxis, :]
    right_b = boxes[:, 2][np.newaxis, :]
    bottom_b = boxes[:, 3][np.newaxis, :]
    
    separated = (
        (right + margin <= left_b)
        | (right_b + margin <= x)
        | (bottom + margin <= top_b)
        | (bottom_b + margin <= y)
    )
    return np.any(~separated, axis=1)
