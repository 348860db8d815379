"""
布局引擎模块

包含:
- dimensions: 尺寸解析
- snapping: 网格吸附
- collision: 碰撞检测
- placement: 放置求解（扩环搜索 + 堆叠兜底）
- arrange: 移动端自动排列
- canvas: 画布度量
"""

from widget_grid.layout_engine.dimensions import resolve_dimensions
from widget_grid.layout_engine.snapping import snap_to_grid
from widget_grid.layout_engine.collision import collides, find_collisions
from widget_grid.layout_engine.placement import (
    PlacementResolver,
    PlacementResult,
    PlacementStrategy,
)
from widget_grid.layout_engine.arrange import auto_arrange_mobile
from widget_grid.layout_engine.canvas import canvas_height

__all__ = [
    "resolve_dimensions",
    "snap_to_grid",
    "collides",
    "find_collisions",
    "PlacementResolver",
    "PlacementResult",
    "PlacementStrategy",
    "auto_arrange_mobile",
    "canvas_height",
]
