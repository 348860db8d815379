"""
放置求解器

把目标位置转换为最近的合法位置（不重叠、不越界、已吸附）:
1. 吸附 + 夹取到边界，无碰撞直接返回（快速路径）
2. 扩环搜索: 半径按网格单位递增，环上按行优先顺序测试
3. 超出最大搜索半径: 堆叠到所有 widget 下方的左边距处

求解器是纯函数，同一输入永远得到同一输出；拖拽预览、落下、
新建 widget 的初始放置都走这里
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

import numpy as np
from loguru import logger

from widget_grid.config.schema import LayoutConfig
from widget_grid.interfaces import IPlacementResolver
from widget_grid.layout_engine.collision import (
    DEFAULT_MARGIN,
    candidate_hits,
    occupied_boxes,
)
from widget_grid.layout_engine.dimensions import MOBILE_TILE_SIZE, resolve_dimensions
from widget_grid.layout_engine.snapping import (
    DEFAULT_GRID_UNIT,
    ceil_to_grid,
    floor_to_grid,
    snap_to_grid,
)
from widget_grid.models.geometry import Dimensions, Number, Point
from widget_grid.models.view import ViewMode
from widget_grid.models.widget import Widget


class PlacementStrategy(Enum):
    """结果来源"""
    DIRECT = "direct"        # 目标位置本身可用
    SEARCH = "search"        # 扩环搜索命中
    OVERFLOW = "overflow"    # 搜索耗尽，堆叠到底部


@dataclass(frozen=True)
class PlacementResult:
    """放置结果"""
    position: Point
    strategy: PlacementStrategy
    search_distance: Number = 0

    @property
    def is_overflow(self) -> bool:
        return self.strategy == PlacementStrategy.OVERFLOW


def ring_offsets(ring: int, unit: Number) -> np.ndarray:
    """
    第 ring 圈的偏移量（行优先: dy 升序，再 dx 升序）

    只返回周长上的点 max(|dx|, |dy|) == ring * unit，
    内部的点已在更小的圈测试过

    Returns:
        shape (K, 2) 数组，列为 dx, dy
    """
    steps = np.arange(-ring, ring + 1)
    dy, dx = np.meshgrid(steps, steps, indexing="ij")
    on_ring = np.maximum(np.abs(dx), np.abs(dy)) == ring
    return np.stack([dx[on_ring], dy[on_ring]], axis=1) * unit


def _as_number(value) -> Number:
    """numpy 标量转回 int / float"""
    value = float(value)
    return int(value) if value.is_integer() else value


@dataclass
class PlacementResolver(IPlacementResolver):
    """
    放置求解器

    只持有常量配置，不持有 widget 列表
    """
    unit: Number = DEFAULT_GRID_UNIT
    margin: Number = DEFAULT_MARGIN
    max_search_distance: Number = 400

    desktop_width: Number = 660
    mobile_width: Number = 292
    mobile_tile_size: int = MOBILE_TILE_SIZE

    anchor_x: Number = 20
    anchor_y: Number = 20
    new_widget_stride: Number = 180
    overflow_left_margin: Number = 20

    @classmethod
    def from_config(cls, config: LayoutConfig) -> "PlacementResolver":
        """由配置创建"""
        return cls(
            unit=config.grid.unit,
            margin=config.grid.margin,
            max_search_distance=config.grid.max_search_distance,
            desktop_width=config.canvas.desktop_width,
            mobile_width=config.canvas.mobile_width,
            mobile_tile_size=config.mobile.tile_size,
            anchor_x=config.placement.anchor_x,
            anchor_y=config.placement.anchor_y,
            new_widget_stride=config.placement.new_widget_stride,
            overflow_left_margin=config.placement.overflow_left_margin,
        )

    def canvas_width(self, view_mode: ViewMode) -> Number:
        if view_mode == ViewMode.MOBILE:
            return self.mobile_width
        return self.desktop_width

    def dimensions(self, widget: Widget, view_mode: ViewMode) -> Dimensions:
        return resolve_dimensions(widget.size, view_mode, self.mobile_tile_size)

    def max_x(self, dims: Dimensions, view_mode: ViewMode) -> Number:
        """
        x 的上界

        向下取到网格倍数，保证夹取后仍在网格上；widget 比画布宽时为 0
        """
        room = self.canvas_width(view_mode) - dims.width
        if room <= 0:
            return 0
        return floor_to_grid(room, self.unit)

    def clamp(self, point: Point, dims: Dimensions, view_mode: ViewMode) -> Point:
        """夹取到画布边界: 0 <= x <= max_x, y >= 0"""
        x = min(max(point.x, 0), self.max_x(dims, view_mode))
        y = max(point.y, 0)
        return Point(x, y)

    def in_bounds(self, point: Point, dims: Dimensions, view_mode: ViewMode) -> bool:
        """
        位置是否在画布内: 0 <= x <= canvas_width - width, y >= 0

        与 clamp 不同，右边界不取整到网格，移动端第二列 (x = 164) 也算合法
        """
        right = max(self.canvas_width(view_mode) - dims.width, 0)
        return 0 <= point.x <= right and point.y >= 0

    def resolve(
        self,
        widget: Widget,
        target: Point,
        widgets: Iterable[Widget],
        view_mode: ViewMode,
    ) -> PlacementResult:
        """
        求解 widget 放到 target 附近的合法位置

        Args:
            widget: 被放置的 widget（按 id 从 widgets 中排除）
            target: 原始目标位置（指针坐标）
            widgets: 画布上的所有 widget
            view_mode: 视图模式

        Returns:
            PlacementResult
        """
        dims = self.dimensions(widget, view_mode)
        boxes = occupied_boxes(widgets, view_mode, widget.id, self.mobile_tile_size)

        # 1. 快速路径
        snapped = snap_to_grid(target, self.unit)
        start = self.clamp(snapped, dims, view_mode)
        origin = np.array([[start.x, start.y]], dtype=float)
        if not candidate_hits(origin, dims, boxes, self.margin)[0]:
            return PlacementResult(start, PlacementStrategy.DIRECT)

        # 2. 扩环搜索: 环以吸附后的目标为中心，每个候选再单独夹取
        center = np.array([[snapped.x, snapped.y]], dtype=float)
        max_x = self.max_x(dims, view_mode)
        max_ring = int(self.max_search_distance // self.unit)
        for ring in range(1, max_ring + 1):
            candidates = ring_offsets(ring, self.unit) + center
            candidates[:, 0] = np.clip(candidates[:, 0], 0, max_x)
            candidates[:, 1] = np.maximum(candidates[:, 1], 0)

            hits = candidate_hits(candidates, dims, boxes, self.margin)
            free = np.flatnonzero(~hits)
            if free.size > 0:
                x, y = candidates[free[0]]
                return PlacementResult(
                    Point(_as_number(x), _as_number(y)),
                    PlacementStrategy.SEARCH,
                    search_distance=ring * self.unit,
                )

        # 3. 堆叠到底部
        position = self._overflow_position(dims, boxes, view_mode)
        logger.debug(
            "Placement search exhausted for {} at {}, stacking at {}",
            widget.id, target, position,
        )
        return PlacementResult(
            position,
            PlacementStrategy.OVERFLOW,
            search_distance=max_ring * self.unit,
        )

    def _overflow_position(
        self,
        dims: Dimensions,
        boxes: np.ndarray,
        view_mode: ViewMode,
    ) -> Point:
        """所有已占用盒子下方，左边距处"""
        x = min(self.overflow_left_margin, self.max_x(dims, view_mode))
        if boxes.shape[0] == 0:
            return Point(x, 0)
        lowest = _as_number(boxes[:, 3].max())
        return Point(x, ceil_to_grid(lowest + self.margin, self.unit))

    def initial_target(self, existing_count: int) -> Point:
        """新 widget 的默认锚点，按已有数量纵向错开"""
        anchor = Point(self.anchor_x, self.anchor_y)
        return anchor.offset(0, existing_count * self.new_widget_stride)

    def resolve_initial(
        self,
        widget: Widget,
        widgets: Sequence[Widget],
        view_mode: ViewMode,
    ) -> PlacementResult:
        """新建 widget 的初始放置"""
        others = [w for w in widgets if w.id != widget.id]
        target = self.initial_target(len(others))
        return self.resolve(widget, target, others, view_mode)

    def preview(
        self,
        widget: Widget,
        target: Point,
        widgets: Iterable[Widget],
        view_mode: ViewMode,
    ) -> Point:
        """拖拽预览: 只返回落点，不修改任何状态"""
        return self.resolve(widget, target, widgets, view_mode).position
