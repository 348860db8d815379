"""
网格吸附

round 语义与前端 Math.round 一致（.5 向上取整），不用 Python 的银行家舍入
"""

import math

from widget_grid.models.geometry import Number, Point

DEFAULT_GRID_UNIT = 20


def snap_value(value: Number, unit: Number = DEFAULT_GRID_UNIT) -> Number:
    """吸附到最近的网格倍数"""
    return math.floor(value / unit + 0.5) * unit


def floor_to_grid(value: Number, unit: Number = DEFAULT_GRID_UNIT) -> Number:
    """向下取到网格倍数"""
    return math.floor(value / unit) * unit


def ceil_to_grid(value: Number, unit: Number = DEFAULT_GRID_UNIT) -> Number:
    """向上取到网格倍数"""
    return math.ceil(value / unit) * unit


def snap_to_grid(point: Point, unit: Number = DEFAULT_GRID_UNIT) -> Point:
    """
    吸附点到网格
    
    幂等: snap_to_grid(snap_to_grid(p)) == snap_to_grid(p)
    """
    return Point(snap_value(point.x, unit), snap_value(point.y, unit))
