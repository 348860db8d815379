"""
几何基础类型

所有坐标单位为像素，原点为 canvas 左上角，y 轴向下增长
"""

from dataclasses import dataclass
from typing import Dict, Union

Number = Union[int, float]


@dataclass(frozen=True)
class Point:
    """二维点（widget 左上角）"""
    x: Number = 0
    y: Number = 0
    
    def offset(self, dx: Number, dy: Number) -> "Point":
        """平移"""
        return Point(self.x + dx, self.y + dy)
    
    def to_dict(self) -> Dict[str, Number]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Dimensions:
    """宽高"""
    width: Number
    height: Number


@dataclass(frozen=True)
class BoundingBox:
    """
    轴对齐包围盒 (AABB)
    
    right/bottom 为开区间边界: right = left + width
    """
    left: Number
    top: Number
    right: Number
    bottom: Number
    
    @classmethod
    def from_point(cls, point: Point, dims: Dimensions) -> "BoundingBox":
        """由左上角和尺寸构造"""
        return cls(
            left=point.x,
            top=point.y,
            right=point.x + dims.width,
            bottom=point.y + dims.height,
        )
    
    def overlaps(self, other: "BoundingBox", margin: Number = 0) -> bool:
        """
        带间距的重叠检测
        
        只要在任一轴上完全分离（含 margin）即不重叠
        """
        separated = (
            self.right + margin <= other.left
            or other.right + margin <= self.left
            or self.bottom + margin <= other.top
            or other.bottom + margin <= self.top
        )
        return not separated
    
    def as_tuple(self) -> tuple:
        return (self.left, self.top, self.right, self.bottom)
