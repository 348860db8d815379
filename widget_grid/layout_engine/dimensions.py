"""
尺寸解析器

(size 标签, 视图) -> (width, height)，纯函数，对任何输入都有结果
"""

from typing import Dict

from widget_grid.models.geometry import Dimensions
from widget_grid.models.view import ViewMode
from widget_grid.models.widget import SizeTag, WidgetSize

# DESKTOP 尺寸表 (px)
DESKTOP_DIMENSIONS: Dict[WidgetSize, Dimensions] = {
    WidgetSize.THIN: Dimensions(320, 48),
    WidgetSize.SMALL_SQUARE: Dimensions(192, 192),
    WidgetSize.MEDIUM_SQUARE: Dimensions(224, 224),
    WidgetSize.LARGE_SQUARE: Dimensions(320, 320),
    WidgetSize.WIDE: Dimensions(320, 144),
    WidgetSize.TALL: Dimensions(208, 320),
}

# 未知标签的兜底尺寸
DEFAULT_DESKTOP_DIMENSIONS = Dimensions(320, 56)

# MOBILE 下所有 widget 统一为正方形
MOBILE_TILE_SIZE = 128


def resolve_dimensions(
    size: SizeTag,
    view_mode: ViewMode,
    mobile_tile_size: int = MOBILE_TILE_SIZE,
) -> Dimensions:
    """
    解析 widget 尺寸
    
    Args:
        size: 尺寸标签（枚举或原始字符串）
        view_mode: 视图模式
        mobile_tile_size: MOBILE 正方形边长
        
    Returns:
        Dimensions
    """
    if view_mode == ViewMode.MOBILE:
        return Dimensions(mobile_tile_size, mobile_tile_size)
    
    tag = WidgetSize.coerce(size)
    if isinstance(tag, WidgetSize):
        return DESKTOP_DIMENSIONS.get(tag, DEFAULT_DESKTOP_DIMENSIONS)
    return DEFAULT_DESKTOP_DIMENSIONS


def max_desktop_width() -> int:
    """DESKTOP 下最宽 widget 的宽度"""
    widths = [d.width for d in DESKTOP_DIMENSIONS.values()]
    widths.append(DEFAULT_DESKTOP_DIMENSIONS.width)
    return max(widths)
