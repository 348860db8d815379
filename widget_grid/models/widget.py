"""
Widget 模型

一个 widget 是页面上的一个矩形 tile，在 DESKTOP / MOBILE 两个视图中
各有一个独立的位置
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Union

from widget_grid.models.geometry import Point
from widget_grid.models.view import ViewMode


class WidgetType(Enum):
    """Widget 类型（只影响渲染，不影响布局）"""
    SOCIAL = "social"
    LINK = "link"
    IMAGE = "image"
    TEXT = "text"
    VOICE = "voice"
    PRODUCT = "product"
    APP = "app"
    MEDIA = "media"
    
    @classmethod
    def parse(cls, value: Optional[str]) -> "WidgetType":
        """未知类型（含旧数据中的 qr_code）统一当作 link"""
        try:
            return cls(value)
        except ValueError:
            return cls.LINK


class WidgetSize(Enum):
    """Widget 尺寸标签"""
    THIN = "thin"
    SMALL_SQUARE = "small-square"
    MEDIUM_SQUARE = "medium-square"
    LARGE_SQUARE = "large-square"
    WIDE = "wide"
    TALL = "tall"
    
    @classmethod
    def coerce(cls, value: Union["WidgetSize", str, None]) -> Union["WidgetSize", str]:
        """
        转换尺寸标签
        
        已知标签返回枚举；未知字符串原样返回，由尺寸解析器给默认尺寸；
        缺失时默认 thin
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.THIN
        try:
            return cls(value)
        except ValueError:
            return value


SizeTag = Union[WidgetSize, str]


@dataclass(frozen=True)
class Widget:
    """
    Widget
    
    不可变：布局操作返回新的 Widget，由会话层持有可变列表
    """
    id: str
    type: WidgetType = WidgetType.LINK
    size: SizeTag = WidgetSize.THIN
    
    # 各视图的位置（DESKTOP = webPosition, MOBILE = mobilePosition）
    positions: Dict[ViewMode, Point] = field(default_factory=dict)
    
    # 旧版通用位置，保留用于兼容
    position: Point = field(default_factory=Point)
    
    # 渲染数据，布局不读取，原样返回
    data: Dict[str, Any] = field(default_factory=dict)
    
    def position_in(self, view_mode: ViewMode) -> Point:
        """读取指定视图的位置"""
        return self.positions.get(view_mode, self.position)
    
    def has_position_in(self, view_mode: ViewMode) -> bool:
        return view_mode in self.positions
    
    def with_position(
        self,
        view_mode: ViewMode,
        point: Point,
        update_legacy: bool = True,
    ) -> "Widget":
        """
        返回写入了指定视图位置的新 Widget
        
        默认同时更新旧版 position 字段（与拖拽落下一致）；另一视图的位置保持不变
        """
        positions = dict(self.positions)
        positions[view_mode] = point
        legacy = point if update_legacy else self.position
        return replace(self, positions=positions, position=legacy)
    
    def with_size(self, size: SizeTag) -> "Widget":
        return replace(self, size=WidgetSize.coerce(size))
    
    @property
    def size_tag(self) -> str:
        """尺寸标签字符串"""
        return self.size.value if isinstance(self.size, WidgetSize) else str(self.size)
    
    @property
    def web_position(self) -> Point:
        return self.position_in(ViewMode.DESKTOP)
    
    @property
    def mobile_position(self) -> Point:
        return self.position_in(ViewMode.MOBILE)
