"""
配置数据结构定义
"""

from dataclasses import dataclass, field
from typing import Optional

from widget_grid.models.view import ViewMode


@dataclass
class GridConfig:
    """网格与碰撞配置"""
    unit: int = 20                    # 吸附网格单位 (px)
    margin: int = 8                   # widget 间最小间距 (px)
    max_search_distance: int = 400    # 扩环搜索的最大半径 (px)


@dataclass
class CanvasConfig:
    """画布配置"""
    desktop_width: int = 660          # 740 容器减去内边距
    mobile_width: int = 292           # 两列网格: origin + stride + tile_size
    min_height: int = 600             # 渲染最小高度
    bottom_padding: int = 40          # 最低 widget 下方留白


@dataclass
class PlacementConfig:
    """新建 widget 的初始放置配置"""
    anchor_x: int = 20
    anchor_y: int = 20
    new_widget_stride: int = 180      # 每个已有 widget 的纵向偏移
    overflow_left_margin: int = 20    # 搜索耗尽时堆叠到左边距


@dataclass
class MobileConfig:
    """移动端两列网格配置"""
    tile_size: int = 128              # 移动端统一正方形边长
    origin: int = 20                  # 第一格左上角
    stride: int = 144                 # 行列步长
    columns: int = 2


@dataclass
class AuditConfig:
    """审计日志配置"""
    enabled: bool = True
    output_dir: str = "output/audit"
    filename: str = "audit_events.jsonl"


@dataclass
class LoggingConfig:
    """日志配置"""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class LayoutConfig:
    """
    完整布局配置
    
    所有常量都参数化，默认值与线上渲染一致
    """
    grid: GridConfig = field(default_factory=GridConfig)
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    placement: PlacementConfig = field(default_factory=PlacementConfig)
    mobile: MobileConfig = field(default_factory=MobileConfig)
    audit: AuditConfig = field(default_factory=AuditConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    
    def canvas_width(self, view_mode: ViewMode) -> int:
        """根据视图返回画布宽度"""
        if view_mode == ViewMode.MOBILE:
            return self.canvas.mobile_width
        return self.canvas.desktop_width
