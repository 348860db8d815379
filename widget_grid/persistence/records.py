"""
存储记录 <-> Widget 转换（系统边界）

存储中的位置字段类型不固定：JSON 字符串、字典、缺失都有可能，
旧数据还可能是畸形的。所有解析都在这里完成，布局算法只会看到 Point
"""

import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from loguru import logger

from widget_grid.interfaces import IPlacementResolver
from widget_grid.layout_engine.arrange import (
    MOBILE_GRID_COLUMNS,
    MOBILE_GRID_ORIGIN,
    MOBILE_GRID_STRIDE,
    auto_arrange_mobile,
)
from widget_grid.models.geometry import Point
from widget_grid.models.view import LEGACY_POSITION_FIELD, ViewMode
from widget_grid.models.widget import Widget, WidgetSize, WidgetType

# 布局相关列，其余列原样放进 widget.data
LAYOUT_FIELDS = {
    "id",
    "widget_type",
    "size",
    LEGACY_POSITION_FIELD,
    ViewMode.DESKTOP.record_field,
    ViewMode.MOBILE.record_field,
}


def _is_coordinate(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def parse_position(raw: Any) -> Optional[Point]:
    """
    解析存储的位置字段
    
    Args:
        raw: JSON 字符串 / {"x": .., "y": ..} / Point / None
        
    Returns:
        Point；缺失或畸形时返回 None（畸形会记 warning）
    """
    if raw is None or raw == "":
        return None
    
    if isinstance(raw, Point):
        return raw
    
    value = raw
    if isinstance(raw, str):
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Failed to parse position {!r}: {}", raw, e)
            return None
        if value is None:
            return None
    
    if not isinstance(value, Mapping):
        logger.warning("Unexpected position shape: {!r}", raw)
        return None
    
    x, y = value.get("x"), value.get("y")
    if not (_is_coordinate(x) and _is_coordinate(y)):
        logger.warning("Position has non-numeric coordinates: {!r}", raw)
        return None
    
    return Point(x, y)


def position_to_record(point: Point) -> Dict[str, Any]:
    """序列化位置（结构化字典）"""
    return point.to_dict()


def widget_to_record(widget: Widget) -> Dict[str, Any]:
    """Widget -> 存储记录"""
    record = dict(widget.data)
    record.update({
        "id": widget.id,
        "widget_type": widget.type.value,
        "size": widget.size_tag,
        LEGACY_POSITION_FIELD: position_to_record(widget.position),
    })
    for view_mode in ViewMode:
        if widget.has_position_in(view_mode):
            record[view_mode.record_field] = position_to_record(widget.position_in(view_mode))
    return record


@dataclass
class LoadResult:
    """记录导入结果"""
    widgets: List[Widget] = field(default_factory=list)
    
    # (widget_id, view, 默认位置)：存储位置缺失或畸形而重新计算的
    recovered: List[Tuple[str, ViewMode, Point]] = field(default_factory=list)
    
    # 是否触发了移动端自动排列
    auto_arranged: bool = False


def _record_to_widget(record: Mapping[str, Any]) -> Tuple[Widget, bool]:
    """
    解析单条记录
    
    Returns:
        (只含有效位置的 widget, 旧版 position 是否可用)
    """
    parsed = {
        view_mode: parse_position(record.get(view_mode.record_field))
        for view_mode in ViewMode
    }
    legacy = parse_position(record.get(LEGACY_POSITION_FIELD))
    
    widget = Widget(
        id=str(record["id"]),
        type=WidgetType.parse(record.get("widget_type")),
        size=WidgetSize.coerce(record.get("size")),
        positions={v: p for v, p in parsed.items() if p is not None},
        position=legacy or parsed[ViewMode.DESKTOP] or Point(),
        data={k: v for k, v in record.items() if k not in LAYOUT_FIELDS},
    )
    return widget, (legacy or parsed[ViewMode.DESKTOP]) is not None


def widgets_from_records(
    records: Iterable[Mapping[str, Any]],
    resolver: IPlacementResolver,
    mobile_origin: int = MOBILE_GRID_ORIGIN,
    mobile_stride: int = MOBILE_GRID_STRIDE,
    mobile_columns: int = MOBILE_GRID_COLUMNS,
) -> LoadResult:
    """
    导入存储记录
    
    1. 逐条解析位置字段
    2. 缺失/畸形的视图位置走新建 widget 的初始放置路径，
       只与已有位置的 widget 比较
    3. 移动端自动排列（仅当存在重复位置）
    """
    result = LoadResult()
    
    widgets = []
    needs_legacy = set()
    for record in records:
        if "id" not in record:
            logger.warning("Skipping widget record without id: {!r}", record)
            continue
        widget, has_legacy = _record_to_widget(record)
        if not has_legacy:
            needs_legacy.add(widget.id)
        widgets.append(widget)
    
    for view_mode in ViewMode:
        placed = [w for w in widgets if w.has_position_in(view_mode)]
        for i, widget in enumerate(widgets):
            if widget.has_position_in(view_mode):
                continue
            placement = resolver.resolve_initial(widget, placed, view_mode)
            update_legacy = view_mode == ViewMode.DESKTOP and widget.id in needs_legacy
            widget = widget.with_position(view_mode, placement.position, update_legacy)
            widgets[i] = widget
            placed.append(widget)
            result.recovered.append((widget.id, view_mode, placement.position))
    
    arranged = auto_arrange_mobile(widgets, mobile_origin, mobile_stride, mobile_columns)
    result.auto_arranged = arranged is not widgets
    result.widgets = list(arranged)
    
    if result.recovered:
        logger.info("Recovered {} missing or malformed positions", len(result.recovered))
    
    return result

