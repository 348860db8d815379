"""
内存存储 (InMemoryWidgetStore)

IWidgetStore 的内存实现，用于测试和 demo:
- 记录按页面分组
- 写操作日志（便于断言发出了哪些写入）
- 失败注入：下 N 次写入失败，或一直失败
"""

import copy
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from widget_grid.exceptions import PersistenceError
from widget_grid.interfaces import IWidgetStore
from widget_grid.models.geometry import Point
from widget_grid.models.view import LEGACY_POSITION_FIELD, ViewMode
from widget_grid.models.widget import SizeTag, WidgetSize
from widget_grid.persistence.records import position_to_record


@dataclass
class InMemoryWidgetStore(IWidgetStore):
    """
    内存存储
    
    fetch 返回记录的深拷贝，调用方修改不影响存储
    """
    # page_id -> [record]
    pages: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)
    
    # 位置以 JSON 字符串保存（模拟旧版列类型）
    encode_positions_as_json: bool = False
    
    # 失败注入
    fail_always: bool = False
    _fail_remaining: int = 0
    
    # 写操作日志: (operation, widget_id, payload)
    writes: List[Tuple[str, str, Any]] = field(default_factory=list)
    
    def fail_next(self, count: int = 1) -> None:
        """让接下来 count 次写操作失败"""
        self._fail_remaining = count
    
    def _check_failure(self, operation: str, widget_id: str) -> None:
        if self.fail_always:
            raise PersistenceError(operation, widget_id, "store unavailable")
        if self._fail_remaining > 0:
            self._fail_remaining -= 1
            raise PersistenceError(operation, widget_id, "injected failure")
    
    def _find(self, widget_id: str) -> Optional[Dict[str, Any]]:
        for records in self.pages.values():
            for record in records:
                if str(record.get("id")) == widget_id:
                    return record
        return None
    
    def _require(self, operation: str, widget_id: str) -> Dict[str, Any]:
        record = self._find(widget_id)
        if record is None:
            raise PersistenceError(operation, widget_id, "no such widget")
        return record
    
    def _encode(self, point: Point) -> Any:
        value = position_to_record(point)
        return json.dumps(value) if self.encode_positions_as_json else value
    
    def fetch_widgets(self, page_id: str) -> List[Dict[str, Any]]:
        if self.fail_always:
            raise PersistenceError("fetch", page_id, "store unavailable")
        return copy.deepcopy(self.pages.get(page_id, []))
    
    def insert_widget(self, page_id: str, record: Dict[str, Any]) -> None:
        widget_id = str(record.get("id"))
        self._check_failure("insert", widget_id)
        self.pages.setdefault(page_id, []).append(copy.deepcopy(record))
        self.writes.append(("insert", widget_id, page_id))
    
    def update_position(self, widget_id: str, view_mode: ViewMode, point: Point) -> None:
        self._check_failure("update_position", widget_id)
        record = self._require("update_position", widget_id)
        record[view_mode.record_field] = self._encode(point)
        record[LEGACY_POSITION_FIELD] = self._encode(point)
        self.writes.append(("update_position", widget_id, (view_mode, point)))
        logger.debug("Stored {} {} = {}", widget_id, view_mode.record_field, point)
    
    def update_size(self, widget_id: str, size: SizeTag) -> None:
        self._check_failure("update_size", widget_id)
        record = self._require("update_size", widget_id)
        tag = size.value if isinstance(size, WidgetSize) else str(size)
        record["size"] = tag
        self.writes.append(("update_size", widget_id, tag))
    
    def delete_widget(self, widget_id: str) -> None:
        self._check_failure("delete", widget_id)
        for records in self.pages.values():
            records[:] = [r for r in records if str(r.get("id")) != widget_id]
        self.writes.append(("delete", widget_id, None))
