"""
审计日志写入

实现 append-only 的 JSONL 格式审计日志
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from widget_grid.audit.events import AuditEvent, AuditEventType


class IAuditJournal(ABC):
    """审计日志接口"""
    
    @abstractmethod
    def write(self, event: AuditEvent) -> None:
        """写入审计事件"""
        pass
    
    @abstractmethod
    def close(self) -> None:
        """关闭日志"""
        pass
    
    @abstractmethod
    def query(
        self,
        event_types: Optional[List[AuditEventType]] = None,
        session_id: Optional[str] = None,
        widget_id: Optional[str] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """查询审计事件"""
        pass


def _matches(
    data: Dict[str, Any],
    event_types: Optional[List[AuditEventType]],
    session_id: Optional[str],
    widget_id: Optional[str],
    start_time: Optional[datetime],
    end_time: Optional[datetime],
) -> bool:
    """事件字典是否满足过滤条件"""
    if event_types and data.get("type") not in [et.name for et in event_types]:
        return False
    if session_id and data.get("session") != session_id:
        return False
    if widget_id and data.get("widget_id") != widget_id:
        return False
    if start_time or end_time:
        ts = datetime.fromisoformat(data.get("ts", ""))
        if start_time and ts < start_time:
            return False
        if end_time and ts > end_time:
            return False
    return True


class AuditJournal(IAuditJournal):
    """
    审计日志实现
    
    特点：
    - append-only
    - JSON Lines 格式
    - 每条事件立即 flush
    - 可查询
    """
    
    def __init__(self, output_dir: str, filename: str = "audit_events.jsonl"):
        """
        初始化审计日志
        
        Args:
            output_dir: 输出目录
            filename: 日志文件名
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        
        self.filepath = self.output_dir / filename
        self._file = None
        self._event_count = 0
    
    def write(self, event: AuditEvent) -> None:
        """
        写入审计事件
        
        立即 flush 确保数据持久化
        """
        if self._file is None:
            self._file = open(self.filepath, "a", encoding="utf-8")
        
        line = json.dumps(event.to_dict(), ensure_ascii=False)
        self._file.write(line + "\n")
        self._file.flush()
        
        self._event_count += 1
    
    def close(self) -> None:
        """关闭日志"""
        if self._file is not None:
            self._file.close()
            self._file = None
    
    def query(
        self,
        event_types: Optional[List[AuditEventType]] = None,
        session_id: Optional[str] = None,
        widget_id: Optional[str] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """
        查询审计事件
        
        从文件中读取并过滤，返回事件字典；损坏的行跳过
        """
        if not self.filepath.exists():
            return []
        
        results = []
        
        with open(self.filepath, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                
                try:
                    data = json.loads(line)
                    if _matches(data, event_types, session_id, widget_id, start_time, end_time):
                        results.append(data)
                except (json.JSONDecodeError, ValueError):
                    logger.warning("Skipping corrupt audit line in {}", self.filepath)
                    continue
        
        return results
    
    @property
    def event_count(self) -> int:
        """已写入事件数"""
        return self._event_count
    
    def __enter__(self) -> "AuditJournal":
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class MemoryAuditJournal(IAuditJournal):
    """
    内存审计日志（用于测试或禁用落盘）
    """
    
    def __init__(self):
        self.events: List[AuditEvent] = []
    
    def write(self, event: AuditEvent) -> None:
        self.events.append(event)
    
    def close(self) -> None:
        pass
    
    def query(
        self,
        event_types: Optional[List[AuditEventType]] = None,
        session_id: Optional[str] = None,
        widget_id: Optional[str] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        return [
            d for d in (e.to_dict() for e in self.events)
            if _matches(d, event_types, session_id, widget_id, start_time, end_time)
        ]
