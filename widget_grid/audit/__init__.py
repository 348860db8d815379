"""
审计系统模块

包含:
- events: 审计事件类型
- journal: 事件日志写入
"""

from widget_grid.audit.events import AuditEventType, AuditEvent
from widget_grid.audit.journal import AuditJournal, IAuditJournal, MemoryAuditJournal

__all__ = [
    "AuditEventType",
    "AuditEvent",
    "AuditJournal",
    "IAuditJournal",
    "MemoryAuditJournal",
]
