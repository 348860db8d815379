"""
审计事件类型定义

记录编辑会话中所有改变布局或需要告知用户的事件：
- VIEW_MODE_CHANGE: 视图切换
- WIDGET_*: 新增 / 移动 / 调整尺寸 / 删除
- PLACEMENT_OVERFLOW: 扩环搜索耗尽，堆叠到底部
- POSITION_RECOVERED: 存储中的位置无法解析，使用默认位置
- AUTO_ARRANGED: 移动端自动排列
- PERSIST_FAILED: 存储写入失败（内存状态不回滚）
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Dict, Optional

from widget_grid.models.geometry import Point


class AuditEventType(Enum):
    """审计事件类型"""
    # 会话
    SESSION_START = auto()
    SESSION_END = auto()

    # 视图
    VIEW_MODE_CHANGE = auto()

    # Widget 生命周期
    WIDGET_ADDED = auto()
    WIDGET_MOVED = auto()
    WIDGET_RESIZED = auto()
    WIDGET_REMOVED = auto()

    # 放置
    PLACEMENT_OVERFLOW = auto()

    # 数据清洗
    POSITION_RECOVERED = auto()
    AUTO_ARRANGED = auto()

    # 存储
    PERSIST_FAILED = auto()

    # 配置
    CONFIG_INVALID = auto()


@dataclass
class AuditEvent:
    """
    审计事件

    所有事件必须包含 session_id / timestamp / event_type / reason
    """
    session_id: str
    timestamp: datetime
    event_type: AuditEventType
    reason: str

    # 视图相关
    from_view: Optional[str] = None
    to_view: Optional[str] = None

    # Widget 相关
    widget_id: Optional[str] = None
    view: Optional[str] = None
    old_position: Optional[Point] = None
    new_position: Optional[Point] = None
    old_size: Optional[str] = None
    new_size: Optional[str] = None

    # 存储相关
    operation: Optional[str] = None
    error: Optional[str] = None

    config_hash: Optional[str] = None

    # 额外信息
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典（用于 JSON 序列化）"""
        d = {
            "ts": self.timestamp.isoformat(),
            "session": self.session_id,
            "type": self.event_type.name,
            "reason": self.reason,
        }

        # 添加非空字段
        if self.from_view:
            d["from"] = self.from_view
        if self.to_view:
            d["to"] = self.to_view
        if self.widget_id:
            d["widget_id"] = self.widget_id
        if self.view:
            d["view"] = self.view
        if self.old_position is not None:
            d["old_position"] = self.old_position.to_dict()
        if self.new_position is not None:
            d["new_position"] = self.new_position.to_dict()
        if self.old_size:
            d["old_size"] = self.old_size
        if self.new_size:
            d["new_size"] = self.new_size
        if self.operation:
            d["operation"] = self.operation
        if self.error:
            d["error"] = self.error
        if self.config_hash:
            d["config_hash"] = self.config_hash
        if self.details:
            d["details"] = self.details

        return d

    @classmethod
    def view_change(
        cls,
        session_id: str,
        timestamp: datetime,
        from_view: str,
        to_view: str,
        reason: str,
    ) -> "AuditEvent":
        """创建视图切换事件"""
        return cls(
            session_id=session_id,
            timestamp=timestamp,
            event_type=AuditEventType.VIEW_MODE_CHANGE,
            reason=reason,
            from_view=from_view,
            to_view=to_view,
        )

    @classmethod
    def widget_moved(
        cls,
        session_id: str,
        timestamp: datetime,
        widget_id: str,
        view: str,
        old_position: Point,
        new_position: Point,
        strategy: str,
        reason: str = "drop",
    ) -> "AuditEvent":
        """创建移动事件"""
        return cls(
            session_id=session_id,
            timestamp=timestamp,
            event_type=AuditEventType.WIDGET_MOVED,
            reason=reason,
            widget_id=widget_id,
            view=view,
            old_position=old_position,
            new_position=new_position,
            details={"strategy": strategy},
        )

    @classmethod
    def widget_resized(
        cls,
        session_id: str,
        timestamp: datetime,
        widget_id: str,
        old_size: str,
        new_size: str,
        relocated: Dict[str, Dict[str, Any]],
    ) -> "AuditEvent":
        """创建尺寸调整事件，relocated 记录因新尺寸重叠而被挪动的视图"""
        return cls(
            session_id=session_id,
            timestamp=timestamp,
            event_type=AuditEventType.WIDGET_RESIZED,
            reason="resize",
            widget_id=widget_id,
            old_size=old_size,
            new_size=new_size,
            details={"relocated": relocated} if relocated else {},
        )

    @classmethod
    def persist_failed(
        cls,
        session_id: str,
        timestamp: datetime,
        widget_id: str,
        operation: str,
        error: str,
    ) -> "AuditEvent":
        """创建存储失败事件"""
        return cls(
            session_id=session_id,
            timestamp=timestamp,
            event_type=AuditEventType.PERSIST_FAILED,
            reason="persistence error, in-memory state kept",
            widget_id=widget_id,
            operation=operation,
            error=error,
        )

    @classmethod
    def position_recovered(
        cls,
        session_id: str,
        timestamp: datetime,
        widget_id: str,
        view: str,
        new_position: Point,
    ) -> "AuditEvent":
        """创建位置恢复事件"""
        return cls(
            session_id=session_id,
            timestamp=timestamp,
            event_type=AuditEventType.POSITION_RECOVERED,
            reason="missing or malformed stored position",
            widget_id=widget_id,
            view=view,
            new_position=new_position,
        )
