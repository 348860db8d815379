"""
视图模式状态机

两个状态 DESKTOP / MOBILE，初始 DESKTOP，可自由切换，没有终止状态。
切换不修改任何已存储的位置，只决定之后的放置操作读写哪个位置字段、
尺寸解析查哪张表
"""

from datetime import datetime
from typing import List, Optional, Tuple

from loguru import logger

from widget_grid.audit.events import AuditEvent
from widget_grid.audit.journal import IAuditJournal
from widget_grid.models.view import ViewMode, is_valid_transition
from widget_grid.state_machine.transitions import TransitionResult, TransitionTrigger


class ViewModeStateMachine:
    """
    视图模式状态机
    
    生命周期与编辑会话相同
    """
    
    def __init__(
        self,
        session_id: str = "",
        audit_journal: Optional[IAuditJournal] = None,
        initial_mode: ViewMode = ViewMode.DESKTOP,
    ):
        """
        初始化状态机
        
        Args:
            session_id: 会话 ID
            audit_journal: 审计日志（可选）
            initial_mode: 初始视图
        """
        self._session_id = session_id
        self._audit_journal = audit_journal
        self._current_mode = initial_mode
        self._transition_history: List[Tuple[datetime, ViewMode, ViewMode, TransitionTrigger]] = []
    
    @property
    def current_mode(self) -> ViewMode:
        """当前视图"""
        return self._current_mode
    
    @property
    def history(self) -> List[Tuple[datetime, ViewMode, ViewMode, TransitionTrigger]]:
        """切换历史 (timestamp, from, to, trigger)"""
        return list(self._transition_history)
    
    def can_transition_to(self, new_mode: ViewMode) -> bool:
        return is_valid_transition(self._current_mode, new_mode)
    
    def transition_to(
        self,
        new_mode: ViewMode,
        trigger: TransitionTrigger = TransitionTrigger.EXPLICIT_SET,
        timestamp: Optional[datetime] = None,
    ) -> TransitionResult:
        """
        切换到指定视图
        
        已在目标视图时不记录历史，也不写审计
        """
        if self._current_mode == new_mode:
            return TransitionResult.unchanged(new_mode)
        
        if not self.can_transition_to(new_mode):
            # 两种视图互通，只有非法枚举值会走到这里
            raise ValueError(f"Invalid view transition: {self._current_mode} -> {new_mode}")
        
        timestamp = timestamp or datetime.now()
        old_mode = self._current_mode
        self._current_mode = new_mode
        self._transition_history.append((timestamp, old_mode, new_mode, trigger))
        
        logger.debug("View mode {} -> {}", old_mode.value, new_mode.value)
        
        if self._audit_journal is not None:
            self._audit_journal.write(AuditEvent.view_change(
                session_id=self._session_id,
                timestamp=timestamp,
                from_view=old_mode.value,
                to_view=new_mode.value,
                reason=trigger.name.lower(),
            ))
        
        return TransitionResult(
            changed=True,
            from_mode=old_mode,
            to_mode=new_mode,
            trigger=trigger,
        )
    
    def toggle(self, timestamp: Optional[datetime] = None) -> TransitionResult:
        """切换到另一视图"""
        return self.transition_to(
            self._current_mode.other,
            trigger=TransitionTrigger.USER_TOGGLE,
            timestamp=timestamp,
        )
