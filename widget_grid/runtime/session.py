"""
编辑会话

持有一个打开的编辑视图的可变状态（widget 列表、拖拽状态、视图模式），
生命周期从编辑器挂载到卸载。UI 事件处理器调用这里的方法，布局计算
全部委托给纯函数的布局引擎。

存储策略: 内存状态先同步更新（乐观），然后写存储；写入失败只通知
用户，不回滚内存状态
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from widget_grid.audit.events import AuditEvent, AuditEventType
from widget_grid.audit.journal import AuditJournal, IAuditJournal, MemoryAuditJournal
from widget_grid.config.loader import compute_config_hash
from widget_grid.config.schema import LayoutConfig
from widget_grid.exceptions import NoActiveDragError, PersistenceError, WidgetNotFoundError
from widget_grid.interfaces import IWidgetStore
from widget_grid.layout_engine.canvas import canvas_height
from widget_grid.layout_engine.collision import find_collisions
from widget_grid.layout_engine.placement import PlacementResolver
from widget_grid.models.geometry import Number, Point
from widget_grid.models.view import ViewMode
from widget_grid.models.widget import SizeTag, Widget, WidgetSize, WidgetType
from widget_grid.persistence.records import widget_to_record, widgets_from_records
from widget_grid.state_machine.states import ViewModeStateMachine
from widget_grid.state_machine.transitions import TransitionResult
from widget_grid.utils.timeutils import generate_session_id


@dataclass
class DragState:
    """进行中的拖拽"""
    widget_id: str
    view_mode: ViewMode
    preview: Optional[Point] = None


@dataclass
class Notification:
    """需要展示给用户的非致命提示"""
    level: str                 # "error" | "info"
    message: str
    widget_id: Optional[str] = None


class LayoutSession:
    """
    编辑会话

    单线程、单一写入者（当前用户的输入流），不需要锁
    """

    def __init__(
        self,
        config: LayoutConfig,
        store: IWidgetStore,
        page_id: str,
        audit_journal: Optional[IAuditJournal] = None,
        session_id: Optional[str] = None,
    ):
        """
        初始化会话

        Args:
            config: 布局配置
            store: 存储协作方
            page_id: 页面 ID
            audit_journal: 审计日志（可选，默认按配置创建）
            session_id: 会话 ID（可选，自动生成）
        """
        self.config = config
        self.store = store
        self.page_id = page_id
        self.session_id = session_id or generate_session_id()
        self.config_hash = compute_config_hash(config)

        if audit_journal is None:
            if config.audit.enabled:
                audit_journal = AuditJournal(config.audit.output_dir, config.audit.filename)
            else:
                audit_journal = MemoryAuditJournal()
        self.audit_journal = audit_journal

        self.resolver = PlacementResolver.from_config(config)
        self.view_state = ViewModeStateMachine(
            session_id=self.session_id,
            audit_journal=self.audit_journal,
        )

        self._widgets: List[Widget] = []
        self._drag: Optional[DragState] = None
        self.notifications: List[Notification] = []

    @property
    def view_mode(self) -> ViewMode:
        return self.view_state.current_mode

    @property
    def widgets(self) -> List[Widget]:
        """当前 widget 列表（拷贝）"""
        return list(self._widgets)

    @property
    def drag(self) -> Optional[DragState]:
        return self._drag

    def get_widget(self, widget_id: str) -> Widget:
        return self._widgets[self._index_of(widget_id)]

    def _index_of(self, widget_id: str) -> int:
        for i, widget in enumerate(self._widgets):
            if widget.id == widget_id:
                return i
        raise WidgetNotFoundError(widget_id)

    def _replace(self, widget: Widget) -> None:
        self._widgets[self._index_of(widget.id)] = widget

    def canvas_height(self, view_mode: Optional[ViewMode] = None) -> Number:
        """当前视图（或指定视图）的渲染高度"""
        return canvas_height(
            self._widgets,
            view_mode or self.view_mode,
            min_height=self.config.canvas.min_height,
            bottom_padding=self.config.canvas.bottom_padding,
            mobile_tile_size=self.config.mobile.tile_size,
        )

    def start(self) -> None:
        """写入会话开始事件并加载 widget"""
        self._audit(AuditEvent(
            session_id=self.session_id,
            timestamp=datetime.now(),
            event_type=AuditEventType.SESSION_START,
            reason="startup",
            config_hash=self.config_hash,
            details={"page_id": self.page_id},
        ))
        self.load()

    def load(self) -> List[Widget]:
        """
        从存储加载 widget

        位置解析失败的 widget 使用默认位置，重复的 mobile 位置触发自动排列。
        加载本身只读，不回写存储
        """
        try:
            records = self.store.fetch_widgets(self.page_id)
        except PersistenceError as e:
            logger.error("Error loading widgets for page {}: {}", self.page_id, e)
            self._notify("error", "Failed to load widgets")
            self._widgets = []
            return self.widgets

        result = widgets_from_records(
            records,
            self.resolver,
            mobile_origin=self.config.mobile.origin,
            mobile_stride=self.config.mobile.stride,
            mobile_columns=self.config.mobile.columns,
        )
        self._widgets = result.widgets
        self._drag = None

        now = datetime.now()
        for widget_id, view_mode, point in result.recovered:
            self._audit(AuditEvent.position_recovered(
                session_id=self.session_id,
                timestamp=now,
                widget_id=widget_id,
                view=view_mode.value,
                new_position=point,
            ))
        if result.auto_arranged:
            self._audit(AuditEvent(
                session_id=self.session_id,
                timestamp=now,
                event_type=AuditEventType.AUTO_ARRANGED,
                reason="duplicate mobile positions",
                view=ViewMode.MOBILE.value,
                details={"count": len(self._widgets)},
            ))

        logger.info("Loaded {} widgets for page {}", len(self._widgets), self.page_id)
        return self.widgets

    def close(self) -> None:
        """写入会话结束事件并关闭审计日志"""
        self._audit(AuditEvent(
            session_id=self.session_id,
            timestamp=datetime.now(),
            event_type=AuditEventType.SESSION_END,
            reason="shutdown",
            details={"widgets": len(self._widgets)},
        ))
        self.audit_journal.close()

    def toggle_view(self) -> TransitionResult:
        """切换视图；进行中的拖拽预览属于旧视图，直接丢弃"""
        self._drag = None
        return self.view_state.toggle()

    def set_view(self, view_mode: ViewMode) -> TransitionResult:
        if view_mode != self.view_mode:
            self._drag = None
        return self.view_state.transition_to(view_mode)

    def add_widget(
        self,
        widget_id: str,
        widget_type: WidgetType = WidgetType.LINK,
        size: SizeTag = WidgetSize.THIN,
        data: Optional[Dict[str, Any]] = None,
    ) -> Widget:
        """
        新建 widget

        两个视图各自从默认锚点（按已有数量错开）求解初始位置
        """
        if any(w.id == widget_id for w in self._widgets):
            raise ValueError(f"Duplicate widget id: {widget_id}")

        widget = Widget(
            id=widget_id,
            type=widget_type,
            size=WidgetSize.coerce(size),
            data=dict(data or {}),
        )
        for view_mode in (ViewMode.MOBILE, ViewMode.DESKTOP):
            placement = self.resolver.resolve_initial(widget, self._widgets, view_mode)
            widget = widget.with_position(view_mode, placement.position)
            if placement.is_overflow:
                self._audit_overflow(widget.id, view_mode, placement.position)

        self._widgets.append(widget)
        self._audit(AuditEvent(
            session_id=self.session_id,
            timestamp=datetime.now(),
            event_type=AuditEventType.WIDGET_ADDED,
            reason="add",
            widget_id=widget.id,
            new_size=widget.size_tag,
            details={v.value: widget.position_in(v).to_dict() for v in ViewMode},
        ))

        self._persist("insert", widget.id, self.store.insert_widget, self.page_id, widget_to_record(widget))
        return widget

    def begin_drag(self, widget_id: str) -> DragState:
        """开始拖拽"""
        self._index_of(widget_id)
        self._drag = DragState(widget_id=widget_id, view_mode=self.view_mode)
        return self._drag

    def preview_drag(self, target: Point) -> Point:
        """
        拖拽预览

        每次指针移动都会调用，只计算落点，不修改 widget 列表也不写存储
        """
        drag = self._require_drag()
        widget = self.get_widget(drag.widget_id)
        drag.preview = self.resolver.preview(widget, target, self._widgets, drag.view_mode)
        return drag.preview

    def drop(self, target: Point) -> Point:
        """落下拖拽中的 widget"""
        drag = self._require_drag()
        self._drag = None
        return self.move_widget(drag.widget_id, target, drag.view_mode)

    def cancel_drag(self) -> None:
        """取消拖拽（例如指针离开画布），只重置预览状态"""
        self._drag = None

    def move_widget(
        self,
        widget_id: str,
        target: Point,
        view_mode: Optional[ViewMode] = None,
    ) -> Point:
        """
        把 widget 移动到 target 附近的合法位置

        只写入该视图的位置字段
        """
        view_mode = view_mode or self.view_mode
        widget = self.get_widget(widget_id)
        old_position = widget.position_in(view_mode)

        placement = self.resolver.resolve(widget, target, self._widgets, view_mode)
        self._replace(widget.with_position(view_mode, placement.position))

        self._audit(AuditEvent.widget_moved(
            session_id=self.session_id,
            timestamp=datetime.now(),
            widget_id=widget_id,
            view=view_mode.value,
            old_position=old_position,
            new_position=placement.position,
            strategy=placement.strategy.value,
        ))
        if placement.is_overflow:
            self._audit_overflow(widget_id, view_mode, placement.position)

        self._persist("update_position", widget_id, self.store.update_position, widget_id, view_mode, placement.position)
        return placement.position

    def resize_widget(self, widget_id: str, size: SizeTag) -> Widget:
        """
        调整尺寸

        新尺寸可能与邻居重叠或超出右边界，逐个视图检查，需要修正的视图
        从当前位置重新求解
        """
        widget = self.get_widget(widget_id)
        old_size = widget.size_tag
        resized = widget.with_size(size)
        others = [w for w in self._widgets if w.id != widget_id]

        relocated: Dict[str, Dict[str, Any]] = {}
        for view_mode in ViewMode:
            dims = self.resolver.dimensions(resized, view_mode)
            if dims == self.resolver.dimensions(widget, view_mode):
                # 该视图尺寸不变（例如移动端统一正方形），位置保持原样
                continue
            blocking = find_collisions(
                resized,
                others,
                view_mode,
                margin=self.config.grid.margin,
                mobile_tile_size=self.config.mobile.tile_size,
            )
            current = resized.position_in(view_mode)
            if not blocking and self.resolver.in_bounds(current, dims, view_mode):
                continue
            placement = self.resolver.resolve(resized, current, others, view_mode)
            resized = resized.with_position(view_mode, placement.position)
            relocated[view_mode.value] = {
                "from": current.to_dict(),
                "to": placement.position.to_dict(),
                "blocking": blocking,
            }
            if placement.is_overflow:
                self._audit_overflow(widget_id, view_mode, placement.position)

        self._replace(resized)
        self._audit(AuditEvent.widget_resized(
            session_id=self.session_id,
            timestamp=datetime.now(),
            widget_id=widget_id,
            old_size=old_size,
            new_size=resized.size_tag,
            relocated=relocated,
        ))

        self._persist("update_size", widget_id, self.store.update_size, widget_id, resized.size)
        for view_value in relocated:
            view_mode = ViewMode(view_value)
            self._persist(
                "update_position", widget_id, self.store.update_position,
                widget_id, view_mode, resized.position_in(view_mode),
            )
        return resized

    def remove_widget(self, widget_id: str) -> Widget:
        """删除 widget"""
        index = self._index_of(widget_id)
        widget = self._widgets.pop(index)
        if self._drag is not None and self._drag.widget_id == widget_id:
            self._drag = None

        self._audit(AuditEvent(
            session_id=self.session_id,
            timestamp=datetime.now(),
            event_type=AuditEventType.WIDGET_REMOVED,
            reason="delete",
            widget_id=widget_id,
        ))
        self._persist("delete", widget_id, self.store.delete_widget, widget_id)
        return widget

    def _require_drag(self) -> DragState:
        if self._drag is None:
            raise NoActiveDragError()
        return self._drag

    def _persist(self, operation: str, widget_id: str, call: Callable[..., None], *args) -> bool:
        """
        写存储

        失败时记录错误、写审计并通知用户；内存状态保持不变
        """
        try:
            call(*args)
        except PersistenceError as e:
            logger.error("Failed to persist {} for {}: {}", operation, widget_id, e)
            self._audit(AuditEvent.persist_failed(
                session_id=self.session_id,
                timestamp=datetime.now(),
                widget_id=widget_id,
                operation=operation,
                error=str(e),
            ))
            self._notify("error", f"Failed to save changes to widget {widget_id}", widget_id)
            return False
        return True

    def _notify(self, level: str, message: str, widget_id: Optional[str] = None) -> None:
        self.notifications.append(Notification(level=level, message=message, widget_id=widget_id))

    def _audit(self, event: AuditEvent) -> None:
        self.audit_journal.write(event)

    def _audit_overflow(self, widget_id: str, view_mode: ViewMode, position: Point) -> None:
        self._audit(AuditEvent(
            session_id=self.session_id,
            timestamp=datetime.now(),
            event_type=AuditEventType.PLACEMENT_OVERFLOW,
            reason="search radius exhausted, stacked below",
            widget_id=widget_id,
            view=view_mode.value,
            new_position=position,
        ))
