"""
核心接口定义

布局算法只依赖这些接口，存储实现可以替换（内存 / 远端数据库）
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

from widget_grid.models.geometry import Point
from widget_grid.models.view import ViewMode
from widget_grid.models.widget import SizeTag, Widget
from widget_grid.utils.types import PageId, WidgetId


class IWidgetStore(ABC):
    """
    存储协作方接口

    实现：
    - InMemoryWidgetStore: 内存存储（测试 / demo）

    所有写操作失败时抛出 PersistenceError
    """

    @abstractmethod
    def fetch_widgets(self, page_id: PageId) -> List[Dict[str, Any]]:
        """
        读取页面的 widget 记录

        Returns:
            原始记录列表，位置字段可能是 JSON 字符串、字典或缺失
        """
        pass

    @abstractmethod
    def insert_widget(self, page_id: PageId, record: Dict[str, Any]) -> None:
        """插入 widget 记录"""
        pass

    @abstractmethod
    def update_position(self, widget_id: WidgetId, view_mode: ViewMode, point: Point) -> None:
        """
        更新指定视图的位置字段

        同时写入旧版通用位置字段 (widget_position)，与内存中的 Widget.position 保持一致；
        另一视图的位置字段不动
        """
        pass

    @abstractmethod
    def update_size(self, widget_id: WidgetId, size: SizeTag) -> None:
        """更新尺寸标签"""
        pass

    @abstractmethod
    def delete_widget(self, widget_id: WidgetId) -> None:
        """删除 widget"""
        pass


class IPlacementResolver(ABC):
    """
    放置求解器接口

    实现：
    - PlacementResolver: 扩环搜索 + 堆叠兜底
    """

    @abstractmethod
    def resolve(
        self,
        widget: Widget,
        target: Point,
        widgets: Iterable[Widget],
        view_mode: ViewMode,
    ):
        """
        求解合法位置

        Returns:
            PlacementResult
        """
        pass

    @abstractmethod
    def resolve_initial(
        self,
        widget: Widget,
        widgets: List[Widget],
        view_mode: ViewMode,
    ):
        """新建 widget 的初始放置"""
        pass
