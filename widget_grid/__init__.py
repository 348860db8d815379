"""
Widget 网格布局引擎

Core modules:
- models: 几何、视图模式、widget 模型
- layout_engine: 尺寸解析、吸附、碰撞检测、放置求解、移动端自动排列
- state_machine: 视图模式状态机
- persistence: 存储记录解析与内存存储
- runtime: 编辑会话
- audit: 审计系统
- config: 配置加载与校验
"""

__version__ = "1.0.0-dev"
