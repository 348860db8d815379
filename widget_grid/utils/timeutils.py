"""
时间工具函数
"""

from datetime import datetime

from widget_grid.utils.types import SessionId


def generate_session_id(timestamp: datetime = None) -> SessionId:
    """
    生成会话 ID
    
    格式: s{YYYYMMDD}_{HHmmss}
    示例: s20250629_143000
    """
    if timestamp is None:
        timestamp = datetime.now()
    return SessionId(f"s{timestamp.strftime('%Y%m%d_%H%M%S')}")
