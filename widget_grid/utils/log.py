"""
日志配置

统一使用 loguru，入口处调用一次 configure_logging
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    配置日志输出
    
    Args:
        level: stderr 日志级别
        log_file: 文件日志路径（可选，DEBUG 级别，10 MB 轮转）
    """
    logger.remove()  # 移除默认 handler
    logger.add(sys.stderr, level=level)
    
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(path, rotation="10 MB", level="DEBUG")
