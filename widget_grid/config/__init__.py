"""
配置模块

包含:
- schema: 配置数据结构
- loader: 配置加载
- validator: 配置校验
"""

from widget_grid.config.schema import LayoutConfig
from widget_grid.config.loader import load_config, parse_config, compute_config_hash
from widget_grid.config.validator import ConfigValidator, ValidationResult
from widget_grid.exceptions import ConfigValidationError

__all__ = [
    "LayoutConfig",
    "load_config",
    "parse_config",
    "compute_config_hash",
    "ConfigValidator",
    "ValidationResult",
    "ConfigValidationError",
]
