"""
配置加载器
"""

import hashlib
import inspect
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

import yaml
from loguru import logger

from widget_grid.config.schema import (
    LayoutConfig,
    GridConfig,
    CanvasConfig,
    PlacementConfig,
    MobileConfig,
    AuditConfig,
    LoggingConfig,
)
from widget_grid.utils.types import ConfigHash


def load_config(config_path: str) -> LayoutConfig:
    """
    从 YAML 文件加载配置
    
    Args:
        config_path: 配置文件路径
        
    Returns:
        LayoutConfig 实例
    """
    path = Path(config_path)
    
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    
    logger.debug("Loaded layout config from {}", path)
    return parse_config(data or {})


def parse_config(data: Dict[str, Any]) -> LayoutConfig:
    """解析配置字典，缺失的段落使用默认值"""
    return LayoutConfig(
        grid=_parse_section(data.get("grid", {}), GridConfig),
        canvas=_parse_section(data.get("canvas", {}), CanvasConfig),
        placement=_parse_section(data.get("placement", {}), PlacementConfig),
        mobile=_parse_section(data.get("mobile", {}), MobileConfig),
        audit=_parse_section(data.get("audit", {}), AuditConfig),
        logging=_parse_section(data.get("logging", {}), LoggingConfig),
    )


def _parse_section(data: Dict[str, Any], cls: type) -> Any:
    """解析配置段落"""
    if not data:
        return cls()
    
    # 过滤掉 cls 不接受的字段
    sig = inspect.signature(cls)
    valid_keys = set(sig.parameters.keys())
    unknown = set(data.keys()) - valid_keys
    if unknown:
        logger.warning("Ignoring unknown {} keys: {}", cls.__name__, sorted(unknown))
    filtered_data = {k: v for k, v in data.items() if k in valid_keys}
    
    return cls(**filtered_data)


def compute_config_hash(config: LayoutConfig) -> ConfigHash:
    """
    计算配置哈希
    
    用于审计，确保可以追踪配置变化
    
    Returns:
        SHA256 哈希的前 8 位
    """
    config_dict = asdict(config)
    config_str = json.dumps(config_dict, sort_keys=True, default=str)
    
    hash_obj = hashlib.sha256(config_str.encode())
    
    return ConfigHash(hash_obj.hexdigest()[:8])


def save_config_snapshot(config: LayoutConfig, output_path: str) -> None:
    """
    保存配置快照
    
    Args:
        config: 配置实例
        output_path: 输出路径
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    
    config_dict = asdict(config)
    
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config_dict, f, allow_unicode=True, default_flow_style=False)
