"""
配置校验器

实现：
- 布局不变量检查
- 推荐范围检查
- 拒绝无效配置启动
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List

from loguru import logger

from widget_grid.audit.events import AuditEvent, AuditEventType
from widget_grid.config.schema import LayoutConfig
from widget_grid.exceptions import ConfigValidationError
from widget_grid.layout_engine.dimensions import max_desktop_width


@dataclass
class ValidationResult:
    """校验结果"""
    is_valid: bool
    violations: List[str]
    warnings: List[str]


class ConfigValidator:
    """
    配置校验器
    
    两层校验：
    1. 布局不变量（违反则拒绝启动）
    2. 推荐范围（超出则警告）
    """
    
    def validate(self, config: LayoutConfig) -> ValidationResult:
        """
        执行完整校验
        
        Args:
            config: 配置实例
            
        Returns:
            ValidationResult
        """
        violations = self._check_invariants(config)
        warnings = self._check_ranges(config)
        
        return ValidationResult(
            is_valid=len(violations) == 0,
            violations=violations,
            warnings=warnings,
        )
    
    def validate_or_raise(self, config: LayoutConfig) -> None:
        """
        校验配置，失败则抛出异常
        
        Raises:
            ConfigValidationError: 配置无效
        """
        result = self.validate(config)
        
        if not result.is_valid:
            raise ConfigValidationError(result.violations)
        
        for warning in result.warnings:
            logger.warning("[CONFIG WARNING] {}", warning)
    
    def _check_invariants(self, config: LayoutConfig) -> List[str]:
        """检查布局不变量"""
        violations = []
        
        grid = config.grid
        if grid.unit <= 0:
            violations.append(f"Invariant violated: grid.unit ({grid.unit}) > 0")
        
        if grid.margin < 0:
            violations.append(f"Invariant violated: grid.margin ({grid.margin}) >= 0")
        
        if grid.max_search_distance < 0:
            violations.append(
                f"Invariant violated: grid.max_search_distance ({grid.max_search_distance}) >= 0"
            )
        
        canvas = config.canvas
        for name in ("desktop_width", "mobile_width"):
            value = getattr(canvas, name)
            if value <= 0:
                violations.append(f"Invariant violated: canvas.{name} ({value}) > 0")
        
        mobile = config.mobile
        if mobile.tile_size <= 0:
            violations.append(f"Invariant violated: mobile.tile_size ({mobile.tile_size}) > 0")
        
        if mobile.columns < 1:
            violations.append(f"Invariant violated: mobile.columns ({mobile.columns}) >= 1")
        
        # 自动排列的格子之间不能重叠
        if mobile.stride < mobile.tile_size + grid.margin:
            violations.append(
                f"Invariant violated: mobile.stride ({mobile.stride}) >= "
                f"tile_size + margin ({mobile.tile_size + grid.margin})"
            )
        
        return violations
    
    def _check_ranges(self, config: LayoutConfig) -> List[str]:
        """检查推荐范围"""
        warnings = []
        
        grid = config.grid
        if grid.unit > 0 and grid.max_search_distance < grid.unit:
            warnings.append(
                f"Parameter max_search_distance ({grid.max_search_distance}) < grid unit "
                f"({grid.unit}), placement will always fall back to stacking"
            )
        
        if grid.unit > 0 and grid.max_search_distance // grid.unit > 100:
            warnings.append(
                f"Parameter max_search_distance ({grid.max_search_distance}) spans more than "
                "100 rings, drag preview may lag"
            )
        
        widest = max_desktop_width()
        if config.canvas.desktop_width < widest:
            warnings.append(
                f"Parameter desktop_width ({config.canvas.desktop_width}) is narrower than "
                f"the widest widget ({widest})"
            )
        
        mobile = config.mobile
        grid_width = mobile.origin + (mobile.columns - 1) * mobile.stride + mobile.tile_size
        if grid_width > config.canvas.mobile_width:
            warnings.append(
                f"Mobile grid ({grid_width}px) overflows mobile canvas "
                f"({config.canvas.mobile_width}px)"
            )
        
        return warnings
    
    def create_invalid_config_event(
        self,
        session_id: str,
        timestamp: datetime,
        violations: List[str],
        config_hash: str,
    ) -> AuditEvent:
        """创建配置无效审计事件"""
        return AuditEvent(
            session_id=session_id,
            timestamp=timestamp,
            event_type=AuditEventType.CONFIG_INVALID,
            reason="Config validation failed",
            config_hash=config_hash,
            details={"violations": violations},
        )
