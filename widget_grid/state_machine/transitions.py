"""
视图切换结果
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from widget_grid.models.view import ViewMode


class TransitionTrigger(Enum):
    """切换来源"""
    USER_TOGGLE = auto()       # 用户点击切换按钮
    EXPLICIT_SET = auto()      # 直接指定视图


@dataclass
class TransitionResult:
    """视图切换结果"""
    changed: bool
    from_mode: ViewMode
    to_mode: ViewMode
    trigger: Optional[TransitionTrigger] = None
    
    @classmethod
    def unchanged(cls, mode: ViewMode) -> "TransitionResult":
        """已在目标视图"""
        return cls(changed=False, from_mode=mode, to_mode=mode)
