"""
状态机模块

视图模式两态状态机：
- DESKTOP
- MOBILE
"""

from widget_grid.state_machine.states import ViewModeStateMachine
from widget_grid.state_machine.transitions import TransitionTrigger, TransitionResult

__all__ = [
    "ViewModeStateMachine",
    "TransitionTrigger",
    "TransitionResult",
]
