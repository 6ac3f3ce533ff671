"""Access — владелец конвертера и state machine паузы.

- Ownable: owner-only проверки, передача и отказ от владения
- PauseStateMachine: переходы ACTIVE ↔ PAUSED
"""

from .ownable import Ownable
from .pause_state_machine import PauseStateMachine, PauseTransitionResult

__all__ = [
    "Ownable",
    "PauseStateMachine",
    "PauseTransitionResult",
]
