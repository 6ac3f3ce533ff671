"""Pause State Machine — управление состоянием паузы конвертера.

- ACTIVE → PAUSED через pause()
- PAUSED → ACTIVE через unpause()
- Переход в текущее состояние: no-op (transition_occurred=False)

Проверка прав владельца выполняется вызывающим кодом (Ownable),
state machine отвечает только за переходы.
"""

from dataclasses import dataclass

from src.core.domain.converter_state import PauseState


@dataclass(frozen=True)
class PauseTransitionResult:
    """Результат перехода состояния паузы."""

    new_state: PauseState
    previous_state: PauseState

    # Диагностика
    transition_occurred: bool
    transition_reason: str

    # Для отладки
    details: str

    @property
    def paused(self) -> bool:
        return self.new_state == PauseState.PAUSED


class PauseStateMachine:
    """State machine паузы с явным целевым состоянием.

    pause()/unpause() задают целевое состояние, а не переключают его,
    поэтому повторный pause() не возвращает конвертер в ACTIVE.

    States:
    - ACTIVE: конверсии разрешены
    - PAUSED: convert_tokens блокирован; deposit/withdraw разрешены
    """

    def evaluate_transition(
        self,
        current_state: PauseState,
        target_state: PauseState,
    ) -> PauseTransitionResult:
        """Оценка перехода в целевое состояние.

        Args:
            current_state: текущее состояние паузы
            target_state: запрошенное состояние (PAUSED для pause, ACTIVE для unpause)

        Returns:
            PauseTransitionResult с новым состоянием
        """
        if current_state == target_state:
            reason = (
                "already_paused" if current_state == PauseState.PAUSED else "already_active"
            )
            return PauseTransitionResult(
                new_state=current_state,
                previous_state=current_state,
                transition_occurred=False,
                transition_reason=reason,
                details=f"State={current_state.value}, no transition",
            )

        reason = "pause" if target_state == PauseState.PAUSED else "unpause"
        return PauseTransitionResult(
            new_state=target_state,
            previous_state=current_state,
            transition_occurred=True,
            transition_reason=reason,
            details=f"Transition: {current_state.value} → {target_state.value}",
        )
