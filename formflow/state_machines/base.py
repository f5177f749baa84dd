"""
Base state machine for step positions.

Concrete machines are generated per flow definition (see step_machine.py);
this class holds the behaviour they share: start position, moves and
structured logging of every move.
"""

from typing import Any, Dict, Optional

import structlog
from statemachine import StateMachine
from statemachine.exceptions import TransitionNotAllowed

from formflow.core.exceptions import TransitionError


class StepMachine(StateMachine):
    """
    Base class for generated step machines.

    Features:
    - State value is the step number
    - Starts at any persisted step number
    - move() turns TransitionNotAllowed into TransitionError
    - Structured logging on every move
    """

    flow_name: str = ""
    step_count: int = 0

    def __init__(
        self,
        start_step_number: int = 1,
        instance_id: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize step machine.

        Args:
            start_step_number: Persisted current step number
            instance_id: Flow instance (session) ID for logging
            **kwargs: Additional context passed to StateMachine
        """
        self.instance_id = instance_id
        self.logger = structlog.get_logger(__name__)
        super().__init__(start_value=start_step_number, **kwargs)

    @property
    def current_step_number(self) -> int:
        return self.current_state.value

    def move(self, event: str) -> int:
        """
        Send a move event and return the resulting step number.

        Raises:
            TransitionError: If the event is not allowed at the current step
        """
        from_step = self.current_step_number
        target = self._move_targets(from_step).get(event)
        if target is None or not 1 <= target <= self.step_count:
            raise self._not_allowed(event, from_step)
        try:
            self.send(event)
        except TransitionNotAllowed as e:
            raise self._not_allowed(event, from_step) from e
        return self.current_step_number

    @staticmethod
    def _move_targets(step_number: int) -> Dict[str, int]:
        return {
            "forwards": step_number + 1,
            "backwards": step_number - 1,
            "rewind": 1,
        }

    def _not_allowed(self, event: str, from_step: int) -> TransitionError:
        return TransitionError(
            f'Can not move "{event}" from step {from_step}.',
            flow_name=self.flow_name,
            details={"event": event, "step_number": from_step},
        )

    def get_position_info(self) -> Dict[str, Any]:
        return {
            "flow": self.flow_name,
            "state": self.current_state.id,
            "step_number": self.current_step_number,
        }

    def log_transition(self, event: str, from_step: int, to_step: int):
        self.logger.info(
            "flow_step_transition",
            transition_event=event,
            from_step=from_step,
            to_step=to_step,
            flow=self.flow_name,
            instance_id=self.instance_id,
        )

    def on_forwards(self, source, target):
        self.log_transition("forwards", source.value, target.value)

    def on_backwards(self, source, target):
        self.log_transition("backwards", source.value, target.value)

    def on_rewind(self, source, target):
        self.log_transition("rewind", source.value, target.value)
