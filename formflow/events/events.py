"""
Lifecycle events published by the transitioner.

Listeners receive one event object per transition phase; the same object
is handed to the step, flow and global scope in turn.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from formflow.flows.flow import Flow


class FormFlowEvents(str, Enum):
    PRE_FORWARDS = "pre_forwards"
    FORWARDS = "forwards"
    PRE_BACKWARDS = "pre_backwards"
    BACKWARDS = "backwards"
    PRE_COMPLETE = "pre_complete"
    COMPLETED = "completed"
    RESET = "reset"

    @property
    def is_pre_phase(self) -> bool:
        return self.value.startswith("pre_")


class Event:
    def __init__(self, flow: "Flow", step_number: Optional[int] = None):
        self.flow = flow
        self.step_number = step_number

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(flow={self.flow.name!r}, "
            f"step_number={self.step_number!r})"
        )


class TransitionEvent(Event):
    """Pre-phase event; any listener may block the pending transition"""

    def __init__(self, flow: "Flow", step_number: Optional[int] = None):
        super().__init__(flow, step_number)
        self._blocked = False
        self.block_reason: Optional[str] = None

    def block_transition(self, reason: Optional[str] = None) -> None:
        self._blocked = True
        self.block_reason = reason

    def is_transition_blocked(self) -> bool:
        return self._blocked


class TransitionedEvent(Event):
    pass


class CompletedEvent(Event):
    pass


class ResetEvent(Event):
    pass
