"""
State machine infrastructure for step positions.

Every flow definition gets a generated machine whose states are its steps;
the transitioner moves flows through it.
"""

from .base import StepMachine
from .step_machine import build_step_machine, state_id

__all__ = ["StepMachine", "build_step_machine", "state_id"]
