"""
Step machine factory.

Generates one StateMachine class per step collection:

    step_1 -> step_2 -> ... -> step_n     (forwards)
    step_n -> ... -> step_2 -> step_1     (backwards)
    step_k -> step_1                      (rewind, for reset and complete)
"""

import operator
from functools import reduce
from typing import Any, Dict, Type

from statemachine import State

from formflow.core.exceptions import EmptyCollectionError
from formflow.domain.steps import StepCollection
from .base import StepMachine


def state_id(step_number: int) -> str:
    return f"step_{step_number}"


def build_step_machine(flow_name: str, steps: StepCollection) -> Type[StepMachine]:
    """
    Create the StepMachine subclass for a flow definition.

    Raises:
        EmptyCollectionError: If the collection has no steps
    """
    if not len(steps):
        raise EmptyCollectionError(
            f'Flow "{flow_name}" has no steps.', details={"flow": flow_name}
        )

    states = [
        State(name=step.label or state_id(step.number), value=step.number, initial=step.number == 1)
        for step in steps
    ]
    attrs: Dict[str, Any] = {
        "__module__": __name__,
        "flow_name": flow_name,
        "step_count": len(steps),
    }
    for step, state in zip(steps, states):
        attrs[state_id(step.number)] = state

    pairs = list(zip(states, states[1:]))
    if pairs:
        attrs["forwards"] = reduce(operator.or_, (a.to(b) for a, b in pairs))
        attrs["backwards"] = reduce(operator.or_, (b.to(a) for a, b in pairs))
    attrs["rewind"] = states[0].from_(*states)

    class_name = "".join(part.capitalize() for part in flow_name.split("_")) + "StepMachine"
    return type(StepMachine)(class_name, (StepMachine,), attrs)
