import re
from dataclasses import dataclass, field
from typing import Optional, Type

from formflow.core.exceptions import ConfigurationError, EmptyCollectionError
from formflow.domain.steps import StepCollection
from formflow.state_machines import StepMachine, build_step_machine

# Flow names end up in channel names (pre_forwards.<name>.step_1) and request keys
_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class FlowDefinition:
    """Static part of a flow: its name, ordered steps and transition key"""

    name: str
    steps: StepCollection
    transition_key: Optional[str] = None
    machine_class: Type[StepMachine] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not _NAME_PATTERN.match(self.name):
            raise ConfigurationError(
                f'Invalid flow name "{self.name}". Use letters, digits and underscores.',
                details={"flow": self.name},
            )
        if not len(self.steps):
            raise EmptyCollectionError(
                f'Flow "{self.name}" must have at least one step.',
                details={"flow": self.name},
            )
        object.__setattr__(self, "machine_class", build_step_machine(self.name, self.steps))
