"""Per-instance flow progress, persisted between requests"""

from typing import Any, Dict, Set

from pydantic import BaseModel, Field

from formflow.domain.steps import Step


class FlowContext(BaseModel):
    """
    Mutable progress of one flow instance.

    Only the transitioner mutates the step position and completed set;
    persistence is always explicit through the owning flow's save().
    """

    flow_name: str = Field(..., description="Name of the flow definition")
    instance_id: str = Field(..., description="Session or instance identifier")
    current_step_number: int = Field(default=1, ge=1)
    completed_steps: Set[int] = Field(default_factory=set)
    data: Dict[str, Any] = Field(default_factory=dict)

    def set_current_step_number(self, number: int) -> None:
        self.current_step_number = number

    def mark_completed(self, step: Step) -> None:
        self.completed_steps.add(step.number)

    def mark_incompleted(self, step: Step) -> None:
        self.completed_steps.discard(step.number)

    def is_completed(self, step: Step) -> bool:
        return step.number in self.completed_steps

    def reset(self) -> None:
        """Back to the state of a freshly started flow"""
        self.current_step_number = 1
        self.completed_steps = set()
        self.data = {}
