"""
Flow aggregate.

Combines a static FlowDefinition with the persisted FlowContext of one
instance (usually one user session). A Flow is built per request and
handed to the Transitioner by reference.
"""

from typing import Any, Dict, List, Mapping, Optional

import structlog

from formflow.core.config import FormFlowSettings, settings as default_settings
from formflow.core.exceptions import LogicError
from formflow.domain.context import FlowContext
from formflow.domain.steps import Step, StepCollection
from formflow.forms import PydanticStepForm, StepForm
from formflow.infrastructure.storage import FlowStorage
from formflow.state_machines import StepMachine
from formflow.transitions.status import Status
from formflow.transitions.transitioner import Transitioner
from .definition import FlowDefinition

logger = structlog.get_logger(__name__)


class Flow:
    def __init__(
        self,
        definition: FlowDefinition,
        storage: FlowStorage,
        instance_id: str,
        transitioner: Optional[Transitioner] = None,
        settings: Optional[FormFlowSettings] = None,
    ):
        """
        Args:
            definition: Static flow definition
            storage: Where the context of this instance is persisted
            instance_id: Session / instance identifier
            transitioner: Engine used by transition(); a fresh one by default
            settings: Naming and marker configuration
        """
        self.definition = definition
        self.storage = storage
        self.instance_id = instance_id
        self.settings = settings or default_settings
        self.transitioner = transitioner or Transitioner(settings=self.settings)
        self._context: Optional[FlowContext] = None

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def steps(self) -> StepCollection:
        return self.definition.steps

    @property
    def transition_key(self) -> str:
        """Input name carrying the transition marker"""
        return self.definition.transition_key or self.settings.transition_key_for(self.name)

    # Lifecycle

    def is_started(self) -> bool:
        return self._load_context() is not None

    def start(self) -> FlowContext:
        """Create (or overwrite) the context of this instance at step 1"""
        self._context = FlowContext(flow_name=self.name, instance_id=self.instance_id)
        self.save()
        logger.info("flow_started", flow=self.name, instance_id=self.instance_id)
        return self._context

    def get_context(self) -> FlowContext:
        context = self._load_context()
        if context is None:
            raise LogicError(
                f'Flow "{self.name}" has not been started.',
                details={"flow": self.name, "instance_id": self.instance_id},
            )
        return context

    def save(self) -> None:
        self.storage.save(self.get_context())

    def reset(self) -> None:
        """Rewind to step 1, forget completed steps and data, then persist"""
        context = self.get_context()
        self.create_step_machine().move("rewind")
        context.reset()
        self.save()
        logger.info("flow_reset", flow=self.name, instance_id=self.instance_id)

    def _load_context(self) -> Optional[FlowContext]:
        if self._context is None:
            context = self.storage.load(self.name, self.instance_id)
            if context is not None and context.current_step_number not in self.steps:
                logger.warning(
                    "flow_context_step_out_of_range",
                    flow=self.name,
                    instance_id=self.instance_id,
                    step=context.current_step_number,
                    step_count=self.steps.count(),
                    defaulting_to=1,
                )
                context.reset()
            self._context = context
        return self._context

    # Steps

    def get_current_step_number(self) -> int:
        return self.get_context().current_step_number

    def get_current_step(self) -> Step:
        return self.steps.get(self.get_current_step_number())

    def get_first_step(self) -> Step:
        return self.steps.first()

    def get_last_step(self) -> Step:
        return self.steps.last()

    def get_next_step(self) -> Optional[Step]:
        number = self.get_current_step_number() + 1
        return self.steps.get(number) if number in self.steps else None

    def get_previous_step(self) -> Optional[Step]:
        number = self.get_current_step_number() - 1
        return self.steps.get(number) if number in self.steps else None

    def create_step_machine(self) -> StepMachine:
        return self.definition.machine_class(
            start_step_number=self.get_current_step_number(),
            instance_id=self.instance_id,
        )

    # Forms and data

    def form_name(self, step: Step) -> str:
        return self.settings.form_name_for(self.name, step.number)

    def get_current_step_form(self) -> StepForm:
        """
        Build the form of the current step, bound to the flow data.

        A new form is built per call; override to plug another form layer.
        """
        step = self.get_current_step()
        return PydanticStepForm(
            name=self.form_name(step),
            data=self.get_context().data,
            schema=step.form_schema,
        )

    def get_data(self) -> Dict[str, Any]:
        return self.get_context().data

    # Transitions

    def has_transition_request(self, request: Mapping[str, Any]) -> bool:
        return self.transitioner.has_transition_request(self, request)

    def transition(self, request: Mapping[str, Any]) -> Status:
        return self.transitioner.transition(self, request)

    def allowed_transitions(self) -> List[str]:
        current = self.get_current_step_number()
        allowed = []
        if current < self.steps.count():
            allowed.append("forwards")
        if current > 1:
            allowed.append("backwards")
        if current == self.steps.count():
            allowed.append("complete")
        allowed.append("reset")
        return allowed

    def get_flow_info(self) -> Dict[str, Any]:
        """Current position and allowed transitions, for API responses"""
        context = self.get_context()
        return {
            "flow": self.name,
            "instance_id": self.instance_id,
            "current_step": context.current_step_number,
            "step_count": self.steps.count(),
            "completed_steps": sorted(context.completed_steps),
            "allowed_transitions": self.allowed_transitions(),
            "transition_key": self.transition_key,
        }
