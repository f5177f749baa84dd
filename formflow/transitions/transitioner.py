"""
Transition engine.

Interprets the transition key of an inbound request and moves a flow
forwards, backwards, to completion or back to its start. Usage errors
raise TransitionError; invalid input and listener vetoes are reported
through the returned Status.
"""

from typing import TYPE_CHECKING, Any, Mapping, Optional

import structlog

from formflow.core.config import FormFlowSettings, settings as default_settings
from formflow.core.exceptions import TransitionError
from formflow.events import (
    CompletedEvent,
    Event,
    FormFlowEvents,
    NotificationBus,
    ResetEvent,
    TransitionedEvent,
    TransitionEvent,
)
from formflow.forms.base import StepForm
from .requests import TransitionKind, TransitionRequest, read_transition_value
from .status import Status

if TYPE_CHECKING:
    from formflow.flows.flow import Flow

logger = structlog.get_logger(__name__)

Request = Mapping[str, Any]


class Transitioner:
    def __init__(
        self,
        bus: Optional[NotificationBus] = None,
        settings: Optional[FormFlowSettings] = None,
    ):
        self.bus = bus or NotificationBus()
        self.settings = settings or default_settings

    def has_transition_request(self, flow: "Flow", request: Request) -> bool:
        return read_transition_value(request, flow.transition_key) != ""

    def transition(self, flow: "Flow", request: Request) -> Status:
        if not self.has_transition_request(flow, request):
            raise TransitionError(
                f'Unable to transition flow "{flow.name}". Use has_transition_request() '
                "to ensure there is a transition request before attempting to transition.",
                flow_name=flow.name,
            )

        transition_request = TransitionRequest.from_request(
            request, flow.transition_key, self.settings
        )
        with structlog.contextvars.bound_contextvars(
            flow=flow.name, instance_id=flow.instance_id
        ):
            logger.info(
                "flow_transition_requested",
                kind=transition_request.kind.value,
                current_step=flow.get_current_step_number(),
            )
            status = self._dispatch_request(flow, request, transition_request)
            logger.info(
                "flow_transition_finished",
                kind=transition_request.kind.value,
                status=str(status),
                current_step=flow.get_current_step_number(),
            )
        return status

    def _dispatch_request(
        self, flow: "Flow", request: Request, transition_request: TransitionRequest
    ) -> Status:
        kind = transition_request.kind
        if kind is TransitionKind.FORWARDS:
            # multiple forwards steps per request are not supported
            return self.forwards(flow, request)
        if kind is TransitionKind.BACKWARDS:
            return self._backwards_to(flow, request, transition_request)
        if kind is TransitionKind.COMPLETE:
            return self.complete(flow, request)
        if kind is TransitionKind.RESET:
            return self.reset(flow)

        logger.warning("flow_transition_unknown", raw_value=transition_request.raw_value)
        return Status.failure()

    def _backwards_to(
        self, flow: "Flow", request: Request, transition_request: TransitionRequest
    ) -> Status:
        current = flow.get_current_step_number()
        requested = transition_request.requested_step_number
        if (
            requested is None
            or requested < 1
            or requested >= current
            or requested > flow.steps.count()
        ):
            raise TransitionError(
                f'"{transition_request.raw_value}" is an invalid requested step number '
                "in the current context.",
                flow_name=flow.name,
                details={"current_step": current, "requested_step": requested},
            )

        status = Status.failure()
        while flow.get_current_step_number() > requested:
            status = self.backwards(flow, request)
            if not status.is_successful():
                break
        return status

    def forwards(self, flow: "Flow", request: Request) -> Status:
        current_step = flow.get_current_step()
        if current_step.number == flow.get_last_step().number:
            raise TransitionError(
                "The flow is on the last step and can not transition forwards.",
                flow_name=flow.name,
            )

        form = flow.get_current_step_form()
        self._submit_form(form, request)
        if not form.is_submitted() or not form.is_valid():
            logger.info("flow_form_invalid", transition="forwards", step=current_step.number)
            return Status.failure(form_valid=False)

        number = current_step.number
        event = TransitionEvent(flow, number)
        self._dispatch(event, FormFlowEvents.PRE_FORWARDS, flow, number)
        if event.is_transition_blocked():
            logger.info(
                "flow_transition_blocked",
                transition="forwards",
                step=number,
                reason=event.block_reason,
            )
            return Status.failure(form_valid=True, blocked=True)

        context = flow.get_context()
        context.set_current_step_number(flow.create_step_machine().move("forwards"))
        context.mark_completed(current_step)
        self._dispatch(TransitionedEvent(flow, number), FormFlowEvents.FORWARDS, flow, number)
        flow.save()

        return Status.success(form_valid=True)

    def backwards(self, flow: "Flow", request: Request) -> Status:
        current_step = flow.get_current_step()
        if current_step.number == flow.get_first_step().number:
            raise TransitionError(
                "The flow is on the first step and can not transition backwards.",
                flow_name=flow.name,
            )

        # input is submitted so it can be kept, but never stops a backwards move
        form = flow.get_current_step_form()
        self._submit_form(form, request)
        form_valid = form.is_submitted() and form.is_valid()

        number = current_step.number
        event = TransitionEvent(flow, number)
        self._dispatch(event, FormFlowEvents.PRE_BACKWARDS, flow, number)
        if event.is_transition_blocked():
            logger.info(
                "flow_transition_blocked",
                transition="backwards",
                step=number,
                reason=event.block_reason,
            )
            return Status.failure(form_valid=form_valid, blocked=True)

        context = flow.get_context()
        context.mark_incompleted(current_step)
        context.set_current_step_number(flow.create_step_machine().move("backwards"))
        self._dispatch(TransitionedEvent(flow, number), FormFlowEvents.BACKWARDS, flow, number)
        flow.save()

        return Status.success(form_valid=True)

    def complete(self, flow: "Flow", request: Request) -> Status:
        current_step = flow.get_current_step()
        if current_step.number != flow.get_last_step().number:
            raise TransitionError(
                "The flow must be on the last step in order to be completed.",
                flow_name=flow.name,
            )

        form = flow.get_current_step_form()
        self._submit_form(form, request)
        if not form.is_submitted() or not form.is_valid():
            logger.info("flow_form_invalid", transition="complete", step=current_step.number)
            return Status.failure(form_valid=False)

        context = flow.get_context()
        for previous_step in flow.steps.steps_before(current_step.number):
            if not context.is_completed(previous_step):
                logger.info(
                    "flow_complete_refused",
                    step=current_step.number,
                    incomplete_step=previous_step.number,
                )
                return Status.failure()

        event = TransitionEvent(flow)
        self._dispatch(event, FormFlowEvents.PRE_COMPLETE, flow)
        if event.is_transition_blocked():
            logger.info("flow_transition_blocked", transition="complete", reason=event.block_reason)
            return Status.failure(form_valid=True, blocked=True)

        self._dispatch(CompletedEvent(flow), FormFlowEvents.COMPLETED, flow)
        flow.reset()
        logger.info("flow_completed", flow=flow.name, instance_id=flow.instance_id)

        return Status.success(form_valid=True, completed=True)

    def reset(self, flow: "Flow") -> Status:
        self._dispatch(ResetEvent(flow), FormFlowEvents.RESET, flow)
        flow.reset()

        return Status.success(reset=True)

    def _dispatch(
        self,
        event: Event,
        kind: FormFlowEvents,
        flow: "Flow",
        step_number: Optional[int] = None,
    ) -> None:
        """Fires up to 3 scoped notifications (step, flow, global) for one event"""
        self.bus.publish(event, kind, flow.name, step_number)

    @staticmethod
    def _submit_form(form: StepForm, request: Request) -> None:
        if not form.is_submitted():
            form.handle_request(request)
