"""
Multi-step form flows.

Moves a user through an ordered sequence of steps, validating input at
each step, persisting progress and notifying listeners around every
transition.
"""

from formflow.core.config import FormFlowSettings, settings
from formflow.core.exceptions import (
    ConfigurationError,
    EmptyCollectionError,
    FlowNotFoundError,
    FormFlowError,
    InvalidStepCollectionError,
    LogicError,
    NotFoundError,
    StepNotFoundError,
    StorageError,
    TransitionError,
)
from formflow.domain.context import FlowContext
from formflow.domain.steps import Step, StepCollection
from formflow.events import (
    Channel,
    CompletedEvent,
    FormFlowEvents,
    NotificationBus,
    ResetEvent,
    TransitionedEvent,
    TransitionEvent,
)
from formflow.flows import Flow, FlowDefinition, FlowRegistry, flow_registry
from formflow.forms import PydanticStepForm, StepForm
from formflow.infrastructure.storage import FlowStorage, MemoryFlowStorage
from formflow.transitions import Status, TransitionKind, TransitionRequest, Transitioner

__all__ = [
    "FormFlowSettings",
    "settings",
    "FormFlowError",
    "ConfigurationError",
    "InvalidStepCollectionError",
    "EmptyCollectionError",
    "NotFoundError",
    "StepNotFoundError",
    "FlowNotFoundError",
    "TransitionError",
    "LogicError",
    "StorageError",
    "FlowContext",
    "Step",
    "StepCollection",
    "Channel",
    "NotificationBus",
    "FormFlowEvents",
    "TransitionEvent",
    "TransitionedEvent",
    "CompletedEvent",
    "ResetEvent",
    "Flow",
    "FlowDefinition",
    "FlowRegistry",
    "flow_registry",
    "StepForm",
    "PydanticStepForm",
    "FlowStorage",
    "MemoryFlowStorage",
    "Status",
    "TransitionKind",
    "TransitionRequest",
    "Transitioner",
]
