from typing import Any, Dict, List, Optional

import pytest
from pydantic import BaseModel, Field

from formflow import (
    Flow,
    FlowDefinition,
    FormFlowSettings,
    MemoryFlowStorage,
    NotificationBus,
    StepCollection,
    Transitioner,
)
from formflow.events import FormFlowEvents


class AccountStep(BaseModel):
    email: str = Field(..., min_length=3)


class AddressStep(BaseModel):
    street: str
    city: str


class ConfirmStep(BaseModel):
    accept_terms: bool


VALID_INPUT: Dict[int, Dict[str, Any]] = {
    1: {"email": "jane@example.com"},
    2: {"street": "Main Street 1", "city": "Utrecht"},
    3: {"accept_terms": True},
}


@pytest.fixture
def test_settings():
    return FormFlowSettings(_env_file=None, environment="test")


@pytest.fixture
def definition():
    return FlowDefinition(
        name="checkout",
        steps=StepCollection.from_schemas(AccountStep, AddressStep, ConfirmStep),
    )


@pytest.fixture
def bus():
    return NotificationBus()


@pytest.fixture
def transitioner(bus, test_settings):
    return Transitioner(bus=bus, settings=test_settings)


@pytest.fixture
def storage():
    return MemoryFlowStorage()


@pytest.fixture
def flow(definition, storage, transitioner, test_settings):
    flow = Flow(
        definition,
        storage,
        instance_id="session-1",
        transitioner=transitioner,
        settings=test_settings,
    )
    flow.start()
    return flow


@pytest.fixture
def make_request():
    """Build a request carrying a transition marker and the current step's fields"""

    def _make(flow: Flow, marker: str, fields: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        request: Dict[str, Any] = {flow.transition_key: marker}
        if fields is not None:
            request[flow.form_name(flow.get_current_step())] = fields
        return request

    return _make


@pytest.fixture
def advance(transitioner, make_request):
    """Move a flow forwards with valid input until it reaches step_number"""

    def _advance(flow: Flow, step_number: int) -> None:
        while flow.get_current_step_number() < step_number:
            current = flow.get_current_step_number()
            status = transitioner.transition(flow, make_request(flow, "1", VALID_INPUT[current]))
            assert status.is_successful()

    return _advance


@pytest.fixture
def recorder(bus):
    """Subscribe a recording listener on every channel of the checkout flow"""
    received: List[str] = []

    def _listen(channel_name):
        return lambda event: received.append(channel_name)

    for kind in FormFlowEvents:
        bus.subscribe(kind, _listen(kind.value))
        bus.subscribe(kind, _listen(f"{kind.value}.checkout"), flow_name="checkout")
        for number in (1, 2, 3):
            bus.subscribe(
                kind,
                _listen(f"{kind.value}.checkout.step_{number}"),
                flow_name="checkout",
                step_number=number,
            )
    return received
