import pytest

from formflow import (
    ConfigurationError,
    EmptyCollectionError,
    Flow,
    FlowContext,
    FlowDefinition,
    LogicError,
    MemoryFlowStorage,
    StepCollection,
)

from conftest import VALID_INPUT


def test_definition_rejects_bad_names():
    with pytest.raises(ConfigurationError):
        FlowDefinition("check out", StepCollection.from_schemas(None))


def test_definition_rejects_empty_steps():
    with pytest.raises(EmptyCollectionError):
        FlowDefinition("checkout", StepCollection())


def test_custom_transition_key(test_settings):
    definition = FlowDefinition("checkout", StepCollection.from_schemas(None), transition_key="go")
    flow = Flow(definition, MemoryFlowStorage(), "session-1", settings=test_settings)

    assert flow.transition_key == "go"


def test_unstarted_flow(definition, storage, test_settings):
    flow = Flow(definition, storage, "session-2", settings=test_settings)

    assert not flow.is_started()
    with pytest.raises(LogicError):
        flow.get_context()


def test_start_persists_context(flow, storage):
    assert flow.is_started()
    assert flow.get_current_step_number() == 1
    assert storage.load("checkout", "session-1") == flow.get_context()


def test_new_flow_object_resumes_persisted_context(flow, definition, storage, advance, test_settings):
    advance(flow, 3)

    resumed = Flow(definition, storage, "session-1", settings=test_settings)

    assert resumed.get_current_step_number() == 3
    assert resumed.get_context().completed_steps == {1, 2}
    assert resumed.get_data()["city"] == "Utrecht"


def test_out_of_range_context_restarts_at_first_step(definition, storage, test_settings):
    storage.save(
        FlowContext(
            flow_name="checkout",
            instance_id="session-1",
            current_step_number=7,
            completed_steps={1, 2, 3},
        )
    )

    flow = Flow(definition, storage, "session-1", settings=test_settings)

    assert flow.get_current_step_number() == 1
    assert flow.get_context().completed_steps == set()


def test_step_navigation(flow, advance):
    assert flow.get_current_step().label == "AccountStep"
    assert flow.get_previous_step() is None
    assert flow.get_next_step().number == 2

    advance(flow, 3)

    assert flow.get_current_step() == flow.get_last_step()
    assert flow.get_next_step() is None
    assert flow.get_previous_step().number == 2
    assert flow.get_first_step().number == 1


def test_allowed_transitions(flow, advance):
    assert flow.allowed_transitions() == ["forwards", "reset"]

    advance(flow, 2)
    assert flow.allowed_transitions() == ["forwards", "backwards", "reset"]

    advance(flow, 3)
    assert flow.allowed_transitions() == ["backwards", "complete", "reset"]


def test_flow_info(flow, advance):
    advance(flow, 2)

    assert flow.get_flow_info() == {
        "flow": "checkout",
        "instance_id": "session-1",
        "current_step": 2,
        "step_count": 3,
        "completed_steps": [1],
        "allowed_transitions": ["forwards", "backwards", "reset"],
        "transition_key": "flow_checkout_transition",
    }


def test_current_step_form_is_bound_to_flow_data(flow):
    form = flow.get_current_step_form()

    assert form.name == "checkout_step_1"
    form.handle_request({"checkout_step_1": VALID_INPUT[1]})

    assert flow.get_data() == {"email": "jane@example.com"}


def test_reset_clears_progress(flow, advance, storage):
    advance(flow, 3)

    flow.reset()

    assert flow.get_current_step_number() == 1
    assert flow.get_data() == {}
    assert storage.load("checkout", "session-1").completed_steps == set()


def test_transition_delegates_to_transitioner(flow, make_request):
    request = make_request(flow, "1", VALID_INPUT[1])

    assert flow.has_transition_request(request)
    assert flow.transition(request).is_successful()
    assert flow.get_current_step_number() == 2
