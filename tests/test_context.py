from formflow import FlowContext, Step


def test_new_context_starts_at_first_step():
    context = FlowContext(flow_name="checkout", instance_id="abc")

    assert context.current_step_number == 1
    assert context.completed_steps == set()
    assert context.data == {}


def test_mark_completed_and_incompleted():
    context = FlowContext(flow_name="checkout", instance_id="abc")
    step = Step(2)

    context.mark_completed(step)
    assert context.is_completed(step)

    context.mark_incompleted(step)
    context.mark_incompleted(step)
    assert not context.is_completed(step)


def test_reset_clears_progress_and_data():
    context = FlowContext(
        flow_name="checkout",
        instance_id="abc",
        current_step_number=3,
        completed_steps={1, 2},
        data={"email": "jane@example.com"},
    )

    context.reset()

    assert context.current_step_number == 1
    assert context.completed_steps == set()
    assert context.data == {}


def test_json_round_trip_keeps_completed_set():
    context = FlowContext(flow_name="checkout", instance_id="abc")
    context.set_current_step_number(3)
    context.mark_completed(Step(1))
    context.mark_completed(Step(2))

    restored = FlowContext.model_validate_json(context.model_dump_json())

    assert restored == context
    assert restored.completed_steps == {1, 2}
