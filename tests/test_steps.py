import pytest

from formflow import (
    EmptyCollectionError,
    InvalidStepCollectionError,
    NotFoundError,
    Step,
    StepCollection,
    StepNotFoundError,
)

from conftest import AccountStep, AddressStep


@pytest.fixture
def steps():
    return StepCollection(Step(number) for number in (3, 1, 2))


def test_collection_orders_steps_by_number(steps):
    assert [step.number for step in steps] == [1, 2, 3]
    assert steps.count() == len(steps) == 3


def test_get_and_boundaries(steps):
    assert steps.get(2).number == 2
    assert steps.first().number == 1
    assert steps.last().number == 3


@pytest.mark.parametrize("number", [0, 4, -1])
def test_get_out_of_range_raises(steps, number):
    with pytest.raises(StepNotFoundError) as exc_info:
        steps.get(number)

    assert isinstance(exc_info.value, NotFoundError)
    assert exc_info.value.details == {"step_number": number, "step_count": 3}


def test_empty_collection_has_no_first_or_last():
    steps = StepCollection()

    assert steps.count() == 0
    with pytest.raises(EmptyCollectionError):
        steps.first()
    with pytest.raises(EmptyCollectionError):
        steps.last()


@pytest.mark.parametrize("numbers", [(1, 1), (1, 3), (2, 3)])
def test_non_contiguous_numbers_are_rejected(numbers):
    with pytest.raises(InvalidStepCollectionError):
        StepCollection(Step(number) for number in numbers)


def test_step_numbers_start_at_one():
    with pytest.raises(InvalidStepCollectionError):
        Step(0)


def test_steps_before_is_lazy_and_restartable(steps):
    before = steps.steps_before(3)

    assert [step.number for step in before] == [1, 2]
    assert [step.number for step in before] == [1, 2]
    assert list(steps.steps_before(1)) == []
    assert [step.number for step in steps.steps_before(10)] == [1, 2, 3]


def test_from_schemas_numbers_steps_in_order():
    steps = StepCollection.from_schemas(AccountStep, None, AddressStep)

    assert [step.number for step in steps] == [1, 2, 3]
    assert steps.get(1).form_schema is AccountStep
    assert steps.get(1).label == "AccountStep"
    assert steps.get(2).form_schema is None
    assert 2 in steps
    assert 4 not in steps
