from formflow import PydanticStepForm

from conftest import AddressStep


def test_form_is_not_submitted_without_its_fields():
    data = {}
    form = PydanticStepForm("checkout_step_2", data, AddressStep)

    form.handle_request({"checkout_step_1": {"email": "jane@example.com"}})

    assert not form.is_submitted()
    assert not form.is_valid()
    assert data == {}


def test_non_mapping_payload_is_not_a_submission():
    form = PydanticStepForm("checkout_step_2", {}, AddressStep)

    form.handle_request({"checkout_step_2": "Main Street 1"})

    assert not form.is_submitted()


def test_invalid_submission_exposes_errors_and_keeps_data():
    data = {"email": "jane@example.com"}
    form = PydanticStepForm("checkout_step_2", data, AddressStep)

    form.handle_request({"checkout_step_2": {"street": "Main Street 1"}})

    assert form.is_submitted()
    assert not form.is_valid()
    assert [error["loc"] for error in form.errors] == [("city",)]
    assert data == {"email": "jane@example.com"}


def test_valid_submission_merges_into_flow_data():
    data = {"email": "jane@example.com"}
    form = PydanticStepForm("checkout_step_2", data, AddressStep)

    form.handle_request({"checkout_step_2": {"street": "Main Street 1", "city": "Utrecht"}})

    assert form.is_valid()
    assert form.cleaned == AddressStep(street="Main Street 1", city="Utrecht")
    assert data == {"email": "jane@example.com", "street": "Main Street 1", "city": "Utrecht"}


def test_schema_less_step_accepts_any_mapping():
    data = {}
    form = PydanticStepForm("checkout_step_3", data)

    form.handle_request({"checkout_step_3": {"anything": "goes"}})

    assert form.is_valid()
    assert data == {}
