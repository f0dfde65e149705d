import pytest

from akavelog_ui.api.models import InputTypeInfo
from akavelog_ui.engine.form import DynamicFormModel
from akavelog_ui.errors import FormUnavailableError

from conftest import HTTP_SCHEMA

PORT_ONLY = InputTypeInfo.model_validate({
    "type": "http",
    "fields": [{"name": "port", "type": "number", "required": True, "example": "8080"}],
})


def loaded_form(schema=None, title="my-http-input") -> DynamicFormModel:
    form = DynamicFormModel(default_title=title)
    form.load(schema or InputTypeInfo.model_validate(HTTP_SCHEMA))
    return form


def test_initial_values_come_from_examples_or_empty():
    form = loaded_form()

    assert form.title == "my-http-input"
    assert form.values == {"port": "8080", "description": ""}


def test_form_is_unavailable_until_schema_loads():
    form = DynamicFormModel(default_title="my-http-input")

    assert not form.available
    with pytest.raises(FormUnavailableError):
        form.build_payload()


def test_mark_unavailable_disables_submission():
    form = loaded_form()
    form.mark_unavailable()

    assert not form.available
    assert form.values == {}
    with pytest.raises(FormUnavailableError):
        form.build_payload()


def test_set_value_replaces_only_that_key():
    form = loaded_form()
    form.set_value("description", "svc-a")

    assert form.values == {"port": "8080", "description": "svc-a"}


def test_set_value_rejects_unknown_fields():
    form = loaded_form()
    with pytest.raises(KeyError):
        form.set_value("listen", ":9000")


def test_edit_notifies_observers():
    form = loaded_form()
    seen = []
    form.state.subscribe(lambda state: seen.append(dict(state.values)))

    form.set_value("port", "9000")

    assert seen == [{"port": "9000", "description": ""}]


def test_payload_trims_and_drops_empty_values():
    form = loaded_form()
    form.set_value("port", "  9000 ")
    form.set_value("description", "   ")
    form.set_title("  web  ")

    payload = form.build_payload()

    assert payload.to_body() == {"type": "http", "title": "web", "config": {"port": "9000"}}


def test_all_empty_fields_omit_config_key():
    form = loaded_form()
    form.set_value("port", "")

    body = form.build_payload().to_body()

    assert "config" not in body


def test_blank_title_is_omitted():
    form = loaded_form()
    form.set_title("   ")

    assert "title" not in form.build_payload().to_body()


def test_port_scenario_payload():
    form = loaded_form(PORT_ONLY)
    assert {"title": form.title, **form.values} == {"title": "my-http-input", "port": "8080"}

    form.set_value("port", "")

    assert form.build_payload().to_body() == {"type": "http", "title": "my-http-input"}


def test_reset_reseeds_values_but_clears_title():
    form = loaded_form()
    form.set_value("port", "9000")
    form.set_value("description", "svc-a")

    form.reset()

    assert form.values == {"port": "8080", "description": ""}
    assert form.title == ""
    assert form.title != "my-http-input"


def test_missing_required_lists_blank_required_fields():
    form = loaded_form()
    assert form.missing_required() == []

    form.set_value("port", " ")

    assert form.missing_required() == ["port"]


def test_numeric_example_seeds_as_text():
    schema = InputTypeInfo.model_validate({
        "type": "http",
        "fields": [{"name": "port", "type": "number", "required": True, "example": 8080}],
    })

    form = loaded_form(schema)

    assert form.values == {"port": "8080"}
    assert form.build_payload().config == {"port": "8080"}
