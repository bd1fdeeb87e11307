import pytest

from unified_response.api.response import format_envelope
from unified_response.core.config import ResponseSettings
from unified_response.core.status import Category


def test_business_code_is_taken_from_message(settings: ResponseSettings) -> None:
    envelope = format_envelope(None, "Custom|777", 400, settings=settings)

    assert envelope.status is Category.FAIL
    assert envelope.code == "777"
    assert envelope.message == "Custom"


def test_numeric_status_is_used_without_business_code(settings: ResponseSettings) -> None:
    envelope = format_envelope(None, "Not here", 404, settings=settings)

    assert envelope.code == "404"
    assert envelope.message == "Not here"


def test_default_fail_message_without_code(settings_factory) -> None:
    settings = settings_factory(code={"fail": "Fail"})
    envelope = format_envelope(None, "", 404, settings=settings)

    assert envelope.code == "404"
    assert envelope.message == "Fail"


def test_default_message_with_code(settings: ResponseSettings) -> None:
    envelope = format_envelope({"id": 1}, "", 200, settings=settings)

    assert envelope.model_dump(mode="json") == {
        "status": "success",
        "code": "10000",
        "message": "Success",
        "data": {"id": 1},
        "errors": {},
    }


@pytest.mark.parametrize("empty", [None, [], {}, False, ""])
def test_empty_data_and_errors_render_as_objects(settings: ResponseSettings, empty) -> None:
    body = format_envelope(empty, "ok", 200, empty, settings=settings).model_dump(mode="json")

    assert body["data"] == {}
    assert body["errors"] == {}


def test_scalar_data_is_wrapped_in_list(settings: ResponseSettings) -> None:
    envelope = format_envelope("value", "ok", 200, settings=settings)

    assert envelope.data == ["value"]


def test_list_data_is_kept(settings: ResponseSettings) -> None:
    envelope = format_envelope([1, 2], "ok", 200, settings=settings)

    assert envelope.data == [1, 2]


def test_non_mapping_errors_stay_object_shaped(settings: ResponseSettings) -> None:
    assert format_envelope(None, "x", 500, "boom", settings=settings).errors == {"message": "boom"}
    assert format_envelope(None, "x", 500, ["a", "b"], settings=settings).errors == {"details": ["a", "b"]}


def test_server_error_category(settings: ResponseSettings) -> None:
    envelope = format_envelope(None, "", 503, {"reason": "maintenance"}, settings=settings)

    assert envelope.status is Category.ERROR
    assert envelope.code == "30000"
    assert envelope.message == "Error"
    assert envelope.errors == {"reason": "maintenance"}


def test_formatting_is_idempotent(settings: ResponseSettings) -> None:
    first = format_envelope({"a": [1, 2]}, "Done|1", 201, {"w": "x"}, settings=settings)
    second = format_envelope({"a": [1, 2]}, "Done|1", 201, {"w": "x"}, settings=settings)

    assert first.model_dump_json() == second.model_dump_json()
