"""
Tests for the Result and error model
"""

import httpx
import pytest

from saltedge_partner_sdk.result import (
    STRUCTURED_ERROR_STATUSES,
    Err,
    ErrorClass,
    Ok,
    ResponseData,
    ResponseMeta,
    SaltedgeError,
    classify_error,
    ok_from_body,
)

URL = "https://www.saltedge.com/api/partners/v1/providers/unknown"

NOT_FOUND_BODY = {
    "error": {
        "error_class": "ProviderNotFound",
        "error_message": "Provider with code 'unknown' was not found.",
        "request": {"provider_code": "unknown"},
    }
}


def status_error(status_code, **response_kwargs) -> httpx.HTTPStatusError:
    """Build the exception ``raise_for_status`` would raise."""
    response = httpx.Response(status_code, request=httpx.Request("GET", URL), **response_kwargs)
    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        response.raise_for_status()
    return exc_info.value


class TestClassifyError:
    """Test failure classification"""

    def test_structured_statuses(self):
        """Exactly 400, 404, 406 and 409 carry structured errors"""
        assert STRUCTURED_ERROR_STATUSES == {400, 404, 406, 409}

    @pytest.mark.parametrize("status_code", [400, 404, 406, 409])
    def test_structured_status_with_error_object(self, status_code):
        """Error objects on structured statuses become SaltedgeError"""
        result = classify_error(status_error(status_code, json=NOT_FOUND_BODY))

        assert result.is_err
        error = result.error
        assert isinstance(error, SaltedgeError)
        assert error.error_class == "ProviderNotFound"
        assert error.error_message == "Provider with code 'unknown' was not found."
        assert error.request == {"provider_code": "unknown"}
        assert error.status_code == status_code
        assert error.known_class is ErrorClass.PROVIDER_NOT_FOUND

    @pytest.mark.parametrize("status_code", [401, 403, 422, 429, 500, 503])
    def test_other_statuses_pass_through_raw(self, status_code):
        """Other statuses are never parsed, even with an error object"""
        exc = status_error(status_code, json=NOT_FOUND_BODY)
        result = classify_error(exc)

        assert result.is_err
        assert result.error is exc

    def test_structured_status_with_non_json_body(self):
        """Unparseable bodies fall back to the raw error"""
        exc = status_error(404, text="<html>Not Found</html>")
        assert classify_error(exc).error is exc

    def test_structured_status_without_error_object(self):
        """A JSON body lacking ``error`` falls back to the raw error"""
        exc = status_error(400, json={"message": "bad"})
        assert classify_error(exc).error is exc

    def test_error_object_without_error_class(self):
        """``error_class`` is required for a structured error"""
        exc = status_error(409, json={"error": {"error_message": "conflict"}})
        assert classify_error(exc).error is exc

    def test_json_array_body(self):
        """Non-object bodies fall back to the raw error"""
        exc = status_error(406, json=[1, 2, 3])
        assert classify_error(exc).error is exc

    def test_network_error_passes_through(self):
        """Errors without a response are returned as-is"""
        exc = httpx.ConnectError("Connection refused", request=httpx.Request("GET", URL))
        assert classify_error(exc) == Err(exc)

    def test_classification_is_idempotent(self):
        """Classifying the same error twice gives equal results"""
        exc = status_error(404, json=NOT_FOUND_BODY)
        assert classify_error(exc) == classify_error(exc)

    def test_error_equals_received_error_object(self):
        """The structured error compares equal to the body's ``error`` object"""
        error = classify_error(status_error(404, json=NOT_FOUND_BODY)).error

        assert error == NOT_FOUND_BODY["error"]
        assert error != {"error_class": "ProviderNotFound"}
        assert error != "ProviderNotFound"

    def test_unknown_error_class_is_kept(self):
        """Undocumented classes are preserved as strings"""
        exc = status_error(400, json={"error": {"error_class": "SomethingNew", "error_message": "?"}})
        error = classify_error(exc).error

        assert error.error_class == "SomethingNew"
        assert error.known_class is None
        assert error.to_dict() == {"error_class": "SomethingNew", "error_message": "?"}


class TestResultTypes:
    """Test Ok/Err and the response envelope"""

    def test_ok_and_err_flags(self):
        """Exactly one of is_ok / is_err holds"""
        assert Ok(1).is_ok and not Ok(1).is_err
        assert Err("e").is_err and not Err("e").is_ok

    def test_results_are_immutable(self):
        """Results are frozen values"""
        with pytest.raises(AttributeError):
            Ok(1).value = 2

    def test_ok_from_body_with_meta(self):
        """Envelope data and pagination meta are decoded"""
        result = ok_from_body({"data": [{"code": "a"}], "meta": {"next_id": "42", "next_page": "/x?from_id=42"}})

        assert result.value == ResponseData(
            data=[{"code": "a"}],
            meta=ResponseMeta(next_id="42", next_page="/x?from_id=42"),
        )
        assert result.value.has_more

    def test_ok_from_body_last_page(self):
        """A null next_id means no more pages"""
        result = ok_from_body({"data": [], "meta": {"next_id": None, "next_page": None}})
        assert not result.value.has_more

    def test_ok_from_body_without_meta(self):
        """Single-object responses have no meta"""
        result = ok_from_body({"data": {"email": "a@b.com"}})
        assert result.value.data == {"email": "a@b.com"}
        assert result.value.meta is None

    def test_from_payload_rejects_non_mapping(self):
        """Only dict payloads are structured errors"""
        assert SaltedgeError.from_payload("oops") is None
        assert SaltedgeError.from_payload({"error_class": 5}) is None
