"""
Tests for response translation.

Covers the success paths, the four JSON error shapes and non-JSON errors,
plus property-based checks with Hypothesis.
"""

import json

import httpx
import pytest
from hypothesis import given, strategies as st

from yorauth.errors import ErrorKind, YorAuthError
from yorauth.http import merge_query
from yorauth.responses import build_error, is_json_content_type, status_text, translate_response


JSON = "application/json"


def raises(status: int, content_type: str, body: str, reason: str = None) -> YorAuthError:
    with pytest.raises(YorAuthError) as exc_info:
        translate_response(status, content_type, body, reason)
    return exc_info.value


class TestSuccess:
    """Tests for 2xx responses."""

    def test_json_body(self):
        assert translate_response(200, JSON, '{"data": {"id": "1"}}') == {"data": {"id": "1"}}

    def test_json_with_charset(self):
        assert translate_response(201, "application/json; charset=utf-8", '{"ok": true}') == {"ok": True}

    def test_no_content(self):
        assert translate_response(204, JSON, "") is None

    def test_no_content_ignores_body(self):
        assert translate_response(204, JSON, '{"ignored": true}') is None

    def test_non_json(self):
        assert translate_response(200, "text/html", "<html></html>") is None

    def test_missing_content_type(self):
        assert translate_response(200, None, "ok") is None

    def test_empty_json_body(self):
        assert translate_response(200, JSON, "") is None

    def test_invalid_json(self):
        error = raises(200, JSON, "{not json")
        assert error.code == "INVALID_RESPONSE"
        assert error.status == 200
        assert error.kind == ErrorKind.UNKNOWN


class TestStructuredError:
    """Tests for {"error": {...}} bodies."""

    def test_full(self):
        body = json.dumps({
            "error": {
                "code": "AUTH_INVALID_CREDENTIALS",
                "message": "Invalid credentials",
                "details": {"email": ["Unknown"]},
                "request_id": "req_42",
            }
        })
        error = raises(401, JSON, body)
        assert error.code == "AUTH_INVALID_CREDENTIALS"
        assert error.message == "Invalid credentials"
        assert error.status == 401
        assert error.details == {"email": ["Unknown"]}
        assert error.request_id == "req_42"
        assert error.kind == ErrorKind.AUTHENTICATION

    def test_missing_message_uses_status_text(self):
        error = raises(403, JSON, '{"error": {"code": "FORBIDDEN"}}', "Forbidden")
        assert error.message == "Forbidden"

    def test_missing_code_uses_status(self):
        error = raises(404, JSON, '{"error": {"message": "Role not found"}}')
        assert error.code == "HTTP_404"
        assert error.kind == ErrorKind.NOT_FOUND

    def test_rate_limit_code(self):
        error = raises(400, JSON, '{"error": {"code": "RATE_LIMIT_EXCEEDED", "message": "Slow down"}}')
        assert error.kind == ErrorKind.RATE_LIMITED

    def test_takes_precedence_over_validation_shape(self):
        body = json.dumps({
            "error": {"code": "CONFLICT", "message": "Exists"},
            "message": "Validation",
            "errors": {"name": ["taken"]},
        })
        error = raises(409, JSON, body)
        assert error.code == "CONFLICT"


class TestValidationError:
    """Tests for {"message", "errors"} bodies."""

    def test_validation(self):
        body = json.dumps({
            "message": "The given data was invalid.",
            "errors": {"email": ["The email field is required."]},
        })
        error = raises(422, JSON, body)
        assert error.code == "VALIDATION_ERROR"
        assert error.message == "The given data was invalid."
        assert error.details == {"email": ["The email field is required."]}
        assert error.kind == ErrorKind.VALIDATION

    def test_empty_errors_still_validation(self):
        error = raises(422, JSON, '{"message": "Nope", "errors": {}}')
        assert error.code == "VALIDATION_ERROR"
        assert error.message == "Nope"
        assert error.details == {}

    def test_null_errors_falls_through(self):
        error = raises(422, JSON, '{"message": "Nope", "errors": null}')
        assert error.code == "HTTP_422"
        assert error.message == "Nope"


class TestOAuthError:
    """Tests for {"error": "...", "error_description": "..."} bodies."""

    def test_with_description(self):
        body = '{"error": "invalid_grant", "error_description": "Code expired"}'
        error = raises(400, JSON, body)
        assert error.code == "invalid_grant"
        assert error.message == "Code expired"
        assert error.kind == ErrorKind.PROTOCOL

    def test_without_description(self):
        error = raises(400, JSON, '{"error": "authorization_pending"}')
        assert error.code == "authorization_pending"
        assert error.message == "authorization_pending"
        assert error.kind == ErrorKind.PROTOCOL


class TestFallbackError:
    """Tests for unrecognised and non-JSON bodies."""

    def test_generic_json_with_message(self):
        error = raises(500, JSON, '{"message": "Server Error"}')
        assert error.code == "HTTP_500"
        assert error.message == "Server Error"
        assert error.kind == ErrorKind.SERVER

    def test_generic_json_without_message(self):
        error = raises(502, JSON, '{"unexpected": true}', "Bad Gateway")
        assert error.message == "Bad Gateway"

    def test_plain_text(self):
        error = raises(503, "text/plain", "Service Unavailable")
        assert error.code == "HTTP_503"
        assert error.message == "Service Unavailable"

    def test_empty_text_uses_status_text(self):
        error = raises(500, "text/plain", "", "Internal Server Error")
        assert error.message == "Internal Server Error"

    def test_invalid_json_error_body_treated_as_text(self):
        error = raises(500, JSON, "<html>oops</html>")
        assert error.code == "HTTP_500"
        assert error.message == "<html>oops</html>"

    def test_empty_json_error_body(self):
        error = raises(401, JSON, "", "Unauthorized")
        assert error.message == "Unauthorized"
        assert error.code == "HTTP_401"

    def test_json_array_error_body_uses_status_text(self):
        error = raises(400, JSON, "[1, 2]")
        assert error.message == "Bad Request"
        assert error.code == "HTTP_400"

    @pytest.mark.parametrize("body", ["[1, 2]", '"x"', "123", "null"])
    def test_non_object_json_error_body_uses_reason(self, body: str):
        error = raises(500, JSON, body, "Internal Server Error")
        assert error.message == "Internal Server Error"
        assert error.code == "HTTP_500"
        assert error.status == 500


class TestHelpers:
    """Tests for translation helpers."""

    def test_is_json_content_type(self):
        assert is_json_content_type("application/json")
        assert is_json_content_type("Application/JSON; charset=utf-8")
        assert not is_json_content_type("text/plain")
        assert not is_json_content_type(None)

    def test_status_text(self):
        assert status_text(404, "Custom") == "Custom"
        assert status_text(404) == "Not Found"
        assert status_text(599) == "HTTP 599"

    def test_build_error_returns_instead_of_raising(self):
        error = build_error(500, "text/plain", "down")
        assert isinstance(error, YorAuthError)
        assert error.message == "down"


# =============================================================================
# Property-Based Tests
# =============================================================================

error_statuses = st.integers(min_value=300, max_value=599)
json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(),
    lambda children: st.lists(children, max_size=3)
    | st.dictionaries(st.text(max_size=5), children, max_size=3),
    max_leaves=10,
)


class TestTranslatorProperties:
    """Property-based tests for the response translator."""

    @given(status=error_statuses, body=st.text())
    def test_non_2xx_text_always_raises_with_status(self, status: int, body: str):
        with pytest.raises(YorAuthError) as exc_info:
            translate_response(status, "text/plain", body)
        assert exc_info.value.status == status
        assert exc_info.value.code == f"HTTP_{status}"

    @given(status=error_statuses, payload=json_values)
    def test_non_2xx_json_always_raises_with_status(self, status: int, payload):
        with pytest.raises(YorAuthError) as exc_info:
            translate_response(status, JSON, json.dumps(payload))
        assert exc_info.value.status == status

    @given(
        status=st.integers(min_value=200, max_value=299).filter(lambda s: s != 204),
        payload=json_values,
    )
    def test_2xx_json_returns_decoded_body(self, status: int, payload):
        assert translate_response(status, JSON, json.dumps(payload)) == payload

    @given(
        params=st.dictionaries(
            st.text(alphabet="abcdefghij_", min_size=1, max_size=8),
            st.none() | st.booleans() | st.integers(min_value=0, max_value=1000)
            | st.text(alphabet="abc xyz-", max_size=8),
            max_size=6,
        )
    )
    def test_query_skips_none_and_renders_booleans(self, params):
        url = merge_query("https://api.yorauth.dev/roles", params)
        query = httpx.URL(url).params

        expected = {key: value for key, value in params.items() if value is not None}
        assert set(query.keys()) == set(expected.keys())
        for key, value in expected.items():
            if isinstance(value, bool):
                assert query[key] == ("true" if value else "false")
            else:
                assert query[key] == str(value)
