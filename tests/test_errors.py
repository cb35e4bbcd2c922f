"""
Tests for YorAuth SDK error model.
"""

import pytest

from yorauth.errors import (
    ConfigurationError,
    ErrorKind,
    YorAuthError,
    infer_error_kind,
    is_yorauth_error,
    network_error,
    timeout_error,
)


class TestYorAuthError:
    """Tests for YorAuthError."""

    def test_fields(self):
        error = YorAuthError(
            "Validation failed",
            "VALIDATION_ERROR",
            422,
            details={"email": ["The email field is required."]},
        )
        assert error.message == "Validation failed"
        assert error.code == "VALIDATION_ERROR"
        assert error.status == 422
        assert error.details == {"email": ["The email field is required."]}
        assert error.kind == ErrorKind.VALIDATION
        assert str(error) == "Validation failed"

    def test_details_default_to_none(self):
        error = YorAuthError("Not found", "HTTP_404", 404)
        assert error.details is None
        assert error.request_id is None

    def test_explicit_kind_wins(self):
        error = YorAuthError("invalid_grant", "invalid_grant", 400, kind=ErrorKind.PROTOCOL)
        assert error.kind == ErrorKind.PROTOCOL

    def test_to_dict(self):
        error = YorAuthError("Forbidden", "FORBIDDEN", 403, request_id="req_1")
        assert error.to_dict() == {
            "name": "YorAuthError",
            "kind": "authorization",
            "code": "FORBIDDEN",
            "message": "Forbidden",
            "status": 403,
            "details": None,
            "request_id": "req_1",
        }

    def test_repr(self):
        error = YorAuthError("Gone", "HTTP_410", 410)
        assert repr(error) == "YorAuthError(code='HTTP_410', status=410, message='Gone')"

    def test_is_exception(self):
        with pytest.raises(YorAuthError):
            raise YorAuthError("boom", "HTTP_500", 500)


class TestErrorKindInference:
    """Tests for error kind inference."""

    @pytest.mark.parametrize(
        "status,kind",
        [
            (400, ErrorKind.VALIDATION),
            (401, ErrorKind.AUTHENTICATION),
            (403, ErrorKind.AUTHORIZATION),
            (404, ErrorKind.NOT_FOUND),
            (409, ErrorKind.CONFLICT),
            (422, ErrorKind.VALIDATION),
            (429, ErrorKind.RATE_LIMITED),
            (500, ErrorKind.SERVER),
            (503, ErrorKind.SERVER),
            (418, ErrorKind.UNKNOWN),
            (0, ErrorKind.UNKNOWN),
        ],
    )
    def test_by_status(self, status: int, kind: ErrorKind):
        assert infer_error_kind(status) == kind

    def test_rate_limit_code_overrides_status(self):
        assert infer_error_kind(400, "RATE_LIMIT_EXCEEDED") == ErrorKind.RATE_LIMITED
        assert infer_error_kind(403, "TOO_MANY_REQUESTS") == ErrorKind.RATE_LIMITED

    def test_validation_code_overrides_status(self):
        assert infer_error_kind(400, "VALIDATION_ERROR") == ErrorKind.VALIDATION
        assert infer_error_kind(409, "VALIDATION_ERROR") == ErrorKind.VALIDATION

    def test_other_codes_fall_back_to_status(self):
        assert infer_error_kind(401, "TOKEN_EXPIRED") == ErrorKind.AUTHENTICATION


class TestTransportErrors:
    """Tests for timeout and network error constructors."""

    def test_timeout_error(self):
        error = timeout_error(30.0)
        assert error.message == "Request timed out after 30000ms"
        assert error.code == "REQUEST_TIMEOUT"
        assert error.status == 0
        assert error.kind == ErrorKind.TIMEOUT

    def test_timeout_error_fractional(self):
        assert timeout_error(0.1).message == "Request timed out after 100ms"

    def test_network_error(self):
        error = network_error(ConnectionError("Connection refused"))
        assert error.message == "Connection refused"
        assert error.code == "NETWORK_ERROR"
        assert error.status == 0
        assert error.kind == ErrorKind.NETWORK

    def test_network_error_without_message(self):
        error = network_error(OSError())
        assert error.message == "An unknown error occurred"


class TestIsYorAuthError:
    """Tests for the structural error check."""

    def test_yorauth_error(self):
        assert is_yorauth_error(YorAuthError("x", "HTTP_500", 500))

    def test_plain_exception(self):
        assert not is_yorauth_error(ValueError("x"))

    def test_non_exception(self):
        assert not is_yorauth_error({"message": "x", "code": "y", "status": 1})
        assert not is_yorauth_error(None)

    def test_wrapper_with_same_capabilities(self):
        class WrappedError(Exception):
            def __init__(self) -> None:
                super().__init__("wrapped")
                self.message = "wrapped"
                self.code = "HTTP_502"
                self.status = 502
                self.kind = ErrorKind.SERVER
                self.details = None

        assert is_yorauth_error(WrappedError())

    def test_configuration_error_is_not_operation_error(self):
        error = ConfigurationError("application_id is required")
        assert isinstance(error, ValueError)
        assert not is_yorauth_error(error)
