"""
YorAuth SDK Error Classes

Every request-shaped operation in the SDK either returns a decoded value or
raises a single ``YorAuthError``. Network failures and timeouts are wrapped,
never passed through raw.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


class ErrorKind(str, Enum):
    """Failure categories for ``YorAuthError``."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    NETWORK = "network"
    SERVER = "server"
    PROTOCOL = "protocol"
    UNKNOWN = "unknown"


_STATUS_KINDS = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.AUTHENTICATION,
    403: ErrorKind.AUTHORIZATION,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    422: ErrorKind.VALIDATION,
    429: ErrorKind.RATE_LIMITED,
}


def infer_error_kind(status: int, code: Optional[str] = None) -> ErrorKind:
    """Infer the error kind from the code family, then the HTTP status."""
    if isinstance(code, str):
        upper = code.upper()
        if "RATE_LIMIT" in upper or upper == "TOO_MANY_REQUESTS":
            return ErrorKind.RATE_LIMITED
        if upper == "VALIDATION_ERROR":
            return ErrorKind.VALIDATION
    if status in _STATUS_KINDS:
        return _STATUS_KINDS[status]
    if status >= 500:
        return ErrorKind.SERVER
    return ErrorKind.UNKNOWN


class YorAuthError(Exception):
    """
    Structured failure raised by every SDK operation.

    Attributes:
        message: Human-readable message
        code: Machine-readable code (e.g. ``AUTH_INVALID_CREDENTIALS``)
        status: HTTP status code, 0 for timeouts and network failures
        details: Optional mapping of field name to validation messages
        kind: ``ErrorKind`` category
        request_id: Request id reported by the API, when present
    """

    def __init__(
        self,
        message: str,
        code: str,
        status: int,
        details: Optional[Dict[str, List[str]]] = None,
        kind: Optional[ErrorKind] = None,
        request_id: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.details = details
        self.kind = kind if kind is not None else infer_error_kind(status, code)
        self.request_id = request_id

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "name": self.__class__.__name__,
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
            "status": self.status,
            "details": self.details,
            "request_id": self.request_id,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(code={self.code!r}, "
            f"status={self.status!r}, message={self.message!r})"
        )


class ConfigurationError(ValueError):
    """Raised when a client is constructed with invalid configuration."""


@runtime_checkable
class OperationError(Protocol):
    """Shape shared by structured SDK failures."""

    message: str
    code: str
    status: int
    kind: ErrorKind
    details: Optional[Dict[str, List[str]]]


def is_yorauth_error(error: Any) -> bool:
    """Check whether ``error`` is a structured SDK failure.

    The check is structural so errors re-raised by wrappers that copy the
    fields are recognised as well.
    """
    return (
        isinstance(error, BaseException)
        and isinstance(error, OperationError)
        and isinstance(error.kind, ErrorKind)
    )


def timeout_error(timeout: float) -> YorAuthError:
    """Build the error raised when a request exceeds its timeout."""
    return YorAuthError(
        f"Request timed out after {int(round(timeout * 1000))}ms",
        "REQUEST_TIMEOUT",
        0,
        kind=ErrorKind.TIMEOUT,
    )


def network_error(cause: BaseException) -> YorAuthError:
    """Build the error raised when the request never produced a response."""
    message = str(cause) or "An unknown error occurred"
    return YorAuthError(message, "NETWORK_ERROR", 0, kind=ErrorKind.NETWORK)
