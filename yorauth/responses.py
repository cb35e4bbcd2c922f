"""
YorAuth SDK Response Translation

Converts a raw HTTP response into either a decoded value or a
``YorAuthError``. The platform reports failures in three shapes:

- ``{"error": {"code": ..., "message": ..., "details": ...}}``
- ``{"message": ..., "errors": {field: [messages]}}`` (validation)
- ``{"error": "invalid_grant", "error_description": ...}`` (OIDC)
"""

import json
from typing import Any, Dict, Optional

import httpx

from .errors import ErrorKind, YorAuthError


JSON_CONTENT_TYPE = "application/json"


def is_json_content_type(content_type: Optional[str]) -> bool:
    """Check if a content type header denotes JSON."""
    return JSON_CONTENT_TYPE in (content_type or "").lower()


def status_text(status: int, reason_phrase: Optional[str] = None) -> str:
    """Return the reason phrase for ``status``."""
    if reason_phrase:
        return reason_phrase
    return httpx.codes.get_reason_phrase(status) or f"HTTP {status}"


def translate_response(
    status: int,
    content_type: Optional[str],
    body: str,
    reason_phrase: Optional[str] = None,
) -> Any:
    """
    Translate a raw response into a decoded value.

    Args:
        status: HTTP status code
        content_type: Value of the ``Content-Type`` header
        body: Raw response body text
        reason_phrase: HTTP status text, if the transport provides one

    Returns:
        The decoded JSON body, or None for 204, empty and non-JSON bodies

    Raises:
        YorAuthError: For any status outside [200, 300)
    """
    if status == 204:
        return None

    is_json = is_json_content_type(content_type)

    if 200 <= status < 300:
        if not is_json or not body.strip():
            return None
        try:
            return json.loads(body)
        except ValueError as exc:
            raise YorAuthError(
                "Response body is not valid JSON",
                "INVALID_RESPONSE",
                status,
                kind=ErrorKind.UNKNOWN,
            ) from exc

    raise build_error(status, content_type, body, reason_phrase)


def build_error(
    status: int,
    content_type: Optional[str],
    body: str,
    reason_phrase: Optional[str] = None,
) -> YorAuthError:
    """Build the ``YorAuthError`` for a non-2xx response."""
    fallback = status_text(status, reason_phrase)

    if is_json_content_type(content_type):
        payload = _load_json(body)
        if isinstance(payload, dict):
            return _error_from_payload(payload, status, fallback)
        if payload is not _UNDECODABLE:
            return YorAuthError(fallback, f"HTTP_{status}", status)

    return YorAuthError(body or fallback, f"HTTP_{status}", status)


_UNDECODABLE = object()


def _load_json(body: str) -> Any:
    # Empty and malformed bodies both map to the sentinel; ``null`` is valid JSON.
    if not body.strip():
        return _UNDECODABLE
    try:
        return json.loads(body)
    except ValueError:
        return _UNDECODABLE


def _error_from_payload(
    payload: Dict[str, Any], status: int, fallback: str
) -> YorAuthError:
    error = payload.get("error")

    if isinstance(error, dict):
        message = error.get("message")
        code = error.get("code")
        return YorAuthError(
            message if message is not None else fallback,
            code if code is not None else f"HTTP_{status}",
            status,
            details=error.get("details"),
            request_id=error.get("request_id"),
        )

    if payload.get("message") and payload.get("errors") is not None:
        return YorAuthError(
            payload["message"],
            "VALIDATION_ERROR",
            status,
            details=payload["errors"],
            kind=ErrorKind.VALIDATION,
        )

    if isinstance(error, str):
        description = payload.get("error_description")
        return YorAuthError(
            description if description is not None else error,
            error,
            status,
            kind=ErrorKind.PROTOCOL,
        )

    message = payload.get("message")
    return YorAuthError(
        message if message is not None else fallback,
        f"HTTP_{status}",
        status,
    )
