"""
Webhook Signature Verification for the YorAuth Python SDK

YorAuth signs every webhook delivery with HMAC-SHA256 over the raw request
body, using the secret returned when the webhook was created. The signature
is sent in the ``X-YorAuth-Signature`` header as ``sha256=<hex digest>``.

Example:
    from yorauth.webhooks import SIGNATURE_HEADER, construct_event

    @app.post("/webhooks/yorauth")
    def handle_webhook(request):
        try:
            event = construct_event(
                request.body,  # raw body, before any JSON parsing
                request.headers.get(SIGNATURE_HEADER),
                os.environ["YORAUTH_WEBHOOK_SECRET"],
            )
        except YorAuthError as e:
            return {"error": e.message}, e.status
        ...
"""

import hashlib
import hmac
import json
from typing import Optional, Union

from .errors import ErrorKind, YorAuthError
from .types import WebhookEvent


SIGNATURE_HEADER = "X-YorAuth-Signature"
SIGNATURE_PREFIX = "sha256="


def _to_bytes(value: Union[str, bytes]) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def compute_signature(payload: Union[str, bytes], secret: str) -> str:
    """
    Compute the signature header value for a payload.

    Args:
        payload: The raw payload
        secret: The webhook secret

    Returns:
        ``sha256=`` followed by the hex-encoded HMAC-SHA256 digest
    """
    digest = hmac.new(_to_bytes(secret), _to_bytes(payload), hashlib.sha256).hexdigest()
    return SIGNATURE_PREFIX + digest


def verify_signature(
    payload: Union[str, bytes],
    signature: Optional[str],
    secret: str,
) -> bool:
    """
    Verify a webhook signature using a timing-safe comparison.

    Never raises: a missing, malformed or mismatched signature returns False.
    """
    if not signature or not secret:
        return False
    expected = compute_signature(payload, secret)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))


def construct_event(
    payload: Union[str, bytes],
    signature: Optional[str],
    secret: str,
) -> WebhookEvent:
    """
    Verify a delivery and parse it into a ``WebhookEvent``.

    Raises:
        YorAuthError: ``WEBHOOK_SIGNATURE_INVALID`` when the signature does not
            match, ``WEBHOOK_INVALID_PAYLOAD`` when the body is not a JSON object
    """
    if not verify_signature(payload, signature, secret):
        raise YorAuthError(
            "Invalid webhook signature",
            "WEBHOOK_SIGNATURE_INVALID",
            400,
            kind=ErrorKind.VALIDATION,
        )

    try:
        data = json.loads(payload)
    except ValueError as e:
        raise YorAuthError(
            "Invalid JSON in webhook payload",
            "WEBHOOK_INVALID_PAYLOAD",
            400,
            kind=ErrorKind.VALIDATION,
        ) from e

    if not isinstance(data, dict):
        raise YorAuthError(
            "Invalid JSON in webhook payload",
            "WEBHOOK_INVALID_PAYLOAD",
            400,
            kind=ErrorKind.VALIDATION,
        )

    return WebhookEvent.from_dict(data)
