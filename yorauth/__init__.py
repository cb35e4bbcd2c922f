"""
YorAuth Python SDK

A Python SDK for the YorAuth authentication and authorization platform with
sync and async clients and automatic recovery from expired access tokens.
"""

from .client import AsyncYorAuth, YorAuth, create_async_client, create_client
from .credentials import MemoryCredentials
from .errors import (
    ConfigurationError,
    ErrorKind,
    OperationError,
    YorAuthError,
    is_yorauth_error,
)
from .http import AsyncHttpClient, HttpClient, RequestDescriptor
from .types import (
    AppUser,
    AuthResponse,
    ChangePasswordData,
    CredentialProvider,
    LoginData,
    MfaChallengeResponse,
    MfaVerifyData,
    PaginatedResponse,
    RegisterData,
    ResetPasswordData,
    TokenRefreshResult,
    UpdateProfileData,
    WebhookEvent,
    YorAuthConfig,
)
from .webhooks import SIGNATURE_HEADER, compute_signature, construct_event, verify_signature

__version__ = "1.0.0"
__all__ = [
    # Clients
    "YorAuth",
    "AsyncYorAuth",
    "create_client",
    "create_async_client",
    # Transport
    "HttpClient",
    "AsyncHttpClient",
    "RequestDescriptor",
    # Credentials
    "CredentialProvider",
    "MemoryCredentials",
    "TokenRefreshResult",
    # Types
    "YorAuthConfig",
    "AppUser",
    "AuthResponse",
    "MfaChallengeResponse",
    "PaginatedResponse",
    "RegisterData",
    "LoginData",
    "ResetPasswordData",
    "MfaVerifyData",
    "UpdateProfileData",
    "ChangePasswordData",
    "WebhookEvent",
    # Errors
    "YorAuthError",
    "ErrorKind",
    "OperationError",
    "ConfigurationError",
    "is_yorauth_error",
    # Webhooks
    "SIGNATURE_HEADER",
    "compute_signature",
    "construct_event",
    "verify_signature",
]
