"""
YorAuth SDK Client

Main client classes for the YorAuth platform. Both clients own an in-memory
credential store and expose every API area as a resource attribute:

    client = YorAuth(YorAuthConfig(application_id="...", base_url="https://..."))
    result = client.auth.login(LoginData(email="user@example.com", password="..."))
    client.set_token(result.access_token)
    client.set_refresh_token(result.refresh_token)
    profile = client.users.get_profile(result.user.id)

When a request fails with 401 and a refresh token is set, the token is
refreshed once and the request retried. Register ``on_token_refreshed`` to
persist the rotated tokens.
"""

import logging
from typing import Any, Optional

import httpx

from .credentials import MemoryCredentials
from .http import AsyncHttpClient, HttpClient
from .resources import (
    ApiKeyResource,
    AsyncApiKeyResource,
    AsyncAuditLogResource,
    AsyncAuthResource,
    AsyncMfaResource,
    AsyncOidcResource,
    AsyncPasskeyResource,
    AsyncPermissionsResource,
    AsyncRoleResource,
    AsyncSamlResource,
    AsyncSessionResource,
    AsyncTeamResource,
    AsyncUserAttributeResource,
    AsyncUserResource,
    AsyncWebhookResource,
    AuditLogResource,
    AuthResource,
    MfaResource,
    OidcResource,
    PasskeyResource,
    PermissionsResource,
    RoleResource,
    SamlResource,
    SessionResource,
    TeamResource,
    UserAttributeResource,
    UserResource,
    WebhookResource,
)
from .types import TokenRefreshCallback, YorAuthConfig


logger = logging.getLogger("yorauth.client")


class _CredentialsMixin:
    """Credential accessors shared by both clients."""

    _credentials: MemoryCredentials
    _debug: bool

    def _log(self, message: str, *args: Any) -> None:
        """Log debug message."""
        if self._debug:
            logger.debug(f"[YorAuth] {message}", *args)

    def set_token(self, token: Optional[str]) -> None:
        """Set the bearer token used for subsequent requests. None clears it."""
        self._credentials.set_token(token)

    def get_token(self) -> Optional[str]:
        """Get the current bearer token."""
        return self._credentials.get_token()

    def set_api_key(self, api_key: Optional[str]) -> None:
        """Set the API key used when no bearer token is set."""
        self._credentials.set_api_key(api_key)

    def get_api_key(self) -> Optional[str]:
        return self._credentials.get_api_key()

    def set_refresh_token(self, refresh_token: Optional[str]) -> None:
        """Set the refresh token that enables recovery from expired tokens."""
        self._credentials.set_refresh_token(refresh_token)

    def get_refresh_token(self) -> Optional[str]:
        return self._credentials.get_refresh_token()

    def on_token_refreshed(self, callback: TokenRefreshCallback) -> None:
        """
        Register a callback invoked after each automatic token refresh.

        The callback receives the ``TokenRefreshResult``. The client has
        already stored the new tokens when it runs.
        """
        self._credentials.add_listener(callback)


class YorAuth(_CredentialsMixin):
    """
    YorAuth Client - Synchronous SDK entry point.

    Safe to share between threads.
    """

    def __init__(self, config: YorAuthConfig, http_client: Optional[httpx.Client] = None) -> None:
        """Initialize the YorAuth client."""
        self._debug = config.debug
        self._credentials = MemoryCredentials(
            token=config.token,
            api_key=config.api_key,
            refresh_token=config.refresh_token,
        )
        self._http = HttpClient(config, self._credentials, http_client=http_client)

        # Resources
        self.auth = AuthResource(self._http)
        self.users = UserResource(self._http)
        self.roles = RoleResource(self._http)
        self.permissions = PermissionsResource(self._http)
        self.sessions = SessionResource(self._http)
        self.mfa = MfaResource(self._http)
        self.oidc = OidcResource(self._http)
        self.webhooks = WebhookResource(self._http)
        self.api_keys = ApiKeyResource(self._http)
        self.teams = TeamResource(self._http)
        self.audit_logs = AuditLogResource(self._http)
        self.passkeys = PasskeyResource(self._http)
        self.saml = SamlResource(self._http)
        self.user_attributes = UserAttributeResource(self._http)

        self._log(f"YorAuth client initialized (application_id={config.application_id})")

    @property
    def application_id(self) -> str:
        return self._http.application_id

    def close(self) -> None:
        """Close the HTTP client."""
        self._http.close()

    def __enter__(self) -> "YorAuth":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


# =============================================================================
# Async Client
# =============================================================================

class AsyncYorAuth(_CredentialsMixin):
    """
    YorAuth Client - Asynchronous SDK entry point.

    Ideal for FastAPI, aiohttp, and other async frameworks. Use one instance
    per event loop.
    """

    def __init__(
        self, config: YorAuthConfig, http_client: Optional[httpx.AsyncClient] = None
    ) -> None:
        """Initialize the async YorAuth client."""
        self._debug = config.debug
        self._credentials = MemoryCredentials(
            token=config.token,
            api_key=config.api_key,
            refresh_token=config.refresh_token,
        )
        self._http = AsyncHttpClient(config, self._credentials, http_client=http_client)

        # Resources
        self.auth = AsyncAuthResource(self._http)
        self.users = AsyncUserResource(self._http)
        self.roles = AsyncRoleResource(self._http)
        self.permissions = AsyncPermissionsResource(self._http)
        self.sessions = AsyncSessionResource(self._http)
        self.mfa = AsyncMfaResource(self._http)
        self.oidc = AsyncOidcResource(self._http)
        self.webhooks = AsyncWebhookResource(self._http)
        self.api_keys = AsyncApiKeyResource(self._http)
        self.teams = AsyncTeamResource(self._http)
        self.audit_logs = AsyncAuditLogResource(self._http)
        self.passkeys = AsyncPasskeyResource(self._http)
        self.saml = AsyncSamlResource(self._http)
        self.user_attributes = AsyncUserAttributeResource(self._http)

        self._log(f"AsyncYorAuth client initialized (application_id={config.application_id})")

    @property
    def application_id(self) -> str:
        return self._http.application_id

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncYorAuth":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


# =============================================================================
# Factory Functions
# =============================================================================

def create_client(config: YorAuthConfig) -> YorAuth:
    """Create a new synchronous YorAuth client."""
    return YorAuth(config)


def create_async_client(config: YorAuthConfig) -> AsyncYorAuth:
    """Create a new asynchronous YorAuth client."""
    return AsyncYorAuth(config)
