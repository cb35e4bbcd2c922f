"""
YorAuth SDK Type Definitions

Configuration, the credential provider interface used by the transport, and
the typed models returned by resource methods.
"""

import os
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Protocol,
    TypeVar,
    Union,
    runtime_checkable,
)


T = TypeVar("T")


def drop_none(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``values`` without None entries."""
    return {key: value for key, value in values.items() if value is not None}


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class YorAuthConfig:
    """SDK configuration options."""

    # Application UUID that scopes all API requests
    application_id: str
    # Base URL of the YorAuth API (required, there is no default)
    base_url: str
    # JWT bearer token for authenticated requests
    token: Optional[str] = None
    # API key for server-to-server authentication (server-side only)
    api_key: Optional[str] = None
    # Refresh token used to recover from expired access tokens
    refresh_token: Optional[str] = None
    # Request timeout in seconds (default: 30)
    timeout: float = 30.0
    # Custom headers to include in every request
    headers: Optional[Dict[str, str]] = None
    # Enable debug logging (default: False)
    debug: bool = False
    # Allow API keys inside a browser Python runtime such as Pyodide
    dangerously_allow_browser: bool = False

    @classmethod
    def from_env(cls, **overrides: Any) -> "YorAuthConfig":
        """Build a configuration from ``YORAUTH_*`` environment variables."""
        values: Dict[str, Any] = drop_none({
            "application_id": os.environ.get("YORAUTH_APPLICATION_ID"),
            "base_url": os.environ.get("YORAUTH_BASE_URL"),
            "token": os.environ.get("YORAUTH_TOKEN"),
            "api_key": os.environ.get("YORAUTH_API_KEY"),
            "refresh_token": os.environ.get("YORAUTH_REFRESH_TOKEN"),
        })
        timeout = os.environ.get("YORAUTH_TIMEOUT")
        if timeout:
            values["timeout"] = float(timeout)
        values.update(overrides)
        values.setdefault("application_id", "")
        values.setdefault("base_url", "")
        return cls(**values)


# =============================================================================
# Credentials
# =============================================================================

@dataclass
class TokenRefreshResult:
    """New credentials produced by an automatic token refresh."""

    access_token: str
    refresh_token: str
    expires_in: int
    user: Optional["AppUser"] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenRefreshResult":
        user_data = data.get("user")
        return cls(
            access_token=data["access_token"],
            refresh_token=data["refresh_token"],
            expires_in=data.get("expires_in", 0),
            user=AppUser.from_dict(user_data) if user_data else None,
        )


TokenRefreshCallback = Callable[[TokenRefreshResult], None]


@runtime_checkable
class CredentialProvider(Protocol):
    """Source of credentials for the HTTP transport.

    Values are read each time a request is built, so they may change between
    calls. ``on_refresh_success`` is invoked once per successful refresh,
    before any request is retried.
    """

    def get_token(self) -> Optional[str]:
        """Get the current bearer token."""
        ...

    def get_api_key(self) -> Optional[str]:
        """Get the current API key."""
        ...

    def get_refresh_token(self) -> Optional[str]:
        """Get the current refresh token."""
        ...

    def on_refresh_success(self, result: TokenRefreshResult) -> None:
        """Store the credentials produced by a refresh."""
        ...


# =============================================================================
# Common
# =============================================================================

@dataclass
class MessageResponse:
    """Simple confirmation message."""
    message: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MessageResponse":
        return cls(message=data.get("message", ""))


@dataclass
class PaginationMeta:
    """Pagination metadata of a list response."""
    current_page: int
    last_page: int
    per_page: int
    total: int
    from_: Optional[int] = None
    to: Optional[int] = None
    path: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaginationMeta":
        return cls(
            current_page=data.get("current_page", 1),
            last_page=data.get("last_page", 1),
            per_page=data.get("per_page", 0),
            total=data.get("total", 0),
            from_=data.get("from"),
            to=data.get("to"),
            path=data.get("path", ""),
        )


@dataclass
class PaginatedResponse(Generic[T]):
    """Paginated list envelope."""
    data: List[T]
    meta: PaginationMeta
    links: Dict[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], item: Callable[[Dict[str, Any]], T]
    ) -> "PaginatedResponse[T]":
        return cls(
            data=[item(entry) for entry in data.get("data", [])],
            meta=PaginationMeta.from_dict(data.get("meta", {})),
            links=data.get("links", {}),
        )


# =============================================================================
# Users & Auth
# =============================================================================

@dataclass
class AppUser:
    """An end-user of a YorAuth application."""

    id: str
    email: str
    name: str
    avatar_url: Optional[str] = None
    email_verified_at: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppUser":
        return cls(
            id=data["id"],
            email=data.get("email", ""),
            name=data.get("name", ""),
            avatar_url=data.get("avatar_url"),
            email_verified_at=data.get("email_verified_at"),
            metadata=data.get("metadata"),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
        )


@dataclass
class AuthResponse:
    """Tokens and user data returned by a successful authentication."""

    access_token: str
    refresh_token: str
    expires_in: int
    user: Optional[AppUser] = None
    token_type: str = "Bearer"
    # Only set by magic link verification
    redirect_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthResponse":
        user_data = data.get("user")
        return cls(
            access_token=data.get("access_token", ""),
            refresh_token=data.get("refresh_token", ""),
            expires_in=data.get("expires_in", 0),
            user=AppUser.from_dict(user_data) if user_data else None,
            token_type=data.get("token_type", "Bearer"),
            redirect_url=data.get("redirect_url"),
        )


@dataclass
class MfaChallengeMethod:
    """MFA method offered during a login challenge."""
    id: str
    type: str
    label: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MfaChallengeMethod":
        return cls(id=data["id"], type=data.get("type", ""), label=data.get("label"))


@dataclass
class MfaChallengeResponse:
    """Returned instead of tokens when the user must complete MFA."""

    challenge_token: str
    mfa_methods: List[MfaChallengeMethod] = field(default_factory=list)
    mfa_required: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MfaChallengeResponse":
        return cls(
            challenge_token=data.get("challenge_token", ""),
            mfa_methods=[MfaChallengeMethod.from_dict(m) for m in data.get("mfa_methods", [])],
            mfa_required=True,
        )


LoginResult = Union[AuthResponse, MfaChallengeResponse]


def parse_login_result(data: Dict[str, Any]) -> LoginResult:
    """Parse a login response that may be an MFA challenge."""
    if data.get("mfa_required"):
        return MfaChallengeResponse.from_dict(data)
    return AuthResponse.from_dict(data)


@dataclass
class RegisterData:
    """User registration data."""

    email: str
    password: str
    name: str
    password_confirmation: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API requests."""
        return drop_none({
            "email": self.email,
            "password": self.password,
            "password_confirmation": self.password_confirmation,
            "name": self.name,
            "metadata": self.metadata,
        })


@dataclass
class RegisterResponse:
    """Registration result."""
    user: AppUser
    message: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegisterResponse":
        return cls(user=AppUser.from_dict(data["data"]), message=data.get("message", ""))


@dataclass
class LoginData:
    """User login credentials."""

    email: str
    password: str
    remember_me: Optional[bool] = None
    # CAPTCHA token, required when CAPTCHA is enabled for the application
    captcha_token: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API requests."""
        return drop_none({
            "email": self.email,
            "password": self.password,
            "remember_me": self.remember_me,
            "captcha_token": self.captcha_token,
        })


@dataclass
class ResetPasswordData:
    """Password reset confirmation data."""

    token: str
    email: str
    password: str
    password_confirmation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token": self.token,
            "email": self.email,
            "password": self.password,
            "password_confirmation": self.password_confirmation,
        }


@dataclass
class MfaVerifyData:
    """MFA challenge verification data."""

    challenge_token: str
    code: str

    def to_dict(self) -> Dict[str, Any]:
        return {"challenge_token": self.challenge_token, "code": self.code}


@dataclass
class UpdateProfileData:
    """Profile update data. Fields left as None are not sent."""

    name: Optional[str] = None
    avatar_url: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API requests."""
        return drop_none({
            "name": self.name,
            "avatar_url": self.avatar_url,
            "metadata": self.metadata,
        })


@dataclass
class ChangePasswordData:
    """Password change data."""

    current_password: str
    new_password: str
    new_password_confirmation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_password": self.current_password,
            "new_password": self.new_password,
            "new_password_confirmation": self.new_password_confirmation,
        }


# =============================================================================
# Roles & Permissions
# =============================================================================

@dataclass
class Permission:
    """A permission that can be granted to roles."""
    id: str
    name: str
    resource: Optional[str] = None
    action: Optional[str] = None
    description: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Permission":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            resource=data.get("resource"),
            action=data.get("action"),
            description=data.get("description"),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
        )


@dataclass
class Role:
    """A role within the application's RBAC system."""

    id: str
    name: str
    application_id: str = ""
    display_name: Optional[str] = None
    description: Optional[str] = None
    is_system_role: bool = False
    permissions_count: Optional[int] = None
    users_count: Optional[int] = None
    permissions: List[Permission] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Role":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            application_id=data.get("application_id", ""),
            display_name=data.get("display_name"),
            description=data.get("description"),
            is_system_role=data.get("is_system_role", False),
            permissions_count=data.get("permissions_count"),
            users_count=data.get("users_count"),
            permissions=[Permission.from_dict(p) for p in data.get("permissions") or []],
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
        )


@dataclass
class UserRoleAssignment:
    """A role assigned to a user."""
    id: str
    user_id: str
    role_id: str
    scope: Optional[str] = None
    expires_at: Optional[str] = None
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserRoleAssignment":
        return cls(
            id=data["id"],
            user_id=data.get("user_id", ""),
            role_id=data.get("role_id", ""),
            scope=data.get("scope"),
            expires_at=data.get("expires_at"),
            created_at=data.get("created_at", ""),
        )


@dataclass
class PermissionCheckResult:
    """Result of a single permission check."""
    allowed: bool
    permission: str
    cached: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PermissionCheckResult":
        return cls(
            allowed=data.get("allowed", False),
            permission=data.get("permission", ""),
            cached=data.get("cached", False),
        )


@dataclass
class BulkPermissionCheckResult:
    """Result of a bulk permission check."""
    user_id: str
    results: Dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BulkPermissionCheckResult":
        return cls(user_id=data.get("user_id", ""), results=data.get("results", {}))


@dataclass
class ComputedPermissions:
    """Permissions aggregated from all of a user's roles."""
    user_id: str
    scope: Optional[str] = None
    permissions: List[str] = field(default_factory=list)
    roles: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComputedPermissions":
        return cls(
            user_id=data.get("user_id", ""),
            scope=data.get("scope"),
            permissions=data.get("permissions", []),
            roles=data.get("roles", []),
        )


# =============================================================================
# Sessions
# =============================================================================

@dataclass
class Session:
    """An active session, backed by a refresh token."""
    id: str
    expires_at: str
    device_info: Optional[Dict[str, Any]] = None
    is_remember_me: bool = False
    last_used_at: Optional[str] = None
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        return cls(
            id=data["id"],
            expires_at=data.get("expires_at", ""),
            device_info=data.get("device_info"),
            is_remember_me=data.get("is_remember_me", False),
            last_used_at=data.get("last_used_at"),
            created_at=data.get("created_at", ""),
        )


@dataclass
class DestroyAllSessionsResult:
    revoked_count: int
    message: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DestroyAllSessionsResult":
        return cls(revoked_count=data.get("revoked_count", 0), message=data.get("message", ""))


# =============================================================================
# MFA
# =============================================================================

@dataclass
class MfaSetupResponse:
    """TOTP setup data: provisioning URI for a QR code and the raw secret."""
    method_id: str
    provisioning_uri: str
    secret: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MfaSetupResponse":
        return cls(
            method_id=data.get("method_id", ""),
            provisioning_uri=data.get("provisioning_uri", ""),
            secret=data.get("secret", ""),
        )


@dataclass
class MfaConfirmResponse:
    message: str
    backup_codes: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MfaConfirmResponse":
        return cls(message=data.get("message", ""), backup_codes=data.get("backup_codes", []))


@dataclass
class MfaMethod:
    """A configured MFA method."""
    id: str
    type: str
    label: Optional[str] = None
    is_primary: bool = False
    verified_at: Optional[str] = None
    last_used_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MfaMethod":
        return cls(
            id=data["id"],
            type=data.get("type", ""),
            label=data.get("label"),
            is_primary=data.get("is_primary", False),
            verified_at=data.get("verified_at"),
            last_used_at=data.get("last_used_at"),
        )


@dataclass
class MfaStatus:
    """MFA status for a user."""
    mfa_enabled: bool
    methods: List[MfaMethod] = field(default_factory=list)
    backup_codes_remaining: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MfaStatus":
        return cls(
            mfa_enabled=data.get("mfa_enabled", False),
            methods=[MfaMethod.from_dict(m) for m in data.get("methods", [])],
            backup_codes_remaining=data.get("backup_codes_remaining", 0),
        )


@dataclass
class MfaBackupCodesResponse:
    backup_codes: List[str]
    message: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MfaBackupCodesResponse":
        return cls(backup_codes=data.get("backup_codes", []), message=data.get("message", ""))


# =============================================================================
# OIDC
# =============================================================================

@dataclass
class OidcClient:
    """An OpenID Connect client (relying party).

    ``client_secret`` is only present in the response to ``create_client``.
    """

    id: str
    client_id: str
    name: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    redirect_uris: List[str] = field(default_factory=list)
    allowed_scopes: List[str] = field(default_factory=list)
    allowed_grant_types: List[str] = field(default_factory=list)
    is_active: bool = True
    created_at: str = ""
    updated_at: Optional[str] = None
    client_secret: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OidcClient":
        return cls(
            id=data["id"],
            client_id=data.get("client_id", ""),
            name=data.get("name", ""),
            description=data.get("description"),
            logo_url=data.get("logo_url"),
            redirect_uris=data.get("redirect_uris", []),
            allowed_scopes=data.get("allowed_scopes", []),
            allowed_grant_types=data.get("allowed_grant_types") or [],
            is_active=data.get("is_active", True),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at"),
            client_secret=data.get("client_secret"),
        )


@dataclass
class OidcAuthorizeResponse:
    code: str
    redirect_uri: str
    state: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OidcAuthorizeResponse":
        return cls(
            code=data.get("code", ""),
            redirect_uri=data.get("redirect_uri", ""),
            state=data.get("state"),
        )


@dataclass
class OidcTokenResponse:
    """Token endpoint response.

    ``id_token`` is only issued for the authorization_code grant.
    """

    access_token: str
    token_type: str
    expires_in: int
    refresh_token: Optional[str] = None
    id_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OidcTokenResponse":
        return cls(
            access_token=data.get("access_token", ""),
            token_type=data.get("token_type", "Bearer"),
            expires_in=data.get("expires_in", 0),
            refresh_token=data.get("refresh_token"),
            id_token=data.get("id_token"),
        )


@dataclass
class OidcDeviceAuthorizationResponse:
    """Device authorization response (RFC 8628)."""

    device_code: str
    user_code: str
    verification_uri: str
    expires_in: int
    interval: int
    verification_uri_complete: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OidcDeviceAuthorizationResponse":
        return cls(
            device_code=data.get("device_code", ""),
            user_code=data.get("user_code", ""),
            verification_uri=data.get("verification_uri", ""),
            expires_in=data.get("expires_in", 0),
            interval=data.get("interval", 5),
            verification_uri_complete=data.get("verification_uri_complete"),
        )


@dataclass
class OidcUserInfo:
    """Claims returned by the userinfo endpoint. ``claims`` holds all of them."""

    sub: str
    name: Optional[str] = None
    email: Optional[str] = None
    email_verified: Optional[bool] = None
    picture: Optional[str] = None
    updated_at: Optional[int] = None
    claims: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OidcUserInfo":
        return cls(
            sub=data.get("sub", ""),
            name=data.get("name"),
            email=data.get("email"),
            email_verified=data.get("email_verified"),
            picture=data.get("picture"),
            updated_at=data.get("updated_at"),
            claims=dict(data),
        )


# =============================================================================
# Webhooks
# =============================================================================

@dataclass
class WebhookConfig:
    """A webhook configuration. ``secret`` is only returned on creation."""

    id: str
    url: str
    events: List[str] = field(default_factory=list)
    is_active: bool = True
    secret: Optional[str] = None
    created_at: str = ""
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebhookConfig":
        return cls(
            id=data["id"],
            url=data.get("url", ""),
            events=data.get("events", []),
            is_active=data.get("is_active", True),
            secret=data.get("secret"),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at"),
        )


@dataclass
class WebhookDelivery:
    """A webhook delivery attempt."""
    id: str
    event: str
    response_status: Optional[int] = None
    delivered_at: Optional[str] = None
    retry_count: int = 0
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebhookDelivery":
        return cls(
            id=data["id"],
            event=data.get("event", ""),
            response_status=data.get("response_status"),
            delivered_at=data.get("delivered_at"),
            retry_count=data.get("retry_count", 0),
            created_at=data.get("created_at", ""),
        )


@dataclass
class WebhookEvent:
    """A webhook event delivered by the platform."""
    event: str
    timestamp: str
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebhookEvent":
        return cls(
            event=data.get("event", ""),
            timestamp=data.get("timestamp", ""),
            data=data.get("data") or {},
        )


# =============================================================================
# API Keys
# =============================================================================

@dataclass
class ApiKey:
    """An API key. ``key`` holds the plaintext key only on creation."""

    id: str
    key_prefix: str
    name: Optional[str] = None
    last_used_at: Optional[str] = None
    expires_at: Optional[str] = None
    revoked_at: Optional[str] = None
    is_active: bool = True
    created_at: str = ""
    key: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApiKey":
        return cls(
            id=data["id"],
            key_prefix=data.get("key_prefix", ""),
            name=data.get("name"),
            last_used_at=data.get("last_used_at"),
            expires_at=data.get("expires_at"),
            revoked_at=data.get("revoked_at"),
            is_active=data.get("is_active", True),
            created_at=data.get("created_at", ""),
            key=data.get("key"),
        )


@dataclass
class CreateApiKeyResponse:
    api_key: ApiKey
    warning: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CreateApiKeyResponse":
        return cls(api_key=ApiKey.from_dict(data["data"]), warning=data.get("warning", ""))


# =============================================================================
# Audit Logs
# =============================================================================

@dataclass
class AuditLog:
    """An authorization audit log entry."""
    id: str
    action: str
    actor_id: Optional[str] = None
    target_user_id: Optional[str] = None
    target_role_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuditLog":
        return cls(
            id=data["id"],
            action=data.get("action", ""),
            actor_id=data.get("actor_id"),
            target_user_id=data.get("target_user_id"),
            target_role_id=data.get("target_role_id"),
            metadata=data.get("metadata"),
            ip_address=data.get("ip_address"),
            created_at=data.get("created_at", ""),
        )


# =============================================================================
# Teams
# =============================================================================

@dataclass
class TeamMember:
    id: str
    user_id: str
    added_by: Optional[str] = None
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeamMember":
        return cls(
            id=data["id"],
            user_id=data.get("user_id", ""),
            added_by=data.get("added_by"),
            created_at=data.get("created_at", ""),
        )


@dataclass
class TeamRoleRef:
    id: str
    name: str
    display_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeamRoleRef":
        return cls(id=data["id"], name=data.get("name", ""), display_name=data.get("display_name"))


@dataclass
class TeamRoleAssignment:
    """A role assigned to a team."""
    id: str
    role: TeamRoleRef
    scope: Optional[str] = None
    granted_at: str = ""
    expires_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeamRoleAssignment":
        return cls(
            id=data["id"],
            role=TeamRoleRef.from_dict(data.get("role", {})),
            scope=data.get("scope"),
            granted_at=data.get("granted_at", ""),
            expires_at=data.get("expires_at"),
        )


@dataclass
class Team:
    """A team within an application."""
    id: str
    name: str
    description: Optional[str] = None
    scope: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    member_count: int = 0
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def _fields_from_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": data["id"],
            "name": data.get("name", ""),
            "description": data.get("description"),
            "scope": data.get("scope"),
            "metadata": data.get("metadata"),
            "member_count": data.get("member_count", 0),
            "created_at": data.get("created_at", ""),
            "updated_at": data.get("updated_at", ""),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        return cls(**cls._fields_from_dict(data))


@dataclass
class TeamDetail(Team):
    """A team with its members and role assignments."""
    members: List[TeamMember] = field(default_factory=list)
    roles: List[TeamRoleAssignment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeamDetail":
        return cls(
            members=[TeamMember.from_dict(m) for m in data.get("members", [])],
            roles=[TeamRoleAssignment.from_dict(r) for r in data.get("roles", [])],
            **cls._fields_from_dict(data),
        )


@dataclass
class UserTeamRole:
    role_id: str
    role_name: str
    scope: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserTeamRole":
        return cls(
            role_id=data.get("role_id", ""),
            role_name=data.get("role_name", ""),
            scope=data.get("scope"),
        )


@dataclass
class UserTeam:
    """A team the user belongs to, with the roles it grants."""
    id: str
    name: str
    description: Optional[str] = None
    scope: Optional[str] = None
    roles: List[UserTeamRole] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserTeam":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description"),
            scope=data.get("scope"),
            roles=[UserTeamRole.from_dict(r) for r in data.get("roles", [])],
        )


# =============================================================================
# Passkeys & SAML
# =============================================================================

@dataclass
class PasskeyCredential:
    """A registered passkey."""
    id: str
    credential_id: str
    name: Optional[str] = None
    last_used_at: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PasskeyCredential":
        return cls(
            id=data["id"],
            credential_id=data.get("credential_id", ""),
            name=data.get("name"),
            last_used_at=data.get("last_used_at"),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
        )


@dataclass
class SamlInitiateResponse:
    """Identity provider redirect for a SAML login."""
    redirect_url: str
    request_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SamlInitiateResponse":
        return cls(redirect_url=data.get("redirect_url", ""), request_id=data.get("request_id"))


@dataclass
class SamlConnection:
    id: str
    name: str
    idp_entity_id: str
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SamlConnection":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            idp_entity_id=data.get("idp_entity_id", ""),
            is_active=data.get("is_active", True),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
        )
