"""Resource facades exposed as attributes of the YorAuth clients."""

from .api_keys import ApiKeyResource, AsyncApiKeyResource
from .audit_logs import AsyncAuditLogResource, AuditLogResource
from .auth import AsyncAuthResource, AuthResource
from .mfa import AsyncMfaResource, MfaResource
from .oidc import AsyncOidcResource, OidcResource
from .passkeys import AsyncPasskeyResource, PasskeyResource
from .permissions import AsyncPermissionsResource, PermissionsResource
from .roles import AsyncRoleResource, RoleResource
from .saml import AsyncSamlResource, SamlResource
from .sessions import AsyncSessionResource, SessionResource
from .teams import AsyncTeamResource, TeamResource
from .user_attributes import AsyncUserAttributeResource, UserAttributeResource
from .users import AsyncUserResource, UserResource
from .webhooks import AsyncWebhookResource, WebhookResource

__all__ = [
    "ApiKeyResource",
    "AsyncApiKeyResource",
    "AuditLogResource",
    "AsyncAuditLogResource",
    "AuthResource",
    "AsyncAuthResource",
    "MfaResource",
    "AsyncMfaResource",
    "OidcResource",
    "AsyncOidcResource",
    "PasskeyResource",
    "AsyncPasskeyResource",
    "PermissionsResource",
    "AsyncPermissionsResource",
    "RoleResource",
    "AsyncRoleResource",
    "SamlResource",
    "AsyncSamlResource",
    "SessionResource",
    "AsyncSessionResource",
    "TeamResource",
    "AsyncTeamResource",
    "UserAttributeResource",
    "AsyncUserAttributeResource",
    "UserResource",
    "AsyncUserResource",
    "WebhookResource",
    "AsyncWebhookResource",
]
