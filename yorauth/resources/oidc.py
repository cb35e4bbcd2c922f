"""
OpenID Connect: client management plus the provider endpoints (discovery,
JWKS, authorize, token, device authorization, userinfo and logout).

Provider endpoints live outside the application scope. Token polling errors
such as ``authorization_pending`` or ``slow_down`` are raised as
``YorAuthError`` with kind ``PROTOCOL`` and the OAuth error as ``code``.
"""

from typing import Any, Dict, List, Mapping, Optional

from ..http import merge_query
from ..types import (
    OidcAuthorizeResponse,
    OidcClient,
    OidcDeviceAuthorizationResponse,
    OidcTokenResponse,
    OidcUserInfo,
    drop_none,
)
from .base import AsyncResource, Resource, parse_list, unwrap


DEVICE_CODE_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:device_code"


def _form(params: Mapping[str, Any]) -> Dict[str, str]:
    form = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            form[key] = "true" if value else "false"
        else:
            form[key] = str(value)
    return form


def _authorize_params(
    client_id: str,
    redirect_uri: str,
    scope: str,
    state: Optional[str],
    nonce: Optional[str],
    code_challenge: Optional[str],
    code_challenge_method: Optional[str],
) -> Dict[str, Any]:
    return {
        "response_type": "code",
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "scope": scope,
        "state": state,
        "nonce": nonce,
        "code_challenge": code_challenge,
        "code_challenge_method": code_challenge_method,
    }


class OidcResource(Resource):
    """OIDC operations for sync client."""

    # -------------------------------------------------------------------------
    # Client management
    # -------------------------------------------------------------------------

    def list_clients(self) -> List[OidcClient]:
        response = self._http.request("GET", self._http.build_scoped_url("oidc/clients"))
        return parse_list(response, OidcClient.from_dict)

    def create_client(
        self,
        name: str,
        redirect_uris: List[str],
        description: Optional[str] = None,
        logo_url: Optional[str] = None,
        allowed_scopes: Optional[List[str]] = None,
    ) -> OidcClient:
        """
        Register an OIDC client.

        The returned client carries ``client_secret``. It is shown only once.
        """
        response = self._http.request(
            "POST",
            self._http.build_scoped_url("oidc/clients"),
            body=drop_none({
                "name": name,
                "redirect_uris": redirect_uris,
                "description": description,
                "logo_url": logo_url,
                "allowed_scopes": allowed_scopes,
            }),
        )
        return OidcClient.from_dict(unwrap(response))

    def get_client(self, client_id: str) -> OidcClient:
        response = self._http.request("GET", self._http.build_scoped_url(f"oidc/clients/{client_id}"))
        return OidcClient.from_dict(unwrap(response))

    def update_client(
        self,
        client_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        logo_url: Optional[str] = None,
        redirect_uris: Optional[List[str]] = None,
        allowed_scopes: Optional[List[str]] = None,
        is_active: Optional[bool] = None,
    ) -> OidcClient:
        response = self._http.request(
            "PUT",
            self._http.build_scoped_url(f"oidc/clients/{client_id}"),
            body=drop_none({
                "name": name,
                "description": description,
                "logo_url": logo_url,
                "redirect_uris": redirect_uris,
                "allowed_scopes": allowed_scopes,
                "is_active": is_active,
            }),
        )
        return OidcClient.from_dict(unwrap(response))

    def delete_client(self, client_id: str) -> None:
        self._http.request("DELETE", self._http.build_scoped_url(f"oidc/clients/{client_id}"))

    # -------------------------------------------------------------------------
    # Provider endpoints
    # -------------------------------------------------------------------------

    def get_discovery(self) -> Dict[str, Any]:
        """Fetch the OpenID provider configuration document."""
        return self._http.request(
            "GET", self._http.build_unscoped_url("api/.well-known/openid-configuration")
        )

    def get_jwks(self) -> Dict[str, Any]:
        """Fetch the JSON Web Key Set used to sign ID tokens."""
        return self._http.request("GET", self._http.build_unscoped_url("api/.well-known/jwks.json"))

    def authorize(
        self,
        client_id: str,
        redirect_uri: str,
        scope: str,
        state: Optional[str] = None,
        nonce: Optional[str] = None,
        code_challenge: Optional[str] = None,
        code_challenge_method: Optional[str] = None,
    ) -> OidcAuthorizeResponse:
        """Request an authorization code for the authenticated user."""
        response = self._http.request(
            "GET",
            self._http.build_unscoped_url("api/oidc/authorize"),
            params=_authorize_params(
                client_id, redirect_uri, scope, state, nonce, code_challenge, code_challenge_method
            ),
        )
        return OidcAuthorizeResponse.from_dict(response)

    def exchange_token(self, params: Mapping[str, Any]) -> OidcTokenResponse:
        """
        Call the token endpoint with any supported grant.

        Args:
            params: Form fields including ``grant_type``. None values are skipped.
        """
        response = self._http.request(
            "POST", self._http.build_unscoped_url("api/oidc/token"), form=_form(params)
        )
        return OidcTokenResponse.from_dict(response)

    def client_credentials_token(
        self, client_id: str, client_secret: str, scope: Optional[str] = None
    ) -> OidcTokenResponse:
        """Obtain a machine-to-machine token."""
        return self.exchange_token({
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
            "scope": scope,
        })

    def device_code_token(self, device_code: str, client_id: str) -> OidcTokenResponse:
        """Poll the token endpoint during a device authorization flow."""
        return self.exchange_token({
            "grant_type": DEVICE_CODE_GRANT_TYPE,
            "device_code": device_code,
            "client_id": client_id,
        })

    def device_authorize(
        self, client_id: str, scope: Optional[str] = None
    ) -> OidcDeviceAuthorizationResponse:
        """Start a device authorization flow (RFC 8628)."""
        response = self._http.request(
            "POST",
            self._http.build_unscoped_url("api/oidc/device/authorize"),
            form=_form({"client_id": client_id, "scope": scope}),
        )
        return OidcDeviceAuthorizationResponse.from_dict(response)

    def get_user_info(self, scopes: Optional[str] = None) -> OidcUserInfo:
        response = self._http.request(
            "GET",
            self._http.build_unscoped_url("api/oidc/userinfo"),
            params={"scopes": scopes or None},
        )
        return OidcUserInfo.from_dict(response)

    def build_logout_url(
        self,
        id_token_hint: Optional[str] = None,
        post_logout_redirect_uri: Optional[str] = None,
    ) -> str:
        """Build the RP-initiated logout URL. Makes no request."""
        return merge_query(
            self._http.build_unscoped_url("api/oidc/logout"),
            {
                "id_token_hint": id_token_hint or None,
                "post_logout_redirect_uri": post_logout_redirect_uri or None,
            },
        )


class AsyncOidcResource(AsyncResource):
    """OIDC operations for async client."""

    async def list_clients(self) -> List[OidcClient]:
        response = await self._http.request("GET", self._http.build_scoped_url("oidc/clients"))
        return parse_list(response, OidcClient.from_dict)

    async def create_client(
        self,
        name: str,
        redirect_uris: List[str],
        description: Optional[str] = None,
        logo_url: Optional[str] = None,
        allowed_scopes: Optional[List[str]] = None,
    ) -> OidcClient:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url("oidc/clients"),
            body=drop_none({
                "name": name,
                "redirect_uris": redirect_uris,
                "description": description,
                "logo_url": logo_url,
                "allowed_scopes": allowed_scopes,
            }),
        )
        return OidcClient.from_dict(unwrap(response))

    async def get_client(self, client_id: str) -> OidcClient:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"oidc/clients/{client_id}")
        )
        return OidcClient.from_dict(unwrap(response))

    async def update_client(
        self,
        client_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        logo_url: Optional[str] = None,
        redirect_uris: Optional[List[str]] = None,
        allowed_scopes: Optional[List[str]] = None,
        is_active: Optional[bool] = None,
    ) -> OidcClient:
        response = await self._http.request(
            "PUT",
            self._http.build_scoped_url(f"oidc/clients/{client_id}"),
            body=drop_none({
                "name": name,
                "description": description,
                "logo_url": logo_url,
                "redirect_uris": redirect_uris,
                "allowed_scopes": allowed_scopes,
                "is_active": is_active,
            }),
        )
        return OidcClient.from_dict(unwrap(response))

    async def delete_client(self, client_id: str) -> None:
        await self._http.request("DELETE", self._http.build_scoped_url(f"oidc/clients/{client_id}"))

    async def get_discovery(self) -> Dict[str, Any]:
        return await self._http.request(
            "GET", self._http.build_unscoped_url("api/.well-known/openid-configuration")
        )

    async def get_jwks(self) -> Dict[str, Any]:
        return await self._http.request(
            "GET", self._http.build_unscoped_url("api/.well-known/jwks.json")
        )

    async def authorize(
        self,
        client_id: str,
        redirect_uri: str,
        scope: str,
        state: Optional[str] = None,
        nonce: Optional[str] = None,
        code_challenge: Optional[str] = None,
        code_challenge_method: Optional[str] = None,
    ) -> OidcAuthorizeResponse:
        response = await self._http.request(
            "GET",
            self._http.build_unscoped_url("api/oidc/authorize"),
            params=_authorize_params(
                client_id, redirect_uri, scope, state, nonce, code_challenge, code_challenge_method
            ),
        )
        return OidcAuthorizeResponse.from_dict(response)

    async def exchange_token(self, params: Mapping[str, Any]) -> OidcTokenResponse:
        response = await self._http.request(
            "POST", self._http.build_unscoped_url("api/oidc/token"), form=_form(params)
        )
        return OidcTokenResponse.from_dict(response)

    async def client_credentials_token(
        self, client_id: str, client_secret: str, scope: Optional[str] = None
    ) -> OidcTokenResponse:
        return await self.exchange_token({
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
            "scope": scope,
        })

    async def device_code_token(self, device_code: str, client_id: str) -> OidcTokenResponse:
        return await self.exchange_token({
            "grant_type": DEVICE_CODE_GRANT_TYPE,
            "device_code": device_code,
            "client_id": client_id,
        })

    async def device_authorize(
        self, client_id: str, scope: Optional[str] = None
    ) -> OidcDeviceAuthorizationResponse:
        response = await self._http.request(
            "POST",
            self._http.build_unscoped_url("api/oidc/device/authorize"),
            form=_form({"client_id": client_id, "scope": scope}),
        )
        return OidcDeviceAuthorizationResponse.from_dict(response)

    async def get_user_info(self, scopes: Optional[str] = None) -> OidcUserInfo:
        response = await self._http.request(
            "GET",
            self._http.build_unscoped_url("api/oidc/userinfo"),
            params={"scopes": scopes or None},
        )
        return OidcUserInfo.from_dict(response)

    def build_logout_url(
        self,
        id_token_hint: Optional[str] = None,
        post_logout_redirect_uri: Optional[str] = None,
    ) -> str:
        """Build the RP-initiated logout URL. Makes no request."""
        return merge_query(
            self._http.build_unscoped_url("api/oidc/logout"),
            {
                "id_token_hint": id_token_hint or None,
                "post_logout_redirect_uri": post_logout_redirect_uri or None,
            },
        )
