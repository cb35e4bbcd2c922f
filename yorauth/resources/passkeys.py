"""
WebAuthn passkeys: passwordless login and credential management.

Option payloads are returned as plain dicts so they can be handed to a
WebAuthn implementation unchanged. Verification payloads are the serialized
browser credential (``id``, ``rawId``, ``response``, ``type``).
"""

from typing import Any, Dict, List, Mapping

from ..types import LoginResult, PasskeyCredential, parse_login_result
from .base import AsyncResource, Resource, parse_list, unwrap


class PasskeyResource(Resource):
    """Passkey operations for sync client."""

    def authenticate_options(self) -> Dict[str, Any]:
        """Get the WebAuthn request options for a passkey login."""
        response = self._http.request(
            "POST", self._http.build_scoped_url("users/passkey/authenticate/options")
        )
        return unwrap(response)

    def authenticate_verify(self, data: Mapping[str, Any]) -> LoginResult:
        """Verify a passkey assertion. May require an MFA challenge."""
        response = self._http.request(
            "POST",
            self._http.build_scoped_url("users/passkey/authenticate/verify"),
            body=dict(data),
        )
        return parse_login_result(unwrap(response))

    def register_options(self, user_id: str) -> Dict[str, Any]:
        response = self._http.request(
            "POST", self._http.build_scoped_url(f"users/{user_id}/passkeys/register/options")
        )
        return unwrap(response)

    def register_verify(self, user_id: str, data: Mapping[str, Any]) -> PasskeyCredential:
        response = self._http.request(
            "POST",
            self._http.build_scoped_url(f"users/{user_id}/passkeys/register/verify"),
            body=dict(data),
        )
        return PasskeyCredential.from_dict(unwrap(response))

    def list(self, user_id: str) -> List[PasskeyCredential]:
        response = self._http.request("GET", self._http.build_scoped_url(f"users/{user_id}/passkeys"))
        return parse_list(response, PasskeyCredential.from_dict)

    def update(self, user_id: str, credential_id: str, name: str) -> PasskeyCredential:
        """Rename a passkey."""
        response = self._http.request(
            "PUT",
            self._http.build_scoped_url(f"users/{user_id}/passkeys/{credential_id}"),
            body={"name": name},
        )
        return PasskeyCredential.from_dict(unwrap(response))

    def delete(self, user_id: str, credential_id: str) -> None:
        self._http.request(
            "DELETE", self._http.build_scoped_url(f"users/{user_id}/passkeys/{credential_id}")
        )


class AsyncPasskeyResource(AsyncResource):
    """Passkey operations for async client."""

    async def authenticate_options(self) -> Dict[str, Any]:
        response = await self._http.request(
            "POST", self._http.build_scoped_url("users/passkey/authenticate/options")
        )
        return unwrap(response)

    async def authenticate_verify(self, data: Mapping[str, Any]) -> LoginResult:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url("users/passkey/authenticate/verify"),
            body=dict(data),
        )
        return parse_login_result(unwrap(response))

    async def register_options(self, user_id: str) -> Dict[str, Any]:
        response = await self._http.request(
            "POST", self._http.build_scoped_url(f"users/{user_id}/passkeys/register/options")
        )
        return unwrap(response)

    async def register_verify(self, user_id: str, data: Mapping[str, Any]) -> PasskeyCredential:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url(f"users/{user_id}/passkeys/register/verify"),
            body=dict(data),
        )
        return PasskeyCredential.from_dict(unwrap(response))

    async def list(self, user_id: str) -> List[PasskeyCredential]:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"users/{user_id}/passkeys")
        )
        return parse_list(response, PasskeyCredential.from_dict)

    async def update(self, user_id: str, credential_id: str, name: str) -> PasskeyCredential:
        response = await self._http.request(
            "PUT",
            self._http.build_scoped_url(f"users/{user_id}/passkeys/{credential_id}"),
            body={"name": name},
        )
        return PasskeyCredential.from_dict(unwrap(response))

    async def delete(self, user_id: str, credential_id: str) -> None:
        await self._http.request(
            "DELETE", self._http.build_scoped_url(f"users/{user_id}/passkeys/{credential_id}")
        )
