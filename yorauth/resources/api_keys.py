"""API key management."""

from typing import List, Optional

from ..types import ApiKey, CreateApiKeyResponse, drop_none
from .base import AsyncResource, Resource, parse_list, unwrap


class ApiKeyResource(Resource):
    """API key operations for sync client."""

    def list(self) -> List[ApiKey]:
        response = self._http.request("GET", self._http.build_scoped_url("api-keys"))
        return parse_list(response, ApiKey.from_dict)

    def create(self, name: Optional[str] = None, expires_at: Optional[str] = None) -> CreateApiKeyResponse:
        """
        Create an API key.

        The plaintext key is only available on ``result.api_key.key`` in this
        response. Store it securely.
        """
        response = self._http.request(
            "POST",
            self._http.build_scoped_url("api-keys"),
            body=drop_none({"name": name, "expires_at": expires_at}),
        )
        return CreateApiKeyResponse.from_dict(response)

    def get(self, api_key_id: str) -> ApiKey:
        response = self._http.request("GET", self._http.build_scoped_url(f"api-keys/{api_key_id}"))
        return ApiKey.from_dict(unwrap(response))

    def delete(self, api_key_id: str) -> None:
        """Revoke an API key."""
        self._http.request("DELETE", self._http.build_scoped_url(f"api-keys/{api_key_id}"))


class AsyncApiKeyResource(AsyncResource):
    """API key operations for async client."""

    async def list(self) -> List[ApiKey]:
        response = await self._http.request("GET", self._http.build_scoped_url("api-keys"))
        return parse_list(response, ApiKey.from_dict)

    async def create(
        self, name: Optional[str] = None, expires_at: Optional[str] = None
    ) -> CreateApiKeyResponse:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url("api-keys"),
            body=drop_none({"name": name, "expires_at": expires_at}),
        )
        return CreateApiKeyResponse.from_dict(response)

    async def get(self, api_key_id: str) -> ApiKey:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"api-keys/{api_key_id}")
        )
        return ApiKey.from_dict(unwrap(response))

    async def delete(self, api_key_id: str) -> None:
        await self._http.request("DELETE", self._http.build_scoped_url(f"api-keys/{api_key_id}"))
