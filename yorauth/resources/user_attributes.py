"""Custom user attributes (ABAC)."""

from typing import Any, Dict, Mapping
from urllib.parse import quote

from .base import AsyncResource, Resource, unwrap


def _attribute_path(user_id: str, key: str) -> str:
    return f"users/{user_id}/attributes/{quote(key, safe='')}"


class UserAttributeResource(Resource):
    """User attribute operations for sync client."""

    def get(self, user_id: str) -> Dict[str, Any]:
        response = self._http.request("GET", self._http.build_scoped_url(f"users/{user_id}/attributes"))
        return unwrap(response)

    def set(self, user_id: str, attributes: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge ``attributes`` into the user's attributes. Returns all attributes."""
        response = self._http.request(
            "PUT",
            self._http.build_scoped_url(f"users/{user_id}/attributes"),
            body={"attributes": dict(attributes)},
        )
        return unwrap(response)

    def delete(self, user_id: str, key: str) -> None:
        self._http.request("DELETE", self._http.build_scoped_url(_attribute_path(user_id, key)))


class AsyncUserAttributeResource(AsyncResource):
    """User attribute operations for async client."""

    async def get(self, user_id: str) -> Dict[str, Any]:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"users/{user_id}/attributes")
        )
        return unwrap(response)

    async def set(self, user_id: str, attributes: Mapping[str, Any]) -> Dict[str, Any]:
        response = await self._http.request(
            "PUT",
            self._http.build_scoped_url(f"users/{user_id}/attributes"),
            body={"attributes": dict(attributes)},
        )
        return unwrap(response)

    async def delete(self, user_id: str, key: str) -> None:
        await self._http.request(
            "DELETE", self._http.build_scoped_url(_attribute_path(user_id, key))
        )
