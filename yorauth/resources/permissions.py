"""Permission checks."""

from typing import List

from ..types import BulkPermissionCheckResult, PermissionCheckResult
from .base import AsyncResource, Resource


class PermissionsResource(Resource):
    """Permission checks for sync client."""

    def check(self, user_id: str, permission: str) -> PermissionCheckResult:
        """
        Check whether a user holds a permission.

        Args:
            user_id: User ID
            permission: Permission name, e.g. ``posts:create``
        """
        response = self._http.request(
            "GET",
            self._http.build_scoped_url("authz/check"),
            params={"user_id": user_id, "permission": permission},
        )
        return PermissionCheckResult.from_dict(response)

    def check_bulk(self, user_id: str, permissions: List[str]) -> BulkPermissionCheckResult:
        """Check several permissions in one call."""
        response = self._http.request(
            "POST",
            self._http.build_scoped_url("authz/check-bulk"),
            body={"user_id": user_id, "permissions": permissions},
        )
        return BulkPermissionCheckResult.from_dict(response)


class AsyncPermissionsResource(AsyncResource):
    """Permission checks for async client."""

    async def check(self, user_id: str, permission: str) -> PermissionCheckResult:
        response = await self._http.request(
            "GET",
            self._http.build_scoped_url("authz/check"),
            params={"user_id": user_id, "permission": permission},
        )
        return PermissionCheckResult.from_dict(response)

    async def check_bulk(self, user_id: str, permissions: List[str]) -> BulkPermissionCheckResult:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url("authz/check-bulk"),
            body={"user_id": user_id, "permissions": permissions},
        )
        return BulkPermissionCheckResult.from_dict(response)
