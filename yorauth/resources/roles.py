"""Role management and user role assignments."""

from typing import List, Optional

from ..types import (
    ComputedPermissions,
    PaginatedResponse,
    Role,
    UserRoleAssignment,
    drop_none,
)
from .base import AsyncResource, Resource, parse_list, unwrap


class RoleResource(Resource):
    """RBAC role operations for sync client."""

    def list(
        self,
        search: Optional[str] = None,
        include_permissions: Optional[bool] = None,
        per_page: Optional[int] = None,
        page: Optional[int] = None,
    ) -> PaginatedResponse[Role]:
        """List roles, paginated."""
        response = self._http.request(
            "GET",
            self._http.build_scoped_url("roles"),
            params={
                "search": search,
                "include_permissions": include_permissions,
                "per_page": per_page,
                "page": page,
            },
        )
        return PaginatedResponse.from_dict(response, Role.from_dict)

    def create(
        self,
        name: str,
        display_name: Optional[str] = None,
        description: Optional[str] = None,
        permissions: Optional[List[str]] = None,
        is_system_role: Optional[bool] = None,
    ) -> Role:
        """
        Create a role.

        Args:
            name: Unique role name
            display_name: Human-readable name
            description: Role description
            permissions: Permission names granted by the role
            is_system_role: Protect the role from deletion
        """
        response = self._http.request(
            "POST",
            self._http.build_scoped_url("roles"),
            body=drop_none({
                "name": name,
                "display_name": display_name,
                "description": description,
                "permissions": permissions,
                "is_system_role": is_system_role,
            }),
        )
        return Role.from_dict(unwrap(response))

    def get(self, role_id: str) -> Role:
        response = self._http.request("GET", self._http.build_scoped_url(f"roles/{role_id}"))
        return Role.from_dict(unwrap(response))

    def update(
        self,
        role_id: str,
        display_name: Optional[str] = None,
        description: Optional[str] = None,
        permissions: Optional[List[str]] = None,
    ) -> Role:
        """Update a role. ``permissions`` replaces the full permission set."""
        response = self._http.request(
            "PUT",
            self._http.build_scoped_url(f"roles/{role_id}"),
            body=drop_none({
                "display_name": display_name,
                "description": description,
                "permissions": permissions,
            }),
        )
        return Role.from_dict(unwrap(response))

    def delete(self, role_id: str) -> None:
        self._http.request("DELETE", self._http.build_scoped_url(f"roles/{role_id}"))

    def get_user_roles(self, user_id: str, scope: Optional[str] = None) -> List[UserRoleAssignment]:
        response = self._http.request(
            "GET",
            self._http.build_scoped_url(f"users/{user_id}/roles"),
            params={"scope": scope},
        )
        return parse_list(response, UserRoleAssignment.from_dict)

    def assign_role(
        self,
        user_id: str,
        role_id: str,
        scope: Optional[str] = None,
        expires_at: Optional[str] = None,
    ) -> UserRoleAssignment:
        """Assign a role to a user, optionally scoped and time-limited."""
        response = self._http.request(
            "POST",
            self._http.build_scoped_url(f"users/{user_id}/roles"),
            body=drop_none({"role_id": role_id, "scope": scope, "expires_at": expires_at}),
        )
        return UserRoleAssignment.from_dict(unwrap(response))

    def remove_role(self, user_id: str, role_id: str, scope: Optional[str] = None) -> None:
        self._http.request(
            "DELETE",
            self._http.build_scoped_url(f"users/{user_id}/roles/{role_id}"),
            params={"scope": scope},
        )

    def get_user_permissions(self, user_id: str, scope: Optional[str] = None) -> ComputedPermissions:
        """Get the permissions a user holds through all of their roles."""
        response = self._http.request(
            "GET",
            self._http.build_scoped_url(f"users/{user_id}/permissions"),
            params={"scope": scope},
        )
        return ComputedPermissions.from_dict(unwrap(response))


class AsyncRoleResource(AsyncResource):
    """RBAC role operations for async client."""

    async def list(
        self,
        search: Optional[str] = None,
        include_permissions: Optional[bool] = None,
        per_page: Optional[int] = None,
        page: Optional[int] = None,
    ) -> PaginatedResponse[Role]:
        response = await self._http.request(
            "GET",
            self._http.build_scoped_url("roles"),
            params={
                "search": search,
                "include_permissions": include_permissions,
                "per_page": per_page,
                "page": page,
            },
        )
        return PaginatedResponse.from_dict(response, Role.from_dict)

    async def create(
        self,
        name: str,
        display_name: Optional[str] = None,
        description: Optional[str] = None,
        permissions: Optional[List[str]] = None,
        is_system_role: Optional[bool] = None,
    ) -> Role:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url("roles"),
            body=drop_none({
                "name": name,
                "display_name": display_name,
                "description": description,
                "permissions": permissions,
                "is_system_role": is_system_role,
            }),
        )
        return Role.from_dict(unwrap(response))

    async def get(self, role_id: str) -> Role:
        response = await self._http.request("GET", self._http.build_scoped_url(f"roles/{role_id}"))
        return Role.from_dict(unwrap(response))

    async def update(
        self,
        role_id: str,
        display_name: Optional[str] = None,
        description: Optional[str] = None,
        permissions: Optional[List[str]] = None,
    ) -> Role:
        response = await self._http.request(
            "PUT",
            self._http.build_scoped_url(f"roles/{role_id}"),
            body=drop_none({
                "display_name": display_name,
                "description": description,
                "permissions": permissions,
            }),
        )
        return Role.from_dict(unwrap(response))

    async def delete(self, role_id: str) -> None:
        await self._http.request("DELETE", self._http.build_scoped_url(f"roles/{role_id}"))

    async def get_user_roles(
        self, user_id: str, scope: Optional[str] = None
    ) -> List[UserRoleAssignment]:
        response = await self._http.request(
            "GET",
            self._http.build_scoped_url(f"users/{user_id}/roles"),
            params={"scope": scope},
        )
        return parse_list(response, UserRoleAssignment.from_dict)

    async def assign_role(
        self,
        user_id: str,
        role_id: str,
        scope: Optional[str] = None,
        expires_at: Optional[str] = None,
    ) -> UserRoleAssignment:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url(f"users/{user_id}/roles"),
            body=drop_none({"role_id": role_id, "scope": scope, "expires_at": expires_at}),
        )
        return UserRoleAssignment.from_dict(unwrap(response))

    async def remove_role(self, user_id: str, role_id: str, scope: Optional[str] = None) -> None:
        await self._http.request(
            "DELETE",
            self._http.build_scoped_url(f"users/{user_id}/roles/{role_id}"),
            params={"scope": scope},
        )

    async def get_user_permissions(
        self, user_id: str, scope: Optional[str] = None
    ) -> ComputedPermissions:
        response = await self._http.request(
            "GET",
            self._http.build_scoped_url(f"users/{user_id}/permissions"),
            params={"scope": scope},
        )
        return ComputedPermissions.from_dict(unwrap(response))
