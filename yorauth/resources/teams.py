"""Teams, team membership and team role assignments."""

from typing import Any, Dict, List, Optional

from ..types import (
    PaginatedResponse,
    Team,
    TeamDetail,
    TeamMember,
    TeamRoleAssignment,
    UserTeam,
    drop_none,
)
from .base import AsyncResource, Resource, parse_list, unwrap


class TeamResource(Resource):
    """Team operations for sync client."""

    def list(
        self,
        search: Optional[str] = None,
        per_page: Optional[int] = None,
        page: Optional[int] = None,
    ) -> PaginatedResponse[Team]:
        response = self._http.request(
            "GET",
            self._http.build_scoped_url("teams"),
            params={"search": search, "per_page": per_page, "page": page},
        )
        return PaginatedResponse.from_dict(response, Team.from_dict)

    def create(
        self,
        name: str,
        description: Optional[str] = None,
        scope: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Team:
        response = self._http.request(
            "POST",
            self._http.build_scoped_url("teams"),
            body=drop_none({
                "name": name,
                "description": description,
                "scope": scope,
                "metadata": metadata,
            }),
        )
        return Team.from_dict(unwrap(response))

    def get(self, team_id: str) -> TeamDetail:
        """Get a team with its members and roles."""
        response = self._http.request("GET", self._http.build_scoped_url(f"teams/{team_id}"))
        return TeamDetail.from_dict(unwrap(response))

    def update(
        self,
        team_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        scope: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Team:
        response = self._http.request(
            "PUT",
            self._http.build_scoped_url(f"teams/{team_id}"),
            body=drop_none({
                "name": name,
                "description": description,
                "scope": scope,
                "metadata": metadata,
            }),
        )
        return Team.from_dict(unwrap(response))

    def delete(self, team_id: str) -> None:
        self._http.request("DELETE", self._http.build_scoped_url(f"teams/{team_id}"))

    def get_members(self, team_id: str) -> List[TeamMember]:
        response = self._http.request("GET", self._http.build_scoped_url(f"teams/{team_id}/members"))
        return parse_list(response, TeamMember.from_dict)

    def add_member(self, team_id: str, user_id: str) -> TeamMember:
        response = self._http.request(
            "POST",
            self._http.build_scoped_url(f"teams/{team_id}/members"),
            body={"user_id": user_id},
        )
        return TeamMember.from_dict(unwrap(response))

    def remove_member(self, team_id: str, user_id: str) -> None:
        self._http.request(
            "DELETE", self._http.build_scoped_url(f"teams/{team_id}/members/{user_id}")
        )

    def get_team_roles(self, team_id: str) -> List[TeamRoleAssignment]:
        response = self._http.request("GET", self._http.build_scoped_url(f"teams/{team_id}/roles"))
        return parse_list(response, TeamRoleAssignment.from_dict)

    def assign_team_role(
        self,
        team_id: str,
        role_id: str,
        scope: Optional[str] = None,
        expires_at: Optional[str] = None,
    ) -> TeamRoleAssignment:
        """Assign a role to a team. Every member inherits it."""
        response = self._http.request(
            "POST",
            self._http.build_scoped_url(f"teams/{team_id}/roles"),
            body=drop_none({"role_id": role_id, "scope": scope, "expires_at": expires_at}),
        )
        return TeamRoleAssignment.from_dict(unwrap(response))

    def remove_team_role(self, team_id: str, role_id: str, scope: Optional[str] = None) -> None:
        self._http.request(
            "DELETE",
            self._http.build_scoped_url(f"teams/{team_id}/roles/{role_id}"),
            params={"scope": scope or None},
        )

    def get_user_teams(self, user_id: str) -> List[UserTeam]:
        """List the teams a user belongs to."""
        response = self._http.request("GET", self._http.build_scoped_url(f"users/{user_id}/teams"))
        return parse_list(response, UserTeam.from_dict)


class AsyncTeamResource(AsyncResource):
    """Team operations for async client."""

    async def list(
        self,
        search: Optional[str] = None,
        per_page: Optional[int] = None,
        page: Optional[int] = None,
    ) -> PaginatedResponse[Team]:
        response = await self._http.request(
            "GET",
            self._http.build_scoped_url("teams"),
            params={"search": search, "per_page": per_page, "page": page},
        )
        return PaginatedResponse.from_dict(response, Team.from_dict)

    async def create(
        self,
        name: str,
        description: Optional[str] = None,
        scope: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Team:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url("teams"),
            body=drop_none({
                "name": name,
                "description": description,
                "scope": scope,
                "metadata": metadata,
            }),
        )
        return Team.from_dict(unwrap(response))

    async def get(self, team_id: str) -> TeamDetail:
        response = await self._http.request("GET", self._http.build_scoped_url(f"teams/{team_id}"))
        return TeamDetail.from_dict(unwrap(response))

    async def update(
        self,
        team_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        scope: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Team:
        response = await self._http.request(
            "PUT",
            self._http.build_scoped_url(f"teams/{team_id}"),
            body=drop_none({
                "name": name,
                "description": description,
                "scope": scope,
                "metadata": metadata,
            }),
        )
        return Team.from_dict(unwrap(response))

    async def delete(self, team_id: str) -> None:
        await self._http.request("DELETE", self._http.build_scoped_url(f"teams/{team_id}"))

    async def get_members(self, team_id: str) -> List[TeamMember]:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"teams/{team_id}/members")
        )
        return parse_list(response, TeamMember.from_dict)

    async def add_member(self, team_id: str, user_id: str) -> TeamMember:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url(f"teams/{team_id}/members"),
            body={"user_id": user_id},
        )
        return TeamMember.from_dict(unwrap(response))

    async def remove_member(self, team_id: str, user_id: str) -> None:
        await self._http.request(
            "DELETE", self._http.build_scoped_url(f"teams/{team_id}/members/{user_id}")
        )

    async def get_team_roles(self, team_id: str) -> List[TeamRoleAssignment]:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"teams/{team_id}/roles")
        )
        return parse_list(response, TeamRoleAssignment.from_dict)

    async def assign_team_role(
        self,
        team_id: str,
        role_id: str,
        scope: Optional[str] = None,
        expires_at: Optional[str] = None,
    ) -> TeamRoleAssignment:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url(f"teams/{team_id}/roles"),
            body=drop_none({"role_id": role_id, "scope": scope, "expires_at": expires_at}),
        )
        return TeamRoleAssignment.from_dict(unwrap(response))

    async def remove_team_role(
        self, team_id: str, role_id: str, scope: Optional[str] = None
    ) -> None:
        await self._http.request(
            "DELETE",
            self._http.build_scoped_url(f"teams/{team_id}/roles/{role_id}"),
            params={"scope": scope or None},
        )

    async def get_user_teams(self, user_id: str) -> List[UserTeam]:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"users/{user_id}/teams")
        )
        return parse_list(response, UserTeam.from_dict)
