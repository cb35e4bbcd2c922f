"""Session management."""

from typing import List

from ..types import DestroyAllSessionsResult, Session
from .base import AsyncResource, Resource, parse_list, unwrap


class SessionResource(Resource):
    """Session operations for sync client."""

    def list(self, user_id: str) -> List[Session]:
        """List the user's active sessions."""
        response = self._http.request("GET", self._http.build_scoped_url(f"users/{user_id}/sessions"))
        return parse_list(response, Session.from_dict)

    def destroy_all(self, user_id: str) -> DestroyAllSessionsResult:
        """Revoke every session of the user."""
        response = self._http.request(
            "DELETE", self._http.build_scoped_url(f"users/{user_id}/sessions")
        )
        return DestroyAllSessionsResult.from_dict(unwrap(response))

    def destroy(self, user_id: str, session_id: str) -> None:
        self._http.request(
            "DELETE", self._http.build_scoped_url(f"users/{user_id}/sessions/{session_id}")
        )


class AsyncSessionResource(AsyncResource):
    """Session operations for async client."""

    async def list(self, user_id: str) -> List[Session]:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"users/{user_id}/sessions")
        )
        return parse_list(response, Session.from_dict)

    async def destroy_all(self, user_id: str) -> DestroyAllSessionsResult:
        response = await self._http.request(
            "DELETE", self._http.build_scoped_url(f"users/{user_id}/sessions")
        )
        return DestroyAllSessionsResult.from_dict(unwrap(response))

    async def destroy(self, user_id: str, session_id: str) -> None:
        await self._http.request(
            "DELETE", self._http.build_scoped_url(f"users/{user_id}/sessions/{session_id}")
        )
