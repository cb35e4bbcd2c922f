"""User profile endpoints."""

from typing import Any, Dict

from ..types import AppUser, ChangePasswordData, MessageResponse, UpdateProfileData
from .base import AsyncResource, Resource, unwrap


class UserResource(Resource):
    """User profile operations for sync client."""

    def get_profile(self, user_id: str) -> AppUser:
        response = self._http.request("GET", self._http.build_scoped_url(f"users/{user_id}/profile"))
        return AppUser.from_dict(unwrap(response))

    def update_profile(self, user_id: str, data: UpdateProfileData) -> AppUser:
        """Update the user's profile. Returns the updated user."""
        response = self._http.request(
            "PUT",
            self._http.build_scoped_url(f"users/{user_id}/profile"),
            body=data.to_dict(),
        )
        return AppUser.from_dict(unwrap(response))

    def change_password(self, user_id: str, data: ChangePasswordData) -> MessageResponse:
        response = self._http.request(
            "POST",
            self._http.build_scoped_url(f"users/{user_id}/change-password"),
            body=data.to_dict(),
        )
        return MessageResponse.from_dict(unwrap(response))

    def delete_account(self, user_id: str) -> None:
        """Permanently delete the user account."""
        self._http.request("DELETE", self._http.build_scoped_url(f"users/{user_id}"))

    def export_data(self, user_id: str) -> Dict[str, Any]:
        """Export all data held about the user (GDPR)."""
        response = self._http.request(
            "GET", self._http.build_scoped_url(f"users/{user_id}/data-export")
        )
        return unwrap(response)


class AsyncUserResource(AsyncResource):
    """User profile operations for async client."""

    async def get_profile(self, user_id: str) -> AppUser:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"users/{user_id}/profile")
        )
        return AppUser.from_dict(unwrap(response))

    async def update_profile(self, user_id: str, data: UpdateProfileData) -> AppUser:
        response = await self._http.request(
            "PUT",
            self._http.build_scoped_url(f"users/{user_id}/profile"),
            body=data.to_dict(),
        )
        return AppUser.from_dict(unwrap(response))

    async def change_password(self, user_id: str, data: ChangePasswordData) -> MessageResponse:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url(f"users/{user_id}/change-password"),
            body=data.to_dict(),
        )
        return MessageResponse.from_dict(unwrap(response))

    async def delete_account(self, user_id: str) -> None:
        await self._http.request("DELETE", self._http.build_scoped_url(f"users/{user_id}"))

    async def export_data(self, user_id: str) -> Dict[str, Any]:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"users/{user_id}/data-export")
        )
        return unwrap(response)
