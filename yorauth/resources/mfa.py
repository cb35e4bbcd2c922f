"""TOTP multi-factor authentication management."""

from typing import Optional

from ..types import (
    MfaBackupCodesResponse,
    MfaConfirmResponse,
    MfaSetupResponse,
    MfaStatus,
    drop_none,
)
from .base import AsyncResource, Resource, unwrap


class MfaResource(Resource):
    """MFA operations for sync client."""

    def setup_totp(self, user_id: str, label: Optional[str] = None) -> MfaSetupResponse:
        """
        Start TOTP enrolment.

        Returns:
            MfaSetupResponse with the provisioning URI to render as a QR code.
            The method stays inactive until ``confirm_totp`` succeeds.
        """
        response = self._http.request(
            "POST",
            self._http.build_scoped_url(f"users/{user_id}/mfa/totp/setup"),
            body=drop_none({"label": label}),
        )
        return MfaSetupResponse.from_dict(unwrap(response))

    def confirm_totp(self, user_id: str, method_id: str, code: str) -> MfaConfirmResponse:
        """Activate TOTP with a code from the authenticator app."""
        response = self._http.request(
            "POST",
            self._http.build_scoped_url(f"users/{user_id}/mfa/totp/confirm"),
            body={"method_id": method_id, "code": code},
        )
        return MfaConfirmResponse.from_dict(unwrap(response))

    def disable_totp(self, user_id: str, password: str) -> None:
        """Disable TOTP. Requires the user's password."""
        self._http.request(
            "DELETE",
            self._http.build_scoped_url(f"users/{user_id}/mfa/totp"),
            body={"password": password},
        )

    def get_status(self, user_id: str) -> MfaStatus:
        response = self._http.request("GET", self._http.build_scoped_url(f"users/{user_id}/mfa/status"))
        return MfaStatus.from_dict(unwrap(response))

    def regenerate_backup_codes(self, user_id: str, password: str) -> MfaBackupCodesResponse:
        """Replace all backup codes. Previous codes stop working."""
        response = self._http.request(
            "POST",
            self._http.build_scoped_url(f"users/{user_id}/mfa/backup-codes/regenerate"),
            body={"password": password},
        )
        return MfaBackupCodesResponse.from_dict(unwrap(response))


class AsyncMfaResource(AsyncResource):
    """MFA operations for async client."""

    async def setup_totp(self, user_id: str, label: Optional[str] = None) -> MfaSetupResponse:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url(f"users/{user_id}/mfa/totp/setup"),
            body=drop_none({"label": label}),
        )
        return MfaSetupResponse.from_dict(unwrap(response))

    async def confirm_totp(self, user_id: str, method_id: str, code: str) -> MfaConfirmResponse:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url(f"users/{user_id}/mfa/totp/confirm"),
            body={"method_id": method_id, "code": code},
        )
        return MfaConfirmResponse.from_dict(unwrap(response))

    async def disable_totp(self, user_id: str, password: str) -> None:
        await self._http.request(
            "DELETE",
            self._http.build_scoped_url(f"users/{user_id}/mfa/totp"),
            body={"password": password},
        )

    async def get_status(self, user_id: str) -> MfaStatus:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"users/{user_id}/mfa/status")
        )
        return MfaStatus.from_dict(unwrap(response))

    async def regenerate_backup_codes(self, user_id: str, password: str) -> MfaBackupCodesResponse:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url(f"users/{user_id}/mfa/backup-codes/regenerate"),
            body={"password": password},
        )
        return MfaBackupCodesResponse.from_dict(unwrap(response))
