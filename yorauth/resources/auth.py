"""
Authentication endpoints: registration, login, password reset, email
verification, magic links and MFA challenges.

These methods do not store tokens on the client. Pass the returned tokens to
``set_token`` and ``set_refresh_token`` to authenticate later calls.
"""

from typing import Optional

from ..types import (
    AuthResponse,
    LoginData,
    LoginResult,
    MessageResponse,
    MfaVerifyData,
    RegisterData,
    RegisterResponse,
    ResetPasswordData,
    drop_none,
    parse_login_result,
)
from .base import AsyncResource, Resource, unwrap


class AuthResource(Resource):
    """Authentication operations for sync client."""

    def register(self, data: RegisterData) -> RegisterResponse:
        """Register a new user."""
        response = self._http.request(
            "POST", self._http.build_scoped_url("users/register"), body=data.to_dict()
        )
        return RegisterResponse.from_dict(response)

    def login(self, data: LoginData) -> LoginResult:
        """
        Log in with email and password.

        Returns:
            AuthResponse with tokens, or MfaChallengeResponse when the user
            must complete an MFA challenge with ``verify_mfa``
        """
        response = self._http.request(
            "POST", self._http.build_scoped_url("users/login"), body=data.to_dict()
        )
        return parse_login_result(unwrap(response))

    def logout(self, refresh_token: str) -> None:
        """Revoke a refresh token."""
        self._http.request(
            "POST",
            self._http.build_scoped_url("users/logout"),
            body={"refresh_token": refresh_token},
        )

    def refresh_token(self, refresh_token: str) -> AuthResponse:
        """Exchange a refresh token for a new token pair."""
        response = self._http.request(
            "POST",
            self._http.build_scoped_url("users/token/refresh"),
            body={"refresh_token": refresh_token},
        )
        return AuthResponse.from_dict(unwrap(response))

    def forgot_password(self, email: str) -> MessageResponse:
        """Send a password reset email."""
        response = self._http.request(
            "POST", self._http.build_scoped_url("users/password/forgot"), body={"email": email}
        )
        return MessageResponse.from_dict(unwrap(response))

    def reset_password(self, data: ResetPasswordData) -> MessageResponse:
        response = self._http.request(
            "POST", self._http.build_scoped_url("users/password/reset"), body=data.to_dict()
        )
        return MessageResponse.from_dict(unwrap(response))

    def verify_email(self, token: str) -> MessageResponse:
        response = self._http.request(
            "POST", self._http.build_scoped_url("users/email/verify"), body={"token": token}
        )
        return MessageResponse.from_dict(unwrap(response))

    def resend_verification(self, email: str) -> MessageResponse:
        response = self._http.request(
            "POST", self._http.build_scoped_url("users/email/resend"), body={"email": email}
        )
        return MessageResponse.from_dict(unwrap(response))

    def request_magic_link(self, email: str, redirect_url: Optional[str] = None) -> MessageResponse:
        """Send a passwordless login link."""
        response = self._http.request(
            "POST",
            self._http.build_scoped_url("users/magic-link"),
            body=drop_none({"email": email, "redirect_url": redirect_url}),
        )
        return MessageResponse.from_dict(unwrap(response))

    def verify_magic_link(self, token: str) -> AuthResponse:
        """Verify a magic link token. The result carries ``redirect_url``."""
        response = self._http.request(
            "POST", self._http.build_scoped_url("users/magic-link/verify"), body={"token": token}
        )
        return AuthResponse.from_dict(unwrap(response))

    def verify_mfa(self, data: MfaVerifyData) -> AuthResponse:
        """Complete a login MFA challenge."""
        response = self._http.request(
            "POST", self._http.build_scoped_url("users/mfa/verify"), body=data.to_dict()
        )
        return AuthResponse.from_dict(unwrap(response))


class AsyncAuthResource(AsyncResource):
    """Authentication operations for async client."""

    async def register(self, data: RegisterData) -> RegisterResponse:
        """Register a new user."""
        response = await self._http.request(
            "POST", self._http.build_scoped_url("users/register"), body=data.to_dict()
        )
        return RegisterResponse.from_dict(response)

    async def login(self, data: LoginData) -> LoginResult:
        """Log in with email and password."""
        response = await self._http.request(
            "POST", self._http.build_scoped_url("users/login"), body=data.to_dict()
        )
        return parse_login_result(unwrap(response))

    async def logout(self, refresh_token: str) -> None:
        await self._http.request(
            "POST",
            self._http.build_scoped_url("users/logout"),
            body={"refresh_token": refresh_token},
        )

    async def refresh_token(self, refresh_token: str) -> AuthResponse:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url("users/token/refresh"),
            body={"refresh_token": refresh_token},
        )
        return AuthResponse.from_dict(unwrap(response))

    async def forgot_password(self, email: str) -> MessageResponse:
        response = await self._http.request(
            "POST", self._http.build_scoped_url("users/password/forgot"), body={"email": email}
        )
        return MessageResponse.from_dict(unwrap(response))

    async def reset_password(self, data: ResetPasswordData) -> MessageResponse:
        response = await self._http.request(
            "POST", self._http.build_scoped_url("users/password/reset"), body=data.to_dict()
        )
        return MessageResponse.from_dict(unwrap(response))

    async def verify_email(self, token: str) -> MessageResponse:
        response = await self._http.request(
            "POST", self._http.build_scoped_url("users/email/verify"), body={"token": token}
        )
        return MessageResponse.from_dict(unwrap(response))

    async def resend_verification(self, email: str) -> MessageResponse:
        response = await self._http.request(
            "POST", self._http.build_scoped_url("users/email/resend"), body={"email": email}
        )
        return MessageResponse.from_dict(unwrap(response))

    async def request_magic_link(
        self, email: str, redirect_url: Optional[str] = None
    ) -> MessageResponse:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url("users/magic-link"),
            body=drop_none({"email": email, "redirect_url": redirect_url}),
        )
        return MessageResponse.from_dict(unwrap(response))

    async def verify_magic_link(self, token: str) -> AuthResponse:
        response = await self._http.request(
            "POST", self._http.build_scoped_url("users/magic-link/verify"), body={"token": token}
        )
        return AuthResponse.from_dict(unwrap(response))

    async def verify_mfa(self, data: MfaVerifyData) -> AuthResponse:
        response = await self._http.request(
            "POST", self._http.build_scoped_url("users/mfa/verify"), body=data.to_dict()
        )
        return AuthResponse.from_dict(unwrap(response))
