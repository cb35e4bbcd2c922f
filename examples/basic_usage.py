"""
YorAuth Python SDK - Basic Usage Example

This example demonstrates the basic usage of the YorAuth Python SDK.
"""

import asyncio
import logging

from yorauth import (
    AsyncYorAuth,
    LoginData,
    MfaChallengeResponse,
    MfaVerifyData,
    RegisterData,
    YorAuth,
    YorAuthConfig,
    YorAuthError,
)


CONFIG = YorAuthConfig(
    application_id="00000000-0000-0000-0000-000000000000",
    base_url="https://api.yorauth.example",
    debug=True,
)


def sync_example():
    """Synchronous client example."""
    print("=== Sync Client Example ===\n")

    with YorAuth(CONFIG) as client:
        print(f"Client initialized (application_id={client.application_id})")

        # Persist rotated tokens wherever the application keeps them
        client.on_token_refreshed(lambda result: print(f"Tokens refreshed, expires in {result.expires_in}s"))

        # Example: Login (would fail without real API)
        try:
            result = client.auth.login(LoginData(email="user@example.com", password="SecurePassword123!"))
            if isinstance(result, MfaChallengeResponse):
                print(f"MFA required! Methods: {[m.type for m in result.mfa_methods]}")
                result = client.auth.verify_mfa(
                    MfaVerifyData(challenge_token=result.challenge_token, code="123456")
                )

            client.set_token(result.access_token)
            client.set_refresh_token(result.refresh_token)
            print(f"Logged in as: {result.user.email}")

            check = client.permissions.check(result.user.id, "posts:create")
            print(f"Can create posts: {check.allowed}")
        except YorAuthError as e:
            print(f"Error (expected without real API): {e.code} [{e.kind.value}] {e.message}")


async def async_example():
    """Asynchronous client example."""
    print("\n=== Async Client Example ===\n")

    async with AsyncYorAuth(CONFIG) as client:
        # Example: Register (would fail without real API)
        try:
            result = await client.auth.register(RegisterData(
                email="newuser@example.com",
                password="SecurePassword123!",
                name="New User",
            ))
            print(f"Registered: {result.user.email}")
        except YorAuthError as e:
            print(f"Error (expected without real API): {e.code} [{e.kind.value}]")
            if e.details:
                for field_name, messages in e.details.items():
                    print(f"  {field_name}: {', '.join(messages)}")


def server_example():
    """Server-to-server example with an API key."""
    print("\n=== Server Example ===\n")

    client = YorAuth(YorAuthConfig(
        application_id=CONFIG.application_id,
        base_url=CONFIG.base_url,
        api_key="ya_live_example",
    ))

    print("Admin operations available:")
    print("  - client.roles.list(include_permissions=True)")
    print("  - client.roles.assign_role(user_id, role_id, scope='org:1')")
    print("  - client.teams.create('Platform')")
    print("  - client.audit_logs.list(action='role.assigned')")
    print("  - client.oidc.client_credentials_token(client_id, client_secret)")

    client.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    sync_example()
    asyncio.run(async_example())
    server_example()

    print("\nExamples completed!")
