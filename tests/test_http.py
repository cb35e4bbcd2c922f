"""
Tests for the synchronous HTTP transport.

Covers URL building, header assembly, error wrapping and the coordinated
token refresh on 401 responses.
"""

import dataclasses
import json
import time
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest
import respx

from yorauth.credentials import MemoryCredentials
from yorauth.errors import ErrorKind, YorAuthError
from yorauth.http import HttpClient, RequestDescriptor
from yorauth.types import TokenRefreshResult, YorAuthConfig


BASE_URL = "https://api.yorauth.dev"
APP_ID = "test-app-id"
SCOPED = f"{BASE_URL}/api/v1/applications/{APP_ID}"
REFRESH_URL = f"{SCOPED}/users/token/refresh"
PROFILE_URL = f"{SCOPED}/users/user_1/profile"


def expired() -> httpx.Response:
    return httpx.Response(401, json={"error": {"code": "TOKEN_EXPIRED", "message": "Token expired"}})


def refreshed(access_token: str = "new-token", refresh_token: str = "refresh-2") -> httpx.Response:
    return httpx.Response(
        200,
        json={"data": {"access_token": access_token, "refresh_token": refresh_token, "expires_in": 900}},
    )


def ok_for_new_token(request: httpx.Request) -> httpx.Response:
    if request.headers.get("Authorization") == "Bearer new-token":
        return httpx.Response(200, json={"data": {"ok": True}})
    return expired()


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def config() -> YorAuthConfig:
    return YorAuthConfig(application_id=APP_ID, base_url=BASE_URL, timeout=5.0)


@pytest.fixture
def credentials() -> MemoryCredentials:
    return MemoryCredentials(token="old-token", refresh_token="refresh-1")


@pytest.fixture
def http(config: YorAuthConfig, credentials: MemoryCredentials) -> HttpClient:
    return HttpClient(config, credentials)


# =============================================================================
# URL Building
# =============================================================================

class TestUrlBuilding:
    """Tests for scoped and unscoped URL helpers."""

    def test_scoped_url(self, http: HttpClient):
        assert http.build_scoped_url("roles") == f"{SCOPED}/roles"

    def test_scoped_url_strips_leading_slashes(self, http: HttpClient):
        assert http.build_scoped_url("//users/1/roles") == f"{SCOPED}/users/1/roles"

    def test_base_url_trailing_slashes_stripped(self, credentials: MemoryCredentials):
        config = YorAuthConfig(application_id=APP_ID, base_url=f"{BASE_URL}///")
        http = HttpClient(config, credentials)
        assert http.base_url == BASE_URL
        assert http.build_scoped_url("roles") == f"{SCOPED}/roles"

    def test_unscoped_url(self, http: HttpClient):
        assert http.build_unscoped_url("/api/oidc/token") == f"{BASE_URL}/api/oidc/token"

    def test_unscoped_empty_path(self, http: HttpClient):
        assert http.build_unscoped_url("") == BASE_URL
        assert http.build_unscoped_url("/") == BASE_URL

    def test_unscoped_with_api_base(self, credentials: MemoryCredentials):
        config = YorAuthConfig(application_id=APP_ID, base_url=f"{BASE_URL}/api/")
        http = HttpClient(config, credentials)
        assert http.build_unscoped_url("api/oidc/token") == f"{BASE_URL}/api/oidc/token"
        assert http.build_unscoped_url("api") == f"{BASE_URL}/api"
        assert http.build_unscoped_url("apis/x") == f"{BASE_URL}/api/apis/x"
        assert http.build_unscoped_url(".well-known/jwks.json") == f"{BASE_URL}/api/.well-known/jwks.json"


class TestRequestDescriptor:
    """Tests for request descriptors."""

    def test_normalizes_method(self):
        descriptor = RequestDescriptor("get", f"{SCOPED}/roles")
        assert descriptor.method == "GET"

    def test_rejects_unknown_method(self):
        with pytest.raises(ValueError):
            RequestDescriptor("TRACE", f"{SCOPED}/roles")

    def test_rejects_body_and_form(self):
        with pytest.raises(ValueError):
            RequestDescriptor("POST", f"{SCOPED}/roles", body={"a": 1}, form={"b": "2"})

    def test_is_immutable(self):
        descriptor = RequestDescriptor("GET", f"{SCOPED}/roles")
        with pytest.raises(dataclasses.FrozenInstanceError):
            descriptor.url = "https://elsewhere.test"  # type: ignore[misc]


# =============================================================================
# Request Building
# =============================================================================

class TestHeaders:
    """Tests for request headers."""

    @respx.mock
    def test_bearer_token(self, http: HttpClient):
        route = respx.get(url__startswith=f"{SCOPED}/roles").mock(return_value=httpx.Response(200, json={}))

        http.request("GET", f"{SCOPED}/roles")

        request = route.calls.last.request
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Authorization"] == "Bearer old-token"
        assert "X-API-Key" not in request.headers
        assert "Content-Type" not in request.headers

    @respx.mock
    def test_api_key_when_no_token(self, config: YorAuthConfig):
        http = HttpClient(config, MemoryCredentials(api_key="key_123"))
        route = respx.get(url__startswith=f"{SCOPED}/roles").mock(return_value=httpx.Response(200, json={}))

        http.request("GET", f"{SCOPED}/roles")

        request = route.calls.last.request
        assert request.headers["X-API-Key"] == "key_123"
        assert "Authorization" not in request.headers

    @respx.mock
    def test_token_wins_over_api_key(self, config: YorAuthConfig):
        http = HttpClient(config, MemoryCredentials(token="tok", api_key="key_123"))
        route = respx.get(url__startswith=f"{SCOPED}/roles").mock(return_value=httpx.Response(200, json={}))

        http.request("GET", f"{SCOPED}/roles")

        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer tok"
        assert "X-API-Key" not in request.headers

    @respx.mock
    def test_no_credentials(self, config: YorAuthConfig):
        http = HttpClient(config, MemoryCredentials())
        route = respx.get(url__startswith=f"{SCOPED}/roles").mock(return_value=httpx.Response(200, json={}))

        http.request("GET", f"{SCOPED}/roles")

        request = route.calls.last.request
        assert "Authorization" not in request.headers
        assert "X-API-Key" not in request.headers

    @respx.mock
    def test_credentials_read_per_request(self, http: HttpClient, credentials: MemoryCredentials):
        route = respx.get(url__startswith=f"{SCOPED}/roles").mock(return_value=httpx.Response(200, json={}))

        http.request("GET", f"{SCOPED}/roles")
        credentials.set_token("rotated")
        http.request("GET", f"{SCOPED}/roles")

        assert route.calls[0].request.headers["Authorization"] == "Bearer old-token"
        assert route.calls[1].request.headers["Authorization"] == "Bearer rotated"

    @respx.mock
    def test_default_and_per_call_headers(self, credentials: MemoryCredentials):
        config = YorAuthConfig(
            application_id=APP_ID, base_url=BASE_URL, headers={"X-Client": "tests"}
        )
        http = HttpClient(config, credentials)
        route = respx.get(url__startswith=f"{SCOPED}/roles").mock(return_value=httpx.Response(200, json={}))

        http.request("GET", f"{SCOPED}/roles", headers={"X-Trace": "abc"})

        request = route.calls.last.request
        assert request.headers["X-Client"] == "tests"
        assert request.headers["X-Trace"] == "abc"


class TestBodies:
    """Tests for JSON and form bodies."""

    @respx.mock
    def test_json_body(self, http: HttpClient):
        route = respx.post(f"{SCOPED}/roles").mock(return_value=httpx.Response(201, json={}))

        http.request("POST", f"{SCOPED}/roles", body={"name": "editor"})

        request = route.calls.last.request
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"name": "editor"}

    @respx.mock
    def test_empty_json_body_still_sent(self, http: HttpClient):
        route = respx.post(f"{SCOPED}/api-keys").mock(return_value=httpx.Response(201, json={}))

        http.request("POST", f"{SCOPED}/api-keys", body={})

        request = route.calls.last.request
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {}

    @respx.mock
    def test_form_body(self, http: HttpClient):
        route = respx.post(f"{BASE_URL}/api/oidc/token").mock(
            return_value=httpx.Response(200, json={})
        )

        http.request(
            "POST",
            f"{BASE_URL}/api/oidc/token",
            form={"grant_type": "client_credentials", "client_id": "abc"},
        )

        request = route.calls.last.request
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.content == b"grant_type=client_credentials&client_id=abc"

    @respx.mock
    def test_query_params(self, http: HttpClient):
        route = respx.get(url__startswith=f"{SCOPED}/roles").mock(return_value=httpx.Response(200, json={}))

        http.request(
            "GET",
            f"{SCOPED}/roles",
            params={"search": "admin", "page": 2, "include_permissions": True, "scope": None},
        )

        params = route.calls.last.request.url.params
        assert params["search"] == "admin"
        assert params["page"] == "2"
        assert params["include_permissions"] == "true"
        assert "scope" not in params


# =============================================================================
# Responses and Transport Failures
# =============================================================================

class TestResponses:
    """Tests for response handling."""

    @respx.mock
    def test_returns_decoded_json(self, http: HttpClient):
        respx.get(f"{SCOPED}/roles").mock(
            return_value=httpx.Response(200, json={"data": [{"id": "r1"}]})
        )
        assert http.request("GET", f"{SCOPED}/roles") == {"data": [{"id": "r1"}]}

    @respx.mock
    def test_no_content(self, http: HttpClient):
        respx.delete(f"{SCOPED}/roles/r1").mock(return_value=httpx.Response(204))
        assert http.request("DELETE", f"{SCOPED}/roles/r1") is None

    @respx.mock
    def test_error_response(self, http: HttpClient):
        respx.get(f"{SCOPED}/roles/missing").mock(
            return_value=httpx.Response(404, json={"error": {"code": "NOT_FOUND", "message": "Role not found"}})
        )

        with pytest.raises(YorAuthError) as exc_info:
            http.request("GET", f"{SCOPED}/roles/missing")

        assert exc_info.value.code == "NOT_FOUND"
        assert exc_info.value.status == 404
        assert exc_info.value.kind == ErrorKind.NOT_FOUND

    @respx.mock
    def test_text_error_uses_body(self, http: HttpClient):
        respx.get(f"{SCOPED}/roles").mock(return_value=httpx.Response(502, text="upstream down"))

        with pytest.raises(YorAuthError) as exc_info:
            http.request("GET", f"{SCOPED}/roles")

        assert exc_info.value.code == "HTTP_502"
        assert exc_info.value.message == "upstream down"

    @respx.mock
    def test_timeout(self, http: HttpClient):
        respx.get(f"{SCOPED}/roles").mock(side_effect=httpx.ReadTimeout)

        with pytest.raises(YorAuthError) as exc_info:
            http.request("GET", f"{SCOPED}/roles")

        error = exc_info.value
        assert error.code == "REQUEST_TIMEOUT"
        assert error.message == "Request timed out after 5000ms"
        assert error.status == 0
        assert error.kind == ErrorKind.TIMEOUT
        assert isinstance(error.__cause__, httpx.TimeoutException)

    @respx.mock
    def test_network_error(self, http: HttpClient):
        respx.get(f"{SCOPED}/roles").mock(side_effect=httpx.ConnectError)

        with pytest.raises(YorAuthError) as exc_info:
            http.request("GET", f"{SCOPED}/roles")

        error = exc_info.value
        assert error.code == "NETWORK_ERROR"
        assert error.status == 0
        assert error.kind == ErrorKind.NETWORK
        assert isinstance(error.__cause__, httpx.ConnectError)

    @respx.mock(assert_all_called=False)
    def test_timeout_on_401_path_is_not_refreshed(self, http: HttpClient, respx_mock):
        respx_mock.get(PROFILE_URL).mock(side_effect=httpx.ReadTimeout)
        refresh = respx_mock.post(REFRESH_URL).mock(return_value=refreshed())

        with pytest.raises(YorAuthError):
            http.request("GET", PROFILE_URL)

        assert refresh.call_count == 0


# =============================================================================
# Token Refresh
# =============================================================================

class TestTokenRefresh:
    """Tests for recovery from 401 responses."""

    @respx.mock
    def test_refreshes_and_retries(self, http: HttpClient, credentials: MemoryCredentials):
        route = respx.get(PROFILE_URL).mock(side_effect=ok_for_new_token)
        refresh = respx.post(REFRESH_URL).mock(return_value=refreshed())

        result = http.request("GET", PROFILE_URL)

        assert result == {"data": {"ok": True}}
        assert route.call_count == 2
        assert refresh.call_count == 1
        assert json.loads(refresh.calls.last.request.content) == {"refresh_token": "refresh-1"}
        assert route.calls.last.request.headers["Authorization"] == "Bearer new-token"
        assert credentials.get_token() == "new-token"
        assert credentials.get_refresh_token() == "refresh-2"

    @respx.mock
    def test_retry_reuses_method_body_and_query(self, http: HttpClient):
        route = respx.put(url__startswith=PROFILE_URL).mock(side_effect=ok_for_new_token)
        respx.post(REFRESH_URL).mock(return_value=refreshed())

        http.request("PUT", PROFILE_URL, body={"name": "Ada"}, params={"include": "meta"})

        first, second = route.calls
        assert first.request.method == second.request.method == "PUT"
        assert first.request.url == second.request.url
        assert first.request.content == second.request.content

    @respx.mock
    def test_refresh_success_notifies_once(self, http: HttpClient, credentials: MemoryCredentials):
        seen = []
        credentials.add_listener(seen.append)
        respx.get(PROFILE_URL).mock(side_effect=ok_for_new_token)
        respx.post(REFRESH_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "data": {
                        "access_token": "new-token",
                        "refresh_token": "refresh-2",
                        "expires_in": 900,
                        "user": {"id": "user_1", "email": "ada@example.com", "name": "Ada"},
                    }
                },
            )
        )

        http.request("GET", PROFILE_URL)

        assert len(seen) == 1
        assert isinstance(seen[0], TokenRefreshResult)
        assert seen[0].access_token == "new-token"
        assert seen[0].expires_in == 900
        assert seen[0].user is not None and seen[0].user.email == "ada@example.com"

    @respx.mock
    def test_no_refresh_token_raises_original(self, config: YorAuthConfig):
        http = HttpClient(config, MemoryCredentials(token="old-token"))
        route = respx.get(PROFILE_URL).mock(return_value=expired())

        with pytest.raises(YorAuthError) as exc_info:
            http.request("GET", PROFILE_URL)

        assert exc_info.value.code == "TOKEN_EXPIRED"
        assert route.call_count == 1

    @respx.mock
    def test_refresh_failure_raises_original(self, http: HttpClient, credentials: MemoryCredentials):
        route = respx.get(PROFILE_URL).mock(return_value=expired())
        respx.post(REFRESH_URL).mock(
            return_value=httpx.Response(
                401, json={"error": {"code": "INVALID_REFRESH_TOKEN", "message": "Refresh token revoked"}}
            )
        )

        with pytest.raises(YorAuthError) as exc_info:
            http.request("GET", PROFILE_URL)

        error = exc_info.value
        assert error.code == "TOKEN_EXPIRED"
        assert error.message == "Token expired"
        assert error.status == 401
        assert isinstance(error.__cause__, YorAuthError)
        assert error.__cause__.code == "INVALID_REFRESH_TOKEN"
        assert route.call_count == 1
        assert credentials.get_token() == "old-token"

    @respx.mock
    def test_malformed_refresh_response(self, http: HttpClient):
        respx.get(PROFILE_URL).mock(return_value=expired())
        respx.post(REFRESH_URL).mock(return_value=httpx.Response(200, json={"data": {"token": "x"}}))

        with pytest.raises(YorAuthError) as exc_info:
            http.request("GET", PROFILE_URL)

        assert exc_info.value.code == "TOKEN_EXPIRED"
        assert exc_info.value.__cause__.code == "INVALID_REFRESH_RESPONSE"

    @respx.mock
    def test_refresh_network_failure(self, http: HttpClient):
        respx.get(PROFILE_URL).mock(return_value=expired())
        respx.post(REFRESH_URL).mock(side_effect=httpx.ConnectError)

        with pytest.raises(YorAuthError) as exc_info:
            http.request("GET", PROFILE_URL)

        assert exc_info.value.code == "TOKEN_EXPIRED"
        assert exc_info.value.__cause__.code == "NETWORK_ERROR"

    @respx.mock
    def test_listener_failure_raises_original(self, http: HttpClient, credentials: MemoryCredentials):
        def broken_listener(result: TokenRefreshResult) -> None:
            raise RuntimeError("listener blew up")

        credentials.add_listener(broken_listener)
        route = respx.get(PROFILE_URL).mock(return_value=expired())
        respx.post(REFRESH_URL).mock(return_value=refreshed())

        with pytest.raises(YorAuthError) as exc_info:
            http.request("GET", PROFILE_URL)

        assert exc_info.value.code == "TOKEN_EXPIRED"
        assert exc_info.value.status == 401
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert route.call_count == 1

    @respx.mock
    def test_non_numeric_expires_in_is_invalid(self, http: HttpClient, credentials: MemoryCredentials):
        respx.get(PROFILE_URL).mock(return_value=expired())
        respx.post(REFRESH_URL).mock(
            return_value=httpx.Response(
                200, json={"data": {"access_token": "new-token", "refresh_token": "r2", "expires_in": "900"}}
            )
        )

        with pytest.raises(YorAuthError) as exc_info:
            http.request("GET", PROFILE_URL)

        assert exc_info.value.code == "TOKEN_EXPIRED"
        assert exc_info.value.__cause__.code == "INVALID_REFRESH_RESPONSE"
        assert credentials.get_token() == "old-token"

    @respx.mock
    def test_retry_outcome_is_returned_as_is(self, http: HttpClient):
        route = respx.get(PROFILE_URL).mock(
            side_effect=[
                expired(),
                httpx.Response(401, json={"error": {"code": "ACCOUNT_LOCKED", "message": "Locked"}}),
            ]
        )
        refresh = respx.post(REFRESH_URL).mock(return_value=refreshed())

        with pytest.raises(YorAuthError) as exc_info:
            http.request("GET", PROFILE_URL)

        assert exc_info.value.code == "ACCOUNT_LOCKED"
        assert route.call_count == 2
        assert refresh.call_count == 1

    @respx.mock
    def test_other_errors_are_not_recovered(self, http: HttpClient):
        route = respx.get(PROFILE_URL).mock(
            return_value=httpx.Response(403, json={"error": {"code": "FORBIDDEN", "message": "No"}})
        )

        with pytest.raises(YorAuthError) as exc_info:
            http.request("GET", PROFILE_URL)

        assert exc_info.value.code == "FORBIDDEN"
        assert route.call_count == 1

    @respx.mock(assert_all_called=False)
    def test_skips_refresh_when_tokens_already_rotated(
        self, http: HttpClient, credentials: MemoryCredentials, respx_mock
    ):
        def rotate_then_fail(request: httpx.Request) -> httpx.Response:
            if request.headers["Authorization"] == "Bearer old-token":
                # Another caller completed a refresh while this request was in flight
                credentials.set_token("new-token")
                return expired()
            return httpx.Response(200, json={"data": {"ok": True}})

        route = respx_mock.get(PROFILE_URL).mock(side_effect=rotate_then_fail)
        refresh = respx_mock.post(REFRESH_URL).mock(return_value=refreshed())

        assert http.request("GET", PROFILE_URL) == {"data": {"ok": True}}
        assert route.call_count == 2
        assert refresh.call_count == 0

    @respx.mock
    def test_concurrent_401s_share_one_refresh(
        self, http: HttpClient, credentials: MemoryCredentials
    ):
        seen = []
        credentials.add_listener(seen.append)

        def slow_refresh(request: httpx.Request) -> httpx.Response:
            time.sleep(0.1)
            return refreshed()

        route = respx.get(PROFILE_URL).mock(side_effect=ok_for_new_token)
        refresh = respx.post(REFRESH_URL).mock(side_effect=slow_refresh)

        with ThreadPoolExecutor(max_workers=5) as pool:
            results = list(pool.map(lambda _: http.request("GET", PROFILE_URL), range(5)))

        assert results == [{"data": {"ok": True}}] * 5
        assert refresh.call_count == 1
        assert len(seen) == 1
        assert sum(
            1 for call in route.calls
            if call.request.headers["Authorization"] == "Bearer new-token"
        ) == 5

    @respx.mock
    def test_concurrent_refresh_failure_reaches_every_caller(self, http: HttpClient):
        def slow_failure(request: httpx.Request) -> httpx.Response:
            time.sleep(0.1)
            return httpx.Response(401, json={"error": {"code": "INVALID_REFRESH_TOKEN", "message": "No"}})

        respx.get(PROFILE_URL).mock(return_value=expired())
        refresh = respx.post(REFRESH_URL).mock(side_effect=slow_failure)

        def call() -> str:
            try:
                http.request("GET", PROFILE_URL)
            except YorAuthError as e:
                return e.code
            return "ok"

        with ThreadPoolExecutor(max_workers=5) as pool:
            codes = list(pool.map(lambda _: call(), range(5)))

        assert codes == ["TOKEN_EXPIRED"] * 5
        assert refresh.call_count == 1


class TestClose:
    """Tests for client ownership."""

    def test_injected_client_is_not_closed(self, config: YorAuthConfig, credentials: MemoryCredentials):
        injected = httpx.Client()
        with HttpClient(config, credentials, http_client=injected):
            pass
        assert not injected.is_closed
        injected.close()

    def test_owned_client_is_closed(self, config: YorAuthConfig, credentials: MemoryCredentials):
        http = HttpClient(config, credentials)
        http.close()
        assert http._http_client.is_closed
