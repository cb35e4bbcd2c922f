"""
YorAuth SDK HTTP Transport

Synchronous and asynchronous transports shared by every resource. They build
URLs and headers, enforce the request timeout, translate responses and, when a
request fails with 401 and a refresh token is available, run a single
coordinated token refresh before retrying the request once.
"""

import asyncio
import logging
import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional

import httpx

from .errors import (
    ConfigurationError,
    ErrorKind,
    YorAuthError,
    network_error,
    timeout_error,
)
from .responses import JSON_CONTENT_TYPE, translate_response
from .types import CredentialProvider, TokenRefreshResult, YorAuthConfig


logger = logging.getLogger("yorauth.http")

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]

HTTP_METHODS = frozenset(["GET", "POST", "PUT", "DELETE", "PATCH"])

REFRESH_PATH = "users/token/refresh"


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _is_seconds(value: Any) -> bool:
    return value is None or (isinstance(value, int) and not isinstance(value, bool))


def merge_query(url: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Append ``params`` to ``url``, skipping None values."""
    if not params:
        return url
    query = {key: _query_value(value) for key, value in params.items() if value is not None}
    if not query:
        return url
    return str(httpx.URL(url).copy_merge_params(query))


@dataclass(frozen=True)
class RequestDescriptor:
    """A fully resolved request, reused verbatim when it is retried.

    Authentication headers are not part of the descriptor; they are read from
    the credential provider each time the request is sent.
    """

    method: str
    url: str
    body: Any = None
    form: Optional[Mapping[str, Any]] = None
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method}")
        if self.body is not None and self.form is not None:
            raise ValueError("A request cannot have both a JSON body and a form body")
        object.__setattr__(self, "method", method)


class _BaseHttpClient:
    """URL, header and response handling shared by both transports."""

    def __init__(self, config: YorAuthConfig, credentials: CredentialProvider) -> None:
        self._validate_config(config)

        self._application_id = config.application_id
        self._base_url = config.base_url.rstrip("/")
        self._timeout = config.timeout
        self._default_headers = dict(config.headers or {})
        self._debug = config.debug
        self._credentials = credentials

    def _validate_config(self, config: YorAuthConfig) -> None:
        """Validate configuration."""
        if not config.application_id:
            raise ConfigurationError("application_id is required")
        if not config.base_url:
            raise ConfigurationError("base_url is required")
        if config.timeout <= 0:
            raise ConfigurationError("timeout must be greater than zero")
        if (
            config.api_key
            and sys.platform == "emscripten"
            and not config.dangerously_allow_browser
        ):
            raise ConfigurationError(
                "API keys must not be used in a browser runtime. "
                "Set dangerously_allow_browser=True to override."
            )

    def _log(self, message: str, *args: Any) -> None:
        """Log debug message."""
        if self._debug:
            logger.debug(f"[YorAuth] {message}", *args)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def application_id(self) -> str:
        return self._application_id

    def build_scoped_url(self, path: str) -> str:
        """Build the URL of an application-scoped endpoint."""
        clean_path = path.lstrip("/")
        return f"{self._base_url}/api/v1/applications/{self._application_id}/{clean_path}"

    def build_unscoped_url(self, path: str) -> str:
        """Build the URL of an endpoint outside the application scope."""
        clean_path = path.lstrip("/")
        if not clean_path:
            return self._base_url

        # Accept "api/..." paths whether or not the base URL already ends in /api
        if self._base_url.endswith("/api"):
            if clean_path == "api":
                return self._base_url
            if clean_path.startswith("api/"):
                return f"{self._base_url}/{clean_path[4:]}"

        return f"{self._base_url}/{clean_path}"

    def _describe(
        self,
        method: str,
        url: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        form: Optional[Mapping[str, Any]] = None,
    ) -> RequestDescriptor:
        return RequestDescriptor(
            method=method,
            url=merge_query(url, params),
            body=body,
            form=form,
            headers=dict(headers or {}),
        )

    def _build_headers(self, descriptor: RequestDescriptor, token: Optional[str]) -> Dict[str, str]:
        headers: Dict[str, str] = {
            "Accept": JSON_CONTENT_TYPE,
            **self._default_headers,
            **descriptor.headers,
        }

        if descriptor.body is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE

        # Bearer token wins over the API key
        if token:
            headers["Authorization"] = f"Bearer {token}"
        else:
            api_key = self._credentials.get_api_key()
            if api_key:
                headers["X-API-Key"] = api_key

        return headers

    def _handle_response(self, descriptor: RequestDescriptor, response: httpx.Response) -> Any:
        self._log(f"{descriptor.method} {descriptor.url} -> {response.status_code}")
        return translate_response(
            response.status_code,
            response.headers.get("content-type"),
            response.text,
            response.reason_phrase,
        )

    def _refresh_descriptor(self) -> RequestDescriptor:
        return RequestDescriptor(
            method="POST",
            url=self.build_scoped_url(REFRESH_PATH),
            body={"refresh_token": self._credentials.get_refresh_token()},
        )

    def _parse_refresh(self, payload: Any) -> TokenRefreshResult:
        data = payload.get("data") if isinstance(payload, dict) else None
        if (
            isinstance(data, dict)
            and isinstance(data.get("access_token"), str)
            and isinstance(data.get("refresh_token"), str)
            and _is_seconds(data.get("expires_in", 0))
            and isinstance(data.get("user"), (dict, type(None)))
        ):
            try:
                return TokenRefreshResult.from_dict(data)
            except (KeyError, TypeError, AttributeError) as exc:
                raise self._invalid_refresh_response() from exc
        raise self._invalid_refresh_response()

    def _invalid_refresh_response(self) -> YorAuthError:
        return YorAuthError(
            "Token refresh returned an invalid response",
            "INVALID_REFRESH_RESPONSE",
            0,
            kind=ErrorKind.UNKNOWN,
        )

    def _should_recover(self, error: YorAuthError) -> bool:
        return error.status == 401 and bool(self._credentials.get_refresh_token())


# =============================================================================
# Sync Transport
# =============================================================================

class _PendingRefresh:
    """Refresh in progress, shared by every thread that hit a 401."""

    def __init__(self) -> None:
        self.done = threading.Event()
        self.error: Optional[BaseException] = None


class HttpClient(_BaseHttpClient):
    """Thread-safe synchronous transport."""

    def __init__(
        self,
        config: YorAuthConfig,
        credentials: CredentialProvider,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        super().__init__(config, credentials)
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.Client(timeout=self._timeout)
        self._refresh_lock = threading.Lock()
        self._pending_refresh: Optional[_PendingRefresh] = None

    def request(
        self,
        method: HttpMethod,
        url: str,
        *,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        form: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Send a request and return the decoded response body.

        Args:
            method: HTTP method
            url: Fully-qualified URL (see ``build_scoped_url``)
            body: JSON-serializable request body
            params: Query parameters, None values are skipped
            headers: Extra headers for this request
            form: Form-encoded body, exclusive with ``body``

        Raises:
            YorAuthError: On any failure
        """
        descriptor = self._describe(method, url, body, params, headers, form)
        token = self._credentials.get_token()

        try:
            return self._send(descriptor, token)
        except YorAuthError as error:
            if not self._should_recover(error):
                raise
            try:
                self._refresh_tokens(stale_token=token)
            except Exception as refresh_error:
                reason = getattr(refresh_error, "code", type(refresh_error).__name__)
                self._log(f"Token refresh failed ({reason})")
                raise error from refresh_error

        return self._send(descriptor, self._credentials.get_token())

    def _send(self, descriptor: RequestDescriptor, token: Optional[str]) -> Any:
        """Execute a single HTTP request."""
        headers = self._build_headers(descriptor, token)
        try:
            response = self._http_client.request(
                descriptor.method,
                descriptor.url,
                headers=headers,
                json=descriptor.body,
                data=descriptor.form,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            raise timeout_error(self._timeout) from e
        except httpx.RequestError as e:
            raise network_error(e) from e

        return self._handle_response(descriptor, response)

    def _refresh_tokens(self, stale_token: Optional[str]) -> None:
        """Run the shared refresh, or wait for the one already running."""
        with self._refresh_lock:
            running = self._pending_refresh
            if running is None:
                # Tokens changed since the failed attempt: a refresh already landed
                if self._credentials.get_token() != stale_token:
                    return
                pending = self._pending_refresh = _PendingRefresh()

        if running is not None:
            running.done.wait()
            if running.error is not None:
                raise running.error
            return

        try:
            self._do_refresh()
        except BaseException as e:
            pending.error = e
            raise
        finally:
            with self._refresh_lock:
                self._pending_refresh = None
            pending.done.set()

    def _do_refresh(self) -> TokenRefreshResult:
        self._log("Refreshing access token")
        descriptor = self._refresh_descriptor()
        payload = self._send(descriptor, self._credentials.get_token())
        result = self._parse_refresh(payload)
        self._credentials.on_refresh_success(result)
        self._log("Access token refreshed")
        return result

    def close(self) -> None:
        """Close the HTTP client."""
        if self._owns_client:
            self._http_client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


# =============================================================================
# Async Transport
# =============================================================================

class AsyncHttpClient(_BaseHttpClient):
    """Asynchronous transport for a single event loop."""

    def __init__(
        self,
        config: YorAuthConfig,
        credentials: CredentialProvider,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(config, credentials)
        self._owns_client = http_client is None
        # HTTP client (created lazily)
        self._http_client = http_client
        self._refresh_task: Optional["asyncio.Task[TokenRefreshResult]"] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    async def request(
        self,
        method: HttpMethod,
        url: str,
        *,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        form: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Send a request and return the decoded response body."""
        descriptor = self._describe(method, url, body, params, headers, form)
        token = self._credentials.get_token()

        try:
            return await self._send(descriptor, token)
        except YorAuthError as error:
            if not self._should_recover(error):
                raise
            try:
                await self._refresh_tokens(stale_token=token)
            except Exception as refresh_error:
                reason = getattr(refresh_error, "code", type(refresh_error).__name__)
                self._log(f"Token refresh failed ({reason})")
                raise error from refresh_error

        return await self._send(descriptor, self._credentials.get_token())

    async def _send(self, descriptor: RequestDescriptor, token: Optional[str]) -> Any:
        """Execute a single HTTP request."""
        headers = self._build_headers(descriptor, token)
        client = self._get_client()
        try:
            response = await asyncio.wait_for(
                client.request(
                    descriptor.method,
                    descriptor.url,
                    headers=headers,
                    json=descriptor.body,
                    data=descriptor.form,
                    timeout=self._timeout,
                ),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise timeout_error(self._timeout) from e
        except httpx.RequestError as e:
            raise network_error(e) from e

        return self._handle_response(descriptor, response)

    async def _refresh_tokens(self, stale_token: Optional[str]) -> None:
        """Await the shared refresh task, starting it if none is running."""
        task = self._refresh_task
        if task is None:
            # Tokens changed since the failed attempt: a refresh already landed
            if self._credentials.get_token() != stale_token:
                return
            task = asyncio.ensure_future(self._do_refresh())
            task.add_done_callback(self._on_refresh_done)
            self._refresh_task = task

        # A waiter's own cancellation must not cancel the shared refresh
        await asyncio.shield(task)

    def _on_refresh_done(self, task: "asyncio.Task[TokenRefreshResult]") -> None:
        if self._refresh_task is task:
            self._refresh_task = None
        if not task.cancelled():
            # Waiters observe the error through shield(); mark it retrieved here
            task.exception()

    async def _do_refresh(self) -> TokenRefreshResult:
        self._log("Refreshing access token")
        descriptor = self._refresh_descriptor()
        payload = await self._send(descriptor, self._credentials.get_token())
        result = self._parse_refresh(payload)
        self._credentials.on_refresh_success(result)
        self._log("Access token refreshed")
        return result

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
