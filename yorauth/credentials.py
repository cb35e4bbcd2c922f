"""
YorAuth SDK Credential Storage

In-memory credential provider used by the clients.
"""

import threading
from typing import List, Optional

from .types import TokenRefreshCallback, TokenRefreshResult


class MemoryCredentials:
    """In-memory credential store (non-persistent)."""

    def __init__(
        self,
        token: Optional[str] = None,
        api_key: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ) -> None:
        self._token = token
        self._api_key = api_key
        self._refresh_token = refresh_token
        self._listeners: List[TokenRefreshCallback] = []
        self._lock = threading.Lock()

    def get_token(self) -> Optional[str]:
        """Get the stored bearer token."""
        with self._lock:
            return self._token

    def set_token(self, token: Optional[str]) -> None:
        """Set or clear the bearer token."""
        with self._lock:
            self._token = token

    def get_api_key(self) -> Optional[str]:
        """Get the stored API key."""
        with self._lock:
            return self._api_key

    def set_api_key(self, api_key: Optional[str]) -> None:
        with self._lock:
            self._api_key = api_key

    def get_refresh_token(self) -> Optional[str]:
        """Get the stored refresh token."""
        with self._lock:
            return self._refresh_token

    def set_refresh_token(self, refresh_token: Optional[str]) -> None:
        with self._lock:
            self._refresh_token = refresh_token

    def add_listener(self, callback: TokenRefreshCallback) -> None:
        """Register a callback invoked after every automatic refresh."""
        with self._lock:
            self._listeners.append(callback)

    def on_refresh_success(self, result: TokenRefreshResult) -> None:
        """Store refreshed tokens, then notify listeners."""
        with self._lock:
            self._token = result.access_token
            self._refresh_token = result.refresh_token
            listeners = list(self._listeners)

        for listener in listeners:
            listener(result)

