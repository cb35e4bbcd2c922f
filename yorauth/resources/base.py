"""Shared plumbing for resource facades."""

from typing import Any, Callable, Dict, List, TypeVar

from ..http import AsyncHttpClient, HttpClient


T = TypeVar("T")


def unwrap(payload: Any) -> Any:
    """Return the ``data`` member of a response envelope."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def parse_list(payload: Any, item: Callable[[Dict[str, Any]], T]) -> List[T]:
    """Parse the ``data`` array of a response envelope."""
    return [item(entry) for entry in unwrap(payload) or []]


class Resource:
    """Base class for synchronous resources."""

    def __init__(self, http: HttpClient) -> None:
        self._http = http


class AsyncResource:
    """Base class for asynchronous resources."""

    def __init__(self, http: AsyncHttpClient) -> None:
        self._http = http
