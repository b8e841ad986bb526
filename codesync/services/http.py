"""Shared HTTP client plumbing for the upstream platform adapters."""

from __future__ import annotations

import time
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Generic, Optional, Tuple, TypeVar

import httpx

from ..core.config import CONTEST_CACHE_TTL, HTTP_TIMEOUT

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

T = TypeVar("T")

# Transport and status errors, malformed JSON (ValueError) and payloads
# whose shape no longer matches what the adapters expect.
UPSTREAM_ERRORS = (
    httpx.HTTPError,
    ValueError,
    KeyError,
    TypeError,
    IndexError,
    AttributeError,
)


def build_client(**kwargs: Any) -> httpx.AsyncClient:
    """Create a client with the defaults every adapter expects."""

    kwargs.setdefault("timeout", HTTP_TIMEOUT)
    kwargs.setdefault("follow_redirects", True)
    headers = {"User-Agent": USER_AGENT}
    headers.update(kwargs.pop("headers", None) or {})
    return httpx.AsyncClient(headers=headers, **kwargs)


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency that yields a request-scoped HTTP client."""

    async with build_client() as client:
        yield client


async def get_json(
    client: httpx.AsyncClient, url: str, params: Optional[Dict[str, Any]] = None
) -> Any:
    response = await client.get(url, params=params or {})
    response.raise_for_status()
    return response.json()


async def get_text(client: httpx.AsyncClient, url: str) -> str:
    response = await client.get(url)
    response.raise_for_status()
    return response.text


async def post_graphql(
    client: httpx.AsyncClient,
    url: str,
    query: str,
    variables: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """POST a GraphQL query and return its ``data`` object (``{}`` if absent)."""

    response = await client.post(
        url,
        json={"query": query, "variables": variables or {}},
        headers=headers or {},
    )
    response.raise_for_status()
    payload = response.json()
    return (payload or {}).get("data") or {}


class TTLCache(Generic[T]):
    """Tiny in-process cache for upstream lists that change every few minutes."""

    def __init__(self, ttl_seconds: float) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries: Dict[str, Tuple[float, T]] = {}

    def get(self, key: str) -> Optional[T]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if time.monotonic() - stored_at > self.ttl_seconds:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: T) -> None:
        self._entries[key] = (time.monotonic(), value)

    def clear(self) -> None:
        self._entries.clear()

    async def get_or_fetch(self, key: str, fetch: Callable[[], Awaitable[T]]) -> T:
        """Return a fresh cached value or fetch it. Empty results are not cached."""

        cached = self.get(key)
        if cached is not None:
            return cached
        value = await fetch()
        if value:
            self.set(key, value)
        return value


contest_cache: TTLCache[list] = TTLCache(CONTEST_CACHE_TTL)


__all__ = [
    "TTLCache",
    "UPSTREAM_ERRORS",
    "USER_AGENT",
    "build_client",
    "contest_cache",
    "get_http_client",
    "get_json",
    "get_text",
    "post_graphql",
]
