"""HTTP client port: contract for performing GET requests against JSON APIs.

Domain code depends on this port; infrastructure (httpx) implements it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, runtime_checkable


class HttpClientError(Exception):
    """Base for HTTP client failures (status, network, etc.)."""


class HttpClientTimeoutError(HttpClientError):
    """Raised when the request times out."""


@runtime_checkable
class HttpResponse(Protocol):
    """Minimal read-only view of an HTTP response."""

    @property
    def status_code(self) -> int: ...

    @property
    def url(self) -> str: ...

    def json(self) -> Any: ...

    def raise_for_status(self) -> None: ...


@dataclass(frozen=True)
class RequestTimeout:
    """Connect and read timeouts in seconds."""

    connect_seconds: float
    read_seconds: float


@runtime_checkable
class AbstractHttpClient(Protocol):
    """Port: perform GET requests. Implementations live in infrastructure."""

    async def get(
        self,
        url: str,
        *,
        timeout: RequestTimeout,
        params: Mapping[str, str | int] | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Perform GET; raise HttpClientTimeoutError or HttpClientError on failure."""
        ...

    async def close(self) -> None:
        """Release resources (e.g. connection pool). No-op allowed if nothing to close."""
        ...
