"""JSON transport: one GET per call, JSON body expected, non-2xx raised.

Uses the HTTP port (AbstractHttpClient); client is built in the composition root.
No retries: every source gets a single attempt.
"""
from __future__ import annotations

from typing import Any, Mapping

from loguru import logger

from commons_autofill.app.ports.http_client import (
    AbstractHttpClient,
    HttpClientError,
    HttpClientTimeoutError,
    RequestTimeout,
)


class TransportError(Exception):
    """Base error for JSON API failures (status, network, undecodable body)."""


class TransportTimeoutError(TransportError):
    """Raised when an HTTP request times out."""


class JsonTransport:
    """Fetches JSON documents using an injectable AbstractHttpClient.

    HTTP errors are raised via raise_for_status(); timeouts and client errors
    are mapped to transport exceptions so callers can tell them apart from
    programming errors.
    """

    def __init__(
        self,
        client: AbstractHttpClient,
        connect_timeout_seconds: float,
        read_timeout_seconds: float,
        *,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self._client = client
        self._timeout = RequestTimeout(
            connect_seconds=connect_timeout_seconds,
            read_seconds=read_timeout_seconds,
        )
        self._default_headers = dict(default_headers) if default_headers else {}

    async def get_json(self, url: str, params: Mapping[str, str | int] | None = None) -> Any:
        try:
            response = await self._client.get(
                url,
                timeout=self._timeout,
                params=params,
                headers=self._default_headers or None,
            )
            response.raise_for_status()
        except HttpClientTimeoutError as exc:
            raise TransportTimeoutError(str(exc)) from exc
        except HttpClientError as exc:
            raise TransportError(str(exc)) from exc

        logger.debug("GET {} -> {}", response.url, response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"invalid json from {response.url}: {exc}") from exc
