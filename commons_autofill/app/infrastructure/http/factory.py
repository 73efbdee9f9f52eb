"""HTTP client factory: builds AbstractHttpClient from settings (no provider logic in composition)."""
from __future__ import annotations

import httpx

from commons_autofill.app.config.settings import Settings
from commons_autofill.app.ports.http_client import AbstractHttpClient
from commons_autofill.app.infrastructure.http.httpx_client import HttpxHttpClient


def create_http_client(settings: Settings) -> AbstractHttpClient:
    """Build an HTTP client from settings. Timeouts are applied per-request by the adapter."""
    async_client = httpx.AsyncClient(
        limits=httpx.Limits(max_connections=max(1, settings.batch_concurrency) * 2),
    )
    return HttpxHttpClient(async_client)
