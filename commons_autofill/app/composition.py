"""Composition root: build and lifecycle-manage concrete dependencies.

Composition may: import concrete classes, call factories, store interface types,
manage high-level lifecycle.
"""
from __future__ import annotations

from typing import Any

from loguru import logger

from commons_autofill.app.application.resolver import ImageResolver
from commons_autofill.app.config.settings import Settings
from commons_autofill.app.constants import SERVICE_NAME
from commons_autofill.app.domain.commons_search import CommonsSearchLookup
from commons_autofill.app.domain.image_info import CommonsImageInfoFetcher
from commons_autofill.app.domain.json_transport import JsonTransport
from commons_autofill.app.domain.wikidata_lookup import WikidataImageLookup
from commons_autofill.app.infrastructure.http.factory import create_http_client
from commons_autofill.app.infrastructure.persistence.factory import (
    create_cache_store,
    create_favorites_store,
    create_key_value_store,
)
from commons_autofill.app.ports.cache_store import CacheStore
from commons_autofill.app.ports.favorites_repository import FavoritesRepository
from commons_autofill.app.ports.http_client import AbstractHttpClient


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class ResolverDependencies:
    """Holds wired resolver dependencies and their lifecycle."""

    def __init__(
        self,
        *,
        settings: Settings,
        http_client: AbstractHttpClient | None = None,
    ) -> None:
        self._settings = settings
        self._http_client = http_client
        store = create_key_value_store(settings)
        self._cache: CacheStore = create_cache_store(settings, store)
        self._favorites: FavoritesRepository = create_favorites_store(settings, store)
        self._resolver: ImageResolver | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def cache(self) -> CacheStore:
        return self._cache

    @property
    def favorites(self) -> FavoritesRepository:
        return self._favorites

    @property
    def resolver(self) -> ImageResolver:
        if self._resolver is None:
            raise RuntimeError("resolver is not initialized")
        return self._resolver

    async def connect(self) -> None:
        if self._http_client is None:
            self._http_client = create_http_client(self._settings)

        default_headers: dict[str, str] | None = None
        if self._settings.fetch_user_agent:
            default_headers = {"User-Agent": self._settings.fetch_user_agent}

        transport = JsonTransport(
            self._http_client,
            connect_timeout_seconds=self._settings.fetch_connect_timeout_seconds,
            read_timeout_seconds=self._settings.fetch_read_timeout_seconds,
            default_headers=default_headers,
        )
        self._resolver = ImageResolver(
            self._cache,
            WikidataImageLookup(
                transport,
                self._settings.wikidata_api_url,
                search_limit=self._settings.wikidata_search_limit,
            ),
            CommonsSearchLookup(
                transport,
                self._settings.commons_api_url,
                search_limit=self._settings.commons_search_limit,
            ),
            CommonsImageInfoFetcher(
                transport,
                self._settings.commons_api_url,
                thumbnail_width=self._settings.thumbnail_width,
            ),
        )
        _log("resolver_ready", store_backend=self._settings.store_backend)

    async def close(self) -> None:
        if self._http_client is not None:
            try:
                await self._http_client.close()
            except Exception as exc:
                logger.warning("http client close failed: {}", exc)
            self._http_client = None
        self._resolver = None


def create_resolver_dependencies(settings: Settings | None = None) -> ResolverDependencies:
    return ResolverDependencies(settings=settings or Settings())
