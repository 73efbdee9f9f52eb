from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping

import pytest

from commons_autofill.app.constants import CACHE_KEY, FAVORITES_KEY
from commons_autofill.app.infrastructure.persistence.cache_store import KeyValueCacheStore
from commons_autofill.app.infrastructure.persistence.favorites_store import KeyValueFavoritesStore
from commons_autofill.app.infrastructure.persistence.inmemory.in_memory_store import InMemoryStore

from tests.test_data import FIXED_NOW


def request_kind(params: Mapping[str, Any]) -> str:
    """Classify a MediaWiki API call by its query parameters."""
    action = params.get("action")
    if action in ("wbsearchentities", "wbgetentities"):
        return str(action)
    if params.get("generator") == "search":
        return "search"
    if params.get("prop") == "imageinfo":
        return "imageinfo"
    return "unknown"


class FakeJsonTransport:
    """Implements JsonTransport.get_json for tests; answers by request kind and records calls."""

    def __init__(
        self,
        responses: dict[str, Any] | None = None,
        *,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self._responses = responses or {}
        self._errors = errors or {}
        self.calls: list[dict[str, Any]] = []

    def kinds(self) -> list[str]:
        return [request_kind(call) for call in self.calls]

    async def get_json(self, url: str, params: Mapping[str, Any] | None = None) -> Any:
        params = dict(params or {})
        self.calls.append({"url": url, **params})
        kind = request_kind(params)
        if kind in self._errors:
            raise self._errors[kind]
        return self._responses.get(kind, {})


class BrokenStore:
    """KeyValueStore whose every operation fails."""

    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    def read(self, key: str) -> str | None:
        raise self._exc

    def write(self, key: str, value: str) -> None:
        raise self._exc

    def remove(self, key: str) -> None:
        raise self._exc


@pytest.fixture()
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def cache(memory_store: InMemoryStore) -> KeyValueCacheStore:
    return KeyValueCacheStore(memory_store, CACHE_KEY)


@pytest.fixture()
def favorites(memory_store: InMemoryStore) -> KeyValueFavoritesStore:
    return KeyValueFavoritesStore(memory_store, FAVORITES_KEY)


@pytest.fixture()
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture()
def make_transport() -> type[FakeJsonTransport]:
    return FakeJsonTransport


@pytest.fixture()
def make_broken_store() -> type[BrokenStore]:
    return BrokenStore
