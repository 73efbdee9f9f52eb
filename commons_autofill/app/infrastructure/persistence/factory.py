"""Store factory: selects and assembles persistence adapters."""
from __future__ import annotations

from pathlib import Path

from commons_autofill.app.config.settings import Settings
from commons_autofill.app.infrastructure.persistence.cache_store import KeyValueCacheStore
from commons_autofill.app.infrastructure.persistence.favorites_store import KeyValueFavoritesStore
from commons_autofill.app.infrastructure.persistence.file.json_file_store import JsonFileStore
from commons_autofill.app.infrastructure.persistence.inmemory.in_memory_store import InMemoryStore
from commons_autofill.app.ports.cache_store import CacheStore
from commons_autofill.app.ports.favorites_repository import FavoritesRepository
from commons_autofill.app.ports.key_value_store import KeyValueStore


def create_key_value_store(settings: Settings) -> KeyValueStore:
    """Select store adapter from configuration and return port type."""
    backend = settings.store_backend.strip().lower()

    if backend == "file":
        return JsonFileStore(Path(settings.store_directory).expanduser())

    if backend in ("memory", "inmemory"):
        return InMemoryStore()

    raise ValueError(f"Unsupported store backend: {backend}")


def create_cache_store(settings: Settings, store: KeyValueStore) -> CacheStore:
    return KeyValueCacheStore(store, settings.cache_key)


def create_favorites_store(settings: Settings, store: KeyValueStore) -> FavoritesRepository:
    return KeyValueFavoritesStore(store, settings.favorites_key)
