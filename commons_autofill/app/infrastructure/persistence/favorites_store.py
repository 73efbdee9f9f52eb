"""Favorites list persisted as a JSON array in its own KeyValueStore slot."""
from __future__ import annotations

import json
from typing import Any

from commons_autofill.app.infrastructure.persistence.cache_store import read_slot, safe_json_parse
from commons_autofill.app.ports.key_value_store import KeyValueStore


class KeyValueFavoritesStore:
    """FavoritesRepository over one KeyValueStore slot."""

    def __init__(self, store: KeyValueStore, key: str) -> None:
        self._store = store
        self._key = key

    def load(self) -> list[dict[str, Any]]:
        payload = safe_json_parse(read_slot(self._store, self._key), [])
        return payload if isinstance(payload, list) else []

    def save(self, items: list[dict[str, Any]]) -> None:
        self._store.write(self._key, json.dumps(items, ensure_ascii=False))
