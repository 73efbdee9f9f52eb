"""Resolution cache persisted as JSON in one KeyValueStore slot.

Reads are total (bad payloads become empty values); writes are best-effort and
only log on failure.
"""
from __future__ import annotations

import json
from typing import Any, Mapping

from loguru import logger

from commons_autofill.app.domain.models import CacheEntry, entry_from_dict
from commons_autofill.app.ports.key_value_store import KeyValueStore, StoreError


def safe_json_parse(raw: str | None, fallback: Any) -> Any:
    """Decode ``raw``; missing, empty, invalid or ``null`` payloads give ``fallback``."""
    if raw is None or raw == "":
        return fallback
    try:
        value = json.loads(raw)
    except ValueError:
        return fallback
    return fallback if value is None else value


def read_slot(store: KeyValueStore, key: str) -> str | None:
    try:
        return store.read(key)
    except StoreError as exc:
        logger.warning("store read failed for {}: {}", key, exc)
        return None


class KeyValueCacheStore:
    """CacheStore over one KeyValueStore slot."""

    def __init__(self, store: KeyValueStore, key: str) -> None:
        self._store = store
        self._key = key

    def load(self) -> dict[str, CacheEntry]:
        payload = safe_json_parse(read_slot(self._store, self._key), {})
        if not isinstance(payload, dict):
            return {}
        entries: dict[str, CacheEntry] = {}
        for name, raw in payload.items():
            entry = entry_from_dict(name, raw)
            if entry is not None:
                entries[name] = entry
        return entries

    def save(self, entries: Mapping[str, CacheEntry]) -> None:
        payload = {name: entry.to_dict() for name, entry in entries.items()}
        try:
            self._store.write(self._key, json.dumps(payload, ensure_ascii=False))
        except StoreError as exc:
            logger.warning("cache save failed: {}", exc)

    def clear(self) -> None:
        try:
            self._store.remove(self._key)
        except StoreError as exc:
            logger.warning("cache clear failed: {}", exc)
