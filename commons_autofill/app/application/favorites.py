"""Keep the user's favorites list in step with freshly resolved images."""
from __future__ import annotations

from typing import Any

from loguru import logger

from commons_autofill.app.ports.favorites_repository import FavoritesRepository
from commons_autofill.app.ports.key_value_store import StoreError


def patch_favorite_image(store: FavoritesRepository, name: str, year: int | None, image_url: str) -> bool:
    """Point every favorite named ``name`` at ``image_url``.

    A missing year on the favorite is filled from ``year``; an existing one is
    kept. Returns True when the list changed and was saved.
    """
    items = store.load()
    changed = False

    for item in items:
        if not isinstance(item, dict) or item.get("name") != name or item.get("img") == image_url:
            continue
        item["img"] = image_url
        if year and not item.get("year"):
            item["year"] = year
        changed = True

    if not changed:
        return False
    try:
        store.save(items)
    except StoreError as exc:
        logger.warning("favorites save failed: {}", exc)
        return False
    return True


def patch_favorites_from_entries(store: FavoritesRepository, entries: list[Any]) -> int:
    """Apply patch_favorite_image for each resolved entry; returns how many saves changed the list."""
    patched = 0
    for entry in entries:
        if entry is None or entry.missing:
            continue
        if patch_favorite_image(store, entry.name, entry.year, entry.image_url):
            patched += 1
    return patched
