"""Port: user-maintained favorites list (records with at least name, img, year)."""
from __future__ import annotations

from typing import Any, Protocol


class FavoritesRepository(Protocol):
    def load(self) -> list[dict[str, Any]]: ...

    def save(self, items: list[dict[str, Any]]) -> None:
        """May raise StoreError."""
        ...
