"""Port: resolution cache keyed by band name."""
from __future__ import annotations

from typing import Mapping, Protocol

from commons_autofill.app.domain.models import CacheEntry


class CacheStore(Protocol):
    """load() never raises; save() and clear() are best-effort."""

    def load(self) -> dict[str, CacheEntry]: ...

    def save(self, entries: Mapping[str, CacheEntry]) -> None: ...

    def clear(self) -> None: ...
