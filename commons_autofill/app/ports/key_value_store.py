"""Port: durable string slots keyed by name (cache slot, favorites slot)."""
from __future__ import annotations

from typing import Protocol


class StoreError(Exception):
    """Raised by store adapters when a slot cannot be read, written or removed."""


class KeyValueStore(Protocol):
    """Interface for raw slot persistence. Implementations live in infrastructure."""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...
