"""In-memory key-value store for tests and one-off runs.
Nothing survives the process; use the file backend for a durable cache.
"""
from __future__ import annotations


class InMemoryStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.slots: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.slots.get(key)

    def write(self, key: str, value: str) -> None:
        self.slots[key] = value

    def remove(self, key: str) -> None:
        self.slots.pop(key, None)
