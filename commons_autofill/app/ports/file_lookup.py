"""Port: find a Commons file name for a band. Implementations live in domain."""
from __future__ import annotations

from typing import Protocol

from commons_autofill.app.domain.models import LookupResult


class FileLookup(Protocol):
    """Interface for one lookup source. Must not raise for transport failures."""

    async def find_file(self, name: str) -> LookupResult: ...
