"""Domain models."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, NewType, Union

# Bare file name inside the Commons "File:" namespace.
FileReference = NewType("FileReference", str)


@dataclass(frozen=True)
class BandRequest:
    """One band to resolve: name plus the decade it is listed under."""

    name: str
    year: int | None = None


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a single lookup stage.

    A failed lookup is a value (``error`` set, ``file_name`` None) rather than
    an exception, so the resolver can fall through to the next source.
    """

    source: str
    file_name: FileReference | None = None
    error: str | None = None

    @property
    def found(self) -> bool:
        return bool(self.file_name)

    @staticmethod
    def not_found(source: str) -> "LookupResult":
        return LookupResult(source=source)

    @staticmethod
    def failed(source: str, error: str) -> "LookupResult":
        return LookupResult(source=source, error=error)


@dataclass(frozen=True)
class ResolvedMetadata:
    """Image and attribution data for one Commons file. Empty image_url means unusable."""

    file_name: str
    image_url: str
    file_page_url: str
    credit: str
    license_name: str
    license_url: str


@dataclass(frozen=True)
class ResolvedEntry:
    """Cache entry for a band whose image was found."""

    name: str
    year: int | None
    image_url: str
    file_page_url: str
    credit: str
    license_name: str
    license_url: str
    file_name: str
    fetched_at: datetime

    missing = False

    @staticmethod
    def from_metadata(
        name: str,
        year: int | None,
        metadata: ResolvedMetadata,
        fetched_at: datetime,
    ) -> "ResolvedEntry":
        return ResolvedEntry(
            name=name,
            year=year,
            image_url=metadata.image_url,
            file_page_url=metadata.file_page_url,
            credit=metadata.credit,
            license_name=metadata.license_name,
            license_url=metadata.license_url,
            file_name=metadata.file_name,
            fetched_at=fetched_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "year": self.year,
            "image_url": self.image_url,
            "file_page_url": self.file_page_url,
            "credit": self.credit,
            "license_name": self.license_name,
            "license_url": self.license_url,
            "file_name": self.file_name,
            "fetched_at": self.fetched_at.isoformat(),
        }


@dataclass(frozen=True)
class MissingEntry:
    """Cache entry asserting that resolution ran and found no usable image."""

    name: str
    year: int | None
    fetched_at: datetime
    file_name: str | None = None

    missing = True

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "year": self.year,
            "missing": True,
            "fetched_at": self.fetched_at.isoformat(),
        }
        if self.file_name:
            payload["file_name"] = self.file_name
        return payload


CacheEntry = Union[ResolvedEntry, MissingEntry]


def _coerce_year(value: Any) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _coerce_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _coerce_fetched_at(value: Any) -> datetime:
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # epoch milliseconds
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            pass
    return datetime.fromtimestamp(0, tz=timezone.utc)


def entry_from_dict(name: str, raw: Any) -> CacheEntry | None:
    """Rebuild a cache entry from its stored form; None if it is neither variant."""
    if not isinstance(raw, dict):
        return None
    entry_name = raw.get("name") if isinstance(raw.get("name"), str) else name
    year = _coerce_year(raw.get("year"))
    fetched_at = _coerce_fetched_at(raw.get("fetched_at"))

    if raw.get("missing"):
        file_name = raw.get("file_name")
        return MissingEntry(
            name=entry_name,
            year=year,
            fetched_at=fetched_at,
            file_name=file_name if isinstance(file_name, str) and file_name else None,
        )

    image_url = _coerce_str(raw.get("image_url"))
    if not image_url:
        return None
    return ResolvedEntry(
        name=entry_name,
        year=year,
        image_url=image_url,
        file_page_url=_coerce_str(raw.get("file_page_url")),
        credit=_coerce_str(raw.get("credit")),
        license_name=_coerce_str(raw.get("license_name")),
        license_url=_coerce_str(raw.get("license_url")),
        file_name=_coerce_str(raw.get("file_name")),
        fetched_at=fetched_at,
    )
