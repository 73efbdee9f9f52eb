from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from loguru import logger

from commons_autofill.app.application.batch import ProgressCallback, map_limit
from commons_autofill.app.constants import SERVICE_NAME
from commons_autofill.app.domain.image_info import CommonsImageInfoFetcher
from commons_autofill.app.domain.models import (
    BandRequest,
    CacheEntry,
    MissingEntry,
    ResolvedEntry,
)
from commons_autofill.app.ports.cache_store import CacheStore
from commons_autofill.app.ports.file_lookup import FileLookup


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ImageResolver:
    """
    Resolves a band name to a cached image + attribution entry.

    Order: cache, then the structured lookup, then the full-text fallback,
    then imageinfo for whichever file was found. Every outcome other than a
    transport error from the imageinfo stage is written to the cache and is
    final until the cache is cleared. The cache is reloaded on every call and
    nothing is held between calls, so concurrent resolutions of one name may
    both fetch; the last save wins.
    """

    def __init__(
        self,
        cache: CacheStore,
        structured_lookup: FileLookup,
        fallback_lookup: FileLookup,
        image_info: CommonsImageInfoFetcher,
        *,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._cache = cache
        self._structured_lookup = structured_lookup
        self._fallback_lookup = fallback_lookup
        self._image_info = image_info
        self._clock = clock

    async def resolve(self, name: str, year: int | None = None) -> CacheEntry | None:
        if not name:
            return None

        cached = self._cache.load().get(name)
        if cached is not None:
            _log("cache_hit", name=name, missing=cached.missing)
            return cached

        lookup = await self._structured_lookup.find_file(name)
        if not lookup.found:
            lookup = await self._fallback_lookup.find_file(name)

        if not lookup.found:
            _log("image_not_found", name=name)
            return self._store(MissingEntry(name=name, year=year, fetched_at=self._clock()))

        file_name = lookup.file_name
        metadata = await self._image_info.fetch(file_name)
        if metadata is None or not metadata.image_url:
            _log("image_unusable", name=name, file_name=file_name, source=lookup.source)
            return self._store(
                MissingEntry(name=name, year=year, fetched_at=self._clock(), file_name=file_name)
            )

        _log("image_resolved", name=name, file_name=file_name, source=lookup.source)
        return self._store(ResolvedEntry.from_metadata(name, year, metadata, self._clock()))

    async def resolve_many(
        self,
        bands: Iterable[BandRequest],
        *,
        limit: int,
        on_progress: ProgressCallback | None = None,
        abort_on_error: bool = True,
    ) -> list[CacheEntry | None]:
        """Resolve every band with bounded concurrency, results in input order.

        With ``abort_on_error`` False an exception from one band is logged and
        leaves ``None`` in its slot instead of stopping the whole batch.
        """

        async def worker(band: BandRequest, index: int) -> CacheEntry | None:
            if abort_on_error:
                return await self.resolve(band.name, band.year)
            try:
                return await self.resolve(band.name, band.year)
            except Exception as exc:
                logger.warning("resolution failed for {!r}: {}", band.name, exc)
                return None

        return await map_limit(bands, limit, worker, on_progress)

    def _store(self, entry: CacheEntry) -> CacheEntry:
        # reload so entries written by other resolutions since our read survive
        entries = self._cache.load()
        entries[entry.name] = entry
        self._cache.save(entries)
        return entry
