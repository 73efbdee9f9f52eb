"""Commons full-text fallback: search the File: namespace for "<name> band"."""
from __future__ import annotations

from typing import Any

from loguru import logger

from commons_autofill.app.constants import FILE_NAMESPACE, FILE_PREFIX, LOOKUP_SOURCE
from commons_autofill.app.domain.json_transport import JsonTransport, TransportError
from commons_autofill.app.domain.models import FileReference, LookupResult

_UNRANKED = 999
_NON_PHOTO_MARKERS = ("logo", "album", "cover")


def is_non_photographic(title: str) -> bool:
    """Logos, vector art and album covers are poor band portraits."""
    lowered = (title or "").lower()
    return lowered.endswith(".svg") or any(marker in lowered for marker in _NON_PHOTO_MARKERS)


def _page_list(pages: Any) -> list[dict[str, Any]]:
    if isinstance(pages, dict):
        pages = list(pages.values())
    if not isinstance(pages, list):
        return []
    return [p for p in pages if isinstance(p, dict)]


def _rank(page: dict[str, Any]) -> int:
    index = page.get("index")
    return index if isinstance(index, int) and not isinstance(index, bool) else _UNRANKED


def pick_file_title(pages: Any) -> str | None:
    ranked = sorted(_page_list(pages), key=_rank)
    if not ranked:
        return None
    chosen = next((p for p in ranked if not is_non_photographic(str(p.get("title") or ""))), ranked[0])
    title = chosen.get("title")
    return title if isinstance(title, str) else None


def strip_file_prefix(title: str | None) -> FileReference | None:
    if not title or not title.startswith(FILE_PREFIX):
        return None
    bare = title[len(FILE_PREFIX):]
    return FileReference(bare) if bare else None


class CommonsSearchLookup:
    """Full-text search against the Commons action API."""

    def __init__(self, transport: JsonTransport, api_url: str, *, search_limit: int = 10) -> None:
        self._transport = transport
        self._api_url = api_url
        self._search_limit = search_limit

    async def find_file(self, name: str) -> LookupResult:
        try:
            data = await self._transport.get_json(
                self._api_url,
                {
                    "action": "query",
                    "generator": "search",
                    "gsrsearch": f"{name} band",
                    "gsrnamespace": FILE_NAMESPACE,
                    "gsrlimit": self._search_limit,
                    "prop": "info",
                    "inprop": "url",
                    "format": "json",
                },
            )
        except TransportError as exc:
            logger.debug("commons search failed for {!r}: {}", name, exc)
            return LookupResult.failed(LOOKUP_SOURCE.COMMONS_SEARCH, str(exc))

        query = data.get("query") if isinstance(data, dict) else None
        pages = query.get("pages") if isinstance(query, dict) else None
        file_name = strip_file_prefix(pick_file_title(pages))
        if file_name is None:
            return LookupResult.not_found(LOOKUP_SOURCE.COMMONS_SEARCH)
        return LookupResult(source=LOOKUP_SOURCE.COMMONS_SEARCH, file_name=file_name)
