"""Wikidata lookup: search entities by name, then read the image (P18) claim."""
from __future__ import annotations

import re
from typing import Any

from loguru import logger

from commons_autofill.app.constants import IMAGE_PROPERTY, LOOKUP_SOURCE
from commons_autofill.app.domain.json_transport import JsonTransport, TransportError
from commons_autofill.app.domain.models import FileReference, LookupResult

_MUSIC_DESCRIPTION = re.compile(r"(band|rock|group|musician|musical)", re.IGNORECASE)


def pick_best_candidate(candidates: Any) -> dict[str, Any] | None:
    """Prefer the first candidate described as a band or musician, else the first one."""
    if not isinstance(candidates, list):
        return None
    items = [c for c in candidates if isinstance(c, dict)]
    if not items:
        return None
    for item in items:
        if _MUSIC_DESCRIPTION.search(str(item.get("description") or "")):
            return item
    return items[0]


def _child(node: Any, key: str) -> Any:
    # The API serializes empty objects as [], so only dicts are walked.
    return node.get(key) if isinstance(node, dict) else None


def extract_image_claim(payload: Any, entity_id: str) -> FileReference | None:
    entity = _child(_child(payload, "entities"), entity_id)
    statements = _child(_child(entity, "claims"), IMAGE_PROPERTY)
    if not isinstance(statements, list) or not statements:
        return None
    value = _child(_child(_child(statements[0], "mainsnak"), "datavalue"), "value")
    if isinstance(value, str) and value:
        return FileReference(value)
    return None


class WikidataImageLookup:
    """Structured lookup against the Wikidata action API."""

    def __init__(
        self,
        transport: JsonTransport,
        api_url: str,
        *,
        search_limit: int = 6,
        language: str = "en",
    ) -> None:
        self._transport = transport
        self._api_url = api_url
        self._search_limit = search_limit
        self._language = language

    async def find_file(self, name: str) -> LookupResult:
        try:
            return await self._find_file(name)
        except TransportError as exc:
            logger.debug("wikidata lookup failed for {!r}: {}", name, exc)
            return LookupResult.failed(LOOKUP_SOURCE.WIKIDATA, str(exc))

    async def _find_file(self, name: str) -> LookupResult:
        search = await self._transport.get_json(
            self._api_url,
            {
                "action": "wbsearchentities",
                "search": name,
                "language": self._language,
                "limit": self._search_limit,
                "format": "json",
            },
        )
        best = pick_best_candidate(search.get("search") if isinstance(search, dict) else None)
        entity_id = best.get("id") if best else None
        if not isinstance(entity_id, str) or not entity_id:
            return LookupResult.not_found(LOOKUP_SOURCE.WIKIDATA)

        entities = await self._transport.get_json(
            self._api_url,
            {
                "action": "wbgetentities",
                "ids": entity_id,
                "props": "claims",
                "format": "json",
            },
        )
        file_name = extract_image_claim(entities, entity_id)
        if file_name is None:
            return LookupResult.not_found(LOOKUP_SOURCE.WIKIDATA)
        return LookupResult(source=LOOKUP_SOURCE.WIKIDATA, file_name=file_name)
