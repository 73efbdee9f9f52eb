"""Commons imageinfo fetcher: display URL, description page, license and credit for a file.

Transport errors are not caught here; the resolver lets them propagate.
"""
from __future__ import annotations

from typing import Any
from urllib.parse import quote

from commons_autofill.app.constants import (
    COMMONS_FILE_PAGE_BASE,
    FILE_PREFIX,
    NO_AUTHOR_PLACEHOLDER,
)
from commons_autofill.app.domain.json_transport import JsonTransport
from commons_autofill.app.domain.models import ResolvedMetadata
from commons_autofill.app.domain.text import strip_html

_CREDIT_FIELDS = ("Artist", "Credit", "Attribution")


def _meta_value(meta: dict[str, Any], key: str) -> str:
    field = meta.get(key)
    value = field.get("value") if isinstance(field, dict) else None
    return value if isinstance(value, str) else ""


def _first_meta_value(meta: dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = _meta_value(meta, key)
        if value:
            return value
    return ""


def _first_str(info: dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = info.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


def _first_page(pages: Any) -> dict[str, Any] | None:
    if isinstance(pages, dict):
        pages = list(pages.values())
    if isinstance(pages, list) and pages and isinstance(pages[0], dict):
        return pages[0]
    return None


def file_page_url(file_name: str) -> str:
    return COMMONS_FILE_PAGE_BASE + quote(str(file_name).replace(" ", "_"), safe="")


def build_metadata(file_name: str, info: dict[str, Any]) -> ResolvedMetadata:
    meta = info.get("extmetadata")
    if not isinstance(meta, dict):
        meta = {}

    credit = strip_html(_first_meta_value(meta, *_CREDIT_FIELDS)) or NO_AUTHOR_PLACEHOLDER
    # bounded-width thumbnail first, original upload second
    image_url = _first_str(info, "thumburl", "url")
    page_url = _first_str(info, "descriptionurl") or file_page_url(file_name)

    return ResolvedMetadata(
        file_name=file_name,
        image_url=image_url,
        file_page_url=page_url,
        credit=credit,
        license_name=_first_meta_value(meta, "LicenseShortName", "License"),
        license_url=_meta_value(meta, "LicenseUrl"),
    )


class CommonsImageInfoFetcher:
    """Reads imageinfo + extmetadata for one file via the Commons action API."""

    def __init__(self, transport: JsonTransport, api_url: str, *, thumbnail_width: int = 1000) -> None:
        self._transport = transport
        self._api_url = api_url
        self._thumbnail_width = thumbnail_width

    async def fetch(self, file_name: str) -> ResolvedMetadata | None:
        data = await self._transport.get_json(
            self._api_url,
            {
                "action": "query",
                "titles": f"{FILE_PREFIX}{file_name}",
                "prop": "imageinfo",
                "iiprop": "url|extmetadata",
                "iiurlwidth": self._thumbnail_width,
                "format": "json",
            },
        )
        query = data.get("query") if isinstance(data, dict) else None
        page = _first_page(query.get("pages") if isinstance(query, dict) else None)
        infos = page.get("imageinfo") if page else None
        if not isinstance(infos, list) or not infos or not isinstance(infos[0], dict):
            return None
        return build_metadata(file_name, infos[0])
