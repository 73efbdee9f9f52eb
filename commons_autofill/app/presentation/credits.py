"""HTML credit list items for resolved (or missing) band images."""
from __future__ import annotations

from html import escape
from typing import Iterable

from commons_autofill.app.constants import NO_AUTHOR_PLACEHOLDER
from commons_autofill.app.domain.models import BandRequest, CacheEntry

NOT_FOUND_MESSAGE = "No suitable image was found on Wikimedia Commons."
NO_LICENSE_MESSAGE = "No license information"


def _heading(name: str, year: int | None) -> str:
    year_text = "" if year is None else str(year)
    return f"<strong>{escape(name)} ({escape(year_text)}s)</strong><br>"


def _link(href: str, label: str) -> str:
    return f'<a href="{escape(href)}" target="_blank" rel="noopener">{escape(label)}</a>'


def render_credit_item(
    entry: CacheEntry | None,
    name: str | None = None,
    year: int | None = None,
) -> str:
    """Render one ``<li>``; ``name``/``year`` are used when there is no entry."""
    if entry is None or entry.missing:
        heading = _heading(
            (entry.name if entry else name) or "Unknown",
            entry.year if entry else year,
        )
        return f"<li>{heading}\n{NOT_FOUND_MESSAGE}</li>"

    credit = f"Photo: {escape(entry.credit or NO_AUTHOR_PLACEHOLDER)}"
    commons = _link(entry.file_page_url, "Wikimedia Commons")
    if entry.license_url:
        license_html = _link(entry.license_url, entry.license_name or "License")
    else:
        license_html = escape(entry.license_name or NO_LICENSE_MESSAGE)

    return (
        f"<li>{_heading(entry.name, entry.year)}\n"
        f"{credit} &middot; {commons}<br>\n"
        f"License: {license_html}</li>"
    )


def render_credit_list(bands: Iterable[BandRequest], entries: Iterable[CacheEntry | None]) -> str:
    """Render a ``<ul>`` pairing each band with its entry (None for failed resolutions)."""
    items = "\n".join(
        render_credit_item(entry, band.name, band.year) for band, entry in zip(bands, entries)
    )
    return f'<ul class="image-credits">\n{items}\n</ul>'
