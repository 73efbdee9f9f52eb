from __future__ import annotations

from commons_autofill.app.domain.models import BandRequest, MissingEntry, ResolvedEntry
from commons_autofill.app.presentation.credits import (
    NOT_FOUND_MESSAGE,
    render_credit_item,
    render_credit_list,
)
from tests.test_data import FIXED_NOW


def _entry(**overrides) -> ResolvedEntry:
    fields = dict(
        name="Queen",
        year=1970,
        image_url="https://upload/q.jpg",
        file_page_url="https://commons.wikimedia.org/wiki/File:Q.jpg",
        credit="Jane Doe",
        license_name="CC BY-SA 3.0",
        license_url="https://creativecommons.org/licenses/by-sa/3.0",
        file_name="Q.jpg",
        fetched_at=FIXED_NOW,
    )
    fields.update(overrides)
    return ResolvedEntry(**fields)


def test_resolved_entry_renders_credit_commons_link_and_license_link():
    html = render_credit_item(_entry())

    assert html.startswith("<li><strong>Queen (1970s)</strong><br>")
    assert "Photo: Jane Doe" in html
    assert '<a href="https://commons.wikimedia.org/wiki/File:Q.jpg" target="_blank" rel="noopener">Wikimedia Commons</a>' in html
    assert '<a href="https://creativecommons.org/licenses/by-sa/3.0" target="_blank" rel="noopener">CC BY-SA 3.0</a>' in html
    assert NOT_FOUND_MESSAGE not in html


def test_license_without_url_is_plain_text():
    html = render_credit_item(_entry(license_url="", license_name="Public domain"))
    assert "License: Public domain</li>" in html


def test_license_placeholders():
    assert "No license information" in render_credit_item(_entry(license_url="", license_name=""))
    assert ">License</a>" in render_credit_item(_entry(license_name=""))


def test_all_text_is_escaped():
    html = render_credit_item(
        _entry(name="<script>", credit='"Bob" & <i>Co</i>', file_page_url='x" onclick="y')
    )

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "&quot;Bob&quot; &amp; &lt;i&gt;Co&lt;/i&gt;" in html
    assert 'x&quot; onclick=&quot;y' in html


def test_missing_entry_renders_not_found_message():
    html = render_credit_item(MissingEntry(name="Ghost", year=1980, fetched_at=FIXED_NOW))

    assert "<strong>Ghost (1980s)</strong>" in html
    assert NOT_FOUND_MESSAGE in html
    assert "Photo:" not in html


def test_no_entry_uses_given_name_or_unknown():
    assert "<strong>Abba (s)</strong>" in render_credit_item(None, "Abba")
    assert "<strong>Unknown (1960s)</strong>" in render_credit_item(None, None, 1960)


def test_credit_list_pairs_bands_with_entries():
    bands = [BandRequest("Queen", 1970), BandRequest("Abba", 1970)]

    html = render_credit_list(bands, [_entry(), None])

    assert html.startswith('<ul class="image-credits">')
    assert html.count("<li>") == 2
    assert "<strong>Abba (1970s)</strong>" in html
