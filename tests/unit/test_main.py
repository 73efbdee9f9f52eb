"""End-to-end CLI tests: real resolver wiring over an in-memory store and a mocked HTTP transport."""
from __future__ import annotations

import json

import httpx
import pytest

import commons_autofill.app.composition as composition
from commons_autofill.app.infrastructure.http.httpx_client import HttpxHttpClient
from commons_autofill.app.main import load_bands, main, parse_band
from commons_autofill.app.domain.models import BandRequest
from tests.test_data import IMAGEINFO_FULL, WIKIDATA_ENTITY_QUEEN, WIKIDATA_SEARCH_QUEEN


def _wikimedia_handler(imageinfo_status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        params = request.url.params
        if params.get("action") == "wbsearchentities":
            body = WIKIDATA_SEARCH_QUEEN if params.get("search") == "Queen" else {"search": []}
            return httpx.Response(200, json=body)
        if params.get("action") == "wbgetentities":
            return httpx.Response(200, json=WIKIDATA_ENTITY_QUEEN)
        if params.get("generator") == "search":
            return httpx.Response(200, json={"batchcomplete": ""})
        if params.get("prop") == "imageinfo":
            return httpx.Response(imageinfo_status, json=IMAGEINFO_FULL)
        return httpx.Response(400, json={})

    return handler


@pytest.fixture()
def wikimedia(monkeypatch):
    """Route the composition root's HTTP client to a mock Wikimedia API."""

    def install(imageinfo_status: int = 200) -> None:
        def create_http_client(settings):
            transport = httpx.MockTransport(_wikimedia_handler(imageinfo_status))
            return HttpxHttpClient(httpx.AsyncClient(transport=transport))

        monkeypatch.setattr(composition, "create_http_client", create_http_client)

    monkeypatch.setenv("STORE_BACKEND", "memory")
    return install


def test_parse_band():
    assert parse_band("Queen:1970") == BandRequest("Queen", 1970)
    assert parse_band("Queen") == BandRequest("Queen")
    assert parse_band("Earth, Wind & Fire: 1970") == BandRequest("Earth, Wind & Fire", 1970)
    assert parse_band("Sly:Stone") == BandRequest("Sly:Stone")


def test_load_bands(tmp_path):
    path = tmp_path / "bands.json"
    path.write_text(json.dumps([{"name": "Queen", "year": 1970}, "Abba", {"year": 1960}]), encoding="utf-8")

    assert load_bands(path) == [BandRequest("Queen", 1970), BandRequest("Abba")]


def test_cli_resolves_bands_and_writes_credits(wikimedia, tmp_path, capsys):
    wikimedia()
    html_path = tmp_path / "out" / "credits.html"

    code = main(["--band", "Queen:1970", "--band", "Nobody:1990", "--html", str(html_path)])

    assert code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary[0]["status"] == "resolved"
    assert summary[0]["credit"] == "Jane Doe"
    assert summary[1] == {"name": "Nobody", "year": 1990, "status": "missing", "file_name": None}
    html = html_path.read_text(encoding="utf-8")
    assert "Queen (1970s)" in html
    assert "No suitable image was found" in html


def test_cli_aborts_batch_on_imageinfo_error(wikimedia, capsys):
    wikimedia(imageinfo_status=500)

    assert main(["--band", "Queen:1970"]) == 1
    assert capsys.readouterr().out == ""


def test_cli_continue_on_error_reports_failed_band(wikimedia, capsys):
    wikimedia(imageinfo_status=500)

    code = main(["--band", "Queen:1970", "--band", "Nobody", "--continue-on-error"])

    assert code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary[0] == {"name": "Queen", "year": 1970, "status": "error"}
    assert summary[1]["status"] == "missing"


def test_cli_without_bands_is_a_no_op(wikimedia, capsys):
    wikimedia()

    assert main(["--clear-cache"]) == 0
    assert capsys.readouterr().out == ""
