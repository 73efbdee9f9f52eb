"""Unit tests for the Wikidata P18 lookup: candidate choice, claim extraction, swallowed failures."""
from __future__ import annotations

from commons_autofill.app.domain.json_transport import TransportError, TransportTimeoutError
from commons_autofill.app.domain.wikidata_lookup import WikidataImageLookup, pick_best_candidate
from tests.test_data import (
    WIKIDATA_ENTITY_NO_CLAIMS,
    WIKIDATA_ENTITY_QUEEN,
    WIKIDATA_SEARCH_QUEEN,
)

API = "https://www.wikidata.org/w/api.php"


async def test_finds_image_of_the_music_related_candidate(make_transport):
    transport = make_transport(
        {"wbsearchentities": WIKIDATA_SEARCH_QUEEN, "wbgetentities": WIKIDATA_ENTITY_QUEEN}
    )

    result = await WikidataImageLookup(transport, API).find_file("Queen")

    assert result.found is True
    assert result.file_name == "Queen 1984.jpg"
    assert result.source == "wikidata"
    assert transport.kinds() == ["wbsearchentities", "wbgetentities"]
    search_call, entity_call = transport.calls
    assert search_call["search"] == "Queen"
    assert search_call["limit"] == 6
    assert search_call["language"] == "en"
    assert entity_call["ids"] == "Q15862"
    assert entity_call["props"] == "claims"


def test_pick_best_candidate_matches_description_case_insensitively():
    items = [{"id": "Q1", "description": "city"}, {"id": "Q2", "description": "American MUSICIAN"}]
    assert pick_best_candidate(items)["id"] == "Q2"


def test_pick_best_candidate_falls_back_to_first():
    items = [{"id": "Q1", "description": "city"}, {"id": "Q2"}]
    assert pick_best_candidate(items)["id"] == "Q1"


def test_pick_best_candidate_handles_empty_or_invalid_input():
    assert pick_best_candidate([]) is None
    assert pick_best_candidate(None) is None
    assert pick_best_candidate("Queen") is None


async def test_no_candidates_is_not_found_without_entity_fetch(make_transport):
    transport = make_transport({"wbsearchentities": {"search": []}})

    result = await WikidataImageLookup(transport, API).find_file("Nobody")

    assert result.found is False
    assert result.error is None
    assert transport.kinds() == ["wbsearchentities"]


async def test_entity_without_image_claim_is_not_found(make_transport):
    transport = make_transport(
        {"wbsearchentities": WIKIDATA_SEARCH_QUEEN, "wbgetentities": WIKIDATA_ENTITY_NO_CLAIMS}
    )

    result = await WikidataImageLookup(transport, API).find_file("Queen")

    assert result.found is False
    assert result.file_name is None


async def test_empty_string_image_claim_is_not_found(make_transport):
    entity = {
        "entities": {
            "Q15862": {"claims": {"P18": [{"mainsnak": {"datavalue": {"value": ""}}}]}}
        }
    }
    transport = make_transport({"wbsearchentities": WIKIDATA_SEARCH_QUEEN, "wbgetentities": entity})

    result = await WikidataImageLookup(transport, API).find_file("Queen")

    assert result.found is False


async def test_search_failure_is_returned_as_error_value(make_transport):
    transport = make_transport(errors={"wbsearchentities": TransportError("http status 503")})

    result = await WikidataImageLookup(transport, API).find_file("Queen")

    assert result.found is False
    assert result.error == "http status 503"


async def test_entity_fetch_timeout_is_returned_as_error_value(make_transport):
    transport = make_transport(
        {"wbsearchentities": WIKIDATA_SEARCH_QUEEN},
        errors={"wbgetentities": TransportTimeoutError("timeout")},
    )

    result = await WikidataImageLookup(transport, API).find_file("Queen")

    assert result.found is False
    assert result.error == "timeout"
