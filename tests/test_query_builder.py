from __future__ import annotations

import pytest

from obgynrx_gateway.allowlist import DEFAULT_ALLOWED_DOMAINS
from obgynrx_gateway.errors import BadRequest
from obgynrx_gateway.query_builder import (
    SearchRequest,
    build_provider_query,
    build_search_request,
    clamp_limit,
)


def test_build_search_request_defaults() -> None:
    request = build_search_request("preeclampsia")

    assert request == SearchRequest(query="preeclampsia", limit=10, offset=0)


def test_build_search_request_collapses_whitespace() -> None:
    request = build_search_request("  gestational   diabetes\n screening ", "5", "20")

    assert request.query == "gestational diabetes screening"
    assert request.limit == 5
    assert request.offset == 20


def test_build_search_request_missing_query() -> None:
    with pytest.raises(BadRequest) as exc:
        build_search_request(None)

    assert exc.value.status_code == 400
    assert exc.value.error == "Missing required query parameter: q"
    assert exc.value.message is None


def test_build_search_request_blank_query() -> None:
    with pytest.raises(BadRequest) as exc:
        build_search_request(" \t ")

    assert exc.value.message == "Query parameter q must not be empty."


@pytest.mark.parametrize(
    ("raw_limit", "expected"),
    [("50", 10), ("10", 10), ("1", 1), ("0", 1), ("-3", 1), ("abc", 10), (None, 10)],
)
def test_build_search_request_clamps_limit(raw_limit: str | None, expected: int) -> None:
    assert build_search_request("q", raw_limit).limit == expected


@pytest.mark.parametrize(
    ("raw_offset", "expected"),
    [("0", 0), ("15", 15), ("-4", 0), ("x", 0), (None, 0)],
)
def test_build_search_request_offset(raw_offset: str | None, expected: int) -> None:
    assert build_search_request("q", None, raw_offset).offset == expected


def test_provider_query_has_site_term_for_every_domain() -> None:
    request = SearchRequest(query="postpartum hemorrhage", limit=10, offset=0)

    provider_query = build_provider_query(request, DEFAULT_ALLOWED_DOMAINS)

    assert provider_query.raw_query_string.startswith("postpartum hemorrhage (")
    for domain in DEFAULT_ALLOWED_DOMAINS:
        assert f"site:{domain}" in provider_query.raw_query_string
    assert provider_query.raw_query_string.count(" OR ") == (
        len(DEFAULT_ALLOWED_DOMAINS) - 1
    )


def test_provider_query_single_domain() -> None:
    request = SearchRequest(query="preeclampsia", limit=5, offset=0)

    provider_query = build_provider_query(request, ("example-med.org",))

    assert provider_query.raw_query_string == "preeclampsia (site:example-med.org)"
    assert provider_query.num == 5


@pytest.mark.parametrize(("offset", "start"), [(0, 1), (9, 10), (30, 31), (-2, 1)])
def test_provider_query_start_index(offset: int, start: int) -> None:
    request = SearchRequest(query="q", limit=10, offset=offset)

    assert build_provider_query(request, ("a.org",)).start_index == start


def test_clamp_limit_bounds() -> None:
    assert clamp_limit(50) == 10
    assert clamp_limit(0) == 1
    assert clamp_limit(7) == 7
