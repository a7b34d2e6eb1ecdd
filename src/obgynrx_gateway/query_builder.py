from __future__ import annotations

from dataclasses import dataclass

from obgynrx_gateway.errors import BadRequest

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0
# Google Custom Search returns at most 10 items per call.
MAX_LIMIT = 10


@dataclass(frozen=True)
class SearchRequest:
    query: str
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET


@dataclass(frozen=True)
class ProviderQuery:
    raw_query_string: str
    start_index: int
    num: int


def build_search_request(
    q: str | None, limit: str | int | None = None, offset: str | int | None = None
) -> SearchRequest:
    if q is None:
        raise BadRequest()

    normalized_query = " ".join(q.split())
    if not normalized_query:
        raise BadRequest("Query parameter q must not be empty.")

    return SearchRequest(
        query=normalized_query,
        limit=clamp_limit(_as_int(limit, DEFAULT_LIMIT)),
        offset=max(0, _as_int(offset, DEFAULT_OFFSET)),
    )


def build_provider_query(
    request: SearchRequest, allowed_domains: tuple[str, ...]
) -> ProviderQuery:
    restriction = " OR ".join(f"site:{domain}" for domain in allowed_domains)
    return ProviderQuery(
        raw_query_string=f"{request.query} ({restriction})",
        start_index=max(0, request.offset) + 1,
        num=clamp_limit(request.limit),
    )


def clamp_limit(limit: int) -> int:
    return min(MAX_LIMIT, max(1, limit))


def _as_int(value: str | int | None, default: int) -> int:
    if isinstance(value, int):
        return value
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default
