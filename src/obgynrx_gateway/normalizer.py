from __future__ import annotations

from urllib.parse import urlsplit

from obgynrx_gateway.errors import MalformedResultItem
from obgynrx_gateway.models import ProviderResponse, SearchResponse, SearchResult


def normalize(
    raw: ProviderResponse,
    *,
    query: str,
    allowed_domains: tuple[str, ...],
    offset: int,
    limit: int,
) -> SearchResponse:
    results: list[SearchResult] = []
    for index, item in enumerate(raw.items[: max(0, limit)]):
        url = (item.link or "").strip()
        results.append(
            SearchResult(
                id=offset + index + 1,
                title=item.title or "",
                description=item.snippet or "",
                url=url,
                domain=extract_domain(url),
            )
        )

    return SearchResponse(
        query=query,
        total=_parse_total(raw),
        limit=limit,
        offset=offset,
        allowed_domains=list(allowed_domains),
        results=results,
    )


def extract_domain(url: str) -> str:
    try:
        hostname = urlsplit(url).hostname
    except ValueError as exc:
        raise MalformedResultItem(
            "Search provider returned a result with an invalid URL.",
            detail=f"url={url!r}",
        ) from exc
    if not hostname:
        raise MalformedResultItem(
            "Search provider returned a result with an invalid URL.",
            detail=f"url={url!r}",
        )
    return hostname


def _parse_total(raw: ProviderResponse) -> int:
    if raw.search_information is None:
        return 0
    value = raw.search_information.total_results
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(0, value)
    if isinstance(value, str):
        try:
            return max(0, int(value.strip()))
        except ValueError:
            return 0
    return 0
