from __future__ import annotations

from urllib.parse import urlsplit

DEFAULT_ALLOWED_DOMAINS: tuple[str, ...] = (
    "acog.org",
    "smfm.org",
    "ncbi.nlm.nih.gov",
    "pubmed.ncbi.nlm.nih.gov",
    "nichd.nih.gov",
    "cdc.gov",
    "who.int",
    "medlineplus.gov",
    "rcog.org.uk",
    "uptodate.com",
)


def normalize_domain(value: str) -> str | None:
    candidate = value.strip().lower()
    if not candidate:
        return None

    # Accept pasted URLs by keeping only the host part.
    if "://" in candidate:
        try:
            hostname = urlsplit(candidate).hostname
        except ValueError:
            return None
        return hostname or None

    host = candidate.split("/", 1)[0].rstrip(".")
    return host or None


def normalize_allowlist(values: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    ordered: list[str] = []
    for raw in values:
        domain = normalize_domain(raw)
        if domain is None or domain in seen:
            continue
        ordered.append(domain)
        seen.add(domain)
    return tuple(ordered)
