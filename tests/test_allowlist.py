from __future__ import annotations

from obgynrx_gateway.allowlist import (
    DEFAULT_ALLOWED_DOMAINS,
    normalize_allowlist,
    normalize_domain,
)


def test_default_allowlist_is_bare_hostnames() -> None:
    assert DEFAULT_ALLOWED_DOMAINS
    for domain in DEFAULT_ALLOWED_DOMAINS:
        assert normalize_domain(domain) == domain
        assert "/" not in domain


def test_normalize_domain_strips_scheme_and_path() -> None:
    assert normalize_domain("https://www.ACOG.org/clinical") == "www.acog.org"
    assert normalize_domain("cdc.gov/reproductivehealth") == "cdc.gov"
    assert normalize_domain(" who.int. ") == "who.int"


def test_normalize_domain_rejects_empty() -> None:
    assert normalize_domain("   ") is None
    assert normalize_domain("https://") is None


def test_normalize_allowlist_keeps_first_order_and_drops_duplicates() -> None:
    assert normalize_allowlist(["b.org", "A.org", "b.org", "", "a.org"]) == (
        "b.org",
        "a.org",
    )
