from __future__ import annotations

import os
from dataclasses import dataclass

from obgynrx_gateway.allowlist import DEFAULT_ALLOWED_DOMAINS, normalize_allowlist

DEFAULT_GOOGLE_SEARCH_BASE_URL = "https://www.googleapis.com/customsearch/v1"
DEFAULT_CORS_ORIGINS = ("*",)


@dataclass(frozen=True)
class Settings:
    proxy_key: str | None = None
    google_api_key: str | None = None
    google_cse_id: str | None = None
    allowed_domains: tuple[str, ...] = DEFAULT_ALLOWED_DOMAINS
    allowed_hostnames: frozenset[str] = frozenset()
    cors_allow_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    google_search_base_url: str = DEFAULT_GOOGLE_SEARCH_BASE_URL
    google_search_timeout_seconds: float = 10.0
    google_search_max_response_bytes: int = 1024 * 1024
    host: str = "127.0.0.1"
    port: int = 3001
    log_level: str = "INFO"

    @property
    def api_key_configured(self) -> bool:
        return bool(self.proxy_key)

    @property
    def google_configured(self) -> bool:
        return bool(self.google_api_key and self.google_cse_id)

    @classmethod
    def from_env(cls) -> Settings:
        allowed_domains = DEFAULT_ALLOWED_DOMAINS
        domains_override = os.getenv("OBGYNRX_ALLOWED_DOMAINS")
        if domains_override is not None and domains_override.strip():
            allowed_domains = normalize_allowlist(domains_override.split(","))
            if not allowed_domains:
                raise RuntimeError(
                    "Invalid OBGYNRX_ALLOWED_DOMAINS. Expected at least one hostname."
                )

        cors_origins = _split_csv_ordered(os.getenv("OBGYNRX_CORS_ORIGINS"))
        if not cors_origins:
            cors_origins = DEFAULT_CORS_ORIGINS

        return cls(
            proxy_key=_optional(os.getenv("OBGYNRX_PROXY_KEY")),
            google_api_key=_optional(os.getenv("GOOGLE_API_KEY")),
            google_cse_id=_optional(os.getenv("GOOGLE_CSE_ID")),
            allowed_domains=allowed_domains,
            allowed_hostnames=frozenset(
                item.lower()
                for item in _split_csv_ordered(os.getenv("OBGYNRX_ALLOWED_HOSTNAMES"))
            ),
            cors_allow_origins=cors_origins,
            google_search_base_url=os.getenv(
                "GOOGLE_SEARCH_BASE_URL", DEFAULT_GOOGLE_SEARCH_BASE_URL
            ),
            google_search_timeout_seconds=_parse_positive_float(
                "GOOGLE_SEARCH_TIMEOUT_SECONDS",
                os.getenv("GOOGLE_SEARCH_TIMEOUT_SECONDS"),
                default=10.0,
            ),
            google_search_max_response_bytes=_parse_positive_int(
                "GOOGLE_SEARCH_MAX_RESPONSE_BYTES",
                os.getenv("GOOGLE_SEARCH_MAX_RESPONSE_BYTES"),
                default=1024 * 1024,
            ),
            host=os.getenv("HOST", "127.0.0.1"),
            port=_parse_positive_int("PORT", os.getenv("PORT"), default=3001),
            log_level=(os.getenv("OBGYNRX_LOG_LEVEL") or "INFO").strip().upper(),
        )


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _split_csv_ordered(value: str | None) -> tuple[str, ...]:
    if value is None:
        return ()

    seen: set[str] = set()
    ordered: list[str] = []
    for raw_item in value.split(","):
        item = raw_item.strip()
        if not item or item in seen:
            continue
        ordered.append(item)
        seen.add(item)

    return tuple(ordered)


def _parse_positive_int(name: str, value: str | None, *, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        raise RuntimeError(f"Invalid {name}. Expected a positive integer.") from None
    if parsed <= 0:
        raise RuntimeError(f"Invalid {name}. Expected a positive integer.")
    return parsed


def _parse_positive_float(name: str, value: str | None, *, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value.strip())
    except ValueError:
        raise RuntimeError(f"Invalid {name}. Expected a positive number.") from None
    if parsed <= 0:
        raise RuntimeError(f"Invalid {name}. Expected a positive number.")
    return parsed
