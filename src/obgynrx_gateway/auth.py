from __future__ import annotations

import logging
from secrets import compare_digest

from obgynrx_gateway.errors import (
    ConfigurationError,
    HostnameNotAllowed,
    InvalidCredential,
    MissingCredential,
)

API_KEY_HEADER = "X-OBGYNRX-KEY"

logger = logging.getLogger(__name__)


def check_credential(provided: str | None, expected: str | None) -> None:
    if not expected:
        logger.error("credential_check_failed reason=proxy_key_not_configured")
        raise ConfigurationError()

    if not provided:
        logger.warning("credential_check_failed reason=missing_header")
        raise MissingCredential()

    if not compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("credential_check_failed reason=invalid_key")
        raise InvalidCredential()

    logger.debug("credential_check_passed")


def check_hostname(hostname: str | None, allowed_hostnames: frozenset[str]) -> None:
    if not allowed_hostnames:
        return

    normalized = (hostname or "").strip().lower()
    if normalized not in allowed_hostnames:
        logger.warning("hostname_blocked hostname=%s", normalized or "-")
        raise HostnameNotAllowed()
