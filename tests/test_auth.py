from __future__ import annotations

import logging

import pytest

from obgynrx_gateway.auth import check_credential, check_hostname
from obgynrx_gateway.errors import (
    ConfigurationError,
    HostnameNotAllowed,
    InvalidCredential,
    MissingCredential,
)


def test_credential_accepted_when_matching() -> None:
    check_credential("proxy-secret", "proxy-secret")


def test_credential_unconfigured_is_server_error() -> None:
    with pytest.raises(ConfigurationError) as exc:
        check_credential("anything", None)

    assert exc.value.status_code == 500
    assert exc.value.error == "Server configuration error"


def test_credential_unconfigured_wins_over_missing_header() -> None:
    with pytest.raises(ConfigurationError):
        check_credential(None, "")


def test_credential_missing_header() -> None:
    with pytest.raises(MissingCredential) as exc:
        check_credential(None, "proxy-secret")

    assert exc.value.status_code == 401


def test_credential_empty_header_counts_as_missing() -> None:
    with pytest.raises(MissingCredential):
        check_credential("", "proxy-secret")


def test_credential_mismatch() -> None:
    with pytest.raises(InvalidCredential) as exc:
        check_credential("proxy-secreT", "proxy-secret")

    assert exc.value.status_code == 401


def test_credential_logs_do_not_include_secret(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.DEBUG, logger="obgynrx_gateway.auth")

    with pytest.raises(InvalidCredential):
        check_credential("wrong-guess", "proxy-secret")
    check_credential("proxy-secret", "proxy-secret")

    assert "invalid_key" in caplog.text
    assert "proxy-secret" not in caplog.text
    assert "wrong-guess" not in caplog.text


def test_hostname_check_disabled_when_list_empty() -> None:
    check_hostname("anywhere.example", frozenset())


def test_hostname_check_allows_listed_host() -> None:
    check_hostname("LocalHost", frozenset({"localhost"}))


def test_hostname_check_blocks_unlisted_host() -> None:
    with pytest.raises(HostnameNotAllowed) as exc:
        check_hostname("evil.example", frozenset({"localhost"}))

    assert exc.value.status_code == 403


def test_hostname_check_blocks_missing_host() -> None:
    with pytest.raises(HostnameNotAllowed):
        check_hostname(None, frozenset({"localhost"}))
