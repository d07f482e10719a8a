"""Tests for the exception hierarchy and exit codes."""

from __future__ import annotations

import pytest

from nominatim_client.exceptions import (
    CachedFailure,
    ConfigError,
    DecodeFailure,
    InvalidUsageError,
    NominatimClientError,
    RequestError,
    TransportFailure,
)
from nominatim_client.exit_codes import (
    EXIT_CACHED_FAILURE,
    EXIT_DECODE_FAILURE,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_TRANSPORT_FAILURE,
)


KEY = "https://example.org/search?q=x"


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (NominatimClientError("x"), EXIT_GENERIC_FAILURE),
        (ConfigError("x"), EXIT_GENERIC_FAILURE),
        (InvalidUsageError("x"), EXIT_INVALID_USAGE),
        (RequestError(KEY, "x"), EXIT_GENERIC_FAILURE),
        (TransportFailure(KEY, "x"), EXIT_TRANSPORT_FAILURE),
        (DecodeFailure(KEY, "x"), EXIT_DECODE_FAILURE),
        (CachedFailure(KEY, "x"), EXIT_CACHED_FAILURE),
    ],
)
def test_exit_codes(exc: NominatimClientError, code: int) -> None:
    assert exc.exit_code == code


def test_exit_code_override() -> None:
    assert NominatimClientError("x", exit_code=42).exit_code == 42


def test_request_failures_share_base() -> None:
    for cls in (TransportFailure, DecodeFailure, CachedFailure):
        assert issubclass(cls, RequestError)
        assert issubclass(cls, NominatimClientError)


def test_transport_failure_status_code() -> None:
    exc = TransportFailure(KEY, "boom", status_code=500)
    assert exc.request_key == KEY
    assert exc.status_code == 500
    assert TransportFailure(KEY, "boom").status_code is None


def test_cached_failure_message() -> None:
    exc = CachedFailure(KEY, "Server error '500 Internal Server Error'")
    assert exc.request_key == KEY
    assert exc.cached_message == "Server error '500 Internal Server Error'"
    assert str(exc) == (
        f"Failed to send request '{KEY}' to Nominatim server. "
        "Cached error: Server error '500 Internal Server Error'"
    )
