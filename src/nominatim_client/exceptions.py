"""Exception hierarchy for nominatim_client.

All exceptions inherit from :class:`NominatimClientError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`nominatim_client.exit_codes`. The CLI entry point in
:func:`nominatim_client.app.main` catches ``NominatimClientError`` and
exits with the matching code.

Failures of an individual request derive from :class:`RequestError` and
always carry the request key (the fully encoded URL) they belong to::

    NominatimClientError    (exit 1)
    +-- ConfigError         (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- RequestError        (exit 1)
        +-- TransportFailure  (exit 5)
        +-- DecodeFailure     (exit 6)
        +-- CachedFailure     (exit 7)
"""

from __future__ import annotations

from typing import Optional

from nominatim_client.exit_codes import (
    EXIT_CACHED_FAILURE,
    EXIT_DECODE_FAILURE,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_TRANSPORT_FAILURE,
)


class NominatimClientError(Exception):
    """Base exception for all nominatim_client errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(NominatimClientError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidUsageError(NominatimClientError):
    """Raised for invalid CLI arguments such as a malformed ``KEY=VALUE`` pair."""

    exit_code = EXIT_INVALID_USAGE


class RequestError(NominatimClientError):
    """A request to the Nominatim server failed.

    Args:
        request_key: The encoded URL that was (or would have been) requested.
        message: Human-readable error description.
    """

    def __init__(self, request_key: str, message: str):
        super().__init__(message)
        self.request_key = request_key


class TransportFailure(RequestError):
    """The HTTP call failed: connection error, timeout, or non-2xx status.

    ``status_code`` is set when the server answered with an error status and
    ``None`` for network-level failures. The original ``httpx`` exception is
    available as ``__cause__``.
    """

    exit_code = EXIT_TRANSPORT_FAILURE

    def __init__(self, request_key: str, message: str, status_code: Optional[int] = None):
        super().__init__(request_key, message)
        self.status_code = status_code


class DecodeFailure(RequestError):
    """The response body could not be decoded into the requested type."""

    exit_code = EXIT_DECODE_FAILURE


class CachedFailure(RequestError):
    """The request key is known to fail; the network was not contacted.

    ``cached_message`` holds the error description recorded when the
    request originally failed.
    """

    exit_code = EXIT_CACHED_FAILURE

    def __init__(self, request_key: str, cached_message: str):
        super().__init__(
            request_key,
            f"Failed to send request '{request_key}' to Nominatim server. "
            f"Cached error: {cached_message}",
        )
        self.cached_message = cached_message
