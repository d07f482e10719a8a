"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~nominatim_client.exceptions.NominatimClientError`
subclass. Shell wrappers can inspect the exit code to tell a network
failure from a cached one without parsing stderr.

Example::

    $ nominatim-client get https://nominatim.example.org/search -p q=Berlin
    $ echo $?
    5   # EXIT_TRANSPORT_FAILURE -- the server could not be reached
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (including configuration problems)."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_TRANSPORT_FAILURE = 5
"""The HTTP request failed (network error or non-2xx status)."""

EXIT_DECODE_FAILURE = 6
"""The response body could not be decoded into the expected type."""

EXIT_CACHED_FAILURE = 7
"""The request was short-circuited by a cached error."""
