"""nominatim_client -- cached HTTP client for Nominatim geocoding servers.

This package sends GET requests to a Nominatim server, decodes the JSON
responses into typed Python objects, and optionally remembers both
successful and failed outcomes in an in-memory, size-bounded, expiring
cache so that repeated queries skip the network.

Typical usage::

    from nominatim_client import CacheConfig, ClientConfig, WebClient

    client = WebClient(ClientConfig(cache=CacheConfig()))
    places = client.get_request(
        "https://nominatim.openstreetmap.org/search",
        {"q": "Berlin", "format": "jsonv2"},
        list[dict],
    )

Modules:
    query: Canonical request-key (URL + query string) builder.
    cache: Dual-pool (successes / errors) response cache.
    client: Synchronous and asynchronous request orchestration.
    transport: httpx client factory, transports and User-Agent helper.
    decoding: Generic JSON decoding through pydantic.
    models: Pydantic configuration models.
    config: XDG-aware persistence of the CLI configuration.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer command-line entry point.
"""

__version__ = "0.1.0"

from nominatim_client.cache import CacheHit, CacheMiss, CachePool, KnownError, MISS, ResponseCache  # noqa: E402
from nominatim_client.client import AsyncWebClient, WebClient  # noqa: E402
from nominatim_client.exceptions import (  # noqa: E402
    CachedFailure,
    DecodeFailure,
    NominatimClientError,
    RequestError,
    TransportFailure,
)
from nominatim_client.models import CacheConfig, ClientConfig, RequestConfig  # noqa: E402
from nominatim_client.query import build_request_key  # noqa: E402

__all__ = [
    "__version__",
    "AsyncWebClient",
    "CacheConfig",
    "CacheHit",
    "CacheMiss",
    "CachePool",
    "CachedFailure",
    "ClientConfig",
    "DecodeFailure",
    "KnownError",
    "MISS",
    "NominatimClientError",
    "RequestConfig",
    "RequestError",
    "ResponseCache",
    "TransportFailure",
    "WebClient",
    "build_request_key",
]
