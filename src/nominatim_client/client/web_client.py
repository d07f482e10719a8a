"""Synchronous Nominatim web client with a dual-pool response cache.

:class:`WebClient` is safe to share between threads: the cache pools are
individually locked and every request uses its own short-lived
:class:`httpx.Client`. Concurrent misses on the same key are not
coalesced; each caller performs its own request and the last stored
outcome wins.

See Also:
    :class:`~nominatim_client.client.async_client.AsyncWebClient` for the
    equivalent non-blocking implementation.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, TypeVar

from nominatim_client.cache import ResponseCache
from nominatim_client.client.base import _MISSING, BaseWebClient, Transport
from nominatim_client.decoding import Decoder
from nominatim_client.models import ClientConfig
from nominatim_client.transport import HttpClientFactory, HttpTransport

T = TypeVar("T")


class WebClient(BaseWebClient):
    """Blocking client for a Nominatim server.

    Args:
        config: Client configuration; caching is enabled by ``config.cache``.
        factory: httpx client factory (see :class:`BaseWebClient`).
        transport: GET transport; defaults to an :class:`HttpTransport`
            over *factory* using ``config.http_client_name``.
        decoder: Response decoder.
        version: Version reported in the User-Agent header.
        cache: Pre-built cache, overriding ``config.cache``.

    Example::

        client = WebClient(ClientConfig(cache=CacheConfig()))
        results = client.get_request(
            "https://nominatim.openstreetmap.org/search",
            {"q": "Berlin", "format": "jsonv2"},
            list[SearchResult],
        )
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        factory: Optional[HttpClientFactory] = None,
        transport: Optional[Transport] = None,
        decoder: Optional[Decoder] = None,
        version: Optional[str] = None,
        cache: Optional[ResponseCache] = None,
    ) -> None:
        super().__init__(config, factory=factory, decoder=decoder, version=version, cache=cache)
        self._transport: Transport = transport or HttpTransport(
            self._factory, self._config.http_client_name
        )

    def get_request(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        result_type: type[T] = Any,  # type: ignore[assignment]
    ) -> T:
        """Send a GET request and decode the JSON response into *result_type*.

        Args:
            url: URL of the Nominatim server method.
            params: Query string parameters.
            result_type: Type the JSON body is validated against. ``Any``
                returns plain JSON values.

        Returns:
            The decoded response, possibly served from the cache.

        Raises:
            CachedFailure: The request is known to fail; no request was sent.
            TransportFailure: The HTTP call failed, returned a non-2xx status,
                or the transport rejected the URL.
            DecodeFailure: The decoder could not turn the body into *result_type*.
        """
        key = self.request_key(url, params)

        cached = self._cache_lookup(key)
        if cached is not _MISSING:
            return cached

        try:
            raw = self._transport.get(key, headers=self._headers())
        except Exception as exc:
            raise self._transport_failure(key, exc) from exc

        return self._decode(key, raw, result_type)
