"""Asynchronous Nominatim web client -- mirrors :class:`~nominatim_client.client.web_client.WebClient`.

:class:`AsyncWebClient` offers the same request flow and cache semantics
but awaits the network call, so it can be used inside an event loop.
Cache operations stay synchronous: they are in-memory and never block on
I/O.

See Also:
    :class:`~nominatim_client.client.web_client.WebClient` for the
    blocking equivalent.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, TypeVar

from nominatim_client.cache import ResponseCache
from nominatim_client.client.base import _MISSING, AsyncTransport, BaseWebClient
from nominatim_client.decoding import Decoder
from nominatim_client.models import ClientConfig
from nominatim_client.transport import AsyncHttpTransport, HttpClientFactory

T = TypeVar("T")


class AsyncWebClient(BaseWebClient):
    """Non-blocking client for a Nominatim server.

    Accepts the same arguments as
    :class:`~nominatim_client.client.web_client.WebClient`; *transport*
    defaults to an :class:`~nominatim_client.transport.AsyncHttpTransport`.

    Example::

        client = AsyncWebClient(ClientConfig(cache=CacheConfig()))
        results = await client.get_request(
            "https://nominatim.openstreetmap.org/search", {"q": "Berlin"}
        )
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        factory: Optional[HttpClientFactory] = None,
        transport: Optional[AsyncTransport] = None,
        decoder: Optional[Decoder] = None,
        version: Optional[str] = None,
        cache: Optional[ResponseCache] = None,
    ) -> None:
        super().__init__(config, factory=factory, decoder=decoder, version=version, cache=cache)
        self._transport: AsyncTransport = transport or AsyncHttpTransport(
            self._factory, self._config.http_client_name
        )

    async def get_request(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        result_type: type[T] = Any,  # type: ignore[assignment]
    ) -> T:
        """Send an async GET request and decode the JSON response.

        Behaves identically to
        :meth:`~nominatim_client.client.web_client.WebClient.get_request`
        but is non-blocking.
        """
        key = self.request_key(url, params)

        cached = self._cache_lookup(key)
        if cached is not _MISSING:
            return cached

        try:
            raw = await self._transport.get(key, headers=self._headers())
        except Exception as exc:
            raise self._transport_failure(key, exc) from exc

        return self._decode(key, raw, result_type)
