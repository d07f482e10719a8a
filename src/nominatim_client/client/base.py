"""Request flow shared by the synchronous and asynchronous web clients.

Both clients run the same sequence around a single network call:

1. build the request key from the URL and query parameters,
2. consult the cache -- a hit returns the stored value, a known error
   raises :class:`~nominatim_client.exceptions.CachedFailure`,
3. on a miss perform the GET and decode the body,
4. record the outcome in the success or error pool,
5. return the value or raise the typed failure.

Only step 3 differs between the two clients, so everything else lives on
:class:`BaseWebClient`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Protocol, TypeVar

import httpx

from nominatim_client import __version__
from nominatim_client.cache import CacheHit, KnownError, ResponseCache
from nominatim_client.decoding import Decoder, PydanticDecoder
from nominatim_client.exceptions import CachedFailure, DecodeFailure, RequestError, TransportFailure
from nominatim_client.models import ClientConfig
from nominatim_client.query import build_request_key
from nominatim_client.transport import HttpClientFactory, build_user_agent

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=RequestError)

_MISSING: Any = object()


class Transport(Protocol):
    def get(self, url: str, headers: Optional[dict[str, str]] = None) -> str: ...


class AsyncTransport(Protocol):
    async def get(self, url: str, headers: Optional[dict[str, str]] = None) -> str: ...


class BaseWebClient:
    """Configuration, cache and error mapping common to both clients.

    Args:
        config: Client configuration. ``config.cache`` set to ``None``
            disables caching entirely.
        factory: httpx client factory. When omitted a new factory is
            created and ``config.http_client_name`` is registered with
            ``config.request``.
        decoder: Response decoder; defaults to :class:`PydanticDecoder`.
        version: Version reported in the User-Agent header; defaults to
            the installed package version.
        cache: Pre-built cache, overriding ``config.cache``.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        factory: Optional[HttpClientFactory] = None,
        decoder: Optional[Decoder] = None,
        version: Optional[str] = None,
        cache: Optional[ResponseCache] = None,
    ) -> None:
        self._config = config or ClientConfig()
        if factory is None:
            factory = HttpClientFactory()
            factory.register(self._config.http_client_name, self._config.request)
        self._factory = factory
        self._decoder: Decoder = decoder or PydanticDecoder()
        self._user_agent = build_user_agent(self._config.product_name, version or __version__)

        if cache is None and self._config.cache is not None:
            cache = ResponseCache.from_config(self._config.cache)
        self._cache: Optional[ResponseCache] = cache

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def cache(self) -> Optional[ResponseCache]:
        """The response cache, or ``None`` when caching is disabled."""
        return self._cache

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def request_key(self, url: str, params: Optional[Mapping[str, Any]] = None) -> str:
        return build_request_key(url, params, sort=self._config.sort_params)

    # ------------------------------------------------------------------ #
    # Steps shared by both clients
    # ------------------------------------------------------------------ #

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self._user_agent, "Accept": "application/json"}

    def _cache_lookup(self, key: str) -> Any:
        """Return the cached value, raise for a cached error, or return ``_MISSING``."""
        if self._cache is None:
            return _MISSING

        result = self._cache.lookup(key)
        if isinstance(result, CacheHit):
            return result.value
        if isinstance(result, KnownError):
            raise CachedFailure(key, result.message)
        return _MISSING

    def _decode(self, key: str, raw: str, result_type: type[T]) -> T:
        try:
            value = self._decoder.decode(raw, result_type)
        except Exception as exc:
            raise self._failed(
                key, DecodeFailure(key, f"Failed to decode response of '{key}': {exc}"), exc
            ) from exc

        if self._cache is not None:
            self._cache.record_success(key, value)
        return value

    def _transport_failure(self, key: str, exc: Exception) -> TransportFailure:
        """Wrap any error raised by the transport, including invalid URLs."""
        status_code: Optional[int] = None
        if isinstance(exc, httpx.HTTPStatusError):
            status_code = exc.response.status_code
        failure = TransportFailure(
            key,
            f"Failed to send request '{key}' to Nominatim server: {exc}",
            status_code=status_code,
        )
        return self._failed(key, failure, exc)

    def _failed(self, key: str, failure: E, cause: Exception) -> E:
        """Log *failure*, remember *cause* in the errors pool, and hand *failure* back for raising."""
        logger.debug("%s", failure)
        if self._cache is not None:
            self._cache.record_error(key, str(cause) or type(cause).__name__)
        return failure
