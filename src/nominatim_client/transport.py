"""HTTP transport: named httpx client factory, GET transports, User-Agent.

The request flow never holds on to an HTTP client. For every request it
asks :class:`HttpClientFactory` for a fresh, fully configured
:class:`httpx.Client` (or :class:`httpx.AsyncClient`) by name, uses it for
one GET, and closes it when the ``with`` block exits.

Registrations map a client name to a
:class:`~nominatim_client.models.RequestConfig` and, optionally, a custom
httpx transport. Tests register an :class:`httpx.MockTransport` to fake
the server without touching the network.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from nominatim_client.models import DEFAULT_HTTP_CLIENT_NAME, RequestConfig

logger = logging.getLogger(__name__)


def build_user_agent(product_name: str, version: str) -> str:
    """Return a ``product/version`` User-Agent token, e.g. ``nominatim-client/0.1.0``."""
    return f"{product_name}/{version}"


@dataclass(frozen=True)
class ClientRegistration:
    """Settings used to build httpx clients for one client name."""

    request: RequestConfig
    transport: Optional[httpx.BaseTransport] = None
    async_transport: Optional[httpx.AsyncBaseTransport] = None


class HttpClientFactory:
    """Creates configured httpx clients by name.

    A ``"default"`` registration always exists. Unknown names fall back to
    it, so a client configured with an unregistered ``http_client_name``
    still works with default settings.

    Args:
        default_request: Request settings of the ``"default"`` registration.

    Example::

        factory = HttpClientFactory()
        factory.register("slow", RequestConfig(timeout=120))
        with factory.create_client("slow") as client:
            client.get("https://nominatim.openstreetmap.org/status")
    """

    def __init__(self, default_request: Optional[RequestConfig] = None) -> None:
        self._registrations: dict[str, ClientRegistration] = {
            DEFAULT_HTTP_CLIENT_NAME: ClientRegistration(default_request or RequestConfig()),
        }

    def register(
        self,
        name: str,
        request: Optional[RequestConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Add or replace the registration for *name*."""
        self._registrations[name] = ClientRegistration(
            request=request or RequestConfig(),
            transport=transport,
            async_transport=async_transport,
        )

    def registration(self, name: str) -> ClientRegistration:
        """Return the registration for *name*, or the default one."""
        try:
            return self._registrations[name]
        except KeyError:
            logger.debug("No http client registered as %r, using default", name)
            return self._registrations[DEFAULT_HTTP_CLIENT_NAME]

    def create_client(self, name: str) -> httpx.Client:
        reg = self.registration(name)
        return httpx.Client(
            timeout=reg.request.timeout,
            verify=reg.request.verify_ssl,
            follow_redirects=reg.request.follow_redirects,
            transport=reg.transport,
        )

    def create_async_client(self, name: str) -> httpx.AsyncClient:
        reg = self.registration(name)
        return httpx.AsyncClient(
            timeout=reg.request.timeout,
            verify=reg.request.verify_ssl,
            follow_redirects=reg.request.follow_redirects,
            transport=reg.async_transport,
        )


class HttpTransport:
    """Blocking GET transport backed by a :class:`HttpClientFactory`.

    Args:
        factory: Source of configured httpx clients.
        client_name: Registration name used for every request.
    """

    def __init__(self, factory: HttpClientFactory, client_name: str = DEFAULT_HTTP_CLIENT_NAME) -> None:
        self._factory = factory
        self._client_name = client_name

    def get(self, url: str, headers: Optional[dict[str, str]] = None) -> str:
        """Fetch *url* and return the response text.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response.
            httpx.HTTPError: On connection errors and timeouts.
        """
        with self._factory.create_client(self._client_name) as client:
            response = client.get(url, headers=headers)
            response.raise_for_status()
            return response.text


class AsyncHttpTransport:
    """Non-blocking counterpart of :class:`HttpTransport`."""

    def __init__(self, factory: HttpClientFactory, client_name: str = DEFAULT_HTTP_CLIENT_NAME) -> None:
        self._factory = factory
        self._client_name = client_name

    async def get(self, url: str, headers: Optional[dict[str, str]] = None) -> str:
        async with self._factory.create_async_client(self._client_name) as client:
            response = await client.get(url, headers=headers)
            response.raise_for_status()
            return response.text
