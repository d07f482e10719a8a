"""Request orchestration for nominatim_client.

Provides synchronous and asynchronous clients that build a request key,
consult the dual-pool :class:`~nominatim_client.cache.ResponseCache`,
perform the GET through :mod:`httpx` on a miss, decode the body with
pydantic, and record the outcome.

Classes:
    :class:`WebClient` -- blocking client backed by :class:`httpx.Client`.
    :class:`AsyncWebClient` -- non-blocking client backed by :class:`httpx.AsyncClient`.

Example::

    from nominatim_client.client import WebClient

    client = WebClient()
    status = client.get_request("https://nominatim.openstreetmap.org/status", {"format": "json"})
"""

from nominatim_client.client.async_client import AsyncWebClient
from nominatim_client.client.web_client import WebClient

__all__ = ["AsyncWebClient", "WebClient"]
