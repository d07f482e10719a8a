"""Canonical Pydantic configuration models for nominatim_client.

These models are the single source of truth for how a client is set up:

* :class:`RequestConfig` -- per-request transport settings handed to the
  httpx client factory.
* :class:`CacheConfig` -- capacity and entry lifespan of the two cache
  pools (successful responses and errors).
* :class:`ClientConfig` -- everything a :class:`~nominatim_client.client.WebClient`
  needs: the transport name, the product identifier used for the
  User-Agent header, request settings, and the optional cache.

All three are frozen: a client's configuration cannot change after the
client has been built. The CLI persists :class:`ClientConfig` as JSON via
:mod:`nominatim_client.config`.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_HTTP_CLIENT_NAME = "default"
DEFAULT_PRODUCT_NAME = "nominatim-client"


class RequestConfig(BaseModel):
    """HTTP settings applied to every request made by a client."""

    model_config = ConfigDict(frozen=True)

    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    follow_redirects: bool = Field(default=True, description="Follow HTTP redirects")


class CacheConfig(BaseModel):
    """Sizing and expiry of the success and error cache pools.

    A size of ``0`` disables the corresponding pool only. Lifespans are
    absolute: an entry expires ``lifespan`` after it was stored, no matter
    how often it is read. JSON accepts either seconds or ISO 8601
    durations (``"P7D"``) for the lifespans.

    Example::

        CacheConfig(
            success_cache_size=500,
            success_cache_entity_lifespan=timedelta(days=1),
            errors_cache_size=0,  # never remember failures
        )
    """

    model_config = ConfigDict(frozen=True)

    success_cache_size: int = Field(
        default=1000, ge=0, description="Maximum number of cached successful responses"
    )
    success_cache_entity_lifespan: timedelta = Field(
        default=timedelta(days=7), description="Time-to-live of a cached successful response"
    )
    errors_cache_size: int = Field(
        default=1000, ge=0, description="Maximum number of cached request errors"
    )
    errors_cache_entity_lifespan: timedelta = Field(
        default=timedelta(hours=1), description="Time-to-live of a cached request error"
    )

    @field_validator("success_cache_entity_lifespan", "errors_cache_entity_lifespan")
    @classmethod
    def _lifespan_positive(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("cache entity lifespan must be positive")
        return value


class ClientConfig(BaseModel):
    """Immutable configuration of a Nominatim web client.

    When ``cache`` is ``None`` the client performs every request against
    the network and never stores anything.
    """

    model_config = ConfigDict(frozen=True)

    http_client_name: str = Field(
        default=DEFAULT_HTTP_CLIENT_NAME,
        description="Name of the httpx client registration used for requests",
    )
    product_name: str = Field(
        default=DEFAULT_PRODUCT_NAME,
        min_length=1,
        description="Product identifier sent in the User-Agent header",
    )
    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: Optional[CacheConfig] = None
    sort_params: bool = Field(
        default=False,
        description="Sort query parameters by name when building request keys",
    )
