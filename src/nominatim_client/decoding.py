"""Generic JSON decoding of response bodies.

:class:`PydanticDecoder` turns a raw response body into any type pydantic
can validate: ``BaseModel`` subclasses, dataclasses, ``TypedDict``,
``list[...]`` / ``dict[...]`` generics, or plain ``Any``. Field-name
mapping (for example Nominatim's ``display_name`` onto a ``name`` field)
is expressed with pydantic aliases on the target model.

Malformed JSON and schema mismatches both raise
:class:`pydantic.ValidationError`; the request flow wraps that in a
:class:`~nominatim_client.exceptions.DecodeFailure`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")


class Decoder(Protocol):
    """Anything that can decode a raw body into ``result_type``."""

    def decode(self, raw: str, result_type: type[T]) -> T: ...


@lru_cache(maxsize=256)
def _adapter_for(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


class PydanticDecoder:
    """Decode JSON text through a cached :class:`pydantic.TypeAdapter` per target type.

    Args:
        strict: Use pydantic strict mode (no type coercion).
    """

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def decode(self, raw: str, result_type: type[T]) -> T:
        """Validate *raw* JSON against *result_type*.

        Raises:
            pydantic.ValidationError: If *raw* is not valid JSON or does not
                match *result_type*.
        """
        return _adapter_for(result_type).validate_json(raw, strict=self._strict)
