"""Request key construction.

A request key is the exact URL sent to the server: the base URL followed
by the percent-encoded query string. The same string is used as the cache
key, so two requests share a cache entry exactly when they would hit the
same URL.

Keys and values are encoded with :func:`urllib.parse.quote` and an empty
``safe`` set, which leaves only the unreserved characters (ASCII letters,
digits and ``-_.~``) as they are. Spaces become ``%20``, never ``+``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import quote


def _encode(text: Any) -> str:
    return quote(str(text), safe="")


def build_request_key(
    url: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    sort: bool = False,
) -> str:
    """Append *params* to *url* as a percent-encoded query string.

    The base URL is not parsed or validated. When it already contains a
    ``?`` the parameters are appended with ``&``.

    Args:
        url: Base URL of the server method.
        params: Query parameters. Iteration order is preserved unless
            *sort* is set.
        sort: Order the parameters by name so that equal mappings always
            produce equal keys.

    Returns:
        The request URL; *url* itself when *params* is empty or ``None``.

    Example::

        >>> build_request_key("https://example.org/search", {"q": "Berlin Straße"})
        'https://example.org/search?q=Berlin%20Stra%C3%9Fe'
    """
    if not params:
        return url

    items = sorted(params.items()) if sort else params.items()
    query = "&".join(f"{_encode(key)}={_encode(value)}" for key, value in items)
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"
