"""URL template helpers and per-call URL resolution."""

from __future__ import annotations

import urllib.parse
from collections.abc import Callable
from typing import Any

from porter_client.errors import ClientConstructionError

# A literal path, or a pure function of the path parameters that returns one.
UrlTemplate = str | Callable[[Any], str]


def segment(value: object) -> str:
    """Percent-encode a single path segment, slashes included.

    Template functions call this at the point of interpolation for any segment
    that may hold reserved characters (branch names such as ``feature/login``).
    """
    return urllib.parse.quote(str(value), safe="")


def _query_value(value: object) -> object:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def with_query(path: str, **params: object) -> str:
    """Append addressing query parameters to ``path``, skipping None values."""
    pairs = {key: _query_value(value) for key, value in params.items() if value is not None}
    if not pairs:
        return path
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{urllib.parse.urlencode(pairs)}"


def resolve_url(template: UrlTemplate, path_params: Any, endpoint: str) -> str:
    """Compute the request URL for one invocation.

    A literal template is returned verbatim whatever the path parameters are. A
    callable template is invoked exactly once with the path parameters and its
    output is used as-is; it is never re-encoded.

    Raises:
        ClientConstructionError: If the template raises or returns a non-string.
    """
    if isinstance(template, str):
        return template
    try:
        url = template(path_params)
    except Exception as e:
        raise ClientConstructionError(endpoint, f"URL template failed: {type(e).__name__}: {e}") from e
    if not isinstance(url, str):
        msg = f"URL template returned {type(url).__name__}, expected str"
        raise ClientConstructionError(endpoint, msg)
    return url
