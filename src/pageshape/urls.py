"""Href codec: (path, query) pairs to and from a single href string."""

from collections.abc import Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit


def query_decode(query: str | None) -> dict[str, str] | None:
    """Returns the query parameters as a dict, or None for an empty query."""
    if not query:
        return None
    return dict(parse_qsl(query, keep_blank_values=True))


def href_decode(href: str) -> tuple[str, dict[str, str] | None]:
    """Splits an href into its bare path and query parameters.

    Raises ValueError if the href cannot be parsed.
    """
    parts = urlsplit(href)
    return parts.path, query_decode(parts.query)


def href_encode(path: str | None, query: Mapping[str, object] | None) -> str:
    """Joins a path and query parameters into an href."""
    if not query:
        return path or ""
    query_string = urlencode([(key, str(value)) for key, value in query.items()])
    return f"{path}?{query_string}" if path else query_string
