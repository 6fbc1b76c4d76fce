"""URL, query-string and header helpers.

Normalization reconciles the spellings a mocked client may produce for the
same URL: scheme and host case, default ports, and the implicit ``/`` path of
an origin-only URL. Relative URLs normalize to ``path?query``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

if TYPE_CHECKING:
    from mockroute._types import HeadersInput

# Stands in for the origin when resolving relative URLs.
_DUMMY_ORIGIN = "http://dummy/"

DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}


def is_absolute(url: str) -> bool:
    parts = urlsplit(url)
    return bool(parts.scheme and parts.netloc)


def normalize_url(url: str) -> str:
    """Canonicalize a URL so equivalent spellings compare equal.

    >>> normalize_url("HTTP://Example.COM")
    'http://example.com/'
    >>> normalize_url("/api/users?id=1")
    '/api/users?id=1'
    """
    if url.startswith("//"):
        url = "http:" + url
    if not is_absolute(url):
        parts = urlsplit(urljoin(_DUMMY_ORIGIN, url))
        return parts.path + (f"?{parts.query}" if parts.query else "")

    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    try:
        port = parts.port
    except ValueError:
        # Unparseable port: leave the URL alone, it can only equal itself.
        return url

    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    netloc = host
    if port is not None and port != DEFAULT_PORTS.get(scheme):
        netloc = f"{host}:{port}"
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))


def get_path(url: str) -> str:
    """Path component of a URL, ``/`` when empty."""
    return urlsplit(urljoin(_DUMMY_ORIGIN, url)).path or "/"


def get_query(url: str) -> str:
    """Raw query string of a URL, without the leading ``?``."""
    return urlsplit(url).query


def strip_query(url: str) -> str:
    parts = urlsplit(url)
    return urlunsplit(parts._replace(query=""))


# ── Query strings ───────────────────────────────────────────────────────────


def parse_query(query: str) -> dict[str, str | list[str]]:
    """Decode a query string.

    A name seen once maps to its string value; a repeated name maps to the
    list of its values in order.
    """
    result: dict[str, str | list[str]] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        current = result.get(key)
        if current is None:
            result[key] = value
        elif isinstance(current, list):
            current.append(value)
        else:
            result[key] = [current, value]
    return result


def _query_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def stringify_query(query: Mapping[str, Any]) -> str:
    """Encode a mapping as a query string; sequences become repeated names."""
    pairs: list[tuple[str, str]] = []
    for key, value in query.items():
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _query_scalar(v)) for v in value)
        else:
            pairs.append((key, _query_scalar(value)))
    return urlencode(pairs)


def canonicalize_query(query: Mapping[str, Any]) -> dict[str, str | list[str]]:
    """Round-trip a mapping through the wire format.

    Values come back exactly as an observed query string would decode.
    """
    return parse_query(stringify_query(query))


# ── Headers ─────────────────────────────────────────────────────────────────


type HeaderValue = str | list[str]


def _header_value(value: Any) -> HeaderValue:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return str(value)


def normalize_headers(headers: HeadersInput) -> dict[str, HeaderValue]:
    """Lower-case header names; a repeated name collects a list of values."""
    if not headers:
        return {}
    if isinstance(headers, Mapping):
        return {str(name).lower(): _header_value(value) for name, value in headers.items()}

    result: dict[str, HeaderValue] = {}
    for name, value in headers:
        key = str(name).lower()
        current = result.get(key)
        if current is None:
            result[key] = str(value)
        elif isinstance(current, list):
            current.append(str(value))
        else:
            result[key] = [current, str(value)]
    return result


def headers_equal(actual: HeaderValue | None, expected: HeaderValue) -> bool:
    """Compare header values, single or multi-valued, element-wise."""
    if actual is None:
        return False
    actual_values = actual if isinstance(actual, list) else [actual]
    expected_values = expected if isinstance(expected, list) else [expected]
    return actual_values == expected_values
