"""Route specifications and their dict form.

A RouteSpec is the declarative input of compilation. Routes usually arrive as
JSON/YAML-shaped dicts, so ``parse_route_spec`` accepts the same keys the
mock definitions use, including the camelCase spellings:

    {"url": "express:/users/:id", "method": "PUT",
     "params": {"id": "7"}, "body": {"name": "x"}, "matchPartialBody": true}

RouteSpec never changes after construction; the normalized identifier is
reported on the CompiledMatcher instead of written back here.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mockroute._matcher import MatcherError
from mockroute._types import FunctionMatcher, HasHref


class ConfigParseError(MatcherError):
    """Error parsing a dict into a RouteSpec."""


@dataclass(frozen=True, slots=True)
class RouteSpec:
    """Declarative description of the calls a mock route intercepts.

    ``url`` is ``"*"``, a compiled regex, an object with an ``href``, or a
    string optionally tagged ``begin:``, ``end:``, ``glob:``, ``express:`` or
    ``path:``. Every other field is an optional criterion.

    ``method`` is lower-cased at construction. ``identifier`` defaults to the
    raw URL pattern as a string.
    """

    url: Any
    method: str | None = None
    query: Mapping[str, Any] | None = None
    headers: Mapping[str, Any] | None = None
    params: Mapping[str, str] | None = None
    body: Any = None
    match_partial_body: bool = False
    function_matcher: FunctionMatcher | None = None
    identifier: str | None = None

    def __post_init__(self) -> None:
        if self.method is not None:
            object.__setattr__(self, "method", self.method.lower())
        if self.identifier is None:
            object.__setattr__(self, "identifier", _default_identifier(self.url))


def _default_identifier(url: Any) -> str | None:
    if isinstance(url, str):
        return url
    if isinstance(url, HasHref):
        return url.href
    pattern = getattr(url, "pattern", None)
    return pattern if isinstance(pattern, str) else None


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → RouteSpec)
# ═══════════════════════════════════════════════════════════════════════════════

# Dict key → RouteSpec field.
_KEYS = {
    "url": "url",
    "method": "method",
    "query": "query",
    "headers": "headers",
    "params": "params",
    "body": "body",
    "matchPartialBody": "match_partial_body",
    "match_partial_body": "match_partial_body",
    "functionMatcher": "function_matcher",
    "function_matcher": "function_matcher",
    "identifier": "identifier",
    "name": "identifier",
}

_MAPPING_FIELDS = ("query", "headers", "params")


def parse_route_spec(data: Mapping[str, Any]) -> RouteSpec:
    """Parse a dict into a RouteSpec.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, Mapping):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = sorted(k for k in data if k not in _KEYS)
    if unknown:
        msg = f"unknown route keys: {unknown}"
        raise ConfigParseError(msg)

    fields: dict[str, Any] = {}
    for key, value in data.items():
        name = _KEYS[key]
        if name in fields:
            msg = f"route field {name!r} given more than once"
            raise ConfigParseError(msg)
        fields[name] = value

    if fields.get("url") is None:
        msg = "missing required field 'url'"
        raise ConfigParseError(msg)

    method = fields.get("method")
    if method is not None and not isinstance(method, str):
        msg = f"'method' must be a string, got {type(method).__name__}"
        raise ConfigParseError(msg)

    for name in _MAPPING_FIELDS:
        value = fields.get(name)
        if value is not None and not isinstance(value, Mapping):
            msg = f"{name!r} must be a mapping, got {type(value).__name__}"
            raise ConfigParseError(msg)

    if not isinstance(fields.get("match_partial_body", False), bool):
        msg = "'matchPartialBody' must be a boolean"
        raise ConfigParseError(msg)

    function_matcher = fields.get("function_matcher")
    if function_matcher is not None and not callable(function_matcher):
        msg = "'functionMatcher' must be callable"
        raise ConfigParseError(msg)

    identifier = fields.get("identifier")
    if identifier is not None and not isinstance(identifier, str):
        msg = f"'identifier' must be a string, got {type(identifier).__name__}"
        raise ConfigParseError(msg)

    return RouteSpec(**fields)
