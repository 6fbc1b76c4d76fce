"""Criterion matchers and the factories that build them from a RouteSpec.

Each factory has the signature ``(route, patterns) -> CallMatcher |
NotRequested`` and runs once per route. Optional criteria return
NOT_REQUESTED when the route does not mention them; ``body`` and ``url`` are
always compiled.

Match-time mismatches of any kind (missing header, wrong method, unparsable
body) evaluate to False. Only compile-time mistakes raise.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mockroute._compare import deep_equal, is_subset
from mockroute._matcher import NOT_REQUESTED, ConfigurationError
from mockroute._string_matchers import Shorthand, compile_url_pattern
from mockroute._urls import (
    canonicalize_query,
    get_path,
    get_query,
    headers_equal,
    normalize_headers,
    parse_query,
)

if TYPE_CHECKING:
    from mockroute._config import RouteSpec
    from mockroute._matcher import CriterionResult
    from mockroute._patterns import PatternCompilers
    from mockroute._types import CallOptions, CompiledTemplate, FunctionMatcher, UrlMatcher
    from mockroute._urls import HeaderValue

logger = logging.getLogger("mockroute")

DEFAULT_METHOD = "get"


def _observed_method(options: CallOptions) -> str:
    return options.method.lower() if options.method else DEFAULT_METHOD


# ═══════════════════════════════════════════════════════════════════════════════
# Matchers
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class QueryMatcher:
    """Every expected query parameter is present with the expected value.

    Expected values are canonicalized through the wire format at
    construction, so ``1`` and ``True`` compare as ``"1"`` and ``"true"``.
    A repeated parameter matches a list regardless of order. Extra observed
    parameters are ignored.
    """

    query: Mapping[str, Any]
    _expected: dict[str, str | list[str]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_expected", canonicalize_query(self.query))

    def matches(self, url: str, options: CallOptions, /) -> bool:
        observed = parse_query(get_query(url))
        for key, expected in self._expected.items():
            actual = observed.get(key)
            if isinstance(actual, list):
                if not isinstance(expected, list) or sorted(actual) != sorted(expected):
                    return False
            elif actual != expected:
                return False
        return True


@dataclass(frozen=True, slots=True)
class MethodMatcher:
    """Case-insensitive HTTP method equality; a missing method is ``get``."""

    method: str
    _expected: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_expected", self.method.lower())

    def matches(self, url: str, options: CallOptions, /) -> bool:
        return _observed_method(options) == self._expected


@dataclass(frozen=True, slots=True)
class HeaderMatcher:
    """Every expected header is present with an equal value.

    Names compare case-insensitively; values compare case-sensitively.
    """

    headers: Mapping[str, Any]
    _expected: dict[str, HeaderValue] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_expected", normalize_headers(self.headers))

    def matches(self, url: str, options: CallOptions, /) -> bool:
        observed = normalize_headers(options.headers)
        return all(
            headers_equal(observed.get(name), expected)
            for name, expected in self._expected.items()
        )


@dataclass(frozen=True, slots=True)
class ParamsMatcher:
    """Path parameters captured by a template equal the expected values."""

    template: CompiledTemplate
    params: Mapping[str, str]

    def matches(self, url: str, options: CallOptions, /) -> bool:
        captured = self.template.match(get_path(url)) or {}
        return all(
            key in captured and captured[key] == expected
            for key, expected in self.params.items()
        )


@dataclass(frozen=True, slots=True)
class BodyMatcher:
    """The JSON request body equals, or contains, the expected value.

    GET calls always pass: they carry no body to compare. A route without a
    body expectation passes every call.
    """

    body: Any = None
    partial: bool = False

    def matches(self, url: str, options: CallOptions, /) -> bool:
        if _observed_method(options) == DEFAULT_METHOD or self.body is None:
            return True

        try:
            sent = json.loads(options.body)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            logger.debug("request body to %s is not JSON, body criterion fails", url)
            return False
        if sent is None:
            return False

        if self.partial:
            return is_subset(self.body, sent)
        return deep_equal(self.body, sent)


@dataclass(frozen=True, slots=True)
class FunctionCallMatcher:
    """Passes the call to a user predicate and returns its answer verbatim."""

    function: FunctionMatcher

    def matches(self, url: str, options: CallOptions, /) -> bool:
        return self.function(url, options)


@dataclass(frozen=True, slots=True)
class UrlCallMatcher:
    """Adapts a UrlMatcher to the call signature; options are ignored."""

    url_matcher: UrlMatcher

    def matches(self, url: str, options: CallOptions, /) -> bool:
        return self.url_matcher.matches(url)


# ═══════════════════════════════════════════════════════════════════════════════
# Factories
# ═══════════════════════════════════════════════════════════════════════════════


def query_criterion(route: RouteSpec, patterns: PatternCompilers) -> CriterionResult:
    if not route.query:
        return NOT_REQUESTED
    return QueryMatcher(route.query)


def method_criterion(route: RouteSpec, patterns: PatternCompilers) -> CriterionResult:
    if not route.method:
        return NOT_REQUESTED
    return MethodMatcher(route.method)


def headers_criterion(route: RouteSpec, patterns: PatternCompilers) -> CriterionResult:
    if not route.headers:
        return NOT_REQUESTED
    return HeaderMatcher(route.headers)


def params_criterion(route: RouteSpec, patterns: PatternCompilers) -> CriterionResult:
    """Compile a params criterion.

    Raises:
        ConfigurationError: If the route URL is not an ``express:`` template;
            no other pattern kind names its path segments.
    """
    if not route.params:
        return NOT_REQUESTED

    split = Shorthand.split(route.url) if isinstance(route.url, str) else None
    if split is None or split[0] is not Shorthand.EXPRESS:
        msg = (
            "matching on params is only possible with an express: url, "
            f"got {route.url!r}"
        )
        raise ConfigurationError(msg)

    template = patterns.path_template(split[1])
    return ParamsMatcher(template, route.params)


def body_criterion(route: RouteSpec, patterns: PatternCompilers) -> CriterionResult:
    return BodyMatcher(route.body, partial=route.match_partial_body)


def function_criterion(route: RouteSpec, patterns: PatternCompilers) -> CriterionResult:
    if route.function_matcher is None:
        return NOT_REQUESTED
    return FunctionCallMatcher(route.function_matcher)


def url_criterion(route: RouteSpec, patterns: PatternCompilers) -> CriterionResult:
    """Compile the URL criterion.

    Raises:
        ConfigurationError: If the route URL is not a supported pattern type.
        PatternError: If a glob or path template does not compile.
    """
    matcher = compile_url_pattern(
        route.url,
        query_aware=bool(route.query),
        patterns=patterns,
    )
    return UrlCallMatcher(matcher)
