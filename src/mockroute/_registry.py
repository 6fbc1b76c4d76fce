"""Criterion registry: the ordered list of factories that compile a route.

Architecture:
- RegistryBuilder → .build() → Registry (immutable)
- Factories are plain callables: (route, patterns) → CallMatcher | NotRequested
- Registry.compile() runs every factory once and keeps the active criteria

Example::

    builder = register_builtin_criteria(RegistryBuilder())
    registry = builder.build()

    matcher = registry.compile(RouteSpec(url="express:/users/:id", params={"id": "7"}))
    matcher.matches("http://api.test/users/7")

The built-in order is query, method, headers, params, body, functionMatcher,
url. The CompiledMatcher evaluates criteria in that order.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mockroute._config import RouteSpec, parse_route_spec
from mockroute._criteria import (
    body_criterion,
    function_criterion,
    headers_criterion,
    method_criterion,
    params_criterion,
    query_criterion,
    url_criterion,
)
from mockroute._matcher import (
    CompiledMatcher,
    ConfigurationError,
    Criterion,
    NotRequested,
)
from mockroute._patterns import DEFAULT_PATTERNS, PatternCompilers
from mockroute._string_matchers import normalize_identifier

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mockroute._matcher import CriterionResult

logger = logging.getLogger("mockroute")

type Factory = Callable[[RouteSpec, PatternCompilers], CriterionResult]


@dataclass(frozen=True, slots=True)
class CriterionFactory:
    """A named factory, plus whether its criterion reads the raw body."""

    name: str
    factory: Factory
    uses_body: bool = False


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register criterion factories in evaluation order, then call build() to
    produce an immutable Registry.
    """

    def __init__(self, patterns: PatternCompilers = DEFAULT_PATTERNS) -> None:
        self._factories: list[CriterionFactory] = []
        self._patterns = patterns

    def criterion(
        self, name: str, factory: Factory, *, uses_body: bool = False
    ) -> RegistryBuilder:
        """Append a criterion factory."""
        self._factories.append(CriterionFactory(name, factory, uses_body))
        return self

    def patterns(self, patterns: PatternCompilers) -> RegistryBuilder:
        """Replace the pattern compilers handed to factories."""
        self._patterns = patterns
        return self

    def build(self) -> Registry:
        """Freeze the registry. No further registration is possible.

        Raises:
            ConfigurationError: If two factories share a name.
        """
        seen: set[str] = set()
        for entry in self._factories:
            if entry.name in seen:
                msg = f"criterion {entry.name!r} registered more than once"
                raise ConfigurationError(msg)
            seen.add(entry.name)
        return Registry(factories=tuple(self._factories), patterns=self._patterns)


def register_builtin_criteria(builder: RegistryBuilder) -> RegistryBuilder:
    """Register the seven built-in criteria in canonical order."""
    return (
        builder.criterion("query", query_criterion)
        .criterion("method", method_criterion)
        .criterion("headers", headers_criterion)
        .criterion("params", params_criterion)
        .criterion("body", body_criterion, uses_body=True)
        .criterion("functionMatcher", function_criterion)
        .criterion("url", url_criterion)
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable, ordered registry of criterion factories.

    Constructed via RegistryBuilder. Use compile() to turn a RouteSpec into a
    CompiledMatcher.
    """

    factories: tuple[CriterionFactory, ...] = ()
    patterns: PatternCompilers = field(default=DEFAULT_PATTERNS, repr=False)

    @property
    def names(self) -> tuple[str, ...]:
        """Registered criterion names, in evaluation order."""
        return tuple(f.name for f in self.factories)

    def contains(self, name: str) -> bool:
        return name in self.names

    def compile(self, route: RouteSpec | Mapping[str, Any]) -> CompiledMatcher:
        """Compile a route into a CompiledMatcher.

        Dict routes are parsed with parse_route_spec() first.

        Raises:
            ConfigParseError: dict route malformed
            ConfigurationError: criteria that cannot apply to this route
            PatternError: glob or path template does not compile
        """
        if not isinstance(route, RouteSpec):
            route = parse_route_spec(route)

        criteria: list[Criterion] = []
        for entry in self.factories:
            match entry.factory(route, self.patterns):
                case NotRequested():
                    continue
                case matcher:
                    criteria.append(Criterion(entry.name, matcher, entry.uses_body))

        compiled = CompiledMatcher(
            criteria=tuple(criteria),
            identifier=normalize_identifier(route.url, route.identifier),
        )
        logger.debug(
            "compiled route %r with criteria %s", compiled.identifier, ", ".join(compiled.names)
        )
        return compiled


@functools.cache
def default_registry() -> Registry:
    """The built-in criteria with the default pattern compilers."""
    return register_builtin_criteria(RegistryBuilder()).build()


def compile_route(route: RouteSpec | Mapping[str, Any]) -> CompiledMatcher:
    """Compile a route with the default registry."""
    return default_registry().compile(route)
