"""CompiledMatcher: the per-route artifact of compilation.

A CompiledMatcher is an ordered tuple of active Criterion entries plus the
normalized route identifier. Criteria that a route did not request never
appear: factories return NotRequested and the registry drops it.

The tuple stays introspectable so the dispatcher can report which criterion
rejected a call; ``matches`` is the plain conjunction over it.
"""

from __future__ import annotations

from dataclasses import dataclass

from mockroute._types import CallMatcher, CallOptions


class MatcherError(Exception):
    """Base for all mockroute errors."""


class ConfigurationError(MatcherError):
    """A route cannot be compiled as specified.

    Raised at compile time, never at match time.
    """


class PatternError(MatcherError):
    """A glob or path-template pattern failed to compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid pattern {pattern!r}: {reason}")


@dataclass(frozen=True, slots=True)
class NotRequested:
    """The route did not ask for this criterion.

    This is a distinct variant, not a permissive predicate: the registry
    drops it instead of evaluating it.
    """


NOT_REQUESTED = NotRequested()

# What a criterion factory produces.
type CriterionResult = CallMatcher | NotRequested


@dataclass(frozen=True, slots=True)
class Criterion:
    """A named, compiled criterion of a route.

    ``uses_body`` flags criteria that read the raw request body, so callers
    can skip materializing it for routes that never look at it.
    """

    name: str
    matcher: CallMatcher
    uses_body: bool = False

    def matches(self, url: str, options: CallOptions, /) -> bool:
        return self.matcher.matches(url, options)


@dataclass(frozen=True, slots=True)
class CompiledMatcher:
    """All active criteria of one route, in registry order.

    INV: immutable after compilation; evaluation has no side effects.
    """

    criteria: tuple[Criterion, ...]
    identifier: str | None = None

    @property
    def names(self) -> tuple[str, ...]:
        """Names of the active criteria, in evaluation order."""
        return tuple(c.name for c in self.criteria)

    @property
    def uses_body(self) -> bool:
        """True if any active criterion needs the raw request body."""
        return any(c.uses_body for c in self.criteria)

    def get(self, name: str) -> Criterion | None:
        """Look up an active criterion by name."""
        for criterion in self.criteria:
            if criterion.name == name:
                return criterion
        return None

    def matches(self, url: str, options: CallOptions | None = None) -> bool:
        """Evaluate every criterion with short-circuit AND."""
        return self.first_failure(url, options) is None

    def first_failure(self, url: str, options: CallOptions | None = None) -> str | None:
        """Return the name of the first criterion rejecting the call.

        Returns None when the call matches.
        """
        if options is None:
            options = CallOptions()
        for criterion in self.criteria:
            if not criterion.matches(url, options):
                return criterion.name
        return None
