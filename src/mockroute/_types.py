"""Core protocols and value types for mockroute.

The engine has two phases:
- compile time: a RouteSpec is turned into CallMatchers, once per route
- match time: each CallMatcher sees the observed URL and a CallOptions record

UrlMatcher is the narrower port used by URL pattern variants, which only look
at the URL. CompiledPattern and CompiledTemplate are the contracts of the
injected glob and path-template compilers.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

# Header input as callers supply it: a mapping (values may be multi-valued)
# or an iterable of (name, value) pairs where names may repeat.
type HeadersInput = Mapping[str, str | Sequence[str]] | Iterable[tuple[str, str]] | None


@dataclass(frozen=True, slots=True)
class CallOptions:
    """The request options of an observed call.

    ``method`` defaults to None, which every matcher treats as ``get``.
    ``body`` is the raw payload, usually JSON-encoded text.
    """

    method: str | None = None
    headers: HeadersInput = None
    body: str | bytes | None = None


@runtime_checkable
class UrlMatcher(Protocol):
    """Decide whether an observed URL satisfies a URL pattern."""

    def matches(self, url: str, /) -> bool: ...


@runtime_checkable
class CallMatcher(Protocol):
    """Decide whether an observed call satisfies one criterion.

    Implementations are compiled once per route and must be side-effect-free
    at match time.
    """

    def matches(self, url: str, options: CallOptions, /) -> bool: ...


class CompiledPattern(Protocol):
    """A compiled regular expression (``re2`` or ``re``)."""

    def search(self, text: str, /) -> Any: ...


class CompiledTemplate(Protocol):
    """A compiled path template.

    ``match`` returns the captured parameters keyed by name, or None if the
    path does not fit the template.
    """

    def match(self, path: str, /) -> dict[str, str] | None: ...


@runtime_checkable
class HasHref(Protocol):
    """Any URL object exposing its resolved absolute form as ``href``."""

    href: str


type FunctionMatcher = Callable[[str, CallOptions], bool]
