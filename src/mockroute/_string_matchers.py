"""URL matchers implementing the UrlMatcher protocol.

One frozen dataclass per URL pattern variant. ``compile_url_pattern``
classifies a route's ``url`` once, at compile time, so match time never scans
for shorthand prefixes.

Shorthands:

    begin:http://api.test/     prefix of the raw URL
    end:.json                  suffix of the raw URL
    glob:http://*.test/*       glob over the whole raw URL
    express:/users/:id         path template over the path component
    path:/users                exact path component

Any other string, and any object with an ``href``, is a full URL compared
after normalization.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mockroute._matcher import ConfigurationError
from mockroute._patterns import DEFAULT_PATTERNS
from mockroute._types import HasHref
from mockroute._urls import get_path, normalize_url, strip_query

if TYPE_CHECKING:
    from mockroute._patterns import PatternCompilers
    from mockroute._types import CompiledPattern, CompiledTemplate, UrlMatcher

MATCH_ALL = "*"


class Shorthand(enum.Enum):
    """URL shorthand tags, written ``<tag>:<fragment>``."""

    BEGIN = "begin"
    END = "end"
    GLOB = "glob"
    EXPRESS = "express"
    PATH = "path"

    @classmethod
    def split(cls, url: str) -> tuple[Shorthand, str] | None:
        """Split ``tag:fragment`` into its tag and fragment."""
        tag, sep, fragment = url.partition(":")
        if not sep:
            return None
        try:
            return cls(tag), fragment
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class AnyUrlMatcher:
    """Matches every URL."""

    def matches(self, url: str, /) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class RegexUrlMatcher:
    """Delegates to a caller-compiled regex, searched against the raw URL."""

    pattern: CompiledPattern

    def matches(self, url: str, /) -> bool:
        return self.pattern.search(url) is not None


@dataclass(frozen=True, slots=True)
class BeginMatcher:
    """Raw URL starts with the prefix."""

    prefix: str

    def matches(self, url: str, /) -> bool:
        return url.startswith(self.prefix)


@dataclass(frozen=True, slots=True)
class EndMatcher:
    """Raw URL ends with the suffix."""

    suffix: str

    def matches(self, url: str, /) -> bool:
        return url.endswith(self.suffix)


@dataclass(frozen=True, slots=True)
class GlobMatcher:
    """Raw URL matches a glob, compiled at construction."""

    glob: str
    patterns: PatternCompilers = field(default=DEFAULT_PATTERNS, repr=False, compare=False)
    _compiled: CompiledPattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", self.patterns.glob(self.glob))

    def matches(self, url: str, /) -> bool:
        return self._compiled.search(url) is not None


@dataclass(frozen=True, slots=True)
class ExpressMatcher:
    """Path component fits an Express-style template."""

    template: str
    patterns: PatternCompilers = field(default=DEFAULT_PATTERNS, repr=False, compare=False)
    _compiled: CompiledTemplate = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", self.patterns.path_template(self.template))

    @property
    def compiled(self) -> CompiledTemplate:
        return self._compiled

    def matches(self, url: str, /) -> bool:
        return self._compiled.match(get_path(url)) is not None


@dataclass(frozen=True, slots=True)
class PathMatcher:
    """Path component equals the expected path exactly."""

    path: str

    def matches(self, url: str, /) -> bool:
        return get_path(url) == self.path


@dataclass(frozen=True, slots=True)
class FullUrlMatcher:
    """Normalized URL equality.

    The declared URL is normalized once. With ``query_aware`` set (the route
    also has a query criterion) the query string is left to that criterion:
    a declared URL carrying its own ``?`` becomes a prefix of the observed
    URL, and a declared URL without one is compared to the observed URL with
    its query string removed.
    """

    url: str
    query_aware: bool = False
    _expected: str = field(init=False, repr=False, compare=False)
    _prefix_only: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        expected = normalize_url(self.url)
        object.__setattr__(self, "_expected", expected)
        object.__setattr__(self, "_prefix_only", self.query_aware and "?" in expected)

    @property
    def expected(self) -> str:
        """The normalized declared URL."""
        return self._expected

    def matches(self, url: str, /) -> bool:
        observed = normalize_url(url)
        if self._prefix_only:
            return observed.startswith(self._expected)
        if self.query_aware:
            return strip_query(observed) == self._expected
        return observed == self._expected


def _full_url_target(url: Any) -> str | None:
    """The string a full-URL matcher would be built from, if any."""
    if isinstance(url, str):
        if url == MATCH_ALL or Shorthand.split(url) is not None:
            return None
        return url
    if isinstance(url, HasHref):
        return url.href
    return None


def compile_url_pattern(
    url: Any,
    *,
    query_aware: bool = False,
    patterns: PatternCompilers = DEFAULT_PATTERNS,
) -> UrlMatcher:
    """Classify a route URL and build its matcher.

    Raises:
        ConfigurationError: If ``url`` is not a supported pattern type.
        PatternError: If a glob or path template does not compile.
    """
    if isinstance(url, str):
        if url == MATCH_ALL:
            return AnyUrlMatcher()
        split = Shorthand.split(url)
        if split is None:
            return FullUrlMatcher(url, query_aware=query_aware)
        shorthand, fragment = split
        match shorthand:
            case Shorthand.BEGIN:
                return BeginMatcher(fragment)
            case Shorthand.END:
                return EndMatcher(fragment)
            case Shorthand.GLOB:
                return GlobMatcher(fragment, patterns=patterns)
            case Shorthand.EXPRESS:
                return ExpressMatcher(fragment, patterns=patterns)
            case Shorthand.PATH:
                return PathMatcher(fragment)

    if isinstance(url, HasHref):
        return FullUrlMatcher(url.href, query_aware=query_aware)

    if callable(getattr(url, "search", None)):
        return RegexUrlMatcher(url)

    msg = f"unsupported url pattern type: {type(url).__name__}"
    raise ConfigurationError(msg)


def normalize_identifier(url: Any, identifier: str | None) -> str | None:
    """Rewrite an identifier naming a full URL to that URL's normalized form.

    Identifiers of other pattern kinds, and identifiers that do not name the
    route's URL, come back unchanged.
    """
    target = _full_url_target(url)
    if target is not None and identifier == target:
        return normalize_url(target)
    return identifier
