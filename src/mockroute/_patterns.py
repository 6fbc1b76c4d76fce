"""Pattern compilers for the ``glob:`` and ``express:`` URL shorthands.

Both compile to ``google-re2`` expressions, giving linear-time matching on
untrusted URLs. RE2 has no lookaround or backreferences, so the generated
expressions avoid them.

Glob syntax: ``*`` matches any run of characters (including ``/``); every
other character is literal, ``?`` included, so globs can contain query
strings. The whole URL must match.

Path-template syntax (Express style):

    /users/:id            named segment, captures up to the next delimiter
    /users/:id?           optional segment
    /files/:path+         one or more segments
    /files/:path*         zero or more segments
    /users/:id(\\d+)      named segment with a custom pattern
    /users/(\\d+)         unnamed segment, keyed "0", "1", ... by position
    /static/*             wildcard, keyed by position

Templates are case-insensitive and tolerate one trailing slash.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import re2

from mockroute._matcher import PatternError

if TYPE_CHECKING:
    from mockroute._types import CompiledPattern, CompiledTemplate

# Groups: escaped char, prefix, name, custom pattern, unnamed group,
# modifier, bare asterisk.
_TOKEN = re2.compile(
    r"(\\.)"
    r"|([/.])?(?:(?::(\w+)(?:\(((?:\\.|[^\\()])+)\))?|\(((?:\\.|[^\\()])+)\))([+*?])?|(\*))"
)


def _compile(source: str, regex: str) -> re2.Pattern[str]:
    try:
        return re2.compile(regex)
    except re2.error as e:
        raise PatternError(source, str(e)) from e


def compile_glob(glob: str) -> CompiledPattern:
    """Compile a glob into an anchored RE2 expression."""
    body = ".*".join(re2.escape(part) for part in glob.split("*"))
    return _compile(glob, f"(?s)^{body}$")


@dataclass(frozen=True, slots=True)
class PathKey:
    """A parameter slot in a path template."""

    name: str
    prefix: str = ""
    optional: bool = False
    repeat: bool = False
    partial: bool = False
    pattern: str = "[^/]+?"


@dataclass(frozen=True, slots=True)
class PathTemplate:
    """A compiled Express-style path template.

    Captures are paired with ``keys`` by position; empty or missing captures
    are left out of the result.
    """

    template: str
    regex: re2.Pattern[str] = field(repr=False, compare=False)
    keys: tuple[PathKey, ...] = ()

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(k.name for k in self.keys)

    def match(self, path: str, /) -> dict[str, str] | None:
        m = self.regex.search(path)
        if m is None:
            return None
        return {
            key.name: value
            for key, value in zip(self.keys, m.groups(), strict=False)
            if value
        }


def _tokenize(template: str) -> list[str | PathKey]:
    tokens: list[str | PathKey] = []
    literal = ""
    index = 0
    unnamed = 0

    for m in _TOKEN.finditer(template):
        literal += template[index : m.start()]
        index = m.end()
        escaped, prefix, name, capture, group, modifier, asterisk = m.groups()

        if escaped:
            literal += escaped[1]
            continue

        if literal:
            tokens.append(literal)
            literal = ""

        following = template[index : index + 1]
        delimiter = prefix or "/"
        if name is None:
            name = str(unnamed)
            unnamed += 1

        tokens.append(
            PathKey(
                name=name,
                prefix=prefix or "",
                optional=modifier in ("?", "*"),
                repeat=modifier in ("+", "*"),
                partial=bool(prefix) and bool(following) and following != prefix,
                pattern=capture or group or (".*" if asterisk else f"[^{re2.escape(delimiter)}]+?"),
            )
        )

    literal += template[index:]
    if literal:
        tokens.append(literal)
    return tokens


def _key_regex(key: PathKey) -> str:
    prefix = re2.escape(key.prefix) if key.prefix else ""
    capture = f"(?:{key.pattern})"
    if key.repeat:
        capture += f"(?:{prefix}{capture})*"
    if not key.optional:
        return f"{prefix}({capture})"
    if key.partial:
        return f"{prefix}({capture})?"
    return f"(?:{prefix}({capture}))?"


def compile_path_template(template: str) -> CompiledTemplate:
    """Compile an Express-style path template.

    Raises:
        PatternError: If a custom segment pattern is not valid RE2 syntax.
    """
    tokens = _tokenize(template)

    # Non-strict mode: a trailing slash in the template is optional.
    if tokens and isinstance(tokens[-1], str) and tokens[-1].endswith("/"):
        tokens[-1] = tokens[-1][:-1]

    route = "".join(
        re2.escape(token) if isinstance(token, str) else _key_regex(token)
        for token in tokens
        if token
    )
    keys = tuple(t for t in tokens if isinstance(t, PathKey))
    regex = _compile(template, f"(?i)^{route}(?:/)?$")
    return PathTemplate(template=template, regex=regex, keys=keys)


@dataclass(frozen=True, slots=True)
class PatternCompilers:
    """The pattern compilers a registry hands to its criterion factories.

    Substitute either compiler to change shorthand semantics, e.g. in tests.
    """

    glob: Callable[[str], CompiledPattern] = compile_glob
    path_template: Callable[[str], CompiledTemplate] = compile_path_template


DEFAULT_PATTERNS = PatternCompilers()
