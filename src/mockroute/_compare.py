"""Structural comparison of decoded JSON values.

Booleans never equal numbers here (``True != 1``), unlike plain ``==``.
Lists and tuples are interchangeable; strings are scalars, not sequences.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def deep_equal(expected: Any, actual: Any) -> bool:
    """Full structural equality."""
    if isinstance(expected, Mapping):
        if not isinstance(actual, Mapping) or expected.keys() != actual.keys():
            return False
        return all(deep_equal(value, actual[key]) for key, value in expected.items())
    if _is_sequence(expected):
        if not _is_sequence(actual) or len(expected) != len(actual):
            return False
        return all(deep_equal(e, a) for e, a in zip(expected, actual, strict=True))
    if isinstance(expected, bool) or isinstance(actual, bool):
        return type(expected) is type(actual) and expected == actual
    return expected == actual


def is_subset(expected: Any, actual: Any) -> bool:
    """True if every key/value of ``expected`` appears in ``actual``.

    Mappings recurse per key and ignore extra keys in ``actual``. Sequences
    compare position by position, so ``[1]`` is contained in ``[1, 2]``.
    Scalars are never subsets: only containers can be partially matched.
    """
    if isinstance(expected, Mapping):
        if not isinstance(actual, Mapping):
            return False
        return all(
            key in actual and _contains(value, actual[key]) for key, value in expected.items()
        )
    if _is_sequence(expected):
        if not _is_sequence(actual) or len(expected) > len(actual):
            return False
        return all(_contains(value, actual[i]) for i, value in enumerate(expected))
    return False


def _contains(expected: Any, actual: Any) -> bool:
    if isinstance(expected, Mapping) or _is_sequence(expected):
        return is_subset(expected, actual)
    return deep_equal(expected, actual)
