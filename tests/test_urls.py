"""Tests for URL, query-string and header helpers."""

import pytest

from mockroute._urls import (
    canonicalize_query,
    get_path,
    get_query,
    headers_equal,
    normalize_headers,
    normalize_url,
    parse_query,
    stringify_query,
    strip_query,
)


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("http://x.test", "http://x.test/"),
            ("http://x.test/", "http://x.test/"),
            ("HTTP://X.Test/Path", "http://x.test/Path"),
            ("https://x.test:443/a", "https://x.test/a"),
            ("http://x.test:80/a", "http://x.test/a"),
            ("http://x.test:8080/a", "http://x.test:8080/a"),
            ("//x.test/a", "http://x.test/a"),
            ("http://user:pw@x.test", "http://user:pw@x.test/"),
            ("http://[::1]:8080/a", "http://[::1]:8080/a"),
            ("http://x.test/a?b=1#frag", "http://x.test/a?b=1#frag"),
        ],
    )
    def test_absolute(self, url: str, expected: str) -> None:
        assert normalize_url(url) == expected

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("/a/b?c=1", "/a/b?c=1"),
            ("a/b", "/a/b"),
            ("", "/"),
            ("/a/../b", "/b"),
        ],
    )
    def test_relative(self, url: str, expected: str) -> None:
        assert normalize_url(url) == expected

    def test_unparseable_port_left_alone(self) -> None:
        assert normalize_url("http://x.test:bad/") == "http://x.test:bad/"


class TestUrlParts:
    def test_get_path(self) -> None:
        assert get_path("http://x.test/a/b?c=1") == "/a/b"
        assert get_path("http://x.test") == "/"
        assert get_path("/rel?x=1") == "/rel"

    def test_get_query(self) -> None:
        assert get_query("http://x.test/a?b=1&c=2") == "b=1&c=2"
        assert get_query("http://x.test/a") == ""

    def test_strip_query(self) -> None:
        assert strip_query("http://x.test/a?b=1#f") == "http://x.test/a#f"
        assert strip_query("http://x.test/a") == "http://x.test/a"


class TestQueryStrings:
    def test_parse_single_and_repeated(self) -> None:
        assert parse_query("a=1&b=2&b=3&c=") == {"a": "1", "b": ["2", "3"], "c": ""}

    def test_stringify_scalars_and_sequences(self) -> None:
        assert stringify_query({"a": 1, "b": True, "c": ["x", "y"]}) == "a=1&b=true&c=x&c=y"

    def test_canonicalize_matches_wire_types(self) -> None:
        assert canonicalize_query({"n": 1.5, "flag": False}) == {"n": "1.5", "flag": "false"}

    def test_single_item_sequence_collapses(self) -> None:
        assert canonicalize_query({"tags": ["a"]}) == {"tags": "a"}

    def test_encoding_round_trip(self) -> None:
        assert canonicalize_query({"q": "a b&c"}) == {"q": "a b&c"}


class TestHeaders:
    def test_mapping_lowercased(self) -> None:
        headers = {"Content-Type": "x", "X-Multi": ["a", "b"]}
        assert normalize_headers(headers) == {"content-type": "x", "x-multi": ["a", "b"]}

    def test_pairs_collect_repeats(self) -> None:
        headers = [("Accept", "a"), ("accept", "b"), ("X", "1")]
        assert normalize_headers(headers) == {"accept": ["a", "b"], "x": "1"}

    def test_none_is_empty(self) -> None:
        assert normalize_headers(None) == {}

    def test_non_string_values_stringified(self) -> None:
        assert normalize_headers({"X-Count": 3}) == {"x-count": "3"}

    def test_equal_single(self) -> None:
        assert headers_equal("a", "a") is True
        assert headers_equal("A", "a") is False

    def test_equal_missing(self) -> None:
        assert headers_equal(None, "a") is False

    def test_equal_multi(self) -> None:
        assert headers_equal(["a", "b"], ["a", "b"]) is True
        assert headers_equal(["a", "b"], "a") is False
        assert headers_equal("a", ["a"]) is True
