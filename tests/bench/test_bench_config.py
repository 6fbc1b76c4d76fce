"""Config benchmarks for mockroute.

Measures the dict → RouteSpec → CompiledMatcher path taken by mock
definitions loaded from JSON or YAML.

Run: uv run pytest tests/bench/test_bench_config.py --benchmark-only
"""

from __future__ import annotations

import pytest

from mockroute import compile_route, parse_route_spec

pytest.importorskip("pytest_benchmark")

SIMPLE = {"url": "begin:/api"}

FULL = {
    "url": "express:/users/:id",
    "method": "PUT",
    "query": {"expand": "true"},
    "headers": {"Content-Type": "application/json"},
    "params": {"id": "7"},
    "body": {"name": "ann", "roles": ["admin"]},
    "matchPartialBody": True,
    "name": "update-user",
}


def test_bench_parse_simple(benchmark):
    benchmark(parse_route_spec, SIMPLE)


def test_bench_parse_full(benchmark):
    benchmark(parse_route_spec, FULL)


def test_bench_parse_and_compile_full(benchmark):
    benchmark(compile_route, FULL)
