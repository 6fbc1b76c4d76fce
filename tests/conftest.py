"""Route fixture loader for mockroute.

Loads YAML fixtures from tests/fixtures/ and converts them to mockroute types
for parametrized testing. Each document declares one route and the calls it
should (or should not) match; documents with ``expect_error`` name the
exception compilation must raise instead.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

import mockroute
from mockroute import CallOptions

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class RouteCase:
    """A single call from a route fixture."""

    fixture_name: str
    case_name: str
    route: dict[str, Any]
    url: str
    options: CallOptions
    expect: bool


@dataclass
class RouteErrorCase:
    """A route fixture whose compilation must fail."""

    fixture_name: str
    route: dict[str, Any]
    error: type[Exception]


# ─── YAML → mockroute type conversion ───────────────────────────────────────


def parse_options(spec: dict[str, Any] | None) -> CallOptions:
    """Parse a case's options into CallOptions.

    A ``json`` key is serialized into ``body``, so fixtures can write bodies
    as YAML structures.
    """
    if not spec:
        return CallOptions()
    body = spec.get("body")
    if "json" in spec:
        body = json.dumps(spec["json"])
    headers = spec.get("headers")
    if headers is not None:
        headers = {str(k): str(v) for k, v in headers.items()}
    return CallOptions(method=spec.get("method"), headers=headers, body=body)


def parse_error(name: str) -> type[Exception]:
    """Resolve an exception name exported by mockroute."""
    error = getattr(mockroute, name, None)
    if not (isinstance(error, type) and issubclass(error, mockroute.MatcherError)):
        msg = f"Unknown expect_error type: {name}"
        raise ValueError(msg)
    return error


# ─── Fixture loading ────────────────────────────────────────────────────────


def _load_documents() -> list[dict[str, Any]]:
    docs: list[dict[str, Any]] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        with yaml_file.open() as f:
            docs.extend(doc for doc in yaml.safe_load_all(f) if doc is not None)
    return docs


def load_route_fixtures() -> list[RouteCase]:
    """Load every matching case from the route fixtures."""
    cases: list[RouteCase] = []
    for doc in _load_documents():
        if "expect_error" in doc:
            continue
        for case in doc["cases"]:
            cases.append(
                RouteCase(
                    fixture_name=doc["name"],
                    case_name=case["name"],
                    route=doc["route"],
                    url=str(case["url"]),
                    options=parse_options(case.get("options")),
                    expect=bool(case["expect"]),
                )
            )
    return cases


def load_route_error_fixtures() -> list[RouteErrorCase]:
    """Load the route fixtures that must fail to compile."""
    return [
        RouteErrorCase(
            fixture_name=doc["name"],
            route=doc["route"],
            error=parse_error(doc["expect_error"]),
        )
        for doc in _load_documents()
        if "expect_error" in doc
    ]


# ─── Parametrization ────────────────────────────────────────────────────────


def pytest_generate_tests(metafunc: Any) -> None:
    """Parametrize ``route_case`` and ``route_error_case`` from the fixtures."""
    if "route_case" in metafunc.fixturenames:
        cases = load_route_fixtures()
        ids = [f"{c.fixture_name}::{c.case_name}" for c in cases]
        metafunc.parametrize("route_case", cases, ids=ids)
    if "route_error_case" in metafunc.fixturenames:
        errors = load_route_error_fixtures()
        metafunc.parametrize("route_error_case", errors, ids=[c.fixture_name for c in errors])
