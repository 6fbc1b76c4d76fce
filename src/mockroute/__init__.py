"""mockroute: request matching for HTTP mocks.

Compiles a declarative route (URL pattern plus optional method, query,
headers, path params, body and custom-function criteria) into a reusable
matcher for observed calls.

All public types are exported from this module for flat imports:

    from mockroute import CallOptions, RouteSpec, compile_route
"""

__version__ = "0.1.0"

from mockroute._compare import deep_equal, is_subset

# Route configuration
from mockroute._config import ConfigParseError, RouteSpec, parse_route_spec

# Criterion matchers
from mockroute._criteria import (
    BodyMatcher,
    FunctionCallMatcher,
    HeaderMatcher,
    MethodMatcher,
    ParamsMatcher,
    QueryMatcher,
    UrlCallMatcher,
)

# Compiled matcher and errors
from mockroute._matcher import (
    NOT_REQUESTED,
    CompiledMatcher,
    ConfigurationError,
    Criterion,
    CriterionResult,
    MatcherError,
    NotRequested,
    PatternError,
)

# Pattern compilers
from mockroute._patterns import (
    PathKey,
    PathTemplate,
    PatternCompilers,
    compile_glob,
    compile_path_template,
)

# Registry, see mockroute._registry for details
from mockroute._registry import (
    CriterionFactory,
    Registry,
    RegistryBuilder,
    compile_route,
    default_registry,
    register_builtin_criteria,
)

# URL matchers
from mockroute._string_matchers import (
    AnyUrlMatcher,
    BeginMatcher,
    EndMatcher,
    ExpressMatcher,
    FullUrlMatcher,
    GlobMatcher,
    PathMatcher,
    RegexUrlMatcher,
    Shorthand,
    compile_url_pattern,
)
from mockroute._types import CallMatcher, CallOptions, UrlMatcher
from mockroute._urls import normalize_url

__all__ = [
    # Protocols and call context
    "CallOptions",
    "CallMatcher",
    "UrlMatcher",
    # Route configuration
    "RouteSpec",
    "parse_route_spec",
    "ConfigParseError",
    # Compiled matcher
    "CompiledMatcher",
    "Criterion",
    "CriterionResult",
    "NotRequested",
    "NOT_REQUESTED",
    # Errors
    "MatcherError",
    "ConfigurationError",
    "PatternError",
    # Registry
    "CriterionFactory",
    "Registry",
    "RegistryBuilder",
    "register_builtin_criteria",
    "default_registry",
    "compile_route",
    # Criterion matchers
    "QueryMatcher",
    "MethodMatcher",
    "HeaderMatcher",
    "ParamsMatcher",
    "BodyMatcher",
    "FunctionCallMatcher",
    "UrlCallMatcher",
    # URL matchers
    "Shorthand",
    "AnyUrlMatcher",
    "RegexUrlMatcher",
    "BeginMatcher",
    "EndMatcher",
    "GlobMatcher",
    "ExpressMatcher",
    "PathMatcher",
    "FullUrlMatcher",
    "compile_url_pattern",
    # Pattern compilers
    "PatternCompilers",
    "PathKey",
    "PathTemplate",
    "compile_glob",
    "compile_path_template",
    # Helpers
    "normalize_url",
    "deep_equal",
    "is_subset",
]
