"""Routing module - Route compilation, matching and fragment building."""

from roadquery_core.routing.router import Router, Route, RouteMatch
from roadquery_core.routing.compiler import (
    CompiledPattern,
    RoutePatternCompiler,
    Token,
    TokenKind,
)
from roadquery_core.routing.extractor import ParameterExtractor
from roadquery_core.routing.fragment import FragmentBuilder, is_query_mapping
from roadquery_core.routing.mixin import QuerystringRoutes, QuerystringRouter

__all__ = [
    "Router",
    "Route",
    "RouteMatch",
    "CompiledPattern",
    "RoutePatternCompiler",
    "Token",
    "TokenKind",
    "ParameterExtractor",
    "FragmentBuilder",
    "is_query_mapping",
    "QuerystringRoutes",
    "QuerystringRouter",
]
