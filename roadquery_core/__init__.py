"""RoadQuery - Querystring-aware route matching.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

RoadQuery lets route templates carry an optional trailing querystring:
- Route templates with named (:id) and splat (*path) tokens
- Querystrings captured and decoded on match
- Links built from templates with leftover params serialized
- Pluggable querystring codecs

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────┐
│                             RoadQuery                               │
├─────────────────────────────────────────────────────────────────────┤
│                                                                     │
│  Building:  template + params ──▶ FragmentBuilder ──▶ fragment      │
│                                        │                            │
│                                        ▼                            │
│                               QuerystringCodec.serialize            │
│                                                                     │
│  Matching:  template ──▶ RoutePatternCompiler ──▶ CompiledPattern   │
│             fragment ──▶ regex ──▶ ParameterExtractor ──▶ params    │
│                                        │                            │
│                                        ▼                            │
│                              QuerystringCodec.deserialize           │
│                                                                     │
│  ┌────────────────────┐  ┌───────────────────┐  ┌────────────────┐  │
│  │   Codecs           │  │   Routing         │  │   Utils        │  │
│  │                    │  │                   │  │                │  │
│  │ - Standard         │  │ - Router          │  │ - Config       │  │
│  │ - Delimited        │  │ - Compiler        │  │ - Helpers      │  │
│  │ - Bracket          │  │ - Extractor       │  │                │  │
│  │ - JSON             │  │ - FragmentBuilder │  │                │  │
│  └────────────────────┘  └───────────────────┘  └────────────────┘  │
│                                                                     │
└─────────────────────────────────────────────────────────────────────┘

Usage:
    from roadquery_core import QuerystringRouter

    router = QuerystringRouter()

    @router.route("page/:id")
    def show_page(page_id, query):
        ...

    router.dispatch("#page/9?show=true")   # show_page("9", {"show": "true"})
    router.to_fragment("page/:id", {"id": 9, "show": True})
    # "page/9?show=true"
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# Errors
from roadquery_core.errors import (
    RoadQueryError,
    MalformedQuerystring,
    CompilerAssumptionViolated,
)

# Querystring codecs
from roadquery_core.querystring.codec import CodecConfig, ParseResult, QuerystringCodec
from roadquery_core.querystring.codecs import (
    StandardCodec,
    DelimitedCodec,
    BracketCodec,
    JSONCodec,
    get_codec,
    register_codec,
)

# Routing
from roadquery_core.routing.router import Router, Route, RouteMatch
from roadquery_core.routing.compiler import CompiledPattern, RoutePatternCompiler
from roadquery_core.routing.extractor import ParameterExtractor
from roadquery_core.routing.fragment import FragmentBuilder
from roadquery_core.routing.mixin import QuerystringRoutes, QuerystringRouter

# Utils
from roadquery_core.utils.config import Config, load_config

__all__ = [
    # Version
    "__version__",
    # Errors
    "RoadQueryError",
    "MalformedQuerystring",
    "CompilerAssumptionViolated",
    # Codecs
    "CodecConfig",
    "ParseResult",
    "QuerystringCodec",
    "StandardCodec",
    "DelimitedCodec",
    "BracketCodec",
    "JSONCodec",
    "get_codec",
    "register_codec",
    # Routing
    "Router",
    "Route",
    "RouteMatch",
    "CompiledPattern",
    "RoutePatternCompiler",
    "ParameterExtractor",
    "FragmentBuilder",
    "QuerystringRoutes",
    "QuerystringRouter",
    # Utils
    "Config",
    "load_config",
]
