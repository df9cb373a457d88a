"""Querystring Routes - Querystring support for routers.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional

from roadquery_core.querystring.codec import DiagnosticSink, QuerystringCodec
from roadquery_core.querystring.codecs import get_codec
from roadquery_core.routing.compiler import CompiledPattern, RoutePatternCompiler
from roadquery_core.routing.extractor import ParameterExtractor
from roadquery_core.routing.fragment import FragmentBuilder
from roadquery_core.routing.router import Router
from roadquery_core.utils.config import Config


class QuerystringRoutes:
    """Mixin adding querystring handling to a router.

    Overrides ``route_to_regex`` and ``extract_parameters``, delegating to
    the next router in the MRO. Matched routes receive the decoded
    querystring map as their last parameter.

    Usage:
        class AppRouter(QuerystringRoutes, Router):
            pass

        router = AppRouter()
        router.add("page/:id", handler=show_page)
        router.dispatch("page/9?show=true")  # show_page("9", {"show": "true"})
        router.to_fragment("page/:id", {"id": 9, "show": True})
        # "page/9?show=true"
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        codec: Optional[QuerystringCodec] = None,
        on_error: Optional[DiagnosticSink] = None,
        **kwargs,
    ):
        self.config = config or Config()
        self.codec = codec or get_codec(
            self.config.codec,
            config=self.config.codec_config(),
            on_error=on_error,
        )
        self.compiler = RoutePatternCompiler(host=super().route_to_regex)
        self.extractor = ParameterExtractor(self.codec, host=super().extract_parameters)
        self.fragments = FragmentBuilder(self.codec)

        kwargs.setdefault("strip_leading_slash", self.config.strip_leading_slash)
        super().__init__(**kwargs)

    def route_to_regex(self, template: str) -> re.Pattern:
        """Compile a template, accepting a trailing querystring."""
        return self.compile(template).regex

    def extract_parameters(
        self,
        regex: re.Pattern,
        fragment: str,
    ) -> Optional[List[Any]]:
        """Extract parameters, decoding a trailing querystring."""
        captures = super().extract_parameters(regex, fragment)
        if captures is None:
            return None
        return self.extractor.decode(captures)

    def compile(self, template: str) -> CompiledPattern:
        """Compile a template (cached)."""
        return self.compiler.compile(template)

    def to_fragment(self, template: str, *args: Any) -> str:
        """Build a fragment from a template.

        Usage:
            router.to_fragment("page/:id", {"id": 9, "show": True})
            # "page/9?show=true"
            router.to_fragment("page/:a/:b", 1, 2, {"c": "d"})
            # "page/1/2?c=d"
        """
        return self.fragments.to_fragment(template, *args)

    def from_params(self, template: str, params: Mapping[str, Any]) -> str:
        """Build a fragment in named-substitution mode."""
        return self.fragments.from_params(template, params)

    def from_values(
        self,
        template: str,
        *values: Any,
        query: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Build a fragment in positional mode."""
        return self.fragments.from_values(template, *values, query=query)

    def to_querystring(self, params: Mapping[str, Any]) -> str:
        """Serialize a map into a querystring."""
        return self.codec.serialize(params)

    def from_querystring(self, querystring: str) -> Dict[str, Any]:
        """Parse a querystring into a map."""
        return self.codec.deserialize(querystring)


class QuerystringRouter(QuerystringRoutes, Router):
    """Router whose routes accept a trailing querystring."""


__all__ = [
    "QuerystringRoutes",
    "QuerystringRouter",
]
