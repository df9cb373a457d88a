"""Parameter Extractor - Route captures with decoded querystrings.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import re
from typing import Any, Callable, List, Optional

from roadquery_core.querystring.codec import QuerystringCodec
from roadquery_core.querystring.codecs import BracketCodec
from roadquery_core.routing.compiler import CompiledPattern
from roadquery_core.routing.router import extract_parameters

QUERYSTRING_PARAM = re.compile(r"^\?(.*)", re.DOTALL)

HostExtractor = Callable[[re.Pattern, str], Optional[List[Any]]]


class ParameterExtractor:
    """Extracts route parameters, decoding a trailing querystring.

    Usage:
        extractor = ParameterExtractor(BracketCodec())
        extractor.extract(compiler.compile("page/:id"), "page/9?show=true")
        # ["9", {"show": "true"}]
    """

    def __init__(
        self,
        codec: Optional[QuerystringCodec] = None,
        host: HostExtractor = extract_parameters,
    ):
        self.codec = codec or BracketCodec()
        self._host = host

    def extract(self, compiled: CompiledPattern, path: str) -> Optional[List[Any]]:
        """Extract parameters of a path.

        Returns:
            Parameter list, or None if the path doesn't match
        """
        captures = self._host(compiled.regex, path)
        if captures is None:
            return None
        return self.decode(captures)

    def decode(self, captures: List[Any]) -> List[Any]:
        """Replace a trailing ``?...`` capture with its decoded map."""
        params = list(captures)
        if not params or not isinstance(params[-1], str):
            return params

        match = QUERYSTRING_PARAM.match(params[-1])
        if match:
            params[-1] = self.codec.deserialize(match.group(1))
        return params


__all__ = [
    "ParameterExtractor",
]
