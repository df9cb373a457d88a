"""Fragment Builder - Build links from route templates.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from roadquery_core.querystring.codec import QuerystringCodec, format_value
from roadquery_core.querystring.codecs import BracketCodec
from roadquery_core.routing.compiler import TOKEN_RE
from roadquery_core.utils.helpers import append_querystring


def is_query_mapping(value: Any) -> bool:
    """Check if value is a querystring map: a mapping with only str keys."""
    return isinstance(value, Mapping) and all(isinstance(k, str) for k in value)


class FragmentBuilder:
    """Builds fragments from route templates.

    Two modes:
    - Named: tokens are looked up by name in a map, and whatever the
      template doesn't consume becomes the querystring.
    - Positional: tokens are filled left to right, missing values become
      empty strings, and an optional map is appended as the querystring.

    A list bound to a path token is joined with the codec's
    ``array_delimiter``.

    Usage:
        builder = FragmentBuilder()
        builder.from_params("page/:id", {"id": 9, "show": True})
        # "page/9?show=true"
        builder.from_values("page/:a/:b", 1, 2, query={"c": "d"})
        # "page/1/2?c=d"
    """

    def __init__(self, codec: Optional[QuerystringCodec] = None):
        self.codec = codec or BracketCodec()

    def from_params(self, template: str, params: Mapping[str, Any]) -> str:
        """Build a fragment in named-substitution mode.

        ``params`` is copied, never modified.
        """
        leftover = dict(params)

        def substitute(match) -> str:
            return self._format(leftover.pop(match.group(2), None))

        path = TOKEN_RE.sub(substitute, template)
        return self._with_query(path, leftover)

    def from_values(
        self,
        template: str,
        *values: Any,
        query: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Build a fragment in positional mode."""
        remaining = iter(values)
        path = TOKEN_RE.sub(
            lambda match: self._format(next(remaining, None)),
            template,
        )
        return self._with_query(path, query)

    def to_fragment(self, template: str, *args: Any) -> str:
        """Build a fragment, picking the mode from the arguments.

        A single query mapping selects named mode. Otherwise the arguments
        are positional values, and a trailing query mapping is used as the
        querystring.

        Usage:
            builder.to_fragment("page/:id", {"id": 9, "show": True})
            builder.to_fragment("page/:a/:b", 1, 2, {"c": "d"})
        """
        if len(args) == 1 and is_query_mapping(args[0]):
            return self.from_params(template, args[0])

        if args and is_query_mapping(args[-1]):
            return self.from_values(template, *args[:-1], query=args[-1])

        return self.from_values(template, *args)

    def _format(self, value: Any) -> str:
        # Lists bound to a path token are joined like delimited query values
        if isinstance(value, (list, tuple)):
            delimiter = self.codec.config.array_delimiter
            return delimiter.join(format_value(item) for item in value)
        return format_value(value)

    def _with_query(self, path: str, query: Optional[Mapping[str, Any]]) -> str:
        if not query:
            return path
        return append_querystring(path, self.codec.serialize(query))


__all__ = [
    "FragmentBuilder",
    "is_query_mapping",
]
