"""Errors - Exception types raised by RoadQuery.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations


class RoadQueryError(Exception):
    """Base class for RoadQuery errors."""


class MalformedQuerystring(RoadQueryError, ValueError):
    """Querystring could not be parsed.

    Raised inside codecs only. ``QuerystringCodec.deserialize`` recovers
    from it and returns an empty map.
    """

    def __init__(self, message: str, querystring: str = ""):
        super().__init__(message)
        self.querystring = querystring


class CompilerAssumptionViolated(RoadQueryError):
    """Host regex does not have the sub-pattern shapes the compiler rewrites."""

    def __init__(self, message: str, template: str = "", source: str = ""):
        super().__init__(message)
        self.template = template
        self.source = source


__all__ = [
    "RoadQueryError",
    "MalformedQuerystring",
    "CompilerAssumptionViolated",
]
