"""Querystring Codec - Serialization contract for query parameters.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import quote_plus, unquote

from roadquery_core.errors import MalformedQuerystring

logger = logging.getLogger(__name__)

DiagnosticSink = Callable[[str, Exception], None]
# Value is None for a bare key with no "="
Pair = Tuple[str, Optional[str]]

# A percent sign that does not start a two-digit hex escape
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class CodecConfig:
    """Codec configuration."""

    array_delimiter: str = "|"
    encoding: str = "utf-8"


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing a querystring."""

    params: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        """Check if parsing succeeded."""
        return self.error is None


def log_parse_error(querystring: str, error: Exception) -> None:
    """Default diagnostic sink."""
    logger.error(f"Could not parse query string {querystring!r}: {error}")


def format_value(value: Any) -> str:
    """Convert a scalar to its wire text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class QuerystringCodec(ABC):
    """Querystring serializer/deserializer.

    Subclasses decide how values, and multi-valued entries in particular,
    are laid out as ``key=value`` pairs. Percent-encoding, splitting on
    ``&`` and error recovery are shared.

    Usage:
        codec = StandardCodec()
        codec.serialize({"page": 2, "tag": ["a", "b"]})  # page=2&tag=a&tag=b
        codec.deserialize("page=2&tag=a&tag=b")
        # {"page": "2", "tag": ["a", "b"]}
    """

    name: str = ""

    def __init__(
        self,
        config: Optional[CodecConfig] = None,
        on_error: Optional[DiagnosticSink] = None,
    ):
        self.config = config or CodecConfig()
        self.on_error = on_error or log_parse_error

    @abstractmethod
    def _encode(self, key: str, value: Any) -> List[Pair]:
        """Turn one entry into unquoted wire pairs."""
        pass

    @abstractmethod
    def _decode(self, pairs: List[Pair]) -> Dict[str, Any]:
        """Build a map from unquoted wire pairs.

        Raises:
            ValueError: If the pairs cannot form a valid map. Any other
                error raised here is also reported as a parse failure
        """
        pass

    def serialize(self, params: Mapping[str, Any]) -> str:
        """Serialize a flat map into ``key=value&key2=value2`` form.

        Raises:
            TypeError: If a value is itself a mapping
        """
        pairs: List[Pair] = []
        for key, value in params.items():
            if isinstance(value, Mapping):
                raise TypeError(f"Nested value for key {key!r} is not supported")
            pairs.extend(self._encode(key, value))

        return "&".join(
            self._quote(key) if value is None
            else f"{self._quote(key)}={self._quote(value)}"
            for key, value in pairs
        )

    def parse(self, querystring: str) -> ParseResult:
        """Parse a querystring without raising or reporting."""
        try:
            return ParseResult(params=self._decode(self._split(querystring)))
        except Exception as e:
            return ParseResult(error=e)

    def deserialize(self, querystring: str) -> Dict[str, Any]:
        """Parse a querystring into a map.

        Malformed input is reported to the diagnostic sink and yields an
        empty map. Never raises.
        """
        result = self.parse(querystring)
        if result.ok:
            return result.params

        self._report(querystring, result.error)
        return {}

    def _report(self, querystring: str, error: Exception) -> None:
        try:
            self.on_error(querystring, error)
        except Exception as e:
            logger.error(f"Diagnostic sink error: {e}")

    def _split(self, querystring: str) -> List[Pair]:
        if querystring.startswith("?"):
            querystring = querystring[1:]

        pairs = []
        for part in querystring.split("&"):
            if not part:
                continue
            key, sep, value = part.partition("=")
            pairs.append((
                self._unquote(key, querystring),
                self._unquote(value, querystring) if sep else None,
            ))
        return pairs

    def _quote(self, text: str) -> str:
        return quote_plus(text, safe="", encoding=self.config.encoding)

    def _unquote(self, text: str, querystring: str) -> str:
        bad = _BAD_ESCAPE.search(text)
        if bad:
            raise MalformedQuerystring(
                f"Invalid percent escape at offset {bad.start()} in {text!r}",
                querystring,
            )

        try:
            return unquote(
                text.replace("+", " "),
                encoding=self.config.encoding,
                errors="strict",
            )
        except UnicodeDecodeError as e:
            raise MalformedQuerystring(
                f"Undecodable escape in {text!r}: {e.reason}",
                querystring,
            ) from e


__all__ = [
    "CodecConfig",
    "DiagnosticSink",
    "ParseResult",
    "QuerystringCodec",
    "format_value",
    "log_parse_error",
]
