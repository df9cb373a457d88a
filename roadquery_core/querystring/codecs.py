"""Querystring Codecs - Concrete wire formats.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Type

from roadquery_core.errors import MalformedQuerystring
from roadquery_core.querystring.codec import (
    CodecConfig,
    DiagnosticSink,
    Pair,
    QuerystringCodec,
    format_value,
)


def _is_multi(value: Any) -> bool:
    return isinstance(value, (list, tuple))


class StandardCodec(QuerystringCodec):
    """Repeated-key codec.

    Lists become repeated keys (``tag=a&tag=b``). A key seen once decodes
    to a string, a key seen more than once to a list. A one-element list
    therefore comes back as a plain string.
    """

    name = "standard"

    def _encode(self, key: str, value: Any) -> List[Pair]:
        if _is_multi(value):
            return [(key, format_value(item)) for item in value]
        return [(key, format_value(value))]

    def _decode(self, pairs: List[Pair]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, value in pairs:
            value = value or ""
            if key not in result:
                result[key] = value
            elif isinstance(result[key], list):
                result[key].append(value)
            else:
                result[key] = [result[key], value]
        return result


class DelimitedCodec(QuerystringCodec):
    """Delimiter-joined codec.

    Lists are joined with ``config.array_delimiter`` into one value
    (``tag=a|b``, percent-encoded on the wire). Any decoded value holding
    the delimiter is split back into a list. Repeated keys: last wins.
    """

    name = "delimited"

    def _encode(self, key: str, value: Any) -> List[Pair]:
        if _is_multi(value):
            delimiter = self.config.array_delimiter
            return [(key, delimiter.join(format_value(item) for item in value))]
        return [(key, format_value(value))]

    def _decode(self, pairs: List[Pair]) -> Dict[str, Any]:
        delimiter = self.config.array_delimiter
        result: Dict[str, Any] = {}
        for key, value in pairs:
            value = value or ""
            if delimiter and delimiter in value:
                result[key] = value.split(delimiter)
            else:
                result[key] = value
        return result


class BracketCodec(QuerystringCodec):
    """Bracket-notation codec (``tag[]=a&tag[]=b``), as jQuery.param emits.

    ``key[]`` entries always decode to lists, even a single one. An empty
    list is sent as a bare ``tag[]`` with no value. Plain keys decode to
    strings; repeated plain keys: last wins. This is the default codec,
    since every flat map of strings and string lists survives a round trip.
    """

    name = "bracket"
    suffix = "[]"

    def _encode(self, key: str, value: Any) -> List[Pair]:
        if _is_multi(value):
            if not value:
                return [(key + self.suffix, None)]
            return [(key + self.suffix, format_value(item)) for item in value]
        return [(key, format_value(value))]

    def _decode(self, pairs: List[Pair]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, value in pairs:
            if key.endswith(self.suffix):
                key = key[:-len(self.suffix)]
                items = result.get(key)
                if not isinstance(items, list):
                    items = result[key] = []
                if value is not None:
                    items.append(value)
            else:
                result[key] = value or ""
        return result


class JSONCodec(QuerystringCodec):
    """JSON-in-querystring codec.

    Every value is JSON-encoded, so numbers, booleans, null and lists keep
    their types across the round trip.
    """

    name = "json"

    def _encode(self, key: str, value: Any) -> List[Pair]:
        return [(key, json.dumps(value, separators=(",", ":")))]

    def _decode(self, pairs: List[Pair]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, value in pairs:
            try:
                result[key] = json.loads(value or "")
            except json.JSONDecodeError as e:
                raise MalformedQuerystring(
                    f"Value for {key!r} is not valid JSON: {e.msg}"
                ) from e
        return result


CODECS: Dict[str, Type[QuerystringCodec]] = {
    StandardCodec.name: StandardCodec,
    DelimitedCodec.name: DelimitedCodec,
    BracketCodec.name: BracketCodec,
    JSONCodec.name: JSONCodec,
}


def register_codec(name: str, codec_class: Type[QuerystringCodec]) -> None:
    """Register a codec under a name usable by ``get_codec``."""
    CODECS[name] = codec_class


def get_codec(
    name: str = BracketCodec.name,
    config: Optional[CodecConfig] = None,
    on_error: Optional[DiagnosticSink] = None,
) -> QuerystringCodec:
    """Create a codec by name.

    Raises:
        ValueError: If no codec is registered under ``name``
    """
    codec_class = CODECS.get(name)
    if codec_class is None:
        raise ValueError(
            f"Unknown querystring codec: {name!r} "
            f"(available: {', '.join(sorted(CODECS))})"
        )
    return codec_class(config=config, on_error=on_error)


__all__ = [
    "StandardCodec",
    "DelimitedCodec",
    "BracketCodec",
    "JSONCodec",
    "CODECS",
    "register_codec",
    "get_codec",
]
