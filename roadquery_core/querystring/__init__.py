"""Querystring module - Pluggable querystring codecs."""

from roadquery_core.querystring.codec import (
    CodecConfig,
    ParseResult,
    QuerystringCodec,
)
from roadquery_core.querystring.codecs import (
    StandardCodec,
    DelimitedCodec,
    BracketCodec,
    JSONCodec,
    get_codec,
    register_codec,
)

__all__ = [
    "CodecConfig",
    "ParseResult",
    "QuerystringCodec",
    "StandardCodec",
    "DelimitedCodec",
    "BracketCodec",
    "JSONCodec",
    "get_codec",
    "register_codec",
]
