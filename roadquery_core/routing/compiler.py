"""Route Pattern Compiler - Querystring-aware route regexes.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from roadquery_core.errors import CompilerAssumptionViolated
from roadquery_core.routing.router import NAMED_PATTERN, SPLAT_PATTERN, route_to_regex

logger = logging.getLogger(__name__)

# Replacements: named tokens stop at "/" and "?", splats stop at "?"
NAMED_QUERY_PATTERN = "([^/?]*)"
SPLAT_QUERY_PATTERN = "([^?]*)"
QUERYSTRING_PATTERN = r"(\?.*)?"

TOKEN_RE = re.compile(r"([:*])(\w+)")


class TokenKind(Enum):
    """Route token kinds."""

    NAMED = ":"
    SPLAT = "*"


@dataclass(frozen=True)
class Token:
    """A token in a route template."""

    kind: TokenKind
    name: str

    @property
    def text(self) -> str:
        """Token as written in the template."""
        return f"{self.kind.value}{self.name}"


@dataclass(frozen=True)
class CompiledPattern:
    """Compiled route template.

    The regex always ends with an optional ``(\\?.*)?`` group, so its
    last capture is the querystring whatever the token count.
    """

    template: str
    regex: re.Pattern
    tokens: Tuple[Token, ...] = ()

    @property
    def named_count(self) -> int:
        return sum(1 for t in self.tokens if t.kind is TokenKind.NAMED)

    @property
    def splat_count(self) -> int:
        return sum(1 for t in self.tokens if t.kind is TokenKind.SPLAT)

    def matches(self, path: str) -> bool:
        """Check if path matches the compiled template."""
        return self.regex.match(path) is not None


def parse_tokens(template: str) -> Tuple[Token, ...]:
    """List the named and splat tokens of a template in declaration order."""
    return tuple(
        Token(kind=TokenKind(marker), name=name)
        for marker, name in TOKEN_RE.findall(template)
    )


class RoutePatternCompiler:
    """Compiles route templates into querystring-aware patterns.

    The host compiler produces the base regex. Its named and splat
    sub-patterns are then narrowed so they cannot swallow a trailing
    ``?...``, and a final querystring group is appended.

    The host output is checked before rewriting: it must be anchored with
    ``^...$`` and contain exactly one named shape per ``:token`` and one
    splat shape per ``*token``. Anything else raises
    ``CompilerAssumptionViolated``.

    Usage:
        compiler = RoutePatternCompiler()
        compiled = compiler.compile("page/:id")
        compiled.regex.match("page/9?show=true").groups()
        # ("9", "?show=true")
    """

    def __init__(
        self,
        host: Callable[[str], re.Pattern] = route_to_regex,
        named_shape: str = NAMED_PATTERN,
        splat_shape: str = SPLAT_PATTERN,
    ):
        self._host = host
        self.named_shape = named_shape
        self.splat_shape = splat_shape
        self._cache: Dict[str, CompiledPattern] = {}
        self._lock = threading.RLock()

    def compile(self, template: str) -> CompiledPattern:
        """Compile a template (cached).

        Raises:
            CompilerAssumptionViolated: If the host regex has unexpected shapes
        """
        with self._lock:
            compiled = self._cache.get(template)
            if compiled is None:
                compiled = self._compile(template)
                self._cache[template] = compiled
        return compiled

    def clear_cache(self) -> None:
        """Drop all compiled patterns."""
        with self._lock:
            self._cache.clear()

    def _compile(self, template: str) -> CompiledPattern:
        tokens = parse_tokens(template)
        source = self._host(template).pattern
        self._check(template, source, tokens)

        source = source.replace(self.named_shape, NAMED_QUERY_PATTERN)
        source = source.replace(self.splat_shape, SPLAT_QUERY_PATTERN)
        source = source[:-1] + QUERYSTRING_PATTERN + "$"

        logger.debug(f"Compiled route {template!r} -> {source!r}")
        return CompiledPattern(
            template=template,
            regex=re.compile(source),
            tokens=tokens,
        )

    def _check(
        self,
        template: str,
        source: str,
        tokens: Tuple[Token, ...],
    ) -> None:
        problem: Optional[str] = None

        if not source.startswith("^"):
            problem = f"expected the pattern to start with '^', got {source[:8]!r}"
        elif not source.endswith("$"):
            problem = f"expected the pattern to end with '$', got {source[-8:]!r}"
        else:
            for kind, shape in (
                (TokenKind.NAMED, self.named_shape),
                (TokenKind.SPLAT, self.splat_shape),
            ):
                expected = sum(1 for t in tokens if t.kind is kind)
                found = source.count(shape)
                if found != expected:
                    problem = (
                        f"expected {expected} {kind.name.lower()} sub-pattern(s) "
                        f"of shape {shape!r}, found {found}"
                    )
                    break

        if problem:
            raise CompilerAssumptionViolated(
                f"Host regex for route {template!r} is not rewritable: "
                f"{problem} in {source!r}",
                template=template,
                source=source,
            )


__all__ = [
    "TokenKind",
    "Token",
    "CompiledPattern",
    "RoutePatternCompiler",
    "parse_tokens",
    "NAMED_QUERY_PATTERN",
    "SPLAT_QUERY_PATTERN",
    "QUERYSTRING_PATTERN",
]
