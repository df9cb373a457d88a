"""Router - Fragment routing engine.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from roadquery_core.utils.helpers import normalize_fragment

logger = logging.getLogger(__name__)

# Sub-patterns emitted for :name and *name tokens
NAMED_PATTERN = "([^/]+)"
SPLAT_PATTERN = "(.*?)"

_ESCAPE = re.compile(r"[\-{}\[\]+?.,\\^$|#\s]")
_OPTIONAL = re.compile(r"\((.*?)\)")
_NAMED = re.compile(r"(\(\?)?:\w+")
_SPLAT = re.compile(r"\*\w+")


def route_to_regex(template: str) -> re.Pattern:
    """Convert a route template to an anchored regex.

    Supports:
    - Named tokens: page/:id
    - Splats: files/*path
    - Optional parts: docs(/:section)
    """
    pattern = _ESCAPE.sub(lambda m: "\\" + m.group(0), template)
    pattern = _OPTIONAL.sub(r"(?:\1)?", pattern)
    pattern = _NAMED.sub(
        lambda m: m.group(0) if m.group(1) else NAMED_PATTERN,
        pattern,
    )
    pattern = _SPLAT.sub(lambda m: SPLAT_PATTERN, pattern)
    return re.compile(f"^{pattern}$")


def extract_parameters(
    regex: re.Pattern,
    fragment: str,
) -> Optional[List[Optional[str]]]:
    """Return the ordered captures of a fragment, or None if it doesn't match."""
    match = regex.match(fragment)
    if match is None:
        return None
    return list(match.groups())


@dataclass
class Route:
    """Route definition."""

    template: str
    handler: Optional[Callable] = None
    name: str = ""
    priority: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    # Compiled pattern
    regex: Optional[re.Pattern] = field(default=None, repr=False)


@dataclass
class RouteMatch:
    """Matched route with its extracted parameters."""

    route: Route
    params: List[Any]


class Router:
    """Fragment Router.

    Features:
    - Template-based routing
    - Named tokens (page/:id) and splats (files/*path)
    - Optional template parts (docs(/:section))
    - Route prioritization

    Subclasses may override ``route_to_regex`` and ``extract_parameters``
    to change how templates compile and how captures are returned.

    Usage:
        router = Router()
        router.add("page/:id", handler=show_page, name="page")

        match = router.match("#page/9")
        if match:
            route, params = match.route, match.params
    """

    def __init__(self, strip_leading_slash: bool = True):
        self.strip_leading_slash = strip_leading_slash
        self._routes: List[Route] = []
        self._lock = threading.RLock()

    def route_to_regex(self, template: str) -> re.Pattern:
        """Compile a template into a regex."""
        return route_to_regex(template)

    def extract_parameters(
        self,
        regex: re.Pattern,
        fragment: str,
    ) -> Optional[List[Any]]:
        """Extract parameters of a fragment matched against a compiled route."""
        return extract_parameters(regex, fragment)

    def add(
        self,
        template: str,
        handler: Optional[Callable] = None,
        name: str = "",
        priority: int = 0,
        **kwargs,
    ) -> "Router":
        """Add a route.

        Args:
            template: Route template
            handler: Called with the extracted parameters on dispatch
            name: Route name
            priority: Route priority
        """
        route = Route(
            template=template,
            handler=handler,
            name=name,
            priority=priority,
            metadata=kwargs,
            regex=self.route_to_regex(template),
        )

        with self._lock:
            self._routes.append(route)
            self._routes.sort(key=lambda r: r.priority, reverse=True)

        return self

    def route(
        self,
        template: str,
        name: str = "",
        priority: int = 0,
        **kwargs,
    ) -> Callable[[Callable], Callable]:
        """Decorator form of ``add``."""

        def decorator(handler: Callable) -> Callable:
            self.add(template, handler=handler, name=name, priority=priority, **kwargs)
            return handler

        return decorator

    def match(self, fragment: str) -> Optional[RouteMatch]:
        """Match a fragment to a route.

        Returns:
            RouteMatch if a route matches, None otherwise
        """
        fragment = normalize_fragment(fragment, self.strip_leading_slash)

        with self._lock:
            routes = list(self._routes)

        for route in routes:
            params = self.extract_parameters(route.regex, fragment)
            if params is not None:
                return RouteMatch(route=route, params=params)

        return None

    def dispatch(self, fragment: str) -> Any:
        """Match a fragment and call its route handler with the parameters.

        Returns:
            The handler's return value, or None if nothing matched
        """
        match = self.match(fragment)
        if match is None:
            logger.debug(f"No route matches fragment {fragment!r}")
            return None

        if match.route.handler is None:
            return None

        return match.route.handler(*match.params)

    def remove(self, name: str) -> bool:
        """Remove a route by name."""
        with self._lock:
            for i, route in enumerate(self._routes):
                if route.name == name:
                    self._routes.pop(i)
                    return True
        return False

    def get_routes(self) -> List[Route]:
        """Get all routes."""
        with self._lock:
            return self._routes.copy()


__all__ = [
    "NAMED_PATTERN",
    "SPLAT_PATTERN",
    "Route",
    "RouteMatch",
    "Router",
    "route_to_regex",
    "extract_parameters",
]
