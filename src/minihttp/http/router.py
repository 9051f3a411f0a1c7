"""
=============================================================================
URL ROUTER
=============================================================================

Dispatches a request to a handler by the FIRST segment of its target.

=============================================================================
ROUTING FLOW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTING FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   GET /echo/abc/def                                                  │
    │        │                                                             │
    │        ▼                                                             │
    │   target == "/" ? ──── yes ───► 200, no Content-Type, no body        │
    │        │ no                                                          │
    │        ▼                                                             │
    │   split_target("/echo/abc/def") → ("echo", "abc/def")                │
    │                                    ──┬───   ───┬────                 │
    │                                   segment   remainder                │
    │        │                                                             │
    │        ▼                                                             │
    │   ┌──────────────────────────────────────────┐                       │
    │   │  Route table (read-only)                 │                       │
    │   │    "echo"       → echo         ← MATCH   │                       │
    │   │    "user-agent" → user_agent             │                       │
    │   │    "files"      → files.handle           │                       │
    │   └──────────────────────────────────────────┘                       │
    │        │                                                             │
    │        ▼                                                             │
    │   echo(request)   (handler calls split_target() itself)             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Matching is exact and case-sensitive: "/Echo/x" is not routed. A segment
with no handler raises RouteNotFoundError, which the server answers with
the fixed 404 response.

The table is wrapped in a MappingProxyType when the router is built and
is never modified afterwards, so connection threads share it freely.
=============================================================================
"""

import logging
from types import MappingProxyType
from typing import Callable, Mapping, Tuple

from ..errors import RouteNotFoundError
from .request import HTTPRequest
from .response import HTTPResponse, ok

logger = logging.getLogger(__name__)


# Handler: takes a request, returns a response or raises a RoutingError
Handler = Callable[[HTTPRequest], HTTPResponse]

ROOT_TARGET = "/"


def split_target(target: str) -> Tuple[str, str]:
    """
    Split a request target into its first segment and the remainder.

    Leading slashes are skipped, so the segment is the first non-empty
    one. The remainder is everything after the slash that follows it.

    Example:
        split_target("/echo/abc/def")   # ("echo", "abc/def")
        split_target("/user-agent")     # ("user-agent", "")
        split_target("/files/")         # ("files", "")
    """
    segment, _, remainder = target.lstrip("/").partition("/")
    return segment, remainder


class Router:
    """
    First-segment request router.

    Usage:
        router = Router({"echo": echo, "user-agent": user_agent})
        response = router.handle(request)
    """

    def __init__(self, routes: Mapping[str, Handler]):
        # Copy first: the caller's dict stays theirs to mutate
        self._routes = MappingProxyType(dict(routes))

    @property
    def routes(self) -> Mapping[str, Handler]:
        return self._routes

    def resolve(self, target: str) -> Handler:
        """
        Find the handler for a target.

        Raises:
            RouteNotFoundError: If no handler matches the first segment.
        """
        segment, _ = split_target(target)
        handler = self._routes.get(segment)
        if handler is None:
            raise RouteNotFoundError(f"Get Path '{segment}' is not implemented.")
        return handler

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Route a request and return the handler's response.

        Raises:
            RoutingError: From resolve() or from the handler itself.
        """
        if request.target == ROOT_TARGET:
            return ok()

        handler = self.resolve(request.target)
        logger.debug(f"{request.target} → {getattr(handler, '__qualname__', handler)}")
        return handler(request)
