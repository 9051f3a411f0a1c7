"""
=============================================================================
ERROR TAXONOMY
=============================================================================

Every failure the server can hit while handling a connection is one of
the exceptions below. Each layer raises the most specific class it can and
chains the original cause with ``raise ... from err`` so nothing is lost
on the way up to the connection thread.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                          ServerError                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   TransportError          accept / read / write failed              │
    │   ├── ReadError           → abort connection                        │
    │   └── WriteError          → abort connection                        │
    │                                                                      │
    │   FramingError            request never completed                   │
    │   └── RequestTooLargeError → abort connection                       │
    │                                                                      │
    │   RequestParseError       request line unusable                     │
    │   ├── MethodNotImplementedError  → 404, close                       │
    │   └── InvalidMethodError         → 404, close                       │
    │                                                                      │
    │   RoutingError            nothing to serve                          │
    │   ├── RouteNotFoundError         → 404                              │
    │   ├── MissingHeaderError         → 404                              │
    │   ├── ResourceNotFoundError      → 404                              │
    │   ├── ResourceReadError          → 404                              │
    │   └── PathTraversalError         → 404                              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Malformed header lines are NOT in this list: they are logged and skipped
by the parser and never abort a request.
=============================================================================
"""


class ServerError(Exception):
    """Base class for all per-connection failures."""


# =============================================================================
# TRANSPORT
# =============================================================================

class TransportError(ServerError):
    """The socket itself failed (accept, recv, send)."""


class ReadError(TransportError):
    """recv() failed or the peer closed before the request was complete."""


class WriteError(TransportError):
    """sendall() failed while writing the response."""


# =============================================================================
# FRAMING
# =============================================================================

class FramingError(ServerError):
    """The byte stream could not be framed into a request."""


class RequestTooLargeError(FramingError):
    """The size ceiling was exceeded before \\r\\n\\r\\n was seen."""


# =============================================================================
# PARSING
# =============================================================================

class RequestParseError(ServerError):
    """The request line could not be turned into a usable request."""


class MethodNotImplementedError(RequestParseError):
    """A standard HTTP method this server does not serve (POST, PUT, ...)."""


class InvalidMethodError(RequestParseError):
    """A token that is not an HTTP method at all."""


# =============================================================================
# ROUTING
# =============================================================================

class RoutingError(ServerError):
    """The request was valid but nothing can be served for it."""


class RouteNotFoundError(RoutingError):
    """No handler is registered for the first path segment."""


class MissingHeaderError(RoutingError):
    """A handler needed a request header that is absent or empty."""


class ResourceNotFoundError(RoutingError):
    """The requested file does not exist under the data directory."""


class ResourceReadError(RoutingError):
    """The requested file exists but reading it failed."""


class PathTraversalError(RoutingError):
    """The requested file resolves outside the data directory."""
