"""
=============================================================================
HTTP PROTOCOL IMPLEMENTATION
=============================================================================

Translates between bytes and HTTP messages.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST PARSER (request.py)                                         │
    │   b"GET /echo/hi HTTP/1.1\\r\\n..."  →  HTTPRequest(target="/echo/hi") │
    ├─────────────────────────────────────────────────────────────────────┤
    │ ROUTER (router.py)                                                  │
    │   first target segment  →  handler                                  │
    ├─────────────────────────────────────────────────────────────────────┤
    │ RESPONSE BUILDER (response.py)                                      │
    │   HTTPResponse  →  b"HTTP/1.1 200 OK\\r\\n...\\r\\n\\r\\nhi"              │
    ├─────────────────────────────────────────────────────────────────────┤
    │ STATUS CODES (status_codes.py)                                      │
    │   HTTPStatus enum and reason phrases                                │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import HTTPMethod, HTTPRequest, RequestParser, parse_request
from .response import (
    CONTENT_TYPE_NONE,
    CONTENT_TYPE_OCTET_STREAM,
    CONTENT_TYPE_TEXT_PLAIN,
    NOT_FOUND_MESSAGE,
    HTTPResponse,
    not_found,
    ok,
)
from .router import Handler, Router, split_target
from .status_codes import HTTPStatus, reason_phrase

__all__ = [
    # Request
    "HTTPMethod",
    "HTTPRequest",
    "RequestParser",
    "parse_request",
    # Response
    "HTTPResponse",
    "ok",
    "not_found",
    "NOT_FOUND_MESSAGE",
    "CONTENT_TYPE_NONE",
    "CONTENT_TYPE_TEXT_PLAIN",
    "CONTENT_TYPE_OCTET_STREAM",
    # Router
    "Handler",
    "Router",
    "split_target",
    # Status
    "HTTPStatus",
    "reason_phrase",
]
