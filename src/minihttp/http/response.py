"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Builds the exact bytes of an HTTP/1.1 response.

=============================================================================
HTTP RESPONSE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  ┌─ STATUS LINE (always) ─────────────────────────────────────────┐ │
    │  │    HTTP/1.1 200 OK\r\n                                         │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    │  ┌─ HEADERS (optional) ───────────────────────────────────────────┐ │
    │  │    Content-Type: text/plain\r\n     ← only if a type is set    │ │
    │  │    Content-Length: 6\r\n            ← only if body non-empty   │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    │  ┌─ EMPTY LINE (always exactly one) ──────────────────────────────┐ │
    │  │    \r\n                                                         │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    │  ┌─ BODY (only if Content-Length was written) ────────────────────┐ │
    │  │    abc123                                                       │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
THE FOUR HEADER COMBINATIONS
=============================================================================

    ┌──────────────┬───────────┬──────────────────────────────────────────┐
    │ Content-Type │ Body      │ Bytes after the status line              │
    ├──────────────┼───────────┼──────────────────────────────────────────┤
    │ ""           │ empty     │ \r\n                                     │
    │ "text/plain" │ empty     │ Content-Type: text/plain\r\n\r\n         │
    │ ""           │ b"abc"    │ Content-Length: 3\r\n\r\nabc             │
    │ "text/plain" │ b"abc"    │ Content-Type: ...\r\nContent-Length: 3   │
    │              │           │ \r\n\r\nabc                              │
    └──────────────┴───────────┴──────────────────────────────────────────┘

Whatever is set, the header block ends with exactly ONE blank line. The
"type without body" and "body without type" cases never double or drop
the terminator.

The not-found response is not built at all: it is a fixed literal,
HTTP/1.1 404 Not Found \\r\\n\\r\\n (note the space before the CRLF).

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Union

from .status_codes import HTTPStatus, reason_phrase


HTTP_VERSION = "HTTP/1.1"
CRLF = b"\r\n"

# Content types used by the built-in handlers
CONTENT_TYPE_NONE = ""
CONTENT_TYPE_TEXT_PLAIN = "text/plain"
CONTENT_TYPE_OCTET_STREAM = "application/octet-stream"

NOT_FOUND_MESSAGE = b"HTTP/1.1 404 Not Found \r\n\r\n"


@dataclass
class HTTPResponse:
    """
    A response for one request/response cycle.

    =========================================================================
    RESPONSE LIFECYCLE
    =========================================================================

        Handler builds            finalize()               Socket sends
        HTTPResponse    ─────►    computes      ─────►     message bytes
                                  message ONCE

    Before finalize() the response can still be edited (set_body,
    set_content_type). finalize() fixes content_length to len(body),
    serializes everything into ``message`` and locks the response.

    =========================================================================
    """

    status: int = HTTPStatus.OK
    content_type: str = CONTENT_TYPE_NONE    # "" means: no Content-Type header
    body: bytes = b""
    content_length: int = 0                  # == len(body) once finalized
    message: bytes = field(default=b"", repr=False)

    _finalized: bool = field(default=False, repr=False)

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line (without CRLF).

        Example: "HTTP/1.1 200 OK"
        """
        return f"{HTTP_VERSION} {int(self.status)} {reason_phrase(self.status)}"

    def _check_mutable(self) -> None:
        if self._finalized:
            raise RuntimeError("Response already finalized")

    def set_content_type(self, content_type: str) -> "HTTPResponse":
        """Set the Content-Type ("" removes the header)."""
        self._check_mutable()
        self.content_type = content_type
        return self

    def set_body(self, body: Union[str, bytes]) -> "HTTPResponse":
        """
        Set the response body.

        Strings are encoded to UTF-8. The tracked content_length follows
        the new body.
        """
        self._check_mutable()
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.body = body
        self.content_length = len(body)
        return self

    def finalize(self) -> "HTTPResponse":
        """
        Serialize the response into ``message``.

        May only be called once; the response is immutable afterwards.

        Returns:
            Self, so handlers can ``return HTTPResponse(...).finalize()``.

        Raises:
            RuntimeError: If the response was already finalized.
        """
        self._check_mutable()

        self.content_length = len(self.body)

        buffer = bytearray()

        # ─────────────────────────────────────────────────────────────────
        # STATUS LINE
        # ─────────────────────────────────────────────────────────────────
        buffer += self.status_line.encode("ascii") + CRLF

        # ─────────────────────────────────────────────────────────────────
        # OPTIONAL HEADERS
        # ─────────────────────────────────────────────────────────────────
        if self.content_type:
            buffer += f"Content-Type: {self.content_type}".encode("latin-1") + CRLF

        if self.content_length > 0:
            buffer += f"Content-Length: {self.content_length}".encode("ascii") + CRLF

        # ─────────────────────────────────────────────────────────────────
        # END OF HEADERS + BODY
        # ─────────────────────────────────────────────────────────────────
        # One blank line in every combination. The body is empty whenever
        # Content-Length was not written, so appending it is always safe.
        buffer += CRLF
        buffer += self.body

        self.message = bytes(buffer)
        self._finalized = True
        return self

    def to_bytes(self) -> bytes:
        """
        Get the wire bytes, finalizing first if needed.

        Returns:
            Complete HTTP response as bytes ready for socket.sendall()
        """
        if not self._finalized:
            self.finalize()
        return self.message


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
# Handlers return one of these instead of building HTTPResponse by hand:
#
#     return ok("abc123", CONTENT_TYPE_TEXT_PLAIN)
#     return not_found()
#
# =============================================================================

def ok(body: Union[str, bytes] = b"", content_type: str = CONTENT_TYPE_NONE) -> HTTPResponse:
    """
    Create a finalized 200 OK response.

    Args:
        body: Response body (str is encoded to UTF-8)
        content_type: Content-Type, or "" for no header

    Returns:
        Finalized HTTPResponse with 200 status
    """
    return (HTTPResponse(status=HTTPStatus.OK)
        .set_content_type(content_type)
        .set_body(body)
        .finalize())


def not_found() -> HTTPResponse:
    """
    Create the fixed 404 Not Found response.

    The message is a precomputed literal, already finalized.
    """
    return HTTPResponse(
        status=HTTPStatus.NOT_FOUND,
        message=NOT_FOUND_MESSAGE,
        _finalized=True,
    )
