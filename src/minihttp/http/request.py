"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Turns the raw bytes produced by the request reader into an HTTPRequest.

=============================================================================
HTTP REQUEST ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP REQUEST STRUCTURE                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  ┌─ REQUEST LINE ─────────────────────────────────────────────────┐ │
    │  │                                                                 │ │
    │  │    GET /echo/abc123 HTTP/1.1\r\n                               │ │
    │  │    ─┬─ ──────┬─────                                            │ │
    │  │     │        │                                                  │ │
    │  │   Method   Target   (version token is not inspected)            │ │
    │  │                                                                 │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    │  ┌─ HEADERS ──────────────────────────────────────────────────────┐ │
    │  │    Host: localhost:4221\r\n                                    │ │
    │  │    User-Agent: curl/8.4.0\r\n                                  │ │
    │  │    X_Bad_Header\r\n          ← no match: WARNING, skipped      │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    │  ┌─ EMPTY LINE ───────────────────────────────────────────────────┐ │
    │  │    \r\n                                                         │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PARSING ORDER
=============================================================================

    raw bytes ──decode──► text ──split "\\r\\n"──► lines
                                                    │
                         ┌──────────────────────────┤
                         ▼                          ▼
                 lines[1:end] → headers     lines[0] → method, target
                 (bad line = WARNING,       (unusable = RequestParseError,
                  never fatal)               fatal for this request)

Headers are parsed first, so malformed header lines are reported even
when the method turns out to be unusable.

The header block ends at the first empty line ("end" above). Anything
after it is never read as a header.

Header names are kept exactly as received: lookups are case-sensitive
and the last duplicate wins.
=============================================================================
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

from ..errors import InvalidMethodError, MethodNotImplementedError, RequestParseError

logger = logging.getLogger(__name__)


LINE_TERMINATOR = "\r\n"

HEADER_USER_AGENT = "User-Agent"
HEADER_HOST = "Host"


class HTTPMethod(str, Enum):
    """
    The standard request methods of RFC 7231 section 4.3.

    Only GET is served. The others are recognized so that they can be
    reported as "not implemented" rather than "invalid".
    """

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


@dataclass(frozen=True)
class HTTPRequest:
    """
    A parsed HTTP request.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:         Always HTTPMethod.GET for a request that parsed.

        target:         Request target exactly as sent, starts with "/".
                        "/echo/abc" → handler sees "/echo/abc"

        raw:            The accumulated request bytes.

        lines:          raw split on "\\r\\n", request line first.

        headers:        Header name → value, names case-sensitive.

        length:         Number of bytes read for this request.

        client_address: (ip, port) of the peer, for logging.

    The request is frozen: once handed to the router nothing can rewrite
    it.
    =========================================================================
    """

    method: HTTPMethod
    target: str
    raw: bytes = b""
    lines: Tuple[str, ...] = ()
    headers: Dict[str, str] = field(default_factory=dict)
    length: int = 0
    client_address: Tuple[str, int] = ("", 0)

    @property
    def user_agent(self) -> str:
        """User-Agent header value, "" when absent."""
        return self.headers.get(HEADER_USER_AGENT, "")

    @property
    def host(self) -> str:
        return self.headers.get(HEADER_HOST, "")

    def get_header(self, name: str, default: str = "") -> str:
        """
        Get a header value (case-sensitive lookup).

        Example:
            request.get_header("User-Agent")   # "curl/8.4.0"
            request.get_header("user-agent")   # "" unless sent lowercase
        """
        return self.headers.get(name, default)


class RequestParser:
    """
    Parses raw request bytes into HTTPRequest objects.

    ==========================================================================
    HEADER PATTERN
    ==========================================================================

    HEADER_PATTERN: ^[a-zA-Z\\-]+: .*

        ^             - Start of line
        [a-zA-Z\\-]+   - Header name: letters and hyphens only
        ": "          - Colon followed by exactly one space
        .*            - Value (anything, possibly empty)

    A line that does not match is logged and skipped. A matching line is
    split on its first ": ", so values may themselves contain ": ".

    ==========================================================================
    """

    HEADER_PATTERN = re.compile(r"^[a-zA-Z\-]+: .*")

    def parse(self, data: bytes, client_address: Tuple[str, int] = ("", 0)) -> HTTPRequest:
        """
        Parse raw HTTP request data into an HTTPRequest object.

        Args:
            data: Raw request bytes, as returned by the request reader.
            client_address: Client's (ip, port) tuple for logging.

        Returns:
            Parsed HTTPRequest object.

        Raises:
            MethodNotImplementedError: Recognized method other than GET.
            InvalidMethodError: First token is not an HTTP method.
            RequestParseError: GET without a usable target.
        """
        # surrogateescape keeps undecodable bytes, so a handler can encode
        # a piece of the target back to the exact bytes that were sent
        text = data.decode("utf-8", errors="surrogateescape")
        lines = tuple(text.split(LINE_TERMINATOR))

        end = lines.index("", 1) if "" in lines[1:] else len(lines)
        headers = self._parse_headers(lines[1:end])
        method, target = self._parse_request_line(lines[0])

        for line in lines:
            logger.debug(line)

        return HTTPRequest(
            method=method,
            target=target,
            raw=data,
            lines=lines,
            headers=headers,
            length=len(data),
            client_address=client_address,
        )

    def _parse_request_line(self, line: str) -> Tuple[HTTPMethod, str]:
        """
        Extract method and target from the request line.

        The line is split on single spaces. An empty line yields the
        token "" and is reported as an invalid method.
        """
        tokens = line.split(" ")
        method = tokens[0]

        if method != HTTPMethod.GET.value:
            if method in HTTPMethod.__members__:
                raise MethodNotImplementedError(f"Non implemented HTTP method '{method}'")
            raise InvalidMethodError(
                f"invalid HTTP method '{method}'. Check RFC 7231 section 4.3"
            )

        if len(tokens) < 2 or not tokens[1]:
            raise RequestParseError(f"Missing request target in '{line}'")

        target = tokens[1]
        if not target.startswith("/"):
            raise RequestParseError(f"Request target '{target}' must start with '/'")

        return HTTPMethod.GET, target

    def _parse_headers(self, lines: Tuple[str, ...]) -> Dict[str, str]:
        headers: Dict[str, str] = {}

        for line in lines:
            if not self.HEADER_PATTERN.match(line):
                logger.warning(f"Unable to parse header '{line}'")
                continue

            name, value = line.split(": ", 1)
            headers[name] = value

        return headers


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def parse_request(data: bytes, client_address: Tuple[str, int] = ("", 0)) -> HTTPRequest:
    """
    Parse raw request bytes with a fresh RequestParser.

    Use RequestParser directly when parsing many requests.
    """
    return RequestParser().parse(data, client_address)
