"""
Echo and User-Agent reflection handlers.

    GET /echo/abc123         → 200 text/plain "abc123"
    GET /user-agent          → 200 text/plain <User-Agent header value>

Both bodies are re-encoded with surrogateescape, so the client gets back
exactly the bytes it sent, even when they are not valid UTF-8.
"""

import logging

from ..errors import MissingHeaderError
from ..http.request import HEADER_USER_AGENT, HTTPRequest
from ..http.response import CONTENT_TYPE_TEXT_PLAIN, HTTPResponse, ok
from ..http.router import split_target

logger = logging.getLogger(__name__)


def _to_bytes(text: str) -> bytes:
    return text.encode("utf-8", errors="surrogateescape")


def echo(request: HTTPRequest) -> HTTPResponse:
    """Respond with everything in the target after "/echo/"."""
    _, text = split_target(request.target)
    logger.debug(f"echo : {text}")
    return ok(_to_bytes(text), CONTENT_TYPE_TEXT_PLAIN)


def user_agent(request: HTTPRequest) -> HTTPResponse:
    """
    Respond with the User-Agent header value.

    Raises:
        MissingHeaderError: If the header is absent or empty.
    """
    value = request.user_agent
    if not value:
        raise MissingHeaderError(
            f"The header '{HEADER_USER_AGENT}' is not present in the request"
        )

    logger.debug(f"user-agent : {value}")
    return ok(_to_bytes(value), CONTENT_TYPE_TEXT_PLAIN)
