"""
=============================================================================
CONNECTION HANDLING
=============================================================================

Wraps one accepted client socket: frames the incoming bytes into a single
request, writes the response and closes the TCP connection.

=============================================================================
REQUEST FRAMING
=============================================================================

TCP is a byte stream, not a message stream. One request can arrive in any
number of recv() chunks, and the terminator itself can be split between
two of them:

    recv #1: b"GET / HTTP/1.1\\r\\nHost: x\\r"
    recv #2: b"\\n\\r\\n"
                    │
                    ▼
    accumulated: b"GET / HTTP/1.1\\r\\nHost: x\\r\\n\\r\\n"   ← ends with
                                                        \\r\\n\\r\\n: done

The end check therefore runs on the ACCUMULATED bytes after every recv():

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    read_request() Loop                              │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   ┌──────────────────────────┐                                      │
    │   │ recv(chunk_size)         │── OSError / timeout ──► ReadError    │
    │   └────────────┬─────────────┘── b"" (peer closed) ──► ReadError    │
    │                │                                                     │
    │   ┌────────────▼─────────────┐                                      │
    │   │ buffer += bytes received │                                      │
    │   └────────────┬─────────────┘                                      │
    │                │                                                     │
    │   ┌────────────▼─────────────┐                                      │
    │   │ len > max_request_size ? │── yes ──► RequestTooLargeError       │
    │   └────────────┬─────────────┘                                      │
    │                │ no                                                  │
    │   ┌────────────▼─────────────┐                                      │
    │   │ ends with \\r\\n\\r\\n ?     │── no ──► loop                        │
    │   └────────────┬─────────────┘                                      │
    │                │ yes                                                 │
    │                ▼                                                     │
    │          return bytes(buffer)                                       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Content-Length is never consulted: a request ends at the first chunk
boundary where the accumulated bytes end with the terminator. There is
no keep-alive, so every connection carries exactly one request.

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    NEW ──────► READING ──────► PROCESSING ──────► WRITING
     │             │                                  │
     │             ▼                                  │
     └─────────► CLOSING ◄────────────────────────────┘
                    │
                    ▼
                  CLOSED

=============================================================================
"""

import logging
import socket
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from ..errors import ReadError, RequestTooLargeError, WriteError

logger = logging.getLogger(__name__)


REQUEST_TERMINATOR = b"\r\n\r\n"

DEFAULT_CHUNK_SIZE = 1024
DEFAULT_MAX_REQUEST_SIZE = 1024 * 1024


class ConnectionState(Enum):
    """Connection lifecycle states, used in logs."""

    NEW = "new"                # Just accepted
    READING = "reading"        # Accumulating request bytes
    PROCESSING = "processing"  # Parsing and routing
    WRITING = "writing"        # Sending the response
    CLOSING = "closing"        # Shutdown sequence in progress
    CLOSED = "closed"          # Socket released


@dataclass
class Connection:
    """
    One client connection.

    Attributes:
        socket: The accepted client socket.
        address: Client's (ip, port) tuple.
        id: Short unique identifier used to correlate log lines.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
        chunk_size: Bytes requested per recv() call.
        max_request_size: Ceiling on the accumulated request size.
        timeout: Socket timeout in seconds, None for fully blocking.
    """

    # Required parameters
    socket: socket.socket
    address: Tuple[str, int]

    # Generated/default parameters
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    # Configuration (passed from ServerConfig)
    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_request_size: int = DEFAULT_MAX_REQUEST_SIZE
    timeout: Optional[float] = None

    def __post_init__(self):
        # settimeout(None) puts the socket back in blocking mode, which
        # accepted sockets may not inherit from a polling listener
        self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def client_port(self) -> int:
        return self.address[1]

    @property
    def age(self) -> float:
        """Get connection age in seconds."""
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def read_request(self) -> bytes:
        """
        Read one complete request from the socket.

        Returns:
            The accumulated request bytes, ending with \\r\\n\\r\\n.

        Raises:
            ReadError: recv() failed, timed out, or the peer closed the
                       stream before the request was complete.
            RequestTooLargeError: More than max_request_size bytes arrived
                                  without a terminator.
        """
        self.state = ConnectionState.READING
        buffer = bytearray()

        while True:
            try:
                chunk = self.socket.recv(self.chunk_size)
            except OSError as err:
                # socket.timeout is an OSError subclass
                raise ReadError(f"Error reading request at len {len(buffer)}") from err

            if not chunk:
                raise ReadError(
                    f"Error reading request at len {len(buffer)}: connection closed by peer"
                )

            buffer += chunk

            if len(buffer) > self.max_request_size:
                raise RequestTooLargeError(
                    f"Request exceeds {self.max_request_size} bytes "
                    f"without terminator (read {len(buffer)})"
                )

            if buffer.endswith(REQUEST_TERMINATOR):
                break

        logger.debug(f"[{self.id}] Read {len(buffer)} bytes from {self.client_ip}")
        self.state = ConnectionState.PROCESSING
        return bytes(buffer)

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> None:
        """
        Send the serialized response.

        sendall() keeps writing until every byte is out or the socket
        fails.

        Raises:
            WriteError: If the socket could not take the data.
        """
        self.state = ConnectionState.WRITING
        try:
            self.socket.sendall(data)
        except OSError as err:
            raise WriteError(f"Error sending response: {err}") from err

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection gracefully.

        ┌─────────────────────────────────────────────────────────────────┐
        │                    TCP Close Sequence                           │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │   1. shutdown(SHUT_WR)   FIN to the client: response complete   │
        │   2. drain recv()        discard whatever the client still sent │
        │   3. close()             release the file descriptor            │
        │                                                                  │
        └─────────────────────────────────────────────────────────────────┘

        Errors at any step only mean the peer is already gone.
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass

        try:
            self.socket.settimeout(0.5)
            while self.socket.recv(1024):
                pass
        except OSError:
            pass

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
