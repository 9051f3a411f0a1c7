"""
=============================================================================
HTTP SERVER
=============================================================================

Ties the pieces together: accepts connections, runs each one on its own
thread and turns raw request bytes into a response.

=============================================================================
REQUEST FLOW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       ONE CONNECTION                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   accept()  (listener thread)                                        │
    │      │                                                               │
    │      └──► threading.Thread(daemon=True)                              │
    │               │                                                      │
    │               ├──► Connection.read_request()   bytes up to \\r\\n\\r\\n │
    │               │        ReadError / RequestTooLargeError ──► ERROR    │
    │               │                                            + close   │
    │               ├──► respond(raw)                                      │
    │               │      ├── RequestParser.parse()                       │
    │               │      │     RequestParseError ──► ERROR, 404          │
    │               │      └── Router.handle()                             │
    │               │            RoutingError ──────► WARNING, 404         │
    │               │                                                      │
    │               ├──► Connection.send_response()                        │
    │               │        WriteError ──────────────────► ERROR          │
    │               │                                                      │
    │               └──► Connection.close()          always                │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Every failure stays inside its connection thread. Nothing a client sends
can stop the process.

=============================================================================
CONCURRENCY
=============================================================================

One thread per connection, no pool and no queue. Threads share only the
frozen ServerConfig and the read-only route table. With the default
blocking sockets (timeout=None) a client that never completes its request
holds its thread until it disconnects; set ServerConfig.timeout to bound
that.

=============================================================================
"""

import logging
import threading
from typing import Optional, Tuple

from .config import ServerConfig
from .core import Connection, SocketServer
from .errors import FramingError, RequestParseError, RoutingError, TransportError, WriteError
from .handlers import default_routes
from .http import HTTPResponse, RequestParser, Router, not_found
from .log import setup_logging

logger = logging.getLogger(__name__)


class HTTPServer:
    """
    The HTTP/1.1 server.

    =========================================================================
    USAGE
    =========================================================================

        # Defaults: 0.0.0.0:4221, no data directory
        server = HTTPServer()
        server.run()   # blocks until Ctrl+C / SIGTERM

        # Embedded, e.g. in tests
        server = HTTPServer(ServerConfig(host="127.0.0.1", port=0))
        threading.Thread(target=server.run, daemon=True).start()
        server.wait_for_ready(5)
        host, port = server.address
        ...
        server.shutdown()

    =========================================================================
    """

    def __init__(self, config: Optional[ServerConfig] = None, router: Optional[Router] = None):
        """
        Initialize the HTTP server.

        Args:
            config: Server configuration. Defaults if not provided.
            router: Route table to serve. Defaults to the built-in
                    echo / user-agent / files handlers.

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config or ServerConfig()
        self.config.validate()

        self._socket_server = SocketServer(self.config)
        self._parser = RequestParser()
        self._router = router or Router(default_routes(self.config))

        self._threads_lock = threading.Lock()
        self._threads: set = set()

    @property
    def router(self) -> Router:
        return self._router

    @property
    def address(self) -> Tuple[str, int]:
        """The bound (host, port), the configured one before run()."""
        return self._socket_server.address

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self):
        """
        Start the server (blocking).

        Configures logging, binds the listener and accepts connections
        until shutdown() is called or SIGINT/SIGTERM arrives.

        Raises:
            OSError: If the listening address cannot be bound.
        """
        setup_logging(self.config.verbose)
        logger.debug(
            f"dirpath: {self.config.directory}, verbosity: {self.config.verbose}"
        )

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._shutdown()

    def shutdown(self):
        """Ask the accept loop to stop. Safe from any thread."""
        self._socket_server.shutdown()

    def wait_for_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the server is listening. False on timeout."""
        return self._socket_server.wait_for_ready(timeout)

    def _shutdown(self, join_timeout: float = 5.0):
        """Stop the listener and give in-flight connections time to finish."""
        self._socket_server.shutdown()

        with self._threads_lock:
            threads = list(self._threads)

        for thread in threads:
            thread.join(join_timeout)

        logger.info("Server stopped")

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """Start a dedicated thread for a freshly accepted connection."""
        thread = threading.Thread(
            target=self._process_connection,
            args=(conn,),
            name=f"conn-{conn.id}",
            daemon=True,
        )
        with self._threads_lock:
            self._threads.add(thread)
        thread.start()

    def _process_connection(self, conn: Connection):
        """
        Serve exactly one request on a connection (connection thread).

        The connection is closed on every path out of here. An unexpected
        exception still gets the fixed 404 if the socket takes it.
        """
        try:
            with conn:
                try:
                    raw_request = conn.read_request()
                    response = self.respond(raw_request, conn.address)
                    conn.send_response(response.to_bytes())
                except (TransportError, FramingError) as e:
                    logger.error(f"[{conn.id}] Error handling request from {conn.client_ip}: {e}")
                except Exception as e:
                    logger.exception(f"[{conn.id}] Unexpected error: {e}")
                    try:
                        conn.send_response(not_found().to_bytes())
                    except WriteError as write_err:
                        logger.error(f"[{conn.id}] Error sending 404: {write_err}")
        finally:
            with self._threads_lock:
                self._threads.discard(threading.current_thread())

    def respond(self, raw_request: bytes, client_address: Tuple[str, int] = ("", 0)) -> HTTPResponse:
        """
        Turn raw request bytes into the response to send.

        This is the whole parse → route → error mapping step, without any
        socket, so it can be called directly.

        Returns:
            The handler's response, or the fixed 404 when parsing or
            routing fails.
        """
        try:
            request = self._parser.parse(raw_request, client_address)
        except RequestParseError as e:
            logger.error(f"Parsing request : {e}")
            return not_found()

        try:
            return self._router.handle(request)
        except RoutingError as e:
            logger.warning(f"Resource not found at {request.target}: {e}")
            return not_found()
