"""
=============================================================================
MINIHTTP - HTTP/1.1 Server on Raw Sockets
=============================================================================

A small HTTP/1.1 server written directly against the socket API: it frames
requests, parses them, routes them and serializes responses itself.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    minihttp/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m minihttp)
    ├── server.py            # HTTPServer: per-connection threads, respond()
    ├── config.py            # ServerConfig frozen dataclass
    ├── errors.py            # Exception taxonomy
    ├── log.py               # setup_logging(): INFO → stdout, rest → stderr
    ├── core/                # Transport
    │   ├── socket_server.py # Listener and accept loop
    │   └── connection.py    # Request framing, send, close
    ├── http/                # Protocol
    │   ├── request.py       # Request parsing
    │   ├── response.py      # Response serialization
    │   ├── router.py        # First-segment routing
    │   └── status_codes.py  # HTTPStatus enum
    └── handlers/            # Built-in routes
        ├── echo.py          # /echo/<text>, /user-agent
        └── files.py         # /files/<name>

=============================================================================
QUICK START
=============================================================================

    from minihttp import HTTPServer, ServerConfig

    server = HTTPServer(ServerConfig(port=4221, directory="/tmp/data"))
    server.run()

    $ curl -i localhost:4221/echo/hello
    HTTP/1.1 200 OK
    Content-Type: text/plain
    Content-Length: 5

    hello

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPServer
from .config import ServerConfig

__all__ = ["HTTPServer", "ServerConfig", "__version__"]
