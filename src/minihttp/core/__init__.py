"""
=============================================================================
CORE NETWORKING
=============================================================================

The transport layer of the server: raw TCP, below anything HTTP specific.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ SocketServer (socket_server.py)                                     │
    │   bind / listen / accept loop, signal handling, shutdown            │
    ├─────────────────────────────────────────────────────────────────────┤
    │ Connection (connection.py)                                          │
    │   one client socket: read one request, send, close                  │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .connection import Connection, ConnectionState
from .socket_server import SocketServer

__all__ = [
    "Connection",
    "ConnectionState",
    "SocketServer",
]
