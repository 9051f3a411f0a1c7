"""
=============================================================================
HANDLERS MODULE
=============================================================================

The built-in request handlers and the route table that wires them up.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    REQUEST → HANDLER → RESPONSE                     │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    Request                 Handler                 Response         │
    │   ┌──────────┐          ┌───────────┐          ┌──────────┐         │
    │   │ GET      │          │           │          │ 200 OK   │         │
    │   │ /echo/hi │ ───────▶ │ echo()    │ ───────▶ │ "hi"     │         │
    │   └──────────┘          └───────────┘          └──────────┘         │
    │                               │                                      │
    │                               └── or raise RoutingError → 404        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
BUILT-IN HANDLERS
=============================================================================

    ┌───────────────┬───────────────────────────────────────────────────────┐
    │ Segment       │ Handler                                               │
    ├───────────────┼───────────────────────────────────────────────────────┤
    │ echo          │ echo()        body = rest of the target               │
    │ user-agent    │ user_agent()  body = User-Agent header                │
    │ files         │ FileHandler   body = file under the data directory    │
    └───────────────┴───────────────────────────────────────────────────────┘

=============================================================================
"""

from typing import Dict

from ..config import ServerConfig
from ..http.router import Handler
from .echo import echo, user_agent
from .files import FileHandler


def default_routes(config: ServerConfig) -> Dict[str, Handler]:
    """
    Build the route table of the built-in handlers.

    The files handler is bound to config.directory here, once, so the
    handlers never look at global state.
    """
    files = FileHandler(config.directory, chunk_size=config.file_chunk_size)
    return {
        "echo": echo,
        "user-agent": user_agent,
        "files": files.handle,
    }


__all__ = [
    "FileHandler",
    "default_routes",
    "echo",
    "user_agent",
]
