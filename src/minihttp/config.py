"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Every tunable of the server lives in one frozen dataclass, built once at
startup and passed down explicitly. Connection threads only ever read it.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m minihttp --directory /srv/data                  │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTP_DIRECTORY=/srv/data python -m minihttp               │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 4221

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ServerConfig:
    """
    Configuration for the HTTP server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK
    - host, port, backlog, timeout

    REQUEST FRAMING
    - request_chunk_size, max_request_size

    FILES
    - directory, file_chunk_size

    LOGGING
    - verbose

    =========================================================================
    """

    # ──────────────────────────────────────────────────────────────────────
    # NETWORK
    # ──────────────────────────────────────────────────────────────────────

    host: str = DEFAULT_HOST
    """IP address to bind to. "0.0.0.0" listens on every interface."""

    port: int = DEFAULT_PORT
    """Port to listen on. 0 lets the OS pick a free one."""

    backlog: int = 128
    """Maximum number of queued, not yet accepted connections."""

    timeout: Optional[float] = None
    """
    Per-connection socket timeout in seconds.
    None = blocking: a client that never finishes its request keeps its
    thread forever.
    """

    # ──────────────────────────────────────────────────────────────────────
    # REQUEST FRAMING
    # ──────────────────────────────────────────────────────────────────────

    request_chunk_size: int = 1024
    """Bytes asked for per recv() call."""

    max_request_size: int = 1024 * 1024  # 1 MiB
    """Ceiling on a request that has not reached \\r\\n\\r\\n yet."""

    # ──────────────────────────────────────────────────────────────────────
    # FILES
    # ──────────────────────────────────────────────────────────────────────

    directory: Optional[str] = None
    """Root of the files served under /files/. None serves nothing."""

    file_chunk_size: int = 512
    """Bytes per read() when loading a file."""

    # ──────────────────────────────────────────────────────────────────────
    # LOGGING
    # ──────────────────────────────────────────────────────────────────────

    verbose: bool = False
    """Emit DEBUG records (request lines, read sizes, echoed values)."""

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTP_HOST       Server host (default: 0.0.0.0)
        HTTP_PORT       Server port (default: 4221)
        HTTP_DIRECTORY  Data directory for /files/ (default: none)
        HTTP_VERBOSE    "1", "true", "yes" or "on" enables DEBUG logs

        =====================================================================
        """
        return cls(
            host=os.getenv("HTTP_HOST", DEFAULT_HOST),
            port=int(os.getenv("HTTP_PORT", str(DEFAULT_PORT))),
            directory=os.getenv("HTTP_DIRECTORY") or None,
            verbose=os.getenv("HTTP_VERBOSE", "").strip().lower() in _TRUTHY,
        )

    def with_overrides(self, **overrides) -> "ServerConfig":
        """
        Return a copy with the given fields replaced.

        None values are ignored, so unset CLI options keep whatever the
        environment or the defaults provided.
        """
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> None:
        """
        Validate configuration values, failing fast at startup.

        Raises:
            ValueError: On the first invalid value.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.request_chunk_size < 1:
            raise ValueError("request_chunk_size must be >= 1")

        if self.max_request_size < self.request_chunk_size:
            raise ValueError("max_request_size must be >= request_chunk_size")

        if self.file_chunk_size < 1:
            raise ValueError("file_chunk_size must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.directory is not None and not Path(self.directory).is_dir():
            raise ValueError(f"directory does not exist: {self.directory}")
