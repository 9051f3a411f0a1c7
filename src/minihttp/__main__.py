"""
=============================================================================
MINIHTTP CLI ENTRY POINT
=============================================================================

    # Run with defaults (0.0.0.0:4221, no data directory)
    python -m minihttp

    # Serve /files/<name> from a directory
    python -m minihttp --directory /srv/data

    # Debug logging (request lines, read sizes)
    python -m minihttp --verbose

    # Custom address
    python -m minihttp --host 127.0.0.1 --port 8080

Every option can also come from the environment (HTTP_HOST, HTTP_PORT,
HTTP_DIRECTORY, HTTP_VERBOSE). Command-line values win.

=============================================================================
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import ServerConfig
from .server import HTTPServer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minihttp",
        description="HTTP/1.1 server built on raw sockets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m minihttp                          # Run with defaults
  python -m minihttp --directory /srv/data    # Serve files
  python -m minihttp --verbose                # Debug logs
  python -m minihttp --port 8080              # Custom port
        """
    )

    # ──────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ──────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: 0.0.0.0)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: 4221)"
    )

    # ──────────────────────────────────────────────────────────────────────
    # FEATURE ARGUMENTS
    # ──────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--directory", "-d",
        default=None,
        help="The data directory the http server can access"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        default=None,
        help="Enable debug logs"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"minihttp {__version__}"
    )

    return parser


def load_config(argv: Optional[List[str]] = None) -> ServerConfig:
    """
    Build the configuration: defaults, then environment, then CLI.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    args = build_parser().parse_args(argv)

    config = ServerConfig.from_env().with_overrides(
        host=args.host,
        port=args.port,
        directory=args.directory,
        verbose=args.verbose,
    )
    config.validate()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    try:
        config = load_config(argv)
        server = HTTPServer(config)
        server.run()
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
