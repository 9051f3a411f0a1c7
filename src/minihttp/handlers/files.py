"""
=============================================================================
FILE HANDLER
=============================================================================

Serves files from the configured data directory:

    GET /files/report.bin   →  200 application/octet-stream <file bytes>

=============================================================================
SECURITY: PATH TRAVERSAL
=============================================================================

The name comes straight from the request target, so it may try to climb
out of the data directory:

    GET /files/../../etc/passwd

The name is joined to the root, resolved (following ".." and symlinks)
and must still be inside the root:

        full_path = (root_dir / name).resolve()
        full_path.relative_to(root_dir)  # Raises if outside root!

A name that escapes is answered with the same 404 as a missing file; only
the log tells them apart.

=============================================================================
READING
=============================================================================

The file is read in fixed-size chunks until read() returns b"", the same
accumulate-until-done loop the request reader uses for sockets, only
bounded by end of file instead of a terminator.

=============================================================================
"""

import logging
from pathlib import Path
from typing import Optional

from ..errors import PathTraversalError, ResourceNotFoundError, ResourceReadError
from ..http.request import HTTPRequest
from ..http.response import CONTENT_TYPE_OCTET_STREAM, HTTPResponse, ok
from ..http.router import split_target

logger = logging.getLogger(__name__)


DEFAULT_FILE_CHUNK_SIZE = 512


class FileHandler:
    """
    Handler for /files/<name>.

    =========================================================================
    FLOW
    =========================================================================

        Request: GET /files/notes.txt

        1. Take the remainder of the target as the file name
        2. Resolve it under root_dir
        3. Security check: is the path within root_dir?
        4. Must be a regular file
        5. Read it chunk by chunk

    Every failure is a RoutingError subclass, which the server maps to
    404 Not Found.

    =========================================================================
    USAGE
    =========================================================================

        files = FileHandler("/srv/data", chunk_size=512)
        routes = {"files": files.handle}

    =========================================================================
    """

    def __init__(self, root_dir: Optional[str], chunk_size: int = DEFAULT_FILE_CHUNK_SIZE):
        """
        Initialize the file handler.

        Args:
            root_dir: Directory to serve files from, or None to serve
                      nothing at all.
            chunk_size: Bytes per read() call.
        """
        # Resolve once: the traversal check compares resolved paths
        self.root_dir = Path(root_dir).resolve() if root_dir else None
        self.chunk_size = chunk_size

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        _, name = split_target(request.target)
        path = self.resolve(name)
        content = self.read_file(path)
        return ok(content, CONTENT_TYPE_OCTET_STREAM)

    def resolve(self, name: str) -> Path:
        """
        Map a requested file name to a path inside root_dir.

        Raises:
            ResourceNotFoundError: No root configured, or not a file.
            PathTraversalError: The name resolves outside root_dir.
        """
        if self.root_dir is None:
            raise ResourceNotFoundError(f"No data directory configured, cannot serve '{name}'")

        try:
            full_path = (self.root_dir / name).resolve()
        except (OSError, ValueError) as err:
            raise ResourceNotFoundError(f"Cannot resolve file '{name}'") from err

        try:
            full_path.relative_to(self.root_dir)
        except ValueError:
            raise PathTraversalError(
                f"File '{name}' resolves outside of {self.root_dir}"
            ) from None

        if not full_path.is_file():
            raise ResourceNotFoundError(f"File not found: {full_path}")

        return full_path

    def read_file(self, path: Path) -> bytes:
        """
        Read a whole file in chunk_size pieces.

        Raises:
            ResourceNotFoundError: The file vanished before it was opened.
            ResourceReadError: Opening or reading failed otherwise.
        """
        buffer = bytearray()

        try:
            with path.open("rb") as f:
                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    buffer += chunk
                    logger.debug(f"Read {len(chunk)} bytes from {path.name} (total {len(buffer)})")
        except FileNotFoundError as err:
            raise ResourceNotFoundError(f"File not found: {path}") from err
        except OSError as err:
            raise ResourceReadError(
                f"Error occurred while reading file '{path}', at index {len(buffer)}"
            ) from err

        return bytes(buffer)
