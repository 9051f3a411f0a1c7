"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Generator, List, Optional, Union
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minihttp import HTTPServer, ServerConfig


class FakeSocket:
    """
    Stand-in for a connected client socket.

    recv() hands out the scripted chunks in order (never more than the
    requested size), then b"" as if the peer had closed. A chunk that is
    an exception instance is raised instead of returned.
    """

    def __init__(self, chunks: Optional[List[Union[bytes, Exception]]] = None, send_error: Optional[Exception] = None):
        self._chunks = list(chunks or [])
        self.send_error = send_error
        self.sent = b""
        self.recv_sizes: List[int] = []
        self.timeout = None
        self.shut_down = False
        self.closed = False

    def recv(self, size: int) -> bytes:
        self.recv_sizes.append(size)
        if not self._chunks:
            return b""
        chunk = self._chunks.pop(0)
        if isinstance(chunk, Exception):
            raise chunk
        if len(chunk) > size:
            self._chunks.insert(0, chunk[size:])
            chunk = chunk[:size]
        return chunk

    def sendall(self, data: bytes) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent += data

    def settimeout(self, timeout) -> None:
        self.timeout = timeout

    def shutdown(self, how) -> None:
        self.shut_down = True

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_socket():
    """Factory for FakeSocket instances."""
    return FakeSocket


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request."""
    return (
        b"GET /echo/abc123 HTTP/1.1\r\n"
        b"Host: localhost:4221\r\n"
        b"User-Agent: test-client/1.0\r\n"
        b"Accept: */*\r\n"
        b"\r\n"
    )


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """A data directory with a couple of files to serve."""
    root = tmp_path / "data"
    root.mkdir()
    (root / "hello.txt").write_bytes(b"Hello, World!")
    (root / "empty.bin").write_bytes(b"")
    (root / "big.bin").write_bytes(bytes(range(256)) * 10)
    (root / "sub").mkdir()
    (root / "sub" / "nested.txt").write_bytes(b"nested")
    (tmp_path / "secret.txt").write_bytes(b"top secret")
    return root


@pytest.fixture
def config(data_dir: Path) -> ServerConfig:
    """Default test server configuration."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        directory=str(data_dir),
        timeout=5.0,
    )


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


class ServerThread:
    """Runs an HTTPServer in a background thread."""

    def __init__(self, server: HTTPServer):
        self.server = server
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()

        if not self.server.wait_for_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        self.server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=10.0)

    def request(self, raw: bytes, timeout: float = 5.0) -> bytes:
        """Send raw bytes and read until the server closes the connection."""
        with socket.create_connection(("127.0.0.1", self.port), timeout=timeout) as s:
            s.sendall(raw)
            received = b""
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    return received
                received += chunk


@pytest.fixture
def running_server(config: ServerConfig, free_port: int) -> Generator[ServerThread, None, None]:
    """A real server on a free local port, stopped after the test."""
    server = HTTPServer(ServerConfig(
        host=config.host,
        port=free_port,
        directory=config.directory,
        timeout=config.timeout,
    ))

    srv = ServerThread(server)
    srv.start()

    yield srv

    srv.stop()
