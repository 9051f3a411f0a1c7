"""
Integration tests: a real server on a local port, raw sockets as clients.
"""

import socket
import threading
import time

import pytest

NOT_FOUND = b"HTTP/1.1 404 Not Found \r\n\r\n"


class TestEndpoints:
    """One request per connection against the running server."""

    def test_root(self, running_server):
        response = running_server.request(b"GET / HTTP/1.1\r\nHost: localhost\r\n\r\n")

        assert response == b"HTTP/1.1 200 OK\r\n\r\n"

    def test_echo(self, running_server):
        response = running_server.request(b"GET /echo/abc123 HTTP/1.1\r\nHost: x\r\n\r\n")

        assert response == (
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: text/plain\r\n"
            b"Content-Length: 6\r\n"
            b"\r\n"
            b"abc123"
        )

    def test_user_agent(self, running_server):
        response = running_server.request(
            b"GET /user-agent HTTP/1.1\r\nHost: x\r\nUser-Agent: test-client/1.0\r\n\r\n"
        )

        assert response.endswith(b"Content-Length: 15\r\n\r\ntest-client/1.0")

    def test_file(self, running_server):
        response = running_server.request(b"GET /files/big.bin HTTP/1.1\r\n\r\n")

        head, _, body = response.partition(b"\r\n\r\n")
        assert b"Content-Type: application/octet-stream" in head
        assert b"Content-Length: 2560" in head
        assert body == bytes(range(256)) * 10

    @pytest.mark.parametrize("target", [
        "/missing",
        "/files/nope.txt",
        "/files/../secret.txt",
    ])
    def test_not_found(self, running_server, target: str):
        response = running_server.request(f"GET {target} HTTP/1.1\r\n\r\n".encode())

        assert response == NOT_FOUND

    def test_post_gets_404_and_close(self, running_server):
        response = running_server.request(b"POST / HTTP/1.1\r\nContent-Length: 0\r\n\r\n")

        assert response == NOT_FOUND


class TestFraming:
    """Requests that arrive in pieces."""

    def test_request_split_across_sends(self, running_server):
        with socket.create_connection(("127.0.0.1", running_server.port), timeout=5) as s:
            s.sendall(b"GET /echo/split HTTP/1.1\r\nHost: x\r")
            time.sleep(0.1)
            s.sendall(b"\n\r\n")

            received = b""
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                received += chunk

        assert received.endswith(b"\r\n\r\nsplit")

    def test_large_header_block(self, running_server):
        filler = b"".join(f"X-Fill-{chr(65 + i % 26)}: {'v' * 100}\r\n".encode() for i in range(40))
        raw = b"GET /echo/big HTTP/1.1\r\n" + filler + b"\r\n"

        assert len(raw) > 1024
        assert running_server.request(raw).endswith(b"big")

    def test_half_open_client_does_not_block_others(self, running_server):
        """A stalled connection holds only its own thread."""
        with socket.create_connection(("127.0.0.1", running_server.port), timeout=5) as stalled:
            stalled.sendall(b"GET /echo/never-finished HTTP/1.1\r\n")

            response = running_server.request(b"GET /echo/ok HTTP/1.1\r\n\r\n")

        assert response.endswith(b"ok")


class TestConcurrency:
    """Many clients at once."""

    def test_parallel_clients(self, running_server):
        results = {}

        def client(i: int):
            results[i] = running_server.request(f"GET /echo/{i} HTTP/1.1\r\n\r\n".encode())

        threads = [threading.Thread(target=client, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert len(results) == 20
        for i, response in results.items():
            assert response.endswith(f"\r\n\r\n{i}".encode())


class TestLifecycle:
    """Server start and stop."""

    def test_address_reports_bound_port(self, running_server):
        host, port = running_server.server.address

        assert host == "127.0.0.1"
        assert port > 0

    def test_shutdown_stops_accepting(self, running_server):
        port = running_server.port
        running_server.stop()

        with pytest.raises(OSError):
            socket.create_connection(("127.0.0.1", port), timeout=1).close()
