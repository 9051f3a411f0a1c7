"""
Unit tests for HTTP response building.
"""

import pytest

from minihttp.http.response import (
    CONTENT_TYPE_OCTET_STREAM,
    CONTENT_TYPE_TEXT_PLAIN,
    NOT_FOUND_MESSAGE,
    HTTPResponse,
    not_found,
    ok,
)
from minihttp.http.status_codes import HTTPStatus, reason_phrase


class TestHTTPResponse:
    """Tests for HTTPResponse class."""

    def test_status_line(self):
        """Test status line generation."""
        response = HTTPResponse(status=HTTPStatus.OK)
        assert response.status_line == "HTTP/1.1 200 OK"

        response = HTTPResponse(status=HTTPStatus.NOT_FOUND)
        assert response.status_line == "HTTP/1.1 404 Not Found"

    def test_status_line_unknown_code(self):
        response = HTTPResponse(status=299)
        assert response.status_line == "HTTP/1.1 299 Success"

    def test_set_body_chaining(self):
        response = (HTTPResponse()
            .set_content_type(CONTENT_TYPE_TEXT_PLAIN)
            .set_body("hello"))

        assert response.content_type == "text/plain"
        assert response.body == b"hello"
        assert response.content_length == 5

    def test_finalize_twice_raises(self):
        response = HTTPResponse().finalize()

        with pytest.raises(RuntimeError):
            response.finalize()

    def test_finalized_response_is_locked(self):
        response = HTTPResponse().finalize()

        with pytest.raises(RuntimeError):
            response.set_body(b"late")

    def test_to_bytes_finalizes(self):
        response = HTTPResponse(body=b"abc")

        assert not response.finalized
        assert response.to_bytes().endswith(b"\r\n\r\nabc")
        assert response.finalized

    def test_content_length_matches_body(self):
        response = HTTPResponse(body=b"12345", content_length=99).finalize()

        assert response.content_length == len(response.body) == 5
        assert b"Content-Length: 5\r\n" in response.message


class TestHeaderCombinations:
    """Exactly one blank line ends the header block in every case."""

    def test_no_type_no_body(self):
        assert ok().message == b"HTTP/1.1 200 OK\r\n\r\n"

    def test_type_without_body(self):
        response = ok(b"", CONTENT_TYPE_TEXT_PLAIN)

        assert response.message == b"HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\n\r\n"

    def test_body_without_type(self):
        response = ok(b"abc")

        assert response.message == b"HTTP/1.1 200 OK\r\nContent-Length: 3\r\n\r\nabc"

    def test_type_and_body(self):
        response = ok(b"abc123", CONTENT_TYPE_TEXT_PLAIN)

        assert response.message == (
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: text/plain\r\n"
            b"Content-Length: 6\r\n"
            b"\r\n"
            b"abc123"
        )

    def test_resplit_is_byte_exact(self):
        body = b"line one\r\nline two"
        message = ok(body, CONTENT_TYPE_OCTET_STREAM).message

        head, _, rest = message.partition(b"\r\n\r\n")
        assert head.split(b"\r\n") == [
            b"HTTP/1.1 200 OK",
            b"Content-Type: application/octet-stream",
            f"Content-Length: {len(body)}".encode(),
        ]
        assert rest == body

    def test_binary_body(self):
        body = bytes(range(256))
        response = ok(body, CONTENT_TYPE_OCTET_STREAM)

        assert response.message.endswith(body)
        assert b"Content-Length: 256\r\n" in response.message


class TestConvenienceFunctions:
    """Tests for ok() and not_found()."""

    def test_ok_encodes_str(self):
        response = ok("héllo", CONTENT_TYPE_TEXT_PLAIN)

        assert response.body == "héllo".encode("utf-8")
        assert response.status == HTTPStatus.OK
        assert response.finalized

    def test_not_found_literal(self):
        response = not_found()

        assert response.status == 404
        assert response.message == b"HTTP/1.1 404 Not Found \r\n\r\n"
        assert response.message == NOT_FOUND_MESSAGE
        assert response.to_bytes() == NOT_FOUND_MESSAGE

    def test_not_found_is_finalized(self):
        with pytest.raises(RuntimeError):
            not_found().finalize()


class TestStatusCodes:
    """Tests for HTTPStatus and reason_phrase()."""

    def test_int_compat(self):
        assert HTTPStatus.OK == 200
        assert HTTPStatus.NOT_FOUND.phrase == "Not Found"

    def test_categories(self):
        assert HTTPStatus.OK.is_success
        assert HTTPStatus.NOT_FOUND.is_error
        assert not HTTPStatus.OK.is_error

    @pytest.mark.parametrize("code,phrase", [
        (200, "OK"),
        (404, "Not Found"),
        (250, "Success"),
        (499, "Client Error"),
        (599, "Server Error"),
        (999, "Unknown"),
    ])
    def test_reason_phrase(self, code: int, phrase: str):
        assert reason_phrase(code) == phrase
