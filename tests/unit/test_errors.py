"""
Unit tests for the error taxonomy.
"""

import pytest

from minihttp import errors
from minihttp.core.socket_server import SocketServer
from minihttp.server import HTTPServer


class TestErrorTaxonomy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize("cls, base", [
        (errors.ReadError, errors.TransportError),
        (errors.WriteError, errors.TransportError),
        (errors.RequestTooLargeError, errors.FramingError),
        (errors.MethodNotImplementedError, errors.RequestParseError),
        (errors.InvalidMethodError, errors.RequestParseError),
        (errors.RouteNotFoundError, errors.RoutingError),
        (errors.MissingHeaderError, errors.RoutingError),
        (errors.ResourceNotFoundError, errors.RoutingError),
        (errors.ResourceReadError, errors.RoutingError),
        (errors.PathTraversalError, errors.RoutingError),
    ])
    def test_hierarchy(self, cls, base):
        assert issubclass(cls, base)
        assert issubclass(cls, errors.ServerError)

    def test_error_is_just_its_message(self):
        err = errors.RouteNotFoundError("Get Path 'x' is not implemented.")

        assert str(err) == "Get Path 'x' is not implemented."
        assert err.args == ("Get Path 'x' is not implemented.",)
        assert not hasattr(err, "status_code")

    def test_cause_is_chained(self):
        cause = OSError("disk")

        with pytest.raises(errors.ResourceReadError) as exc_info:
            try:
                raise cause
            except OSError as err:
                raise errors.ResourceReadError("read failed") from err

        assert exc_info.value.__cause__ is cause


class TestLifecycleSurface:
    """Only the lifecycle hooks the server actually drives are exposed."""

    def test_socket_server_hooks(self):
        assert hasattr(SocketServer, "wait_for_ready")
        assert not hasattr(SocketServer, "wait_for_shutdown")
        assert not hasattr(SocketServer, "is_running")

    def test_http_server_has_no_connection_counter(self):
        assert not hasattr(HTTPServer, "active_connections")
