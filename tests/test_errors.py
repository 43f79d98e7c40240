"""Tests for perch.errors: exception hierarchy and error messages."""

import pytest

from perch.errors import (
    ConfigurationError,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    PerchError,
    RouteFileError,
    RouteFileParseError,
    RouteFileUnreadable,
)


class TestHierarchy:
    def test_http_error_is_perch_error(self) -> None:
        assert issubclass(HTTPError, PerchError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)

    def test_method_not_allowed_is_http_error(self) -> None:
        assert issubclass(MethodNotAllowed, HTTPError)

    def test_configuration_error_is_perch_error(self) -> None:
        assert issubclass(ConfigurationError, PerchError)

    def test_route_file_errors(self) -> None:
        assert issubclass(RouteFileError, PerchError)
        assert issubclass(RouteFileUnreadable, RouteFileError)
        assert issubclass(RouteFileParseError, RouteFileError)


class TestRouteFileErrors:
    def test_unreadable_str(self) -> None:
        err = RouteFileUnreadable("routes.txt", "No such file or directory")
        assert str(err) == "routes.txt: No such file or directory"
        assert err.filename == "routes.txt"

    def test_parse_error_names_line(self) -> None:
        err = RouteFileParseError("routes.txt", 7, "duplicate entry /net")
        assert err.line == 7
        assert err.reason == "duplicate entry /net"
        assert str(err) == "routes.txt:7: duplicate entry /net"


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        err = HTTPError(status=400, detail="Bad request")
        assert str(err) == "400: Bad request"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]


class TestNotFound:
    def test_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"


class TestMethodNotAllowed:
    def test_allow_header(self) -> None:
        err = MethodNotAllowed(frozenset({"GET"}))
        assert err.status == 405
        assert err.headers == (("Allow", "GET"),)

    def test_allow_header_sorted(self) -> None:
        err = MethodNotAllowed(frozenset({"POST", "GET"}))
        assert dict(err.headers)["Allow"] == "GET, POST"
