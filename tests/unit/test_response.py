"""
Unit tests for the fixed response templates and status codes.
"""

import pytest

from staticserver.http.errors import (
    InvalidURI,
    MalformedRequestLine,
    NotFound,
    UnsupportedMethod,
    UnsupportedVersion,
    UpgradeRejected,
)
from staticserver.http.responses import (
    HTTP_200,
    HTTP_400,
    HTTP_404,
    HTTP_501,
    RESPONSES,
    response_for,
)
from staticserver.http.status_codes import HTTPStatus


class TestTemplates:
    """Tests for the exact bytes on the wire."""

    def test_200_is_headers_only(self):
        """Test the success header block."""
        assert HTTP_200 == b"HTTP/1.0 200 OK\r\nContent-Type: text/html\r\n\r\n"

    def test_400(self):
        """Test the bad request response."""
        assert HTTP_400 == (
            b"HTTP/1.0 400 Bad Request\r\nContent-Type: text/html\r\n\r\n"
            b"<html><body><h1>400 Bad Request</h1></body></html>\r\n"
        )

    def test_404(self):
        """Test the not found response."""
        assert HTTP_404 == (
            b"HTTP/1.0 404 Not Found\r\nContent-Type: text/html\r\n\r\n"
            b"<html><body><h1>404 Not Found</h1></body></html>\r\n"
        )

    def test_501(self):
        """Test the not implemented response."""
        assert HTTP_501 == (
            b"HTTP/1.0 501 Not Implemented\r\nContent-Type: text/html\r\n\r\n"
            b"<html><body><h1>501 Not Implemented</h1></body></html>\r\n"
        )

    def test_status_line_is_always_http_1_0(self):
        """Test that no template advertises HTTP/1.1."""
        for template in RESPONSES.values():
            assert template.startswith(b"HTTP/1.0 ")

    def test_status_line_matches_enum(self):
        """Test that each template's status line agrees with its key."""
        for status, template in RESPONSES.items():
            status_line = template.split(b"\r\n", 1)[0].decode()
            assert status_line == f"HTTP/1.0 {status:d} {status.phrase}"


class TestResponseLookup:
    """Tests for RESPONSES and response_for()."""

    def test_lookup_by_enum_and_int(self):
        """Test that plain integers work as keys."""
        assert response_for(HTTPStatus.NOT_FOUND) is HTTP_404
        assert response_for(501) is HTTP_501

    def test_unknown_status(self):
        """Test that statuses without a template are rejected."""
        with pytest.raises(ValueError):
            response_for(500)

    def test_mapping_is_read_only(self):
        """Test that the templates cannot be swapped at runtime."""
        with pytest.raises(TypeError):
            RESPONSES[HTTPStatus.OK] = b"HTTP/1.0 200 OK\r\n\r\n"


class TestErrorTaxonomy:
    """Tests for the status carried by each request error."""

    @pytest.mark.parametrize("error_cls, status", [
        (MalformedRequestLine, HTTPStatus.BAD_REQUEST),
        (UnsupportedVersion, HTTPStatus.BAD_REQUEST),
        (UpgradeRejected, HTTPStatus.BAD_REQUEST),
        (UnsupportedMethod, HTTPStatus.NOT_IMPLEMENTED),
        (InvalidURI, HTTPStatus.BAD_REQUEST),
        (NotFound, HTTPStatus.NOT_FOUND),
    ])
    def test_status_and_response(self, error_cls, status):
        """Test that each error maps to its fixed response."""
        error = error_cls("detail for the log")

        assert error.status == status
        assert error.response == RESPONSES[status]
        assert b"detail" not in error.response

    def test_phrases(self):
        """Test reason phrases."""
        assert HTTPStatus.OK.phrase == "OK"
        assert HTTPStatus.NOT_IMPLEMENTED.phrase == "Not Implemented"
