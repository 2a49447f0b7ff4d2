"""
=============================================================================
HTTP PROTOCOL COMPONENTS
=============================================================================

The protocol side of the server, with no sockets involved:

    request.py       Request line parsing, validation, path resolution
    responses.py     The four fixed response templates
    status_codes.py  HTTPStatus enum
    errors.py        One exception per way a request can fail

Everything here works on plain bytes and strings, so it can be unit
tested without opening a connection.

=============================================================================
"""

from .errors import (
    InvalidURI,
    MalformedRequestLine,
    NotFound,
    RequestError,
    TransportReadFailure,
    UnsupportedMethod,
    UnsupportedVersion,
    UpgradeRejected,
)
from .request import RequestLine, parse_request_line, resolve_path, validate_request
from .responses import HTTP_200, HTTP_400, HTTP_404, HTTP_501, RESPONSES, response_for
from .status_codes import HTTPStatus

__all__ = [
    # Request parsing
    "RequestLine",
    "parse_request_line",
    "validate_request",
    "resolve_path",

    # Responses
    "HTTP_200",
    "HTTP_400",
    "HTTP_404",
    "HTTP_501",
    "RESPONSES",
    "response_for",

    # Status codes
    "HTTPStatus",

    # Errors
    "RequestError",
    "TransportReadFailure",
    "MalformedRequestLine",
    "UnsupportedVersion",
    "UpgradeRejected",
    "UnsupportedMethod",
    "InvalidURI",
    "NotFound",
]
