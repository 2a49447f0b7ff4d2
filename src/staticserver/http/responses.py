"""
=============================================================================
FIXED RESPONSE TEMPLATES
=============================================================================

Every response this server sends starts with one of four pre-built byte
strings. Nothing is formatted per request: no Date, no Content-Length,
no Server header.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    RESPONSE LAYOUT                                  │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    HTTP/1.0 404 Not Found\r\n           ◄── status line             │
    │    Content-Type: text/html\r\n          ◄── the only header         │
    │    \r\n                                 ◄── end of headers          │
    │    <html><body><h1>404 Not Found</h1></body></html>\r\n             │
    │                                          ◄── fixed error body       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The status line always says HTTP/1.0, even when the client spoke 1.1.
Without Content-Length the client learns the body has ended when the
server closes the connection, which is exactly the HTTP/1.0 model.

The 200 template is headers only; the file content is streamed after it.

=============================================================================
"""

from types import MappingProxyType
from typing import Mapping

from .status_codes import HTTPStatus


HTTP_200 = b"HTTP/1.0 200 OK\r\nContent-Type: text/html\r\n\r\n"

HTTP_400 = (
    b"HTTP/1.0 400 Bad Request\r\nContent-Type: text/html\r\n\r\n"
    b"<html><body><h1>400 Bad Request</h1></body></html>\r\n"
)

HTTP_404 = (
    b"HTTP/1.0 404 Not Found\r\nContent-Type: text/html\r\n\r\n"
    b"<html><body><h1>404 Not Found</h1></body></html>\r\n"
)

HTTP_501 = (
    b"HTTP/1.0 501 Not Implemented\r\nContent-Type: text/html\r\n\r\n"
    b"<html><body><h1>501 Not Implemented</h1></body></html>\r\n"
)


# Read-only view; the templates live for the whole process.
RESPONSES: Mapping[HTTPStatus, bytes] = MappingProxyType({
    HTTPStatus.OK: HTTP_200,
    HTTPStatus.BAD_REQUEST: HTTP_400,
    HTTPStatus.NOT_FOUND: HTTP_404,
    HTTPStatus.NOT_IMPLEMENTED: HTTP_501,
})


def response_for(status: HTTPStatus) -> bytes:
    """
    Get the fixed response bytes for a status.

    Raises:
        KeyError: If the server has no template for the status.
    """
    return RESPONSES[HTTPStatus(status)]
