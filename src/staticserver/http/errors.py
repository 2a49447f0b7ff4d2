"""
=============================================================================
REQUEST ERRORS
=============================================================================

Every way a request can fail, as an exception type.

    ┌──────────────────────────┬────────┬──────────────────────────────────┐
    │ Exception                │ Status │ Raised when                      │
    ├──────────────────────────┼────────┼──────────────────────────────────┤
    │ TransportReadFailure     │   -    │ recv() gave nothing / errored    │
    │ MalformedRequestLine     │  400   │ < 3 tokens, or a token too long  │
    │ UnsupportedVersion       │  400   │ not HTTP/1.0 or HTTP/1.1         │
    │ UpgradeRejected          │  400   │ "Upgrade:" and "h2c" present     │
    │ UnsupportedMethod        │  501   │ not GET or HEAD                  │
    │ InvalidURI               │  400   │ URI does not start with "/"      │
    │ NotFound                 │  404   │ missing, directory, can't open   │
    └──────────────────────────┴────────┴──────────────────────────────────┘

All failures are terminal for their connection and never for the
server. The message is for the log only; the client gets the fixed
template for the status and nothing more.

TransportReadFailure deliberately does NOT derive from RequestError:
there is no response to send for a connection that never said anything.

=============================================================================
"""

from .responses import response_for
from .status_codes import HTTPStatus


class TransportReadFailure(Exception):
    """The client sent no bytes, or the read itself failed."""


class RequestError(Exception):
    """
    Base class for failures that are answered with an error response.

    Attributes:
        message: Description for the server log.
        status: HTTP status code sent to the client.
    """

    status: HTTPStatus = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def response(self) -> bytes:
        """The exact bytes written back to the client."""
        return response_for(self.status)


class MalformedRequestLine(RequestError):
    status = HTTPStatus.BAD_REQUEST


class UnsupportedVersion(RequestError):
    status = HTTPStatus.BAD_REQUEST


class UpgradeRejected(RequestError):
    status = HTTPStatus.BAD_REQUEST


class UnsupportedMethod(RequestError):
    # The request was well-formed, the server just doesn't do this method.
    status = HTTPStatus.NOT_IMPLEMENTED


class InvalidURI(RequestError):
    status = HTTPStatus.BAD_REQUEST


class NotFound(RequestError):
    status = HTTPStatus.NOT_FOUND
