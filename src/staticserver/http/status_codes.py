"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The server speaks a deliberately tiny slice of HTTP. Only four outcomes
ever reach the wire:

    ┌───────┬───────────────────┬───────────────────────────────────────┐
    │ Code  │ Phrase            │ When                                  │
    ├───────┼───────────────────┼───────────────────────────────────────┤
    │  200  │ OK                │ File found and opened                 │
    │  400  │ Bad Request       │ Malformed line, version, URI, h2c     │
    │  404  │ Not Found         │ Missing, directory, or unreadable     │
    │  501  │ Not Implemented   │ Any method other than GET / HEAD      │
    └───────┴───────────────────┴───────────────────────────────────────┘

There is no 500. Anything that goes wrong while serving a file is
reported as 404, and anything that goes wrong while reading the request
is reported as nothing at all (the connection is just closed).

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes used by the server.

    Extends IntEnum, so members compare equal to plain integers:

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    OK = 200
    BAD_REQUEST = 400
    NOT_FOUND = 404
    NOT_IMPLEMENTED = 501

    @property
    def phrase(self) -> str:
        """Reason phrase as it appears in the status line."""
        return _STATUS_PHRASES[self]


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.NOT_IMPLEMENTED: "Not Implemented",
}
