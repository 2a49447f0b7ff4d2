"""
=============================================================================
REQUEST LINE PARSING AND VALIDATION
=============================================================================

The server looks at exactly one thing in a request: its first three tokens.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     WHAT WE PARSE                                   │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    GET /index.html HTTP/1.1\r\n      ◄── parsed into RequestLine    │
    │    Host: localhost:8080\r\n          ◄── ignored                    │
    │    Upgrade: h2c\r\n                  ◄── only substring-scanned     │
    │    \r\n                                                              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Tokens are taken from the start of the buffer with leading whitespace
skipped, so a stray blank line before the request line is tolerated.
A request line with fewer than three tokens runs on into the header
lines, which then fail the version check.

Headers are never parsed. The single exception is the HTTP/2 cleartext
upgrade check, which is a raw substring scan over the whole buffer. It
is NOT header parsing: "Upgrade:" and "h2c" may appear anywhere, in any
order, and both are matched case-sensitively.

=============================================================================
VALIDATION ORDER
=============================================================================

The checks always run in this order, and the first failure wins:

    parse line ──► version ──► h2c upgrade ──► method ──► URI shape
        │             │             │             │           │
       400           400           400           501         400

So "FOO / HTTP/9.9" is a 400 (bad version), not a 501, and
"POST / HTTP/1.1" with an "Upgrade: h2c" header is a 400, not a 501.

=============================================================================
PATH RESOLUTION
=============================================================================

    document_root + uri          "./www" + "/about.html" = "./www/about.html"
    document_root + /index.html  when uri is exactly "/"

This is plain string concatenation. ".." segments are NOT collapsed or
rejected, so "/../secret" resolves to "./www/../secret". That is a known
limitation of this server and is kept as is.

=============================================================================
"""

from dataclasses import dataclass

from .errors import (
    InvalidURI,
    MalformedRequestLine,
    UnsupportedMethod,
    UnsupportedVersion,
    UpgradeRejected,
)


MAX_METHOD_LENGTH = 15
MAX_URI_LENGTH = 255
MAX_VERSION_LENGTH = 15

SUPPORTED_VERSIONS = ("HTTP/1.0", "HTTP/1.1")
SUPPORTED_METHODS = ("GET", "HEAD")

INDEX_FILE = "/index.html"


@dataclass(frozen=True)
class RequestLine:
    """
    The parsed first line of a request.

    Attributes:
        method: Request method, e.g. "GET".
        uri: Request target exactly as sent, e.g. "/index.html".
        version: Protocol version, e.g. "HTTP/1.1".
    """

    method: str
    uri: str
    version: str


def parse_request_line(raw: bytes) -> RequestLine:
    """
    Extract method, URI and version from the start of the raw bytes.

    The buffer is split on ASCII whitespace (CR and LF included); the
    first three tokens are used and anything after them is ignored.
    Bytes are decoded as latin-1, which maps every byte to one
    character, so the length limits count bytes.

    Raises:
        MalformedRequestLine: Fewer than three tokens, or a token longer
            than its limit.
    """
    tokens = raw.split(maxsplit=3)[:3]

    if len(tokens) < 3:
        raise MalformedRequestLine(
            f"Malformed request line: expected 3 tokens, got {len(tokens)}"
        )

    method, uri, version = (token.decode("latin-1") for token in tokens[:3])

    for name, value, limit in (
        ("method", method, MAX_METHOD_LENGTH),
        ("URI", uri, MAX_URI_LENGTH),
        ("version", version, MAX_VERSION_LENGTH),
    ):
        if len(value) > limit:
            raise MalformedRequestLine(
                f"Malformed request line: {name} longer than {limit} characters"
            )

    return RequestLine(method=method, uri=uri, version=version)


def check_version(request: RequestLine) -> None:
    """Raise UnsupportedVersion unless the version is HTTP/1.0 or HTTP/1.1."""
    if request.version not in SUPPORTED_VERSIONS:
        raise UnsupportedVersion(f"Unsupported HTTP version: {request.version}")


def check_upgrade(raw: bytes) -> None:
    """Raise UpgradeRejected if the raw request asks for an h2c upgrade."""
    if b"Upgrade:" in raw and b"h2c" in raw:
        raise UpgradeRejected("HTTP/2 upgrade requested")


def check_method(request: RequestLine) -> None:
    """Raise UnsupportedMethod unless the method is GET or HEAD."""
    if request.method not in SUPPORTED_METHODS:
        raise UnsupportedMethod(f"Unsupported method: {request.method}")


def check_uri(request: RequestLine) -> None:
    """Raise InvalidURI unless the URI starts with '/'."""
    if not request.uri.startswith("/"):
        raise InvalidURI(f"Invalid URI: {request.uri}")


def validate_request(raw: bytes) -> RequestLine:
    """
    Parse and validate a raw request buffer.

    Runs every check in the fixed order described at the top of this
    module and returns the request line once all of them pass.

    Args:
        raw: Bytes read from the client (one read, at most buffer_size).

    Returns:
        The validated RequestLine.

    Raises:
        RequestError: The first check that failed.
    """
    request = parse_request_line(raw)
    check_version(request)
    check_upgrade(raw)
    check_method(request)
    check_uri(request)
    return request


def resolve_path(document_root: str, uri: str) -> str:
    """
    Map a request URI to a filesystem path under the document root.

    Examples:
        >>> resolve_path("./www", "/")
        './www/index.html'
        >>> resolve_path("./www", "/css/site.css")
        './www/css/site.css'
    """
    return document_root + (INDEX_FILE if uri == "/" else uri)
