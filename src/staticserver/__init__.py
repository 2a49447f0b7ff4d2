"""
=============================================================================
STATICSERVER - Minimal Static File HTTP Server
=============================================================================

A tiny HTTP/1.0-style file server on raw Python sockets. It reads one
request line per connection, serves one file (or one fixed error page),
and closes the connection.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    staticserver/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m staticserver)
    ├── server.py            # StaticFileServer
    ├── config.py            # ServerConfig dataclass
    ├── core/
    │   ├── socket_server.py # Accept loop, thread per connection
    │   └── connection.py    # Client socket wrapper
    ├── http/
    │   ├── request.py       # Request line parsing and validation
    │   ├── responses.py     # Fixed response templates
    │   ├── status_codes.py  # HTTPStatus enum
    │   └── errors.py        # Request error taxonomy
    └── handlers/
        └── static.py        # The per-connection request pipeline

=============================================================================
QUICK START
=============================================================================

    from staticserver import StaticFileServer, ServerConfig

    server = StaticFileServer(ServerConfig(port=8080, document_root="./www"))
    server.run()

or from the shell:

    python -m staticserver --port 8080 --root ./www

=============================================================================
WHAT IT DOES NOT DO
=============================================================================

No keep-alive, no chunked encoding, no request bodies, no virtual hosts,
no MIME detection (everything is text/html), no TLS, no caching.

=============================================================================
"""

__version__ = "1.0.0"

from .server import StaticFileServer
from .config import ServerConfig

__all__ = ["StaticFileServer", "ServerConfig", "__version__"]
