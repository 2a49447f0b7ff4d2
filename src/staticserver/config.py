"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the static file server.

=============================================================================
WHY A CONFIG CLASS?
=============================================================================

The server only has a handful of knobs, but they are read from three
places (defaults, environment, command line) and they must be validated
before a socket is ever created. A dataclass keeps all of them in one
typed place.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m staticserver --port 3000                        │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTP_PORT=3000 python -m staticserver                     │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The defaults are the classic fixed constants of a tiny web server:
port 8080, document root ./www and a 1 KB request buffer. Running with
no configuration at all gives exactly that server.

=============================================================================
"""

import os
import socket
from dataclasses import dataclass
from typing import Optional


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    """
    Configuration for the static file server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, timeout

    REQUEST HANDLING
    - document_root, buffer_size

    LOGGING
    - log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    """
    The IP address to bind to.
    - "0.0.0.0" - All network interfaces (default)
    - "127.0.0.1" - Localhost only
    """

    port: int = 8080
    """
    The port number to listen on. 0 asks the OS for a free port,
    which is what the test suite does.
    """

    backlog: int = socket.SOMAXCONN
    """
    Maximum number of queued connections. Defaults to the platform
    maximum; there is no other connection limiting.
    """

    timeout: Optional[float] = None
    """
    Per-connection socket timeout in seconds.
    None = blocking. A stalled client only ever blocks its own thread.
    """

    # ─────────────────────────────────────────────────────────────────────
    # REQUEST HANDLING
    # ─────────────────────────────────────────────────────────────────────

    document_root: str = "./www"
    """
    Directory that request URIs are appended to. The path is used as a
    plain string prefix, it is not resolved or normalized.
    """

    buffer_size: int = 1024
    """
    Size of the single request read, and of each chunk when streaming a
    file back to the client.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTP_HOST           Server host (default: 0.0.0.0)
        HTTP_PORT           Server port (default: 8080)
        HTTP_BACKLOG        Listen backlog (default: SOMAXCONN)
        HTTP_DOCUMENT_ROOT  Document root (default: ./www)
        HTTP_BUFFER_SIZE    Request buffer size (default: 1024)
        HTTP_TIMEOUT        Socket timeout in seconds (default: none)
        HTTP_LOG_LEVEL      Logging level (default: INFO)

        =====================================================================
        """
        timeout = os.getenv("HTTP_TIMEOUT")
        return cls(
            host=os.getenv("HTTP_HOST", "0.0.0.0"),
            port=int(os.getenv("HTTP_PORT", "8080")),
            backlog=int(os.getenv("HTTP_BACKLOG", str(socket.SOMAXCONN))),
            timeout=float(timeout) if timeout else None,
            document_root=os.getenv("HTTP_DOCUMENT_ROOT", "./www"),
            buffer_size=int(os.getenv("HTTP_BUFFER_SIZE", "1024")),
            log_level=os.getenv("HTTP_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Fail fast at startup rather than on the first request. A missing
        document root is NOT an error here: the server still runs and
        answers 404 for everything, and the server logs a warning.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of {', '.join(LOG_LEVELS)}."
            )
