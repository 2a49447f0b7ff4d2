"""
=============================================================================
STATIC FILE SERVER
=============================================================================

Wires the pieces together:

    ServerConfig ──► StaticFileServer
                        │
                        ├── SocketServer        accept loop, one thread
                        │                       per connection
                        │
                        └── StaticFileHandler   read, validate, answer,
                                                close

=============================================================================
REQUEST FLOW
=============================================================================

    1. SocketServer accepts a TCP connection
    2. A new daemon thread is started for it
    3. StaticFileHandler reads one buffer from the socket
    4. Request line is parsed and validated
    5. URI is resolved against the document root
    6. Fixed status template is sent, plus the file for GET
    7. Connection is closed (no keep-alive, ever)

=============================================================================
"""

import logging
import os
from typing import Optional

from .config import ServerConfig
from .core import Connection, SocketServer
from .handlers import StaticFileHandler

logger = logging.getLogger(__name__)

class StaticFileServer:
    """
    Minimal static file HTTP server.

    Usage:
        server = StaticFileServer(ServerConfig(port=8080, document_root="./www"))
        server.run()   # blocks until Ctrl+C / SIGTERM
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        """
        Initialize the server.

        Args:
            config: Server configuration. Uses the defaults if not provided.

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config or ServerConfig()
        self.config.validate()  # Fail-fast on invalid config

        self._socket_server = SocketServer(self.config)
        self._handler = StaticFileHandler(
            document_root=self.config.document_root,
            buffer_size=self.config.buffer_size,
        )

    @property
    def address(self):
        """Address the server is (or will be) listening on."""
        return self._socket_server.address

    def run(self, setup_logging: bool = True):
        """
        Start the server (blocking).

        Args:
            setup_logging: Configure the root logger from config.log_level.
                Embedders that manage logging themselves pass False.

        Raises:
            OSError: If the listening socket cannot be set up.
        """
        if setup_logging:
            self._setup_logging()

        if not os.path.isdir(self.config.document_root):
            logger.warning(
                f"Document root {self.config.document_root!r} is not a directory; "
                f"every request will be answered with 404"
            )

        logger.info(
            f"Starting static file server on {self.config.host}:{self.config.port}, "
            f"serving {self.config.document_root}"
        )

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            logger.info("Server stopped")

    def shutdown(self):
        """Stop accepting connections. In-flight requests finish on their own."""
        self._socket_server.shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the listening socket is up. Mostly useful in tests."""
        return self._socket_server.wait_until_ready(timeout)

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("staticserver").setLevel(level)

    def _handle_connection(self, conn: Connection):
        """Runs in the connection's own worker thread."""
        self._handler.handle(conn)

