"""
=============================================================================
LOW-LEVEL TCP SOCKET SERVER
=============================================================================

The connection acceptor. It owns the listening socket, accepts clients
and gives each one its own thread. It never looks at a single byte of
payload.

=============================================================================
THREAD-PER-CONNECTION
=============================================================================

    ┌───────────────────────┐
    │   Listening Socket    │ ◄── bind(host, port), listen(SOMAXCONN)
    └───────────┬───────────┘
                │ accept()
        ┌───────┼───────────────────────┐
        ▼       ▼                       ▼
    ┌────────┐ ┌────────┐           ┌────────┐
    │Thread 1│ │Thread 2│    ...    │Thread N│   one per connection,
    │ conn 1 │ │ conn 2 │           │ conn N │   daemon, never joined
    └────────┘ └────────┘           └────────┘

Each worker thread:
  - is started with ownership of exactly one Connection
  - shares nothing with the other workers (no locks needed)
  - closes its connection itself before it exits
  - is detached: nobody waits for it or looks at its result

There is no pool and no limit on the number of workers. The only back
pressure is the kernel's listen backlog.

=============================================================================
ERROR POLICY
=============================================================================

Nothing that happens to a single connection stops the server:

    accept() raises         ──► log, keep looping
    Thread.start() raises   ──► log, close that connection, keep looping
    handler raises          ──► logged inside the worker, connection closed

Only bind/listen failures at startup are fatal.

=============================================================================
"""

import socket
import signal
import logging
import threading
from typing import Optional, Callable, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)


ConnectionHandler = Callable[[Connection], None]


class SocketServer:
    """
    Low-level TCP socket server.

    Usage:
        def handle_connection(conn: Connection):
            with conn:
                ...

        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown
    """

    def __init__(self, config: ServerConfig):
        """
        Initialize the socket server.

        The socket is NOT created here; that happens in start().
        """
        self.config = config

        self._socket: Optional[socket.socket] = None
        self._running = False

        # Set once the socket is listening.
        self._ready_event = threading.Event()

        self._original_handlers: dict = {}

    @property
    def address(self) -> Tuple[str, int]:
        """
        The server's address (IP, port).

        Once listening this is the address actually bound, so with
        port=0 it reports the port the OS picked.
        """
        if self._socket is not None:
            return self._socket.getsockname()[:2]
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        """Create and configure the listening socket."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # SO_REUSEADDR: restart without waiting out TIME_WAIT
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # Wake up accept() every second to check the running flag
        sock.settimeout(1.0)

        return sock

    def _setup_signals(self):
        """
        Install SIGTERM/SIGINT handlers for graceful shutdown.

        Python only allows signal handlers in the main thread. When the
        server runs in a background thread (tests, embedding), the
        caller is expected to use shutdown() instead.
        """
        if threading.current_thread() is not threading.main_thread():
            return

        def shutdown_handler(signum, frame):
            signal_name = signal.Signals(signum).name
            logger.info(f"Received {signal_name}, initiating shutdown...")
            self.shutdown()

        self._original_handlers[signal.SIGTERM] = signal.signal(signal.SIGTERM, shutdown_handler)
        self._original_handlers[signal.SIGINT] = signal.signal(signal.SIGINT, shutdown_handler)

    def _restore_signals(self):
        """Restore original signal handlers."""
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def start(self, connection_handler: ConnectionHandler):
        """
        Start accepting connections.

        This method BLOCKS until shutdown() is called.

        Args:
            connection_handler: Called in a fresh thread for every
                accepted connection. It owns the connection and must
                close it.

        Raises:
            OSError: If the socket cannot be bound or put in listen mode.
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
            self._socket.listen(self.config.backlog)
        except OSError as e:
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            self._socket.close()
            self._socket = None
            raise

        self._running = True

        self._setup_signals()

        host, port = self.address
        logger.info(f"Server listening on {host}:{port}")
        self._ready_event.set()

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: ConnectionHandler):
        """
        Main loop for accepting connections.

            while running:
                accept()            (returns every second at most)
                Connection(...)     wrap the client socket
                Thread(...).start() hand it to a worker, don't look back
        """
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if not self._running:
                    break
                # EMFILE, ECONNABORTED etc. affect one client, not the server
                logger.error(f"Accept error: {e}")
                continue

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            conn = Connection(
                socket=client_socket,
                address=client_address,
                timeout=self.config.timeout,
            )
            self._spawn_worker(conn, connection_handler)

    def _spawn_worker(self, conn: Connection, connection_handler: ConnectionHandler):
        """Start a detached worker thread that owns the connection."""
        worker = threading.Thread(
            target=self._run_worker,
            args=(conn, connection_handler),
            name=f"conn-{conn.id}",
            daemon=True,
        )
        try:
            worker.start()
        except RuntimeError as e:
            logger.error(f"[{conn.id}] Could not start worker thread: {e}")
            conn.close()

    @staticmethod
    def _run_worker(conn: Connection, connection_handler: ConnectionHandler):
        """
        Worker thread body.

        An unexpected error is logged here so it can't vanish silently
        with the thread; the connection is closed either way.
        """
        try:
            connection_handler(conn)
        except Exception:
            logger.exception(f"[{conn.id}] Unhandled error while handling connection")
        finally:
            conn.close()

    def shutdown(self):
        """
        Stop accepting connections.

        Safe to call from a signal handler or another thread, and safe
        to call more than once. Workers already running are left to
        finish on their own.
        """
        logger.info("Shutting down socket server...")
        self._running = False

    def _cleanup(self):
        """Clean up resources on shutdown."""
        self._restore_signals()

        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None

        self._ready_event.clear()
        logger.info("Socket server stopped")

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until the server is listening.

        Returns:
            True if the server is listening, False on timeout.
        """
        return self._ready_event.wait(timeout)
