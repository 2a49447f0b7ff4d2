"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps one accepted client socket with the small API the request handler
needs: one bounded read, full writes, and a proper close.

=============================================================================
ONE READ, ONE RESPONSE, CLOSE
=============================================================================

TCP is a byte stream, and a "real" HTTP server has to buffer until it
sees the end of the headers. This server does not. It reads ONCE:

    recv(1024)
        │
        ├── 0 bytes  ──► client went away, close silently
        │
        └── N bytes  ──► whatever arrived is the request

Only the first three tokens and a substring scan are ever looked at, and
for any real client the request line arrives in the first segment.
Whatever the client sends after that is never read, which is why
close() drains. A failed recv() is raised to the handler, which logs the
cause and closes without answering.

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    NEW ──────► READING ──────► WRITING ──────► CLOSING ──────► CLOSED
     │             │                               ▲
     │             └───────────────────────────────┤
     └─────────────────────────────────────────────┘

There is no keep-alive state: every connection is closed after exactly
one response (or none).

=============================================================================
"""

import socket
import time
import logging
import uuid
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states, for logging and debugging."""
    NEW = "new"              # Just accepted, nothing read yet
    READING = "reading"      # Waiting for the request bytes
    WRITING = "writing"      # Sending the response
    CLOSING = "closing"      # Shutdown sequence in progress
    CLOSED = "closed"        # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    A Connection is owned by exactly one handler thread. It is created
    by the accept loop and handed over; from then on only the handler
    touches it, and the handler closes it on every path (use it as a
    context manager).

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short unique identifier, used as a log prefix.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
        timeout: Socket timeout in seconds, None for blocking.
    """

    socket: socket.socket
    address: tuple

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    timeout: Optional[float] = None

    def __post_init__(self):
        # Accepted sockets may inherit the listener's timeout.
        self.socket.setblocking(True)
        if self.timeout:
            self.socket.settimeout(self.timeout)

    @property
    def age(self) -> float:
        """Get connection age in seconds."""
        return time.time() - self.created_at

    @property
    def closed(self) -> bool:
        return self.state == ConnectionState.CLOSED

    # =========================================================================
    # READING
    # =========================================================================

    def read_once(self, max_bytes: int) -> bytes:
        """
        Read the request with a single recv() call.

        Args:
            max_bytes: Upper bound on the number of bytes read.

        Returns:
            The bytes received. Empty bytes means the client closed the
            connection.

        Raises:
            OSError: The read failed (reset, timeout). Left to the caller
                so the cause can be reported.
        """
        self.state = ConnectionState.READING
        return self.socket.recv(max_bytes)

    # =========================================================================
    # WRITING
    # =========================================================================

    def send(self, data: bytes) -> bool:
        """
        Send data to the client.

        Uses sendall() so a large chunk is never partially written.

        Returns:
            True if the data was sent, False if the connection is gone.
        """
        self.state = ConnectionState.WRITING
        try:
            self.socket.sendall(data)
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection gracefully.

        1. shutdown(SHUT_WR): send FIN, the client sees end of response
        2. Drain: read and discard anything the client still sends, so
           unread request bytes don't turn the close into a RST that
           could destroy the response in flight
        3. close(): release the file descriptor

        Safe to call more than once.
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Already disconnected

        try:
            self.socket.settimeout(0.5)
            while self.socket.recv(1024):
                pass
        except OSError:
            pass  # Timeout or reset, closing anyway

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age * 1000:.1f}ms")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensure connection is closed."""
        self.close()
        return False
