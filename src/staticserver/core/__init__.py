"""
=============================================================================
CORE SERVER COMPONENTS
=============================================================================

The networking plumbing under the request handler:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         SOCKET SERVER                                │
    │  • Creates the TCP listening socket, binds, listens                 │
    │  • Runs the accept() loop                                           │
    │  • Starts one detached worker thread per connection                 │
    │  • Handles SIGTERM / SIGINT                                          │
    └─────────────────────────────────────────────────────────────────────┘
                                    │
                                    │ one Connection per thread
                                    ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                          CONNECTION                                  │
    │  • Wraps a client socket                                            │
    │  • One bounded read, sendall() writes                               │
    │  • Graceful close (FIN, drain, close), context manager              │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .connection import Connection, ConnectionState
from .socket_server import SocketServer

__all__ = [
    "Connection",
    "ConnectionState",
    "SocketServer",
]
