"""
pytest configuration and fixtures.
"""

import socket
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generator, Optional

import pytest

from staticserver import StaticFileServer, ServerConfig
from staticserver.core import Connection
from staticserver.handlers import StaticFileHandler
from staticserver.http import HTTPStatus


INDEX_HTML = b"<html><body><h1>Welcome</h1></body></html>\n"
ABOUT_HTML = b"<html><body><p>About us</p></body></html>\n"


def recv_all(sock: socket.socket) -> bytes:
    """Read until the peer closes its side."""
    chunks = []
    while True:
        chunk = sock.recv(4096)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


@dataclass
class Exchange:
    """Outcome of running the handler against one request."""
    status: Optional[HTTPStatus]
    response: bytes
    connection: Connection


@pytest.fixture
def docroot(tmp_path: Path) -> Path:
    """
    Document root with a few files:

        www/index.html
        www/about.html
        www/big.bin          (several buffer sizes, not a multiple of 1024)
        www/empty.html
        www/docs/            (directory)
        www/docs/guide.html
    """
    root = tmp_path / "www"
    root.mkdir()
    (root / "index.html").write_bytes(INDEX_HTML)
    (root / "about.html").write_bytes(ABOUT_HTML)
    (root / "big.bin").write_bytes(bytes(range(256)) * 40 + b"tail")
    (root / "empty.html").write_bytes(b"")
    (root / "docs").mkdir()
    (root / "docs" / "guide.html").write_bytes(b"<p>guide</p>")
    return root


@pytest.fixture
def index_html() -> bytes:
    return INDEX_HTML


@pytest.fixture
def about_html() -> bytes:
    return ABOUT_HTML


@pytest.fixture
def handler(docroot: Path) -> StaticFileHandler:
    """Handler serving the docroot fixture."""
    return StaticFileHandler(str(docroot))


@pytest.fixture
def exchange(handler: StaticFileHandler) -> Callable[..., Exchange]:
    """
    Run the handler over a socketpair.

    The request bytes are written by the "client" end, which then shuts
    down its write side and reads until the handler closes the
    connection.
    """
    def run(data: bytes, handler: StaticFileHandler = handler) -> Exchange:
        client, server_side = socket.socketpair()
        conn = Connection(socket=server_side, address=("socketpair", 0))
        result = {}

        def target():
            result["status"] = handler.handle(conn)

        worker = threading.Thread(target=target, daemon=True)
        worker.start()

        with client:
            client.settimeout(5.0)
            if data:
                client.sendall(data)
            client.shutdown(socket.SHUT_WR)
            response = recv_all(client)

        worker.join(timeout=5.0)
        assert not worker.is_alive(), "handler did not finish"
        return Exchange(status=result.get("status"), response=response, connection=conn)

    return run


class RunningServer:
    """Server helper that runs in a background thread."""

    def __init__(self, server: StaticFileServer):
        self.server = server
        self._thread: Optional[threading.Thread] = None

    @property
    def address(self):
        return self.server.address

    def start(self):
        self._thread = threading.Thread(
            target=self.server.run,
            kwargs={"setup_logging": False},
            daemon=True,
        )
        self._thread.start()
        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        self.server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def request(self, data: bytes) -> bytes:
        """Send raw bytes over TCP and return everything sent back."""
        with socket.create_connection(self.address, timeout=5.0) as sock:
            if data:
                sock.sendall(data)
            return recv_all(sock)


@pytest.fixture
def running_server(docroot: Path) -> Generator[RunningServer, None, None]:
    """A live server on an ephemeral localhost port."""
    server = StaticFileServer(ServerConfig(
        host="127.0.0.1",
        port=0,
        document_root=str(docroot),
        log_level="WARNING",
    ))
    running = RunningServer(server)
    running.start()

    yield running

    running.stop()
