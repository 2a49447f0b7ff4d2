"""
=============================================================================
STATIC FILE HANDLER
=============================================================================

Handles one connection from start to finish: read the request, decide,
answer, close. This is the whole HTTP side of the server.

=============================================================================
THE PIPELINE
=============================================================================

    ┌──────────┐   ┌─────────┐   ┌────────────────────────────────────┐
    │ Reading  │──►│ Parsing │──►│ Validating                         │
    └────┬─────┘   └────┬────┘   │  version ► upgrade ► method ► URI  │
         │              │        └────────────────┬───────────────────┘
         │ no data      │ 400                     │ 400 / 501
         ▼              ▼                         ▼
    ┌──────────────────────────────────────────────────────────────────┐
    │                            Closed                                │
    └──────────────────────────────────────────────────────────────────┘
         ▲              ▲                         ▲
         │ 404          │ 404                     │ 200
    ┌────┴─────┐   ┌────┴────┐   ┌────────────────┴───────────────────┐
    │Resolving │──►│ Opening │──►│ Responding (headers, then body     │
    └──────────┘   └─────────┘   │ for GET, streamed chunk by chunk)  │
                                 └────────────────────────────────────┘

Strictly linear: every state either moves on to the next one or sends
its fixed error response and goes to Closed. Nothing is retried.

=============================================================================
WHY 404 FOR EVERYTHING FILE-RELATED?
=============================================================================

There is no 500 and no 403 here. A path that doesn't exist, a path that
is a directory, and a file we aren't allowed to read all look the same
to the client: 404 Not Found. The log line tells them apart.

=============================================================================
"""

import os
import stat
import logging
from typing import BinaryIO, Optional, Tuple

from ..core.connection import Connection
from ..http.errors import NotFound, RequestError, TransportReadFailure
from ..http.request import RequestLine, resolve_path, validate_request
from ..http.responses import HTTP_200
from ..http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)


class StaticFileHandler:
    """
    Per-connection request handler for a fixed document root.

    The handler itself is stateless and can be shared by every worker
    thread; all per-request state lives in local variables of handle().

    Usage:
        handler = StaticFileHandler("./www")
        handler.handle(conn)   # reads, answers and closes conn
    """

    def __init__(self, document_root: str, buffer_size: int = 1024):
        """
        Initialize the handler.

        Args:
            document_root: Directory prefix for resolved paths. Used as a
                plain string, not normalized.
            buffer_size: Size of the request read and of each file chunk.
        """
        self.document_root = document_root
        self.buffer_size = buffer_size

    def handle(self, conn: Connection) -> Optional[HTTPStatus]:
        """
        Serve one request on the connection, then close it.

        The connection (and the file, if one was opened) is closed on
        every path, including unexpected exceptions.

        Args:
            conn: The client connection. Ownership passes to this call.

        Returns:
            The status sent, or None if nothing was sent because the
            client never delivered a request.
        """
        with conn:
            try:
                request, path, file = self._prepare(conn)
            except TransportReadFailure as e:
                logger.info(f"[{conn.id}] Error reading from client: {e}")
                return None
            except RequestError as e:
                logger.warning(f"[{conn.id}] {e.status.phrase} ({e.status:d}) - {e.message}")
                conn.send(e.response)
                return e.status

            with file:
                self._respond(conn, request, path, file)
            return HTTPStatus.OK

    # =========================================================================
    # DECIDING
    # =========================================================================

    def _prepare(self, conn: Connection) -> Tuple[RequestLine, str, BinaryIO]:
        """
        Run every step up to and including opening the file.

        Returns:
            The request line, the resolved path and the open file.

        Raises:
            TransportReadFailure: Nothing was read, or the read failed.
            RequestError: The first validation or lookup that failed.
        """
        try:
            raw = conn.read_once(self.buffer_size)
        except OSError as e:
            raise TransportReadFailure(str(e)) from e
        if not raw:
            raise TransportReadFailure("client closed the connection before sending a request")

        request = validate_request(raw)
        logger.info(
            f"[{conn.id}] Client request: method={request.method}, "
            f"uri={request.uri}, version={request.version}"
        )

        path = resolve_path(self.document_root, request.uri)
        logger.debug(f"[{conn.id}] Resolved file path: {path}")

        return request, path, self._open(path)

    def _open(self, path: str) -> BinaryIO:
        """
        Open a regular file for reading.

        Raises:
            NotFound: The path doesn't exist, is a directory, or can't be
                opened. ValueError covers paths the OS layer refuses
                outright, such as ones containing a NUL byte.
        """
        try:
            st = os.stat(path)
        except (OSError, ValueError):
            raise NotFound(f"File: {path}")

        if stat.S_ISDIR(st.st_mode):
            raise NotFound(f"File: {path} is a directory")

        try:
            return open(path, "rb")
        except (OSError, ValueError) as e:
            raise NotFound(f"Error opening file {path}: {e}")

    # =========================================================================
    # RESPONDING
    # =========================================================================

    def _respond(self, conn: Connection, request: RequestLine, path: str, file: BinaryIO):
        """Send the 200 header block, then the file body for GET."""
        logger.info(f"[{conn.id}] Success: OK (200) - File served: {path}")

        if not conn.send(HTTP_200):
            return

        if request.method == "GET":
            sent = self._stream(conn, file)
            logger.debug(f"[{conn.id}] Sent {sent} body bytes")

    def _stream(self, conn: Connection, file: BinaryIO) -> int:
        """
        Copy the file to the connection in buffer_size chunks.

        Each chunk is written as soon as it is read, so memory use stays
        flat regardless of file size. Stops early if the client goes away.

        Returns:
            Number of body bytes sent.
        """
        sent = 0
        while True:
            chunk = file.read(self.buffer_size)
            if not chunk:
                break
            if not conn.send(chunk):
                break
            sent += len(chunk)
        return sent
