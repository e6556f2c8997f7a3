"""A small threaded TCP server that speaks HTTP/1.1."""

from __future__ import annotations

import logging
import socket
import threading
from contextlib import suppress
from typing import Callable

from .request import Request, request_from_reader
from .response import StatusCode, Writer, get_default_headers

logger = logging.getLogger(__name__)

Handler = Callable[[Writer, Request], None]

_ACCEPT_POLL_SECONDS = 0.2
_BAD_REQUEST_BODY = b"Bad request fam"


class _Connection:
    """Adapts a connected socket to the reader and stream interfaces."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock

    def read(self, size: int) -> bytes:
        return self._sock.recv(size)

    def write(self, data: bytes) -> None:
        self._sock.sendall(data)


class Server:
    """Accepts connections in the background and passes each request to a handler."""

    def __init__(self, listener: socket.socket, handler: Handler) -> None:
        self._listener = listener
        self._handler = handler
        self._closed = threading.Event()
        self.port: int = listener.getsockname()[1]
        listener.settimeout(_ACCEPT_POLL_SECONDS)
        self._thread = threading.Thread(target=self._listen, daemon=True)
        self._thread.start()

    def __enter__(self) -> Server:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Stop accepting connections and release the listening socket."""
        self._closed.set()
        self._listener.close()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout=5)

    def _listen(self) -> None:
        while True:
            try:
                conn, _ = self._listener.accept()
            except OSError:
                if self._closed.is_set():
                    return
                continue
            threading.Thread(target=self._handle, args=(conn,), daemon=True).start()

    def _handle(self, conn: socket.socket) -> None:
        with conn:
            conn.settimeout(None)
            stream = _Connection(conn)
            writer = Writer(stream)
            try:
                request = request_from_reader(stream)
            except (ValueError, OSError) as exc:
                logger.info("Error reading the request: %s", exc)
                with suppress(OSError):
                    writer.write_status_line(StatusCode.BAD_REQUEST)
                    writer.write_headers(get_default_headers(len(_BAD_REQUEST_BODY)))
                    writer.write_body(_BAD_REQUEST_BODY)
                return

            try:
                self._handler(writer, request)
            except OSError as exc:
                logger.warning("Error writing the response: %s", exc)


def serve(port: int, handler: Handler) -> Server:
    """Listen on ``port`` (0 picks a free one) and serve requests with ``handler``."""
    listener = socket.create_server(("", port))
    return Server(listener, handler)