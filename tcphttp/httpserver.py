"""Command that runs the demo HTTP server."""

from __future__ import annotations

import argparse
import logging
import signal
import threading

from .request import Request
from .response import StatusCode, Writer, get_default_headers
from .server import serve

PORT = 42069

logger = logging.getLogger(__name__)

_OK_BODY = (
    "<html>\n"
    "<head>\n"
    "<title>200 OK</title>\n"
    "</head>\n"
    "<body>\n"
    "<h1>Success!</h1>\n"
    "<p>すごい！</p>\n"
    "</body>\n"
    "</html>\n"
).encode()

_BAD_REQUEST_BODY = (
    "\n"
    "\t<html>\n"
    "\t  <head>\n"
    "\t    <title>400 Bad Request</title>\n"
    "\t  </head>\n"
    "\t  <body>\n"
    "\t    <h1>Bad Request</h1>\n"
    "\t    <p>にがい</p>\n"
    "\t  </body>\n"
    "\t</html>\n"
    "\t"
).encode()

_SERVER_ERROR_BODY = (
    "\n"
    "\t<html>\n"
    "\t  <head>\n"
    "\t    <title>500 Internal Server Error</title>\n"
    "\t  </head>\n"
    "\t  <body>\n"
    "\t    <h1>Internal Server Error</h1>\n"
    "\t    <p>すいません</p>\n"
    "\t  </body>\n"
    "\t</html>\n"
    "\t"
).encode()

_ROUTES = {
    "/give400": (StatusCode.BAD_REQUEST, _BAD_REQUEST_BODY),
    "/give500": (StatusCode.INTERNAL_SERVER_ERROR, _SERVER_ERROR_BODY),
}


def _write_html(writer: Writer, status: StatusCode, body: bytes) -> None:
    writer.write_status_line(status)
    headers = get_default_headers(len(body))
    headers.override("Content-Type", "text/html")
    writer.write_headers(headers)
    writer.write_body(body)


def handler(writer: Writer, request: Request) -> None:
    """Answer with a canned HTML page chosen by the request target."""
    status, body = _ROUTES.get(
        request.request_line.request_target, (StatusCode.OK, _OK_BODY)
    )
    _write_html(writer, status, body)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="httpserver", description="Serve canned HTML pages over HTTP/1.1."
    )
    parser.add_argument("--port", type=int, default=PORT, help="port to listen on")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    try:
        server = serve(args.port, handler)
    except OSError as exc:
        logger.critical("Error starting server: %s", exc)
        return 1

    stop = threading.Event()
    previous = {
        sig: signal.signal(sig, lambda *_: stop.set())
        for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        logger.info("Server started on port %d", args.port)
        while not stop.wait(0.5):
            pass
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old)
        server.close()
    logger.info("Server gracefully stopped")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())