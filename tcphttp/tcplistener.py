"""Command that prints every request it receives."""

from __future__ import annotations

import argparse
import logging
import socket

from .request import Request, request_from_reader

PORT = 42069

logger = logging.getLogger(__name__)


def describe_request(request: Request) -> str:
    """Return a printable report of a parsed request."""
    line = request.request_line
    parts = [
        "Request line:",
        f"Target:  {line.request_target}",
        f"Method:  {line.method}",
        f"Version:  {line.http_version}",
        "Headers:",
    ]
    parts.extend(f"{key} {value}" for key, value in request.headers.items())
    parts.append("Body: ")
    parts.append("[" + " ".join(str(byte) for byte in request.body) + "]")
    return "\n".join(parts)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="tcplistener", description="Print each HTTP request received over TCP."
    )
    parser.add_argument("--port", type=int, default=PORT, help="port to listen on")
    args = parser.parse_args(argv)

    try:
        listener = socket.create_server(("", args.port))
    except OSError as exc:
        raise SystemExit("悲しい") from exc

    try:
        with listener:
            while True:
                try:
                    conn, _ = listener.accept()
                except OSError:
                    print("またね")
                    continue

                with conn, conn.makefile("rb", buffering=0) as stream:
                    print("A new friend has joined, going to print his messages")
                    try:
                        request = request_from_reader(stream)
                    except (ValueError, OSError) as exc:
                        logger.warning("%s", exc)
                        continue
                    print(describe_request(request))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())