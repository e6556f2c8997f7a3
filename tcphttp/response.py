"""Building and writing HTTP/1.1 responses."""

from __future__ import annotations

import enum
from typing import Protocol

from .headers import Headers


class StatusCode(enum.IntEnum):
    OK = 200
    BAD_REQUEST = 400
    INTERNAL_SERVER_ERROR = 500


_REASONS = {
    StatusCode.OK: "OK",
    StatusCode.BAD_REQUEST: "Bad Request",
    StatusCode.INTERNAL_SERVER_ERROR: "Internal Server Error",
}


class WriterStateError(RuntimeError):
    """Raised when response parts are written out of order."""


class Stream(Protocol):
    def write(self, data: bytes) -> object: ...


class _WriterState(enum.Enum):
    STATUS_LINE = enum.auto()
    HEADERS = enum.auto()
    BODY = enum.auto()
    DONE = enum.auto()


def get_default_headers(content_length: int) -> Headers:
    """Return the headers every response starts from."""
    headers = Headers()
    headers.set("Content-Length", str(content_length))
    headers.set("Connection", "close")
    headers.set("Content-Type", "text/plain")
    return headers


def status_line(status_code: int) -> bytes:
    """Return the encoded status line for ``status_code``."""
    reason = _REASONS.get(status_code, "")
    return f"HTTP/1.1 {int(status_code)} {reason}\r\n".encode()


class Writer:
    """Writes a response's status line, headers and body, in that order."""

    def __init__(self, stream: Stream) -> None:
        self._stream = stream
        self._state = _WriterState.STATUS_LINE

    def _expect(self, state: _WriterState, part: str) -> None:
        if self._state is not state:
            raise WriterStateError(f"not in the correct state: {part}")

    def write_status_line(self, status_code: int) -> None:
        self._expect(_WriterState.STATUS_LINE, "status line")
        try:
            self._stream.write(status_line(status_code))
        finally:
            self._state = _WriterState.HEADERS

    def write_headers(self, headers: Headers) -> None:
        self._expect(_WriterState.HEADERS, "headers")
        try:
            for key, value in headers.items():
                self._stream.write(f"{key}: {value}\r\n".encode())
            self._stream.write(b"\r\n")
        finally:
            self._state = _WriterState.BODY

    def write_body(self, body: bytes) -> None:
        self._expect(_WriterState.BODY, "body")
        try:
            self._stream.write(body)
        finally:
            self._state = _WriterState.DONE