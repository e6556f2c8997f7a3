"""Incremental parsing of HTTP/1.1 requests from a byte stream."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Protocol

from .headers import CRLF, Headers

INITIAL_BUFFER_SIZE = 8
VALID_METHODS = ("GET", "POST", "PUT")

_INTEGER = re.compile(r"[+-]?[0-9]+")


class RequestError(ValueError):
    """Raised when a request cannot be parsed."""


class Reader(Protocol):
    def read(self, size: int) -> bytes: ...


class ParseState(enum.Enum):
    REQUEST_LINE = enum.auto()
    HEADERS = enum.auto()
    BODY = enum.auto()
    DONE = enum.auto()


@dataclass
class RequestLine:
    http_version: str = ""
    request_target: str = ""
    method: str = ""

    @classmethod
    def from_string(cls, text: str) -> RequestLine:
        parts = text.split(" ")
        if len(parts) < 3:
            raise RequestError("not enough parts in the request line")
        method, target, version = parts[0], parts[1], parts[2]
        if method not in VALID_METHODS:
            raise RequestError("not a valid method")
        _, slash, number = version.partition("/")
        if not slash:
            raise RequestError("/ not found in http version")
        return cls(http_version=number, request_target=target, method=method)


@dataclass
class Request:
    request_line: RequestLine = field(default_factory=RequestLine)
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""
    state: ParseState = ParseState.REQUEST_LINE

    def parse(self, data: bytes) -> int:
        """Consume as much of ``data`` as possible; return the bytes used."""
        parsed = 0
        while self.state is not ParseState.DONE:
            amount = self._parse_step(data[parsed:])
            parsed += amount
            if amount == 0:
                break
        return parsed

    def _parse_step(self, data: bytes) -> int:
        if self.state is ParseState.REQUEST_LINE:
            end = data.find(CRLF)
            if end == -1:
                return 0
            line = bytes(data[:end]).decode("utf-8", errors="replace")
            self.request_line = RequestLine.from_string(line)
            self.state = ParseState.HEADERS
            return end + len(CRLF)

        if self.state is ParseState.HEADERS:
            consumed, finished = self.headers.parse(data)
            if finished:
                self.state = ParseState.BODY
                return consumed + len(CRLF)
            return consumed

        if self.state is ParseState.BODY:
            return self._parse_body(data)

        return 0

    def _parse_body(self, data: bytes) -> int:
        length_text = self.headers.get_value("Content-Length")
        if length_text is None:
            self.state = ParseState.DONE
            return len(data)

        if not _INTEGER.fullmatch(length_text):
            raise RequestError("content length value is not a number")
        expected = int(length_text)

        self.body += bytes(data)
        if len(self.body) > expected:
            raise RequestError("data is more than content length")
        if len(self.body) == expected:
            self.state = ParseState.DONE
        return len(data)


def request_from_reader(reader: Reader) -> Request:
    """Read and parse one request from ``reader``.

    ``reader.read(size)`` must return at most ``size`` bytes and ``b""``
    once the stream has ended.
    """
    request = Request()
    buffer = bytearray()
    capacity = INITIAL_BUFFER_SIZE

    while request.state is not ParseState.DONE:
        while len(buffer) >= capacity:
            capacity *= 2

        chunk = reader.read(capacity - len(buffer))
        if not chunk:
            raise RequestError("reached end while not done")

        buffer += chunk
        consumed = request.parse(bytes(buffer))
        del buffer[:consumed]

    return request