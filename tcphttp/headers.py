"""Parsing and storage of HTTP header fields."""

from __future__ import annotations

CRLF = b"\r\n"

_TOKEN_SPECIALS = frozenset("!#$%&'*+-.^_`|~")


class HeaderError(ValueError):
    """Raised when a header line is malformed."""


def _is_token_char(char: str) -> bool:
    return char.isalpha() or char.isdecimal() or char in _TOKEN_SPECIALS


class Headers(dict[str, str]):
    """Header fields keyed by their lower-case name."""

    def parse(self, data: bytes) -> tuple[int, bool]:
        """Parse at most one header line from the start of ``data``.

        Returns ``(bytes_consumed, finished)``. ``(0, False)`` means more data
        is needed; ``(0, True)`` means the blank line that ends the header
        block sits at the start of ``data``.
        """
        end = data.find(CRLF)
        if end == -1:
            return 0, False
        if end == 0:
            return 0, True

        line = bytes(data[:end]).decode("utf-8", errors="replace").strip()
        name, colon, value = line.partition(":")
        if not colon:
            raise HeaderError("missing colon")
        if " " in name:
            raise HeaderError("space after key")

        name = name.strip()
        if not all(_is_token_char(char) for char in name):
            raise HeaderError("header key is not valid")

        self.set(name, value.strip())
        return end + len(CRLF), False

    def get_value(self, key: str) -> str | None:
        """Return the value stored under ``key`` (any case), or None."""
        return self.get(key.lower())

    def set(self, key: str, value: str) -> None:
        """Store ``value``, appending it comma-separated if ``key`` exists."""
        key = key.lower()
        if key in self:
            self[key] = f"{self[key]}, {value}"
        else:
            self[key] = value

    def remove(self, key: str) -> None:
        """Delete ``key`` if present."""
        self.pop(key.lower(), None)

    def override(self, key: str, value: str) -> None:
        """Replace whatever is stored under ``key`` with ``value``."""
        self[key.lower()] = value