"""Token data structure, scan options, and byte classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

from punctok.errors import InvalidArgumentError

# Token ids
WORD = -1  # non-punctuation run (or quoted string)
EOF = -2  # sentinel returned by the cursor past the end

# Length reported by the EOF sentinel
EOF_LENGTH = 3


class Options(IntFlag):
    NONE = 0
    ACCEPT_SINGLE_QUOTES = 0x01  # '...' scanned as one word token
    ACCEPT_DOUBLE_QUOTES = 0x02  # "..." scanned as one word token


_ALL_OPTIONS = Options.ACCEPT_SINGLE_QUOTES | Options.ACCEPT_DOUBLE_QUOTES


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanned token.

    ``line`` and ``offset`` are zero-based and refer to the token's first byte.
    ``text`` is None only for the EOF sentinel.
    """

    id: int
    text: bytes | None
    length: int
    line: int
    offset: int

    @property
    def is_word(self) -> bool:
        return self.id == WORD

    @property
    def is_punctuation(self) -> bool:
        return self.id >= 0

    @property
    def is_eof(self) -> bool:
        return self.id == EOF

    @property
    def value(self) -> str:
        """Token text decoded for display (latin-1, so every byte maps 1:1)."""
        if self.text is None:
            return ""
        return self.text.decode("latin-1")


def eof_after(last: Token | None) -> Token:
    """Build the EOF sentinel that follows *last* (or an empty sequence)."""
    if last is None:
        return Token(EOF, None, EOF_LENGTH, 0, 0)
    return Token(EOF, None, EOF_LENGTH, last.line + 1, last.offset + last.length)


# ASCII whitespace recognised between tokens
WHITESPACE = frozenset(b" \t\r\n")

SINGLE_QUOTE = ord("'")
DOUBLE_QUOTE = ord('"')
BACKSLASH = ord("\\")
NEWLINE = ord("\n")


def is_whitespace(byte: int) -> bool:
    """Return True if byte is a space, tab, carriage return, or line feed."""
    return byte in WHITESPACE


def as_bytes(data: bytes | bytearray | memoryview | str, what: str = "buffer") -> bytes:
    """Return an immutable bytes copy of *data*; str is encoded as UTF-8."""
    if data is None:
        raise InvalidArgumentError(f"{what} must not be None")
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise InvalidArgumentError(
        f"{what} must be bytes-like or str, not {type(data).__name__}"
    )


def as_options(options: Options | int) -> Options:
    """Validate an option bitmask and return it as Options."""
    if isinstance(options, bool) or not isinstance(options, int):
        raise InvalidArgumentError(f"options must be an int bitmask, not {type(options).__name__}")
    unknown = int(options) & ~int(_ALL_OPTIONS)
    if unknown:
        raise InvalidArgumentError(f"unknown option bits: {unknown:#x}")
    return Options(options)
