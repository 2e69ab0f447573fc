"""Error types with formatted source context."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based byte offset."""

    line: int
    column: int
    offset: int


def position_at(source: bytes, offset: int) -> Position:
    """Compute the display position of *offset* within *source*."""
    line_start = source.rfind(b"\n", 0, offset) + 1
    return Position(source.count(b"\n", 0, offset) + 1, offset - line_start + 1, offset)


class TokenizerError(Exception):
    """Base class for every error raised by punctok."""


class InvalidArgumentError(TokenizerError, ValueError):
    """Raised when a caller passes a missing or malformed argument."""


class AllocationError(TokenizerError, MemoryError):
    """Raised when memory runs out while building the token sequence."""


class TokenizerClosedError(TokenizerError):
    """Raised when the cursor is used after the tokenizer was closed."""


class ConfigError(TokenizerError):
    """Raised on a malformed configuration file or punctuation entry."""


class LexError(TokenizerError):
    """Raised in strict mode on the first scanning error, with source context."""

    def __init__(self, message: str, position: Position, source: bytes) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<input>") -> str:
        lines = self.source.split(b"\n")
        line_idx = self.position.line - 1
        col = self.position.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip(b"\r").decode("latin-1")
        else:
            source_line = ""

        pad = " " * (col - 1)

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )
