"""Scanner: converts a byte buffer into a flat sequence of tokens."""

from __future__ import annotations

import logging

from punctok.errors import AllocationError, InvalidArgumentError, LexError, position_at
from punctok.table import PunctuationTable
from punctok.tokens import (
    BACKSLASH,
    DOUBLE_QUOTE,
    NEWLINE,
    SINGLE_QUOTE,
    WORD,
    Options,
    Token,
    as_bytes,
    as_options,
    is_whitespace,
)

logger = logging.getLogger(__name__)


class Scanner:
    """Tokenize a buffer against a punctuation table in a single pass."""

    def __init__(
        self,
        buffer: bytes | bytearray | memoryview | str,
        table: PunctuationTable,
        options: Options | int = Options.NONE,
        *,
        strict: bool = False,
    ) -> None:
        if table is None:
            raise InvalidArgumentError("punctuation table must not be None")
        if not isinstance(table, PunctuationTable):
            raise InvalidArgumentError(
                f"expected a PunctuationTable, not {type(table).__name__}"
            )
        try:
            self._source = as_bytes(buffer)
        except MemoryError as exc:
            raise AllocationError("out of memory while copying the buffer") from exc
        self._table = table
        self._options = as_options(options)
        self._strict = strict
        self._pos = 0
        self._line = 0
        self._tokens: list[Token] = []

    def scan(self) -> tuple[Token, ...]:
        """Scan the full buffer and return the token sequence."""
        try:
            while self._pos < len(self._source):
                self._skip_whitespace()
                if self._pos >= len(self._source):
                    break
                index = self._table.probe(self._source, self._pos)
                if index is not None:
                    self._scan_punctuation(index)
                else:
                    self._scan_word()
            tokens = tuple(self._tokens)
        except MemoryError as exc:
            self._tokens = []
            raise AllocationError("out of memory while scanning") from exc

        logger.debug(
            "scanned %d bytes into %d tokens (options=%r)",
            len(self._source),
            len(tokens),
            self._options,
        )
        return tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> int | None:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return None

    def _advance(self) -> int:
        byte = self._source[self._pos]
        self._pos += 1
        if byte == NEWLINE:
            self._line += 1
        return byte

    def _emit(self, token_id: int, start: int, line: int, text: bytes | None = None) -> Token:
        if text is None:
            text = self._source[start : self._pos]
        tok = Token(token_id, text, len(text), line, start)
        self._tokens.append(tok)
        return tok

    # ------------------------------------------------------------------
    # Token kinds
    # ------------------------------------------------------------------

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._source) and is_whitespace(self._source[self._pos]):
            self._advance()

    def _scan_punctuation(self, index: int) -> None:
        item = self._table[index]
        start = self._pos
        line = self._line
        self._pos += item.length
        self._line += item.pattern.count(b"\n")
        self._emit(item.id, start, line, item.pattern)

    def _scan_word(self) -> None:
        start = self._pos
        start_line = self._line
        byte = self._peek()

        if self._is_quote(byte):
            self._scan_quoted(byte)
        else:
            while self._pos < len(self._source):
                if is_whitespace(self._source[self._pos]):
                    break
                if self._table.probe(self._source, self._pos) is not None:
                    break
                self._advance()

        if self._pos > start:
            self._emit(WORD, start, start_line)

    def _is_quote(self, byte: int | None) -> bool:
        if byte == DOUBLE_QUOTE:
            return bool(self._options & Options.ACCEPT_DOUBLE_QUOTES)
        if byte == SINGLE_QUOTE:
            return bool(self._options & Options.ACCEPT_SINGLE_QUOTES)
        return False

    def _scan_quoted(self, quote: int) -> None:
        """Consume a quoted run, including both quotes.

        A quote byte closes the run unless the byte before it is a backslash.
        An unclosed run extends to the end of the buffer.
        """
        start = self._pos
        self._advance()  # opening quote
        while self._pos < len(self._source):
            byte = self._advance()
            if byte == quote and self._source[self._pos - 2] != BACKSLASH:
                return

        if self._strict:
            raise LexError(
                "unterminated quoted string", position_at(self._source, start), self._source
            )


def scan(
    buffer: bytes | bytearray | memoryview | str,
    table: PunctuationTable,
    options: Options | int = Options.NONE,
    *,
    strict: bool = False,
) -> tuple[Token, ...]:
    """Convenience function: scan buffer and return the token sequence."""
    return Scanner(buffer, table, options, strict=strict).scan()
