"""Tokenizer: eager scan plus a cursor for driving a grammar over the tokens."""

from __future__ import annotations

from collections.abc import Iterator

from punctok.errors import InvalidArgumentError, TokenizerClosedError
from punctok.scanner import Scanner
from punctok.table import PunctuationTable
from punctok.tokens import Options, Token, eof_after


class Tokenizer:
    """Scan *buffer* on construction and expose get/unget/peek/line.

    The cursor starts at the first token. Reading past the last token yields
    an EOF sentinel (id -2) and leaves the cursor where it is, so repeated
    reads at the end keep returning EOF.

    Usage::

        with Tokenizer(b"a << b", table) as tz:
            tok = tz.get()
            while not tok.is_eof:
                ...
                tok = tz.get()
    """

    def __init__(
        self,
        buffer: bytes | bytearray | memoryview | str,
        table: PunctuationTable,
        options: Options | int = Options.NONE,
        *,
        strict: bool = False,
    ) -> None:
        if buffer is None:
            raise InvalidArgumentError("buffer must not be None")
        self._table = table
        self._tokens: tuple[Token, ...] | None = Scanner(
            buffer, table, options, strict=strict
        ).scan()
        self._eof = eof_after(self._tokens[-1] if self._tokens else None)
        self._pos = 0

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._live()

    @property
    def table(self) -> PunctuationTable:
        return self._table

    @property
    def position(self) -> int:
        """Index of the token the next get() returns."""
        return self._pos

    @property
    def closed(self) -> bool:
        return self._tokens is None

    def eof_token(self) -> Token:
        self._live()
        return self._eof

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def get(self) -> Token:
        """Return the token at the cursor and advance past it."""
        tokens = self._live()
        if self._pos < len(tokens):
            tok = tokens[self._pos]
            self._pos += 1
            return tok
        return self._eof

    def unget(self) -> None:
        """Step the cursor back one token (no-op at the start)."""
        self._live()
        if self._pos > 0:
            self._pos -= 1

    def peek(self) -> Token:
        """Return the token at the cursor without advancing."""
        tokens = self._live()
        if self._pos < len(tokens):
            return tokens[self._pos]
        return self._eof

    def line(self) -> int:
        """Return the line of the token at the cursor."""
        return self.peek().line

    def reset(self) -> None:
        self._live()
        self._pos = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the token sequence; later cursor calls raise."""
        self._tokens = None
        self._pos = 0

    def __enter__(self) -> Tokenizer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._live())

    def __iter__(self) -> Iterator[Token]:
        return iter(self._live())

    def _live(self) -> tuple[Token, ...]:
        if self._tokens is None:
            raise TokenizerClosedError("tokenizer is closed")
        return self._tokens
