"""Configurable punctuation-driven text tokenizer."""

from __future__ import annotations

from collections.abc import Iterable

from punctok.errors import (
    AllocationError,
    ConfigError,
    InvalidArgumentError,
    LexError,
    TokenizerClosedError,
    TokenizerError,
)
from punctok.scanner import Scanner, scan
from punctok.table import Punctuation, PunctuationTable, probe
from punctok.tokenizer import Tokenizer
from punctok.tokens import EOF, WORD, Options, Token

__version__ = "0.1.0"

__all__ = [
    "EOF",
    "WORD",
    "AllocationError",
    "ConfigError",
    "InvalidArgumentError",
    "LexError",
    "Options",
    "Punctuation",
    "PunctuationTable",
    "Scanner",
    "Token",
    "Tokenizer",
    "TokenizerClosedError",
    "TokenizerError",
    "probe",
    "scan",
    "tokenize",
]


def tokenize(
    buffer: bytes | bytearray | memoryview | str,
    punctuation: PunctuationTable | Iterable[tuple[bytes | str, int]] = (),
    options: Options | int = Options.NONE,
    *,
    strict: bool = False,
) -> tuple[Token, ...]:
    """Scan *buffer* and return its tokens.

    *punctuation* is either a PunctuationTable or (pattern, id) pairs in
    priority order.
    """
    if punctuation is None:
        raise InvalidArgumentError("punctuation table must not be None")
    if not isinstance(punctuation, PunctuationTable):
        punctuation = PunctuationTable(punctuation)
    return scan(buffer, punctuation, options, strict=strict)
