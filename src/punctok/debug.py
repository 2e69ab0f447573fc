"""Human-readable and JSON dumps of punctuation tables and token sequences."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from typing import Any, TextIO

from punctok.table import PunctuationTable
from punctok.tokens import Token


def dump_table(table: PunctuationTable, *, file: TextIO = sys.stderr) -> None:
    """Print one line per configured pattern, in priority order."""
    for item in table:
        file.write(f'Punctuation: "{item.pattern.decode("latin-1")}" ({item.id})\n')


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token: id and bracketed text."""
    for tok in tokens:
        file.write(f"Token (id:{tok.id}): [{tok.value}]\n")


def token_to_dict(tok: Token) -> dict[str, Any]:
    return {
        "id": tok.id,
        "text": None if tok.text is None else tok.value,
        "line": tok.line,
        "offset": tok.offset,
        "length": tok.length,
    }


def dump_tokens_json(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Write the tokens as a JSON array of objects."""
    json.dump([token_to_dict(t) for t in tokens], file, indent=2)
    file.write("\n")
