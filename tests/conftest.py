"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from punctok.config import DEMO_PUNCTUATION
from punctok.scanner import scan
from punctok.table import PunctuationTable
from punctok.tokens import Options, Token

BOTH_QUOTES = Options.ACCEPT_SINGLE_QUOTES | Options.ACCEPT_DOUBLE_QUOTES


@pytest.fixture
def demo_table() -> PunctuationTable:
    """The operator table: << >> ( ) [ ] + - * / with ids 10..19."""
    return PunctuationTable(DEMO_PUNCTUATION)


@pytest.fixture
def lex(demo_table):
    """Return a helper that scans source with the demo table and both quote modes."""

    def _lex(source: bytes | str, options: Options | int = BOTH_QUOTES) -> tuple[Token, ...]:
        return scan(source, demo_table, options)

    return _lex


def assert_ids(tokens: tuple[Token, ...] | list[Token], expected: list[int]) -> None:
    """Assert that the token ids match the expected list."""
    actual = [t.id for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: tuple[Token, ...] | list[Token], expected: list[bytes]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_lines(tokens: tuple[Token, ...] | list[Token], expected: list[int]) -> None:
    """Assert that the token lines match the expected list."""
    actual = [t.line for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
