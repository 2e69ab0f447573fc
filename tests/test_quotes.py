"""Test quoted-string scanning: modes, escapes, lines, and open-quote recovery."""

import pytest

from punctok.errors import LexError
from punctok.scanner import scan
from punctok.tokens import WORD, Options

from tests.conftest import assert_ids, assert_lines, assert_texts


class TestDoubleQuotes:
    def test_quoted_string_is_one_token(self, lex):
        tokens = lex('"hi + there" + x')
        assert_ids(tokens, [WORD, 16, WORD])
        assert_texts(tokens, [b'"hi + there"', b"+", b"x"])

    def test_quotes_included_in_text_and_length(self, lex):
        tokens = lex('"ab"')
        assert tokens[0].length == 4
        assert tokens[0].offset == 0

    def test_empty_quotes(self, lex):
        assert_texts(lex('"" x'), [b'""', b"x"])

    def test_adjacent_after_close(self, lex):
        tokens = lex('"a"b')
        assert_texts(tokens, [b'"a"', b"b"])

    def test_disabled_mode_splits_normally(self, lex):
        tokens = lex('"hi + there"', Options.ACCEPT_SINGLE_QUOTES)
        assert_texts(tokens, [b'"hi', b"+", b'there"'])

    def test_quote_mid_word_not_special(self, lex):
        tokens = lex('ab"c d"')
        assert_texts(tokens, [b'ab"c', b'd"'])

    def test_single_quote_inside_double(self, lex):
        assert_texts(lex("\"it's\""), [b"\"it's\""])


class TestSingleQuotes:
    def test_single_quoted(self, lex):
        tokens = lex("'a (b)' c")
        assert_texts(tokens, [b"'a (b)'", b"c"])

    def test_disabled_mode(self, lex):
        tokens = lex("'a b'", Options.ACCEPT_DOUBLE_QUOTES)
        assert_texts(tokens, [b"'a", b"b'"])

    def test_double_quote_inside_single(self, lex):
        assert_texts(lex("'say \"hi\"'"), [b"'say \"hi\"'"])


class TestEscapes:
    def test_escaped_quote_does_not_close(self, lex):
        tokens = lex(r'"a \" b" c')
        assert_texts(tokens, [rb'"a \" b"', b"c"])

    def test_escaped_single_quote(self, lex):
        tokens = lex(r"'it\'s' x")
        assert_texts(tokens, [rb"'it\'s'", b"x"])

    def test_double_backslash_still_escapes(self, lex):
        # Only the preceding byte is checked, so \\" does not close the string.
        tokens = lex(r'"a\\" b"')
        assert_texts(tokens, [rb'"a\\" b"'])

    def test_backslash_outside_quotes_is_plain(self, lex):
        assert_texts(lex(r"a\b"), [rb"a\b"])


class TestQuotedLines:
    def test_newline_inside_quotes_counts(self, lex):
        tokens = lex('"a\nb" c')
        assert_texts(tokens, [b'"a\nb"', b"c"])
        assert_lines(tokens, [0, 1])

    def test_token_line_is_start_line(self, lex):
        tokens = lex('x\n"a\n\nb"')
        assert_lines(tokens, [0, 1])


class TestUnterminated:
    def test_runs_to_end_of_buffer(self, lex):
        tokens = lex('x "abc + d')
        assert_texts(tokens, [b"x", b'"abc + d'])

    def test_lone_quote(self, lex):
        tokens = lex('"')
        assert_texts(tokens, [b'"'])
        assert tokens[0].length == 1

    def test_escaped_final_quote(self, lex):
        tokens = lex(r'"abc\"')
        assert_texts(tokens, [rb'"abc\"'])

    def test_lines_counted_to_end(self, lex):
        tokens = lex('"a\nb\nc')
        assert_lines(tokens, [0])

    def test_strict_raises(self, demo_table):
        with pytest.raises(LexError, match="unterminated quoted string") as exc_info:
            scan(b'ok\n  "abc', demo_table, Options.ACCEPT_DOUBLE_QUOTES, strict=True)
        err = exc_info.value
        assert err.position.line == 2
        assert err.position.column == 3
        assert err.position.offset == 5

    def test_strict_accepts_closed_strings(self, demo_table):
        tokens = scan(b'"a" \'b\'', demo_table, 0x03, strict=True)
        assert_texts(tokens, [b'"a"', b"'b'"])
