"""Test the punctuation table and the match probe."""

import pytest

from punctok.errors import InvalidArgumentError
from punctok.table import Punctuation, PunctuationTable, probe


class TestAppend:
    def test_new_table_is_empty(self):
        table = PunctuationTable()
        assert len(table) == 0
        assert not table

    def test_append_caches_length(self):
        table = PunctuationTable()
        item = table.append(b"<<", 10)
        assert item == Punctuation(b"<<", 10)
        assert item.length == 2
        assert table[0] is item

    def test_str_pattern_encoded(self):
        table = PunctuationTable()
        item = table.append("->", 3)
        assert item.pattern == b"->"

    def test_order_preserved(self):
        table = PunctuationTable([("<<", 1), ("<", 2), ("<<", 3)])
        assert [p.id for p in table] == [1, 2, 3]

    def test_no_deduplication(self):
        table = PunctuationTable()
        table.append(b"+", 1)
        table.append(b"+", 1)
        assert len(table) == 2

    def test_grows_past_sixteen(self):
        table = PunctuationTable()
        for i in range(100):
            table.append(f"p{i}", i)
        assert len(table) == 100
        assert table[99].pattern == b"p99"

    def test_from_pairs(self):
        table = PunctuationTable.from_pairs([("(", 0), (")", 1)])
        assert table == PunctuationTable([(b"(", 0), (b")", 1)])

    def test_empty_pattern_rejected(self):
        with pytest.raises(InvalidArgumentError, match="empty"):
            PunctuationTable().append(b"", 1)

    def test_none_pattern_rejected(self):
        with pytest.raises(InvalidArgumentError):
            PunctuationTable().append(None, 1)

    def test_non_int_id_rejected(self):
        with pytest.raises(InvalidArgumentError):
            PunctuationTable().append(b"+", "1")

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            PunctuationTable().append(b"", 1)

    def test_punctuation_is_immutable(self):
        item = Punctuation(b"+", 1)
        with pytest.raises(AttributeError):
            item.id = 2


class TestProbe:
    def test_match_returns_index(self, demo_table):
        assert demo_table.probe(b"a<<b", 1) == 0
        assert demo_table.probe(b"a+b", 1) == 6

    def test_no_match(self, demo_table):
        assert demo_table.probe(b"abc", 0) is None

    def test_first_match_wins(self):
        table = PunctuationTable([("<<", 1), ("<", 2)])
        assert table.probe(b"<<", 0) == 0
        assert table.probe(b"<a", 0) == 1

    def test_prefix_listed_first_shadows_longer(self):
        table = PunctuationTable([("<", 2), ("<<", 1)])
        assert table.probe(b"<<", 0) == 0

    def test_partial_pattern_at_end_of_buffer(self):
        table = PunctuationTable([("<<", 1)])
        assert table.probe(b"a<", 1) is None

    def test_offset_at_end(self, demo_table):
        assert demo_table.probe(b"+", 1) is None

    def test_offset_past_end(self, demo_table):
        assert demo_table.probe(b"+", 5) is None

    def test_negative_offset(self, demo_table):
        assert demo_table.probe(b"+", -1) is None

    def test_empty_table(self):
        assert PunctuationTable().probe(b"+", 0) is None

    def test_case_sensitive(self):
        table = PunctuationTable([("and", 1)])
        assert table.probe(b"AND", 0) is None

    def test_function_form(self, demo_table):
        assert probe(demo_table, b"x>>", 1) == 1
