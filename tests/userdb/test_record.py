# SPDX-License-Identifier: MIT
"""Tests for record parsing and serialization."""

import pytest

from userdb.record import (
    Record,
    format_record,
    is_ignorable,
    parse_confidence,
    parse_record,
    split_whitespace,
)


class TestParseRecord:
    """Test parsing of well-formed lines."""

    def test_parses_all_fields(self):
        """A valid line should yield key, confidence and raw tokens."""
        record = parse_record("ce shi\t测试\tc=10 d=0.1111 t=12345")

        assert record is not None
        assert record.key == "ce shi\t测试"
        assert record.confidence == 10
        assert record.confidence_field == "c=10"
        assert record.data_field == "d=0.1111"
        assert record.tag_field == "t=12345"

    def test_extra_whitespace_in_third_field(self):
        """Runs of whitespace and leading/trailing whitespace separate tokens."""
        record = parse_record("a\tb\t  c=-4   d=x t=y ")

        assert record is not None
        assert record.confidence == -4
        assert record.data_field == "d=x"
        assert record.tag_field == "t=y"

    def test_negative_and_signed_confidence(self):
        """Confidence accepts an explicit sign."""
        assert parse_record("a\tb\tc=-7 d=1 t=2").confidence == -7
        assert parse_record("a\tb\tc=+7 d=1 t=2").confidence == 7

    def test_control_separators_stay_in_token(self):
        """Information separators \\x1c-\\x1f are not whitespace."""
        record = parse_record("a\tb\tc=1 d=x\x1fy t=1")

        assert record is not None
        assert record.data_field == "d=x\x1fy"
        assert record.tag_field == "t=1"

    def test_unicode_whitespace_separates(self):
        """Ideographic and no-break spaces separate tokens."""
        record = parse_record("a\tb\tc=1\u3000d=2\xa0t=3")

        assert record is not None
        assert record.data_field == "d=2"
        assert record.tag_field == "t=3"


class TestSplitWhitespace:
    """Test token splitting."""

    @pytest.mark.parametrize("text, expected", [
        ("  a  b\tc ", ["a", "b", "c"]),
        ("", []),
        ("a\x1cb\x1dc\x1ed\x1fe", ["a\x1cb\x1dc\x1ed\x1fe"]),
        ("a\u2028b\x85c\u205fd", ["a", "b", "c", "d"]),
    ])
    def test_split(self, text, expected):
        assert split_whitespace(text) == expected


class TestRejectedLines:
    """Test that malformed and ignorable lines are rejected."""

    @pytest.mark.parametrize("line", [
        "",
        "ce shi 测试\tc=10 d=0.1111 t=12345",
        "ce shi\t测试\tc10 d=0.1111 t=12345",
    ])
    def test_rejected(self, line):
        """Empty, wrong tab count and malformed first token yield None."""
        assert parse_record(line) is None

    def test_comment_line_is_silent(self, log_messages):
        """Comment lines are skipped without a diagnostic."""
        assert parse_record("#@/tick 12345") is None
        assert parse_record("") is None
        assert log_messages == []

    def test_wrong_token_count_reports(self, log_messages):
        """A third field without exactly three tokens is reported."""
        line = "a\tb\tc=1 d=2"
        assert parse_record(line) is None
        assert log_messages == [f"Invalid line: {line}"]

    def test_too_many_tabs(self, log_messages):
        """Four tab-separated fields are rejected."""
        assert parse_record("a\tb\tc\tc=1 d=2 t=3") is None
        assert len(log_messages) == 1

    def test_double_equals_rejected(self):
        """The confidence token must split into exactly two parts."""
        assert parse_record("a\tb\tc=1=2 d=2 t=3") is None


class TestConfidenceFallback:
    """Test the zero fallback for unparsable confidence values."""

    def test_non_numeric_confidence_falls_back_to_zero(self, log_messages):
        """An unparsable confidence keeps the record with confidence 0."""
        line = "a\tb\tc=abc d=2 t=3"
        record = parse_record(line)

        assert record is not None
        assert record.confidence == 0
        assert record.confidence_field == "c=abc"
        assert log_messages == [f"Invalid line: {line}"]

    @pytest.mark.parametrize("value", ["", "1.5", "1_000", "2147483648", "-2147483649", " 1"])
    def test_parse_confidence_rejects(self, value):
        """Only plain 32-bit decimal integers are accepted."""
        assert parse_confidence(value) is None

    def test_parse_confidence_bounds(self):
        """The 32-bit bounds themselves are valid."""
        assert parse_confidence("2147483647") == 2147483647
        assert parse_confidence("-2147483648") == -2147483648


class TestFormatRecord:
    """Test record serialization."""

    def test_exact_format(self):
        """Serialization is key, tab, then space-joined tokens and a newline."""
        record = Record(key="a", confidence=0, confidence_field="b", data_field="c", tag_field="d")
        assert format_record(record) == "a\tb c d\n"
        assert record.to_line() == "a\tb c d\n"

    def test_emitted_line_parses_back(self):
        """A serialized record parses back to the same fields."""
        original = parse_record("ce shi\t测试\tc=10 d=0.1111 t=12345")
        reparsed = parse_record(format_record(original).rstrip("\n"))
        assert reparsed == original


class TestIsIgnorable:
    """Test the empty/comment line rule."""

    def test_values(self):
        assert is_ignorable("")
        assert is_ignorable("# comment")
        assert not is_ignorable(" # not a comment")
        assert not is_ignorable("a\tb\tc=1 d=2 t=3")
