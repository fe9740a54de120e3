"""Test lexer errors, offsets, and context snippets."""

import logging

import pytest

from picocalc.errors import LexError
from picocalc.lexer import tokenize


class TestLexErrors:
    def test_second_decimal_point(self):
        with pytest.raises(LexError, match="Syntax error") as exc_info:
            tokenize("1.2.3")
        assert exc_info.value.offset == 3

    def test_double_dot(self):
        with pytest.raises(LexError):
            tokenize("1..2")

    def test_leading_dot(self):
        with pytest.raises(LexError) as exc_info:
            tokenize(".5")
        assert exc_info.value.offset == 0

    def test_dot_after_operator(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1 + .5")
        assert exc_info.value.offset == 4

    def test_unrecognized_character(self):
        with pytest.raises(LexError, match="Syntax error") as exc_info:
            tokenize("1 & 2")
        assert exc_info.value.offset == 2

    def test_letters_rejected(self):
        with pytest.raises(LexError):
            tokenize("x + 1")

    def test_scientific_notation_rejected(self):
        with pytest.raises(LexError):
            tokenize("1e5")

    def test_error_after_newline_not_reached(self):
        assert len(tokenize("1\n&")) == 2


class TestErrorFormatting:
    def test_format_contains_error_prefix(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1 & 2")
        assert exc_info.value.format().startswith("error: Syntax error.")

    def test_format_contains_source_line(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("12 + 3 $ 4\nignored")
        formatted = exc_info.value.format()
        assert "12 + 3 $ 4" in formatted
        assert "ignored" not in formatted

    def test_format_contains_position(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1 & 2")
        assert "<expr>:1:3" in exc_info.value.format()

    def test_format_caret_under_offending_char(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1 & 2")
        last_line = exc_info.value.format().splitlines()[-1]
        assert last_line == "  |   ^"

    def test_format_with_custom_filename(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("?")
        assert "sums.txt:1:1" in exc_info.value.format("sums.txt")

    def test_str_is_formatted(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("?")
        assert str(exc_info.value) == exc_info.value.format()


class TestNumberTrace:
    def test_literal_completion_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="picocalc.lexer"):
            tokenize("12.5")
        messages = [r.getMessage() for r in caplog.records if r.name == "picocalc.lexer"]
        assert messages == ["number literal ends at offset 4, state DECIMAL"]

    def test_no_trace_without_numbers(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="picocalc.lexer"):
            tokenize("( + )")
        assert not [r for r in caplog.records if r.name == "picocalc.lexer"]
