"""Tests for the deq lexer."""
import pytest
from deq.lexer import Lexer, tokenize
from deq.tokens import Location
from deq.diagnostics import Severity


def texts(source: str) -> list[str]:
    return [t.text for t in tokenize(source)]


class TestWords:
    def test_whitespace_separated(self):
        assert texts("1! 2! add!") == ["1!", "2!", "add!"]

    def test_tabs_and_newlines(self):
        assert texts("1!\t2!\n\n  add!\r\n") == ["1!", "2!", "add!"]

    def test_empty_source(self):
        assert texts("") == []

    def test_only_whitespace(self):
        assert texts("   \n\t ") == []

    def test_short_tokens_are_kept(self):
        """Validation happens at dispatch time, not here."""
        assert texts("x ! :") == ["x", "!", ":"]

    def test_hash_inside_word(self):
        assert texts("a#b!") == ["a#b!"]


class TestComments:
    def test_line_comment(self):
        assert texts("1! # push one\n2!") == ["1!", "2!"]

    def test_comment_at_end_of_input(self):
        assert texts("1! # trailing") == ["1!"]

    def test_comment_only(self):
        assert texts("# nothing here") == []


class TestStrings:
    def test_right_marker(self):
        assert texts('"hello"!') == ['"hello"!']

    def test_left_marker(self):
        assert texts('!"hello"') == ['!"hello"']

    def test_embedded_whitespace(self):
        assert texts('"a b\tc"! print!') == ['"a b\tc"!', "print!"]

    def test_hash_inside_string(self):
        assert texts('"# not a comment"!') == ['"# not a comment"!']

    def test_string_followed_by_word(self):
        assert texts('"ab"!x!') == ['"ab"!', "x!"]

    def test_escaped_quote(self):
        assert texts('"a\\"b"! print!') == ['"a\\"b"!', "print!"]

    def test_unclosed_string(self):
        lexer = Lexer('1! "abc', "prog.deq")
        toks = lexer.tokenize()
        assert [t.text for t in toks] == ["1!", '"abc']
        assert len(lexer.diagnostics) == 1
        diag = lexer.diagnostics[0]
        assert diag.severity == Severity.ERR
        assert diag.message == "Unclosed string!"
        assert diag.render() == "prog.deq:1:4: [ERR] Unclosed string!"


class TestLocations:
    def test_columns_and_rows(self):
        toks = tokenize("a!\n  b!", "f.deq")
        assert toks[0].loc == Location("f.deq", 0, 0)
        assert toks[1].loc == Location("f.deq", 2, 1)

    def test_location_after_comment(self):
        toks = tokenize("# header\nx!")
        assert toks[0].loc.row == 1
        assert toks[0].loc.col == 0

    def test_string_location_is_its_start(self):
        toks = tokenize('1! !"a b"')
        assert toks[1].loc.col == 3

    def test_rendering_is_one_based(self):
        assert str(Location("f.deq", 4, 2)) == "f.deq:3:5"


class TestLabels:
    def test_is_label(self):
        toks = tokenize("loop: loop!")
        assert toks[0].is_label
        assert not toks[1].is_label
