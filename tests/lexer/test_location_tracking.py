"""Tests for source location tracking in the lexer.

Token locations feed error messages, so line numbers, columns and
offsets must point at the word that produced each token.
"""

import pytest

from lemo.errors import InvalidTokenError
from lemo.lexer import lex
from lemo.location import SourceLocation
from lemo.tokens import Number, Operation, OpKind


class TestSingleLineLocations:
    def test_first_word(self) -> None:
        push = lex("push 1")[0]
        assert push.location.lineno == 1
        assert push.location.col_offset == 1
        assert push.location.offset == 0
        assert push.location.end_offset == 4

    def test_second_word(self) -> None:
        number = lex("push   12")[1]
        assert number.lineno == 1
        assert number.col == 8
        assert number.location.offset == 7
        assert number.location.end_offset == 9


class TestMultiLineLocations:
    def test_line_advances_on_newline(self) -> None:
        tokens = lex("push 1\n  dump")
        dump = tokens[2]
        assert dump.lineno == 2
        assert dump.col == 3

    def test_comment_lines_counted(self) -> None:
        tokens = lex("// first\n// second\npush 4")
        assert tokens[0].lineno == 3
        assert tokens[0].col == 1

    def test_trailing_comment_does_not_shift_next_line(self) -> None:
        tokens = lex("push 1 // note\nadd")
        assert tokens[2].lineno == 2
        assert tokens[2].col == 1

    def test_newline_counted_when_not_a_delimiter(self) -> None:
        tokens = lex("push;1;//;x\ndump", ";\n")
        assert tokens[-1].lineno == 2


class TestSourceFile:
    def test_source_file_propagates(self) -> None:
        token = lex("dump", source_file="prog.lemo")[0]
        assert token.source_file == "prog.lemo"
        assert str(token.location) == "prog.lemo:1:1"

    def test_location_not_part_of_equality(self) -> None:
        assert lex("\n\n  push", source_file="a.lemo") == lex("push")
        assert lex("7")[0] == Number(7)

    def test_location_is_cached(self) -> None:
        token = lex("dump")[0]
        assert token.location is token.location


class TestErrorLocations:
    def test_invalid_token_reports_position(self) -> None:
        with pytest.raises(InvalidTokenError) as exc:
            lex("push 1\npush 2x", source_file="bad.lemo")
        err = exc.value
        assert err.lineno == 2
        assert err.col_offset == 6
        assert str(err) == "bad.lemo:2:6 invalid token '2x'"


class TestSourceLocation:
    def test_str_without_file(self) -> None:
        assert str(SourceLocation(lineno=3, col_offset=9)) == "3:9"

    def test_unknown(self) -> None:
        loc = SourceLocation.unknown()
        assert not loc.is_known

    def test_hand_built_token_has_unknown_location(self) -> None:
        assert not Operation(OpKind.DUMP).location.is_known
