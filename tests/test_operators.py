"""Test operator lexing: two-character operators and single characters."""

import pytest

from plc.errors import LexError
from plc.tokens import TokenType

from .conftest import assert_literals, assert_single, assert_types, tok


class TestSingleCharacter:
    @pytest.mark.parametrize("source", ["(", ")", ",", ".", ";", "=", "<", ">", "*", "/", "\\", "#", "$"])
    def test_single_operator(self, lex, source):
        assert_single(lex(source), TokenType.OPERATOR, source)

    def test_plus_alone(self, lex):
        assert_single(lex("+"), TokenType.OPERATOR, "+")

    def test_multiple_symbols_are_separate(self, lex):
        assert lex("##") == [tok(TokenType.OPERATOR, "#", 0), tok(TokenType.OPERATOR, "#", 1)]


class TestTwoCharacter:
    @pytest.mark.parametrize("source", ["&&", "||", "!=", "==", "<=", ">="])
    def test_double_operator(self, lex, source):
        assert_single(lex(source), TokenType.OPERATOR, source)

    def test_greedy_left_to_right(self, lex):
        assert lex("!====") == [
            tok(TokenType.OPERATOR, "!=", 0),
            tok(TokenType.OPERATOR, "==", 2),
            tok(TokenType.OPERATOR, "=", 4),
        ]

    def test_no_other_pairs(self, lex):
        tokens = lex("=>")
        assert_literals(tokens, ["=", ">"])

    def test_single_ampersand(self, lex):
        tokens = lex("&|")
        assert_literals(tokens, ["&", "|"])

    def test_separated_by_space(self, lex):
        tokens = lex("= =")
        assert_types(tokens, [TokenType.OPERATOR, TokenType.OPERATOR])
        assert [t.offset for t in tokens] == [0, 2]


class TestWhitespaceIsNotOperator:
    @pytest.mark.parametrize("source", [" ", "\t", "\n", "\r"])
    def test_lex_token_rejects_whitespace(self, lex_one, source):
        with pytest.raises(LexError):
            lex_one(source)

    def test_form_feed_rejected(self, lex):
        with pytest.raises(LexError) as exc_info:
            lex("a\fb")
        assert exc_info.value.offset == 1

    def test_lex_token_at_end_of_input(self, lex_one):
        with pytest.raises(LexError):
            lex_one("")
