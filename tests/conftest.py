"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from plc.ast import Expression, Source, Statement
from plc.lexer import Lexer, tokenize
from plc.parser import Parser, parse_string
from plc.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns the token list."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def lex_one():
    """Return a helper that lexes a single token with Lexer.lex_token."""

    def _lex_one(source: str) -> Token:
        return Lexer(source).lex_token()

    return _lex_one


@pytest.fixture
def parse_expr():
    """Return a helper that parses source as a single expression."""

    def _parse(source: str) -> Expression:
        return Parser(tokenize(source), source).parse_expression()

    return _parse


@pytest.fixture
def parse_stmt():
    """Return a helper that parses source as a single statement."""

    def _parse(source: str) -> Statement:
        return Parser(tokenize(source), source).parse_statement()

    return _parse


@pytest.fixture
def parse_program():
    """Return a helper that parses source as a whole program."""

    def _parse(source: str) -> Source:
        return parse_string(source)

    return _parse


def tok(tt: TokenType, literal: str, offset: int = 0) -> Token:
    """Shorthand Token constructor for expected values."""
    return Token(tt, literal, offset)


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_literals(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token literals match the expected list."""
    actual = [t.literal for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_single(tokens: list[Token], tt: TokenType, literal: str) -> None:
    """Assert that the input lexed to exactly one token spanning all of it."""
    assert tokens == [Token(tt, literal, 0)], f"Expected one {tt.name} {literal!r}, got {tokens}"
