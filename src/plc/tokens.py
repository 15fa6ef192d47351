"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    IDENTIFIER = auto()  # [A-Za-z_][A-Za-z0-9_-]*
    INTEGER = auto()  # 0 or [+-]?[1-9][0-9]*
    DECIMAL = auto()  # [+-]?(0|[1-9][0-9]*)\.[0-9]+
    CHARACTER = auto()  # 'c' or '\n', quotes retained
    STRING = auto()  # "...", quotes and escapes retained
    OPERATOR = auto()  # && || != == <= >= or any other single character


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token: its type, the exact source text, and start offset."""

    type: TokenType
    literal: str
    offset: int

    @property
    def end(self) -> int:
        return self.offset + len(self.literal)


# Inter-token whitespace skipped by the lexer
WHITESPACE = frozenset(" \t\n\r")

# Escape letter -> resolved character
ESCAPES: dict[str, str] = {
    "b": "\b",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "'": "'",
    '"': '"',
    "\\": "\\",
}

DIGITS = frozenset("0123456789")
WORD_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_") | DIGITS


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch in DIGITS


def is_word_char(ch: str) -> bool:
    """Return True if ch is an ASCII letter, digit, or underscore."""
    return ch in WORD_CHARS


def is_identifier_start(ch: str) -> bool:
    """Return True if ch can begin an identifier (a word char that is not a digit)."""
    return is_word_char(ch) and not is_digit(ch)


def is_identifier_char(ch: str) -> bool:
    """Return True if ch can continue an identifier: a word char or '-'."""
    return is_word_char(ch) or ch == "-"


def position_at(source: str, offset: int) -> Position:
    """Map an absolute offset in source to a line/column Position.

    Offsets past the end of the source are clamped to the end of input.
    """
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start + 1, offset)
