"""PLC lexer: converts source text into a flat token stream."""

from __future__ import annotations

from collections.abc import Callable, Container

from plc.errors import LexError
from plc.tokens import (
    ESCAPES,
    WHITESPACE,
    Token,
    TokenType,
    is_digit,
    is_identifier_char,
    is_identifier_start,
)

# A character pattern: a set of characters, or a predicate over one character
CharPattern = Container[str] | Callable[[str], bool]

# Two-character operators, matched before falling back to a single character
_DOUBLE_OPERATORS: tuple[tuple[str, str], ...] = (
    ("&", "&"),
    ("|", "|"),
    ("!", "="),
    ("=", "="),
    ("<", "="),
    (">", "="),
)

_SIGNS = "+-"


class CharCursor:
    """Scanning position over the source text plus the length of the pending token.

    The pending run is always ``source[index - length:index]``; ``emit`` turns it
    into a Token and ``skip`` discards it.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.index = 0
        self.length = 0

    def has(self, offset: int = 0) -> bool:
        return self.index + offset < len(self.source)

    def get(self, offset: int = 0) -> str:
        return self.source[self.index + offset]

    def advance(self) -> None:
        self.index += 1
        self.length += 1

    def skip(self) -> None:
        self.length = 0

    def emit(self, tt: TokenType) -> Token:
        start = self.index - self.length
        self.skip()
        return Token(tt, self.source[start : self.index], start)


class Lexer:
    """Tokenize PLC source text into a list of Token objects."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._chars = CharCursor(source)

    def lex(self) -> list[Token]:
        """Tokenize the full source, skipping whitespace between tokens."""
        tokens: list[Token] = []
        while self._chars.has():
            if self.peek(WHITESPACE):
                self._chars.advance()
                self._chars.skip()
            else:
                tokens.append(self.lex_token())
        return tokens

    def lex_token(self) -> Token:
        """Lex the next token, dispatching on its first character."""
        if self.peek(is_identifier_start):
            return self.lex_identifier()
        if self.peek(is_digit) or self.peek(_SIGNS):
            return self.lex_number()
        if self.peek("'"):
            return self.lex_character()
        if self.peek('"'):
            return self.lex_string()
        return self.lex_operator()

    # ------------------------------------------------------------------
    # Lookahead helpers
    # ------------------------------------------------------------------

    def peek(self, *patterns: CharPattern) -> bool:
        """Return True if the next characters match the given patterns.

        Each pattern is either a character predicate such as ``is_digit`` or a
        container of characters; a one-character string therefore matches that
        character exactly. ``peek("&", "&")`` is true when the next two
        characters are both ``&``.
        """
        for i, pattern in enumerate(patterns):
            if not self._chars.has(i):
                return False
            ch = self._chars.get(i)
            if callable(pattern):
                if not pattern(ch):
                    return False
            elif ch not in pattern:
                return False
        return True

    def match(self, *patterns: CharPattern) -> bool:
        """Like peek, but also consume the matched characters on success."""
        if not self.peek(*patterns):
            return False
        for _ in patterns:
            self._chars.advance()
        return True

    def _error(self, message: str) -> LexError:
        return LexError(message, self._chars.index, self._source)

    # ------------------------------------------------------------------
    # Sub-lexers
    # ------------------------------------------------------------------

    def lex_identifier(self) -> Token:
        if not self.match(is_identifier_start):
            raise self._error("identifier must start with a letter or '_'")
        while self.match(is_identifier_char):
            pass
        return self._chars.emit(TokenType.IDENTIFIER)

    def lex_number(self) -> Token:
        signed = self.match(_SIGNS)
        if signed and not self.peek(is_digit):
            # A sign not followed by a digit is an operator on its own
            return self._chars.emit(TokenType.OPERATOR)

        if self.match("0"):
            if self.match("."):
                if not self.peek(is_digit):
                    raise self._error("expected digit after decimal point")
                while self.match(is_digit):
                    pass
                return self._chars.emit(TokenType.DECIMAL)
            if signed:
                raise self._error("zero cannot be signed")
            return self._chars.emit(TokenType.INTEGER)

        if not self.peek(is_digit):
            raise self._error("invalid number")
        while self.match(is_digit):
            pass

        if self.match(".", is_digit):
            while self.match(is_digit):
                pass
            return self._chars.emit(TokenType.DECIMAL)
        return self._chars.emit(TokenType.INTEGER)

    def lex_character(self) -> Token:
        if not self.match("'"):
            raise self._error("expected opening quote")

        if not self._chars.has():
            raise self._error("unterminated character literal")
        if self.peek("'"):
            raise self._error("empty character literal")
        if self.peek("\n"):
            raise self._error("newline in character literal")

        if self.match("\\"):
            self.lex_escape()
        else:
            self._chars.advance()

        if not self._chars.has():
            raise self._error("unterminated character literal")
        if not self.match("'"):
            raise self._error("character literal must contain exactly one character")
        return self._chars.emit(TokenType.CHARACTER)

    def lex_string(self) -> Token:
        if not self.match('"'):
            raise self._error("expected opening quote")

        while self._chars.has() and not self.peek("\n") and not self.peek('"'):
            if self.match("\\"):
                self.lex_escape()
            else:
                self._chars.advance()

        if not self._chars.has() or self.peek("\n"):
            raise self._error("unterminated string literal")

        self._chars.advance()  # closing quote
        return self._chars.emit(TokenType.STRING)

    def lex_escape(self) -> None:
        """Consume the character after a backslash, which must be a valid escape."""
        if not self._chars.has():
            raise self._error("unexpected end of input in escape sequence")
        if not self.match(ESCAPES):
            raise self._error(f"invalid escape sequence '\\{self._chars.get()}'")

    def lex_operator(self) -> Token:
        for pair in _DOUBLE_OPERATORS:
            if self.match(*pair):
                return self._chars.emit(TokenType.OPERATOR)

        if not self._chars.has() or self._chars.get().isspace():
            raise self._error("expected operator")
        self._chars.advance()
        return self._chars.emit(TokenType.OPERATOR)


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source).lex()
