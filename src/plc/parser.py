"""PLC parser: converts a token stream into an AST."""

from __future__ import annotations

import re
from collections.abc import Callable
from decimal import Decimal

from plc.ast import (
    Access,
    Assignment,
    Binary,
    Char,
    Declaration,
    Expression,
    ExpressionStatement,
    Field,
    For,
    Function,
    Group,
    If,
    Literal,
    Method,
    Return,
    Source,
    Statement,
    While,
)
from plc.errors import ParseError
from plc.lexer import tokenize
from plc.tokens import ESCAPES, Token, TokenType

# A token pattern: a TokenType matches by type, a str matches the exact literal
Pattern = TokenType | str

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

# Deepest combined statement and expression nesting the parser accepts
MAX_NESTING = 64


class TokenCursor:
    """Read position over a token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.index = 0

    def has(self, offset: int = 0) -> bool:
        return 0 <= self.index + offset < len(self.tokens)

    def get(self, offset: int = 0) -> Token:
        return self.tokens[self.index + offset]

    def advance(self) -> None:
        self.index += 1


class Parser:
    """Recursive descent parser for PLC token streams."""

    def __init__(self, tokens: list[Token], source: str = "") -> None:
        self._tokens = TokenCursor(tokens)
        self._source = source
        self._depth = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def peek(self, *patterns: Pattern) -> bool:
        """Return True if the upcoming tokens match the patterns, without consuming."""
        for i, pattern in enumerate(patterns):
            if not self._tokens.has(i):
                return False
            tok = self._tokens.get(i)
            if isinstance(pattern, TokenType):
                if tok.type != pattern:
                    return False
            elif tok.literal != pattern:
                return False
        return True

    def match(self, *patterns: Pattern) -> bool:
        """Like peek, but also consume the matched tokens on success."""
        if not self.peek(*patterns):
            return False
        for _ in patterns:
            self._tokens.advance()
        return True

    def _expect(self, pattern: Pattern, message: str) -> Token:
        if not self.peek(pattern):
            raise self._error(message)
        tok = self._tokens.get()
        self._tokens.advance()
        return tok

    def _error(self, message: str) -> ParseError:
        """Error at the current token, or just past the last token at end of input."""
        if self._tokens.has():
            tok = self._tokens.get()
            return ParseError(message, tok.offset, self._source, len(tok.literal))
        if self._tokens.has(-1):
            return ParseError(message, self._tokens.get(-1).end, self._source)
        return ParseError(message, 0, self._source)

    def _enter(self) -> None:
        """Count one level of statement or expression nesting.

        Every call must be paired with ``self._depth -= 1`` once the nested
        construct is parsed. Input nested deeper than MAX_NESTING is rejected
        here, at the token that opens the next level, instead of exhausting the
        interpreter stack.
        """
        if self._depth >= MAX_NESTING:
            raise self._error("nesting too deep")
        self._depth += 1

    # ------------------------------------------------------------------
    # Source level
    # ------------------------------------------------------------------

    def parse(self) -> Source:
        """Parse the whole token list as a source file."""
        fields: list[Field] = []
        methods: list[Method] = []

        while self._tokens.has():
            if self.peek("LET"):
                fields.append(self.parse_field())
            elif self.peek("DEF"):
                methods.append(self.parse_method())
            else:
                raise self._error("expected 'LET' or 'DEF'")

        return Source(tuple(fields), tuple(methods))

    def parse_field(self) -> Field:
        self._expect("LET", "expected 'LET'")
        constant = self.match("CONST")
        name = self._expect(TokenType.IDENTIFIER, "expected field name").literal

        value = None
        if self.match("="):
            value = self.parse_expression()

        self._expect(";", "expected ';' after field")
        return Field(name, constant, value)

    def parse_method(self) -> Method:
        self._expect("DEF", "expected 'DEF'")
        name = self._expect(TokenType.IDENTIFIER, "expected method name").literal
        self._expect("(", "expected '(' after method name")

        parameters: list[str] = []
        if self.peek(TokenType.IDENTIFIER):
            parameters.append(self._tokens.get().literal)
            self._tokens.advance()
            while self.match(","):
                tok = self._expect(TokenType.IDENTIFIER, "expected parameter name after ','")
                parameters.append(tok.literal)

        self._expect(")", "expected ')' after parameters")
        self._expect("DO", "expected 'DO' before method body")
        statements = self._parse_block("END")
        self._expect("END", "expected 'END'")
        return Method(name, tuple(parameters), statements)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _parse_block(self, *terminators: str) -> tuple[Statement, ...]:
        """Parse statements until one of the terminator keywords is next."""
        statements: list[Statement] = []
        while not any(self.peek(t) for t in terminators):
            if not self._tokens.has():
                expected = " or ".join(f"'{t}'" for t in terminators)
                raise self._error(f"expected {expected}")
            statements.append(self.parse_statement())
        return tuple(statements)

    def parse_statement(self) -> Statement:
        self._enter()
        try:
            return self._parse_statement()
        finally:
            self._depth -= 1

    def _parse_statement(self) -> Statement:
        if self.peek("LET"):
            return self._parse_declaration()
        if self.peek("IF"):
            return self._parse_if()
        if self.peek("FOR"):
            return self._parse_for()
        if self.peek("WHILE"):
            return self._parse_while()
        if self.peek("RETURN"):
            return self._parse_return()

        expression = self.parse_expression()
        if self.match("="):
            value = self.parse_expression()
            self._expect(";", "expected ';' after assignment")
            return Assignment(expression, value)

        self._expect(";", "expected ';' after expression")
        return ExpressionStatement(expression)

    def _parse_declaration(self) -> Declaration:
        self._expect("LET", "expected 'LET'")
        name = self._expect(TokenType.IDENTIFIER, "expected variable name").literal

        value = None
        if self.match("="):
            value = self.parse_expression()

        self._expect(";", "expected ';' after declaration")
        return Declaration(name, value)

    def _parse_if(self) -> If:
        self._expect("IF", "expected 'IF'")
        condition = self.parse_expression()
        self._expect("DO", "expected 'DO' after condition")

        then_statements = self._parse_block("ELSE", "END")
        else_statements: tuple[Statement, ...] = ()
        if self.match("ELSE"):
            else_statements = self._parse_block("END")

        self._expect("END", "expected 'END'")
        return If(condition, then_statements, else_statements)

    def _parse_for(self) -> For:
        self._expect("FOR", "expected 'FOR'")
        self._expect("(", "expected '(' after 'FOR'")

        initialization = None
        if self.peek(TokenType.IDENTIFIER, "="):
            name = self._tokens.get().literal
            self.match(TokenType.IDENTIFIER, "=")
            initialization = Declaration(name, self.parse_expression())
        self._expect(";", "expected ';' after loop initialization")

        condition = self.parse_expression()
        self._expect(";", "expected ';' after loop condition")

        increment = None
        if self.peek(TokenType.IDENTIFIER, "="):
            name = self._tokens.get().literal
            self.match(TokenType.IDENTIFIER, "=")
            increment = Assignment(Access(None, name), self.parse_expression())
        self._expect(")", "expected ')' after loop increment")

        statements = self._parse_block("END")
        self._expect("END", "expected 'END'")
        return For(initialization, condition, increment, statements)

    def _parse_while(self) -> While:
        self._expect("WHILE", "expected 'WHILE'")
        condition = self.parse_expression()
        self._expect("DO", "expected 'DO' after condition")
        statements = self._parse_block("END")
        self._expect("END", "expected 'END'")
        return While(condition, statements)

    def _parse_return(self) -> Return:
        self._expect("RETURN", "expected 'RETURN'")
        value = None
        if not self.peek(";"):
            value = self.parse_expression()
        self._expect(";", "expected ';' after return")
        return Return(value)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self) -> Expression:
        self._enter()
        try:
            return self._parse_logical()
        finally:
            self._depth -= 1

    def _parse_logical(self) -> Expression:
        return self._parse_binary(("&&", "||"), self._parse_equality)

    def _parse_equality(self) -> Expression:
        return self._parse_binary(("==", "!=", "<", "<=", ">", ">="), self._parse_additive)

    def _parse_additive(self) -> Expression:
        return self._parse_binary(("+", "-"), self._parse_multiplicative)

    def _parse_multiplicative(self) -> Expression:
        return self._parse_binary(("*", "/"), self._parse_secondary)

    def _parse_binary(
        self, operators: tuple[str, ...], operand: Callable[[], Expression]
    ) -> Expression:
        """Fold a run of same-precedence operators into a left-deep tree."""
        left = operand()
        while True:
            op = next((o for o in operators if self.peek(o)), None)
            if op is None:
                return left
            self._tokens.advance()
            left = Binary(op, left, operand())

    def _parse_secondary(self) -> Expression:
        expression = self._parse_primary()
        while self.match("."):
            name = self._expect(TokenType.IDENTIFIER, "expected member name after '.'").literal
            if self.match("("):
                expression = Function(expression, name, self._parse_arguments())
            else:
                expression = Access(expression, name)
        return expression

    def _parse_primary(self) -> Expression:
        if self.match("NIL"):
            return Literal(None)
        if self.match("TRUE"):
            return Literal(True)
        if self.match("FALSE"):
            return Literal(False)

        if self.peek(TokenType.INTEGER):
            tok = self._expect(TokenType.INTEGER, "expected integer")
            return Literal(int(tok.literal))
        if self.peek(TokenType.DECIMAL):
            tok = self._expect(TokenType.DECIMAL, "expected decimal")
            return Literal(Decimal(tok.literal))
        if self.peek(TokenType.CHARACTER):
            tok = self._expect(TokenType.CHARACTER, "expected character")
            return Literal(Char(_unescape(tok.literal[1:-1])))
        if self.peek(TokenType.STRING):
            tok = self._expect(TokenType.STRING, "expected string")
            return Literal(_unescape(tok.literal[1:-1]))

        if self.match("("):
            expression = self.parse_expression()
            self._expect(")", "expected ')' after grouped expression")
            return Group(expression)

        if self.peek(TokenType.IDENTIFIER):
            name = self._expect(TokenType.IDENTIFIER, "expected identifier").literal
            if self.match("("):
                return Function(None, name, self._parse_arguments())
            return Access(None, name)

        raise self._error("expected expression")

    def _parse_arguments(self) -> tuple[Expression, ...]:
        """Parse call arguments; the opening '(' has already been consumed."""
        arguments: list[Expression] = []
        if self.match(")"):
            return ()
        arguments.append(self.parse_expression())
        while self.match(","):
            arguments.append(self.parse_expression())
        self._expect(")", "expected ',' or ')' in argument list")
        return tuple(arguments)


def _unescape(text: str) -> str:
    """Replace escape sequences in a literal body with the characters they denote."""
    return _ESCAPE_RE.sub(lambda m: ESCAPES.get(m.group(1), m.group(0)), text)


def parse(tokens: list[Token], source: str = "") -> Source:
    """Convenience function: parse a token list and return a Source AST."""
    return Parser(tokens, source).parse()


def parse_string(source: str) -> Source:
    """Tokenize and parse source text, keeping it for error context."""
    return Parser(tokenize(source), source).parse()
