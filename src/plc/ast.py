"""AST node types for parsed PLC programs."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass(frozen=True, slots=True)
class Char:
    """A character literal value, kept apart from one-character strings."""

    value: str


# ----------------------------------------------------------------------
# Expressions
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Literal:
    """NIL, TRUE/FALSE, integer, decimal, character, or string constant."""

    value: LiteralValue


@dataclass(frozen=True, slots=True)
class Group:
    """Parenthesized expression."""

    expression: Expression


@dataclass(frozen=True, slots=True)
class Access:
    """Variable or field access: ``name`` or ``receiver.name``."""

    receiver: Expression | None
    name: str


@dataclass(frozen=True, slots=True)
class Function:
    """Function or method call: ``name(args)`` or ``receiver.name(args)``."""

    receiver: Expression | None
    name: str
    arguments: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class Binary:
    """Binary operation; runs of one precedence level nest on the left."""

    operator: str
    left: Expression
    right: Expression


# ----------------------------------------------------------------------
# Statements
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ExpressionStatement:
    """Expression evaluated for its effect, e.g. a call."""

    expression: Expression


@dataclass(frozen=True, slots=True)
class Declaration:
    """``LET name = value;`` inside a method body."""

    name: str
    value: Expression | None


@dataclass(frozen=True, slots=True)
class Assignment:
    """``receiver = value;`` where receiver is usually an Access."""

    receiver: Expression
    value: Expression


@dataclass(frozen=True, slots=True)
class If:
    condition: Expression
    then_statements: tuple[Statement, ...]
    else_statements: tuple[Statement, ...]


@dataclass(frozen=True, slots=True)
class For:
    initialization: Declaration | None
    condition: Expression
    increment: Assignment | None
    statements: tuple[Statement, ...]


@dataclass(frozen=True, slots=True)
class While:
    condition: Expression
    statements: tuple[Statement, ...]


@dataclass(frozen=True, slots=True)
class Return:
    value: Expression | None


# ----------------------------------------------------------------------
# Top level
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Field:
    """Global ``LET [CONST] name [= value];``."""

    name: str
    constant: bool
    value: Expression | None


@dataclass(frozen=True, slots=True)
class Method:
    """``DEF name(params) DO ... END``."""

    name: str
    parameters: tuple[str, ...]
    statements: tuple[Statement, ...]


@dataclass(frozen=True, slots=True)
class Source:
    """Root node: all fields followed by all methods, in source order."""

    fields: tuple[Field, ...]
    methods: tuple[Method, ...]


LiteralValue = Union[None, bool, int, Decimal, Char, str]
Expression = Union[Literal, Group, Access, Function, Binary]
Statement = Union[ExpressionStatement, Declaration, Assignment, If, For, While, Return]
