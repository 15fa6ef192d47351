"""Human-readable AST dump for debugging."""

from __future__ import annotations

import sys
from typing import TextIO

from plc.ast import (
    Access,
    Assignment,
    Binary,
    Char,
    Declaration,
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
    While,
)


def dump_ast(node: object, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    _dump(node, 0, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump(node: object, depth: int, f: TextIO) -> None:
    pad = _indent(depth)

    if isinstance(node, Source):
        f.write(f"{pad}Source\n")
        for field in node.fields:
            _dump(field, depth + 1, f)
        for method in node.methods:
            _dump(method, depth + 1, f)
    elif isinstance(node, Field):
        const = " CONST" if node.constant else ""
        f.write(f"{pad}Field{const} {node.name}\n")
        _dump_optional(node.value, depth + 1, f)
    elif isinstance(node, Method):
        f.write(f"{pad}Method {node.name}({', '.join(node.parameters)})\n")
        _dump_all(node.statements, depth + 1, f)

    # Statements
    elif isinstance(node, ExpressionStatement):
        f.write(f"{pad}ExpressionStatement\n")
        _dump(node.expression, depth + 1, f)
    elif isinstance(node, Declaration):
        f.write(f"{pad}Declaration {node.name}\n")
        _dump_optional(node.value, depth + 1, f)
    elif isinstance(node, Assignment):
        f.write(f"{pad}Assignment\n")
        _dump(node.receiver, depth + 1, f)
        _dump(node.value, depth + 1, f)
    elif isinstance(node, If):
        f.write(f"{pad}If\n")
        _dump(node.condition, depth + 1, f)
        f.write(f"{_indent(depth + 1)}Then\n")
        _dump_all(node.then_statements, depth + 2, f)
        if node.else_statements:
            f.write(f"{_indent(depth + 1)}Else\n")
            _dump_all(node.else_statements, depth + 2, f)
    elif isinstance(node, For):
        f.write(f"{pad}For\n")
        _dump_optional(node.initialization, depth + 1, f)
        _dump(node.condition, depth + 1, f)
        _dump_optional(node.increment, depth + 1, f)
        _dump_all(node.statements, depth + 1, f)
    elif isinstance(node, While):
        f.write(f"{pad}While\n")
        _dump(node.condition, depth + 1, f)
        _dump_all(node.statements, depth + 1, f)
    elif isinstance(node, Return):
        f.write(f"{pad}Return\n")
        _dump_optional(node.value, depth + 1, f)

    # Expressions
    elif isinstance(node, Literal):
        f.write(f"{pad}Literal({_format_value(node.value)})\n")
    elif isinstance(node, Group):
        f.write(f"{pad}Group\n")
        _dump(node.expression, depth + 1, f)
    elif isinstance(node, Access):
        f.write(f"{pad}Access {node.name}\n")
        if node.receiver is not None:
            _dump(node.receiver, depth + 1, f)
    elif isinstance(node, Function):
        f.write(f"{pad}Function {node.name}/{len(node.arguments)}\n")
        if node.receiver is not None:
            _dump(node.receiver, depth + 1, f)
        _dump_all(node.arguments, depth + 1, f)
    elif isinstance(node, Binary):
        f.write(f"{pad}Binary {node.operator}\n")
        _dump(node.left, depth + 1, f)
        _dump(node.right, depth + 1, f)
    else:
        raise TypeError(f"not an AST node: {type(node).__name__}")


def _dump_all(nodes: tuple, depth: int, f: TextIO) -> None:
    for node in nodes:
        _dump(node, depth, f)


def _dump_optional(node: object | None, depth: int, f: TextIO) -> None:
    if node is None:
        f.write(f"{_indent(depth)}-\n")
    else:
        _dump(node, depth, f)


def _format_value(value: object) -> str:
    if value is None:
        return "NIL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, Char):
        return f"Char({value.value!r})"
    if isinstance(value, str):
        return repr(value)
    return str(value)
