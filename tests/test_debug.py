"""Tests for the AST debug dump."""

from __future__ import annotations

import io

import pytest

from plc.debug import dump_ast
from plc.parser import parse_string


def dump(source: str) -> str:
    buf = io.StringIO()
    dump_ast(parse_string(source), file=buf)
    return buf.getvalue()


class TestDumpAst:
    def test_field(self) -> None:
        assert dump("LET CONST x = 5;") == "Source\n  Field CONST x\n    Literal(5)\n"

    def test_field_without_value(self) -> None:
        assert dump("LET x;") == "Source\n  Field x\n    -\n"

    def test_method_header(self) -> None:
        out = dump("DEF f(a, b) DO RETURN; END")
        assert out.splitlines()[1] == "  Method f(a, b)"
        assert "    Return" in out

    def test_literal_formats(self) -> None:
        out = dump("DEF f() DO g(NIL, TRUE, 'c', \"s\", 1.5); END")
        assert "Literal(NIL)" in out
        assert "Literal(TRUE)" in out
        assert "Literal(Char('c'))" in out
        assert "Literal('s')" in out
        assert "Literal(1.5)" in out

    def test_nesting(self) -> None:
        out = dump("DEF f() DO x = a.b(1) + 2; END")
        assert out.splitlines() == [
            "Source",
            "  Method f()",
            "    Assignment",
            "      Access x",
            "      Binary +",
            "        Function b/1",
            "          Access a",
            "          Literal(1)",
            "        Literal(2)",
        ]

    def test_control_flow(self) -> None:
        out = dump(
            "DEF f() DO IF a DO b; ELSE c; END "
            "FOR (i = 0; i < 3; i = i + 1) d; END WHILE e DO END END"
        )
        for line in ("    If", "      Then", "      Else", "    For", "      Declaration i", "    While"):
            assert line in out.splitlines()

    def test_unknown_node_raises(self) -> None:
        with pytest.raises(TypeError, match="not an AST node"):
            dump_ast(object(), file=io.StringIO())
