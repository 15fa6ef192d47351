"""Front end for the PLC teaching language: lexer, parser, and AST."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plc.ast import Source

__version__ = "0.1.0"


def parse_program(source: str) -> Source:
    """Tokenize and parse PLC source text into a Source AST."""
    from plc.parser import parse_string

    return parse_string(source)
