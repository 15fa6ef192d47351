"""Minimal LSP server for PLC: diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from plc import __version__
from plc.errors import LexError, ParseError
from plc.parser import parse_string

server = LanguageServer("plc-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _to_diagnostic(exc: ParseError) -> Diagnostic:
    """Convert a positioned error to a diagnostic (1-based → 0-based)."""
    pos = exc.position
    line = pos.line - 1
    col = pos.column - 1
    stage = "lex" if isinstance(exc, LexError) else "parse"
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + exc.length),
        ),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        source="plc",
        code=stage,
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the lexer and parser over the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        parse_string(doc.source)
    except ParseError as exc:
        diagnostics.append(_to_diagnostic(exc))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
