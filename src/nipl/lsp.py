"""Minimal LSP server for nipl: illegal-character diagnostics only."""

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

from nipl import __version__
from nipl.lexer import Lexer, split_lines
from nipl.tokens import TokenType

server = LanguageServer("nipl-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def collect_diagnostics(source: str) -> list[Diagnostic]:
    """Scan each line as its own chunk and flag every ILLEGAL token."""
    diagnostics: list[Diagnostic] = []
    for line_idx, line in enumerate(split_lines(source)):
        for tok in Lexer(line):
            if tok.type != TokenType.ILLEGAL or tok.position is None:
                continue
            col = tok.position.column - 1
            diagnostics.append(
                Diagnostic(
                    range=Range(
                        start=Position(line=line_idx, character=col),
                        end=Position(line=line_idx, character=col + 1),
                    ),
                    message=f"illegal character {tok.literal!r}",
                    severity=DiagnosticSeverity.Error,
                    source="nipl",
                )
            )
    return diagnostics


def _validate(ls: LanguageServer, uri: str) -> None:
    """Tokenize the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=collect_diagnostics(doc.source))
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
