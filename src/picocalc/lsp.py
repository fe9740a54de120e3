"""Minimal LSP server for PicoCalc expression files — diagnostics only."""

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

from picocalc import __version__
from picocalc.errors import CalcError
from picocalc.parser import parse

server = LanguageServer(
    "picocalc-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Evaluate every non-blank line in strict mode and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    for line_no, line in enumerate(doc.source.splitlines()):
        if not line.strip():
            continue
        try:
            parse(line, strict=True)
        except CalcError as exc:
            diagnostics.append(
                Diagnostic(
                    range=Range(
                        start=Position(line=line_no, character=exc.offset),
                        end=Position(line=line_no, character=exc.offset + 1),
                    ),
                    message=exc.message,
                    severity=DiagnosticSeverity.Error,
                    source="picocalc",
                )
            )

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
