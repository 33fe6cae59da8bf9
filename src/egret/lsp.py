"""Minimal LSP server for regex pattern lists — diagnostics only.

Each non-blank line of a document is scanned as one pattern.
"""

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

from egret import __version__
from egret.errors import ScanError
from egret.lexer import tokenize
from egret.logger import get_logger

logger = get_logger(__name__)

server = LanguageServer("egret-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _utf16_column(text: str, offset: int) -> int:
    """Convert a code-point offset into an LSP column (UTF-16 code units)."""
    return len(text[:offset].encode("utf-16-le")) // 2


def _range(line_no: int, pattern: str, start: int, end: int) -> Range:
    return Range(
        start=Position(line=line_no, character=_utf16_column(pattern, start)),
        end=Position(line=line_no, character=_utf16_column(pattern, end)),
    )


def _diagnose_line(line_no: int, pattern: str) -> list[Diagnostic]:
    try:
        _, warnings = tokenize(pattern)
    except ScanError as exc:
        return [
            Diagnostic(
                range=_range(line_no, pattern, exc.position, exc.position + 1),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="egret",
                code=exc.kind.name.lower(),
            )
        ]

    return [
        Diagnostic(
            range=_range(line_no, pattern, w.span.start, w.span.end),
            message=w.message,
            severity=DiagnosticSeverity.Warning,
            source="egret",
        )
        for w in warnings
    ]


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan every pattern in the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    for line_no, line in enumerate(doc.source.splitlines()):
        if not line.strip():
            continue
        diagnostics.extend(_diagnose_line(line_no, line))

    logger.debug("%s: %d diagnostics", uri, len(diagnostics))
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
