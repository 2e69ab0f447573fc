"""Minimal LSP server for punctok: quote diagnostics and semantic tokens."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from punctok.config import (
    DEMO_OPTIONS,
    DEMO_PUNCTUATION,
    load_config,
    options_from_config,
    table_from_config,
)
from punctok.errors import LexError
from punctok.scanner import scan
from punctok.table import PunctuationTable
from punctok.tokens import DOUBLE_QUOTE, SINGLE_QUOTE, Options, Token

logger = logging.getLogger(__name__)

TOKEN_TYPES = ["operator", "string", "variable"]
LEGEND = SemanticTokensLegend(token_types=TOKEN_TYPES, token_modifiers=[])


@dataclass(slots=True)
class ServerConfig:
    """Punctuation table and options the server scans documents with."""

    table: PunctuationTable
    options: Options


config = ServerConfig(PunctuationTable(DEMO_PUNCTUATION), DEMO_OPTIONS)

server = LanguageServer("punctok-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _source_of(ls: LanguageServer, uri: str) -> bytes:
    return ls.workspace.get_text_document(uri).source.encode("utf-8")


def _utf16_len(data: bytes) -> int:
    """Length of UTF-8 *data* in UTF-16 code units, the LSP default position encoding."""
    return len(data.decode("utf-8", "replace").encode("utf-16-le")) // 2


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan the document strictly and publish diagnostics."""
    source = _source_of(ls, uri)
    diagnostics: list[Diagnostic] = []

    try:
        scan(source, config.table, config.options, strict=True)
    except LexError as exc:
        line = exc.position.line - 1
        line_start = exc.position.offset - (exc.position.column - 1)
        col = _utf16_len(source[line_start : exc.position.offset])
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + 1),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Warning,
                source="punctok",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


def _token_type(tok: Token, options: Options) -> int:
    if tok.is_punctuation:
        return TOKEN_TYPES.index("operator")
    first = tok.text[0] if tok.text else None
    if (first == DOUBLE_QUOTE and options & Options.ACCEPT_DOUBLE_QUOTES) or (
        first == SINGLE_QUOTE and options & Options.ACCEPT_SINGLE_QUOTES
    ):
        return TOKEN_TYPES.index("string")
    return TOKEN_TYPES.index("variable")


def semantic_token_data(source: bytes, tokens: tuple[Token, ...], options: Options) -> list[int]:
    """Encode tokens as LSP relative semantic-token data.

    Columns and lengths are in UTF-16 code units. Quoted tokens that span
    lines become one entry per line.
    """
    data: list[int] = []
    prev_line = 0
    prev_col = 0
    for tok in tokens:
        token_type = _token_type(tok, options)
        line = tok.line
        line_start = source.rfind(b"\n", 0, tok.offset) + 1
        col = _utf16_len(source[line_start : tok.offset])
        for segment in tok.text.split(b"\n"):
            length = _utf16_len(segment.rstrip(b"\r"))
            if length:
                delta_line = line - prev_line
                delta_col = col - prev_col if delta_line == 0 else col
                data.extend((delta_line, delta_col, length, token_type, 0))
                prev_line, prev_col = line, col
            line += 1
            col = 0
    return data


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def semantic_tokens(ls: LanguageServer, params: SemanticTokensParams) -> SemanticTokens:
    source = _source_of(ls, params.text_document.uri)
    tokens = scan(source, config.table, config.options)
    return SemanticTokens(data=semantic_token_data(source, tokens, config.options))


def configure(config_path: Path | None) -> None:
    """Replace the demo table with the one from *config_path*, if given."""
    if config_path is None:
        return
    cfg = load_config(config_path, config_path.parent)
    config.table = table_from_config(cfg)
    config.options, _ = options_from_config(cfg)
    logger.debug("loaded %d punctuation patterns from %s", len(config.table), config_path)


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(prog="punctok-lsp", description="punctok language server")
    p.add_argument("--config", metavar="FILE", help="punctok.toml to load (default: demo table)")
    args = p.parse_args(argv)
    configure(Path(args.config) if args.config else None)
    server.start_io()
