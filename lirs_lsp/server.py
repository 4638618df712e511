from __future__ import annotations

"""
pygls language server for `.lirs` files.

Buffers are never evaluated. Each open document keeps its text and the static
index from `lirs_lsp.indexer`; every request is answered from those two.

Served requests: open/change/close sync with reader diagnostics, hover,
completion of forms, primitives, macros and local definitions, signature help
for anything with a known parameter list, and document symbols.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    ParameterInformation,
    Position,
    Range,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureHelpParams,
    SignatureInformation,
    SymbolKind,
)

from lirs import __version__
from lirs_lsp.indexer import (
    BUILTIN_SIGNATURES,
    MACRO_SIGNATURES,
    DocumentIndex,
    SymbolDef,
    build_index,
    hover_text,
    signature_for,
)

logger = logging.getLogger(__name__)

# Characters that end a word under the cursor
WORD_BREAKS = frozenset(" \t()'\"\n\r")


@dataclass
class OpenDocument:
    text: str
    index: DocumentIndex


class LirsLanguageServer(LanguageServer):
    CMD_NAME = "lirs-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.open_documents: Dict[str, OpenDocument] = {}

    def index_document(self, uri: str) -> None:
        """Re-index `uri` from the workspace copy, which pygls keeps current for full and incremental edits."""
        text = self.workspace.get_text_document(uri).source
        doc = OpenDocument(text=text, index=build_index(text))
        self.open_documents[uri] = doc
        self.publish_diagnostics(uri, diagnostics_for(doc.index))

    def drop_document(self, uri: str) -> None:
        self.open_documents.pop(uri, None)
        self.publish_diagnostics(uri, [])


ls = LirsLanguageServer()


@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LirsLanguageServer, params: DidOpenTextDocumentParams):
    ls.index_document(params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LirsLanguageServer, params: DidChangeTextDocumentParams):
    ls.index_document(params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: LirsLanguageServer, params: DidCloseTextDocumentParams):
    ls.drop_document(params.text_document.uri)


def diagnostics_for(idx: DocumentIndex) -> List[Diagnostic]:
    diagnostics = []
    for problem in idx.problems:
        start = Position(line=problem.line, character=problem.col)
        end = Position(line=problem.line, character=problem.col + 1)
        diagnostics.append(
            Diagnostic(
                range=Range(start=start, end=end),
                message=problem.message,
                severity=DiagnosticSeverity.Error,
                source=LirsLanguageServer.CMD_NAME,
            )
        )
    return diagnostics


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(ls: LirsLanguageServer, params: HoverParams) -> Optional[Hover]:
    doc = ls.open_documents.get(params.text_document.uri)
    word = extract_word_at(doc.text, params.position) if doc else None
    text = hover_text(word, doc.index) if word else None
    if text is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=text))


def _completion_items(doc: Optional[OpenDocument]) -> Iterator[CompletionItem]:
    for name, signature in BUILTIN_SIGNATURES.items():
        yield CompletionItem(label=name, kind=CompletionItemKind.Function, detail=signature)
    for name, signature in MACRO_SIGNATURES.items():
        yield CompletionItem(label=name, kind=CompletionItemKind.Snippet, detail=signature)
    if doc is not None:
        for name, sdef in doc.index.symbols.items():
            yield CompletionItem(label=name, kind=_completion_kind(sdef))


def _completion_kind(sdef: SymbolDef) -> CompletionItemKind:
    return CompletionItemKind.Snippet if sdef.kind == "macro" else CompletionItemKind.Variable


@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(ls: LirsLanguageServer, params: CompletionParams) -> CompletionList:
    doc = ls.open_documents.get(params.text_document.uri)
    return CompletionList(is_incomplete=False, items=list(_completion_items(doc)))


@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(ls: LirsLanguageServer, params: SignatureHelpParams) -> Optional[SignatureHelp]:
    doc = ls.open_documents.get(params.text_document.uri)
    if doc is None:
        return None
    callee = extract_callee_name(get_line_prefix(doc.text, params.position))
    label = signature_for(callee, doc.index) if callee else None
    if label is None:
        return None
    # "(name a b)" -> parameters a, b
    formals = label.strip("()").split()[1:]
    return SignatureHelp(
        signatures=[
            SignatureInformation(
                label=label,
                parameters=[ParameterInformation(label=f) for f in formals],
            )
        ],
        active_signature=0,
        active_parameter=0,
    )


@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(ls: LirsLanguageServer, params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    doc = ls.open_documents.get(params.text_document.uri)
    if doc is None:
        return None
    return [_document_symbol(name, sdef) for name, sdef in doc.index.symbols.items()]


def _document_symbol(name: str, sdef: SymbolDef) -> DocumentSymbol:
    span = Range(
        start=Position(line=sdef.line, character=sdef.col),
        end=Position(line=sdef.line, character=sdef.col + len(name)),
    )
    kind = SymbolKind.Function if sdef.kind == "macro" else SymbolKind.Variable
    return DocumentSymbol(name=name, kind=kind, range=span, selection_range=span)


def _line_at(text: str, line: int) -> Optional[str]:
    lines = text.splitlines(True)
    return lines[line] if line < len(lines) else None


def get_line_prefix(text: str, pos: Position) -> str:
    line = _line_at(text, pos.line)
    return line[: pos.character] if line is not None else ""


def extract_word_at(text: str, pos: Position) -> Optional[str]:
    line = _line_at(text, pos.line)
    if line is None:
        return None
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in WORD_BREAKS:
        start -= 1
    while end < len(line) and line[end] not in WORD_BREAKS:
        end += 1
    return line[start:end] or None


def extract_callee_name(prefix: str) -> Optional[str]:
    """Head of the innermost list opened in `prefix`, if any."""
    _, paren, rest = prefix.rpartition("(")
    words = rest.split() if paren else []
    return words[0] if words else None


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting %s %s on stdio", LirsLanguageServer.CMD_NAME, __version__)
    ls.start_io()


if __name__ == "__main__":
    main()
