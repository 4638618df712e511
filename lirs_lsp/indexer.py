from __future__ import annotations

"""
Lightweight indexer for LIRS files without evaluating code.

We scan for top-level forms and build an index for:
- definitions: (define name ...), (defmacro name (formals) body)
- syntax problems, reported by the real LIRS reader with source offsets

The scanner is tolerant: it uses a lightweight token regex so that partial or
incomplete buffers still yield definitions for completion and document symbols.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple
import re

from lirs.builtin.macro_builtin import CHEMISTRY_MACROS
from lirs.reader.parser import read_all
from lirs.types.errors import LirsLexError, LirsParseError

# Simple token patterns for scanning
TOKEN_REGEX = re.compile(
    r"\s+|;.*$|\(|\)|'|\"(?:\\.|[^\"])*\"|[^\s()'\"]+",
    re.MULTILINE,
)


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "macro"
    line: int
    col: int
    formals: List[str] = field(default_factory=list)


@dataclass
class SyntaxProblem:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    problems: List[SyntaxProblem] = field(default_factory=list)


def _iter_tokens(text: str):
    for m in TOKEN_REGEX.finditer(text):
        tok = m.group(0)
        if not tok or tok.isspace() or tok.startswith(";"):
            continue
        yield tok, m.start(), m.end()


def position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = list(_iter_tokens(text))

    for i, (tok, _, _) in enumerate(tokens):
        if tok != "(" or i + 2 >= len(tokens):
            continue
        head = tokens[i + 1][0]
        if head not in ("define", "defmacro"):
            continue
        name, start, _ = tokens[i + 2]
        if name in ("(", ")", "'") or name.startswith('"'):
            continue
        line, col = position_from_offset(text, start)
        formals: List[str] = []
        if head == "defmacro" and i + 3 < len(tokens) and tokens[i + 3][0] == "(":
            j = i + 4
            while j < len(tokens) and tokens[j][0] not in ("(", ")"):
                formals.append(tokens[j][0])
                j += 1
        kind = "var" if head == "define" else "macro"
        idx.symbols[name] = SymbolDef(name=name, kind=kind, line=line, col=col, formals=formals)

    idx.problems = check_syntax(text)
    return idx


def check_syntax(text: str) -> List[SyntaxProblem]:
    """Run the LIRS reader over `text`; at most one problem (the first) is reported."""
    try:
        read_all(text)
    except (LirsLexError, LirsParseError) as ex:
        offset = ex.offset if ex.offset is not None and ex.offset >= 0 else 0
        line, col = position_from_offset(text, offset)
        return [SyntaxProblem(message=f"{ex.kind}: {ex}", line=line, col=col)]
    except RecursionError:
        return [SyntaxProblem(message="ParseError: input nested too deeply", line=0, col=0)]
    return []


# Builtin signatures for quick hover/signature help without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "define": "(define name value)",
    "if": "(if test then else)",
    "quote": "(quote x)",
    "begin": "(begin form ...)",
    "let": "(let ((name value) ...) body ...)",
    "defmacro": "(defmacro name (formal ...) template)",
    "macroexpand": "(macroexpand form)",
    "macroexpand-1": "(macroexpand-1 form)",
    "+": "(+ num ...)",
    "-": "(- num num ...)",
    "*": "(* num ...)",
    "/": "(/ num num ...)",
    "=": "(= a b)",
    "<": "(< a b)",
    "<=": "(<= a b)",
    ">": "(> a b)",
    ">=": "(>= a b)",
    "list": "(list x ...)",
    "car": "(car xs)",
    "cdr": "(cdr xs)",
    "first": "(first xs)",
    "rest": "(rest xs)",
    "material": "(material :E1 n1 :E2 n2 ...)",
    "substitute": "(substitute formula :From :To)",
    "combine": "(combine formula1 formula2 ...)",
}

MACRO_SIGNATURES: Dict[str, str] = {
    m.name: f"({m.name} {' '.join(m.formals)})" for m in CHEMISTRY_MACROS
}

MACRO_DOCS: Dict[str, str] = {
    m.name: f"{m.template}  e.g. {m.example}" for m in CHEMISTRY_MACROS
}


def signature_for(name: str, idx: Optional[DocumentIndex] = None) -> Optional[str]:
    if name in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[name]
    if name in MACRO_SIGNATURES:
        return MACRO_SIGNATURES[name]
    if idx is not None and name in idx.symbols and idx.symbols[name].kind == "macro":
        sdef = idx.symbols[name]
        return f"({name} {' '.join(sdef.formals)})".replace(" )", ")")
    return None


def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    # Document definitions shadow the builtin catalogue
    if word in idx.symbols:
        sdef = idx.symbols[word]
        return f"{word}: {sdef.kind} (defined at {sdef.line+1}:{sdef.col+1})"
    if word in MACRO_SIGNATURES:
        return f"{MACRO_SIGNATURES[word]} => {MACRO_DOCS[word]}"
    return BUILTIN_SIGNATURES.get(word)
