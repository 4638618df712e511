"""
  LIRS Reader: Lexer and recursive-descent Parser

- Token stream of (token_type, token_value, offset) tuples, ending in "eof"
- Emits Python primitives instead of Cons cells:

    - nil -> Nil
    - lists -> Python list ( () is the empty list, not Nil )
    - symbols -> Symbol
    - :Fe -> Element("Fe")
    - strings -> str
    - integers -> int (signed 64-bit range)
    - floats -> float (any numeric token containing '.')
    - #t / #f / true / false -> bool
    - 'x -> [quote, x]
"""

from __future__ import annotations

import math
import re
from typing import Iterator, Optional

from lirs import INT64_MAX, INT64_MIN, SExpression
from lirs.types.element import Element
from lirs.types.errors import LirsLexError, LirsParseError, LirsUnbalancedParens
from lirs.types.nil import Nil
from lirs.types.symbol import Symbol

# Characters that terminate an atom
_DELIMS = r"\s()'\";"
_SYMBOL_CHARS = r"A-Za-z0-9_+\-*/<>=!?%&^~.$"

TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<quote>')"
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    rf"|(?P<boolean>#[tf](?![^{_DELIMS}]))"
    rf"|(?P<element>:[A-Za-z][A-Za-z0-9_]*(?![^{_DELIMS}]))"
    rf"|(?P<number>-?[0-9][^{_DELIMS}]*|\.[0-9][^{_DELIMS}]*)"  # a '-' only belongs to a number when a digit follows
    rf"|(?P<symbol>[{_SYMBOL_CHARS}]+(?![^{_DELIMS}]))",
)

# Literal grammar: ASCII digits only, no exponents, no digit separators
_INTEGER_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"-?(?:[0-9]+\.[0-9]*|\.[0-9]+)")

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}


QUOTE = Symbol("quote")

Token = tuple[str, str, int]


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields (token_type, token_value, offset) tuples.

    Whitespace and comments are dropped. The final token is ("eof", "", len(source)).
    Numeric tokens are typed "float" when they contain '.', "integer" otherwise.
    """
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            if source[pos] == '"':
                raise LirsLexError(f"Unterminated string literal at offset {pos}", pos)
            bad = _first_illegal(source, pos)
            raise LirsLexError(f"Illegal character {source[bad]!r} at offset {bad}", bad)
        kind = m.lastgroup
        text = m.group(kind)
        if kind == "number":
            yield ("float" if "." in text else "integer"), text, pos
        elif kind == "boolean":
            yield "boolean", text, pos
        elif kind == "element":
            yield "element", text[1:], pos
        elif kind == "string":
            yield "string", _unescape(text[1:-1]), pos
        elif kind == "symbol":
            if text in ("true", "false"):
                yield "boolean", "#t" if text == "true" else "#f", pos
            else:
                yield "symbol", text, pos
        elif kind not in ("whitespace", "comment"):
            yield kind, text, pos
        pos = m.end()
    yield "eof", "", n


_ATOM_CHAR_RE = re.compile(rf"[{_SYMBOL_CHARS}#:]")


def _first_illegal(source: str, pos: int) -> int:
    """Offset of the first character in the failed atom that cannot appear in any token."""
    i = pos
    while i < len(source) and _ATOM_CHAR_RE.match(source, i):
        i += 1
    return i if i < len(source) and not source[i].isspace() and source[i] not in "()'\";" else pos


def _unescape(body: str) -> str:
    out = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            out.append(ESCAPES.get(nxt, nxt))
            i += 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


class TokenStream:
    def __init__(self, token_iter: Iterator[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> Token:
        if not self.buffer:
            self.buffer.append(next(self.tokens, ("eof", "", -1)))
        return self.buffer[0]

    def advance(self) -> Token:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, ("eof", "", -1))

    def at_end(self) -> bool:
        return self.peek()[0] == "eof"

    def parse_expr(self) -> Optional[SExpression]:
        """Parse one expression; returns None at end of input."""
        tok_type, tok_val, offset = self.peek()
        if tok_type == "eof":
            return None
        self.advance()

        if tok_type == "lparen":
            items = []
            while True:
                nxt_type, _, _ = self.peek()
                if nxt_type == "rparen":
                    self.advance()
                    return items
                if nxt_type == "eof":
                    raise LirsUnbalancedParens(f"Unmatched '(' at offset {offset}", offset)
                items.append(self.parse_expr())

        if tok_type == "rparen":
            raise LirsUnbalancedParens(f"Unexpected ')' at offset {offset}", offset)

        # 'x desugars to (quote x)
        if tok_type == "quote":
            if self.at_end():
                raise LirsParseError(f"Nothing to quote at offset {offset}", offset)
            return [QUOTE, self.parse_expr()]

        if tok_type == "string":
            return tok_val
        if tok_type == "boolean":
            return tok_val == "#t"
        if tok_type == "element":
            return Element(tok_val)
        if tok_type == "integer":
            if not _INTEGER_RE.fullmatch(tok_val):
                raise LirsParseError(f"Malformed number {tok_val!r} at offset {offset}", offset)
            value = int(tok_val)
            if not INT64_MIN <= value <= INT64_MAX:
                raise LirsParseError(f"Integer {tok_val} out of 64-bit range at offset {offset}", offset)
            return value
        if tok_type == "float":
            if not _FLOAT_RE.fullmatch(tok_val):
                raise LirsParseError(f"Malformed number {tok_val!r} at offset {offset}", offset)
            value = float(tok_val)
            if math.isinf(value):
                raise LirsParseError(f"Float {tok_val} out of range at offset {offset}", offset)
            return value
        if tok_type == "symbol":
            if tok_val == "nil":
                return Nil
            return Symbol(tok_val)

        raise LirsParseError(f"Unknown token: {tok_type} {tok_val}", offset)

    def parse_all(self) -> Iterator[SExpression]:
        while not self.at_end():
            yield self.parse_expr()


def read_all(source: str) -> list[SExpression]:
    """Read every top-level form in `source`, failing before returning any on a syntax error."""
    return list(TokenStream(lex(source)).parse_all())


def parse(source: str) -> SExpression:
    """Read exactly one form from `source`."""
    stream = TokenStream(lex(source))
    if stream.at_end():
        raise LirsParseError("Unexpected end of input", 0)
    expr = stream.parse_expr()
    if not stream.at_end():
        _, _, offset = stream.peek()
        raise LirsParseError(f"Unexpected input after expression at offset {offset}", offset)
    return expr
