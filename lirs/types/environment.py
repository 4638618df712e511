"""Lexical scopes for LIRS.

A Session owns one root frame for its whole life. `let` pushes a child frame
whose `outer` link points at the enclosing one; the child is discarded when the
body returns. Lookups walk outward, definitions always land in the frame they
were made in.
"""

from __future__ import annotations

from typing import Iterator, Optional

from lirs import LispValue
from lirs.types.errors import LirsTypeError, LirsUnboundSymbol
from lirs.types.symbol import Symbol


class Environment:
    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer = outer

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` in this frame, replacing an earlier binding of the same name."""
        if not isinstance(name, Symbol):
            raise LirsTypeError(f"Cannot define {name!r}: binding names must be symbols")
        self.vars[name] = value

    def frames(self) -> Iterator[Environment]:
        frame: Optional[Environment] = self
        while frame is not None:
            yield frame
            frame = frame.outer

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Innermost frame binding `symbol`, or None."""
        return next((f for f in self.frames() if symbol in f.vars), None)

    def is_bound(self, symbol: Symbol) -> bool:
        return self.find(symbol) is not None

    def lookup(self, name: Symbol) -> LispValue:
        frame = self.find(name)
        if frame is None:
            raise LirsUnboundSymbol(f"Unbound symbol: {name}")
        return frame.vars[name]

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        for name, value in mapping.items():
            self.define(name, value)

    # Rollback support for Session: only the root frame outlives a form
    def snapshot(self) -> dict[Symbol, LispValue]:
        return dict(self.vars)

    def restore(self, snapshot: dict[Symbol, LispValue]) -> None:
        self.vars = dict(snapshot)

    def _frame_text(self) -> str:
        return "{" + ", ".join(f"{k}: {v!r}" for k, v in self.vars.items()) + "}"

    def __str__(self) -> str:
        return self._frame_text() + (" -> ..." if self.outer is not None else "")

    def __repr__(self) -> str:
        return "<Environment chain: " + " -> ".join(f._frame_text() for f in self.frames()) + ">"
