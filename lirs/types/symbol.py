"""Symbols name bindings, special forms, macros and primitives.

Symbols are interned per name, so the reader, the registries and every
Environment share one object for each distinct name.
"""

from __future__ import annotations

import sys


class Symbol:
    __slots__ = ("id",)

    _table: dict[str, Symbol] = {}

    def __new__(cls, name: str) -> Symbol:
        sym = cls._table.get(name)
        if sym is None:
            sym = super().__new__(cls)
            sym.id = sys.intern(name)
            cls._table[name] = sym
        return sym

    def __eq__(self, other: object) -> bool:
        return self is other or (isinstance(other, Symbol) and self.id == other.id)

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Symbol({self.id!r})"

    def __str__(self) -> str:
        return self.id
