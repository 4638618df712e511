from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator

from lirs import SExpression
from lirs.types.errors import LirsArityError, LirsDepthExceeded, LirsTypeError
from lirs.types.symbol import Symbol

logger = logging.getLogger(__name__)

DEFAULT_MAX_EXPANSION_DEPTH = 200

QUOTE = Symbol("quote")


@dataclass(frozen=True)
class MacroDefinition:
    """A named template: formals are replaced by argument subtrees in `body`."""

    name: Symbol
    formals: tuple[Symbol, ...]
    body: SExpression

    @property
    def arity(self) -> int:
        return len(self.formals)


def substitute_formals(expr: SExpression, bindings: dict[Symbol, SExpression]) -> SExpression:
    """Rebuild `expr` with every formal Symbol replaced by its bound subtree.

    The template is never mutated; lists are copied on the way down.
    """
    if isinstance(expr, Symbol):
        return bindings.get(expr, expr)
    if isinstance(expr, list):
        return [substitute_formals(x, bindings) for x in expr]
    return expr


class MacroTable:
    """
    Registry mapping macro names (Symbols) to template MacroDefinitions.

    Features:
    - Head-position expansion by AST-level formal -> argument substitution
    - Full recursive expansion (skipping quoted data)
    - Latest registration wins; no overloading
    - Bounded expansion nesting
    """

    def __init__(self, max_expansion_depth: int = DEFAULT_MAX_EXPANSION_DEPTH):
        self.macros: dict[Symbol, MacroDefinition] = {}
        self.max_expansion_depth = max_expansion_depth
        self._depth = 0

    def define_macro(
        self, name: Symbol | str, formals: Iterable[Symbol | str], body: SExpression
    ) -> MacroDefinition:
        if isinstance(name, str):
            name = Symbol(name)
        if not isinstance(name, Symbol):
            raise LirsTypeError(f"Macro name must be a symbol, got {name!r}")
        params = tuple(Symbol(f) if isinstance(f, str) else f for f in formals)
        for p in params:
            if not isinstance(p, Symbol):
                raise LirsTypeError(f"Macro formals must be symbols, got {p!r}")
        if len(set(params)) != len(params):
            raise LirsTypeError(f"Duplicate formal in macro {name}")
        definition = MacroDefinition(name, params, body)
        if name in self.macros:
            logger.debug("Redefining macro %s", name)
        self.macros[name] = definition
        return definition

    def is_macro(self, sym: SExpression) -> bool:
        return isinstance(sym, Symbol) and sym in self.macros

    def get(self, name: Symbol) -> MacroDefinition | None:
        return self.macros.get(name)

    def names(self) -> list[str]:
        return sorted(str(name) for name in self.macros)

    def snapshot(self) -> dict[Symbol, MacroDefinition]:
        return dict(self.macros)

    def restore(self, snapshot: dict[Symbol, MacroDefinition]) -> None:
        self.macros = dict(snapshot)

    # Single-step head expansion
    def expand_1(self, form: SExpression) -> SExpression:
        """Expand only the head-position macro if present."""
        if isinstance(form, list) and form and self.is_macro(form[0]):
            definition = self.macros[form[0]]
            args = form[1:]
            if len(args) != definition.arity:
                raise LirsArityError(
                    f"Macro {definition.name} expects {definition.arity} arguments, got {len(args)}"
                )
            return substitute_formals(definition.body, dict(zip(definition.formals, args)))
        return form

    # Fixed-point head expansion
    def macro_expand_head(self, form: SExpression) -> SExpression:
        cur = form
        with self.expansion_guard():
            for _ in range(self.max_expansion_depth):
                nxt = self.expand_1(cur)
                if nxt is cur:
                    return cur
                cur = nxt
        raise LirsDepthExceeded(
            f"Macro expansion did not settle within {self.max_expansion_depth} steps"
        )

    # Full expansion
    def macro_expand_all(self, form: SExpression) -> SExpression:
        expanded = self.macro_expand_head(form)
        if isinstance(expanded, list):
            # Quoted data is not code
            if expanded and expanded[0] == QUOTE:
                return expanded
            with self.expansion_guard():
                return [self.macro_expand_all(x) for x in expanded]
        return expanded

    @contextmanager
    def expansion_guard(self) -> Iterator[None]:
        """Count nested expansions, failing once the configured bound is passed."""
        self._depth += 1
        try:
            if self._depth > self.max_expansion_depth:
                raise LirsDepthExceeded(
                    f"Macro expansion nested deeper than {self.max_expansion_depth}"
                )
            yield
        finally:
            self._depth -= 1
