"""Core evaluator for the LIRS interpreter.

A list is dispatched on its head, in this order:

    special form  -> bespoke evaluation rules (SPECIAL_FORMS)
    macro         -> template substitution, then evaluation in the calling scope
    primitive     -> head and arguments evaluated left to right, then applied
    anything else -> LirsUnknownOperator

Evaluation is synchronous and never mutates the forms it is given.
"""

from __future__ import annotations

from lirs import SExpression, LispValue
from lirs.builtin import PRIMITIVES, Primitive
from lirs.evaluation.special_forms import SPECIAL_FORMS
from lirs.types.environment import Environment
from lirs.types.errors import LirsUnboundSymbol, LirsUnknownOperator
from lirs.types.macro_table import MacroTable
from lirs.types.symbol import Symbol


def evaluate(expr: SExpression, env: Environment, macros: MacroTable | None = None) -> LispValue:
    if macros is None:
        macros = MacroTable()

    match expr:
        case Symbol():
            return _resolve_symbol(expr, env)

        case [Symbol() as head, *tail] if head in SPECIAL_FORMS:
            return SPECIAL_FORMS[head](tail, env, macros, evaluate)

        case [Symbol() as head, *_] if macros.is_macro(head):
            expanded = macros.expand_1(expr)
            with macros.expansion_guard():
                return evaluate(expanded, env, macros)

        case [head, *tail]:
            op = _resolve_operator(head, env, macros)
            args = [evaluate(arg, env, macros) for arg in tail]
            return op(env, args)

    # --- Atoms and the empty list evaluate to themselves ---
    return expr


def _resolve_symbol(sym: Symbol, env: Environment) -> LispValue:
    found = env.find(sym)
    if found is not None:
        return found.vars[sym]
    # An unbound primitive name is a first-class reference to that primitive
    if sym in PRIMITIVES:
        return sym
    raise LirsUnboundSymbol(f"Unbound symbol: {sym}")


def _resolve_operator(head: SExpression, env: Environment, macros: MacroTable) -> Primitive:
    if isinstance(head, Symbol):
        if head in PRIMITIVES:
            return PRIMITIVES[head]
        if not env.is_bound(head):
            raise LirsUnknownOperator(f"Unknown operator: {head}")
    target = evaluate(head, env, macros)
    if isinstance(target, Symbol) and target in PRIMITIVES:
        return PRIMITIVES[target]
    raise LirsUnknownOperator(f"Cannot apply {target!r}: not an operator")
