"""Special form: defmacro.

Registers a template macro in the session's MacroTable.
"""

from __future__ import annotations

from lirs import EvaluatorFn, SExpression, LispValue
from lirs.types.errors import LirsArityError, LirsTypeError
from lirs.types.symbol import Symbol
from lirs.types.nil import Nil
from lirs.types.environment import Environment
from lirs.types.macro_table import MacroTable


def defmacro_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroTable,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(defmacro name (formal...) body)"""
    if len(tail) != 3:
        raise LirsArityError("defmacro requires a name, a parameter list and one body form")

    macro_name, params, body = tail
    if not isinstance(macro_name, Symbol):
        raise LirsTypeError(f"Macro name must be a Symbol, got {macro_name!r}")
    if not isinstance(params, list):
        raise LirsTypeError("Macro parameter list must be a list")

    macros.define_macro(macro_name, params, body)
    return Nil
