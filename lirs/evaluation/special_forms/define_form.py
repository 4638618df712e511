from lirs import EvaluatorFn
from lirs import SExpression, LispValue
from lirs.types.errors import LirsArityError, LirsTypeError
from lirs.types.symbol import Symbol
from lirs.types.environment import Environment
from lirs.types.macro_table import MacroTable


def define_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroTable,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (define name value)
    Binds in the current environment and returns the bound value.
    """
    if len(tail) != 2:
        raise LirsArityError("define requires exactly 2 arguments")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise LirsTypeError(f"define requires a symbol as first argument, got {name!r}")
    value = evaluate_fn(val_expr, env, macros)
    env.define(name, value)
    return value
