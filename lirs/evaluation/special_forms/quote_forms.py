from lirs import SExpression, LispValue, EvaluatorFn
from lirs.types.errors import LirsArityError
from lirs.types.environment import Environment
from lirs.types.macro_table import MacroTable


def quote_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroTable,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(quote x) returns x unevaluated."""
    if len(tail) != 1:
        raise LirsArityError("quote requires exactly 1 argument")
    return tail[0]
