from lirs import EvaluatorFn
from lirs import SExpression, LispValue
from lirs.types.errors import LirsArityError
from lirs.types.nil import Nil, NilType
from lirs.types.environment import Environment
from lirs.types.macro_table import MacroTable


def is_truthy(value: LispValue) -> bool:
    # Only #f and nil are false; 0, "" and () are true
    return not (value is False or isinstance(value, NilType))


def if_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroTable,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) not in (2, 3):
        raise LirsArityError("if requires a condition, a then-expression and an optional else-expression")

    cond = evaluate_fn(tail[0], env, macros)

    if is_truthy(cond):
        return evaluate_fn(tail[1], env, macros)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env, macros)
    else:
        return Nil
