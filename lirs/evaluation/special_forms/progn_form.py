from lirs import EvaluatorFn
from lirs import SExpression, LispValue
from lirs.types.nil import Nil
from lirs.types.environment import Environment
from lirs.types.macro_table import MacroTable


def progn_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroTable,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    result: LispValue = Nil
    for e in tail:
        result = evaluate_fn(e, env, macros)
    return result
