"""Special form: let.

(let ((name expr) ...) body...)

Each expr is evaluated in the enclosing scope, then the body runs in a child
Environment holding the new bindings. The child scope is dropped on return.
"""

from lirs import EvaluatorFn, SExpression, LispValue
from lirs.types.errors import LirsArityError, LirsTypeError
from lirs.types.nil import Nil
from lirs.types.symbol import Symbol
from lirs.types.environment import Environment
from lirs.types.macro_table import MacroTable


def let_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroTable,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) < 2:
        raise LirsArityError("let requires bindings and at least one body form")

    bindings, body = tail[0], tail[1:]
    if not isinstance(bindings, list):
        raise LirsTypeError("let bindings must be a list")

    scope = Environment(outer=env)
    for b in bindings:
        if not isinstance(b, list) or len(b) != 2 or not isinstance(b[0], Symbol):
            raise LirsTypeError(f"let binding must be (name value), got {b!r}")
        name, val_expr = b
        scope.define(name, evaluate_fn(val_expr, env, macros))

    result: LispValue = Nil
    for form in body:
        result = evaluate_fn(form, scope, macros)
    return result
