"""Special forms that expose the macro expander to LIRS code.

macroexpand-1: expand a single step at the head position if it is a macro.
macroexpand: fully expand a form (except inside quote), repeatedly expanding
             head positions to a fixpoint and recursively expanding subforms.

Both return the expansion as an S-expression and do not evaluate it:

    (macroexpand '(perovskite :Ca :Ti :O))  ; => (material :Ca 1 :Ti 1 :O 3)
"""

from lirs import SExpression, EvaluatorFn
from lirs.types.errors import LirsArityError
from lirs.types.symbol import Symbol

QUOTE = Symbol("quote")


def _unquoted_argument(name: str, tail: list[SExpression]) -> SExpression:
    if len(tail) != 1:
        raise LirsArityError(f"{name} expects exactly 1 argument")
    form = tail[0]
    # Unwrap a single leading (quote <form>) to match CL usage: (macroexpand '(...))
    if isinstance(form, list) and len(form) == 2 and form[0] == QUOTE:
        form = form[1]
    return form


def macroexpand1_form(tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn):
    """(macroexpand-1 form): expand the head macro once and return the result."""
    return macros.expand_1(_unquoted_argument("macroexpand-1", tail))


def macroexpand_form(tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn):
    """(macroexpand form): fully expand a form and return the expansion."""
    return macros.macro_expand_all(_unquoted_argument("macroexpand", tail))
