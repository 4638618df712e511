# Core type aliases for the LIRS data model.
# Plain Python values (int, float, str, bool, list) represent both code (forms)
# and runtime values, alongside Symbol, Element and Nil from lirs.types.
#
# Naming guidance:
# - SExpression: syntactic forms produced by the reader and rewritten by macros.
# - LispValue:  values produced by evaluation.
# Both resolve to `Any`; a value and a form share one representation.

from typing import Any, Callable

LispValue = Any
SExpression = LispValue

# Evaluator function type passed to special forms
EvaluatorFn = Callable[..., LispValue]

__version__ = "0.1.0"

# Integer values, literal or computed, are signed 64-bit
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
