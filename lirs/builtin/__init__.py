"""Primitive registry for the LIRS evaluator.

Maps Symbols to Python functions of (env, args). The evaluator consults this
table after special forms and macros.
"""

from lirs.builtin.env_builtin import Primitive
from lirs.builtin.env_builtin import register as _register_core
from lirs.builtin.chemistry_builtin import register as _register_chemistry
from lirs.types.symbol import Symbol

PRIMITIVES: dict[Symbol, Primitive] = {}
_register_core(PRIMITIVES)
_register_chemistry(PRIMITIVES)
