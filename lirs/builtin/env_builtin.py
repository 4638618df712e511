"""Arithmetic, comparison and list primitives.

Every primitive takes (env, args) where `args` are already evaluated, left to right.

Numeric promotion: + - * return a float when any operand is a float and an int
otherwise; / is true division and always returns a float. Integer results stay in
the signed 64-bit range and float results stay finite, otherwise LirsOverflow.
"""

from __future__ import annotations

import math
import operator
from typing import Any, Callable

from lirs import INT64_MAX, INT64_MIN
from lirs.types.environment import Environment
from lirs.types.errors import (
    LirsArityError,
    LirsDivisionByZero,
    LirsEmptyList,
    LirsOverflow,
    LirsTypeError,
)
from lirs.types.symbol import Symbol

Primitive = Callable[[Environment, list[Any]], Any]


def is_number(x: Any) -> bool:
    # bool is an int subclass but never a number here
    return type(x) in (int, float)


def _check_numbers(name: str, args: list[Any]) -> None:
    for x in args:
        if not is_number(x):
            raise LirsTypeError(f"All arguments to {name} must be numbers, got {x!r}")


def _operands(args: list[Any]) -> list[Any]:
    """All operands as floats when any of them is a float, unchanged otherwise."""
    if any(type(x) is float for x in args):
        return [float(x) for x in args]
    return args


def _checked(name: str, result: int | float) -> int | float:
    # Integers stay in the signed 64-bit range, floats stay finite
    if type(result) is int:
        if not INT64_MIN <= result <= INT64_MAX:
            raise LirsOverflow(f"Integer overflow in {name}: result leaves the signed 64-bit range")
    elif math.isinf(result):
        raise LirsOverflow(f"Float overflow in {name}")
    return result


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[Any]) -> int | float:
    _check_numbers("+", args)
    return _checked("+", sum(_operands(args)))


def sub(env: Environment, args: list[Any]) -> int | float:
    if not args:
        raise LirsArityError("- requires at least 1 argument")
    _check_numbers("-", args)
    first, *rest = _operands(args)
    if not rest:
        return _checked("-", -first)
    for x in rest:
        first -= x
    return _checked("-", first)


def mul(env: Environment, args: list[Any]) -> int | float:
    _check_numbers("*", args)
    result = 1
    for x in _operands(args):
        result *= x
    return _checked("*", result)


def div(env: Environment, args: list[Any]) -> float:
    if not args:
        raise LirsArityError("/ requires at least 1 argument")
    _check_numbers("/", args)
    if len(args) == 1:
        args = [1, *args]
    first, *divisors = [float(x) for x in args]
    for x in divisors:
        if x == 0:
            raise LirsDivisionByZero("Division by zero")
        first /= x
    return _checked("/", first)


# -------------------------------
# Comparison
# -------------------------------
def _comparison(name: str, op: Callable[[Any, Any], bool]) -> Primitive:
    def compare(env: Environment, args: list[Any]) -> bool:
        if len(args) != 2:
            raise LirsArityError(f"{name} requires exactly 2 arguments, got {len(args)}")
        _check_numbers(name, args)
        return op(args[0], args[1])

    compare.__name__ = f"compare_{op.__name__}"
    return compare


# -------------------------------
# List operations
# -------------------------------
def list_builtin(env: Environment, args: list[Any]) -> list[Any]:
    return list(args)


def _single_list(name: str, args: list[Any]) -> list[Any]:
    if len(args) != 1:
        raise LirsArityError(f"{name} requires exactly 1 argument")
    (xs,) = args
    if not isinstance(xs, list):
        raise LirsTypeError(f"{name} requires a list, got {xs!r}")
    if not xs:
        raise LirsEmptyList(f"{name} of an empty list")
    return xs


def car(env: Environment, args: list[Any]) -> Any:
    return _single_list("car", args)[0]


def cdr(env: Environment, args: list[Any]) -> list[Any]:
    return _single_list("cdr", args)[1:]


# -------------------------------
# Registration
# -------------------------------
def register(primitives: dict[Symbol, Primitive]) -> None:
    primitives.update({
        Symbol('+'): add,
        Symbol('-'): sub,
        Symbol('*'): mul,
        Symbol('/'): div,
        Symbol('='): _comparison("=", operator.eq),
        Symbol('<'): _comparison("<", operator.lt),
        Symbol('<='): _comparison("<=", operator.le),
        Symbol('>'): _comparison(">", operator.gt),
        Symbol('>='): _comparison(">=", operator.ge),
        Symbol('list'): list_builtin,
        Symbol('car'): car,
        Symbol('first'): car,
        Symbol('cdr'): cdr,
        Symbol('rest'): cdr,
    })


def register_constants(env: Environment) -> None:
    """Seed the root environment with numeric constants."""
    env.update({
        Symbol('pi'): math.pi,
        Symbol('e'): math.e,
    })
