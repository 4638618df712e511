"""Formula primitives: material, substitute, combine.

A formula is a plain string such as "CaTiO3". It is order-preserving and never
normalized: elements appear in the order they were given and duplicates are kept.
"""

from __future__ import annotations

from typing import Any

from lirs.builtin.env_builtin import Primitive
from lirs.types.element import Element
from lirs.types.environment import Environment
from lirs.types.errors import (
    LirsArityError,
    LirsElementNotFound,
    LirsOddArityError,
    LirsTypeError,
)
from lirs.types.symbol import Symbol


def material(env: Environment, args: list[Any]) -> str:
    """(material :E1 n1 :E2 n2 ...) => "E1n1E2n2...", a count of 1 is not written."""
    if len(args) % 2:
        raise LirsOddArityError(
            f"material expects element/count pairs, got {len(args)} arguments"
        )
    parts = []
    for i in range(0, len(args), 2):
        element, count = args[i], args[i + 1]
        if not isinstance(element, Element):
            raise LirsTypeError(f"material argument {i + 1} must be an element, got {element!r}")
        if type(count) is not int:
            raise LirsTypeError(f"material argument {i + 2} must be an integer count, got {count!r}")
        if count < 1:
            raise LirsTypeError(f"Count for {element} must be positive, got {count}")
        parts.append(element.tag if count == 1 else f"{element.tag}{count}")
    return "".join(parts)


def substitute(env: Environment, args: list[Any]) -> str:
    """(substitute "Fe2O3" :Fe :Co) => "Co2O3"

    Replaces every literal occurrence of the first element's symbol; digits are untouched.
    """
    if len(args) != 3:
        raise LirsArityError(f"substitute requires 3 arguments, got {len(args)}")
    formula, old, new = args
    if not isinstance(formula, str):
        raise LirsTypeError(f"substitute requires a formula string, got {formula!r}")
    if not isinstance(old, Element) or not isinstance(new, Element):
        raise LirsTypeError("substitute requires two element tags")
    if old.tag not in formula:
        raise LirsElementNotFound(f"Element {old.tag} does not occur in {formula}")
    return formula.replace(old.tag, new.tag)


def combine(env: Environment, args: list[Any]) -> str:
    """(combine "Fe2O3" "Al2O3") => "Fe2O3Al2O3", juxtaposition only."""
    if len(args) < 2:
        raise LirsArityError(f"combine requires at least 2 formulas, got {len(args)}")
    for formula in args:
        if not isinstance(formula, str):
            raise LirsTypeError(f"combine requires formula strings, got {formula!r}")
    return "".join(args)


def register(primitives: dict[Symbol, Primitive]) -> None:
    primitives.update({
        Symbol('material'): material,
        Symbol('substitute'): substitute,
        Symbol('combine'): combine,
    })
