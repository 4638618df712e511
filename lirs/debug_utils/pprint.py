"""Rendering of LIRS values for hosts and the REPL.

`render` gives the display string: strings as themselves, numbers as plain decimal
text, #t/#f, parenthesized lists and nil. With readable=True strings are quoted
and escaped so the output reads back as the same value.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Optional

from lirs import LispValue
from lirs.types.element import Element
from lirs.types.macro_table import MacroTable
from lirs.types.nil import NilType
from lirs.types.symbol import Symbol

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_SYMBOL = "\033[94m"
COLOR_ELEMENT = "\033[92m"
COLOR_STRING = "\033[93m"
COLOR_NUMBER = "\033[96m"
COLOR_SPECIAL_FORM = "\033[90m"
COLOR_MACRO = "\033[95m"
COLOR_ERROR = "\033[91m"

SPECIAL_FORMS = {"define", "if", "quote", "begin", "let", "defmacro", "macroexpand", "macroexpand-1"}

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def render(value: LispValue, readable: bool = False) -> str:
    if value is True:
        return "#t"
    if value is False:
        return "#f"
    if isinstance(value, NilType):
        return "nil"
    if isinstance(value, str):
        if readable:
            return '"' + "".join(_ESCAPES.get(ch, ch) for ch in value) + '"'
        return value
    if isinstance(value, list):
        return "(" + " ".join(render(v, readable) for v in value) + ")"
    if isinstance(value, float):
        return _render_float(value)
    # int, Symbol, Element
    return str(value)


def _render_float(value: float) -> str:
    """Shortest round-tripping digits in plain decimal notation, never an exponent.

    Non-finite values render as inf, -inf and nan; they are not readable literals.
    """
    if math.isinf(value) or math.isnan(value):
        return repr(value)
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
    return text if "." in text else text + ".0"


def colorize(value: LispValue, macro_table: Optional[MacroTable] = None) -> str:
    """ANSI-coloured readable rendering for terminals."""
    if isinstance(value, list):
        return "(" + " ".join(colorize(v, macro_table) for v in value) + ")"
    text = render(value, readable=True)
    if isinstance(value, Symbol):
        if str(value) in SPECIAL_FORMS:
            return f"{COLOR_SPECIAL_FORM}{text}{RESET}"
        if macro_table is not None and macro_table.is_macro(value):
            return f"{COLOR_MACRO}{text}{RESET}"
        return f"{COLOR_SYMBOL}{text}{RESET}"
    if isinstance(value, Element):
        return f"{COLOR_ELEMENT}{text}{RESET}"
    if isinstance(value, str):
        return f"{COLOR_STRING}{text}{RESET}"
    if type(value) in (int, float):
        return f"{COLOR_NUMBER}{text}{RESET}"
    return text


def color_error(message: str) -> str:
    return f"{COLOR_ERROR}{message}{RESET}"
