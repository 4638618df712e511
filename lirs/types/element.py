"""Element tags: `:Fe`, `:O`, ... denote chemical element symbols.

An Element is self-evaluating data. It is distinct from a Symbol with the same
text, so `:Fe` never resolves through the environment.
"""

from __future__ import annotations
import sys


class Element:
    __slots__ = ("tag",)

    def __init__(self, tag: str):
        self.tag = sys.intern(tag)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Element) and self.tag == other.tag

    def __hash__(self) -> int:
        return hash(("element", self.tag))

    def __repr__(self):
        return f"Element({self.tag!r})"

    def __str__(self):
        return f":{self.tag}"
