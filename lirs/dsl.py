"""Declarative builders that emit LIRS source.

    >>> MaterialSpec("perovskite").with_element("Ba").with_element("Ti").with_element("O").to_lirs()
    '(perovskite :Ba :Ti :O)'

`DiscoveryWorkflow` strings steps together into one program whose value is the
final formula:

    (begin
      (define result (perovskite :Ba :Ti :O))
      (define result (substitute result :Ba :Sr))
      result)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from lirs.builtin.macro_builtin import CHEMISTRY_MACROS
from lirs.debug_utils.pprint import render

_MACRO_ARITY: Dict[str, int] = {m.name: len(m.formals) for m in CHEMISTRY_MACROS}


@dataclass
class MaterialSpec:
    structure_type: str
    elements: List[str] = field(default_factory=list)
    properties: Dict[str, float] = field(default_factory=dict)
    constraints: List[str] = field(default_factory=list)

    def with_element(self, element: str) -> MaterialSpec:
        self.elements.append(element.lstrip(":"))
        return self

    def with_property(self, name: str, value: float) -> MaterialSpec:
        self.properties[name] = value
        return self

    def with_constraint(self, constraint: str) -> MaterialSpec:
        self.constraints.append(constraint)
        return self

    def to_lirs(self) -> str:
        """Macro call when the structure type is a catalogue macro with enough elements."""
        arity = _MACRO_ARITY.get(self.structure_type)
        if arity is not None and len(self.elements) >= arity:
            tags = " ".join(f":{el}" for el in self.elements[:arity])
            return f"({self.structure_type} {tags})"
        # Generic material
        pairs = "".join(f" :{el} 1" for el in self.elements)
        return f"(material{pairs})"


class DiscoveryWorkflow:
    def __init__(self):
        self.steps: List[str] = []

    def generate_candidates(self, spec: MaterialSpec) -> DiscoveryWorkflow:
        self.steps.append(spec.to_lirs())
        return self

    def substitute_element(self, old: str, new: str) -> DiscoveryWorkflow:
        self.steps.append(f"(substitute result :{old.lstrip(':')} :{new.lstrip(':')})")
        return self

    def combine_with(self, other_material: str) -> DiscoveryWorkflow:
        self.steps.append(f"(combine result {render(other_material, readable=True)})")
        return self

    def to_lirs(self) -> str:
        lines = ["(begin"]
        lines.extend(f"  (define result {step})" for step in self.steps)
        lines.append("  result)")
        return "\n".join(lines)
