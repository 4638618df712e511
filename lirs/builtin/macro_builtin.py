"""Builtin chemistry macros: fixed stoichiometric templates over element formals.

Each template is LIRS source that is read once per registration. Formals are
plain symbols in the template; expansion swaps them for the argument subtrees.
"""

from __future__ import annotations

from typing import NamedTuple

from lirs.reader.parser import parse
from lirs.types.macro_table import MacroTable


class MacroTemplate(NamedTuple):
    name: str
    formals: tuple[str, ...]
    template: str
    example: str


CHEMISTRY_MACROS: tuple[MacroTemplate, ...] = (
    # --- Oxides, halides, chalcogenides ---
    MacroTemplate("perovskite", ("A", "B", "X"), "(material A 1 B 1 X 3)", "CaTiO3"),
    MacroTemplate("double-perovskite", ("A", "B", "C"), "(material A 2 B 1 C 1 :O 6)", "Sr2FeMoO6"),
    MacroTemplate("anti-perovskite", ("A", "B", "X"), "(material A 3 B 1 X 1)", "Li3OCl"),
    MacroTemplate("ruddlesden-popper", ("A", "B"), "(material A 2 B 1 :O 4)", "Sr2RuO4"),
    MacroTemplate("spinel", ("A", "B"), "(material A 1 B 2 :O 4)", "MgAl2O4"),
    MacroTemplate("binary-oxide", ("M",), "(material M 2 :O 3)", "Fe2O3"),
    MacroTemplate("corundum", ("M",), "(material M 2 :O 3)", "Al2O3"),
    MacroTemplate("rutile", ("M",), "(material M 1 :O 2)", "TiO2"),
    MacroTemplate("zircon", ("M",), "(material M 1 :Si 1 :O 4)", "ZrSiO4"),
    MacroTemplate("ilmenite", ("A", "B"), "(material A 1 B 1 :O 3)", "FeTiO3"),
    MacroTemplate("delafossite", ("A", "B"), "(material A 1 B 1 :O 2)", "CuFeO2"),
    MacroTemplate("pyrochlore", ("A", "B"), "(material A 2 B 2 :O 7)", "Y2Ti2O7"),
    MacroTemplate("garnet", ("A", "B", "C"), "(material A 3 B 2 C 3 :O 12)", "Y3Al2Fe3O12"),
    MacroTemplate("rock-salt", ("A", "B"), "(material A 1 B 1)", "NaCl"),
    MacroTemplate("cesium-chloride", ("A", "B"), "(material A 1 B 1)", "CsCl"),
    MacroTemplate("fluorite", ("A", "X"), "(material A 1 X 2)", "CaF2"),
    MacroTemplate("anti-fluorite", ("A", "X"), "(material A 2 X 1)", "Li2O"),
    MacroTemplate("wurtzite", ("A", "B"), "(material A 1 B 1)", "ZnO"),
    MacroTemplate("zincblende", ("A", "B"), "(material A 1 B 1)", "GaAs"),
    MacroTemplate("chalcopyrite", ("A", "B", "X"), "(material A 1 B 1 X 2)", "CuInSe2"),
    MacroTemplate("kesterite", ("A", "B", "C"), "(material A 2 B 1 C 1 :S 4)", "Cu2ZnSnS4"),
    MacroTemplate("skutterudite", ("M", "X"), "(material M 1 X 3)", "CoSb3"),
    # --- Elemental lattices and intermetallics ---
    MacroTemplate("fcc", ("M",), "(material M 1)", "Cu"),
    MacroTemplate("bcc", ("M",), "(material M 1)", "Fe"),
    MacroTemplate("hcp", ("M",), "(material M 1)", "Mg"),
    MacroTemplate("diamond", ("M",), "(material M 1)", "Si"),
    MacroTemplate("heusler", ("A", "B", "C"), "(material A 2 B 1 C 1)", "Cu2MnAl"),
    MacroTemplate("half-heusler", ("A", "B", "C"), "(material A 1 B 1 C 1)", "TiNiSn"),
    # --- Battery cathodes and electrolytes ---
    MacroTemplate("layered-oxide", ("A", "M"), "(material A 1 M 1 :O 2)", "LiCoO2"),
    MacroTemplate("spinel-cathode", ("A", "M"), "(material A 1 M 2 :O 4)", "LiMn2O4"),
    MacroTemplate("olivine", ("A", "M", "X"), "(material A 1 M 1 X 1 :O 4)", "LiFePO4"),
    MacroTemplate("nasicon", ("A", "M", "X"), "(material A 3 M 2 X 3 :O 12)", "Na3V2P3O12"),
    # --- 2D materials ---
    MacroTemplate("dichalcogenide-2d", ("M", "X"), "(material M 1 X 2)", "MoS2"),
    MacroTemplate("mxene", ("M", "X"), "(material M 2 X 1)", "Ti2C"),
    MacroTemplate("monolayer", ("M",), "(material M 1)", "C"),
)


def register(macro_table: MacroTable) -> None:
    """Register the chemistry catalogue in the provided MacroTable."""
    for entry in CHEMISTRY_MACROS:
        macro_table.define_macro(entry.name, entry.formals, parse(entry.template))
