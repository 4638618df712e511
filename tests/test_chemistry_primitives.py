import pytest
from hypothesis import assume, given, strategies as st

from lirs.builtin.chemistry_builtin import combine, material, substitute
from lirs.types.element import Element
from lirs.types.environment import Environment
from lirs.types.errors import (
    LirsArityError,
    LirsElementNotFound,
    LirsOddArityError,
    LirsTypeError,
)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(material :Fe 2 :O 3)", "Fe2O3"),
        ("(material :Ca 1 :Ti 1 :O 3)", "CaTiO3"),
        ("(material :O 3 :Fe 2)", "O3Fe2"),
        ("(material :O 1 :O 1)", "OO"),
        ("(material :Fe 1)", "Fe"),
        ("(material :C 60)", "C60"),
        ("(material :Fe (+ 1 1))", "Fe2"),
        ("(material)", ""),
    ],
)
def test_material(session, source, expected):
    assert session.eval(source) == expected


def test_material_odd_arity(session):
    with pytest.raises(LirsOddArityError) as info:
        session.eval("(material :Fe 2 :O)")
    assert info.value.kind == "OddArityError"
    # OddArityError is still an arity error
    with pytest.raises(LirsArityError):
        session.eval("(material :Fe)")


@pytest.mark.parametrize(
    "source",
    [
        "(material 2 :Fe)",
        '(material "Fe" 2)',
        "(material :Fe 2.0)",
        "(material :Fe #t)",
        "(material :Fe 0)",
        "(material :Fe -1)",
        "(material :Fe :O)",
    ],
)
def test_material_type_errors(session, source):
    with pytest.raises(LirsTypeError):
        session.eval(source)


@pytest.mark.parametrize(
    "source,expected",
    [
        ('(substitute "Fe2O3" :Fe :Co)', "Co2O3"),
        ('(substitute "CaTiO3" :Ti :Zr)', "CaZrO3"),
        ('(substitute "Fe2O3Fe" :Fe :Ni)', "Ni2O3Ni"),
        ('(substitute (material :Ba 1 :Ti 1 :O 3) :Ba :Sr)', "SrTiO3"),
    ],
)
def test_substitute(session, source, expected):
    assert session.eval(source) == expected


def test_substitute_absent_element(session):
    with pytest.raises(LirsElementNotFound):
        session.eval('(substitute "Fe2O3" :Cu :Co)')


@pytest.mark.parametrize(
    "source,error",
    [
        ('(substitute "Fe2O3" :Fe)', LirsArityError),
        ('(substitute "Fe2O3" :Fe :Co :Ni)', LirsArityError),
        ("(substitute 12 :Fe :Co)", LirsTypeError),
        ('(substitute "Fe2O3" "Fe" :Co)', LirsTypeError),
        ('(substitute "Fe2O3" :Fe 3)', LirsTypeError),
    ],
)
def test_substitute_bad_arguments(session, source, error):
    with pytest.raises(error):
        session.eval(source)


@pytest.mark.parametrize(
    "source,expected",
    [
        ('(combine "Fe2O3" "Al2O3")', "Fe2O3Al2O3"),
        ('(combine (rutile :Ti) (rutile :Sn))', "TiO2SnO2"),
        ('(combine "Li" "Co" "O2")', "LiCoO2"),
        ('(substitute (combine "Fe2O3" "Al2O3") :Al :Ga)', "Fe2O3Ga2O3"),
    ],
)
def test_combine(session, source, expected):
    assert session.eval(source) == expected


@pytest.mark.parametrize(
    "source,error",
    [
        ('(combine "Fe2O3")', LirsArityError),
        ("(combine)", LirsArityError),
        ('(combine "Fe2O3" :O)', LirsTypeError),
        ('(combine "Fe2O3" 3)', LirsTypeError),
    ],
)
def test_combine_bad_arguments(session, source, error):
    with pytest.raises(error):
        session.eval(source)


def test_primitives_callable_directly():
    env = Environment()
    assert material(env, [Element("Li"), 2, Element("O"), 1]) == "Li2O"
    assert substitute(env, ["Li2O", Element("Li"), Element("Na")]) == "Na2O"
    assert combine(env, ["Li2O", "CoO"]) == "Li2OCoO"


_TAGS = ["H", "Li", "Be", "B", "C", "N", "O", "F", "Na", "Mg", "Al", "Si", "P", "S",
         "Cl", "K", "Ca", "Ti", "Fe", "Co", "Ni", "Cu", "Zn", "Sr", "Ba", "Y", "Zr"]


@given(
    pairs=st.lists(st.tuples(st.sampled_from(_TAGS), st.integers(min_value=1, max_value=20)),
                   min_size=1, max_size=5),
    new=st.sampled_from(_TAGS),
)
def test_substitution_round_trip(pairs, new):
    env = Environment()
    args = []
    for tag, count in pairs:
        args.extend([Element(tag), count])
    formula = material(env, args)
    old = pairs[0][0]
    # Round trip holds only when neither symbol collides with any other text in the formula
    assume(new != old and new not in formula)
    assume(formula.count(old) == sum(1 for tag, _ in pairs if tag == old))
    assume(all(old not in tag for tag, _ in pairs if tag != old))
    swapped = substitute(env, [formula, Element(old), Element(new)])
    assert substitute(env, [swapped, Element(new), Element(old)]) == formula
