import pytest

from lirs.builtin import PRIMITIVES
from lirs.evaluation.evaluator import evaluate
from lirs.reader.parser import parse
from lirs.types.element import Element
from lirs.types.environment import Environment
from lirs.types.errors import (
    LirsEmptyList,
    LirsTypeError,
    LirsUnboundSymbol,
    LirsUnknownOperator,
    LirsArityError,
)
from lirs.types.macro_table import MacroTable
from lirs.types.nil import Nil
from lirs.types.symbol import Symbol


@pytest.fixture
def env():
    return Environment()


@pytest.mark.parametrize(
    "source,expected",
    [
        ("42", 42),
        ("2.5", 2.5),
        ('"CaTiO3"', "CaTiO3"),
        ("#t", True),
        ("#f", False),
        (":Fe", Element("Fe")),
        ("nil", Nil),
        ("()", []),
    ],
)
def test_atoms_evaluate_to_themselves(env, source, expected):
    assert evaluate(parse(source), env) == expected


def test_evaluate_without_macro_table(env):
    assert evaluate(parse("(+ 1 2)"), env) == 3


def test_symbol_lookup_walks_outer_chain(env):
    env.define(Symbol("x"), 7)
    inner = Environment(outer=env)
    assert evaluate(Symbol("x"), inner) == 7


def test_unbound_symbol(env):
    with pytest.raises(LirsUnboundSymbol, match="Unbound symbol: y"):
        evaluate(Symbol("y"), env)


def test_unknown_operator(env):
    with pytest.raises(LirsUnknownOperator):
        evaluate(parse("(frobnicate 1 2)"), env)


@pytest.mark.parametrize("source", ['("Fe" 1)', "(1 2)", "(:Fe 2)", "(nil)", "((list 1) 2)"])
def test_non_operator_heads(env, source):
    with pytest.raises(LirsUnknownOperator):
        evaluate(parse(source), env)


def test_bound_non_operator_head(env):
    env.define(Symbol("x"), 3)
    with pytest.raises(LirsUnknownOperator):
        evaluate(parse("(x 1)"), env)


def test_primitive_names_are_first_class(env):
    assert evaluate(Symbol("+"), env) == Symbol("+")
    env.define(Symbol("op"), Symbol("*"))
    assert evaluate(parse("(op 6 7)"), env) == 42


def test_primitive_name_wins_over_binding(env):
    env.define(Symbol("+"), 99)
    assert evaluate(parse("(+ 1 1)"), env) == 2
    assert evaluate(Symbol("+"), env) == 99


def test_arguments_evaluated_left_to_right(env):
    macros = MacroTable()
    result = evaluate(parse("(list (define a 1) (define a (+ a 1)) a)"), env, macros)
    assert result == [1, 2, 2]


def test_evaluation_does_not_mutate_forms(env):
    form = parse("(list (+ 1 2) (quote (a b)))")
    snapshot = parse("(list (+ 1 2) (quote (a b)))")
    evaluate(form, env)
    assert form == snapshot


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(list 1 2 3)", [1, 2, 3]),
        ("(list)", []),
        ("(list :Fe \"O\" (+ 1 1))", [Element("Fe"), "O", 2]),
        ("(car (list 1 2 3))", 1),
        ("(first (list 1 2 3))", 1),
        ("(cdr (list 1 2 3))", [2, 3]),
        ("(rest (list 1))", []),
        ("(car '((a b) c))", [Symbol("a"), Symbol("b")]),
        ("(car (cdr (list 1 2 3)))", 2),
    ],
)
def test_list_primitives(env, source, expected):
    assert evaluate(parse(source), env) == expected


@pytest.mark.parametrize("source", ["(car (list))", "(cdr ())", "(car '())"])
def test_car_cdr_of_empty_list(env, source):
    with pytest.raises(LirsEmptyList):
        evaluate(parse(source), env)


def test_car_of_non_list(env):
    with pytest.raises(LirsTypeError):
        evaluate(parse('(car "Fe2O3")'), env)
    with pytest.raises(LirsArityError):
        evaluate(parse("(car (list 1) (list 2))"), env)


def test_registry_contents():
    names = {str(s) for s in PRIMITIVES}
    assert {"+", "-", "*", "/", "=", "<", "<=", ">", ">=", "list", "car", "cdr"} <= names
    assert {"material", "substitute", "combine"} <= names


def test_quoted_primitive_name_dispatches(session):
    session.eval("(define op '+)")
    assert session.eval("(op 1 2)") == 3
