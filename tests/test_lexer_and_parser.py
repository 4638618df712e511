import pytest
from hypothesis import given, strategies as st

from lirs.reader.parser import TokenStream, lex, parse, read_all
from lirs.types.element import Element
from lirs.types.errors import LirsError, LirsLexError, LirsParseError, LirsUnbalancedParens
from lirs.types.nil import Nil
from lirs.types.symbol import Symbol


def _kinds(source):
    return [(t, v) for t, v, _ in lex(source)][:-1]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("symbol", "a")]),
        ("'a", [("quote", "'"), ("symbol", "a")]),
        ("(a b)", [("lparen", "("), ("symbol", "a"), ("symbol", "b"), ("rparen", ")")]),
        ('"hello"', [("string", "hello")]),
        ('"a\\"b\\n"', [("string", 'a"b\n')]),
        ("42", [("integer", "42")]),
        ("-5", [("integer", "-5")]),
        ("-", [("symbol", "-")]),
        ("- 5", [("symbol", "-"), ("integer", "5")]),
        ("-x", [("symbol", "-x")]),
        ("3.14", [("float", "3.14")]),
        ("-0.5", [("float", "-0.5")]),
        (":Fe", [("element", "Fe")]),
        ("#t #f", [("boolean", "#t"), ("boolean", "#f")]),
        ("true false", [("boolean", "#t"), ("boolean", "#f")]),
        (" ; comment\n a b", [("symbol", "a"), ("symbol", "b")]),
        ("(>= 1 2)", [("lparen", "("), ("symbol", ">="), ("integer", "1"), ("integer", "2"), ("rparen", ")")]),
    ],
)
def test_lexer_basic(source, expected):
    assert _kinds(source) == expected


def test_lexer_reports_offsets_and_eof():
    tokens = list(lex("(a  :O)"))
    assert tokens == [
        ("lparen", "(", 0),
        ("symbol", "a", 1),
        ("element", "O", 4),
        ("rparen", ")", 6),
        ("eof", "", 7),
    ]


@pytest.mark.parametrize(
    "source,offset",
    [
        ('"abc', 0),
        ('(a "b', 3),
        ("a @ b", 2),
        ("ab@c", 2),
        ("(x [1])", 3),
    ],
)
def test_lex_errors_carry_offsets(source, offset):
    with pytest.raises(LirsLexError) as info:
        list(lex(source))
    assert info.value.offset == offset
    assert info.value.kind == "LexError"


def test_unterminated_string_message():
    with pytest.raises(LirsLexError, match="Unterminated string"):
        read_all('(material "Fe')


@pytest.mark.parametrize(
    "source, expected",
    [
        ("nil", Nil),
        ("123", 123),
        ("-45", -45),
        ("3.14", 3.14),
        ("1.", 1.0),
        ('"text"', "text"),
        ("#t", True),
        ("false", False),
        (":Ca", Element("Ca")),
        ("'a", [Symbol("quote"), Symbol("a")]),
        ("()", []),
        ("(a (b 1) \"s\")", [Symbol("a"), [Symbol("b"), 1], "s"]),
        ("'(:Fe 2)", [Symbol("quote"), [Element("Fe"), 2]]),
    ],
)
def test_parse_atoms_and_lists(source, expected):
    assert parse(source) == expected


def test_empty_list_is_not_nil():
    assert parse("()") == []
    assert parse("()") is not Nil
    assert parse("nil") is Nil


def test_element_is_not_symbol():
    assert parse(":Fe") != Symbol("Fe")
    assert parse(":Fe") != Symbol(":Fe")


def test_integer_and_float_types():
    assert type(parse("10")) is int
    assert type(parse("10.0")) is float


@pytest.mark.parametrize(
    "source,offset",
    [
        ("(a b", 0),
        ("((a) (b)", 0),
        ("(a))", 3),
        (")", 0),
    ],
)
def test_unbalanced_parens(source, offset):
    with pytest.raises(LirsUnbalancedParens) as info:
        read_all(source)
    assert info.value.offset == offset
    assert info.value.kind == "ParseError::UnbalancedParens"


@pytest.mark.parametrize(
    "source",
    [
        "12abc",
        "1.2.3",
        "9223372036854775808",
        "-9223372036854775809",
        "1_000",
        "1_0.5",
        "1e5",
        "1.5e3",
        "1" + "0" * 400 + ".0",
    ],
)
def test_malformed_numbers(source):
    with pytest.raises(LirsParseError):
        parse(source)


def test_int64_bounds_accepted():
    assert parse("9223372036854775807") == 2**63 - 1
    assert parse("-9223372036854775808") == -(2**63)


@pytest.mark.parametrize("source", ["٣", "(+ 1 ٣)", "１２"])
def test_non_ascii_digits_are_illegal(source):
    with pytest.raises(LirsLexError) as info:
        read_all(source)
    assert info.value.kind == "LexError"


def test_dangling_quote():
    with pytest.raises(LirsParseError, match="Nothing to quote"):
        read_all("(a) '")


def test_read_all_returns_every_form():
    assert read_all("1 (a) ; trailing\n :O") == [1, [Symbol("a")], Element("O")]
    assert read_all("  ; only a comment") == []


def test_parse_requires_exactly_one_form():
    with pytest.raises(LirsParseError):
        parse("1 2")
    with pytest.raises(LirsParseError):
        parse("   ")


def test_token_stream_parse_expr_none_at_end():
    stream = TokenStream(lex("x"))
    assert stream.parse_expr() == Symbol("x")
    assert stream.parse_expr() is None
    assert stream.at_end()


# Convert nested list to LIRS source
def _to_source(expr):
    if isinstance(expr, list):
        return f"({' '.join(_to_source(e) for e in expr)})"
    return str(expr)


_atoms = st.one_of(
    st.integers(min_value=-(2**63), max_value=2**63 - 1),
    st.sampled_from(["a", "foo", "+", "<=", "material", "x1"]).map(Symbol),
    st.sampled_from(["Fe", "O", "Ti", "Ca"]).map(Element),
)
_exprs = st.recursive(_atoms, lambda children: st.lists(children, max_size=4), max_leaves=20)


@given(_exprs)
def test_printed_trees_parse_back(expr):
    assert parse(_to_source(expr)) == expr


@given(st.text(max_size=40))
def test_reader_only_raises_lirs_errors(source):
    try:
        read_all(source)
    except LirsError:
        pass
