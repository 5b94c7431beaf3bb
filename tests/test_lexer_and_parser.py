import pytest

from cella.reader.parser import TokenStream, lex, read_all
from cella.types.errors import CellaSyntaxError
from cella.types.location import Location
from cella.types.value import Kind, integer, make_list, nil, symbol, true


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("symbol", "a")]),
        ("'a", [("quote", "'"), ("symbol", "a")]),
        ("(a b c)", [("lparen", "("), ("symbol", "a"), ("symbol", "b"), ("symbol", "c"), ("rparen", ")")]),
        (" ; comment\n a b", [("symbol", "a"), ("symbol", "b")]),
        ("(+ 1 -2)", [("lparen", "("), ("symbol", "+"), ("symbol", "1"), ("symbol", "-2"), ("rparen", ")")]),
        ("(a . b)", [("lparen", "("), ("symbol", "a"), ("symbol", "."), ("symbol", "b"), ("rparen", ")")]),
        ("x;trailing", [("symbol", "x")]),
    ],
)
def test_lexer_basic(source, expected):
    assert [(t, v) for t, v, _ in lex(source)] == expected


def test_lexer_locations():
    tokens = list(lex("(a\n  bc)", "f.cl"))
    assert [loc for _, _, loc in tokens] == [
        Location("f.cl", 1, 1),
        Location("f.cl", 1, 2),
        Location("f.cl", 2, 3),
        Location("f.cl", 2, 5),
    ]


def test_lexer_starting_line():
    (_, _, loc), = lex("x", "<stdin>", 12)
    assert loc == Location("<stdin>", 12, 1)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("nil", nil()),
        ("()", nil()),
        ("t", true()),
        ("123", integer(123)),
        ("-45", integer(-45)),
        ("+7", integer(7)),
        ("foo", symbol("foo")),
        ("-", symbol("-")),
        ("1+", symbol("1+")),
        ("'a", make_list([symbol("quote"), symbol("a")])),
        ("(a b c)", make_list([symbol("a"), symbol("b"), symbol("c")])),
        ("(a . b)", make_list([symbol("a")], tail=symbol("b"))),
        ("((a b) (c d))", make_list([make_list([symbol("a"), symbol("b")]), make_list([symbol("c"), symbol("d")])])),
    ],
)
def test_parser(source, expected):
    result = list(read_all(source))
    assert len(result) == 1
    assert result[0] == expected


def test_parse_all_yields_every_form():
    stream = TokenStream(lex("1 (a) 'b"))
    assert [str(v) for v in stream.parse_all()] == ["1", "(a)", "(quote b)"]


def test_empty_source():
    assert list(read_all("  ; nothing here\n")) == []


def test_nodes_carry_locations():
    form = next(read_all("(foo\n  (bar 1))", "src.cl"))
    assert form.loc == Location("src.cl", 1, 1)
    assert form.first.loc == Location("src.cl", 1, 2)
    inner = form.rest.first
    assert inner.kind is Kind.CELL
    assert inner.loc == Location("src.cl", 2, 3)
    assert inner.rest.first.loc == Location("src.cl", 2, 8)


@pytest.mark.parametrize(
    "source,message",
    [
        ("(a b", "unmatched '('"),
        (")", "unmatched ')'"),
        ("(a . b c)", "expected ')' after dotted tail"),
        ("( . a)", "dot without a preceding element"),
        ("'", "quote at end of input"),
        ("(a .", "unmatched '('"),
    ],
)
def test_syntax_errors(source, message):
    with pytest.raises(CellaSyntaxError) as exc:
        list(read_all(source))
    assert exc.value.message == message


def test_syntax_error_reports_location():
    with pytest.raises(CellaSyntaxError) as exc:
        list(read_all("\n  )", "bad.cl"))
    assert exc.value.loc == Location("bad.cl", 2, 3)
    assert str(exc.value) == "bad.cl:2:3: syntax error: unmatched ')'"


def test_integer_literal_out_of_range():
    with pytest.raises(CellaSyntaxError):
        list(read_all("4294967296"))
