import pytest

from cella.builtin.env_builtin import BUILTINS
from cella.types.errors import ErrorKind
from cella.types.value import Kind, make_list, symbol


# -----------------------------------------------------
# fn / macro
# -----------------------------------------------------

def test_named_fn_binds_and_returns_function(run, env):
    result = run("(fn sq (x) (* x x))")
    assert result.kind is Kind.FUNCTION
    assert env.find(symbol("sq")).value is result
    assert run("(sq 7)").i == 49


def test_anonymous_fn_does_not_bind(run, env):
    result = run("(fn (x) x)")
    assert result.kind is Kind.FUNCTION
    assert env.find(symbol("x")) is None


def test_fn_body_is_implicit_progn(run, capsys):
    assert run("(fn f () (print 1) (print 2) 3) (f)").i == 3
    assert capsys.readouterr().out == "12"


@pytest.mark.parametrize(
    "source",
    [
        "(fn)",
        "(fn f)",
        "(fn 5 1)",
        "(fn (x . y) x)",
        "(fn f (x) . 1)",
        "(macro)",
        "(macro 3)",
    ],
)
def test_malformed_function(run, source):
    result = run(source)
    assert result.kind is Kind.ERROR
    assert result.error_kind is ErrorKind.MALFORMED_FUNCTION


@pytest.mark.parametrize(
    "source,message",
    [
        ("(fn (x 1) x)", "parameter name must be a symbol (this is an integer)"),
        ("(fn f ((a)) 1)", "parameter name must be a symbol (this is a cell)"),
        ("(macro (a t) a)", "parameter name must be a symbol (this is a true)"),
    ],
)
def test_non_symbol_parameter(run, source, message):
    result = run(source)
    assert result.error_kind is ErrorKind.NON_SYMBOL_PARAMETER
    assert result.message == message


def test_failed_named_definition_does_not_bind(run, env):
    run("(fn g (1) 1)")
    assert env.find(symbol("g")) is None


def test_macro_constructs_macro(run):
    assert run("(macro (x) x)").kind is Kind.MACRO


# -----------------------------------------------------
# if
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(if (= 1 1) 10 20)", 10),
        ("(if (= 1 2) 10 20)", 20),
        ("(if nil 1 2 3)", 3),
        ("(if 5 1 2)", 2),
        ("(if (quote a) 1 2)", 2),
        ("(if (quote t) 1 2)", 1),
        ("(if t 1 (car 1))", 1),
    ],
)
def test_if(run, source, expected):
    assert run(source).i == expected


def test_if_without_else_is_nil(run):
    assert run("(if (= 1 2) 10)").kind is Kind.NIL


def test_if_arity(run):
    assert run("(if)").error_kind is ErrorKind.ARITY_ERROR
    assert run("(if t)").error_kind is ErrorKind.ARITY_ERROR


def test_if_propagates_condition_error(run):
    assert run("(if (car 1) 1 2)").error_kind is ErrorKind.TYPE_ERROR


# -----------------------------------------------------
# while
# -----------------------------------------------------

def test_while_counts(run):
    result = run("(setq i 0) (while (< 5 i) (setq i (+ i 1)))")
    assert result.i == 5
    assert run("i").i == 5


def test_while_keeps_last_iteration_value(run):
    source = """
        (setq i 0)
        (while (< 3 i)
          (setq i (+ i 1))
          (* i 10))
    """
    assert run(source).i == 30


def test_while_zero_iterations_is_nil(run):
    assert run("(while nil 1)").kind is Kind.NIL


def test_while_halts_on_body_error(run, capsys):
    result = run("(setq i 0) (while t (print i) (setq i (+ i 1)) (if (= i 3) (car 1) 0))")
    assert result.error_kind is ErrorKind.TYPE_ERROR
    assert capsys.readouterr().out == "012"


def test_while_condition_error(run):
    assert run("(while missing 1)").error_kind is ErrorKind.UNBOUND_SYMBOL


# -----------------------------------------------------
# quote
# -----------------------------------------------------

def test_quote_returns_argument_verbatim(run):
    assert run("(quote (a b))") == make_list([symbol("a"), symbol("b")])
    assert run("'x") == symbol("x")
    assert run("(quote (undefined (stuff)))").kind is Kind.CELL


@pytest.mark.parametrize("source", ["(quote)", "(quote a b)"])
def test_quote_arity(run, source):
    assert run(source).error_kind is ErrorKind.ARITY_ERROR


# -----------------------------------------------------
# set / setq
# -----------------------------------------------------

def test_set_evaluates_its_target(run):
    assert run("(set (quote x) 5) x").i == 5
    assert run("(setq y 'x) (set y 7) x").i == 7
    assert run("y") == symbol("x")


def test_set_requires_symbol(run):
    result = run("(set 1 2)")
    assert result.error_kind is ErrorKind.TYPE_ERROR
    assert "an integer" in result.message


def test_set_value_error_leaves_no_binding(run, env):
    assert run("(set 'x missing)").error_kind is ErrorKind.UNBOUND_SYMBOL
    assert env.find(symbol("x")) is None


@pytest.mark.parametrize("source", ["(set)", "(set 'a)", "(setq a 1 2)", "(setq)"])
def test_set_arity(run, source):
    assert run(source).error_kind is ErrorKind.ARITY_ERROR


def test_setq_returns_value(run):
    assert run("(setq a 1)").i == 1
    assert run("a").i == 1


def test_setq_does_not_depend_on_quote_binding(run):
    run("(setq quote 5)")
    assert run("(setq b 2) b").i == 2


# -----------------------------------------------------
# cons / car / cdr
# -----------------------------------------------------

def test_quote_cons_round_trip(run):
    assert run("(car (cons (quote a) (quote b)))") == symbol("a")
    assert run("(cdr (cons (quote a) (quote b)))") == symbol("b")


def test_cons_builds_lists(run):
    assert str(run("(cons 1 (cons 2 nil))")) == "(1 2)"
    assert str(run("(cons 1 2)")) == "(1 . 2)"


@pytest.mark.parametrize("source", ["(car 1)", "(cdr 'a)", "(car nil)", "(cdr t)"])
def test_car_cdr_require_a_cell(run, source):
    assert run(source).error_kind is ErrorKind.TYPE_ERROR


@pytest.mark.parametrize("source", ["(cons 1)", "(cons 1 2 3)", "(car)", "(cdr 1 2)"])
def test_cell_arity(run, source):
    assert run(source).error_kind is ErrorKind.ARITY_ERROR


def test_cons_propagates_errors(run):
    assert run("(cons missing 1)").error_kind is ErrorKind.UNBOUND_SYMBOL
    assert run("(cons 1 (car 1))").error_kind is ErrorKind.TYPE_ERROR


@pytest.mark.parametrize("name", sorted(BUILTINS))
def test_builtins_have_docstrings(name):
    assert BUILTINS[name].__doc__
