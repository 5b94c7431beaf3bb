"""Core evaluator for the cella interpreter.

Every operator controls its own argument evaluation: the evaluator only
resolves the head of a form and hands the raw argument list to the apply
protocol. Failures travel as ERROR values and are returned as soon as they
are seen.
"""

from __future__ import annotations

from cella.types.environment import Environment
from cella.types.errors import ErrorKind, error, is_error
from cella.types.value import Kind, Value, cons, nil


def evaluate(env: Environment, expr: Value) -> Value:
    """Evaluate `expr` in `env`."""
    kind = expr.kind

    if kind is Kind.SYMBOL:
        binding = env.find(expr)
        if binding is None:
            return error(ErrorKind.UNBOUND_SYMBOL, f"unbound symbol `{expr.name}'", expr.loc)
        return binding.value

    if kind is Kind.CELL:
        head = evaluate(env, expr.first)
        if is_error(head):
            return head
        # Imported here: apply calls back into this module.
        from cella.evaluation.apply import apply
        return apply(env, head, expr.rest, expr)

    # Integer, Nil, True, Error, and callables found inside expansions.
    if kind in (
        Kind.INTEGER,
        Kind.NIL,
        Kind.TRUE,
        Kind.ERROR,
        Kind.FUNCTION,
        Kind.MACRO,
        Kind.NATIVE,
    ):
        return expr

    raise AssertionError(f"unhandled value kind {kind}")


def eval_list(env: Environment, lst: Value) -> Value:
    """Evaluate each element of `lst` in order into a new list.

    Stops at the first ERROR and returns it; earlier side effects stand.
    """
    results: list[Value] = []
    p = lst
    while p.kind is Kind.CELL:
        v = evaluate(env, p.first)
        if is_error(v):
            return v
        results.append(v)
        p = p.rest
    if p.kind is not Kind.NIL:
        return error(ErrorKind.TYPE_ERROR, "argument list is not a proper list", p.loc)

    out = nil(lst.loc)
    for v in reversed(results):
        out = cons(v, out, v.loc)
    return out


def progn(env: Environment, body: Value) -> Value:
    """Evaluate `body` in sequence and return the last value."""
    if body.kind is not Kind.CELL:
        return error(ErrorKind.EMPTY_BODY, "empty body", body.loc)

    result = body
    p = body
    while p.kind is Kind.CELL:
        result = evaluate(env, p.first)
        if is_error(result):
            return result
        p = p.rest
    if p.kind is not Kind.NIL:
        return error(ErrorKind.TYPE_ERROR, "body is not a proper list", p.loc)
    return result
