"""Application engine for cella.

Keyed on the kind of the operator value:
- Native operators receive the caller's environment and the raw arguments.
- Functions receive their arguments evaluated left to right.
- Macros receive their arguments unevaluated; the expansion their body
  produces is evaluated again in the caller's environment.

Functions and macros bind their parameters positionally in a fresh frame
whose outer link is the closure environment captured at definition time.
"""

from __future__ import annotations

from cella.evaluation.evaluator import evaluate, eval_list, progn
from cella.printer import to_string
from cella.types.environment import Environment
from cella.types.errors import ErrorKind, error, is_error, with_article
from cella.types.value import Kind, Value, is_list, iter_list, list_length


def bind_arguments(fn: Value, args: Value, loc) -> Environment | Value:
    """Return a new frame binding `fn`'s params to `args`, or an ARITY_ERROR."""
    expected = list_length(fn.params)
    supplied = list_length(args)
    if expected != supplied:
        return error(
            ErrorKind.ARITY_ERROR,
            f"{fn.kind.type_name} {to_string(fn.params)} expects {expected} "
            f"argument{'' if expected == 1 else 's'}, got {supplied}",
            loc,
        )

    local_env = Environment(outer=fn.env)
    for param, arg in zip(iter_list(fn.params), iter_list(args)):
        local_env.add_variable(param, arg)
    return local_env


def apply_function(env: Environment, fn: Value, args: Value, loc) -> Value:
    values = eval_list(env, args)
    if is_error(values):
        return values
    local_env = bind_arguments(fn, values, loc)
    if isinstance(local_env, Value):
        return local_env
    return progn(local_env, fn.body)


def apply_macro(env: Environment, mac: Value, args: Value, loc) -> Value:
    if not is_list(args):
        return error(ErrorKind.TYPE_ERROR, "argument list is not a proper list", loc)
    local_env = bind_arguments(mac, args, loc)
    if isinstance(local_env, Value):
        return local_env
    expansion = progn(local_env, mac.body)
    if is_error(expansion):
        return expansion
    return evaluate(env, expansion)


def apply(env: Environment, head: Value, args: Value, form: Value) -> Value:
    """Apply the operator value `head` to the raw argument list `args`.

    `form` is the whole call expression, used for error locations.
    """
    kind = head.kind
    if kind is Kind.NATIVE:
        return head.fn(env, args)
    if kind is Kind.FUNCTION:
        return apply_function(env, head, args, form.loc)
    if kind is Kind.MACRO:
        return apply_macro(env, head, args, form.loc)
    return error(
        ErrorKind.NOT_CALLABLE,
        f"`{to_string(form.first)}' is not callable (it is {with_article(head.kind.type_name)})",
        form.loc,
    )
