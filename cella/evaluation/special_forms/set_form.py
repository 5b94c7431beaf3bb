from cella.evaluation.arguments import fixed_args
from cella.evaluation.evaluator import evaluate
from cella.evaluation.special_forms.quote_forms import quote_form
from cella.types.environment import Environment
from cella.types.errors import ErrorKind, error, is_error, with_article
from cella.types.value import Kind, Value, cons, native, nil

# Head used by setq to quote its target; bound directly so that a user
# rebinding of `quote` does not change setq.
_QUOTE = native("quote", quote_form)


def set_form(env: Environment, args: Value) -> Value:
    """(set sym-expr value)

    `sym-expr` is evaluated and must produce a symbol. An existing binding
    anywhere in the chain is updated in place; otherwise a new binding is
    added to the innermost frame.
    """
    unpacked = fixed_args("set", args, 2)
    if isinstance(unpacked, Value):
        return unpacked
    sym_expr, val_expr = unpacked

    sym = evaluate(env, sym_expr)
    if is_error(sym):
        return sym
    if sym.kind is not Kind.SYMBOL:
        return error(
            ErrorKind.TYPE_ERROR,
            f"set expects a symbol to bind (got {with_article(sym.kind.type_name)})",
            sym_expr.loc,
        )

    binding = env.find(sym)
    value = evaluate(env, val_expr)
    if is_error(value):
        return value

    if binding is None:
        return env.add_variable(sym, value)
    binding.value = value
    return value


def setq_form(env: Environment, args: Value) -> Value:
    """(setq sym value) is (set (quote sym) value)."""
    unpacked = fixed_args("setq", args, 2)
    if isinstance(unpacked, Value):
        return unpacked
    target = unpacked[0]
    quoted = cons(_QUOTE, cons(target, nil(target.loc), target.loc), target.loc)
    return set_form(env, cons(quoted, args.rest, args.loc))
