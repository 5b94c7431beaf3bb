from cella.types.environment import Environment
from cella.types.errors import ErrorKind, error, with_article
from cella.types.value import Kind, Value, function, is_list, iter_list, macro


def make_function(env: Environment, spec: Value, kind: Kind) -> Value:
    """Build a Function or Macro from `spec`, a (params . body) pair.

    Both halves must be proper lists and every parameter a symbol.
    """
    params, body = spec.first, spec.rest
    if not is_list(params) or not is_list(body):
        return error(ErrorKind.MALFORMED_FUNCTION, "malformed function definition", spec.loc)

    for p in iter_list(params):
        if p.kind is Kind.SYMBOL:
            continue
        return error(
            ErrorKind.NON_SYMBOL_PARAMETER,
            f"parameter name must be a symbol (this is {with_article(p.kind.type_name)})",
            p.loc,
        )

    if kind is Kind.MACRO:
        return macro(params, body, env, spec.loc)
    return function(params, body, env, spec.loc)


def fn_form(env: Environment, args: Value) -> Value:
    """(fn name (params) body...) or (fn (params) body...)"""
    if args.kind is not Kind.CELL:
        return error(ErrorKind.MALFORMED_FUNCTION, "missing list of parameters", args.loc)

    # Anonymous: the whole argument list is the (params . body) pair.
    if args.first.kind is not Kind.SYMBOL:
        return make_function(env, args, Kind.FUNCTION)

    if args.rest.kind is not Kind.CELL:
        return error(ErrorKind.MALFORMED_FUNCTION, "missing list of parameters", args.loc)

    fn = make_function(env, args.rest, Kind.FUNCTION)
    if fn.kind is Kind.ERROR:
        return fn
    return env.add_variable(args.first, fn)


def macro_form(env: Environment, args: Value) -> Value:
    """(macro (params) body...)"""
    if args.kind is not Kind.CELL:
        return error(ErrorKind.MALFORMED_FUNCTION, "missing list of parameters", args.loc)
    return make_function(env, args, Kind.MACRO)
