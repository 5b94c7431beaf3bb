from cella.evaluation.evaluator import evaluate, progn
from cella.types.environment import Environment
from cella.types.errors import ErrorKind, error, is_error
from cella.types.value import Kind, Value, is_true, nil


def if_form(env: Environment, args: Value) -> Value:
    """(if cond then else...)

    Only `t` selects the then-branch. The else-branch is an implicit progn
    and may be empty, in which case the result is nil.
    """
    if args.kind is not Kind.CELL or args.rest.kind is not Kind.CELL:
        return error(ErrorKind.ARITY_ERROR, "if requires a condition and a then-expression", args.loc)

    cond = evaluate(env, args.first)
    if is_error(cond):
        return cond

    if is_true(cond):
        return evaluate(env, args.rest.first)

    else_body = args.rest.rest
    if else_body.kind is Kind.NIL:
        return nil(args.loc)
    return progn(env, else_body)
