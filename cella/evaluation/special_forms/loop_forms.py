from cella.evaluation.evaluator import evaluate, progn
from cella.types.environment import Environment
from cella.types.errors import ErrorKind, error, is_error
from cella.types.value import Kind, Value, is_true, nil


def while_form(env: Environment, args: Value) -> Value:
    """(while cond body...)

    Runs the body while `cond` evaluates to t. The result is the value of
    the last iteration, or nil when the body never ran.
    """
    if args.kind is not Kind.CELL:
        return error(ErrorKind.ARITY_ERROR, "while requires a condition", args.loc)

    result = nil(args.loc)
    while True:
        cond = evaluate(env, args.first)
        if is_error(cond):
            return cond
        if not is_true(cond):
            return result
        result = progn(env, args.rest)
        if is_error(result):
            return result
