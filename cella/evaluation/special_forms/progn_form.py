from cella.evaluation.evaluator import progn
from cella.types.environment import Environment
from cella.types.value import Value


def progn_form(env: Environment, args: Value) -> Value:
    return progn(env, args)
