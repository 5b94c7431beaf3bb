from cella.evaluation.arguments import fixed_args
from cella.types.environment import Environment
from cella.types.value import Value


def quote_form(env: Environment, args: Value) -> Value:
    """(quote x) returns x verbatim."""
    unpacked = fixed_args("quote", args, 1)
    if isinstance(unpacked, Value):
        return unpacked
    return unpacked[0]
