# Public entry points for the cella evaluator.
#
# Code and data are both `Value` nodes (see cella.types.value). A driver
# creates a root Environment, populates it with `load_builtins`, and calls
# `evaluate(env, expr)` for each form the reader produces. Evaluation never
# raises for language-level failures: it returns a Value of kind ERROR.

from cella.types.environment import Environment
from cella.types.value import Kind, Value
from cella.evaluation.evaluator import evaluate, eval_list, progn
from cella.builtin.env_builtin import load_builtins

__all__ = [
    "Environment",
    "Kind",
    "Value",
    "evaluate",
    "eval_list",
    "progn",
    "load_builtins",
]
