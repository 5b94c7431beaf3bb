from __future__ import annotations

import logging
import sys
from typing import Callable

from cella.evaluation.arguments import fixed_args
from cella.evaluation.evaluator import evaluate, eval_list
from cella.evaluation.special_forms import SPECIAL_FORMS
from cella.printer import print_value, write_newline
from cella.types.environment import Environment
from cella.types.errors import ErrorKind, error, is_error, with_article
from cella.types.value import (
    Kind,
    Value,
    cons as make_cell,
    integer,
    iter_list,
    native,
    nil,
    symbol,
    true,
    wrap_int,
)

logger = logging.getLogger(__name__)


# -------------------------------
# Numeric argument handling
# -------------------------------
def _integers(name: str, env: Environment, args: Value) -> list[int] | Value:
    """Evaluate `args` and unwrap them as ints; the first failure is returned."""
    values = eval_list(env, args)
    if is_error(values):
        return values
    result: list[int] = []
    for v in iter_list(values):
        if v.kind is not Kind.INTEGER:
            return error(
                ErrorKind.TYPE_ERROR,
                f"builtin `{name}' takes only numeric arguments (got `{v.kind.type_name}')",
                v.loc,
            )
        result.append(v.i)
    return result


def _truncating_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _arithmetic(name: str, op: Callable[[int, int], int], check_zero: bool = False):
    """Left fold over evaluated integer arguments, seeded by the first one.

    With `check_zero`, a zero operand after the first is a DIVISION_BY_ZERO.
    """

    def builtin(env: Environment, args: Value) -> Value:
        nums = _integers(name, env, args)
        if isinstance(nums, Value):
            return nums
        if not nums:
            return integer(0, args.loc)
        acc = nums[0]
        for n in nums[1:]:
            if check_zero and n == 0:
                return error(ErrorKind.DIVISION_BY_ZERO, "division by zero", args.loc)
            acc = wrap_int(op(acc, n))
        return integer(acc, args.loc)

    builtin.__name__ = f"builtin_{name}"
    builtin.__doc__ = f"({name} a b ...) -> left fold of the integer arguments with {name}"
    return builtin


add = _arithmetic("+", lambda a, b: a + b)
sub = _arithmetic("-", lambda a, b: a - b)
mul = _arithmetic("*", lambda a, b: a * b)
div = _arithmetic("/", _truncating_div, check_zero=True)


# -------------------------------
# Comparison
# -------------------------------
def equals(env: Environment, args: Value) -> Value:
    """(= a b ...) -> t if every argument equals the first"""
    nums = _integers("=", env, args)
    if isinstance(nums, Value):
        return nums
    if any(n != nums[0] for n in nums[1:]):
        return nil(args.loc)
    return true(args.loc)


def less(env: Environment, args: Value) -> Value:
    """(< a b ...) -> t if the first argument is less than every other"""
    # Every argument is compared against the first one, not its neighbour:
    # (< 5 3 4) is t.
    nums = _integers("<", env, args)
    if isinstance(nums, Value):
        return nums
    if any(n >= nums[0] for n in nums[1:]):
        return nil(args.loc)
    return true(args.loc)


# -------------------------------
# Cells
# -------------------------------
def cons(env: Environment, args: Value) -> Value:
    """(cons a b) -> a new cell with first a and rest b"""
    unpacked = fixed_args("cons", args, 2)
    if isinstance(unpacked, Value):
        return unpacked
    head = evaluate(env, unpacked[0])
    if is_error(head):
        return head
    tail = evaluate(env, unpacked[1])
    if is_error(tail):
        return tail
    return make_cell(head, tail, args.loc)


def _cell_arg(name: str, env: Environment, args: Value) -> Value:
    unpacked = fixed_args(name, args, 1)
    if isinstance(unpacked, Value):
        return unpacked
    v = evaluate(env, unpacked[0])
    if is_error(v):
        return v
    if v.kind is not Kind.CELL:
        return error(
            ErrorKind.TYPE_ERROR,
            f"builtin `{name}' expects a cell (got {with_article(v.kind.type_name)})",
            unpacked[0].loc,
        )
    return v


def car(env: Environment, args: Value) -> Value:
    """(car cell) -> first element of the cell"""
    v = _cell_arg("car", env, args)
    return v if is_error(v) else v.first


def cdr(env: Environment, args: Value) -> Value:
    """(cdr cell) -> rest of the cell"""
    v = _cell_arg("cdr", env, args)
    return v if is_error(v) else v.rest


# -------------------------------
# Output
# -------------------------------
def print_builtin(env: Environment, args: Value) -> Value:
    """(print a b ...) -> write each value to stdout with no separator"""
    values = eval_list(env, args)
    if is_error(values):
        return values
    for v in iter_list(values):
        e = print_value(sys.stdout, v)
        if is_error(e):
            return e
    return nil(args.loc)


def println_builtin(env: Environment, args: Value) -> Value:
    """(println a b ...) -> like print, followed by a newline"""
    r = print_builtin(env, args)
    e = write_newline(sys.stdout, args.loc)
    if is_error(r):
        return r
    return e


# -------------------------------
# Registration
# -------------------------------
BUILTINS = {
    "println": println_builtin,
    "print": print_builtin,
    "cons": cons,
    "car": car,
    "cdr": cdr,
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "=": equals,
    "<": less,
}


def register(env: Environment) -> None:
    """Bind every special form and builtin as a native operator in `env`."""
    for table in (SPECIAL_FORMS, BUILTINS):
        for name, fn in table.items():
            env.add_variable(symbol(name), native(name, fn))
    logger.debug("registered %d native operators", len(SPECIAL_FORMS) + len(BUILTINS))


load_builtins = register
