"""Universal value representation for cella.

Code and data share one node type: a `Value` tagged with a `Kind`. Only the
payload slots that belong to the kind are populated; the rest stay None.

    - Nil, True    -> no payload
    - Symbol       -> name (interned str)
    - Integer      -> i (fixed-width, see wrap_int)
    - Cell         -> first, rest
    - Function     -> params, body, env
    - Macro        -> params, body, env
    - Native       -> name, fn
    - Error        -> error_kind, message
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Optional

from cella.config import get_int_bits
from cella.types.location import Location, UNKNOWN

if TYPE_CHECKING:
    from cella.types.environment import Environment


class Kind(Enum):
    NIL = "nil"
    TRUE = "true"
    SYMBOL = "symbol"
    INTEGER = "integer"
    CELL = "cell"
    FUNCTION = "function"
    MACRO = "macro"
    NATIVE = "builtin"
    ERROR = "error"

    @property
    def type_name(self) -> str:
        return self.value


class Value:
    __slots__ = (
        "kind",
        "loc",
        "first",
        "rest",
        "name",
        "i",
        "params",
        "body",
        "env",
        "fn",
        "error_kind",
        "message",
    )

    def __init__(self, kind: Kind, loc: Location = UNKNOWN):
        self.kind: Kind = kind
        self.loc: Location = loc
        self.first: Optional[Value] = None
        self.rest: Optional[Value] = None
        self.name: Optional[str] = None
        self.i: Optional[int] = None
        self.params: Optional[Value] = None
        self.body: Optional[Value] = None
        self.env: Optional[Environment] = None
        self.fn: Optional[NativeFn] = None
        self.error_kind = None
        self.message: Optional[str] = None

    # Structural equality ignores locations.
    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, Value) or self.kind is not other.kind:
            return False
        kind = self.kind
        if kind is Kind.NIL or kind is Kind.TRUE:
            return True
        if kind is Kind.SYMBOL:
            return self.name == other.name
        if kind is Kind.INTEGER:
            return self.i == other.i
        if kind is Kind.CELL:
            return self.first == other.first and self.rest == other.rest
        return False

    def __hash__(self) -> int:
        kind = self.kind
        if kind is Kind.NIL or kind is Kind.TRUE:
            return hash(kind)
        if kind is Kind.SYMBOL:
            return hash((kind, self.name))
        if kind is Kind.INTEGER:
            return hash((kind, self.i))
        if kind is Kind.CELL:
            return hash((kind, self.first, self.rest))
        return id(self)

    def __repr__(self):
        from cella.printer import to_string
        return f"<{self.kind.type_name} {to_string(self)}>"

    def __str__(self):
        from cella.printer import to_string
        return to_string(self)


# A native operator receives the caller's environment and its raw,
# unevaluated argument list.
NativeFn = Callable[["Environment", Value], Value]


# --- Constructors ---
def nil(loc: Location = UNKNOWN) -> Value:
    return Value(Kind.NIL, loc)


def true(loc: Location = UNKNOWN) -> Value:
    return Value(Kind.TRUE, loc)


def cons(first: Value, rest: Value, loc: Location = UNKNOWN) -> Value:
    v = Value(Kind.CELL, loc)
    v.first = first
    v.rest = rest
    return v


def symbol(name: str, loc: Location = UNKNOWN) -> Value:
    v = Value(Kind.SYMBOL, loc)
    v.name = sys.intern(name)
    return v


def integer(i: int, loc: Location = UNKNOWN) -> Value:
    v = Value(Kind.INTEGER, loc)
    v.i = i
    return v


def _closure(kind: Kind, params: Value, body: Value, env: Environment, loc: Location) -> Value:
    v = Value(kind, loc)
    v.params = params
    v.body = body
    v.env = env
    return v


def function(params: Value, body: Value, env: Environment, loc: Location = UNKNOWN) -> Value:
    return _closure(Kind.FUNCTION, params, body, env, loc)


def macro(params: Value, body: Value, env: Environment, loc: Location = UNKNOWN) -> Value:
    return _closure(Kind.MACRO, params, body, env, loc)


def native(name: str, fn: NativeFn) -> Value:
    v = Value(Kind.NATIVE)
    v.name = name
    v.fn = fn
    return v


# --- Predicates and list helpers ---
def is_true(v: Value) -> bool:
    return v.kind is Kind.TRUE


def type_name(v: Value) -> str:
    return v.kind.type_name


def is_list(v: Value) -> bool:
    """True if `v` is Nil or a chain of cells terminated by Nil."""
    while v.kind is Kind.CELL:
        v = v.rest
    return v.kind is Kind.NIL


def iter_list(v: Value) -> Iterator[Value]:
    """Yield the `first` of each cell; stops at the first non-cell tail."""
    while v.kind is Kind.CELL:
        yield v.first
        v = v.rest


def list_length(v: Value) -> int:
    return sum(1 for _ in iter_list(v))


def make_list(items: Iterable[Value], loc: Location = UNKNOWN, tail: Optional[Value] = None) -> Value:
    result = tail if tail is not None else nil(loc)
    for item in reversed(list(items)):
        result = cons(item, result, item.loc)
    return result


def wrap_int(i: int) -> int:
    """Wrap `i` into the configured signed two's-complement range."""
    bits = get_int_bits()
    mask = (1 << bits) - 1
    i &= mask
    if i >> (bits - 1):
        i -= 1 << bits
    return i


def int_range() -> tuple[int, int]:
    bits = get_int_bits()
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
