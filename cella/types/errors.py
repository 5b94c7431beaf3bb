"""Error values and host exceptions.

Evaluation never raises: failures are `Value`s of kind ERROR, returned to
the caller and checked at every sequencing point. Host exceptions are only
used by the reader and the driver, outside the evaluator.
"""

from __future__ import annotations

from enum import Enum

from cella.types.location import Location, UNKNOWN
from cella.types.value import Kind, Value


class ErrorKind(Enum):
    UNBOUND_SYMBOL = "UnboundSymbol"
    NOT_CALLABLE = "NotCallable"
    MALFORMED_FUNCTION = "MalformedFunction"
    NON_SYMBOL_PARAMETER = "NonSymbolParameter"
    TYPE_ERROR = "TypeError"
    ARITY_ERROR = "ArityError"
    DIVISION_BY_ZERO = "DivisionByZero"
    EMPTY_BODY = "EmptyBody"
    IO_ERROR = "IOError"


def error(kind: ErrorKind, message: str, loc: Location = UNKNOWN) -> Value:
    v = Value(Kind.ERROR, loc)
    v.error_kind = kind
    v.message = message
    return v


def is_error(v: Value) -> bool:
    return v.kind is Kind.ERROR


def with_article(word: str) -> str:
    """'integer' -> 'an integer', 'symbol' -> 'a symbol'."""
    return f"{'an' if word[:1].lower() in 'aeiou' else 'a'} {word}"


def describe(v: Value) -> str:
    """Format an error value the way the driver reports it."""
    return f"{v.loc}: error: {v.message}"


class CellaError(Exception):
    """ Base class for all cella host errors"""
    pass


class CellaSyntaxError(CellaError):
    """ Raised by the reader on malformed source text"""

    def __init__(self, message: str, loc: Location = UNKNOWN):
        super().__init__(f"{loc}: syntax error: {message}")
        self.message = message
        self.loc = loc
