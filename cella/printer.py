"""Textual rendering of cella values."""

from __future__ import annotations

from io import StringIO
from typing import TextIO

from cella.types.errors import ErrorKind, error
from cella.types.value import Kind, Value, nil


def _write(buffer: StringIO, v: Value) -> None:
    kind = v.kind
    if kind is Kind.NIL:
        buffer.write("nil")
    elif kind is Kind.TRUE:
        buffer.write("t")
    elif kind is Kind.SYMBOL:
        buffer.write(v.name)
    elif kind is Kind.INTEGER:
        buffer.write(str(v.i))
    elif kind is Kind.CELL:
        buffer.write("(")
        _write(buffer, v.first)
        p = v.rest
        while p.kind is Kind.CELL:
            buffer.write(" ")
            _write(buffer, p.first)
            p = p.rest
        if p.kind is not Kind.NIL:
            buffer.write(" . ")
            _write(buffer, p)
        buffer.write(")")
    elif kind is Kind.FUNCTION:
        buffer.write("#<function>")
    elif kind is Kind.MACRO:
        buffer.write("#<macro>")
    elif kind is Kind.NATIVE:
        buffer.write(f"#<builtin {v.name}>")
    elif kind is Kind.ERROR:
        buffer.write(f"#<error: {v.message}>")
    else:
        raise AssertionError(f"unhandled value kind {kind}")


def to_string(v: Value) -> str:
    with StringIO() as buffer:
        _write(buffer, v)
        return buffer.getvalue()


def print_value(stream: TextIO, v: Value) -> Value:
    """Write `v` to `stream`; Nil on success, an IO_ERROR value otherwise."""
    try:
        stream.write(to_string(v))
    except (OSError, ValueError) as e:
        # ValueError covers closed streams and UnicodeEncodeError.
        return error(ErrorKind.IO_ERROR, f"cannot write output: {e}", v.loc)
    return nil(v.loc)


def write_newline(stream: TextIO, loc) -> Value:
    try:
        stream.write("\n")
    except (OSError, ValueError) as e:
        return error(ErrorKind.IO_ERROR, f"cannot write output: {e}", loc)
    return nil(loc)
