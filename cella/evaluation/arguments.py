from __future__ import annotations

from cella.types.errors import ErrorKind, error
from cella.types.value import Kind, Value


def fixed_args(name: str, args: Value, count: int) -> list[Value] | Value:
    """Unpack exactly `count` raw arguments, or return an ARITY_ERROR value."""
    items: list[Value] = []
    p = args
    while p.kind is Kind.CELL:
        items.append(p.first)
        p = p.rest
    if p.kind is not Kind.NIL or len(items) != count:
        return error(
            ErrorKind.ARITY_ERROR,
            f"`{name}' requires exactly {count} argument{'' if count == 1 else 's'}, got {len(items)}",
            args.loc,
        )
    return items
