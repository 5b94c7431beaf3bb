"""Runtime environment for cella.

An Environment is one binding frame with an `outer` link; the root frame has
no outer. Each binding lives in its own `Binding` slot, and `find` hands out
that slot itself so that `set` can mutate it in place and every closure
sharing the frame observes the change.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from cella.types.value import Value


class Binding:
    """A mutable value slot for one symbol in one frame."""

    __slots__ = ("symbol", "value")

    def __init__(self, symbol: Value, value: Value):
        self.symbol: Value = symbol
        self.value: Value = value

    def __repr__(self):
        return f"Binding({self.symbol.name}={self.value!r})"


class Environment:
    """Hierarchical mapping from symbol names to binding slots."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Binding] = {}
        self.outer: Environment | None = outer

    def find(self, symbol: Value) -> Optional[Binding]:
        """Return the innermost binding for `symbol`, or None."""
        name = symbol.name
        env: Optional[Environment] = self
        while env is not None:
            binding = env.vars.get(name)
            if binding is not None:
                return binding
            env = env.outer
        return None

    def add_variable(self, symbol: Value, value: Value) -> Value:
        """Bind `symbol` in this frame, shadowing any outer binding."""
        self.vars[symbol.name] = Binding(symbol, value)
        return value

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {b.value}" for k, b in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env = self
            while env is not None:
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
