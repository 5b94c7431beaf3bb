from __future__ import annotations


class Location:
    """Source position stamped on every value for diagnostics."""

    __slots__ = ("source", "line", "column")

    def __init__(self, source: str = "<unknown>", line: int = 0, column: int = 0):
        self.source = source
        self.line = line
        self.column = column

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Location)
            and self.source == other.source
            and self.line == other.line
            and self.column == other.column
        )

    def __hash__(self) -> int:
        return hash((self.source, self.line, self.column))

    def __repr__(self):
        return f"Location({self.source!r}, {self.line}, {self.column})"

    def __str__(self):
        return f"{self.source}:{self.line}:{self.column}"


UNKNOWN = Location()
