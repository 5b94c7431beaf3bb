"""
  cella Reader: Lexer and Parser

- Streaming, lazy parsing
- Emits Values built from cons cells, each stamped with its source location:

    - nil, ()        -> Nil
    - t              -> True
    - integers       -> Integer (must fit the configured width)
    - lists          -> chains of Cells ending in Nil
    - dotted lists   -> (a b . c) with a non-Nil tail
    - 'x             -> (quote x)
    - anything else  -> Symbol
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from cella.types.errors import CellaSyntaxError
from cella.types.location import Location
from cella.types.value import Value, cons, int_range, integer, nil, symbol, true


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>')"  # '
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<symbol>[^\s()';]+)"  # atoms: integers and symbols
)

INTEGER_RE = re.compile(r"[+-]?\d+")

Token = tuple[str, str, Location]


def lex(source: str, filename: str = "<input>", line: int = 1) -> Iterator[Token]:
    """Token generator: yields (token_type, token_value, location) tuples.

    `line` is the line number of the first character of `source`.
    """
    pos = 0
    line_start = 0
    n = len(source)

    while pos < n:
        ch = source[pos]
        if ch.isspace():
            if ch == "\n":
                line += 1
                line_start = pos + 1
            pos += 1
            continue

        m = TOKEN_RE.match(source, pos)
        if not m:
            raise CellaSyntaxError(f"unexpected character {ch!r}", Location(filename, line, pos - line_start + 1))
        loc = Location(filename, line, pos - line_start + 1)
        pos = m.end()
        if m.lastgroup == "comment":
            continue
        yield m.lastgroup, m.group(m.lastgroup), loc


class TokenStream:
    def __init__(self, token_iter: Iterator[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> tuple[Optional[str], Optional[str], Optional[Location]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str], Optional[Location]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None, None))

    def parse_atom(self, text: str, loc: Location) -> Value:
        if text == "nil":
            return nil(loc)
        if text == "t":
            return true(loc)
        if INTEGER_RE.fullmatch(text):
            i = int(text)
            lo, hi = int_range()
            if not lo <= i <= hi:
                raise CellaSyntaxError(f"integer literal {text} out of range [{lo}, {hi}]", loc)
            return integer(i, loc)
        return symbol(text, loc)

    def parse_expr(self) -> Optional[Value]:
        """Parse one expression; None at end of input."""
        tok_type, tok_val, loc = self.advance()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            return self.parse_atom(tok_val, loc)

        if tok_type == "quote":
            expr = self.parse_expr()
            if expr is None:
                raise CellaSyntaxError("quote at end of input", loc)
            return cons(symbol("quote", loc), cons(expr, nil(loc), loc), loc)

        if tok_type == "lparen":
            return self.parse_list(loc)

        if tok_type == "rparen":
            raise CellaSyntaxError("unmatched ')'", loc)

        raise CellaSyntaxError(f"unknown token {tok_type} {tok_val}", loc)

    def parse_list(self, open_loc: Location) -> Value:
        items: list[Value] = []
        tail: Optional[Value] = None
        while True:
            tok_type, tok_val, loc = self.peek()
            if tok_type is None:
                raise CellaSyntaxError("unmatched '('", open_loc)
            if tok_type == "rparen":
                self.advance()
                if tail is None:
                    tail = nil(loc)
                break
            if tail is not None:
                raise CellaSyntaxError("expected ')' after dotted tail", loc)
            if tok_type == "symbol" and tok_val == ".":
                self.advance()
                if not items:
                    raise CellaSyntaxError("dot without a preceding element", loc)
                tail = self.parse_expr()
                if tail is None:
                    raise CellaSyntaxError("unmatched '('", open_loc)
                continue
            items.append(self.parse_expr())

        result = tail
        for i, item in enumerate(reversed(items)):
            cell_loc = open_loc if i == len(items) - 1 else item.loc
            result = cons(item, result, cell_loc)
        return result

    def parse_all(self) -> Iterator[Value]:
        while True:
            expr = self.parse_expr()
            if expr is None:
                break
            yield expr


def read_all(source: str, filename: str = "<input>", line: int = 1) -> Iterator[Value]:
    """Lazily read every top-level form in `source`."""
    return TokenStream(lex(source, filename, line)).parse_all()
