"""
  Expression Reader, Lexer and Parser

Reads the textual rendering produced by str(expr) back into expressions:

    - ( ... )      -> SList
    - anything else between whitespace and parens -> Atom
    - ; comments run to end of line

Numbers are not special: `0` reads as Atom("0").
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from sexplug.errors import SexplugSyntaxError
from sexplug.types.sexp import Atom, Sexp, SList


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<symbol>[^\s();]+)"  # atoms
    r")",
)


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            # only trailing whitespace is left
            break
        pos = m.end()
        if m.group("comment"):
            continue
        for nm in ("lparen", "rparen", "symbol"):
            if m.group(nm):
                yield nm, m.group(nm)
                break


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[Sexp]:
        """Next expression, or None at end of input."""
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            self.advance()
            return Atom(tok_val)

        if tok_type == "rparen":
            raise SexplugSyntaxError("Unexpected ')'")

        # List, read iteratively so deep nesting does not hit the recursion limit
        self.advance()
        stack: list[list[Sexp]] = [[]]
        while True:
            tok_type, tok_val = self.advance()
            if tok_type is None:
                raise SexplugSyntaxError("Unmatched '('")
            if tok_type == "lparen":
                stack.append([])
            elif tok_type == "rparen":
                done = SList(stack.pop())
                if not stack:
                    return done
                stack[-1].append(done)
            else:
                stack[-1].append(Atom(tok_val))

    def parse_all(self) -> Iterator[Sexp]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read_all(source: str) -> list[Sexp]:
    return list(TokenStream(lex(source)).parse_all())


def read(source: str) -> Sexp:
    """Read exactly one expression from `source`."""
    stream = TokenStream(lex(source))
    expr = stream.parse_expr()
    if expr is None:
        raise SexplugSyntaxError("Expected an expression, got end of input")
    if stream.peek()[0] is not None:
        raise SexplugSyntaxError(f"Unexpected input after expression: {stream.peek()[1]!r}")
    return expr
