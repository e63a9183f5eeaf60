"""
  Lispy Reader, Lexer and Parser

- Streaming, lazy tokenizing
- Emits Lispy values directly, no intermediate AST:

    - ( ... )  -> SExpr
    - { ... }  -> QExpr
    - "..."    -> String (escapes decoded)
    - -?[0-9]+ -> Number, or an `invalid number` Error when out of 64-bit range
    - other atoms -> Symbol
    - ; comment to end of line is skipped

Integers are matched before symbols, so `1a` reads as the Number 1 followed
by the Symbol a.

A whole input is read as one implicit S-expression, so `+ 1 2` at the prompt
means `(+ 1 2)`.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional

from lispy.errors import LispySyntaxError
from lispy.types.error_value import invalid_number
from lispy.types.value import Number, QExpr, SExpr, String, Symbol, Value, in_int64_range

logger = logging.getLogger(__name__)


TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<comment>;[^\r\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r"|(?P<number>-?[0-9]+)"  # integers, tried before symbols
    r"|(?P<atom>[A-Za-z0-9_+\-*/\\=<>!&]+)"  # symbols
    r")",
    re.DOTALL,
)

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}

CLOSERS = {"lparen": "rparen", "lbrace": "rbrace"}


def lex(source: str) -> Iterator[tuple[str, str, int]]:
    """Token generator: yields (token_type, token_value, position) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            # Only trailing whitespace can fail to match at this point
            rest = source[pos:]
            if rest.strip():
                bad = pos + len(rest) - len(rest.lstrip())
                if source[bad] == '"':
                    raise LispySyntaxError("Unterminated string", bad)
                raise LispySyntaxError(f"Unexpected character {source[bad]!r}", bad)
            break
        pos = m.end()
        kind = m.lastgroup
        if kind == "comment":
            continue
        yield kind, m.group(kind), m.start(kind)


def unescape(body: str) -> str:
    """Decode the escape sequences of a string literal body."""
    out: list[str] = []
    chars = iter(body)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "")
        out.append(ESCAPES.get(nxt, nxt))
    return "".join(out)


def read_number(token: str) -> Value:
    n = int(token)
    if not in_int64_range(n):
        return invalid_number(token)
    return Number(n)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str, int]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str, int]] = []

    def peek(self) -> tuple[Optional[str], Optional[str], int]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None, -1
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str], int]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None, -1))

    def parse_expr(self) -> Optional[Value]:
        tok_type, tok_val, pos = self.peek()
        if tok_type is None:
            return None

        if tok_type == "number":
            self.advance()
            return read_number(tok_val)

        if tok_type == "atom":
            self.advance()
            return Symbol(tok_val)

        if tok_type == "string":
            self.advance()
            return String(unescape(tok_val[1:-1]))

        if tok_type in CLOSERS:
            self.advance()
            closer = CLOSERS[tok_type]
            items: list[Value] = []
            while True:
                nxt_type, _, _ = self.peek()
                if nxt_type == closer:
                    self.advance()
                    break
                if nxt_type is None:
                    raise LispySyntaxError(f"Unmatched {tok_val!r}", pos)
                if nxt_type in ("rparen", "rbrace"):
                    _, bad, bad_pos = self.peek()
                    raise LispySyntaxError(f"Mismatched {bad!r} for {tok_val!r}", bad_pos)
                items.append(self.parse_expr())
            return SExpr(tuple(items)) if tok_type == "lparen" else QExpr(tuple(items))

        raise LispySyntaxError(f"Unexpected {tok_val!r}", pos)

    def parse_all(self) -> Iterator[Value]:
        while True:
            tok_type, _, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read(source: str) -> SExpr:
    """Read a whole input into a single S-expression of its top-level forms."""
    try:
        return SExpr(tuple(TokenStream(lex(source)).parse_all()))
    except LispySyntaxError as exc:
        logger.debug("reader rejected input: %s", exc)
        raise
