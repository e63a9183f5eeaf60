"""Render Lispy values back to their textual form."""

from __future__ import annotations

from lispy.types.error_value import Error
from lispy.types.value import Builtin, Lambda, Number, QExpr, SExpr, String, Symbol, Value

# Inverse of the reader's escape table
ESCAPES: dict[str, str] = {
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\0": "\\0",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def escape(text: str) -> str:
    return "".join(ESCAPES.get(ch, ch) for ch in text)


def _seq(cells: tuple[Value, ...], open_: str, close: str) -> str:
    return open_ + " ".join(to_str(c) for c in cells) + close


def to_str(value: Value) -> str:
    match value:
        case Number(n):
            return str(n)
        case String(s):
            return f'"{escape(s)}"'
        case Error():
            return f"Error: {value.message}"
        case Symbol(name):
            return name
        case Builtin():
            return "<builtin>"
        case Lambda(formals, body):
            return f"(\\ {to_str(formals)} {to_str(body)})"
        case SExpr(cells):
            return _seq(cells, "(", ")")
        case QExpr(cells):
            return _seq(cells, "{", "}")
    raise TypeError(f"not a Lispy value: {value!r}")
