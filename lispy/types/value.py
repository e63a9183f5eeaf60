"""The Lispy value model.

A closed set of immutable variants. Sequences own their children as tuples,
so a value can appear in many places without any of them being able to
observe the others; binding or passing a value never needs an explicit copy.
The only mutable piece is a Lambda's Environment, which the calling
convention duplicates before extending (see lispy.evaluation.apply).
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Union

from lispy.types.error_value import Error

if TYPE_CHECKING:
    from lispy.types.environment import Environment


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

VARIADIC_MARKER = "&"


def in_int64_range(n: int) -> bool:
    return INT64_MIN <= n <= INT64_MAX


def wrap_int64(n: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    n &= 0xFFFF_FFFF_FFFF_FFFF
    return n - 2**64 if n > INT64_MAX else n


@dataclass(frozen=True, slots=True)
class Number:
    value: int


@dataclass(frozen=True, slots=True)
class String:
    value: str


@dataclass(frozen=True, slots=True)
class Symbol:
    name: str

    def __post_init__(self):
        # Intern to keep lookups and comparisons cheap
        object.__setattr__(self, "name", sys.intern(self.name))


@dataclass(frozen=True, slots=True)
class SExpr:
    cells: tuple[Value, ...] = ()


@dataclass(frozen=True, slots=True)
class QExpr:
    cells: tuple[Value, ...] = ()


@dataclass(frozen=True, slots=True)
class Builtin:
    """A native function, identified by its canonical tag."""

    tag: str
    fn: Callable[[Environment, list[Value]], Value] = field(compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Lambda:
    """A user-defined function: formal symbols, a body, and its own Environment."""

    formals: QExpr
    body: QExpr
    env: Environment = field(compare=False, repr=False)


Function = Union[Builtin, Lambda]
Value = Union[Number, String, Error, Symbol, Builtin, Lambda, SExpr, QExpr]


def kind_name(value: Value) -> str:
    """Human-readable name of a value's variant, as used in error messages."""
    match value:
        case Number():
            return "Number"
        case String():
            return "String"
        case Error():
            return "Error"
        case Symbol():
            return "Symbol"
        case Builtin() | Lambda():
            return "Function"
        case SExpr():
            return "S-Expression"
        case QExpr():
            return "Q-Expression"
    raise TypeError(f"not a Lispy value: {value!r}")


def equals(a: Value, b: Value) -> bool:
    """Structural equality.

    Numbers by value; strings, symbols and errors by text; sequences pairwise;
    builtins by tag; lambdas by formals and body (never by environment).
    Values of different variants are never equal.
    """
    match a, b:
        case Number(x), Number(y):
            return x == y
        case String(x), String(y):
            return x == y
        case Symbol(x), Symbol(y):
            return x == y
        case Error(), Error():
            return a.message == b.message
        case Builtin(), Builtin():
            return a.tag == b.tag
        case Lambda(), Lambda():
            return equals(a.formals, b.formals) and equals(a.body, b.body)
        case (SExpr(xs), SExpr(ys)) | (QExpr(xs), QExpr(ys)):
            return len(xs) == len(ys) and all(equals(x, y) for x, y in zip(xs, ys))
    return False
