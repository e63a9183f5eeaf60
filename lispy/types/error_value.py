"""Structured error values for Lispy.

Errors are first-class values: builtins and the calling convention return
them instead of raising, and the evaluator short-circuits a sequence on the
first one it finds. Each Error carries a kind tag plus the typed details of
the failure; text is only produced when the error is printed or compared.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    UNBOUND_SYMBOL = "unbound-symbol"
    WRONG_ARG_COUNT = "wrong-arg-count"
    WRONG_ARG_TYPE = "wrong-arg-type"
    EMPTY_ARGUMENT = "empty-argument"
    DIVISION_BY_ZERO = "division-by-zero"
    MALFORMED_VARIADIC = "malformed-variadic"
    NOT_A_FUNCTION = "not-a-function"
    TOO_MANY_ARGUMENTS = "too-many-arguments"
    INVALID_NUMBER_LITERAL = "invalid-number-literal"


_TEMPLATES: dict[ErrorKind, str] = {
    ErrorKind.UNBOUND_SYMBOL: "Unbound Symbol '{symbol}'",
    ErrorKind.WRONG_ARG_COUNT: (
        "Function '{function}' passed incorrect number of arguments. "
        "Got {got}, Expected {expected}."
    ),
    ErrorKind.WRONG_ARG_TYPE: (
        "Function '{function}' passed incorrect type for argument {index}. "
        "Got {got}, Expected {expected}."
    ),
    ErrorKind.EMPTY_ARGUMENT: "Function '{function}' passed {{}} for argument {index}.",
    ErrorKind.DIVISION_BY_ZERO: "Division By Zero!",
    ErrorKind.MALFORMED_VARIADIC: (
        "Function format invalid. Symbol '&' not followed by exactly one symbol."
    ),
    ErrorKind.NOT_A_FUNCTION: (
        "S-expression does not start with a function. Got {got}, Expected {expected}."
    ),
    ErrorKind.TOO_MANY_ARGUMENTS: (
        "Function passed too many arguments: got {got}, expected {expected}."
    ),
    ErrorKind.INVALID_NUMBER_LITERAL: "invalid number",
}


@dataclass(frozen=True, slots=True, eq=False)
class Error:
    """An error value: a kind tag plus whichever details apply to it."""

    kind: ErrorKind
    function: str | None = None
    symbol: str | None = None
    index: int | None = None
    got: str | int | None = None
    expected: str | int | None = None

    @property
    def message(self) -> str:
        return _TEMPLATES[self.kind].format(
            function=self.function,
            symbol=self.symbol,
            index=self.index,
            got=self.got,
            expected=self.expected,
        )

    # Errors compare by their rendered text
    def __eq__(self, other: object) -> bool:
        return isinstance(other, Error) and self.message == other.message

    def __hash__(self) -> int:
        return hash(self.message)


# --- Constructors used by builtins and the evaluator ---
def unbound_symbol(name: str) -> Error:
    return Error(ErrorKind.UNBOUND_SYMBOL, symbol=name)


def wrong_arg_count(function: str, got: int, expected: int) -> Error:
    return Error(ErrorKind.WRONG_ARG_COUNT, function=function, got=got, expected=expected)


def wrong_arg_type(function: str, index: int, got: str, expected: str) -> Error:
    return Error(ErrorKind.WRONG_ARG_TYPE, function=function, index=index, got=got, expected=expected)


def empty_argument(function: str, index: int) -> Error:
    return Error(ErrorKind.EMPTY_ARGUMENT, function=function, index=index)


def division_by_zero() -> Error:
    return Error(ErrorKind.DIVISION_BY_ZERO)


def malformed_variadic() -> Error:
    return Error(ErrorKind.MALFORMED_VARIADIC)


def not_a_function(got: str) -> Error:
    return Error(ErrorKind.NOT_A_FUNCTION, got=got, expected="Function")


def too_many_arguments(got: int, expected: int) -> Error:
    return Error(ErrorKind.TOO_MANY_ARGUMENTS, got=got, expected=expected)


def invalid_number(literal: str) -> Error:
    return Error(ErrorKind.INVALID_NUMBER_LITERAL, symbol=literal)
