"""Built-in functions for the Lispy root environment.

This module defines list processing, evaluation, arithmetic, comparison,
conditional, binding and lambda construction, plus `register` which installs
them into an Environment. Every builtin receives the calling environment and
its already-evaluated arguments, and reports bad input by returning an Error
value rather than raising.
"""
from __future__ import annotations

import logging
import operator
from typing import Callable

from lispy.types.error_value import (
    Error,
    division_by_zero,
    empty_argument,
    wrong_arg_count,
    wrong_arg_type,
)
from lispy.types.environment import Environment
from lispy.types.value import (
    Builtin,
    Lambda,
    Number,
    QExpr,
    SExpr,
    Symbol,
    Value,
    equals,
    kind_name,
    wrap_int64,
)
from lispy.evaluation.evaluator import evaluate

logger = logging.getLogger(__name__)

BuiltinFn = Callable[[Environment, list[Value]], Value]

_QEXPR = "Q-Expression"
_NUMBER = "Number"
_SYMBOL = "Symbol"


# -------------------------------
# Precondition helpers
# -------------------------------
def _check_count(name: str, args: list[Value], expected: int) -> Error | None:
    if len(args) != expected:
        return wrong_arg_count(name, len(args), expected)
    return None


def _check_type(name: str, args: list[Value], index: int, cls: type, expected: str) -> Error | None:
    if not isinstance(args[index], cls):
        return wrong_arg_type(name, index, kind_name(args[index]), expected)
    return None


def _check_all(name: str, args: list[Value], cls: type, expected: str) -> Error | None:
    for i in range(len(args)):
        if err := _check_type(name, args, i, cls, expected):
            return err
    return None


def _check_single_qexpr(name: str, args: list[Value], non_empty: bool = False) -> Error | None:
    if err := _check_count(name, args, 1) or _check_type(name, args, 0, QExpr, _QEXPR):
        return err
    if non_empty and not args[0].cells:
        return empty_argument(name, 0)
    return None


# -------------------------------
# List operations
# -------------------------------
def list_builtin(env: Environment, args: list[Value]) -> Value:
    """Wrap the arguments into a Q-expression."""
    return QExpr(tuple(args))


def head(env: Environment, args: list[Value]) -> Value:
    """{a b c} => {a}"""
    if err := _check_single_qexpr("head", args, non_empty=True):
        return err
    return QExpr(args[0].cells[:1])


def tail(env: Environment, args: list[Value]) -> Value:
    """{a b c} => {b c}"""
    if err := _check_single_qexpr("tail", args, non_empty=True):
        return err
    return QExpr(args[0].cells[1:])


def join(env: Environment, args: list[Value]) -> Value:
    """Concatenate every Q-expression argument, in order."""
    if err := _check_all("join", args, QExpr, _QEXPR):
        return err
    return QExpr(tuple(cell for q in args for cell in q.cells))


def eval_builtin(env: Environment, args: list[Value]) -> Value:
    """Evaluate a single Q-expression as if it were an S-expression."""
    if err := _check_single_qexpr("eval", args):
        return err
    return evaluate(env, SExpr(args[0].cells))


# -------------------------------
# Arithmetic
# -------------------------------
def _truncating_div(a: int, b: int) -> int:
    # Integer division rounding toward zero
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _arith(name: str, op: Callable[[int, int], int]) -> BuiltinFn:
    def builtin(env: Environment, args: list[Value]) -> Value:
        if not args:
            return wrong_arg_count(name, 0, 1)
        if err := _check_all(name, args, Number, _NUMBER):
            return err

        result = args[0].value
        if name == "-" and len(args) == 1:
            return Number(wrap_int64(-result))
        for arg in args[1:]:
            if name == "/" and arg.value == 0:
                return division_by_zero()
            result = wrap_int64(op(result, arg.value))
        return Number(result)

    builtin.__name__ = f"builtin_{op.__name__.lstrip('_')}"
    builtin.__doc__ = f"Left fold of '{name}' over Number arguments."
    return builtin


add = _arith("+", operator.add)
sub = _arith("-", operator.sub)
mul = _arith("*", operator.mul)
div = _arith("/", _truncating_div)


# -------------------------------
# Comparison
# -------------------------------
def _truth(flag: bool) -> Number:
    return Number(1 if flag else 0)


def eq(env: Environment, args: list[Value]) -> Value:
    """Structural equality of exactly two values."""
    if err := _check_count("==", args, 2):
        return err
    return _truth(equals(args[0], args[1]))


def ne(env: Environment, args: list[Value]) -> Value:
    """Structural inequality of exactly two values."""
    if err := _check_count("!=", args, 2):
        return err
    return _truth(not equals(args[0], args[1]))


def _ordering(name: str, op: Callable[[int, int], bool]) -> BuiltinFn:
    def builtin(env: Environment, args: list[Value]) -> Value:
        if err := _check_count(name, args, 2) or _check_all(name, args, Number, _NUMBER):
            return err
        return _truth(op(args[0].value, args[1].value))

    builtin.__name__ = f"builtin_{op.__name__}"
    return builtin


gt = _ordering(">", operator.gt)
ge = _ordering(">=", operator.ge)
lt = _ordering("<", operator.lt)
le = _ordering("<=", operator.le)


# -------------------------------
# Conditional
# -------------------------------
def if_builtin(env: Environment, args: list[Value]) -> Value:
    """(if cond {then} {else}): evaluate one branch in the caller's environment."""
    if err := (
        _check_count("if", args, 3)
        or _check_type("if", args, 0, Number, _NUMBER)
        or _check_type("if", args, 1, QExpr, _QEXPR)
        or _check_type("if", args, 2, QExpr, _QEXPR)
    ):
        return err
    branch = args[1] if args[0].value != 0 else args[2]
    return evaluate(env, SExpr(branch.cells))


# -------------------------------
# Binding
# -------------------------------
def _binder(name: str, global_scope: bool) -> BuiltinFn:
    def builtin(env: Environment, args: list[Value]) -> Value:
        if not args:
            return wrong_arg_count(name, 0, 1)
        if err := _check_type(name, args, 0, QExpr, _QEXPR):
            return err
        symbols = args[0].cells
        for sym in symbols:
            if not isinstance(sym, Symbol):
                return wrong_arg_type(name, 0, kind_name(sym), _SYMBOL)
        values = args[1:]
        if len(symbols) != len(values):
            return wrong_arg_count(name, len(values), len(symbols))

        # All checks passed: only now touch the environment
        for sym, value in zip(symbols, values):
            if global_scope:
                env.bind_global(sym.name, value)
            else:
                env.bind_local(sym.name, value)
        logger.debug("%s bound %s", name, ", ".join(s.name for s in symbols))
        return SExpr()

    builtin.__name__ = "builtin_def" if global_scope else "builtin_put"
    return builtin


define = _binder("def", global_scope=True)
put = _binder("=", global_scope=False)


def lambda_builtin(env: Environment, args: list[Value]) -> Value:
    """(\\ {formals} {body}): build a Lambda with a fresh, empty environment."""
    if err := (
        _check_count("\\", args, 2)
        or _check_type("\\", args, 0, QExpr, _QEXPR)
        or _check_type("\\", args, 1, QExpr, _QEXPR)
    ):
        return err
    for formal in args[0].cells:
        if not isinstance(formal, Symbol):
            return wrong_arg_type("\\", 0, kind_name(formal), _SYMBOL)
    return Lambda(args[0], args[1], Environment())


# -------------------------------
# Registration
# -------------------------------
BUILTINS: dict[str, BuiltinFn] = {
    "list": list_builtin,
    "head": head,
    "tail": tail,
    "join": join,
    "eval": eval_builtin,
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "==": eq,
    "!=": ne,
    ">": gt,
    ">=": ge,
    "<": lt,
    "<=": le,
    "if": if_builtin,
    "def": define,
    "=": put,
    "\\": lambda_builtin,
}

ALIASES: dict[str, str] = {
    "plus": "+",
    "sub": "-",
    "times": "*",
    "div": "/",
}


def register(env: Environment) -> None:
    """Install every builtin, and its aliases, into `env`."""
    natives = {tag: Builtin(tag, fn) for tag, fn in BUILTINS.items()}
    env.update(natives)
    env.update({alias: natives[tag] for alias, tag in ALIASES.items()})
    logger.debug("registered %d builtins and %d aliases", len(natives), len(ALIASES))
