"""Application engine for Lispy.

This module centralizes the calling convention:
- Builtins are dispatched directly with the caller's environment.
- Lambdas bind their formals positionally, capture a variadic tail after `&`,
  and are partially applied when given fewer arguments than formals.

A Lambda's stored Environment is never modified. Every call binds into a
duplicate of it; a full application links that duplicate to the calling
environment and evaluates the body there, a partial application returns it
inside a new, more specialised Lambda.
"""

from __future__ import annotations

import logging
from typing import Callable

from lispy.types.error_value import malformed_variadic, too_many_arguments
from lispy.types.environment import Environment
from lispy.types.value import (
    VARIADIC_MARKER,
    Builtin,
    Lambda,
    QExpr,
    SExpr,
    Symbol,
    Value,
)

logger = logging.getLogger(__name__)

EvaluatorFn = Callable[[Environment, Value], Value]


def _is_marker(formal: Value) -> bool:
    return isinstance(formal, Symbol) and formal.name == VARIADIC_MARKER


def call_lambda(
    env: Environment,
    fn: Lambda,
    args: list[Value],
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply a Lambda to already-evaluated arguments.

    Parameters:
    - env: the calling environment, parent of the body's frame on a full call.
    - fn: the Lambda being applied.
    - args: the evaluated argument values.
    - evaluate_fn: evaluator used to reduce the body.

    Returns the body's value, a new Lambda for a partial application, or an
    Error for too many arguments or a malformed `&`.
    """
    formals = list(fn.formals.cells)
    pending = list(args)
    given, total = len(pending), len(formals)
    frame = fn.env.copy()

    while pending:
        if not formals:
            return too_many_arguments(given, total)

        formal = formals.pop(0)
        if _is_marker(formal):
            if len(formals) != 1:
                return malformed_variadic()
            frame.bind_local(formals.pop(0).name, QExpr(tuple(pending)))
            pending = []
            break

        frame.bind_local(formal.name, pending.pop(0))

    # Variadic tail with nothing left to capture
    if formals and _is_marker(formals[0]):
        if len(formals) != 2:
            return malformed_variadic()
        frame.bind_local(formals[1].name, QExpr())
        formals = []

    if formals:
        logger.debug("partial application: %d of %d formals bound", total - len(formals), total)
        return Lambda(QExpr(tuple(formals)), fn.body, frame)

    frame.parent = env
    return evaluate_fn(frame, SExpr(fn.body.cells))


def call(
    env: Environment,
    fn: Builtin | Lambda,
    args: list[Value],
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply either a Builtin or a Lambda.

    - For Builtin, invoke its native implementation with the caller's env.
    - For Lambda, defer to call_lambda (partial application, `&` capture).
    """
    if isinstance(fn, Builtin):
        return fn.fn(env, args)
    return call_lambda(env, fn, args, evaluate_fn)
