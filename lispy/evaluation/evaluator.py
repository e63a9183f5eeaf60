"""Core evaluator for the Lispy interpreter.

A direct tree-walking reduction: symbols are looked up, S-expressions are
reduced by evaluating every child and applying the leading function, and
every other value evaluates to itself.
"""

from __future__ import annotations

from lispy.types.error_value import Error, not_a_function
from lispy.types.environment import Environment
from lispy.types.value import Builtin, Lambda, SExpr, Symbol, Value, kind_name
from lispy.evaluation.apply import call


def evaluate(env: Environment, value: Value) -> Value:
    """Evaluate `value` in `env`. Never raises for language-level failures."""
    match value:
        case Symbol(name):
            return env.lookup(name)
        case SExpr():
            return evaluate_sexpr(env, value)
    # Numbers, strings, errors, functions and Q-expressions are inert
    return value


def evaluate_sexpr(env: Environment, sexpr: SExpr) -> Value:
    if not sexpr.cells:
        return sexpr

    cells = [evaluate(env, cell) for cell in sexpr.cells]

    # First error wins, the rest of the sequence is discarded
    for cell in cells:
        if isinstance(cell, Error):
            return cell

    if len(cells) == 1:
        return cells[0]

    head, *args = cells
    if not isinstance(head, (Builtin, Lambda)):
        return not_a_function(kind_name(head))
    return call(env, head, args, evaluate)
