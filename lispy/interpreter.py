from __future__ import annotations

import logging
import sys
import threading
from typing import Callable, TypeVar

from lispy import config
from lispy.types.value import Value
from lispy.types.environment import Environment
from lispy.evaluation.evaluator import evaluate
from lispy.builtin.env_builtin import register
from lispy.reader.parser import read
from lispy.printer import to_str

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Each Lisp call costs roughly ten Python frames; the worker stack must hold
# a full recursion limit's worth of them.
EVAL_STACK_SIZE = 256 * 1024 * 1024


def raise_recursion_limit(limit: int) -> None:
    """Raise the interpreter-wide recursion limit, never lower it."""
    if sys.getrecursionlimit() < limit:
        logger.debug("raising recursion limit to %d", limit)
        sys.setrecursionlimit(limit)


def run_on_eval_stack(fn: Callable[..., T], *args) -> T:
    """Run `fn(*args)` on a worker thread with a stack large enough for deep evaluation."""
    outcome: dict[str, object] = {}

    def target():
        try:
            outcome["value"] = fn(*args)
        except BaseException as exc:
            outcome["error"] = exc

    previous = threading.stack_size(EVAL_STACK_SIZE)
    try:
        worker = threading.Thread(target=target, name="lispy-eval")
        worker.start()
    finally:
        threading.stack_size(previous)
    worker.join()
    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]


class Interpreter:
    """
    Reads and evaluates Lispy input against a root Environment.
    The root is created here, not at import time, and persists across calls.
    """

    def __init__(self, env: Environment | None = None, recursion_limit: int | None = None):
        if env is None:
            env = Environment()
            register(env)
        self.env: Environment = env
        raise_recursion_limit(recursion_limit or config.get_recursion_limit())

    def eval(self, code: str) -> Value:
        """Read `code` as one implicit S-expression and evaluate it.

        Evaluation runs on a dedicated deep stack; runaway recursion still ends
        in RecursionError, raised here in the caller's thread.
        """
        return run_on_eval_stack(evaluate, self.env, read(code))

    def eval_to_str(self, code: str) -> str:
        return to_str(self.eval(code))
