import pytest

from lispy.builtin.env_builtin import register
from lispy.interpreter import Interpreter
from lispy.types.environment import Environment


@pytest.fixture
def env():
    """Fresh root environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def interp(env):
    """Interpreter sharing the `env` fixture as its root."""
    return Interpreter(env)


@pytest.fixture
def run(interp):
    """Evaluate one or more inputs in order and return the last result as text."""
    def _run(*lines):
        result = None
        for line in lines:
            result = interp.eval_to_str(line)
        return result
    return _run
