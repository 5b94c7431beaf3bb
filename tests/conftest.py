import pytest

from cella.builtin.env_builtin import register
from cella.interpreter import Interpreter
from cella.types.environment import Environment


@pytest.fixture
def env():
    """Fresh root environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def run(env):
    """Evaluate source text in `env`; returns the last value or the first error."""
    interp = Interpreter(env)

    def _run(source: str):
        return interp.eval(source)

    return _run
