import pytest

from atto.builtin.env_builtin import default_environment
from atto.evaluation.evaluator import evaluate
from atto.reader.parser import parse


@pytest.fixture
def env():
    """Fresh environment with builtins loaded."""
    return default_environment()


@pytest.fixture
def run(env):
    """Parse a document and evaluate its root against the default builtins."""
    def _run(source, **kwargs):
        return evaluate(parse(source), env, **kwargs)
    return _run
