import pytest

from iku.evaluation.context import BufferContext
from iku.evaluation.evaluator import Evaluator
from iku.interpreter import Interpreter


@pytest.fixture
def ctx():
    return BufferContext()


@pytest.fixture
def evaluator(ctx):
    return Evaluator(ctx)


@pytest.fixture
def interp(ctx):
    return Interpreter(ctx)
