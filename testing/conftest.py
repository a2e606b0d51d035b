import itertools
from typing import Iterable

import numpy as np
import pytest

from diffeq.stepfunctions import SingleStepMethod


class ScriptedStepFunction(SingleStepMethod):
    """
    Step function for scalar states returning a prescribed sequence of error norms. Used together
    with a controller with atol=1 on a zero state, where the error norm equals |error * h|.
    """
    error_order = 4

    def __init__(self, error_norms: Iterable[float]):
        self.error_norms = iter(error_norms)
        self.step_sizes = []

    def forward(self, model, state, h, **kwargs):
        x, y = state
        self.step_sizes.append(h)
        error_estimate = np.full_like(y, next(self.error_norms) / h)
        return self.make_new_state(x=x + h, y=y.copy()), error_estimate


@pytest.fixture
def scripted_step():
    return ScriptedStepFunction


@pytest.fixture
def always_failing_step():
    return ScriptedStepFunction(itertools.repeat(2.0))


@pytest.fixture
def zero_state():
    return 0.0, np.zeros(1)
