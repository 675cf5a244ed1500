import logging

import numpy as np
import pytest

from params import ParameterSet
from sampler import RandomSampler


class ScriptedSampler:
    """Returns pre-set values, one per uniform() call, broadcast to `size`."""
    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def uniform(self, low, high, size=None):
        self.calls.append((low, high, size))
        value = self.values.pop(0)
        if size is None:
            return value
        return np.full(size, value, dtype=np.float64)


@pytest.fixture
def params():
    return ParameterSet()


@pytest.fixture
def rng():
    return RandomSampler(seed=1234)


@pytest.fixture
def scripted():
    return ScriptedSampler


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
