# pylint: disable=redefined-outer-name,missing-function-docstring,unused-argument,redefined-builtin
"""
Used for pytest fixtures and anything else test setup/teardown related.
"""
import numpy.random
import pytest


class FakeRNG():
    """
    A fake random source that impersonates numpy.random.Generator.
    Returns the scripted values in order, then default forever.

    Attributes:
        values: The values still to be returned.
        default: Value returned once values are exhausted.
        calls: Every (low, high) requested.
    """
    def __init__(self, values=None, default=1):
        self.values = list(values) if values else []
        self.default = default
        self.calls = []

    def integers(self, low, high):
        self.calls.append((low, high))
        if self.values:
            return self.values.pop(0)

        return self.default


class BrokenRNG():
    """
    A random source that always fails.
    """
    def integers(self, low, high):
        raise OSError('entropy unavailable')


@pytest.fixture
def f_rng():
    """ A fake rng that always rolls 1. """
    yield FakeRNG()


@pytest.fixture
def f_seeded_rng():
    """ A real numpy generator with a fixed seed. """
    yield numpy.random.default_rng(42)


@pytest.fixture
def f_broken_rng():
    yield BrokenRNG()


@pytest.fixture
def f_rng_factory():
    """ Build fake rngs with scripted values: f_rng_factory([3, 1, 6], default=2) """
    yield FakeRNG
