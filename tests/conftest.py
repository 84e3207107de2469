import os
import sys

import pytest

# Add src directory to path to allow imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))


class ScriptedRandom:
    """
    Stand-in for random.Random that replays fixed values. uniform(lo, hi)
    returns the scripted value as-is, random() does the same.
    """
    def __init__(self, values):
        self.values = list(values)

    def _next(self):
        if not self.values:
            raise AssertionError("ScriptedRandom ran out of values")
        return self.values.pop(0)

    def random(self):
        return self._next()

    def uniform(self, lo, hi):
        return self._next()


@pytest.fixture
def scripted():
    return ScriptedRandom
