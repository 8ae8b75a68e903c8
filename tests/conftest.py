import pytest

from rpdiceroller.session import RollSession


class ScriptedRng:
    """Deterministic RNG returning preset die faces in order."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return self.values.pop(0)


@pytest.fixture
def scripted():
    def make(*values):
        return RollSession(rng=ScriptedRng(values))

    return make
