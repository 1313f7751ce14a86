from collections import deque

import pytest

from bb84sim import Basis, Bit, RandomSource


class ScriptedRandomSource(RandomSource):
    def __init__(self, bits=(), bases=(), decisions=()):
        self.bits = deque(Bit(bit) for bit in bits)
        self.bases = deque(Basis(basis) for basis in bases)
        self.decisions = deque(bool(decision) for decision in decisions)
        self.probabilities = []

    def bit(self):
        return self.bits.popleft()

    def basis(self):
        return self.bases.popleft()

    def decision(self, probability=0.5):
        self.probabilities.append(probability)
        return self.decisions.popleft()

    def exhausted(self):
        return not (self.bits or self.bases or self.decisions)


@pytest.fixture
def scripted():
    return ScriptedRandomSource
