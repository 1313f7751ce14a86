from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Union

from numpy.random import Generator, default_rng
from qiskit import QuantumCircuit
from qiskit_aer import AerSimulator

from .photon import Basis, Bit


def _check_probability(probability: float) -> float:
    if not 0.0 <= probability <= 1.0:
        raise ValueError("probability must be between 0 and 1")
    return float(probability)


class RandomSource(ABC):
    """Uniform bit and basis draws plus biased yes/no decisions.

    Every random choice in a run goes through one of these, so swapping the
    source is enough to make a run reproducible.
    """

    @abstractmethod
    def bit(self) -> Bit:
        ...

    @abstractmethod
    def basis(self) -> Basis:
        ...

    @abstractmethod
    def decision(self, probability: float = 0.5) -> bool:
        ...


class NumpyRandomSource(RandomSource):
    def __init__(self, seed: Union[int, Generator, None] = None):
        self._rng: Generator = seed if isinstance(seed, Generator) else default_rng(seed)

    def bit(self) -> Bit:
        return Bit(int(self._rng.integers(0, 2)))

    def basis(self) -> Basis:
        return Basis.DIAGONAL if self._rng.random() < 0.5 else Basis.RECTILINEAR

    def decision(self, probability: float = 0.5) -> bool:
        probability = _check_probability(probability)
        return bool(self._rng.random() < probability)


class QuantumRandomSource(RandomSource):
    """Draws from single-qubit measurements on the Aer simulator.

    A qubit rotated by ``ry(2 * asin(sqrt(p)))`` reads 1 with probability
    ``p``; outcomes are sampled ``batch_size`` shots at a time and buffered
    per probability.
    """

    def __init__(self, seed: Optional[int] = None, batch_size: int = 256):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.batch_size = batch_size
        self._backend = AerSimulator()
        # each batch gets its own simulator seed, otherwise a seeded backend replays the same shots
        self._seeds: Optional[Generator] = default_rng(seed) if seed is not None else None
        self._buffers: Dict[float, List[int]] = {}

    def bit(self) -> Bit:
        return Bit(self._draw(0.5))

    def basis(self) -> Basis:
        return Basis.DIAGONAL if self._draw(0.5) else Basis.RECTILINEAR

    def decision(self, probability: float = 0.5) -> bool:
        return self._draw(_check_probability(probability)) == 1

    def _draw(self, probability: float) -> int:
        buffer = self._buffers.setdefault(probability, [])
        if not buffer:
            buffer.extend(self._sample(probability))
        return buffer.pop()

    def _sample(self, probability: float) -> List[int]:
        circuit = QuantumCircuit(1, 1)
        circuit.ry(2 * math.asin(math.sqrt(probability)), 0)
        circuit.measure(0, 0)

        options = {"shots": self.batch_size, "memory": True}
        if self._seeds is not None:
            options["seed_simulator"] = int(self._seeds.integers(0, 2**31 - 1))
        job = self._backend.run(circuit, **options)
        memory = job.result().get_memory()
        return [int(outcome, 2) for outcome in reversed(memory)]
