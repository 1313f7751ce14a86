from __future__ import annotations

from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Dict, List, Tuple

import numpy as np
from qiskit import QuantumCircuit
from qiskit.quantum_info import Pauli, Statevector

if TYPE_CHECKING:
    from .randomness import RandomSource


class Basis(Enum):
    RECTILINEAR = "rectilinear"
    DIAGONAL = "diagonal"

    @property
    def symbol(self) -> str:
        return "+" if self is Basis.RECTILINEAR else "×"


class Bit(IntEnum):
    ZERO = 0
    ONE = 1


class Polarization(Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    DIAGONAL = "diagonal"
    ANTIDIAGONAL = "antidiagonal"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


ENCODING_TABLE: Dict[Tuple[Bit, Basis], Polarization] = {
    (Bit.ZERO, Basis.RECTILINEAR): Polarization.VERTICAL,
    (Bit.ONE, Basis.RECTILINEAR): Polarization.HORIZONTAL,
    (Bit.ZERO, Basis.DIAGONAL): Polarization.DIAGONAL,
    (Bit.ONE, Basis.DIAGONAL): Polarization.ANTIDIAGONAL,
}

_DECODING_TABLE: Dict[Polarization, Tuple[Bit, Basis]] = {pol: key for key, pol in ENCODING_TABLE.items()}

_SYMBOLS = {
    Polarization.VERTICAL: "|",
    Polarization.HORIZONTAL: "—",
    Polarization.DIAGONAL: "/",
    Polarization.ANTIDIAGONAL: "\\",
}

_MEASUREMENT_AXES = {
    Basis.RECTILINEAR: [(0.0, 0.0, 1.0), (0.0, 0.0, -1.0)],
    Basis.DIAGONAL: [(1.0, 0.0, 0.0), (-1.0, 0.0, 0.0)],
}


def as_bit(value) -> Bit:
    # bool is an int subclass; True must not pass for Bit.ONE
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is not a valid Bit")
    return Bit(value)


def encode(bit: Bit, basis: Basis) -> Polarization:
    return ENCODING_TABLE[(as_bit(bit), Basis(basis))]


def native_basis(polarization: Polarization) -> Basis:
    return _DECODING_TABLE[Polarization(polarization)][1]


def decode(polarization: Polarization) -> Bit:
    """Read a polarization out in its own basis (the lossless collapse)."""
    return _DECODING_TABLE[Polarization(polarization)][0]


def measure(polarization: Polarization, basis: Basis, source: "RandomSource") -> Bit:
    """Collapse ``polarization`` in ``basis``.

    A matching basis returns the encoded bit without touching ``source``;
    any other basis yields a fresh uniform bit from ``source``. Callers
    measure a photon at most once per observer.
    """
    basis = Basis(basis)
    if native_basis(polarization) is basis:
        return decode(polarization)
    return as_bit(source.bit())


def preparation_circuit(bit: Bit, basis: Basis) -> QuantumCircuit:
    circuit = QuantumCircuit(1)
    if as_bit(bit) == Bit.ONE:
        circuit.x(0)
    if Basis(basis) is Basis.DIAGONAL:
        circuit.h(0)
    return circuit


def bloch_vector(polarization: Polarization) -> Tuple[float, float, float]:
    polarization = Polarization(polarization)
    bit, basis = _DECODING_TABLE[polarization]
    state = Statevector(preparation_circuit(bit, basis))
    x, y, z = (float(np.real(state.expectation_value(Pauli(label)))) for label in ("X", "Y", "Z"))
    # strip float noise and negative zeros left by the gates
    return (round(x, 12) + 0.0, round(y, 12) + 0.0, round(z, 12) + 0.0)


def measurement_axis(basis: Basis) -> List[Tuple[float, float, float]]:
    return list(_MEASUREMENT_AXES[Basis(basis)])
