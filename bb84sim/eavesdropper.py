from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .photon import Basis, Bit, Polarization, encode, measure
from .randomness import RandomSource

DEFAULT_INTERCEPT_PROB = 0.5


def expected_qber_percent(intercept_prob: float) -> float:
    return intercept_prob * 37.5


@dataclass(frozen=True)
class Interception:
    polarization: Polarization
    intercepted: bool = False
    eve_basis: Optional[Basis] = None
    eve_bit: Optional[Bit] = None
    resend_basis: Optional[Basis] = None
    introduced_basis_mismatch: bool = False


class InterceptResendEavesdropper:
    """Eve measures a photon in a random basis and resends her result.

    The resend basis is drawn independently of the measurement basis. Over
    basis-matched photons this adds ``intercept_prob * 37.5`` percent QBER
    on average.
    """

    def __init__(self, source: RandomSource, intercept_prob: float = DEFAULT_INTERCEPT_PROB):
        if not 0.0 <= intercept_prob <= 1.0:
            raise ValueError("intercept_prob must be between 0 and 1")
        self.source = source
        self.intercept_prob = intercept_prob

    @property
    def expected_qber_percent(self) -> float:
        return expected_qber_percent(self.intercept_prob)

    def intercept(self, polarization: Polarization, alice_basis: Basis) -> Interception:
        if not self.source.decision(self.intercept_prob):
            return Interception(polarization=polarization)

        eve_basis = self.source.basis()
        eve_bit = measure(polarization, eve_basis, self.source)
        resend_basis = self.source.basis()
        return Interception(
            polarization=encode(eve_bit, resend_basis),
            intercepted=True,
            eve_basis=eve_basis,
            eve_bit=eve_bit,
            resend_basis=resend_basis,
            introduced_basis_mismatch=eve_basis is not Basis(alice_basis),
        )
