from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Sequence

from .photon import Basis
from .sifting import matched

if TYPE_CHECKING:
    from .bb84_protocol import PhotonEvent

DEFAULT_SECURITY_THRESHOLD = 11.0


@dataclass(frozen=True)
class SecurityReport:
    total_photons: int
    matched_photons: int
    key_length: int
    errors: int
    efficiency_percent: float
    qber_percent: float
    threshold_percent: float
    is_secure: bool
    intercepted_count: int
    eve_induced_mismatch_count: int

    @property
    def eavesdropping_suspected(self) -> bool:
        return not self.is_secure


def efficiency_percent(events: Sequence["PhotonEvent"]) -> float:
    if not events:
        return 0.0
    # half-up rounding, so 12.5 reads as 13
    return float(math.floor(100 * len(matched(events)) / len(events) + 0.5))


def error_count(events: Sequence["PhotonEvent"]) -> int:
    return sum(1 for event in matched(events) if event.alice_bit != event.bob_bit)


def qber_percent(events: Sequence["PhotonEvent"]) -> float:
    sifted = matched(events)
    if not sifted:
        return 0.0
    errors = sum(1 for event in sifted if event.alice_bit != event.bob_bit)
    return 100.0 * errors / len(sifted)


error_rate_percent = qber_percent


def is_secure(events: Sequence["PhotonEvent"], threshold: float = DEFAULT_SECURITY_THRESHOLD) -> bool:
    return qber_percent(events) < threshold


def intercepted_count(events: Sequence["PhotonEvent"]) -> int:
    return sum(1 for event in events if event.eve_intercepted)


def eve_induced_mismatch_count(events: Sequence["PhotonEvent"]) -> int:
    return sum(1 for event in events if event.eve_introduced_basis_mismatch)


def basis_distribution(events: Sequence["PhotonEvent"]) -> Dict[str, Dict[Basis, int]]:
    distribution = {
        "alice": {basis: 0 for basis in Basis},
        "bob": {basis: 0 for basis in Basis},
    }
    for event in events:
        distribution["alice"][event.alice_basis] += 1
        distribution["bob"][event.bob_basis] += 1
    return distribution


def detection_probability(events: Sequence["PhotonEvent"], sample_size: int) -> float:
    """Chance that publicly comparing ``sample_size`` sifted bits shows an error."""
    sample = min(sample_size, len(matched(events)))
    if sample <= 0:
        return 0.0
    return 1.0 - (1.0 - qber_percent(events) / 100.0) ** sample


def analyze(events: Sequence["PhotonEvent"], threshold: float = DEFAULT_SECURITY_THRESHOLD) -> SecurityReport:
    sifted = matched(events)
    qber = qber_percent(events)
    return SecurityReport(
        total_photons=len(events),
        matched_photons=len(sifted),
        key_length=len(sifted),
        errors=error_count(events),
        efficiency_percent=efficiency_percent(events),
        qber_percent=qber,
        threshold_percent=threshold,
        is_secure=qber < threshold,
        intercepted_count=intercepted_count(events),
        eve_induced_mismatch_count=eve_induced_mismatch_count(events),
    )
