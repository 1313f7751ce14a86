from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from . import analysis, sifting
from .analysis import DEFAULT_SECURITY_THRESHOLD, SecurityReport
from .eavesdropper import DEFAULT_INTERCEPT_PROB, InterceptResendEavesdropper, Interception
from .photon import Basis, Bit, Polarization, as_bit, encode, measure
from .randomness import NumpyRandomSource, RandomSource

logger = logging.getLogger(__name__)


@dataclass
class BB84Parameters:
    num_photons: int = 16
    seed: Optional[int] = None
    eve_present: bool = False
    eve_intercept_prob: float = DEFAULT_INTERCEPT_PROB
    security_threshold: float = DEFAULT_SECURITY_THRESHOLD

    def __post_init__(self) -> None:
        if self.num_photons < 0:
            raise ValueError("num_photons must be non-negative")
        if not 0.0 <= self.eve_intercept_prob <= 1.0:
            raise ValueError("eve_intercept_prob must be between 0 and 1")
        if not 0.0 <= self.security_threshold <= 100.0:
            raise ValueError("security_threshold must be between 0 and 100")


@dataclass(frozen=True)
class PreparedPhoton:
    index: int
    alice_bit: Bit
    alice_basis: Basis
    bob_basis: Basis
    polarization: Polarization


@dataclass(frozen=True)
class PhotonEvent:
    index: int
    alice_bit: Bit
    alice_basis: Basis
    bob_basis: Basis
    bob_bit: Bit
    polarization: Polarization
    eve_intercepted: bool = False
    eve_introduced_basis_mismatch: bool = False
    eve_basis: Optional[Basis] = None
    eve_bit: Optional[Bit] = None
    eve_resend_basis: Optional[Basis] = None

    def __post_init__(self) -> None:
        # frozen, so normalized members go in through object.__setattr__
        object.__setattr__(self, "alice_bit", as_bit(self.alice_bit))
        object.__setattr__(self, "bob_bit", as_bit(self.bob_bit))
        object.__setattr__(self, "alice_basis", Basis(self.alice_basis))
        object.__setattr__(self, "bob_basis", Basis(self.bob_basis))
        object.__setattr__(self, "polarization", Polarization(self.polarization))
        if self.eve_basis is not None:
            object.__setattr__(self, "eve_basis", Basis(self.eve_basis))
        if self.eve_bit is not None:
            object.__setattr__(self, "eve_bit", as_bit(self.eve_bit))
        if self.eve_resend_basis is not None:
            object.__setattr__(self, "eve_resend_basis", Basis(self.eve_resend_basis))

    @property
    def bases_match(self) -> bool:
        return self.alice_basis is self.bob_basis

    @property
    def is_error(self) -> bool:
        return self.bases_match and self.alice_bit != self.bob_bit


@dataclass(frozen=True)
class BB84RunResult:
    params: BB84Parameters
    events: Tuple[PhotonEvent, ...]

    def matched(self) -> Tuple[PhotonEvent, ...]:
        return sifting.matched(self.events)

    def secret_key(self) -> List[Bit]:
        return sifting.secret_key(self.events)

    def sifted_bob_key(self) -> List[Bit]:
        return sifting.sifted_bob_key(self.events)

    def sifted_key_length(self) -> int:
        return len(self.matched())

    def qber_percent(self) -> float:
        return analysis.qber_percent(self.events)

    def efficiency_percent(self) -> float:
        return analysis.efficiency_percent(self.events)

    def is_secure(self) -> bool:
        return analysis.is_secure(self.events, self.params.security_threshold)

    def detection_probability(self, sample_size: int) -> float:
        return analysis.detection_probability(self.events, sample_size)

    def report(self) -> SecurityReport:
        return analysis.analyze(self.events, self.params.security_threshold)

    def to_dataframe(self) -> "pandas.DataFrame":
        import pandas as pd

        rows: List[Dict[str, Any]] = []
        for event in self.events:
            rows.append(
                {
                    "Pos": event.index,
                    "Alice_Bit": int(event.alice_bit),
                    "Alice_Basis": event.alice_basis.symbol,
                    "Polarization": event.polarization.value,
                    "Bob_Basis": event.bob_basis.symbol,
                    "Bob_Bit": int(event.bob_bit),
                    "Match?": "✅" if event.bases_match else "❌",
                    "Kept": "Kept" if event.bases_match else "Discarded",
                    "Eve": event.eve_basis.symbol if event.eve_intercepted else "-",
                    "Error": "Yes" if event.is_error else "-",
                }
            )
        return pd.DataFrame(rows)


class BB84Protocol:
    def __init__(self, params: BB84Parameters, source: Optional[RandomSource] = None):
        self.params = params
        self.source: RandomSource = source if source is not None else NumpyRandomSource(params.seed)
        self._eve: Optional[InterceptResendEavesdropper] = None
        if params.eve_present:
            self._eve = InterceptResendEavesdropper(self.source, params.eve_intercept_prob)

    def run(self) -> BB84RunResult:
        logger.debug(
            "Running BB84 with %d photons (eve=%s, p=%.2f)",
            self.params.num_photons,
            self.params.eve_present,
            self.params.eve_intercept_prob,
        )
        events: List[PhotonEvent] = []
        for idx in range(self.params.num_photons):
            prepared = self._prepare(idx)
            interception = self._intercept(prepared)
            events.append(self._detect(prepared, interception))

        result = BB84RunResult(params=self.params, events=tuple(events))
        logger.info(
            "BB84 run finished: %d photons, %d sifted, QBER %.2f%%",
            len(result.events),
            result.sifted_key_length(),
            result.qber_percent(),
        )
        return result

    def _prepare(self, idx: int) -> PreparedPhoton:
        alice_bit = self.source.bit()
        alice_basis = self.source.basis()
        bob_basis = self.source.basis()
        return PreparedPhoton(
            index=idx,
            alice_bit=alice_bit,
            alice_basis=alice_basis,
            bob_basis=bob_basis,
            polarization=encode(alice_bit, alice_basis),
        )

    def _intercept(self, prepared: PreparedPhoton) -> Interception:
        if self._eve is None:
            return Interception(polarization=prepared.polarization)
        return self._eve.intercept(prepared.polarization, prepared.alice_basis)

    def _detect(self, prepared: PreparedPhoton, interception: Interception) -> PhotonEvent:
        bob_bit = measure(interception.polarization, prepared.bob_basis, self.source)
        return PhotonEvent(
            index=prepared.index,
            alice_bit=prepared.alice_bit,
            alice_basis=prepared.alice_basis,
            bob_basis=prepared.bob_basis,
            bob_bit=bob_bit,
            polarization=interception.polarization,
            eve_intercepted=interception.intercepted,
            eve_introduced_basis_mismatch=interception.introduced_basis_mismatch,
            eve_basis=interception.eve_basis,
            eve_bit=interception.eve_bit,
            eve_resend_basis=interception.resend_basis,
        )


def generate(
    count: int,
    eve_enabled: bool,
    source: Optional[RandomSource] = None,
    eve_intercept_prob: float = DEFAULT_INTERCEPT_PROB,
    seed: Optional[int] = None,
) -> Tuple[PhotonEvent, ...]:
    params = BB84Parameters(
        num_photons=count,
        seed=seed,
        eve_present=eve_enabled,
        eve_intercept_prob=eve_intercept_prob,
    )
    return BB84Protocol(params, source=source).run().events
