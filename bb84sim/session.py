from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from . import analysis, sifting
from .analysis import DEFAULT_SECURITY_THRESHOLD, SecurityReport
from .bb84_protocol import BB84Parameters, BB84Protocol, PhotonEvent
from .eavesdropper import DEFAULT_INTERCEPT_PROB
from .photon import Bit
from .randomness import NumpyRandomSource, RandomSource

logger = logging.getLogger(__name__)


class SimulationSession:
    """Holds the latest run as a read-only snapshot.

    ``generate`` swaps in a whole new tuple of events, ``reset`` swaps in an
    empty one; the events themselves are never modified. Queries made
    before the first run see the empty snapshot.
    """

    def __init__(
        self,
        source: Optional[RandomSource] = None,
        eve_intercept_prob: float = DEFAULT_INTERCEPT_PROB,
        security_threshold: float = DEFAULT_SECURITY_THRESHOLD,
        eve_enabled: bool = False,
    ):
        self.source: RandomSource = source if source is not None else NumpyRandomSource()
        self.eve_intercept_prob = eve_intercept_prob
        self.security_threshold = security_threshold
        self.eve_enabled = eve_enabled
        self._photons: Tuple[PhotonEvent, ...] = ()
        self._simulating = False

    @property
    def photons(self) -> Tuple[PhotonEvent, ...]:
        return self._photons

    @property
    def is_simulating(self) -> bool:
        return self._simulating

    def generate(self, count: int, eve_enabled: Optional[bool] = None) -> Tuple[PhotonEvent, ...]:
        if eve_enabled is not None:
            self.eve_enabled = eve_enabled
        params = BB84Parameters(
            num_photons=count,
            eve_present=self.eve_enabled,
            eve_intercept_prob=self.eve_intercept_prob,
            security_threshold=self.security_threshold,
        )
        self._photons = BB84Protocol(params, source=self.source).run().events
        self._simulating = True
        return self._photons

    def reset(self) -> None:
        logger.debug("Discarding snapshot of %d photons", len(self._photons))
        self._photons = ()
        self._simulating = False

    def matched(self) -> Tuple[PhotonEvent, ...]:
        return sifting.matched(self._photons)

    def secret_key(self) -> List[Bit]:
        return sifting.secret_key(self._photons)

    def error_rate_percent(self) -> float:
        return analysis.error_rate_percent(self._photons)

    def efficiency_percent(self) -> float:
        return analysis.efficiency_percent(self._photons)

    def is_secure(self) -> bool:
        return analysis.is_secure(self._photons, self.security_threshold)

    def report(self) -> SecurityReport:
        return analysis.analyze(self._photons, self.security_threshold)
