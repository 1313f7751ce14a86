from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Sequence, Tuple

from .photon import Bit

if TYPE_CHECKING:
    from .bb84_protocol import PhotonEvent


def matched(events: Sequence["PhotonEvent"]) -> Tuple["PhotonEvent", ...]:
    return tuple(event for event in events if event.bases_match)


def secret_key(events: Sequence["PhotonEvent"]) -> List[Bit]:
    """Alice's bits on the basis-matched photons, in photon order."""
    return [event.alice_bit for event in matched(events)]


def sifted_bob_key(events: Sequence["PhotonEvent"]) -> List[Bit]:
    return [event.bob_bit for event in matched(events)]


def key_to_string(bits: Iterable[int]) -> str:
    return "".join(str(int(bit)) for bit in bits)
