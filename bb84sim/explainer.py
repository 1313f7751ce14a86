"""Plain-language walkthrough of a single finished photon."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .bb84_protocol import PhotonEvent
from .photon import Basis


@dataclass(frozen=True)
class ExplanationStep:
    title: str
    description: str
    detail: str


def _basis_pair_text(basis: Basis) -> str:
    if basis is Basis.RECTILINEAR:
        return "Rectilinear basis uses vertical (|) and horizontal (—) polarizations."
    return "Diagonal basis uses diagonal (/) and anti-diagonal (\\) polarizations."


def explain_photon(event: PhotonEvent) -> List[ExplanationStep]:
    if event.bases_match:
        outcome = "correct" if event.alice_bit == event.bob_bit else "error"
        outcome_detail = f"Since bases match, Bob's measurement is deterministic ({outcome})."
        comparison_detail = "Bases match! This bit will be kept for the secret key."
        extraction = f"This photon contributes bit {int(event.alice_bit)} to the secret key."
    else:
        outcome_detail = "Since bases don't match, Bob's result is random (50/50 chance)."
        comparison_detail = "Bases differ. This bit is discarded."
        extraction = "This photon is discarded and doesn't contribute to the key."

    if event.eve_intercepted:
        eve_detail = "Eve intercepted this photon, which may have introduced errors."
    else:
        eve_detail = "No eavesdropping on this photon."

    return [
        ExplanationStep(
            "Alice Prepares Photon",
            f"Alice randomly chooses bit {int(event.alice_bit)} and basis {event.alice_basis.value}.",
            f"She encodes the bit using the {event.alice_basis.value} basis.",
        ),
        ExplanationStep(
            "Photon Polarization",
            f"The photon reaches Bob in the {event.polarization.value} state.",
            _basis_pair_text(event.alice_basis),
        ),
        ExplanationStep(
            "Bob Chooses Measurement Basis",
            f"Bob randomly selects the {event.bob_basis.value} basis to measure the incoming photon.",
            "This matches Alice's basis!" if event.bases_match else "This differs from Alice's basis.",
        ),
        ExplanationStep(
            "Measurement Outcome",
            f"Bob measures and gets bit {int(event.bob_bit)}.",
            outcome_detail,
        ),
        ExplanationStep(
            "Basis Comparison",
            "Alice and Bob publicly compare their bases (not the bits).",
            comparison_detail,
        ),
        ExplanationStep("Key Extraction", extraction, eve_detail),
    ]
