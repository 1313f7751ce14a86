"""BB84 quantum key distribution simulation engine."""

from .photon import Basis, Bit, Polarization, ENCODING_TABLE, encode, decode, measure, native_basis, bloch_vector
from .randomness import RandomSource, NumpyRandomSource, QuantumRandomSource
from .eavesdropper import InterceptResendEavesdropper, Interception, DEFAULT_INTERCEPT_PROB
from .bb84_protocol import BB84Protocol, BB84Parameters, BB84RunResult, PhotonEvent, generate
from .sifting import matched, secret_key, sifted_bob_key, key_to_string
from .analysis import (
	SecurityReport,
	DEFAULT_SECURITY_THRESHOLD,
	analyze,
	efficiency_percent,
	error_rate_percent,
	qber_percent,
	is_secure,
)
from .session import SimulationSession
from .explainer import ExplanationStep, explain_photon

__all__ = [
	"Basis",
	"Bit",
	"Polarization",
	"ENCODING_TABLE",
	"encode",
	"decode",
	"measure",
	"native_basis",
	"bloch_vector",
	"RandomSource",
	"NumpyRandomSource",
	"QuantumRandomSource",
	"InterceptResendEavesdropper",
	"Interception",
	"DEFAULT_INTERCEPT_PROB",
	"BB84Protocol",
	"BB84Parameters",
	"BB84RunResult",
	"PhotonEvent",
	"generate",
	"matched",
	"secret_key",
	"sifted_bob_key",
	"key_to_string",
	"SecurityReport",
	"DEFAULT_SECURITY_THRESHOLD",
	"analyze",
	"efficiency_percent",
	"error_rate_percent",
	"qber_percent",
	"is_secure",
	"SimulationSession",
	"ExplanationStep",
	"explain_photon",
]
