"""Lightweight manual smoke run of the BB84 pipeline."""

import logging

from .bb84_protocol import BB84Parameters, BB84Protocol
from .sifting import key_to_string


def run_demo(num_photons: int = 16, eve: bool = True) -> None:
    params = BB84Parameters(num_photons=num_photons, seed=42, eve_present=eve)
    result = BB84Protocol(params).run()
    report = result.report()
    print(f"Matched bases : {report.matched_photons}/{report.total_photons} ({report.efficiency_percent:.0f}%)")
    print(f"Alice key     : {key_to_string(result.secret_key())}")
    print(f"Bob key       : {key_to_string(result.sifted_bob_key())}")
    print(f"QBER          : {report.qber_percent:.2f}%")
    print(f"Secure        : {report.is_secure}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_demo()
