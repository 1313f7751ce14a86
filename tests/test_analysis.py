import pytest

from bb84sim import Basis, Bit, PhotonEvent, analyze, efficiency_percent, encode, error_rate_percent, is_secure, qber_percent
from bb84sim.analysis import basis_distribution, detection_probability, error_count, eve_induced_mismatch_count, intercepted_count

R, D = Basis.RECTILINEAR, Basis.DIAGONAL


def _event(index, bob_basis=R, wrong=False, intercepted=False, mismatch=False):
    return PhotonEvent(
        index=index,
        alice_bit=Bit.ZERO,
        alice_basis=R,
        bob_basis=bob_basis,
        bob_bit=Bit.ONE if wrong else Bit.ZERO,
        polarization=encode(Bit.ZERO, R),
        eve_intercepted=intercepted,
        eve_introduced_basis_mismatch=mismatch,
    )


def test_empty_input_defaults():
    assert efficiency_percent([]) == 0
    assert qber_percent([]) == 0
    assert error_count([]) == 0
    assert is_secure([])
    assert detection_probability([], 10) == 0.0

    report = analyze(())
    assert report.total_photons == 0
    assert report.key_length == 0
    assert report.is_secure


def test_no_matched_photons_gives_zero_qber():
    events = [_event(0, bob_basis=D, wrong=True)]
    assert qber_percent(events) == 0.0
    assert efficiency_percent(events) == 0.0


def test_efficiency_rounds_half_up():
    events = [_event(0)] + [_event(i, bob_basis=D) for i in range(1, 8)]
    assert efficiency_percent(events) == 13.0


def test_qber_counts_only_matched_errors():
    events = [_event(0, wrong=True), _event(1), _event(2), _event(3), _event(4, bob_basis=D, wrong=True)]
    assert error_count(events) == 1
    assert qber_percent(events) == pytest.approx(25.0)
    assert error_rate_percent(events) == qber_percent(events)


def test_threshold_is_strict():
    events = [_event(i, wrong=i < 11) for i in range(100)]
    assert qber_percent(events) == pytest.approx(11.0)
    assert not is_secure(events)
    assert is_secure(events, threshold=11.5)


def test_eve_counters():
    events = [
        _event(0, intercepted=True, mismatch=True),
        _event(1, intercepted=True),
        _event(2),
    ]
    assert intercepted_count(events) == 2
    assert eve_induced_mismatch_count(events) == 1


def test_basis_distribution():
    events = [_event(0), _event(1, bob_basis=D), _event(2, bob_basis=D)]
    distribution = basis_distribution(events)
    assert distribution["alice"] == {R: 3, D: 0}
    assert distribution["bob"] == {R: 1, D: 2}


def test_analyze_report():
    events = [_event(0, wrong=True, intercepted=True, mismatch=True), _event(1), _event(2, bob_basis=D)]
    report = analyze(events, threshold=20.0)

    assert report.total_photons == 3
    assert report.matched_photons == 2
    assert report.errors == 1
    assert report.efficiency_percent == 67.0
    assert report.qber_percent == pytest.approx(50.0)
    assert not report.is_secure
    assert report.eavesdropping_suspected
    assert report.intercepted_count == 1
    assert report.eve_induced_mismatch_count == 1
