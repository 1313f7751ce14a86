from bb84sim import Basis, Bit, PhotonEvent, encode, key_to_string, matched, secret_key, sifted_bob_key

R, D = Basis.RECTILINEAR, Basis.DIAGONAL


def _event(index, alice_bit, alice_basis, bob_basis, bob_bit):
    return PhotonEvent(
        index=index,
        alice_bit=Bit(alice_bit),
        alice_basis=alice_basis,
        bob_basis=bob_basis,
        bob_bit=Bit(bob_bit),
        polarization=encode(alice_bit, alice_basis),
    )


EVENTS = (
    _event(0, 1, R, R, 1),
    _event(1, 0, R, D, 1),
    _event(2, 0, D, D, 1),
    _event(3, 1, D, R, 0),
    _event(4, 1, D, D, 1),
)


def test_matched_keeps_order():
    assert [event.index for event in matched(EVENTS)] == [0, 2, 4]


def test_secret_key_uses_alice_bits():
    assert secret_key(EVENTS) == [Bit.ONE, Bit.ZERO, Bit.ONE]
    assert sifted_bob_key(EVENTS) == [Bit.ONE, Bit.ONE, Bit.ONE]


def test_sifting_is_idempotent():
    assert secret_key(EVENTS) == secret_key(EVENTS)
    assert matched(EVENTS) == matched(EVENTS)


def test_empty_sequence():
    assert matched(()) == ()
    assert secret_key([]) == []


def test_key_to_string():
    assert key_to_string(secret_key(EVENTS)) == "101"
    assert key_to_string([]) == ""
