from planetrack.tracking.presence_gate import PresenceGate


def test_gate_rejects_count_equal_to_minimum():
    assert not PresenceGate().passes(8)


def test_gate_accepts_count_above_minimum():
    assert PresenceGate().passes(9)


def test_gate_rejects_zero():
    assert not PresenceGate().passes(0)


def test_gate_remembers_last_count():
    gate = PresenceGate(min_matches=3)
    gate.passes(5)
    assert gate.last_count == 5
    assert not gate.passes(3)
    assert gate.last_count == 3
