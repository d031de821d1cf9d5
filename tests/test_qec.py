import math
import numpy as np
import pytest

from statesim.errors import InvalidQubitIndex
from statesim.qec import RepetitionCode, ErrorKind, majority_minority
from statesim.rng import RandomSource

GHZ = np.zeros(8, dtype=complex); GHZ[0] = GHZ[7] = 1 / math.sqrt(2)

def test_encoders_are_identical():
    a = RepetitionCode(); a.encode_bit_flip()
    b = RepetitionCode(); b.encode_phase_flip()
    assert np.allclose(a.state, GHZ)
    assert np.array_equal(a.state, b.state)

@pytest.mark.parametrize("s,expected", [
    ((0, 0, 0), None), ((1, 1, 1), None),
    ((1, 0, 0), 0), ((0, 1, 0), 1), ((0, 0, 1), 2),
    ((0, 1, 1), 0), ((1, 0, 1), 1), ((1, 1, 0), 2),
])
def test_majority_minority(s, expected):
    assert majority_minority(s) == expected

def test_seeded_injection_picks_the_same_qubit():
    expected = int(np.random.default_rng(7).integers(0, 3))
    code = RepetitionCode(RandomSource(7))
    code.encode_bit_flip()
    q = code.inject_error(ErrorKind.BIT_FLIP)
    assert q == expected
    flipped = np.zeros(8, dtype=complex)
    flipped[1 << q] = flipped[7 ^ (1 << q)] = 1 / math.sqrt(2)
    assert np.allclose(code.state, flipped)
    assert code.log[-1] == f"Introducing X (bit-flip) error on qubit: {q}"

def test_decode_corrects_the_minority_qubit():
    code = RepetitionCode(RandomSource(0))
    code.encode_bit_flip()
    code.inject_error(ErrorKind.BIT_FLIP, qubit=1)
    assert code.decode(ErrorKind.BIT_FLIP, (0, 1, 0)) == 1
    assert code.logical_fidelity() == pytest.approx(1.0)
    assert "Correcting bit-flip error on qubit 1" in code.log

def test_decode_unanimous_applies_nothing():
    code = RepetitionCode(RandomSource(0))
    code.encode_bit_flip()
    code.inject_error(ErrorKind.BIT_FLIP, qubit=2)
    before = code.state.copy()
    assert code.decode(ErrorKind.BIT_FLIP, (1, 1, 1)) is None
    assert np.array_equal(code.state, before)

def test_product_state_fault_is_found_deterministically():
    code = RepetitionCode(RandomSource(3))
    code.inject_error(ErrorKind.BIT_FLIP, qubit=2)
    assert code.sv.amplitude(4) == 1
    assert code.syndrome() == (0, 0, 1)
    assert code.decode(ErrorKind.BIT_FLIP) == 2
    assert code.sv.amplitude(0) == 1

@pytest.mark.parametrize("seed", range(10))
def test_seeded_cycle_corrects_exactly_the_voted_qubit(seed):
    code = RepetitionCode(RandomSource(seed))
    code.encode_bit_flip()
    q = code.inject_error(ErrorKind.BIT_FLIP)
    s = code.syndrome()
    fixed = code.decode(ErrorKind.BIT_FLIP, s)
    assert fixed == majority_minority(s)
    if fixed == q:
        assert code.logical_fidelity() == pytest.approx(1.0)

def test_phase_flip_round_trip():
    code = RepetitionCode()
    code.encode_phase_flip()
    code.inject_error(ErrorKind.PHASE_FLIP, qubit=0)
    assert code.sv.amplitude(7) == pytest.approx(-1 / math.sqrt(2))
    assert code.logical_fidelity() == pytest.approx(0.0)
    assert code.decode(ErrorKind.PHASE_FLIP, (1, 0, 0)) == 0
    assert code.logical_fidelity() == pytest.approx(1.0)

def test_syndrome_does_not_collapse():
    code = RepetitionCode(RandomSource(4))
    code.encode_bit_flip()
    before = code.state.copy()
    for _ in range(5):
        code.syndrome()
    assert np.array_equal(code.state, before)

def test_run_cycle_report():
    code = RepetitionCode(RandomSource(21))
    rep = code.run_cycle(ErrorKind.BIT_FLIP, qubit=0)
    assert rep.error_qubit == 0
    assert rep.corrected_qubit == majority_minority(rep.syndrome)
    assert rep.recovered == (rep.corrected_qubit == 0)
    assert rep.log[0].startswith("Encoded logical state")
    assert rep.log[2].startswith("Syndrome bits:")

def test_bad_inputs():
    code = RepetitionCode()
    with pytest.raises(InvalidQubitIndex):
        code.inject_error(ErrorKind.BIT_FLIP, qubit=3)
    with pytest.raises(ValueError):
        code.decode(ErrorKind.BIT_FLIP, (0, 2, 0))

def test_log_holds_only_the_latest_cycle():
    code = RepetitionCode(RandomSource(5))
    first = code.run_cycle(ErrorKind.BIT_FLIP, qubit=1)
    second = code.run_cycle(ErrorKind.PHASE_FLIP, qubit=2)
    assert code.log == second.log
    assert len(code.log) == len(second.log) < len(first.log) + len(second.log)
    assert first.log[1] == "Introducing X (bit-flip) error on qubit: 1"
    assert second.log[1] == "Introducing Z (phase-flip) error on qubit: 2"
