"""Born-rule sampling over a StateVector.

Sampling reads the amplitudes and never writes them back: two draws from
the same vector are independent, there is no collapse onto the observed
outcome.
"""
from collections import Counter
from typing import Optional
import numpy as np

from .errors import InvalidCircuitParameters, NumericDrift
from .rng import RandomSource, resolve
from .runtime import StateVector

DRIFT_TOLERANCE = 1e-6


def probabilities(sv: StateVector) -> np.ndarray:
    """Squared magnitudes, renormalised once the drift guard passes."""
    probs = sv.state.real**2 + sv.state.imag**2
    if not np.all(np.isfinite(probs)):
        raise NumericDrift("probability vector contains non-finite weights")
    total = float(np.sum(probs))
    if abs(total - 1.0) > DRIFT_TOLERANCE:
        raise NumericDrift(f"probabilities sum to {total:.12g}, drift exceeds {DRIFT_TOLERANCE:g}")
    return probs / total


def render_bitstring(index: int, n: int) -> str:
    # leftmost char = qubit n-1, rightmost = qubit 0
    return format(index, f"0{n}b")


def sample_index(sv: StateVector, rng: Optional[RandomSource] = None) -> int:
    probs = probabilities(sv)
    return int(resolve(rng).choice(sv.dim, p=probs))


def sample_bitstring(sv: StateVector, rng: Optional[RandomSource] = None) -> str:
    return render_bitstring(sample_index(sv, rng), sv.n)


def sample_counts(sv: StateVector, shots: int, rng: Optional[RandomSource] = None) -> Counter:
    if shots < 1:
        raise InvalidCircuitParameters(f"shots must be >= 1, got {shots}")
    probs = probabilities(sv)
    outcomes = resolve(rng).choice(sv.dim, p=probs, size=shots)
    counts = Counter()
    for idx in outcomes: counts[render_bitstring(int(idx), sv.n)] += 1
    return counts


def marginal_one(sv: StateVector, q: int) -> float:
    """Probability that qubit q reads 1."""
    q = sv.qubit(q)
    probs = probabilities(sv)
    return float(np.sum(probs[sv.bit_set(q)]))


def measure_qubit(sv: StateVector, q: int, rng: Optional[RandomSource] = None) -> int:
    p0 = 1.0 - marginal_one(sv, q)
    return 0 if resolve(rng).random() < p0 else 1
