"""
QAOA ansatz over a single Max-Cut edge.

Init: H on every qubit. Each of ``depth`` layers applies the cost block
CZ(0,1), Rz(0, gamma), Rz(1, gamma) followed by the mixer, an X on every
qubit. The mixer is a full bit flip; ``beta`` is carried through the
parameters but does not enter the circuit.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from numbers import Integral
from typing import Optional, Union

from .errors import InvalidCircuitParameters
from .rng import RandomSource
from .runtime import StateVector, check_register
from .sampler import probabilities, render_bitstring, sample_counts

log = logging.getLogger(__name__)


def check_cost_register(n: int):
    if n < 2:
        raise InvalidCircuitParameters(
            f"cost layer acts on qubits 0 and 1, needs n_qubits >= 2, got {n}")


@dataclass
class QAOAParams:
    n_qubits: int
    depth: int
    gamma: float
    beta: float = 0.0

    def __post_init__(self):
        check_register(self.n_qubits)
        check_cost_register(self.n_qubits)
        if isinstance(self.depth, bool) or not isinstance(self.depth, Integral) or self.depth < 0:
            raise InvalidCircuitParameters(f"depth must be an integer >= 0, got {self.depth!r}")
        self.gamma = float(self.gamma); self.beta = float(self.beta)


@dataclass
class QAOAResult:
    params: QAOAParams
    counts: Counter = field(default_factory=Counter)
    mean_cost: float = 0.0
    best_bitstring: str = ""
    best_cost: int = 0
    exact_cost: float = 0.0


def maxcut_cost(bitstring: str) -> int:
    """1 if the edge between the first two rendered bits is cut, else 0."""
    if len(bitstring) < 2 or set(bitstring) - {"0", "1"}:
        raise ValueError(f"expected a bitstring of at least 2 bits, got {bitstring!r}")
    return 1 if bitstring[0] != bitstring[1] else 0


def cost_layer(sv: StateVector, gamma: float):
    check_cost_register(sv.n)
    sv.cz(0, 1)
    sv.rz(0, gamma)
    sv.rz(1, gamma)


def mixer_layer(sv: StateVector, beta: float):
    for q in range(sv.n):
        sv.x(q)


def qaoa_circuit(params: Union[QAOAParams, int], depth: Optional[int] = None,
                 gamma: float = 0.0, beta: float = 0.0) -> StateVector:
    """Build the ansatz state. Accepts a QAOAParams or (n_qubits, depth, gamma, beta)."""
    if not isinstance(params, QAOAParams):
        if depth is None:
            raise InvalidCircuitParameters("depth is required when n_qubits is passed directly")
        params = QAOAParams(params, depth, gamma, beta)
    sv = StateVector(params.n_qubits)
    for q in range(sv.n):
        sv.h(q)
    for _ in range(params.depth):
        cost_layer(sv, params.gamma)
        mixer_layer(sv, params.beta)
    log.debug("built QAOA state n=%d p=%d gamma=%g", sv.n, params.depth, params.gamma)
    return sv


def expected_cost(sv: StateVector) -> float:
    """Exact mean of maxcut_cost under the Born distribution of sv."""
    probs = probabilities(sv)
    return float(sum(p * maxcut_cost(render_bitstring(i, sv.n)) for i, p in enumerate(probs)))


def run_qaoa(params: QAOAParams, shots: int, rng: Optional[RandomSource] = None) -> QAOAResult:
    sv = qaoa_circuit(params)
    counts = sample_counts(sv, shots, rng)
    total = sum(maxcut_cost(b) * c for b, c in counts.items())
    # ties broken by frequency, then by bitstring
    best = max(counts, key=lambda b: (maxcut_cost(b), counts[b], b))
    return QAOAResult(params=params, counts=counts, mean_cost=total / shots,
                      best_bitstring=best, best_cost=maxcut_cost(best),
                      exact_cost=expected_cost(sv))
