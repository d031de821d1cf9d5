"""
3-qubit repetition code: encode, inject one Pauli fault, sample a
syndrome and correct by majority vote.

The syndrome is three independent marginal samples of the current,
uncollapsed vector, so two calls in a row may disagree. Bit-flip and
phase-flip encoding produce the same state (|000> + |111>)/sqrt(2); no
basis change is applied for the phase-flip code.
"""
import logging, math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .rng import RandomSource, resolve
from .runtime import StateVector
from .sampler import measure_qubit

log = logging.getLogger(__name__)

N_PHYSICAL = 3
Syndrome = Tuple[int, int, int]


class ErrorKind(Enum):
    BIT_FLIP = "bit"
    PHASE_FLIP = "phase"

    @property
    def gate(self) -> str:
        return "X" if self is ErrorKind.BIT_FLIP else "Z"

    @property
    def label(self) -> str:
        return "bit-flip" if self is ErrorKind.BIT_FLIP else "phase-flip"


@dataclass
class CycleReport:
    kind: ErrorKind
    error_qubit: int
    syndrome: Syndrome
    corrected_qubit: Optional[int]
    recovered: bool
    log: List[str] = field(default_factory=list)


def majority_minority(syndrome: Syndrome) -> Optional[int]:
    """Index of the single bit outvoted by the other two, or None if unanimous."""
    b0, b1, b2 = syndrome
    if b0 != b1 and b0 != b2: return 0
    if b1 != b0 and b1 != b2: return 1
    if b2 != b0 and b2 != b1: return 2
    return None


class RepetitionCode:
    def __init__(self, rng: Optional[RandomSource] = None):
        self.sv = StateVector(N_PHYSICAL)
        self.rng = resolve(rng)
        self.log: List[str] = []
        self._encoded: Optional[np.ndarray] = None

    @property
    def state(self) -> np.ndarray:
        return self.sv.state

    # ---- encoding ----
    def _encode_ghz(self):
        amp = 1 / math.sqrt(2)
        self.sv.state[:] = 0
        self.sv.state[0] = amp
        self.sv.state[7] = amp
        self._encoded = self.sv.state.copy()

    def encode_bit_flip(self):
        self._encode_ghz()
        self.log.append("Encoded logical state (|000> + |111>)/sqrt(2) for bit-flip code")

    def encode_phase_flip(self):
        self._encode_ghz()
        self.log.append("Encoded logical state (|000> + |111>)/sqrt(2) for phase-flip code")

    def encode(self, kind: ErrorKind):
        if kind is ErrorKind.BIT_FLIP: self.encode_bit_flip()
        else: self.encode_phase_flip()

    # ---- faults and correction ----
    def _apply(self, kind: ErrorKind, q: int):
        if kind is ErrorKind.BIT_FLIP: self.sv.x(q)
        else: self.sv.z(q)

    def inject_error(self, kind: ErrorKind, qubit: Optional[int] = None) -> int:
        q = self.rng.integers(0, N_PHYSICAL) if qubit is None else self.sv.qubit(qubit)
        self._apply(kind, q)
        self.log.append(f"Introducing {kind.gate} ({kind.label}) error on qubit: {q}")
        log.debug("injected %s on qubit %d", kind.gate, q)
        return q

    def syndrome(self) -> Syndrome:
        return tuple(measure_qubit(self.sv, q, self.rng) for q in range(N_PHYSICAL))

    def decode(self, kind: ErrorKind, syndrome: Optional[Syndrome] = None) -> Optional[int]:
        s = self.syndrome() if syndrome is None else tuple(int(b) for b in syndrome)
        if len(s) != N_PHYSICAL or set(s) - {0, 1}:
            raise ValueError(f"syndrome must be three 0/1 bits, got {s!r}")
        self.log.append("Syndrome bits: " + " ".join(str(b) for b in s))
        q = majority_minority(s)
        if q is None:
            self.log.append("Syndrome unanimous, no correction applied")
            return None
        self._apply(kind, q)
        self.log.append(f"Correcting {kind.label} error on qubit {q}")
        log.debug("applied corrective %s on qubit %d", kind.gate, q)
        return q

    def logical_fidelity(self) -> float:
        """|<encoded|current>|^2; 0.0 before any encoding."""
        if self._encoded is None:
            return 0.0
        return float(abs(np.vdot(self._encoded, self.sv.state))**2)

    def run_cycle(self, kind: ErrorKind, qubit: Optional[int] = None) -> CycleReport:
        """One encode/inject/decode round; ``log`` holds only this round's lines afterwards."""
        self.log = []
        self.sv.reset()
        self.encode(kind)
        err = self.inject_error(kind, qubit)
        s = self.syndrome()
        fixed = self.decode(kind, s)
        recovered = self.logical_fidelity() > 1 - 1e-9
        self.log.append("Recovered logical state" if recovered else "Logical state NOT recovered")
        return CycleReport(kind=kind, error_qubit=err, syndrome=s, corrected_qubit=fixed,
                           recovered=recovered, log=list(self.log))
