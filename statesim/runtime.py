import math, cmath
from numbers import Integral
from typing import List
import numpy as np

from .errors import InvalidQubitIndex, InvalidCircuitParameters

MAX_QUBITS = 20  # 2^20 amplitudes, 16 MB of complex128

H = (1/ math.sqrt(2)) * np.array([[1, 1], [1, -1]], dtype=np.complex128)

def Rz(theta: float) -> np.ndarray:
    return np.array([[cmath.exp(1j*theta/2), 0], [0, cmath.exp(-1j*theta/2)]], dtype=np.complex128)

CZ_4 = np.diag([1, 1, 1, -1]).astype(np.complex128)
CNOT_4 = np.array([[1,0,0,0],[0,1,0,0],[0,0,0,1],[0,0,1,0]], dtype=np.complex128)

def check_register(n) -> int:
    if isinstance(n, bool) or not isinstance(n, Integral):
        raise InvalidCircuitParameters(f"qubit count must be an integer, got {n!r}")
    if n < 1:
        raise InvalidCircuitParameters(f"qubit count must be >= 1, got {n}")
    if n > MAX_QUBITS:
        raise InvalidCircuitParameters(
            f"n_qubits={n} exceeds safe limit of {MAX_QUBITS} (2^{MAX_QUBITS} amplitudes)")
    return int(n)


class StateVector:
    """Amplitude vector over 2^n basis states; bit k of an index is qubit k.

    Every gate mutates ``state`` in place and validates its qubit arguments
    before touching it.
    """
    def __init__(self, n: int):
        self.n = check_register(n)
        self.dim = 1 << self.n
        self.state = np.zeros(self.dim, dtype=np.complex128); self.state[0] = 1+0j
        self._index = np.arange(self.dim)

    def reset(self):
        self.state[:] = 0; self.state[0] = 1+0j

    def copy(self) -> "StateVector":
        other = StateVector(self.n)
        other.state[:] = self.state
        return other

    def set_amplitudes(self, amps) -> None:
        vec = np.asarray(amps, dtype=np.complex128)
        if vec.shape != (self.dim,):
            raise InvalidCircuitParameters(f"expected {self.dim} amplitudes, got shape {vec.shape}")
        self.state[:] = vec

    def amplitude(self, index: int) -> complex:
        return complex(self.state[index])

    def norm(self) -> float:
        return float(np.sum(self.state.real**2 + self.state.imag**2))

    def qubit(self, q) -> int:
        if isinstance(q, bool) or not isinstance(q, Integral):
            raise InvalidQubitIndex(f"qubit index must be an integer, got {q!r}")
        if not (0 <= q < self.n):
            raise InvalidQubitIndex(f"qubit index {q} out of range for {self.n} qubits")
        return int(q)

    def bit_set(self, q: int) -> np.ndarray:
        """Boolean mask over basis indices whose bit q is 1."""
        return ((self._index >> q) & 1).astype(bool)

    # ---- generic application ----
    def apply_single(self, q, U):
        q = self.qubit(q)
        mask = 1 << q; vec = self.state
        a00, a01, a10, a11 = U[0,0], U[0,1], U[1,0], U[1,1]
        i = self._index[(self._index & mask) == 0]
        j = i | mask
        v0, v1 = vec[i].copy(), vec[j].copy()
        vec[i] = a00*v0 + a01*v1
        vec[j] = a10*v0 + a11*v1

    def apply_two(self, q1, q2, U):
        q1 = self.qubit(q1); q2 = self.qubit(q2)
        if q1 == q2: raise InvalidQubitIndex("two-qubit op needs distinct qubits")
        q_low, q_high = (q1, q2) if q1 < q2 else (q2, q1)
        mask_low = 1 << q_low; mask_high = 1 << q_high; vec = self.state
        base = self._index[(self._index & (mask_low | mask_high)) == 0]
        quad = [base, base | mask_low, base | mask_high, base | mask_high | mask_low]
        v = np.stack([vec[k] for k in quad])
        v2 = U @ v
        for row, k in enumerate(quad):
            vec[k] = v2[row]

    # ---- named gates ----
    def h(self, q):
        self.apply_single(q, H)

    def x(self, q):
        q = self.qubit(q)
        i = self._index[~self.bit_set(q)]
        j = i | (1 << q)
        self.state[i], self.state[j] = self.state[j].copy(), self.state[i].copy()

    def z(self, q):
        q = self.qubit(q)
        self.state[self.bit_set(q)] *= -1

    def rz(self, q, theta: float):
        q = self.qubit(q)
        ones = self.bit_set(q)
        self.state[ones] *= cmath.exp(-1j*theta/2)
        self.state[~ones] *= cmath.exp(1j*theta/2)

    def cz(self, q1, q2):
        q1 = self.qubit(q1); q2 = self.qubit(q2)
        if q1 == q2: raise InvalidQubitIndex("two-qubit op needs distinct qubits")
        self.state[self.bit_set(q1) & self.bit_set(q2)] *= -1

    def dump(self) -> List[str]:
        return [f"|{i}>: {complex(a)}" for i, a in enumerate(self.state)]

    def __repr__(self):
        return f"StateVector(n={self.n}, norm={self.norm():.12f})"
