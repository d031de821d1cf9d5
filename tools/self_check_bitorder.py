# tools/self_check_bitorder.py
# Prepare a basis state from a bitstring, sample it, and confirm the rendered
# outcome reads back identically (leftmost char = highest qubit).
from statesim.rng import RandomSource
from statesim.runtime import StateVector
from statesim.sampler import render_bitstring, sample_counts

def prepare(bits: str) -> StateVector:
    n = len(bits)
    sv = StateVector(n)
    for k in range(n):
        if bits[n - 1 - k] == '1':
            sv.x(k)
    return sv

def run_once(bits="110", shots=200, seed=1):
    sv = prepare(bits)
    counts = sample_counts(sv, shots, RandomSource(seed))
    idx = int(abs(sv.state).argmax())
    print("=== Bit-order Self-Check ===")
    print(f"prepared='{bits}' -> basis index {idx}")
    print(f"rendered  : {render_bitstring(idx, sv.n)}")
    print(f"reversed  : {render_bitstring(idx, sv.n)[::-1]}  (qubit 0 first, NOT our convention)")
    print(f"Counts (shots={shots}): {dict(counts)}")
    print("OK" if counts.get(bits, 0) == shots else "MISMATCH: rendered outcomes do not match the prepared state")
    print("============================\n")

if __name__ == "__main__":
    run_once("110")
    run_once("001")
