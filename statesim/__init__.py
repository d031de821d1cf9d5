from .errors import StateSimError, InvalidQubitIndex, InvalidCircuitParameters, NumericDrift
from .runtime import StateVector, MAX_QUBITS
from .sampler import probabilities, sample_index, sample_bitstring, sample_counts, render_bitstring
from .qaoa import QAOAParams, QAOAResult, qaoa_circuit, maxcut_cost, run_qaoa
from .qec import RepetitionCode, ErrorKind, CycleReport

__all__ = [
    "StateSimError", "InvalidQubitIndex", "InvalidCircuitParameters", "NumericDrift",
    "StateVector", "MAX_QUBITS",
    "probabilities", "sample_index", "sample_bitstring", "sample_counts", "render_bitstring",
    "QAOAParams", "QAOAResult", "qaoa_circuit", "maxcut_cost", "run_qaoa",
    "RepetitionCode", "ErrorKind", "CycleReport",
]
