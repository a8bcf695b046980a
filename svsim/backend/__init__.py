"""Backend storage for statevector amplitudes."""

from .statevector import (
    AmplitudeVector,
    amplitudes_to_pairs,
    check_qubit,
    coerce_amplitudes,
    infer_n_qubits,
    measure_probs,
    pairs_to_amplitudes,
    qubit_marginal,
    state_memory_bytes,
    zero_state,
)

__all__ = [
    "AmplitudeVector",
    "zero_state",
    "measure_probs",
    "qubit_marginal",
    "infer_n_qubits",
    "check_qubit",
    "state_memory_bytes",
    "amplitudes_to_pairs",
    "pairs_to_amplitudes",
    "coerce_amplitudes",
]
