"""Measurement and sampling for statevectors."""

from .engine import (
    MeasurementResult,
    collapse_qubit,
    collapse_to_basis,
    measure_all,
    measure_qubit,
)
from .sampling import (
    basis_probabilities_from_statevector,
    sample_counts,
    sample_index,
)

__all__ = [
    "MeasurementResult",
    "collapse_qubit",
    "collapse_to_basis",
    "measure_all",
    "measure_qubit",
    "basis_probabilities_from_statevector",
    "sample_counts",
    "sample_index",
]
