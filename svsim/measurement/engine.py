"""Projective measurement in the computational basis.

Measurement samples an outcome from the Born distribution and collapses the
state onto it. Collapse builds a new tensor; the input state is not modified.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import torch

from ..backend.statevector import (
    check_qubit,
    infer_n_qubits,
    measure_probs,
    qubit_marginal,
)
from ..errors import DegenerateState, IndexOutOfRange
from .sampling import basis_probabilities_from_statevector, sample_index


@dataclass(frozen=True)
class MeasurementResult:
    """
    Outcome of one measurement call.

    Attributes
    ----------
    outcome:
        Reported value: a bit for a single-qubit measurement, a basis index
        for a full measurement. Includes readout noise.
    qubit:
        The measured qubit, or None for a full measurement.
    probabilities:
        Basis-state probabilities of the post-collapse state.
    raw_outcome:
        The sampled value before readout noise; the state collapsed onto it.
    """

    outcome: int
    qubit: Optional[int]
    probabilities: torch.Tensor
    raw_outcome: int

    @property
    def readout_flipped(self) -> bool:
        return self.outcome != self.raw_outcome

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome,
            "qubit": self.qubit,
            "raw_outcome": self.raw_outcome,
            "readout_flipped": self.readout_flipped,
            "probabilities": self.probabilities.tolist(),
        }


def collapse_qubit(
    state: torch.Tensor,
    qubit: int,
    outcome: int,
    n_qubits: int | None = None,
) -> torch.Tensor:
    """
    Project ``state`` onto ``qubit == outcome`` and renormalize.

    Raises
    ------
    DegenerateState
        If the retained probability is exactly zero.
    """
    if n_qubits is None:
        n_qubits = infer_n_qubits(state)
    check_qubit(qubit, n_qubits)
    if outcome not in (0, 1):
        raise IndexOutOfRange(f"single-qubit outcome must be 0 or 1, got {outcome!r}")

    idx = torch.arange(state.shape[0], device=state.device)
    keep = ((idx >> qubit) & 1) == outcome

    retained = float(measure_probs(state)[keep].sum())
    if retained == 0.0:
        raise DegenerateState(
            f"cannot collapse qubit {qubit} onto {outcome}: retained probability is zero"
        )

    collapsed = torch.where(keep, state, torch.zeros_like(state))
    return collapsed / math.sqrt(retained)


def collapse_to_basis(state: torch.Tensor, index: int) -> torch.Tensor:
    """Return the basis state |index⟩ with the same shape, dtype and device."""
    if index < 0 or index >= state.shape[0]:
        raise IndexOutOfRange(f"basis index {index} out of range [0, {state.shape[0]})")
    collapsed = torch.zeros_like(state)
    collapsed[index] = 1.0 + 0.0j
    return collapsed


def measure_qubit(
    state: torch.Tensor,
    qubit: int,
    generator: Optional[torch.Generator] = None,
    n_qubits: int | None = None,
) -> Tuple[int, torch.Tensor]:
    """
    Measure one qubit.

    Returns
    -------
    outcome:
        The sampled bit.
    state:
        The collapsed, renormalized statevector.
    """
    if n_qubits is None:
        n_qubits = infer_n_qubits(state)
    marginal = qubit_marginal(state, qubit, n_qubits)
    outcome = sample_index(marginal, generator)
    return outcome, collapse_qubit(state, qubit, outcome, n_qubits)


def measure_all(
    state: torch.Tensor,
    generator: Optional[torch.Generator] = None,
) -> Tuple[int, torch.Tensor]:
    """
    Measure every qubit at once.

    Returns
    -------
    outcome:
        The sampled basis index.
    state:
        The basis state the register collapsed to.
    """
    probs = basis_probabilities_from_statevector(state)
    outcome = sample_index(probs, generator)
    return outcome, collapse_to_basis(state, outcome)


__all__ = [
    "MeasurementResult",
    "collapse_qubit",
    "collapse_to_basis",
    "measure_all",
    "measure_qubit",
]
