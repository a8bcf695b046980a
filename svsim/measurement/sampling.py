"""Sampling utilities over computational-basis probabilities."""

from __future__ import annotations

from typing import Dict, Optional

import torch

from ..backend.statevector import infer_n_qubits
from ..errors import DegenerateState, InvalidArgument


def basis_probabilities_from_statevector(
    state: torch.Tensor,
    dtype: Optional[torch.dtype] = None,
) -> torch.Tensor:
    """
    Compute computational-basis measurement probabilities from a pure statevector.

    The probabilities are computed using the Born rule:

        p(x) = |⟨x|ψ⟩|^2,

    and renormalized to sum to one.

    Parameters
    ----------
    state:
        1D complex tensor of shape (2**n,) representing |ψ⟩.
    dtype:
        Floating-point dtype for the probabilities. Defaults to torch.float64.

    Raises
    ------
    InvalidArgument
        If state is not 1D or its length is not a power of 2.
    DegenerateState
        If state has zero norm.
    """
    infer_n_qubits(state)

    if dtype is None:
        dtype = torch.float64

    probs = state.to(dtype=torch.complex128).abs() ** 2

    total = probs.sum()
    if total == 0:
        raise DegenerateState("Statevector has zero norm.")

    return (probs / total).to(dtype=dtype)


def _normalized_cpu(probs: torch.Tensor) -> torch.Tensor:
    if probs.ndim != 1:
        raise InvalidArgument(f"probs must be 1D, got shape {tuple(probs.shape)}")

    probs_f = probs.detach().to(device="cpu", dtype=torch.float64)
    if torch.any(probs_f < -1e-14):
        raise InvalidArgument("Probabilities contain negative values.")
    probs_f = torch.clamp(probs_f, min=0.0)

    total = probs_f.sum()
    if total <= 0:
        raise DegenerateState("Probabilities sum to zero.")
    return probs_f / total


def sample_index(
    probs: torch.Tensor,
    generator: Optional[torch.Generator] = None,
) -> int:
    """
    Draw one outcome index from a discrete distribution.

    A single uniform value u ∈ [0, 1) is drawn and the first index whose
    cumulative probability exceeds u is returned, so zero-probability
    outcomes are never selected.
    """
    probs_norm = _normalized_cpu(probs)
    cdf = torch.cumsum(probs_norm, dim=0)

    u = torch.rand(1, generator=generator, dtype=torch.float64)
    index = int(torch.searchsorted(cdf, u, right=True).item())

    if index >= probs_norm.shape[0]:
        # u landed above a cdf that rounded to just under 1
        index = int(torch.nonzero(probs_norm).max().item())
    return index


def sample_counts(
    probs: torch.Tensor,
    n_shots: int,
    generator: Optional[torch.Generator] = None,
) -> Dict[int, int]:
    """
    Sample ``n_shots`` outcomes and return ``{basis_index: count}``.

    Only outcomes that occurred appear in the result.
    """
    if isinstance(n_shots, bool) or not isinstance(n_shots, int) or n_shots < 1:
        raise InvalidArgument(f"n_shots must be an integer >= 1, got {n_shots!r}")

    probs_norm = _normalized_cpu(probs)
    indices = torch.multinomial(probs_norm, n_shots, replacement=True, generator=generator)
    counts = torch.bincount(indices, minlength=probs_norm.shape[0])

    return {i: int(c) for i, c in enumerate(counts.tolist()) if c > 0}


__all__ = [
    "basis_probabilities_from_statevector",
    "sample_counts",
    "sample_index",
]
