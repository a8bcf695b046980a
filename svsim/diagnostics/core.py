"""Read-only diagnostics for pure statevectors."""

from __future__ import annotations

import math
from typing import Sequence

import torch

from ..backend.statevector import coerce_amplitudes, qubit_marginal
from ..errors import DimensionMismatch, InvalidArgument


def state_norm(state: torch.Tensor) -> torch.Tensor:
    """
    Compute the L2 norm of a quantum state tensor.

    Parameters
    ----------
    state:
        Complex tensor with shape (..., dim).

    Returns
    -------
    torch.Tensor
        Real tensor with shape (...) giving the norm for each batch element.
    """
    if state.dim() < 1:
        raise InvalidArgument("state_norm expects a tensor with at least 1 dimension.")

    norm_sq = (state.conj() * state).sum(dim=-1).real
    return torch.sqrt(norm_sq)


def assert_normalized(
    state: torch.Tensor,
    atol: float = 1e-6,
) -> None:
    """
    Assert that a statevector has norm ~1 within a tolerance.

    Raises
    ------
    ValueError
        If the state is not normalized within the tolerance.
    """
    norms = state_norm(state)
    if not torch.all(torch.isfinite(norms)):
        raise ValueError("State norm contains non-finite values.")

    if not torch.allclose(norms, torch.ones_like(norms), atol=atol, rtol=0.0):
        raise ValueError(
            f"State is not normalized within tolerance {atol}. "
            f"Norms found: {norms.detach().cpu().tolist()}"
        )


def fidelity(
    state: torch.Tensor,
    target: torch.Tensor | Sequence,
) -> float:
    """
    Squared overlap |⟨target|ψ⟩|² between two pure states.

    The target may be a tensor, a sequence of complex numbers or a sequence of
    (real, imag) pairs. It is normalized before the overlap is taken, so the
    result always lies in [0, 1].

    Raises
    ------
    DimensionMismatch
        If the target length differs from the state length.
    InvalidArgument
        If the target has zero norm.
    """
    target_t = coerce_amplitudes(target, dtype=state.dtype, device=state.device)
    if target_t.shape[0] != state.shape[-1]:
        raise DimensionMismatch(
            f"target has {target_t.shape[0]} amplitudes, state has {state.shape[-1]}"
        )

    target_norm = float(state_norm(target_t))
    if target_norm == 0.0:
        raise InvalidArgument("fidelity target has zero norm.")

    inner = (target_t.conj() * state).sum() / target_norm
    value = float(inner.abs() ** 2)
    return min(max(value, 0.0), 1.0)


def entanglement_entropy(
    state: torch.Tensor,
    qubit: int,
    n_qubits: int | None = None,
) -> float:
    """
    Shannon entropy (base 2) of one qubit's marginal {P(0), P(1)}.

    0 means the qubit is in a definite basis state; 1 means its marginal is
    maximally uncertain.
    """
    marginal = qubit_marginal(state, qubit, n_qubits)
    entropy = 0.0
    for p in marginal.tolist():
        if p > 0.0:
            entropy -= p * math.log2(p)
    return max(entropy, 0.0)


__all__ = [
    "assert_normalized",
    "entanglement_entropy",
    "fidelity",
    "state_norm",
]
