"""Gate kernels over dense statevectors.

Every kernel takes the current amplitude tensor and returns a *new* tensor;
the input is never written to. Single-qubit kernels take their matrix from
:mod:`svsim.gates.standard`. Dense matrices (H, RX, RY) act through the
(left, 2, right) reshape and einsum. Sparse ones (X, Y, Z, S, T, RZ) become a
scaled bit flip or a per-amplitude phase. Multi-qubit gates are permutations
of basis indices scattered into a zero buffer (CNOT, SWAP, TOFFOLI, FREDKIN)
or a masked phase (CZ).

Convention: qubit ``q`` is bit ``q`` of the basis index (LSB first).
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

import torch

from ..backend.statevector import check_qubit, infer_n_qubits
from ..diagnostics import DEBUG_NORM_ATOL, assert_normalized, is_debug_enabled
from . import standard as stdgates
from .descriptors import Gate, GateKind

Kernel = Callable[[torch.Tensor, Gate, int], torch.Tensor]


def _indices(state: torch.Tensor) -> torch.Tensor:
    return torch.arange(state.shape[0], device=state.device)


def _bit(indices: torch.Tensor, qubit: int) -> torch.Tensor:
    return (indices >> qubit) & 1


def _scalar(value: complex, like: torch.Tensor) -> torch.Tensor:
    return torch.tensor(value, dtype=like.dtype, device=like.device)


def apply_matrix(
    state: torch.Tensor,
    matrix: torch.Tensor,
    qubit: int,
    n_qubits: int,
) -> torch.Tensor:
    """
    Apply a 2x2 matrix to one qubit.

    The state is viewed as (left, 2, right) where the middle axis is the
    target bit; ``matrix[out, in]`` contracts against it.
    """
    left_size = 1 << (n_qubits - 1 - qubit)
    right_size = 1 << qubit
    view = state.reshape(left_size, 2, right_size)
    gate = matrix.to(dtype=state.dtype, device=state.device)
    return torch.einsum("oq,lqr->lor", gate, view).reshape(-1)


def apply_permutation(
    state: torch.Tensor,
    destination: torch.Tensor,
    factors: Optional[torch.Tensor] = None,
) -> torch.Tensor:
    """
    Move amplitude ``i`` to index ``destination[i]``, optionally scaled.

    ``destination`` must be a permutation of the basis indices.
    """
    source = state if factors is None else state * factors
    out = torch.zeros_like(state)
    return out.index_copy_(0, destination, source)


def apply_diagonal(
    state: torch.Tensor,
    mask: torch.Tensor,
    phase: complex,
) -> torch.Tensor:
    """Multiply by ``phase`` wherever ``mask`` is set; leave the rest unchanged."""
    factors = torch.where(mask.bool(), _scalar(phase, state), _scalar(1.0, state))
    return state * factors


def apply_sparse(
    state: torch.Tensor,
    matrix: torch.Tensor,
    qubit: int,
    n_qubits: int,
) -> torch.Tensor:
    """
    Apply a diagonal or anti-diagonal 2x2 matrix to one qubit.

    Diagonal matrices become per-amplitude phases and anti-diagonal ones a
    bit flip scaled by the off-diagonal entries, both without the einsum.
    Any other matrix goes through :func:`apply_matrix`.
    """
    gate = matrix.to(dtype=state.dtype, device=state.device)
    diagonal = bool(gate[0, 1] == 0) and bool(gate[1, 0] == 0)
    anti_diagonal = bool(gate[0, 0] == 0) and bool(gate[1, 1] == 0)
    if not (diagonal or anti_diagonal):
        return apply_matrix(state, matrix, qubit, n_qubits)

    idx = _indices(state)
    bit = _bit(idx, qubit).bool()
    if diagonal:
        return state * torch.where(bit, gate[1, 1], gate[0, 0])
    # a set bit moves to clear and picks up matrix[0, 1]
    factors = torch.where(bit, gate[0, 1], gate[1, 0])
    return apply_permutation(state, idx ^ (1 << qubit), factors)


def _x(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    return apply_sparse(state, stdgates.X(), gate.qubits[0], n_qubits)


def _y(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    return apply_sparse(state, stdgates.Y(), gate.qubits[0], n_qubits)


def _z(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    return apply_sparse(state, stdgates.Z(), gate.qubits[0], n_qubits)


def _s(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    return apply_sparse(state, stdgates.S(), gate.qubits[0], n_qubits)


def _t(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    return apply_sparse(state, stdgates.T(), gate.qubits[0], n_qubits)


def _h(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    return apply_matrix(state, stdgates.H(), gate.qubits[0], n_qubits)


def _rx(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    return apply_matrix(state, stdgates.RX(gate.angle), gate.qubits[0], n_qubits)


def _ry(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    return apply_matrix(state, stdgates.RY(gate.angle), gate.qubits[0], n_qubits)


def _rz(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    return apply_sparse(state, stdgates.RZ(gate.angle), gate.qubits[0], n_qubits)


def _cnot(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    control, target = gate.qubits
    idx = _indices(state)
    flipped = idx ^ (1 << target)
    return apply_permutation(state, torch.where(_bit(idx, control).bool(), flipped, idx))


def _cz(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    control, target = gate.qubits
    idx = _indices(state)
    phase = stdgates.Z()[1, 1].item()
    return apply_diagonal(state, _bit(idx, control) & _bit(idx, target), phase)


def _swap(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    q1, q2 = gate.qubits
    idx = _indices(state)
    differ = (_bit(idx, q1) ^ _bit(idx, q2)).bool()
    swapped = idx ^ (1 << q1) ^ (1 << q2)
    return apply_permutation(state, torch.where(differ, swapped, idx))


def _toffoli(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    control1, control2, target = gate.qubits
    idx = _indices(state)
    both = (_bit(idx, control1) & _bit(idx, control2)).bool()
    flipped = idx ^ (1 << target)
    return apply_permutation(state, torch.where(both, flipped, idx))


def _fredkin(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    control, q1, q2 = gate.qubits
    idx = _indices(state)
    active = (_bit(idx, control) & (_bit(idx, q1) ^ _bit(idx, q2))).bool()
    swapped = idx ^ (1 << q1) ^ (1 << q2)
    return apply_permutation(state, torch.where(active, swapped, idx))


_KERNELS: Dict[GateKind, Kernel] = {
    GateKind.X: _x,
    GateKind.Y: _y,
    GateKind.Z: _z,
    GateKind.H: _h,
    GateKind.S: _s,
    GateKind.T: _t,
    GateKind.RX: _rx,
    GateKind.RY: _ry,
    GateKind.RZ: _rz,
    GateKind.CNOT: _cnot,
    GateKind.CZ: _cz,
    GateKind.SWAP: _swap,
    GateKind.TOFFOLI: _toffoli,
    GateKind.FREDKIN: _fredkin,
}

_missing = set(GateKind) - set(_KERNELS)
if _missing:
    raise RuntimeError(f"no kernel registered for {sorted(k.value for k in _missing)}")


def apply_gate(
    state: torch.Tensor,
    gate: Gate,
    n_qubits: int | None = None,
) -> torch.Tensor:
    """
    Apply ``gate`` to ``state`` and return the new statevector.

    Args:
        state: Complex statevector of shape (2**n_qubits,).
        gate: Gate descriptor.
        n_qubits: Number of qubits. If None, inferred from the state length.

    Returns:
        A new tensor; ``state`` is left untouched.

    Raises:
        IndexOutOfRange: If any of the gate's qubits is outside [0, n_qubits).
        InvalidArgument: If the state is not a valid statevector.
    """
    if n_qubits is None:
        n_qubits = infer_n_qubits(state)
    for q in gate.qubits:
        check_qubit(q, n_qubits)

    new_state = _KERNELS[gate.kind](state, gate, n_qubits)

    if is_debug_enabled():
        assert_normalized(new_state, atol=DEBUG_NORM_ATOL)

    return new_state


__all__ = [
    "Kernel",
    "apply_diagonal",
    "apply_gate",
    "apply_matrix",
    "apply_permutation",
    "apply_sparse",
]
