"""Standard single-qubit gate matrices.

Matrices are indexed [out_bit, in_bit] over the (|0⟩, |1⟩) pair of the
target qubit. Multi-qubit gates in this library are permutations or
diagonals and are applied directly by :mod:`svsim.gates.kernels`.
"""

from __future__ import annotations

import cmath
import math

import torch

_DEFAULT_DTYPE = torch.complex128


def _matrix(
    rows: list[list[complex]],
    dtype: torch.dtype | None,
    device: torch.device | None,
) -> torch.Tensor:
    if dtype is None:
        dtype = _DEFAULT_DTYPE
    if device is None:
        device = torch.device("cpu")
    return torch.tensor(rows, dtype=dtype, device=device)


def I(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:  # noqa: E743, N802
    """Identity gate."""
    return _matrix([[1.0, 0.0], [0.0, 1.0]], dtype, device)


def X(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:  # noqa: N802
    """Pauli-X gate (bit-flip, NOT gate)."""
    return _matrix([[0.0, 1.0], [1.0, 0.0]], dtype, device)


def Y(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:  # noqa: N802
    """Pauli-Y gate: |0⟩ → i|1⟩, |1⟩ → -i|0⟩."""
    return _matrix([[0.0, -1.0j], [1.0j, 0.0]], dtype, device)


def Z(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:  # noqa: N802
    """Pauli-Z gate (phase-flip)."""
    return _matrix([[1.0, 0.0], [0.0, -1.0]], dtype, device)


def H(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:  # noqa: N802
    """
    Hadamard gate in the canonical sign convention.

    The minus sign sits on the |1⟩ → |1⟩ element, which makes H its own
    inverse.
    """
    sqrt2_inv = 1.0 / math.sqrt(2.0)
    return _matrix([[sqrt2_inv, sqrt2_inv], [sqrt2_inv, -sqrt2_inv]], dtype, device)


def S(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:  # noqa: N802
    """S gate (phase gate, √Z)."""
    return _matrix([[1.0, 0.0], [0.0, 1.0j]], dtype, device)


def T(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:  # noqa: N802
    """T gate (π/8 gate, √S)."""
    return _matrix([[1.0, 0.0], [0.0, cmath.exp(1.0j * math.pi / 4.0)]], dtype, device)


def RX(  # noqa: N802
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation gate around X-axis: RX(θ) = exp(-iθX/2).

    Matrix form:
        [[cos(θ/2), -i sin(θ/2)],
         [-i sin(θ/2), cos(θ/2)]]
    """
    half_theta = float(theta) / 2.0
    cos_half = math.cos(half_theta)
    sin_half = math.sin(half_theta)
    return _matrix(
        [[cos_half, -1.0j * sin_half], [-1.0j * sin_half, cos_half]], dtype, device
    )


def RY(  # noqa: N802
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation gate around Y-axis: RY(θ) = exp(-iθY/2).

    Matrix form:
        [[cos(θ/2), -sin(θ/2)],
         [sin(θ/2), cos(θ/2)]]
    """
    half_theta = float(theta) / 2.0
    cos_half = math.cos(half_theta)
    sin_half = math.sin(half_theta)
    return _matrix([[cos_half, -sin_half], [sin_half, cos_half]], dtype, device)


def RZ(  # noqa: N802
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation gate around Z-axis: RZ(θ) = exp(-iθZ/2).

    Matrix form:
        [[exp(-iθ/2), 0],
         [0, exp(iθ/2)]]
    """
    half_theta = float(theta) / 2.0
    return _matrix(
        [[cmath.exp(-1.0j * half_theta), 0.0], [0.0, cmath.exp(1.0j * half_theta)]],
        dtype,
        device,
    )


def is_unitary(matrix: torch.Tensor, atol: float = 1e-6) -> bool:
    """
    Check if a matrix is unitary within a given tolerance.

    A matrix U is unitary if U†U = I, where U† is the conjugate transpose.
    """
    if matrix.shape[-1] != matrix.shape[-2]:
        return False

    adjoint = matrix.conj().transpose(-1, -2)
    product = torch.matmul(adjoint, matrix)

    n = matrix.shape[-1]
    identity = torch.eye(n, dtype=matrix.dtype, device=matrix.device)
    if product.ndim > 2:
        identity = identity.expand(product.shape)

    diff = torch.abs(product - identity)
    return bool(torch.all(diff < atol).item())


__all__ = ["I", "X", "Y", "Z", "H", "S", "T", "RX", "RY", "RZ", "is_unitary"]
