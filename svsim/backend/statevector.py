"""Amplitude storage for pure statevectors.

A state over ``n`` qubits is a 1-D complex tensor of length ``2**n``.
Convention: qubit ``i`` is bit ``i`` of the basis index (qubit 0 is the least
significant bit), so in a 2-qubit state |q1 q0⟩ qubit 0 is the rightmost bit.

No gate logic lives here; kernels in :mod:`svsim.gates.kernels` produce new
tensors and :class:`AmplitudeVector` swaps them in.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np
import torch

from ..core.device import Device, resolve_device
from ..errors import DimensionMismatch, IndexOutOfRange, InvalidArgument


def _check_n_qubits(n_qubits: object) -> int:
    if isinstance(n_qubits, bool) or not isinstance(n_qubits, int):
        raise InvalidArgument(
            f"n_qubits must be a non-negative integer, got {n_qubits!r}"
        )
    if n_qubits < 0:
        raise InvalidArgument(f"n_qubits must be >= 0, got {n_qubits}")
    return n_qubits


def infer_n_qubits(state: torch.Tensor) -> int:
    """
    Infer the number of qubits n from a statevector of length 2**n.

    Raises
    ------
    InvalidArgument
        If state is not 1D or its length is not a power of 2.
    """
    if state.ndim != 1:
        raise InvalidArgument("Statevector must be a 1D tensor.")

    dim = state.shape[0]
    if dim <= 0 or dim & (dim - 1) != 0:
        raise InvalidArgument(f"Statevector length must be a power of 2, got {dim}.")

    return int(dim).bit_length() - 1


def state_memory_bytes(
    n_qubits: int,
    dtype: torch.dtype = torch.complex128,
) -> int:
    """
    Return the number of bytes needed to hold a 2**n_qubits amplitude vector.

    Kernels allocate one scratch buffer of the same size while they run, so
    peak usage during a gate is twice this figure.
    """
    n_qubits = _check_n_qubits(n_qubits)
    itemsize = torch.empty((), dtype=dtype).element_size()
    return (1 << n_qubits) * itemsize


def zero_state(
    n_qubits: int,
    device: Device | torch.device | str | None = None,
    dtype: torch.dtype | None = None,
) -> torch.Tensor:
    """
    Create the basis state |0...0⟩ for n_qubits.

    Args:
        n_qubits: Number of qubits (>= 0).
        device: Device specification. Can be Device, str, torch.device, or None.
        dtype: Complex dtype. Defaults to the device's complex dtype.

    Returns:
        A complex tensor of shape (2**n_qubits,) with amplitude 1 at index 0.

    Raises:
        InvalidArgument: If n_qubits is not a non-negative integer.
    """
    n_qubits = _check_n_qubits(n_qubits)
    qdevice = resolve_device(device)

    if dtype is None:
        dtype = qdevice.complex_dtype

    state = torch.zeros(1 << n_qubits, dtype=dtype, device=qdevice.as_torch_device())
    state[0] = 1.0 + 0.0j
    return state


def measure_probs(state: torch.Tensor) -> torch.Tensor:
    """
    Return the Born probabilities |state[i]|² of every basis state.

    The result is not renormalized; for a valid state it already sums to 1.
    """
    if not torch.is_complex(state):
        raise InvalidArgument(f"state must be complex dtype, got {state.dtype}")
    return (state.abs() ** 2).contiguous()


def qubit_marginal(
    state: torch.Tensor,
    qubit: int,
    n_qubits: int | None = None,
) -> torch.Tensor:
    """
    Return the marginal distribution [P(bit=0), P(bit=1)] of one qubit.

    The probabilities are summed over all basis states grouped by the value of
    the target bit.
    """
    if n_qubits is None:
        n_qubits = infer_n_qubits(state)
    check_qubit(qubit, n_qubits)

    probs = measure_probs(state)
    left_size = 1 << (n_qubits - 1 - qubit)
    right_size = 1 << qubit
    return probs.reshape(left_size, 2, right_size).sum(dim=(0, 2))


def check_qubit(qubit: object, n_qubits: int) -> int:
    """Validate a qubit index against a register of n_qubits."""
    if isinstance(qubit, bool) or not isinstance(qubit, int):
        raise InvalidArgument(f"qubit index must be an integer, got {qubit!r}")
    if qubit < 0 or qubit >= n_qubits:
        raise IndexOutOfRange(f"qubit index {qubit} out of range [0, {n_qubits})")
    return qubit


def amplitudes_to_pairs(state: torch.Tensor) -> list[tuple[float, float]]:
    """Serialize amplitudes as (real, imag) pairs for crossing a process boundary."""
    flat = state.detach().to("cpu").reshape(-1)
    return list(zip(flat.real.tolist(), flat.imag.tolist()))


def pairs_to_amplitudes(
    pairs: Iterable[Sequence[float]],
    dtype: torch.dtype = torch.complex128,
    device: torch.device | None = None,
) -> torch.Tensor:
    """Inverse of :func:`amplitudes_to_pairs`."""
    values = []
    for pair in pairs:
        if len(pair) != 2:
            raise InvalidArgument(f"amplitude pair must have 2 entries, got {pair!r}")
        values.append(complex(float(pair[0]), float(pair[1])))
    return torch.tensor(values, dtype=dtype, device=device)


def coerce_amplitudes(
    values: torch.Tensor | np.ndarray | Sequence,
    dtype: torch.dtype = torch.complex128,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Convert a caller-supplied vector into a 1-D complex tensor.

    Accepts a tensor, a numpy array, a sequence of numbers (real or complex),
    or a sequence of (real, imag) pairs.
    """
    if isinstance(values, np.ndarray):
        values = torch.from_numpy(np.ascontiguousarray(values))
    if isinstance(values, torch.Tensor):
        tensor = values.to(dtype=dtype, device=device)
    else:
        items = list(values)
        if items and all(
            isinstance(v, (list, tuple)) and not isinstance(v, str) for v in items
        ):
            tensor = pairs_to_amplitudes(items, dtype=dtype, device=device)
        else:
            tensor = torch.tensor([complex(v) for v in items], dtype=dtype, device=device)

    if tensor.ndim != 1:
        raise InvalidArgument(f"amplitude vector must be 1D, got shape {tuple(tensor.shape)}")
    return tensor


class AmplitudeVector:
    """
    Owner of the 2**n complex amplitudes of one register.

    The vector is only ever replaced wholesale through :meth:`swap`; kernels
    never write into the storage they read from.
    """

    def __init__(self, tensor: torch.Tensor) -> None:
        if not torch.is_complex(tensor):
            raise InvalidArgument(f"amplitudes must be complex dtype, got {tensor.dtype}")
        self._n_qubits = infer_n_qubits(tensor)
        self._tensor = tensor

    @classmethod
    def create(
        cls,
        n_qubits: int,
        device: Device | torch.device | str | None = None,
        dtype: torch.dtype | None = None,
    ) -> "AmplitudeVector":
        """Allocate a vector for n_qubits set to |0...0⟩."""
        return cls(zero_state(n_qubits, device=device, dtype=dtype))

    @property
    def n_qubits(self) -> int:
        return self._n_qubits

    @property
    def tensor(self) -> torch.Tensor:
        """The live amplitude tensor. Callers must not mutate it."""
        return self._tensor

    @property
    def dtype(self) -> torch.dtype:
        return self._tensor.dtype

    @property
    def device(self) -> torch.device:
        return self._tensor.device

    def size(self) -> int:
        return self._tensor.shape[0]

    def __len__(self) -> int:
        return self.size()

    def _check_index(self, index: object) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexOutOfRange(f"amplitude index must be an integer, got {index!r}")
        if index < 0 or index >= self.size():
            raise IndexOutOfRange(
                f"amplitude index {index} out of range [0, {self.size()})"
            )
        return index

    def get(self, index: int) -> complex:
        return complex(self._tensor[self._check_index(index)].item())

    def set(self, index: int, value: complex) -> None:
        self._tensor[self._check_index(index)] = complex(value)

    def swap(self, new_tensor: torch.Tensor) -> None:
        """Replace the storage with a freshly computed buffer of the same shape."""
        if new_tensor.shape != self._tensor.shape:
            raise DimensionMismatch(
                f"replacement buffer has shape {tuple(new_tensor.shape)}, "
                f"expected {tuple(self._tensor.shape)}"
            )
        self._tensor = new_tensor

    def copy(self) -> "AmplitudeVector":
        return AmplitudeVector(self._tensor.clone())

    def norm(self) -> float:
        return math.sqrt(float(measure_probs(self._tensor).sum()))

    def probabilities(self) -> torch.Tensor:
        return measure_probs(self._tensor)

    def to_pairs(self) -> list[tuple[float, float]]:
        return amplitudes_to_pairs(self._tensor)

    def __repr__(self) -> str:
        return f"AmplitudeVector(n_qubits={self._n_qubits}, dtype={self.dtype})"


__all__ = [
    "AmplitudeVector",
    "amplitudes_to_pairs",
    "check_qubit",
    "coerce_amplitudes",
    "infer_n_qubits",
    "measure_probs",
    "pairs_to_amplitudes",
    "qubit_marginal",
    "state_memory_bytes",
    "zero_state",
]
