"""Circuit IR: an ordered list of gate applications over a fixed register."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import torch

from ..backend.statevector import check_qubit, zero_state
from ..core.device import Device
from ..errors import InvalidArgument
from ..gates.descriptors import Gate, GateKind
from ..gates.kernels import apply_gate


class Circuit:
    """
    Simple circuit IR: an ordered list of :class:`Gate` objects on n_qubits.

    Gates are validated when they are added, including the qubit range, so a
    circuit that was built successfully can always be applied to a register
    of the same width.
    """

    def __init__(self, n_qubits: int) -> None:
        if isinstance(n_qubits, bool) or not isinstance(n_qubits, int) or n_qubits < 1:
            raise InvalidArgument(f"Circuit requires n_qubits >= 1, got {n_qubits!r}.")

        self._n_qubits = n_qubits
        self._ops: List[Gate] = []

    @property
    def n_qubits(self) -> int:
        """Return the number of qubits in this circuit."""
        return self._n_qubits

    @property
    def ops(self) -> Tuple[Gate, ...]:
        """Return a read-only tuple of all gate operations."""
        return tuple(self._ops)

    def add_gate(
        self,
        gate: Gate | GateKind | str,
        qubits: Optional[int | Sequence[int]] = None,
        angle: Optional[float] = None,
    ) -> "Circuit":
        """
        Append a gate application to the circuit.

        Parameters
        ----------
        gate:
            A prepared Gate, or a tag such as "H", "cx" or "RZ".
        qubits:
            Qubit indices in role order (controls first). Required when
            ``gate`` is a tag.
        angle:
            Rotation angle for RX/RY/RZ.

        Returns
        -------
        The circuit itself, so calls can be chained.
        """
        if isinstance(gate, Gate):
            if qubits is not None or angle is not None:
                raise InvalidArgument("qubits/angle must not be given with a prepared Gate")
            op = gate
        else:
            if qubits is None:
                raise InvalidArgument(f"gate {gate!r} needs qubit indices")
            op = Gate.from_request(gate, qubits, angle)

        for q in op.qubits:
            check_qubit(q, self._n_qubits)

        self._ops.append(op)
        return self

    def copy(self) -> "Circuit":
        """Return a copy of this circuit. Gates are immutable, so they are shared."""
        new = Circuit(self._n_qubits)
        new._ops.extend(self._ops)
        return new

    def __len__(self) -> int:
        return len(self._ops)

    def __iter__(self):
        return iter(self._ops)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Circuit):
            return NotImplemented
        return self._n_qubits == other._n_qubits and self._ops == other._ops

    def __repr__(self) -> str:
        return f"Circuit(n_qubits={self._n_qubits}, gates={len(self._ops)})"

    def gate_counts(self) -> Dict[str, int]:
        """Return a dictionary mapping gate names to their counts."""
        counts: Dict[str, int] = {}
        for op in self._ops:
            counts[op.name] = counts.get(op.name, 0) + 1
        return counts

    def depth(self) -> int:
        """
        Number of sequential layers when gates on disjoint qubits share a layer.
        """
        if not self._ops:
            return 0

        qubit_layer = [0] * self._n_qubits
        max_layer = 0

        for op in self._ops:
            layer = max(qubit_layer[q] for q in op.qubits) + 1
            for q in op.qubits:
                qubit_layer[q] = layer
            max_layer = max(max_layer, layer)

        return max_layer

    def simulate_state(
        self,
        device: Optional[Device] = None,
        dtype: torch.dtype | None = None,
    ) -> torch.Tensor:
        """
        Simulate this circuit from |0...0⟩ without noise or measurement.

        Returns
        -------
        state:
            Complex tensor of shape (2**n_qubits,) on the chosen device.
        """
        state = zero_state(self._n_qubits, device=device, dtype=dtype)
        for op in self._ops:
            state = apply_gate(state, op, self._n_qubits)
        return state

    def to_text_diagram(self) -> str:
        """
        Return a simple ASCII diagram of the circuit.

        Each qubit is a horizontal wire and each gate takes one column.
        Controls are drawn as '●', CNOT/TOFFOLI targets as '⊕' and swapped
        qubits as '×'.
        """
        wire_segments: List[List[str]] = [[] for _ in range(self._n_qubits)]

        for op in self._ops:
            for q in range(self._n_qubits):
                wire_segments[q].append("───")

            for role, q in zip(op.kind.roles, op.qubits):
                if role.startswith("control"):
                    symbol = "●"
                elif op.kind in (GateKind.CNOT, GateKind.TOFFOLI):
                    symbol = "⊕"
                elif op.kind in (GateKind.SWAP, GateKind.FREDKIN):
                    symbol = "×"
                elif op.kind is GateKind.CZ:
                    symbol = "●"
                else:
                    # first character keeps the column width fixed
                    symbol = op.name[0]
                wire_segments[q][-1] = f"─{symbol}─"

        return "\n".join(
            f"q{q}: " + "".join(wire_segments[q]) for q in range(self._n_qubits)
        )


__all__ = ["Circuit"]
