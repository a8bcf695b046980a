"""Gate catalog, matrices and statevector kernels."""

from .descriptors import DEFAULT_ANGLE, Gate, GateInfo, GateKind, gate_catalog
from .kernels import apply_gate
from .standard import RX, RY, RZ, H, I, S, T, X, Y, Z, is_unitary

__all__ = [
    "DEFAULT_ANGLE",
    "Gate",
    "GateInfo",
    "GateKind",
    "gate_catalog",
    "apply_gate",
    "I",
    "X",
    "Y",
    "Z",
    "H",
    "S",
    "T",
    "RX",
    "RY",
    "RZ",
    "is_unitary",
]
