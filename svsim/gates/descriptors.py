"""Gate descriptors: a closed catalog of gate kinds plus their payload.

A :class:`Gate` records which kind of gate is applied to which qubits and,
for rotations, with which angle. Construction validates everything that can
be checked without knowing the register width; qubit range checks happen at
application time.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..errors import InvalidArgument, UnsupportedGate

DEFAULT_ANGLE = math.pi / 4


class GateKind(Enum):
    """Every gate the kernel library can apply."""

    X = "X"
    Y = "Y"
    Z = "Z"
    H = "H"
    S = "S"
    T = "T"
    RX = "RX"
    RY = "RY"
    RZ = "RZ"
    CNOT = "CNOT"
    CZ = "CZ"
    SWAP = "SWAP"
    TOFFOLI = "TOFFOLI"
    FREDKIN = "FREDKIN"

    @property
    def roles(self) -> Tuple[str, ...]:
        """Names of the qubit slots, in the order qubits are passed."""
        return _ROLES[self]

    @property
    def arity(self) -> int:
        return len(_ROLES[self])

    @property
    def parametric(self) -> bool:
        return self in _PARAMETRIC

    @property
    def is_single_qubit(self) -> bool:
        return self.arity == 1

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def parse(cls, tag: "GateKind | str") -> "GateKind":
        """
        Resolve a gate tag to a GateKind.

        Tags are case-insensitive and accept common synonyms (CX, NOT, CCX,
        CCNOT, CSWAP).

        Raises
        ------
        UnsupportedGate
            If the tag does not name a known gate.
        """
        if isinstance(tag, GateKind):
            return tag
        if not isinstance(tag, str):
            raise UnsupportedGate(tag)

        name = tag.strip().upper()
        name = _ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedGate(tag) from None


_ROLES: Dict[GateKind, Tuple[str, ...]] = {
    GateKind.X: ("target",),
    GateKind.Y: ("target",),
    GateKind.Z: ("target",),
    GateKind.H: ("target",),
    GateKind.S: ("target",),
    GateKind.T: ("target",),
    GateKind.RX: ("target",),
    GateKind.RY: ("target",),
    GateKind.RZ: ("target",),
    GateKind.CNOT: ("control", "target"),
    GateKind.CZ: ("control", "target"),
    GateKind.SWAP: ("qubit1", "qubit2"),
    GateKind.TOFFOLI: ("control1", "control2", "target"),
    GateKind.FREDKIN: ("control", "qubit1", "qubit2"),
}

_PARAMETRIC = frozenset({GateKind.RX, GateKind.RY, GateKind.RZ})

_DESCRIPTIONS: Dict[GateKind, str] = {
    GateKind.X: "Pauli-X gate",
    GateKind.Y: "Pauli-Y gate",
    GateKind.Z: "Pauli-Z gate",
    GateKind.H: "Hadamard gate",
    GateKind.S: "S gate (π/2 phase)",
    GateKind.T: "T gate (π/4 phase)",
    GateKind.RX: "Rotation-X gate",
    GateKind.RY: "Rotation-Y gate",
    GateKind.RZ: "Rotation-Z gate",
    GateKind.CNOT: "Controlled-NOT gate",
    GateKind.CZ: "Controlled-Z gate",
    GateKind.SWAP: "SWAP gate",
    GateKind.TOFFOLI: "Toffoli gate (CCNOT)",
    GateKind.FREDKIN: "Fredkin gate (CSWAP)",
}

_ALIASES: Dict[str, str] = {
    "CX": "CNOT",
    "NOT": "X",
    "CCX": "TOFFOLI",
    "CCNOT": "TOFFOLI",
    "CSWAP": "FREDKIN",
}


def _is_index(value: Any) -> bool:
    """True for int-like scalars (Python or numpy ints), never for bools."""
    if isinstance(value, bool):
        return False
    try:
        operator.index(value)
    except TypeError:
        return False
    return True


def _qubit_index(kind: GateKind, value: Any) -> int:
    if not _is_index(value):
        raise InvalidArgument(f"{kind.value}: qubit indices must be integers, got {value!r}")
    return operator.index(value)


@dataclass(frozen=True)
class Gate:
    """
    A single gate application.

    Attributes
    ----------
    kind:
        Which gate to apply.
    qubits:
        Qubit indices in the order given by ``kind.roles``.
    angle:
        Rotation angle in radians for RX/RY/RZ; None for every other kind.
        Rotations built without an angle get π/4.
    """

    kind: GateKind
    qubits: Tuple[int, ...]
    angle: Optional[float] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, GateKind):
            raise InvalidArgument(f"kind must be a GateKind, got {self.kind!r}")

        try:
            qubits = tuple(self.qubits)
        except TypeError:
            raise InvalidArgument(
                f"{self.kind.value}: qubits must be a sequence of ints, got {self.qubits!r}"
            ) from None
        object.__setattr__(
            self, "qubits", tuple(_qubit_index(self.kind, q) for q in qubits)
        )

        if len(self.qubits) != self.kind.arity:
            raise InvalidArgument(
                f"{self.kind.value} acts on {self.kind.arity} qubit(s) "
                f"{self.kind.roles}, got {len(self.qubits)}: {self.qubits}"
            )
        if len(set(self.qubits)) != len(self.qubits):
            raise InvalidArgument(
                f"{self.kind.value}: qubit indices must be distinct, got {self.qubits}"
            )

        if self.kind.parametric:
            angle = DEFAULT_ANGLE if self.angle is None else self.angle
            if isinstance(angle, bool) or not isinstance(angle, (int, float)):
                raise InvalidArgument(
                    f"{self.kind.value}: angle must be a real number, got {angle!r}"
                )
            if not math.isfinite(angle):
                raise InvalidArgument(f"{self.kind.value}: angle must be finite, got {angle}")
            object.__setattr__(self, "angle", float(angle))
        elif self.angle is not None:
            raise InvalidArgument(f"{self.kind.value} does not take an angle")

    @classmethod
    def from_request(
        cls,
        tag: GateKind | str,
        qubits: int | Sequence[int],
        angle: Optional[float] = None,
    ) -> "Gate":
        """
        Build a Gate from a loosely typed request (tag string + indices).

        ``qubits`` is a single index or a sequence of indices. Any int-like
        value (numpy integers included) is accepted and stored as ``int``.

        Raises
        ------
        UnsupportedGate
            If ``tag`` is unknown.
        InvalidArgument
            If the qubits are not integers, or the qubit count, distinctness
            or angle is wrong.
        """
        kind = GateKind.parse(tag)
        if _is_index(qubits):
            q_tuple: Tuple[Any, ...] = (qubits,)
        elif isinstance(qubits, (str, bytes)):
            raise InvalidArgument(
                f"{kind.value}: qubits must be an int or a sequence of ints, got {qubits!r}"
            )
        else:
            try:
                q_tuple = tuple(qubits)
            except TypeError:
                raise InvalidArgument(
                    f"{kind.value}: qubits must be an int or a sequence of ints, got {qubits!r}"
                ) from None
        return cls(kind=kind, qubits=q_tuple, angle=angle)

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def is_single_qubit(self) -> bool:
        return self.kind.is_single_qubit

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "qubits": list(self.qubits)}
        if self.angle is not None:
            out["angle"] = self.angle
        return out

    def __str__(self) -> str:
        args = f"({self.angle:g})" if self.angle is not None else ""
        return f"{self.name}{args}{list(self.qubits)}"


@dataclass(frozen=True)
class GateInfo:
    """Catalog entry describing one gate kind to callers."""

    name: str
    description: str
    roles: Tuple[str, ...]
    parametric: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": list(self.roles),
            "options": ["angle"] if self.parametric else [],
        }


def gate_catalog() -> List[GateInfo]:
    """Return one GateInfo per supported gate kind, in declaration order."""
    return [
        GateInfo(
            name=kind.value,
            description=kind.description,
            roles=kind.roles,
            parametric=kind.parametric,
        )
        for kind in GateKind
    ]


__all__ = [
    "DEFAULT_ANGLE",
    "Gate",
    "GateInfo",
    "GateKind",
    "gate_catalog",
]
