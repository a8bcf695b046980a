"""JSON program import, export and execution.

A JSON program is a circuit plus an optional noise profile and an optional
final measurement. See schema.py for the format.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..backend.statevector import amplitudes_to_pairs
from ..circuit.core import Circuit
from ..errors import InvalidArgument
from ..logging import get_logger
from ..measurement.engine import MeasurementResult
from ..noise.profile import ErrorRateProfile
from ..session import SessionInfo, SimulatorSession
from .schema import JSON_VERSION, validate_json_program
from .utils import parse_param

logger = get_logger(__name__)

Measure = Union[None, int, str]
PathLike = Union[str, "os.PathLike[str]"]


def circuit_to_json(
    circuit: Circuit,
    metadata: Optional[dict] = None,
    measure: Measure = None,
    noise: Optional[ErrorRateProfile] = None,
) -> dict:
    """
    Convert a Circuit to a JSON program object.

    Qubits in a control role go to ``controls``, the rest to ``targets``;
    reading them back as controls + targets restores the original order.
    """
    gates_list: List[Dict[str, Any]] = []

    for op in circuit.ops:
        controls = [q for role, q in zip(op.kind.roles, op.qubits) if role.startswith("control")]
        targets = [q for role, q in zip(op.kind.roles, op.qubits) if not role.startswith("control")]

        gate_obj: Dict[str, Any] = {"name": op.name, "targets": targets}
        if controls:
            gate_obj["controls"] = controls
        if op.angle is not None:
            gate_obj["params"] = [float(op.angle)]
        gates_list.append(gate_obj)

    result: Dict[str, Any] = {
        "version": JSON_VERSION,
        "n_qubits": circuit.n_qubits,
        "gates": gates_list,
        "measure": measure,
    }
    if noise is not None:
        result["noise"] = noise.to_dict()
    if metadata:
        result["metadata"] = metadata

    return result


def json_to_circuit(obj: dict) -> Circuit:
    """
    Convert a JSON program object to a Circuit.

    Raises
    ------
    InvalidArgument
        If the object is structurally invalid or a gate has the wrong number
        of qubits or parameters.
    UnsupportedGate
        If a gate name is unknown.
    """
    validate_json_program(obj)

    circuit = Circuit(obj["n_qubits"])
    for i, gate_obj in enumerate(obj["gates"]):
        qubits = list(gate_obj.get("controls", [])) + list(gate_obj["targets"])

        params = [parse_param(p) for p in gate_obj.get("params", [])]
        if len(params) > 1:
            raise InvalidArgument(
                f"Gate at index {i} ({gate_obj['name']}): at most one parameter is supported, "
                f"got {len(params)}."
            )
        angle = params[0] if params else None

        circuit.add_gate(gate_obj["name"], qubits, angle)

    return circuit


def program_noise(obj: Mapping[str, Any]) -> ErrorRateProfile:
    """Return the program's noise profile (ideal when absent)."""
    noise = obj.get("noise")
    if noise is None:
        return ErrorRateProfile.ideal()
    return ErrorRateProfile.from_dict(noise)


def dump_json_program(
    program: Union[Circuit, dict],
    path: PathLike,
    **kwargs: Any,
) -> None:
    """
    Write a JSON program to ``path``.

    ``program`` may be a Circuit (extra keyword arguments go to
    :func:`circuit_to_json`) or an already built program object.
    """
    if isinstance(program, Circuit):
        obj = circuit_to_json(program, **kwargs)
    else:
        validate_json_program(program)
        obj = program

    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)


def load_json_program(path: PathLike) -> dict:
    """
    Read and validate a JSON program from ``path``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    InvalidArgument
        If the file is not valid JSON or not a valid program.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"JSON program file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise InvalidArgument(f"Invalid JSON in file {path}: {e}") from e

    validate_json_program(obj)
    return obj


@dataclass(frozen=True)
class ProgramResult:
    """Everything a program run produced."""

    state: List[Tuple[float, float]]
    probabilities: List[float]
    measurement: Optional[MeasurementResult]
    info: SessionInfo

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": [list(pair) for pair in self.state],
            "probabilities": list(self.probabilities),
            "measurement": self.measurement.to_dict() if self.measurement is not None else None,
            "info": self.info.to_dict(),
        }


def run_program(
    program: Union[dict, PathLike],
    mode: str = "gates",
    seed: Optional[int] = None,
    **session_kwargs: Any,
) -> ProgramResult:
    """
    Simulate a JSON program in a fresh session.

    Parameters
    ----------
    program:
        A program object or a path to a JSON program file.
    mode:
        ``"gates"`` applies the gates only. ``"measurement"`` also performs the
        program's ``measure`` step (all qubits when it is absent).
    seed:
        Seed for the session's random generator.
    """
    if mode not in ("gates", "measurement"):
        raise InvalidArgument(f"mode must be 'gates' or 'measurement', got {mode!r}")

    if isinstance(program, dict):
        obj = program
    else:
        obj = load_json_program(program)

    circuit = json_to_circuit(obj)

    session = SimulatorSession(seed=seed, **session_kwargs)
    session.initialize(circuit.n_qubits, noise=program_noise(obj))
    session.run_circuit(circuit)

    measurement = None
    if mode == "measurement":
        target = obj.get("measure", "all")
        measurement = session.measure(None if target in (None, "all") else target)

    logger.debug(
        "ran program: %d qubits, %d gates, mode=%s", circuit.n_qubits, len(circuit), mode
    )
    return ProgramResult(
        state=amplitudes_to_pairs(session.get_state()),
        probabilities=session.get_probabilities().tolist(),
        measurement=measurement,
        info=session.get_info(),
    )


__all__ = [
    "ProgramResult",
    "circuit_to_json",
    "dump_json_program",
    "json_to_circuit",
    "load_json_program",
    "program_noise",
    "run_program",
]
