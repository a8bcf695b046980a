"""JSON program schema and structural validation.

Schema Structure:
    {
        "version": "svsim-json-1.0",
        "n_qubits": <integer >= 1>,
        "gates": [
            {
                "name": <string>,
                "targets": [<integer>, ...],
                "controls": [<integer>, ...],  # optional, listed before targets
                "params": [<number or angle string>, ...],  # optional, radians
                "label": <string>,             # optional, user metadata
            },
            ...
        ],
        "measure": null | <qubit integer> | "all",   # optional
        "noise": {"single_qubit": <p>, "multi_qubit": <p>, "measurement": <p>},
        "metadata": {...}                             # optional
    }

Qubit ordering convention:
    Qubit 0 is the least significant bit of the basis index, matching the
    statevector backend.
"""

from __future__ import annotations

from typing import Any, Dict

from ..errors import InvalidArgument
from ..gates.descriptors import GateKind

JSON_VERSION = "svsim-json-1.0"

_GATE_KEYS = {"name", "targets", "controls", "params", "label"}
_PROGRAM_KEYS = {"version", "n_qubits", "gates", "measure", "noise", "metadata"}


def json_program_schema() -> dict:
    """
    Return a structural description of the JSON program format.

    This is documentation in dict form, not a JSON Schema validator.
    """
    return {
        "version": {"type": "string", "required": True, "value": JSON_VERSION},
        "n_qubits": {"type": "integer", "required": True, "min": 1},
        "gates": {
            "type": "list",
            "required": True,
            "items": {
                "name": {"type": "string", "required": True},
                "targets": {"type": "list", "required": True, "items": {"type": "integer", "min": 0}},
                "controls": {"type": "list", "required": False, "items": {"type": "integer", "min": 0}},
                "params": {"type": "list", "required": False, "items": {"type": "number|string"}},
                "label": {"type": "string", "required": False},
            },
        },
        "measure": {"type": "null|integer|'all'", "required": False},
        "noise": {"type": "dict", "required": False},
        "metadata": {"type": "dict", "required": False},
    }


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_index_list(i: int, gate: Dict[str, Any], key: str, n_qubits: int) -> None:
    if not isinstance(gate[key], list):
        raise InvalidArgument(f"Gate at index {i}: field {key!r} must be a list.")
    for j, q in enumerate(gate[key]):
        if not _is_int(q):
            raise InvalidArgument(
                f"Gate at index {i}: {key}[{j}] must be an integer, got {type(q).__name__}."
            )
        if q < 0 or q >= n_qubits:
            raise InvalidArgument(
                f"Gate at index {i}: {key}[{j}] = {q} is out of range [0, {n_qubits})."
            )


def validate_json_program(obj: Any) -> None:
    """
    Validate a JSON program object against the schema.

    Raises
    ------
    InvalidArgument
        If the object does not conform to the schema.
    UnsupportedGate
        If a gate name is not a known gate.
    """
    if not isinstance(obj, dict):
        raise InvalidArgument("JSON program must be a dictionary object.")

    unknown = set(obj) - _PROGRAM_KEYS
    if unknown:
        raise InvalidArgument(f"JSON program has unknown fields: {sorted(unknown)}.")

    if "version" not in obj:
        raise InvalidArgument("JSON program missing required field 'version'.")
    if obj["version"] != JSON_VERSION:
        raise InvalidArgument(
            f"Unsupported JSON program version {obj['version']!r}; expected {JSON_VERSION!r}."
        )

    if "n_qubits" not in obj:
        raise InvalidArgument("JSON program missing required field 'n_qubits'.")
    n_qubits = obj["n_qubits"]
    if not _is_int(n_qubits):
        raise InvalidArgument("Field 'n_qubits' must be an integer.")
    if n_qubits < 1:
        raise InvalidArgument(f"Field 'n_qubits' must be >= 1, got {n_qubits}.")

    if "gates" not in obj:
        raise InvalidArgument("JSON program missing required field 'gates'.")
    if not isinstance(obj["gates"], list):
        raise InvalidArgument("Field 'gates' must be a list.")

    for i, gate in enumerate(obj["gates"]):
        if not isinstance(gate, dict):
            raise InvalidArgument(f"Gate at index {i} must be a dictionary object.")

        extra = set(gate) - _GATE_KEYS
        if extra:
            raise InvalidArgument(f"Gate at index {i} has unknown fields: {sorted(extra)}.")

        if "name" not in gate:
            raise InvalidArgument(f"Gate at index {i} missing required field 'name'.")
        if not isinstance(gate["name"], str):
            raise InvalidArgument(f"Gate at index {i}: field 'name' must be a string.")
        GateKind.parse(gate["name"])

        if "targets" not in gate:
            raise InvalidArgument(f"Gate at index {i} missing required field 'targets'.")
        _check_index_list(i, gate, "targets", n_qubits)

        if "controls" in gate:
            _check_index_list(i, gate, "controls", n_qubits)

        if "params" in gate:
            if not isinstance(gate["params"], list):
                raise InvalidArgument(f"Gate at index {i}: field 'params' must be a list.")
            for j, p in enumerate(gate["params"]):
                if isinstance(p, bool) or not isinstance(p, (int, float, str)):
                    raise InvalidArgument(
                        f"Gate at index {i}: params[{j}] must be a number or angle string, "
                        f"got {type(p).__name__}."
                    )

        if "label" in gate and not isinstance(gate["label"], str):
            raise InvalidArgument(f"Gate at index {i}: field 'label' must be a string.")

    measure = obj.get("measure")
    if measure is not None and measure != "all":
        if not _is_int(measure):
            raise InvalidArgument(
                f"Field 'measure' must be null, a qubit index or 'all', got {measure!r}."
            )
        if measure < 0 or measure >= n_qubits:
            raise InvalidArgument(
                f"Field 'measure' = {measure} is out of range [0, {n_qubits})."
            )

    if "noise" in obj and not isinstance(obj["noise"], dict):
        raise InvalidArgument("Field 'noise' must be a dictionary.")

    if "metadata" in obj and not isinstance(obj["metadata"], dict):
        raise InvalidArgument("Field 'metadata' must be a dictionary.")


__all__ = ["JSON_VERSION", "json_program_schema", "validate_json_program"]
