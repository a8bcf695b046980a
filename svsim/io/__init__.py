"""JSON program import, export and execution, plus amplitude serialization."""

from ..backend.statevector import amplitudes_to_pairs, pairs_to_amplitudes
from .json_ir import (
    ProgramResult,
    circuit_to_json,
    dump_json_program,
    json_to_circuit,
    load_json_program,
    program_noise,
    run_program,
)
from .schema import JSON_VERSION, json_program_schema, validate_json_program

__all__ = [
    "amplitudes_to_pairs",
    "pairs_to_amplitudes",
    "JSON_VERSION",
    "ProgramResult",
    "circuit_to_json",
    "json_to_circuit",
    "dump_json_program",
    "load_json_program",
    "program_noise",
    "run_program",
    "json_program_schema",
    "validate_json_program",
]
