"""svsim - a PyTorch-native statevector quantum circuit simulator."""

__version__ = "0.1.0"

# Backend storage
from .backend import (
    AmplitudeVector,
    amplitudes_to_pairs,
    measure_probs,
    pairs_to_amplitudes,
    state_memory_bytes,
    zero_state,
)

# Circuit IR
from .circuit import Circuit

# Core abstractions
from .core import Device, default_device, device

# Diagnostics
from .diagnostics import (
    assert_normalized,
    debug_context,
    entanglement_entropy,
    fidelity,
    is_debug_enabled,
    set_debug_enabled,
)

# Errors
from .errors import (
    DegenerateState,
    DimensionMismatch,
    IndexOutOfRange,
    InvalidArgument,
    InvalidState,
    SimulatorError,
    UnsupportedGate,
)

# Gates
from .gates import DEFAULT_ANGLE, Gate, GateInfo, GateKind, apply_gate, gate_catalog

# I/O
from .io import (
    ProgramResult,
    circuit_to_json,
    dump_json_program,
    json_to_circuit,
    load_json_program,
    run_program,
    validate_json_program,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Measurement
from .measurement import MeasurementResult, measure_all, measure_qubit, sample_counts

# Noise
from .noise import ErrorRateProfile, NoiseInjector, PauliError

# Session facade
from .session import GateOutcome, GateRecord, SessionInfo, SessionState, SimulatorSession

__all__ = [
    "__version__",
    "AmplitudeVector",
    "amplitudes_to_pairs",
    "measure_probs",
    "pairs_to_amplitudes",
    "state_memory_bytes",
    "zero_state",
    "Circuit",
    "Device",
    "default_device",
    "device",
    "assert_normalized",
    "debug_context",
    "entanglement_entropy",
    "fidelity",
    "is_debug_enabled",
    "set_debug_enabled",
    "DegenerateState",
    "DimensionMismatch",
    "IndexOutOfRange",
    "InvalidArgument",
    "InvalidState",
    "SimulatorError",
    "UnsupportedGate",
    "DEFAULT_ANGLE",
    "Gate",
    "GateInfo",
    "GateKind",
    "apply_gate",
    "gate_catalog",
    "ProgramResult",
    "circuit_to_json",
    "dump_json_program",
    "json_to_circuit",
    "load_json_program",
    "run_program",
    "validate_json_program",
    "configure_logging",
    "get_logger",
    "set_log_level",
    "MeasurementResult",
    "measure_all",
    "measure_qubit",
    "sample_counts",
    "ErrorRateProfile",
    "NoiseInjector",
    "PauliError",
    "GateOutcome",
    "GateRecord",
    "SessionInfo",
    "SessionState",
    "SimulatorSession",
]
