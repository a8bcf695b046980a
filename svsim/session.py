"""Simulator session: the public facade over one amplitude register.

A :class:`SimulatorSession` owns exactly one :class:`AmplitudeVector`, one
``torch.Generator`` and one :class:`NoiseInjector`. Sessions share no mutable
state, so independent sessions may be driven from separate threads.

Example::

    sim = SimulatorSession(seed=7)
    sim.initialize(2)
    sim.apply_gate("H", 0)
    sim.apply_gate("CNOT", [0, 1])
    sim.measure().outcome  # 0 or 3
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import torch

from .backend.statevector import (
    AmplitudeVector,
    check_qubit,
    measure_probs,
    state_memory_bytes,
)
from .circuit.core import Circuit
from .core.device import Device, resolve_device
from .diagnostics.core import entanglement_entropy as _entanglement_entropy
from .diagnostics.core import fidelity as _fidelity
from .errors import (
    DimensionMismatch,
    InvalidArgument,
    InvalidState,
    SimulatorError,
)
from .gates.descriptors import Gate, GateKind
from .gates.kernels import apply_gate as _apply_kernel
from .logging import get_logger
from .measurement.engine import MeasurementResult, measure_all, measure_qubit
from .measurement.sampling import sample_counts
from .noise.injector import NoiseInjector, PauliError
from .noise.profile import ErrorRateProfile

logger = get_logger(__name__)


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


@dataclass(frozen=True)
class GateRecord:
    """One applied gate and the Pauli error injected after it, if any."""

    gate: Gate
    noise: Optional[PauliError] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gate": self.gate.to_dict(),
            "noise": self.noise.to_dict() if self.noise is not None else None,
        }


@dataclass(frozen=True)
class GateOutcome:
    """Per-request result of :meth:`SimulatorSession.apply_gates`."""

    index: int
    success: bool
    gate: Optional[Gate] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "success": self.success,
            "gate": self.gate.to_dict() if self.gate is not None else None,
            "error": self.error,
        }


@dataclass(frozen=True)
class SessionInfo:
    """
    Snapshot of a session's configuration and counters.

    ``n_qubits`` is None and the sizes are 0 while the session is
    uninitialized.
    """

    state: SessionState
    n_qubits: Optional[int]
    state_size: int
    memory_bytes: int
    gates_applied: int
    measurements: int
    noise_events: int
    noise: ErrorRateProfile
    device: str
    dtype: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "n_qubits": self.n_qubits,
            "state_size": self.state_size,
            "memory_bytes": self.memory_bytes,
            "gates_applied": self.gates_applied,
            "measurements": self.measurements,
            "noise_events": self.noise_events,
            "noise": self.noise.to_dict(),
            "device": self.device,
            "dtype": self.dtype,
            "metadata": dict(self.metadata),
        }


GateRequest = Any


def _request_args(request: GateRequest) -> Tuple[Any, Any, Any]:
    """Split a batch request into (gate-or-tag, qubits, angle)."""
    if isinstance(request, Gate):
        return request, None, None
    if isinstance(request, Mapping):
        tag = request.get("gate", request.get("name"))
        if tag is None:
            raise InvalidArgument(f"gate request has no 'gate' or 'name': {dict(request)!r}")
        return tag, request.get("qubits"), request.get("angle")
    if isinstance(request, (list, tuple)) and 2 <= len(request) <= 3:
        tag, qubits, *rest = request
        return tag, qubits, rest[0] if rest else None
    raise InvalidArgument(f"cannot interpret gate request {request!r}")


class SimulatorSession:
    """
    Statevector simulator over one register of n qubits.

    Parameters
    ----------
    device:
        Device, device name ("sv_cpu", "sv_cuda"), ``torch.device`` or None.
    dtype:
        Complex dtype of the amplitudes. Defaults to the device's complex dtype
        (complex128).
    seed:
        Seed for the session's random generator. Two sessions with the same
        seed and the same call sequence produce the same outcomes.
    max_qubits:
        Optional upper bound on the register width accepted by
        :meth:`initialize`.
    """

    def __init__(
        self,
        device: Device | torch.device | str | None = None,
        dtype: torch.dtype | None = None,
        seed: Optional[int] = None,
        max_qubits: Optional[int] = None,
    ) -> None:
        self._device = resolve_device(device)
        self._dtype = dtype if dtype is not None else self._device.complex_dtype
        if not self._dtype.is_complex:
            raise InvalidArgument(f"dtype must be complex, got {self._dtype}")

        if max_qubits is not None and (
            isinstance(max_qubits, bool) or not isinstance(max_qubits, int) or max_qubits < 1
        ):
            raise InvalidArgument(f"max_qubits must be an integer >= 1, got {max_qubits!r}")
        self._max_qubits = max_qubits

        self._generator = torch.Generator()
        if seed is None:
            self._seed = self._generator.seed()
        else:
            self._seed = int(seed)
            self._generator.manual_seed(self._seed)

        self._vector: Optional[AmplitudeVector] = None
        self._noise = NoiseInjector(ErrorRateProfile.ideal(), self._generator)
        self._history: List[GateRecord] = []
        self._measurements: List[MeasurementResult] = []

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> SessionState:
        return SessionState.UNINITIALIZED if self._vector is None else SessionState.READY

    @property
    def n_qubits(self) -> Optional[int]:
        return None if self._vector is None else self._vector.n_qubits

    @property
    def device(self) -> Device:
        return self._device

    @property
    def dtype(self) -> torch.dtype:
        return self._dtype

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def noise_profile(self) -> ErrorRateProfile:
        return self._noise.profile

    @property
    def history(self) -> Tuple[GateRecord, ...]:
        return tuple(self._history)

    @property
    def measurements(self) -> Tuple[MeasurementResult, ...]:
        return tuple(self._measurements)

    def _require_ready(self) -> AmplitudeVector:
        if self._vector is None:
            raise InvalidState("session is not initialized; call initialize() first")
        return self._vector

    # ------------------------------------------------------------- lifecycle

    def initialize(
        self,
        n_qubits: int,
        noise: ErrorRateProfile | Mapping[str, Any] | None = None,
    ) -> SessionInfo:
        """
        Allocate a register of ``n_qubits`` at |0...0⟩.

        Calling this again discards the current register and history.

        Raises
        ------
        InvalidArgument
            If n_qubits is not an integer >= 1, exceeds ``max_qubits``, or the
            noise profile is malformed.
        """
        if isinstance(n_qubits, bool) or not isinstance(n_qubits, int) or n_qubits < 1:
            raise InvalidArgument(f"n_qubits must be an integer >= 1, got {n_qubits!r}")
        if self._max_qubits is not None and n_qubits > self._max_qubits:
            raise InvalidArgument(
                f"n_qubits={n_qubits} exceeds max_qubits={self._max_qubits} "
                f"({state_memory_bytes(n_qubits, self._dtype)} bytes requested)"
            )

        if noise is None:
            profile = ErrorRateProfile.ideal()
        elif isinstance(noise, ErrorRateProfile):
            profile = noise
        elif isinstance(noise, Mapping):
            profile = ErrorRateProfile.from_dict(noise)
        else:
            raise InvalidArgument(f"noise must be an ErrorRateProfile or mapping, got {noise!r}")

        self._vector = AmplitudeVector.create(n_qubits, device=self._device, dtype=self._dtype)
        self._noise = NoiseInjector(profile, self._generator)
        self._history.clear()
        self._measurements.clear()

        logger.info(
            "initialized %d qubits (%d amplitudes) on %s, noise=%s",
            n_qubits,
            self._vector.size(),
            self._device.name,
            profile.to_dict()["model"],
        )
        return self.get_info()

    def reset(self) -> Optional[torch.Tensor]:
        """
        Return the register to |0...0⟩ with the same width and clear history.

        A no-op returning None when the session was never initialized.
        """
        if self._vector is None:
            return None

        n_qubits = self._vector.n_qubits
        self._vector = AmplitudeVector.create(n_qubits, device=self._device, dtype=self._dtype)
        self._history.clear()
        self._measurements.clear()
        logger.info("reset %d-qubit register", n_qubits)
        return self._vector.tensor.clone()

    # ----------------------------------------------------------------- gates

    def apply_gate(
        self,
        gate: Gate | GateKind | str,
        qubits: Optional[int | Sequence[int]] = None,
        angle: Optional[float] = None,
    ) -> torch.Tensor:
        """
        Apply one gate, then any stochastic noise it triggers.

        Parameters
        ----------
        gate:
            A prepared Gate or a tag such as "H", "cx", "rz".
        qubits:
            Qubit indices in role order (controls first). Required for tags.
        angle:
            Rotation angle in radians for RX/RY/RZ (default π/4).

        Returns
        -------
        A copy of the updated amplitude tensor.
        """
        vector = self._require_ready()
        try:
            if isinstance(gate, Gate):
                if qubits is not None or angle is not None:
                    raise InvalidArgument("qubits/angle must not be given with a prepared Gate")
                op = gate
            else:
                if qubits is None:
                    raise InvalidArgument(f"gate {gate!r} needs qubit indices")
                op = Gate.from_request(gate, qubits, angle)

            n_qubits = vector.n_qubits
            new_state = _apply_kernel(vector.tensor, op, n_qubits)
            new_state, error = self._noise.after_gate(new_state, op, n_qubits)
        except SimulatorError as exc:
            logger.debug("gate %r on %r rejected: %s", gate, qubits, exc)
            raise

        vector.swap(new_state)
        self._history.append(GateRecord(gate=op, noise=error))
        logger.debug("applied %s", op)
        return vector.tensor.clone()

    def apply_gates(
        self,
        requests: Iterable[GateRequest],
        stop_on_error: bool = False,
    ) -> List[GateOutcome]:
        """
        Apply a batch of gate requests in order.

        Each request is a Gate, a ``(tag, qubits[, angle])`` tuple or a mapping
        with ``gate``/``name``, ``qubits`` and optional ``angle``. Failures are
        recorded in the returned outcomes and the batch continues, unless
        ``stop_on_error`` is set, in which case the first failure is re-raised.
        """
        self._require_ready()
        outcomes: List[GateOutcome] = []

        for index, request in enumerate(requests):
            try:
                tag, qubits, angle = _request_args(request)
                self.apply_gate(tag, qubits, angle)
            except SimulatorError as exc:
                if stop_on_error:
                    raise
                outcomes.append(GateOutcome(index=index, success=False, error=str(exc)))
                continue
            outcomes.append(GateOutcome(index=index, success=True, gate=self._history[-1].gate))

        return outcomes

    def run_circuit(self, circuit: Circuit) -> torch.Tensor:
        """Apply every gate of ``circuit``; its width must match the register."""
        vector = self._require_ready()
        if circuit.n_qubits != vector.n_qubits:
            raise DimensionMismatch(
                f"circuit has {circuit.n_qubits} qubits, session has {vector.n_qubits}"
            )
        for op in circuit.ops:
            self.apply_gate(op)
        return self._require_ready().tensor.clone()

    # ----------------------------------------------------------- measurement

    def measure(self, qubit: Optional[int] = None) -> MeasurementResult:
        """
        Measure one qubit, or every qubit when ``qubit`` is None.

        The register collapses onto the sampled outcome. Readout noise only
        changes the reported ``outcome``; ``raw_outcome`` is what the register
        collapsed to.
        """
        vector = self._require_ready()
        n_qubits = vector.n_qubits

        if qubit is None:
            raw, new_state = measure_all(vector.tensor, self._generator)
            width = n_qubits
        else:
            check_qubit(qubit, n_qubits)
            raw, new_state = measure_qubit(vector.tensor, qubit, self._generator, n_qubits)
            width = 1

        outcome = self._noise.readout(raw, width)
        vector.swap(new_state)

        result = MeasurementResult(
            outcome=outcome,
            qubit=qubit,
            probabilities=measure_probs(new_state),
            raw_outcome=raw,
        )
        self._measurements.append(result)
        logger.debug(
            "measured %s -> %d (raw %d)",
            "all" if qubit is None else f"qubit {qubit}",
            outcome,
            raw,
        )
        return result

    def sample(self, shots: int) -> Dict[int, int]:
        """Draw ``shots`` full-register samples without collapsing the state."""
        vector = self._require_ready()
        return sample_counts(measure_probs(vector.tensor), shots, self._generator)

    # -------------------------------------------------------------- read-only

    def get_state(self, head: Optional[int] = None) -> torch.Tensor:
        """Return a copy of the amplitudes, optionally only the first ``head``."""
        vector = self._require_ready()
        tensor = vector.tensor
        if head is not None:
            if isinstance(head, bool) or not isinstance(head, int) or head < 0:
                raise InvalidArgument(f"head must be a non-negative integer, got {head!r}")
            tensor = tensor[:head]
        return tensor.clone()

    def get_probabilities(self) -> torch.Tensor:
        return measure_probs(self._require_ready().tensor)

    def get_info(self) -> SessionInfo:
        noise_events = sum(1 for record in self._history if record.noise is not None)
        if self._vector is None:
            n_qubits, size, nbytes = None, 0, 0
        else:
            n_qubits = self._vector.n_qubits
            size = self._vector.size()
            nbytes = state_memory_bytes(n_qubits, self._dtype)

        return SessionInfo(
            state=self.state,
            n_qubits=n_qubits,
            state_size=size,
            memory_bytes=nbytes,
            gates_applied=len(self._history),
            measurements=len(self._measurements),
            noise_events=noise_events,
            noise=self._noise.profile,
            device=self._device.name,
            dtype=str(self._dtype).replace("torch.", ""),
            metadata={"seed": self._seed, "max_qubits": self._max_qubits},
        )

    def fidelity(self, target: torch.Tensor | Sequence) -> float:
        """|⟨target|ψ⟩|² against a normalized copy of ``target``."""
        return _fidelity(self._require_ready().tensor, target)

    def entanglement_entropy(self, qubit: int) -> float:
        vector = self._require_ready()
        return _entanglement_entropy(vector.tensor, qubit, vector.n_qubits)

    def __repr__(self) -> str:
        return (
            f"SimulatorSession(n_qubits={self.n_qubits}, device={self._device.name!r}, "
            f"noise={self._noise.profile})"
        )


__all__ = [
    "GateOutcome",
    "GateRecord",
    "SessionInfo",
    "SessionState",
    "SimulatorSession",
]
