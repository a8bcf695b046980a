"""Error-rate profiles for stochastic Pauli noise."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping

from ..errors import InvalidArgument


@dataclass(frozen=True)
class ErrorRateProfile:
    """
    Per-category error probabilities.

    Attributes
    ----------
    single_qubit:
        Probability that a single-qubit gate is followed by a random Pauli.
    multi_qubit:
        Probability that a two- or three-qubit gate is followed by a random
        Pauli on one of its qubits.
    measurement:
        Probability that each reported measurement bit is flipped.

    A profile with all three rates at zero is *ideal* and disables noise.
    """

    single_qubit: float = 0.0
    multi_qubit: float = 0.0
    measurement: float = 0.0

    def __post_init__(self) -> None:
        for field_name in ("single_qubit", "multi_qubit", "measurement"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidArgument(
                    f"{field_name} error rate must be a number, got {value!r}"
                )
            if not math.isfinite(value) or value < 0.0 or value > 1.0:
                raise InvalidArgument(
                    f"{field_name} error rate must lie in [0, 1], got {value}"
                )
            object.__setattr__(self, field_name, float(value))

    @classmethod
    def ideal(cls) -> "ErrorRateProfile":
        return cls()

    @classmethod
    def noisy(
        cls,
        single_qubit: float = 0.001,
        multi_qubit: float = 0.01,
        measurement: float = 0.005,
    ) -> "ErrorRateProfile":
        """Typical superconducting-device rates unless overridden."""
        return cls(single_qubit=single_qubit, multi_qubit=multi_qubit, measurement=measurement)

    @property
    def is_ideal(self) -> bool:
        return self.single_qubit == 0.0 and self.multi_qubit == 0.0 and self.measurement == 0.0

    def gate_rate(self, single_qubit_gate: bool) -> float:
        return self.single_qubit if single_qubit_gate else self.multi_qubit

    def to_dict(self) -> Dict[str, Any]:
        return {"model": "ideal" if self.is_ideal else "pauli", **asdict(self)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ErrorRateProfile":
        """
        Build a profile from a mapping.

        Unknown keys raise InvalidArgument; ``model: "ideal"`` forces the
        ideal profile regardless of the rates.
        """
        allowed = {"model", "single_qubit", "multi_qubit", "measurement"}
        unknown = set(data) - allowed
        if unknown:
            raise InvalidArgument(f"unknown noise profile keys: {sorted(unknown)}")
        if data.get("model") == "ideal":
            return cls.ideal()
        return cls(
            single_qubit=data.get("single_qubit", 0.0),
            multi_qubit=data.get("multi_qubit", 0.0),
            measurement=data.get("measurement", 0.0),
        )


__all__ = ["ErrorRateProfile"]
