"""Exception taxonomy for the simulator.

Each error also derives from the closest builtin so callers that already
catch ``ValueError`` or ``IndexError`` keep working.
"""

from __future__ import annotations


class SimulatorError(Exception):
    """Base class for every error raised by svsim."""


class InvalidArgument(SimulatorError, ValueError):
    """Bad qubit count, angle, arity or other malformed argument."""


class IndexOutOfRange(SimulatorError, IndexError):
    """Qubit or amplitude index outside the valid range."""


class UnsupportedGate(SimulatorError, ValueError):
    """Gate tag that does not name a known gate."""

    def __init__(self, tag: object) -> None:
        self.tag = tag
        super().__init__(f"Unsupported gate: {tag!r}")


class InvalidState(SimulatorError, RuntimeError):
    """Operation invoked on a session that has not been initialized."""


class DimensionMismatch(SimulatorError, ValueError):
    """Two vectors that must have the same length do not."""


class DegenerateState(SimulatorError, ArithmeticError):
    """Measurement collapse onto an outcome with zero probability."""


__all__ = [
    "SimulatorError",
    "InvalidArgument",
    "IndexOutOfRange",
    "UnsupportedGate",
    "InvalidState",
    "DimensionMismatch",
    "DegenerateState",
]
