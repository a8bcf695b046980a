"""Diagnostics and debugging utilities for svsim."""

from .core import (
    assert_normalized,
    entanglement_entropy,
    fidelity,
    state_norm,
)
from .debug_mode import (
    DEBUG_ENV_VAR,
    DEBUG_NORM_ATOL,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "state_norm",
    "assert_normalized",
    "fidelity",
    "entanglement_entropy",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "DEBUG_ENV_VAR",
    "DEBUG_NORM_ATOL",
]
