"""Process-wide debug switch for the gate kernels.

When debug mode is on, :func:`svsim.gates.kernels.apply_gate` checks every
statevector it produces with :func:`~svsim.diagnostics.assert_normalized`,
using ``DEBUG_NORM_ATOL`` as the tolerance. Pauli errors injected by the
noise model go through the same kernel entry point and are checked too. A
kernel that breaks normalization then fails on the gate that caused it
instead of surfacing later as skewed measurement statistics.

The switch is configuration rather than session state: it is shared by every
:class:`~svsim.session.SimulatorSession` in the process. Its initial value
comes from the ``SVSIM_DEBUG`` environment variable ("1", "true", "yes" or
"on", case-insensitive) and it can be changed at runtime::

    from svsim.diagnostics import debug_context

    with debug_context():
        session.apply_gates(requests)   # every kernel output is checked
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional

from ..logging import get_logger

logger = get_logger(__name__)

DEBUG_ENV_VAR = "SVSIM_DEBUG"
DEBUG_NORM_ATOL = 1e-6

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _flag_from_env(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUE_VALUES


_debug_enabled: bool = _flag_from_env(os.getenv(DEBUG_ENV_VAR))


def is_debug_enabled() -> bool:
    """Return whether kernel outputs are currently checked for normalization."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Turn the kernel normalization check on or off for the whole process.

    Parameters
    ----------
    enabled:
        True to check every kernel output, False to skip the check.
    """
    global _debug_enabled
    enabled = bool(enabled)
    if enabled != _debug_enabled:
        logger.info("debug mode %s", "enabled" if enabled else "disabled")
    _debug_enabled = enabled


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Set debug mode for the duration of a ``with`` block.

    The previous setting is restored on exit, also when the block raises
    (for example when the check itself reports an unnormalized state).
    """
    previous = _debug_enabled
    set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)


__all__ = [
    "DEBUG_ENV_VAR",
    "DEBUG_NORM_ATOL",
    "debug_context",
    "is_debug_enabled",
    "set_debug_enabled",
]
