"""Tests for debug mode functionality."""

import pytest
import torch

from svsim import SimulatorSession
from svsim.backend import zero_state
from svsim.diagnostics import (
    DEBUG_NORM_ATOL,
    debug_context,
    debug_mode,
    is_debug_enabled,
    set_debug_enabled,
)
from svsim.gates import Gate, GateKind, apply_gate


def test_debug_mode_toggle_and_context() -> None:
    """Test debug mode toggling and context manager."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)
        assert not is_debug_enabled()

        with debug_context(True):
            assert is_debug_enabled()

        assert not is_debug_enabled()

        set_debug_enabled(True)
        with debug_context(False):
            assert not is_debug_enabled()
        assert is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_debug_context_restores_on_error() -> None:
    original = is_debug_enabled()
    set_debug_enabled(False)
    try:
        with pytest.raises(RuntimeError):
            with debug_context(True):
                raise RuntimeError("boom")
        assert not is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_debug_mode_checks_kernel_output() -> None:
    """With debug mode on, an unnormalized input is caught after the kernel."""
    bad = torch.tensor([1.0, 1.0], dtype=torch.complex128)
    gate = Gate(GateKind.X, (0,))

    with debug_context(False):
        apply_gate(bad, gate)

    with debug_context(True):
        with pytest.raises(ValueError, match="not normalized"):
            apply_gate(bad, gate)


def test_debug_mode_accepts_valid_states() -> None:
    with debug_context(True):
        state = apply_gate(zero_state(3), Gate(GateKind.H, (2,)))
        state = apply_gate(state, Gate(GateKind.TOFFOLI, (2, 0, 1)))
    assert state.shape == (8,)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1", True),
        ("TRUE", True),
        (" yes ", True),
        ("on", True),
        ("0", False),
        ("off", False),
        ("", False),
        (None, False),
    ],
)
def test_env_flag_parsing(value, expected) -> None:
    assert debug_mode._flag_from_env(value) is expected


def test_debug_check_tolerates_rounding() -> None:
    """Drift below DEBUG_NORM_ATOL passes the check."""
    nearly = torch.tensor([1.0 + DEBUG_NORM_ATOL / 10, 0.0], dtype=torch.complex128)
    with debug_context(True):
        apply_gate(nearly, Gate(GateKind.H, (0,)))


def test_debug_mode_is_shared_by_sessions() -> None:
    """The switch is process-wide, so session gates run under the check."""
    with debug_context(True):
        session = SimulatorSession(seed=3)
        session.initialize(2)
        session.apply_gates([("H", 0), ("CNOT", [0, 1]), ("RZ", 1, 0.3)])
        assert is_debug_enabled()
    assert session.get_info().gates_applied == 3
