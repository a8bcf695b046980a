"""Tests for the standard gate matrices."""

import math

import pytest
import torch

from svsim.gates import standard as stdgates


@pytest.mark.parametrize("name", ["I", "X", "Y", "Z", "H", "S", "T"])
def test_fixed_gates_are_unitary(name):
    """Every fixed gate matrix is unitary."""
    gate = getattr(stdgates, name)()
    assert gate.shape == (2, 2)
    assert gate.dtype == torch.complex128
    assert stdgates.is_unitary(gate)


@pytest.mark.parametrize("name", ["RX", "RY", "RZ"])
@pytest.mark.parametrize("theta", [0.0, 0.3, math.pi, -2.1])
def test_rotations_are_unitary(name, theta):
    assert stdgates.is_unitary(getattr(stdgates, name)(theta))


def test_hadamard_is_self_inverse():
    """H uses the canonical sign so H·H = I."""
    h = stdgates.H()
    assert torch.allclose(h @ h, stdgates.I())


def test_hadamard_canonical_signs():
    h = stdgates.H() * math.sqrt(2.0)
    expected = torch.tensor([[1.0, 1.0], [1.0, -1.0]], dtype=torch.complex128)
    assert torch.allclose(h, expected)


def test_rotation_at_zero_is_identity():
    for rot in (stdgates.RX, stdgates.RY, stdgates.RZ):
        assert torch.allclose(rot(0.0), stdgates.I())


def test_s_squared_is_z_and_t_squared_is_s():
    assert torch.allclose(stdgates.S() @ stdgates.S(), stdgates.Z())
    assert torch.allclose(stdgates.T() @ stdgates.T(), stdgates.S())


def test_is_unitary_rejects_non_unitary():
    assert not stdgates.is_unitary(torch.tensor([[1.0, 1.0], [0.0, 1.0]], dtype=torch.complex128))
    assert not stdgates.is_unitary(torch.zeros(2, 3, dtype=torch.complex128))


def test_dtype_override():
    assert stdgates.X(dtype=torch.complex64).dtype == torch.complex64
