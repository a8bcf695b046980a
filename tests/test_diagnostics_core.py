"""Tests for read-only state diagnostics."""

import math

import numpy as np
import pytest
import torch

from svsim.backend import zero_state
from svsim.diagnostics import assert_normalized, entanglement_entropy, fidelity, state_norm
from svsim.errors import DimensionMismatch, IndexOutOfRange, InvalidArgument

INV_SQRT2 = 1.0 / math.sqrt(2.0)


def test_state_norm():
    state = torch.tensor([0.6, 0.8j], dtype=torch.complex128)
    assert math.isclose(float(state_norm(state)), 1.0)


def test_assert_normalized():
    assert_normalized(zero_state(2))
    with pytest.raises(ValueError, match="not normalized"):
        assert_normalized(torch.tensor([1.0, 1.0], dtype=torch.complex128))


class TestFidelity:
    def test_self_fidelity_is_one(self, random_state):
        state = random_state(3)
        assert math.isclose(fidelity(state, state), 1.0, abs_tol=1e-12)

    def test_orthogonal_states(self):
        assert fidelity(zero_state(1), [0.0, 1.0]) == 0.0

    def test_target_is_normalized(self):
        """An unnormalized target gives the same fidelity as its normalized form."""
        plus = torch.tensor([INV_SQRT2, INV_SQRT2], dtype=torch.complex128)
        assert math.isclose(fidelity(plus, [3.0, 3.0]), 1.0, abs_tol=1e-12)
        assert math.isclose(fidelity(zero_state(1), [2.0, 2.0]), 0.5, abs_tol=1e-12)

    def test_target_as_pairs_and_numpy(self):
        state = torch.tensor([0.0, 1j], dtype=torch.complex128)
        assert math.isclose(fidelity(state, [(0.0, 0.0), (0.0, 1.0)]), 1.0)
        assert math.isclose(fidelity(state, np.array([0.0, 1.0])), 1.0)

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatch, match="amplitudes"):
            fidelity(zero_state(2), [1.0, 0.0])

    def test_zero_norm_target(self):
        with pytest.raises(InvalidArgument, match="zero norm"):
            fidelity(zero_state(1), [0.0, 0.0])


class TestEntanglementEntropy:
    def test_definite_qubit(self):
        assert entanglement_entropy(zero_state(2), 1) == 0.0

    def test_balanced_qubit(self):
        bell = torch.tensor([INV_SQRT2, 0.0, 0.0, INV_SQRT2], dtype=torch.complex128)
        assert math.isclose(entanglement_entropy(bell, 0), 1.0, abs_tol=1e-12)
        assert math.isclose(entanglement_entropy(bell, 1), 1.0, abs_tol=1e-12)

    def test_bounds(self, random_state):
        state = random_state(3)
        for q in range(3):
            assert 0.0 <= entanglement_entropy(state, q) <= 1.0 + 1e-12

    def test_out_of_range(self):
        with pytest.raises(IndexOutOfRange):
            entanglement_entropy(zero_state(2), 2)
