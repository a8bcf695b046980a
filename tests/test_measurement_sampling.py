"""Tests for probability sampling utilities."""

import math

import pytest
import torch

from svsim.errors import DegenerateState, InvalidArgument
from svsim.measurement import basis_probabilities_from_statevector, sample_counts, sample_index


def test_basis_probabilities_renormalize():
    state = torch.tensor([1.0, 1.0], dtype=torch.complex128)
    probs = basis_probabilities_from_statevector(state)
    assert probs.dtype == torch.float64
    assert torch.allclose(probs, torch.tensor([0.5, 0.5], dtype=torch.float64))


def test_basis_probabilities_zero_norm():
    with pytest.raises(DegenerateState, match="zero norm"):
        basis_probabilities_from_statevector(torch.zeros(2, dtype=torch.complex128))


class TestSampleIndex:
    def test_deterministic_distribution(self, torch_rng):
        probs = torch.tensor([0.0, 0.0, 1.0, 0.0], dtype=torch.float64)
        assert all(sample_index(probs, torch_rng) == 2 for _ in range(50))

    def test_never_picks_zero_probability(self, torch_rng):
        probs = torch.tensor([0.5, 0.0, 0.5, 0.0], dtype=torch.float64)
        assert {sample_index(probs, torch_rng) for _ in range(200)} <= {0, 2}

    def test_frequencies(self, torch_rng):
        probs = torch.tensor([0.2, 0.8], dtype=torch.float64)
        hits = sum(sample_index(probs, torch_rng) for _ in range(4000))
        assert math.isclose(hits / 4000, 0.8, abs_tol=0.03)

    def test_zero_distribution(self, torch_rng):
        with pytest.raises(DegenerateState):
            sample_index(torch.zeros(2, dtype=torch.float64), torch_rng)

    def test_negative_probability(self, torch_rng):
        with pytest.raises(InvalidArgument, match="negative"):
            sample_index(torch.tensor([1.5, -0.5], dtype=torch.float64), torch_rng)


class TestSampleCounts:
    def test_counts_total_and_support(self, torch_rng):
        probs = torch.tensor([0.5, 0.0, 0.0, 0.5], dtype=torch.float64)
        counts = sample_counts(probs, 1000, torch_rng)
        assert sum(counts.values()) == 1000
        assert set(counts) <= {0, 3}
        assert math.isclose(counts.get(0, 0) / 1000, 0.5, abs_tol=0.06)

    @pytest.mark.parametrize("shots", [0, -1, 2.5, True])
    def test_invalid_shots(self, torch_rng, shots):
        with pytest.raises(InvalidArgument, match="n_shots"):
            sample_counts(torch.tensor([1.0, 0.0]), shots, torch_rng)

    def test_reproducible(self, torch_rng):
        probs = torch.tensor([0.1, 0.2, 0.3, 0.4], dtype=torch.float64)
        torch_rng.manual_seed(42)
        first = sample_counts(probs, 100, torch_rng)
        torch_rng.manual_seed(42)
        second = sample_counts(probs, 100, torch_rng)
        assert first == second
