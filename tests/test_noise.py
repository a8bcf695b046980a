"""Tests for error-rate profiles and the noise injector."""

import math

import pytest
import torch

from svsim.backend import zero_state
from svsim.errors import InvalidArgument
from svsim.gates import Gate, GateKind
from svsim.noise import ErrorRateProfile, NoiseInjector, PauliError


class TestErrorRateProfile:
    def test_ideal(self):
        profile = ErrorRateProfile.ideal()
        assert profile.is_ideal
        assert profile.to_dict() == {
            "model": "ideal",
            "single_qubit": 0.0,
            "multi_qubit": 0.0,
            "measurement": 0.0,
        }

    def test_noisy_defaults(self):
        profile = ErrorRateProfile.noisy()
        assert (profile.single_qubit, profile.multi_qubit, profile.measurement) == (
            0.001,
            0.01,
            0.005,
        )
        assert not profile.is_ideal
        assert profile.to_dict()["model"] == "pauli"

    def test_gate_rate_by_category(self):
        profile = ErrorRateProfile(single_qubit=0.1, multi_qubit=0.2)
        assert profile.gate_rate(True) == 0.1
        assert profile.gate_rate(False) == 0.2

    @pytest.mark.parametrize("rate", [-0.1, 1.5, math.nan, "0.1", True])
    def test_invalid_rates(self, rate):
        with pytest.raises(InvalidArgument, match="error rate"):
            ErrorRateProfile(single_qubit=rate)

    def test_from_dict_roundtrip(self):
        profile = ErrorRateProfile(0.1, 0.2, 0.3)
        assert ErrorRateProfile.from_dict(profile.to_dict()) == profile

    def test_from_dict_ideal_model_wins(self):
        assert ErrorRateProfile.from_dict({"model": "ideal", "single_qubit": 0.5}).is_ideal

    def test_from_dict_unknown_key(self):
        with pytest.raises(InvalidArgument, match="unknown noise profile keys"):
            ErrorRateProfile.from_dict({"depolarizing": 0.1})


def _generator(seed: int = 0) -> torch.Generator:
    gen = torch.Generator()
    gen.manual_seed(seed)
    return gen


class TestNoiseInjector:
    def test_ideal_never_fires(self):
        injector = NoiseInjector(ErrorRateProfile.ideal(), _generator())
        state = zero_state(2)
        gate = Gate(GateKind.H, (0,))
        for _ in range(200):
            new_state, error = injector.after_gate(state, gate, 2)
            assert error is None
            assert new_state is state

    def test_ideal_readout_is_identity(self):
        injector = NoiseInjector(generator=_generator())
        assert all(injector.readout(v, 3) == v for v in range(8))

    def test_rate_one_always_fires_and_preserves_norm(self):
        profile = ErrorRateProfile(single_qubit=1.0, multi_qubit=1.0)
        injector = NoiseInjector(profile, _generator())
        state = zero_state(3)
        gate = Gate(GateKind.CNOT, (0, 2))
        for _ in range(50):
            new_state, error = injector.after_gate(state, gate, 3)
            assert isinstance(error, PauliError)
            assert error.pauli in ("X", "Y", "Z")
            assert error.qubit in gate.qubits
            assert error.after_gate == "CNOT"
            assert math.isclose(float(torch.linalg.vector_norm(new_state)), 1.0, abs_tol=1e-12)

    def test_category_rates_are_independent(self):
        """A multi-qubit rate does not affect single-qubit gates."""
        injector = NoiseInjector(ErrorRateProfile(multi_qubit=1.0), _generator())
        _, error = injector.after_gate(zero_state(2), Gate(GateKind.X, (0,)), 2)
        assert error is None

    def test_all_paulis_and_qubits_occur(self):
        injector = NoiseInjector(ErrorRateProfile(multi_qubit=1.0), _generator(3))
        gate = Gate(GateKind.TOFFOLI, (0, 1, 2))
        seen = set()
        for _ in range(300):
            _, error = injector.after_gate(zero_state(3), gate, 3)
            seen.add((error.pauli, error.qubit))
        assert seen == {(p, q) for p in "XYZ" for q in range(3)}

    def test_readout_rate_one_flips_every_bit(self):
        injector = NoiseInjector(ErrorRateProfile(measurement=1.0), _generator())
        assert injector.readout(0b101, 3) == 0b010
        assert injector.readout(1, 1) == 0

    def test_same_seed_same_errors(self):
        profile = ErrorRateProfile(single_qubit=0.5)
        gate = Gate(GateKind.H, (1,))
        runs = []
        for _ in range(2):
            injector = NoiseInjector(profile, _generator(11))
            runs.append([injector.after_gate(zero_state(2), gate, 2)[1] for _ in range(30)])
        assert runs[0] == runs[1]

    def test_pauli_error_to_dict(self):
        error = PauliError(pauli="Y", qubit=1, after_gate="H")
        assert error.to_dict() == {"pauli": "Y", "qubit": 1, "after_gate": "H"}
