"""Stochastic Pauli noise applied after gates and at readout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import torch

from ..gates.descriptors import Gate, GateKind
from ..gates.kernels import apply_gate
from ..logging import get_logger
from .profile import ErrorRateProfile

logger = get_logger(__name__)

_PAULIS = (GateKind.X, GateKind.Y, GateKind.Z)


@dataclass(frozen=True)
class PauliError:
    """One injected Pauli correction."""

    pauli: str
    qubit: int
    after_gate: str

    def to_dict(self) -> Dict[str, Any]:
        return {"pauli": self.pauli, "qubit": self.qubit, "after_gate": self.after_gate}


class NoiseInjector:
    """
    Perturbs the state after each gate according to an ErrorRateProfile.

    With probability equal to the gate category's rate, one of X, Y, Z
    (uniformly) is applied to one of the gate's qubits (uniformly). The
    correction itself is never followed by further noise. Randomness comes
    from the supplied generator so a seeded session is reproducible.
    """

    def __init__(
        self,
        profile: Optional[ErrorRateProfile] = None,
        generator: Optional[torch.Generator] = None,
    ) -> None:
        self._profile = profile if profile is not None else ErrorRateProfile.ideal()
        if generator is None:
            generator = torch.Generator()
            generator.seed()
        self._generator = generator

    @property
    def profile(self) -> ErrorRateProfile:
        return self._profile

    def _uniform(self) -> float:
        return float(torch.rand(1, generator=self._generator).item())

    def _choice(self, n: int) -> int:
        return int(torch.randint(n, (1,), generator=self._generator).item())

    def after_gate(
        self,
        state: torch.Tensor,
        gate: Gate,
        n_qubits: int,
    ) -> Tuple[torch.Tensor, Optional[PauliError]]:
        """
        Possibly apply a random Pauli following ``gate``.

        Returns
        -------
        state:
            The (possibly) perturbed statevector.
        error:
            The injected PauliError, or None when nothing fired.
        """
        if self._profile.is_ideal:
            return state, None

        rate = self._profile.gate_rate(gate.is_single_qubit)
        if rate <= 0.0 or self._uniform() >= rate:
            return state, None

        pauli = _PAULIS[self._choice(len(_PAULIS))]
        qubit = gate.qubits[self._choice(len(gate.qubits))]
        new_state = apply_gate(state, Gate(kind=pauli, qubits=(qubit,)), n_qubits)

        error = PauliError(pauli=pauli.value, qubit=qubit, after_gate=gate.name)
        logger.debug("injected %s on qubit %d after %s", error.pauli, qubit, gate)
        return new_state, error

    def readout(self, outcome: int, width: int) -> int:
        """
        Apply readout noise to a measured value of ``width`` bits.

        Each bit flips independently with the profile's measurement rate.
        """
        rate = self._profile.measurement
        if rate <= 0.0:
            return outcome

        flips = (torch.rand(width, generator=self._generator) < rate).tolist()
        mask = 0
        for bit, flipped in enumerate(flips):
            if flipped:
                mask |= 1 << bit
        if mask:
            logger.debug("readout flipped mask %s on outcome %d", bin(mask), outcome)
        return outcome ^ mask


__all__ = ["NoiseInjector", "PauliError"]
