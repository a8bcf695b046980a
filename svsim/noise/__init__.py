"""Stochastic gate and readout noise.

Noise is modelled as random Pauli corrections drawn after gates and as
independent bit flips at readout, parameterized by an ErrorRateProfile.
"""

from .injector import NoiseInjector, PauliError
from .profile import ErrorRateProfile

__all__ = ["ErrorRateProfile", "NoiseInjector", "PauliError"]
