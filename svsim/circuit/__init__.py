"""Circuit IR for svsim."""

from .core import Circuit

__all__ = ["Circuit"]
