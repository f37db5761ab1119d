# mls/core/errors.py
"""
Error types raised by the simulator.

- DegenerateVectorError : a zero-length vector was fed to normalization.
- ConfigurationError    : invalid constants or initial state, raised at
                          initialization time only.
"""


class LanderSimError(Exception):
    """Base class for all simulator errors."""


class DegenerateVectorError(LanderSimError, ArithmeticError):
    """Normalization of a (near) zero-magnitude vector."""

    def __init__(self, quantity: str, magnitude: float = 0.0):
        self.quantity = quantity
        self.magnitude = magnitude
        super().__init__(
            f"cannot normalize {quantity}: magnitude {magnitude:.3e} is zero"
        )


class ConfigurationError(LanderSimError, ValueError):
    """Out-of-range constant or initial-state value."""


__all__ = ["LanderSimError", "DegenerateVectorError", "ConfigurationError"]
