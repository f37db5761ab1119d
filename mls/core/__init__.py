"""
Core Types
==========

Planet definitions, the Vector3 value type and the package error types.
"""

from .bodies import Planet, MARS
from .errors import LanderSimError, DegenerateVectorError, ConfigurationError
from .vector import Vector3, SMALL_NUM

__all__ = [
    "Planet",
    "MARS",
    "LanderSimError",
    "DegenerateVectorError",
    "ConfigurationError",
    "Vector3",
    "SMALL_NUM",
]
