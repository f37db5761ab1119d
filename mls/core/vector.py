# mls/core/vector.py
"""
Vector3 value type
==================

Small immutable 3-vector used for positions, velocities, accelerations
and Euler angles. Arithmetic is done on plain Python floats so that a
trajectory is bit-for-bit reproducible; use `to_array()` / `from_array()`
to move in and out of numpy for rotations and telemetry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

import math
import numpy as np

from .errors import DegenerateVectorError


# Magnitudes below this are treated as zero
SMALL_NUM = 1.0e-8


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # ---- arithmetic ----

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, k: float) -> Vector3:
        return Vector3(self.x * k, self.y * k, self.z * k)

    def __rmul__(self, k: float) -> Vector3:
        return Vector3(k * self.x, k * self.y, k * self.z)

    def __truediv__(self, k: float) -> Vector3:
        return Vector3(self.x / k, self.y / k, self.z / k)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    # ---- magnitude / direction ----

    def abs2(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def abs(self) -> float:
        return math.sqrt(self.abs2())

    def norm(self, quantity: str = "vector") -> Vector3:
        """
        Unit vector in the same direction.

        Raises DegenerateVectorError (naming `quantity`) when the
        magnitude is below SMALL_NUM instead of returning NaNs.
        """
        s = self.abs()
        if s < SMALL_NUM:
            raise DegenerateVectorError(quantity, s)
        return Vector3(self.x / s, self.y / s, self.z / s)

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in self)

    # ---- conversions ----

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def to_list(self) -> List[float]:
        return [self.x, self.y, self.z]

    @classmethod
    def from_array(cls, arr: Iterable[float]) -> Vector3:
        a = np.asarray(arr, dtype=float).reshape(-1)
        if a.shape[0] != 3:
            raise ValueError(f"Vector3 needs 3 components, got {a.shape[0]}.")
        return cls(float(a[0]), float(a[1]), float(a[2]))


ZERO = Vector3(0.0, 0.0, 0.0)

__all__ = ["Vector3", "ZERO", "SMALL_NUM"]
