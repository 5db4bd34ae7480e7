# prsmath/core/vector3.py
"""
Vector3 - position and scale components consumed by Matrix4.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Tuple
import math


@dataclass
class Vector3:
    """3D vector for positions and per-axis scale."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    ZERO: ClassVar[Vector3]

    @staticmethod
    def len(x: float, y: float, z: float) -> float:
        """Magnitude of (x, y, z) without building a vector."""
        return math.sqrt(x * x + y * y + z * z)

    def set(self, x: float, y: float, z: float) -> Vector3:
        self.x = x
        self.y = y
        self.z = z
        return self

    def length(self) -> float:
        return Vector3.len(self.x, self.y, self.z)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @staticmethod
    def from_tuple(t: Tuple[float, float, float]) -> Vector3:
        return Vector3(t[0], t[1], t[2])


# Shared read-only origin. Never pass it as an output argument.
Vector3.ZERO = Vector3(0.0, 0.0, 0.0)
