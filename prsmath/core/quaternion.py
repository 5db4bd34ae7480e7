# prsmath/core/quaternion.py
"""
Quaternion - rotation component consumed and produced by Matrix4.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import math

from .vector3 import Vector3


@dataclass
class Quaternion:
    """Quaternion (x, y, z, w). Unit length when it represents a rotation."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def set(self, x: float, y: float, z: float, w: float) -> Quaternion:
        self.x = x
        self.y = y
        self.z = z
        self.w = w
        return self

    def __neg__(self) -> Quaternion:
        return Quaternion(-self.x, -self.y, -self.z, -self.w)

    def dot(self, other: Quaternion) -> float:
        return self.x*other.x + self.y*other.y + self.z*other.z + self.w*other.w

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Quaternion:
        ln = self.length()
        if ln < 1e-10:
            return Quaternion.identity()
        return Quaternion(self.x/ln, self.y/ln, self.z/ln, self.w/ln)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)

    @staticmethod
    def from_tuple(t: Tuple[float, float, float, float]) -> Quaternion:
        return Quaternion(t[0], t[1], t[2], t[3])

    @staticmethod
    def identity() -> Quaternion:
        return Quaternion(0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def from_axis_angle(axis: Vector3, angle: float) -> Quaternion:
        """Rotation of `angle` radians about `axis` (normalized here)."""
        ln = axis.length()
        if ln < 1e-10:
            return Quaternion.identity()
        half = angle / 2.0
        s = math.sin(half) / ln
        return Quaternion(axis.x * s, axis.y * s, axis.z * s, math.cos(half))
