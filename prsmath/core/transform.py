# prsmath/core/transform.py
"""
Transform - position, rotation and scale kept as separate components.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .matrix4 import Matrix4
from .quaternion import Quaternion
from .vector3 import Vector3


@dataclass
class Transform:
    """Combined position, rotation, scale."""
    position: Vector3 = field(default_factory=Vector3)
    rotation: Quaternion = field(default_factory=Quaternion.identity)
    scale: Vector3 = field(default_factory=lambda: Vector3(1.0, 1.0, 1.0))

    def to_matrix(self, out: Optional[Matrix4] = None) -> Matrix4:
        if out is None:
            out = Matrix4()
        return out.compose_pos_rot_sca(self.position, self.rotation, self.scale)

    @staticmethod
    def from_matrix(matrix: Matrix4) -> Transform:
        t = Transform()
        matrix.decompose_pos_rot_sca(t.position, t.rotation, t.scale)
        return t

    def to_dict(self) -> dict:
        return {
            'position': list(self.position.to_tuple()),
            'rotation': list(self.rotation.to_tuple()),
            'scale': list(self.scale.to_tuple()),
        }

    @staticmethod
    def from_dict(data: dict) -> Transform:
        return Transform(
            position=Vector3.from_tuple(data.get('position', (0.0, 0.0, 0.0))),
            rotation=Quaternion.from_tuple(data.get('rotation', (0.0, 0.0, 0.0, 1.0))),
            scale=Vector3.from_tuple(data.get('scale', (1.0, 1.0, 1.0))),
        )
