# prsmath/camera/projection.py
"""
ProjectionCamera - perspective camera built on Matrix4.

Produces the projection, view and view-projection matrices a renderer uploads
as uniforms. Upload itself happens elsewhere; this module only hands out bytes.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging

from ..core.errors import InvalidArgumentError
from ..core.matrix4 import Matrix4
from ..core.transform import Transform

logger = logging.getLogger(__name__)


@dataclass
class ProjectionConfig:
    near: float = 0.1
    far: float = 100.0
    fov: float = 60.0       # vertical, degrees
    aspect: float = 1.0     # width / height


class ProjectionCamera:
    """Perspective camera: a projection plus a camera-to-world Transform."""

    def __init__(self, config: ProjectionConfig = None, transform: Transform = None):
        self.config = config or ProjectionConfig()
        self.transform = transform or Transform()
        self._projection = Matrix4()
        self.update_projection()

    @property
    def projection(self) -> Matrix4:
        return self._projection

    def update_projection(self) -> Matrix4:
        """Rebuild the projection matrix from the current config."""
        c = self.config
        return self._projection.set_to_projection(c.near, c.far, c.fov, c.aspect)

    def resize(self, width: float, height: float):
        if width <= 0 or height <= 0:
            raise InvalidArgumentError(
                f"ProjectionCamera.resize() - viewport must be positive, got {width}x{height}"
            )
        self.config.aspect = width / height
        logger.debug(f"ProjectionCamera resized to {width}x{height} (aspect {self.config.aspect:.4f})")
        self.update_projection()

    def view_matrix(self, out: Optional[Matrix4] = None) -> Matrix4:
        """World-to-camera matrix: the inverse of the camera transform."""
        view = self.transform.to_matrix(out)
        return view.invert()

    def view_projection(self, out: Optional[Matrix4] = None) -> Matrix4:
        """projection * view"""
        return self.view_matrix(out).pre_multiply(self._projection)

    def uniform_bytes(self) -> bytes:
        """float32 column-major view-projection, ready for a uniform write."""
        return self.view_projection().to_bytes()
