# prsmath/__init__.py
"""
prsmath - 4x4 transform matrix algebra.

Core components:
- Matrix4: column-major 4x4 matrix (compose/decompose, multiply, invert)
- Vector3, Quaternion: position/scale and rotation components
- Transform: position, rotation, scale record
- ProjectionCamera: perspective camera producing uniform-ready matrices
"""

from .core import (
    # Math
    Vector3,
    Quaternion,
    Matrix4,
    Matrix4Json,
    Transform,

    # Errors
    MathError,
    InvalidArgumentError,
    SingularMatrixError,
)

from .camera import (
    ProjectionCamera,
    ProjectionConfig,
)

__version__ = '0.1.0'

__all__ = [
    # Math
    'Vector3',
    'Quaternion',
    'Matrix4',
    'Matrix4Json',
    'Transform',

    # Errors
    'MathError',
    'InvalidArgumentError',
    'SingularMatrixError',

    # Camera
    'ProjectionCamera',
    'ProjectionConfig',
]
