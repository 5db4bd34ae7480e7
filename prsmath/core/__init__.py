# prsmath/core/__init__.py
from .errors import MathError, InvalidArgumentError, SingularMatrixError
from .vector3 import Vector3
from .quaternion import Quaternion
from .matrix4 import Matrix4, Matrix4Json
from .transform import Transform

__all__ = [
    'MathError',
    'InvalidArgumentError',
    'SingularMatrixError',
    'Vector3',
    'Quaternion',
    'Matrix4',
    'Matrix4Json',
    'Transform',
]
