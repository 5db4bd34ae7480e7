# prsmath/core/matrix4.py
"""
Matrix4 - dense 4x4 transform matrix.

Storage is a 16 value column-major float64 buffer (index = 4*col + row), the
layout OpenGL expects, so `values` can be handed to a uniform upload as-is.

Operations that may write somewhere other than the receiver take an explicit
`out` matrix. `out=None` means "write into the receiver". `out` may alias the
receiver or an operand: every operation reads all of its inputs before the
first output cell is written.
"""

from __future__ import annotations
from typing import Optional, Sequence, Tuple, TypedDict
import logging
import math

import numpy as np

from .errors import InvalidArgumentError, SingularMatrixError
from .quaternion import Quaternion
from .vector3 import Vector3

logger = logging.getLogger(__name__)


class Matrix4Json(TypedDict):
    """Named-field storage form. Field `mRC` is row R, column C."""
    m00: float
    m10: float
    m20: float
    m30: float

    m01: float
    m11: float
    m21: float
    m31: float

    m02: float
    m12: float
    m22: float
    m32: float

    m03: float
    m13: float
    m23: float
    m33: float


_IDENTITY = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0
)


class Matrix4:
    """16 value column-major 4x4 matrix."""

    __slots__ = ('_val',)
    __hash__ = None

    def __init__(self):
        """Initialize as the identity matrix."""
        self._val = np.array(_IDENTITY, dtype=np.float64)

    # =========================================================================
    # Python protocol
    # =========================================================================

    def __getitem__(self, idx: Tuple[int, int]) -> float:
        row, col = idx
        if not (0 <= row < 4 and 0 <= col < 4):
            raise IndexError(f"Matrix4 index out of range: ({row}, {col})")
        return float(self._val[4 * col + row])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return bool(np.array_equal(self._val, other._val))

    def __matmul__(self, other: Matrix4) -> Matrix4:
        if isinstance(other, Matrix4):
            return Matrix4.multiply_matrices(self, other, Matrix4())
        return NotImplemented

    def __repr__(self) -> str:
        return f"Matrix4({self.to_list()})"

    # =========================================================================
    # Raw access
    # =========================================================================

    @property
    def values(self) -> np.ndarray:
        """The owned column-major buffer. Writes go straight into the matrix."""
        return self._val

    def to_list(self) -> list:
        return self._val.tolist()

    def set(self,
            m00: float, m01: float, m02: float, m03: float,
            m10: float, m11: float, m12: float, m13: float,
            m20: float, m21: float, m22: float, m23: float,
            m30: float, m31: float, m32: float, m33: float) -> Matrix4:
        """
        Set from 16 values given in reading (row-major) order:

            [m00, m01, m02, m03]
            [m10, m11, m12, m13]
            [m20, m21, m22, m23]
            [m30, m31, m32, m33]
        """
        m = self._val

        m[0] = m00
        m[1] = m10
        m[2] = m20
        m[3] = m30

        m[4] = m01
        m[5] = m11
        m[6] = m21
        m[7] = m31

        m[8] = m02
        m[9] = m12
        m[10] = m22
        m[11] = m32

        m[12] = m03
        m[13] = m13
        m[14] = m23
        m[15] = m33

        return self

    def identity(self) -> Matrix4:
        self._val[:] = _IDENTITY
        return self

    def from_array(self, values: Sequence[float]) -> Matrix4:
        """Copy the first 16 values of `values` (column-major) into this matrix."""
        if len(values) < 16:
            logger.debug(f"Matrix4.from_array() rejected {len(values)} values")
            raise InvalidArgumentError(
                f"Matrix4.from_array() - provided argument length must be >= 16, got {len(values)}"
            )

        self._val[:] = np.asarray(values[:16], dtype=np.float64)
        return self

    def copy(self, matrix: Matrix4) -> Matrix4:
        self._val[:] = matrix._val
        return self

    def clone(self) -> Matrix4:
        return Matrix4().copy(self)

    # =========================================================================
    # Serialization
    # =========================================================================

    def serialise(self) -> Matrix4Json:
        """Named-field form for storage. See Matrix4Json."""
        m = self._val.tolist()

        return {
            # first
            'm00': m[0],
            'm10': m[1],
            'm20': m[2],
            'm30': m[3],
            # second
            'm01': m[4],
            'm11': m[5],
            'm21': m[6],
            'm31': m[7],
            # third
            'm02': m[8],
            'm12': m[9],
            'm22': m[10],
            'm32': m[11],
            # fourth
            'm03': m[12],
            'm13': m[13],
            'm23': m[14],
            'm33': m[15],
        }

    def deserialise(self, values: Matrix4Json) -> Matrix4:
        """Load a record produced by serialise() into this matrix."""
        return self.set(
            values['m00'], values['m01'], values['m02'], values['m03'],
            values['m10'], values['m11'], values['m12'], values['m13'],
            values['m20'], values['m21'], values['m22'], values['m23'],
            values['m30'], values['m31'], values['m32'], values['m33']
        )

    @classmethod
    def from_serialised(cls, values: Matrix4Json) -> Matrix4:
        return cls().deserialise(values)

    def to_bytes(self, dtype: str = "f4") -> bytes:
        """Column-major payload for GPU upload (float32 unless told otherwise)."""
        return self._val.astype(dtype).tobytes()

    @classmethod
    def from_bytes(cls, data: bytes, dtype: str = "f4") -> Matrix4:
        nbytes = 16 * np.dtype(dtype).itemsize
        if len(data) < nbytes:
            logger.debug(f"Matrix4.from_bytes() rejected {len(data)} bytes")
            raise InvalidArgumentError(
                f"Matrix4.from_bytes() - payload must hold >= {nbytes} bytes, got {len(data)}"
            )
        return cls().from_array(np.frombuffer(data, dtype=dtype, count=16))

    # =========================================================================
    # Construction
    # =========================================================================

    def set_to_projection(self, near: float, far: float, fov: float, aspect: float) -> Matrix4:
        """
        Perspective projection.

        `fov` is the vertical field of view in degrees, `aspect` is width/height.
        Arguments are not validated.
        """
        fd = 1.0 / math.tan((fov * (math.pi / 180.0)) / 2.0)
        a1 = (far + near) / (near - far)
        a2 = (2.0 * far * near) / (near - far)

        m = self._val
        m[:] = 0.0
        m[0] = fd / aspect
        m[5] = fd
        m[10] = a1
        m[11] = -1.0
        m[14] = a2

        return self

    def compose_pos(self, position: Vector3) -> Matrix4:
        """Translation only."""
        return self.set(
            1.0, 0.0, 0.0, position.x,
            0.0, 1.0, 0.0, position.y,
            0.0, 0.0, 1.0, position.z,
            0.0, 0.0, 0.0, 1.0
        )

    def compose_rot(self, rotation: Quaternion) -> Matrix4:
        """Rotation only."""
        return self.compose_pos_rot(Vector3(), rotation)

    def compose_pos_rot(self, position: Vector3, rotation: Quaternion) -> Matrix4:
        """Rotation followed by translation. The quaternion is used as given."""
        xs = rotation.x * 2.0
        ys = rotation.y * 2.0
        zs = rotation.z * 2.0
        wx = rotation.w * xs; wy = rotation.w * ys; wz = rotation.w * zs
        xx = rotation.x * xs; xy = rotation.x * ys; xz = rotation.x * zs
        yy = rotation.y * ys; yz = rotation.y * zs; zz = rotation.z * zs

        return self.set(
            1.0 - (yy + zz), xy - wz,         xz + wy,         position.x,
            xy + wz,         1.0 - (xx + zz), yz - wx,         position.y,
            xz - wy,         yz + wx,         1.0 - (xx + yy), position.z,
            0.0,             0.0,             0.0,             1.0
        )

    def compose_pos_rot_sca(self, position: Vector3, rotation: Quaternion, scale: Vector3) -> Matrix4:
        """
        Scale, then rotate, then translate.

        Basis column 0 is scaled by scale.x, column 1 by scale.y and column 2
        by scale.z. The other compose_* methods are special cases of this one.
        """
        xs = rotation.x * 2.0
        ys = rotation.y * 2.0
        zs = rotation.z * 2.0
        wx = rotation.w * xs; wy = rotation.w * ys; wz = rotation.w * zs
        xx = rotation.x * xs; xy = rotation.x * ys; xz = rotation.x * zs
        yy = rotation.y * ys; yz = rotation.y * zs; zz = rotation.z * zs

        sx, sy, sz = scale.x, scale.y, scale.z

        return self.set(
            sx * (1.0 - (yy + zz)), sy * (xy - wz),         sz * (xz + wy),         position.x,
            sx * (xy + wz),         sy * (1.0 - (xx + zz)), sz * (yz - wx),         position.y,
            sx * (xz - wy),         sy * (yz + wx),         sz * (1.0 - (xx + yy)), position.z,
            0.0,                    0.0,                    0.0,                    1.0
        )

    def decompose_pos_rot_sca(self, position: Vector3, rotation: Quaternion, scale: Vector3) -> None:
        """
        Split this matrix into position, rotation and scale, written into the
        three output arguments.

        Scale is the length of each basis column. Shear and reflection are not
        modelled: a negative determinant still yields a quaternion, but not a
        meaningful one. A zero-length column still writes scale and position;
        the rotation then comes out as NaN.
        """
        val = self._val.tolist()

        xx = val[0]
        xy = val[1]
        xz = val[2]
        yx = val[4]
        yy = val[5]
        yz = val[6]
        zx = val[8]
        zy = val[9]
        zz = val[10]

        sx = Vector3.len(xx, xy, xz)
        sy = Vector3.len(yx, yy, yz)
        sz = Vector3.len(zx, zy, zz)

        # zero-length columns give inf, as IEEE division would; rotation turns NaN
        lx = 1.0 / sx if sx != 0.0 else math.inf
        ly = 1.0 / sy if sy != 0.0 else math.inf
        lz = 1.0 / sz if sz != 0.0 else math.inf

        # pure rotation basis
        sxx = xx * lx
        sxy = xy * lx
        sxz = xz * lx
        syx = yx * ly
        syy = yy * ly
        syz = yz * ly
        szx = zx * lz
        szy = zy * lz
        szz = zz * lz

        t = sxx + syy + szz

        if t >= 0:
            s = math.sqrt(t + 1.0)
            w = 0.5 * s
            sd = 0.5 / s
            x = (syz - szy) * sd
            y = (szx - sxz) * sd
            z = (sxy - syx) * sd
        elif sxx > syy and sxx > szz:
            s = math.sqrt(1.0 + sxx - syy - szz)
            x = s * 0.5
            sd = 0.5 / s
            y = (syx + sxy) * sd
            z = (sxz + szx) * sd
            w = (syz - szy) * sd
        elif syy > szz:
            s = math.sqrt(1.0 + syy - sxx - szz)
            y = s * 0.5
            sd = 0.5 / s
            x = (syx + sxy) * sd
            z = (szy + syz) * sd
            w = (szx - sxz) * sd
        else:
            s = math.sqrt(1.0 + szz - sxx - syy)
            z = s * 0.5
            sd = 0.5 / s
            x = (sxz + szx) * sd
            y = (szy + syz) * sd
            w = (sxy - syx) * sd

        rotation.set(x, y, z, w)
        scale.set(sx, sy, sz)
        position.set(val[12], val[13], val[14])

    # =========================================================================
    # Products
    # =========================================================================

    def scale(self, factor: float, out: Optional[Matrix4] = None) -> Matrix4:
        """Multiply every entry of this matrix by `factor`."""
        result = self if out is None else out
        result._val[:] = self._val * factor
        return result

    def multiply(self, matrix: Matrix4, out: Optional[Matrix4] = None) -> Matrix4:
        """self * matrix"""
        return Matrix4.multiply_matrices(self, matrix, self if out is None else out)

    def pre_multiply(self, matrix: Matrix4, out: Optional[Matrix4] = None) -> Matrix4:
        """matrix * self"""
        return Matrix4.multiply_matrices(matrix, self, self if out is None else out)

    @staticmethod
    def multiply_matrices(a: Matrix4, b: Matrix4, out: Matrix4) -> Matrix4:
        """
        a * b stored in `out`.

        The product is formed in a temporary before `out` is touched, so `out`
        may be `a` or `b`.
        """
        av = a._val.reshape((4, 4), order='F')
        bv = b._val.reshape((4, 4), order='F')
        out._val[:] = (av @ bv).ravel(order='F')
        return out

    # =========================================================================
    # Inverse / transpose / determinant
    # =========================================================================

    @property
    def determinant(self) -> float:
        """Cofactor expansion over the current values. Not cached."""
        m = self._val.tolist()

        return (m[3] * m[6] * m[9] * m[12] - m[2] * m[7] * m[9] * m[12] - m[3] * m[5]
                * m[10] * m[12] + m[1] * m[7] * m[10] * m[12] + m[2] * m[5] * m[11] * m[12] - m[1]
                * m[6] * m[11] * m[12] - m[3] * m[6] * m[8] * m[13] + m[2] * m[7] * m[8] * m[13]
                + m[3] * m[4] * m[10] * m[13] - m[0] * m[7] * m[10] * m[13] - m[2] * m[4] * m[11]
                * m[13] + m[0] * m[6] * m[11] * m[13] + m[3] * m[5] * m[8] * m[14] - m[1] * m[7]
                * m[8] * m[14] - m[3] * m[4] * m[9] * m[14] + m[0] * m[7] * m[9] * m[14] + m[1]
                * m[4] * m[11] * m[14] - m[0] * m[5] * m[11] * m[14] - m[2] * m[5] * m[8] * m[15]
                + m[1] * m[6] * m[8] * m[15] + m[2] * m[4] * m[9] * m[15] - m[0] * m[6] * m[9]
                * m[15] - m[1] * m[4] * m[10] * m[15] + m[0] * m[5] * m[10] * m[15])

    def invert(self, out: Optional[Matrix4] = None) -> Matrix4:
        """
        Inverse via the adjugate.

        Raises SingularMatrixError when the determinant is exactly 0. There is
        no tolerance band: near-singular matrices are inverted and may produce
        very large values.
        """
        det = self.determinant

        if det == 0:
            logger.debug("Matrix4.invert() rejected singular matrix")
            raise SingularMatrixError("Matrix4.invert() - cannot invert Matrix as determinant is 0")

        result = self if out is None else out
        m = self._val.tolist()

        c00 = m[9]*m[14]*m[7] - m[13]*m[10]*m[7] + m[13]*m[6]*m[11] - m[5]*m[14]*m[11] - m[9]*m[6]*m[15] + m[5]*m[10]*m[15]
        c01 = m[12]*m[10]*m[7] - m[8]*m[14]*m[7] - m[12]*m[6]*m[11] + m[4]*m[14]*m[11] + m[8]*m[6]*m[15] - m[4]*m[10]*m[15]
        c02 = m[8]*m[13]*m[7] - m[12]*m[9]*m[7] + m[12]*m[5]*m[11] - m[4]*m[13]*m[11] - m[8]*m[5]*m[15] + m[4]*m[9]*m[15]
        c03 = m[12]*m[9]*m[6] - m[8]*m[13]*m[6] - m[12]*m[5]*m[10] + m[4]*m[13]*m[10] + m[8]*m[5]*m[14] - m[4]*m[9]*m[14]
        c10 = m[13]*m[10]*m[3] - m[9]*m[14]*m[3] - m[13]*m[2]*m[11] + m[1]*m[14]*m[11] + m[9]*m[2]*m[15] - m[1]*m[10]*m[15]
        c11 = m[8]*m[14]*m[3] - m[12]*m[10]*m[3] + m[12]*m[2]*m[11] - m[0]*m[14]*m[11] - m[8]*m[2]*m[15] + m[0]*m[10]*m[15]
        c12 = m[12]*m[9]*m[3] - m[8]*m[13]*m[3] - m[12]*m[1]*m[11] + m[0]*m[13]*m[11] + m[8]*m[1]*m[15] - m[0]*m[9]*m[15]
        c13 = m[8]*m[13]*m[2] - m[12]*m[9]*m[2] + m[12]*m[1]*m[10] - m[0]*m[13]*m[10] - m[8]*m[1]*m[14] + m[0]*m[9]*m[14]
        c20 = m[5]*m[14]*m[3] - m[13]*m[6]*m[3] + m[13]*m[2]*m[7] - m[1]*m[14]*m[7] - m[5]*m[2]*m[15] + m[1]*m[6]*m[15]
        c21 = m[12]*m[6]*m[3] - m[4]*m[14]*m[3] - m[12]*m[2]*m[7] + m[0]*m[14]*m[7] + m[4]*m[2]*m[15] - m[0]*m[6]*m[15]
        c22 = m[4]*m[13]*m[3] - m[12]*m[5]*m[3] + m[12]*m[1]*m[7] - m[0]*m[13]*m[7] - m[4]*m[1]*m[15] + m[0]*m[5]*m[15]
        c23 = m[12]*m[5]*m[2] - m[4]*m[13]*m[2] - m[12]*m[1]*m[6] + m[0]*m[13]*m[6] + m[4]*m[1]*m[14] - m[0]*m[5]*m[14]
        c30 = m[9]*m[6]*m[3] - m[5]*m[10]*m[3] - m[9]*m[2]*m[7] + m[1]*m[10]*m[7] + m[5]*m[2]*m[11] - m[1]*m[6]*m[11]
        c31 = m[4]*m[10]*m[3] - m[8]*m[6]*m[3] + m[8]*m[2]*m[7] - m[0]*m[10]*m[7] - m[4]*m[2]*m[11] + m[0]*m[6]*m[11]
        c32 = m[8]*m[5]*m[3] - m[4]*m[9]*m[3] - m[8]*m[1]*m[7] + m[0]*m[9]*m[7] + m[4]*m[1]*m[11] - m[0]*m[5]*m[11]
        c33 = m[4]*m[9]*m[2] - m[8]*m[5]*m[2] + m[8]*m[1]*m[6] - m[0]*m[9]*m[6] - m[4]*m[1]*m[10] + m[0]*m[5]*m[10]

        idet = 1.0 / det

        result._val[:] = (
            c00 * idet, c10 * idet, c20 * idet, c30 * idet,
            c01 * idet, c11 * idet, c21 * idet, c31 * idet,
            c02 * idet, c12 * idet, c22 * idet, c32 * idet,
            c03 * idet, c13 * idet, c23 * idet, c33 * idet
        )

        return result

    def transpose(self) -> Matrix4:
        m = self._val

        m[1], m[4] = m[4], m[1]
        m[2], m[8] = m[8], m[2]
        m[3], m[12] = m[12], m[3]
        m[6], m[9] = m[9], m[6]
        m[7], m[13] = m[13], m[7]
        m[11], m[14] = m[14], m[11]

        return self

    def reset_pos(self) -> Matrix4:
        """Zero the translation column."""
        m = self._val

        m[12] = 0.0
        m[13] = 0.0
        m[14] = 0.0

        return self
