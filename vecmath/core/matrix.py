from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional

import numpy as np

from vecmath.config import FORMAT_PRECISION, INVERT_EPSILON, PERSPECTIVE_ASPECT_EPSILON
from vecmath.exceptions import DimensionError
from vecmath.util.math import approx_eq_abs, approx_eq_rel

logger = logging.getLogger(__name__)


def _rotation_rows(axis, angle: float, real: type) -> tuple[tuple, tuple, tuple]:
    """Rodrigues rotation rows, laid out as in the classic column-vector formula.

    The axis is used as given; callers normalize it.
    """
    c = real(np.cos(real(angle)))
    s = real(np.sin(real(angle)))
    t = 1 - c
    x = real(axis.x)
    y = real(axis.y)
    z = real(axis.z)
    return (
        (c + x * x * t, x * y * t - z * s, x * z * t + y * s),
        (y * x * t + z * s, c + y * y * t, y * z * t - x * s),
        (z * x * t - y * s, z * y * t + x * s, c + z * z * t),
    )


class MatrixMixin:
    """Storage and algebra shared by Mat2, Mat3 and Mat4.

    ``fields[row][col]`` is row-major. Vectors are rows and are transformed by
    right-multiplication (v' = v . M), so for Mat4 the translation lives in
    row 3. ``_real`` and ``_space`` are bound by ``specialize_on``.
    """

    _size = 0
    _real = None
    _space = None

    # Keep numpy from broadcasting over matrices in mixed expressions.
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        real = self._real
        if real is None:
            raise TypeError(f"{type(self).__name__} must be specialized before use (see vecmath.generic.specialize_on)")
        n = self._size
        rows = tuple(tuple(real(v) for v in row) for row in self.fields)
        if len(rows) != n or any(len(row) != n for row in rows):
            shape = (len(rows), max((len(row) for row in rows), default=0))
            raise DimensionError(f"mat{n} needs {n}x{n} fields, got {shape[0]}x{shape[1]}", (n, n), shape)
        object.__setattr__(self, "fields", rows)

    @classmethod
    def _bind_constants(cls) -> None:
        n = cls._size
        cls.identity = cls(tuple(tuple(1 if r == c else 0 for c in range(n)) for r in range(n)))
        cls.zero = cls(tuple(tuple(0 for _ in range(n)) for _ in range(n)))

    @classmethod
    def from_rows(cls, *rows):
        return cls(tuple(rows))

    @classmethod
    def from_array(cls, arr):
        a = np.asarray(arr)
        n = cls._size
        if a.shape != (n, n):
            raise DimensionError(f"mat{n} needs a {n}x{n} array, got shape {a.shape}", (n, n), a.shape)
        return cls(tuple(tuple(row) for row in a.astype(cls._real, copy=False)))

    def to_array(self) -> np.ndarray:
        return np.array(self.fields, dtype=self._real)

    def tobytes(self) -> bytes:
        """Row-major bytes of the scalar type, e.g. for a GL uniform write."""
        return self.to_array().tobytes()

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        a = self.to_array()
        return a if dtype is None else a.astype(dtype)

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return self._size

    def _check_size(self, other) -> None:
        if getattr(other, "_size", None) != self._size:
            raise DimensionError(
                f"mat{self._size} cannot be combined with {type(other).__name__}",
                self._size,
                getattr(other, "_size", None),
            )

    def mul(self, other):
        """Matrix product self * other. Not commutative."""
        self._check_size(other)
        return type(self).from_array(self.to_array() @ other.to_array())

    def transpose(self):
        """Swap rows with columns."""
        return type(self)(tuple(zip(*self.fields)))

    @classmethod
    def batch_mul(cls, items: Iterable):
        """Multiply all matrices from first to last. Empty -> identity."""
        items = tuple(items)
        if len(items) == 0:
            return cls.identity
        if len(items) == 1:
            return items[0]
        return reduce(cls.mul, items[1:], items[0])

    def invert(self):
        """Return the inverse, or None if |det| is below INVERT_EPSILON."""
        det = self.determinant()
        if abs(float(det)) < INVERT_EPSILON:
            logger.debug("mat%d has no inverse (det=%g)", self._size, float(det))
            return None
        return self._adjugate_scaled(1 / det)

    def eql(self, other) -> bool:
        return self == other

    def approx_eq_abs(self, other, tolerance: float) -> bool:
        return all(
            approx_eq_abs(a, b, tolerance)
            for ra, rb in zip(self.fields, other.fields)
            for a, b in zip(ra, rb)
        )

    def approx_eq_rel(self, other, tolerance: float) -> bool:
        return all(
            approx_eq_rel(a, b, tolerance)
            for ra, rb in zip(self.fields, other.fields)
            for a, b in zip(ra, rb)
        )

    def format(self) -> str:
        rows = " ".join(
            "(" + " ".join(f"{float(v):.{FORMAT_PRECISION}f}" for v in row) + ")"
            for row in self.fields
        )
        return f"mat{self._size}{{ {rows} }}"

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        rows = ", ".join("(" + ", ".join(repr(v.item()) for v in row) + ")" for row in self.fields)
        return f"{type(self).__name__}(({rows}))"

    def __reduce__(self):
        from vecmath.generic import rebuild

        return rebuild, (np.dtype(self._real).name, type(self).__name__, (self.fields,))

    def __matmul__(self, other):
        if not isinstance(other, MatrixMixin) or other._size != self._size:
            return NotImplemented
        return self.mul(other)


@dataclass(frozen=True, repr=False)
class Mat2(MatrixMixin):
    """2 by 2 matrix, ``fields[row][col]``."""

    fields: tuple[tuple[float, ...], ...]

    _size = 2

    def determinant(self):
        (a, b), (c, d) = self.fields
        return a * d - b * c

    def _adjugate_scaled(self, k):
        (a, b), (c, d) = self.fields
        return type(self)(((d * k, -b * k), (-c * k, a * k)))

    @classmethod
    def create_rotation(cls, angle: float):
        """Same row layout as create_angle_axis about the z axis."""
        real = cls._real
        c = real(np.cos(real(angle)))
        s = real(np.sin(real(angle)))
        return cls(((c, -s), (s, c)))

    @classmethod
    def create_scale(cls, x: float, y: float):
        return cls(((x, 0), (0, y)))


@dataclass(frozen=True, repr=False)
class Mat3(MatrixMixin):
    """3 by 3 matrix, ``fields[row][col]``."""

    fields: tuple[tuple[float, ...], ...]

    _size = 3

    def determinant(self):
        (a, b, c), (d, e, f), (g, h, i) = self.fields
        return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)

    def _adjugate_scaled(self, k):
        (a, b, c), (d, e, f), (g, h, i) = self.fields
        return type(self)((
            ((e * i - f * h) * k, (c * h - b * i) * k, (b * f - c * e) * k),
            ((f * g - d * i) * k, (a * i - c * g) * k, (c * d - a * f) * k),
            ((d * h - e * g) * k, (b * g - a * h) * k, (a * e - b * d) * k),
        ))

    @classmethod
    def create_angle_axis(cls, axis, angle: float):
        """Rotation around axis (expected unit length, not normalized here)."""
        return cls(_rotation_rows(axis, angle, cls._real))

    @classmethod
    def create_scale(cls, x: float, y: float, z: float):
        return cls(((x, 0, 0), (0, y, 0), (0, 0, z)))


@dataclass(frozen=True, repr=False)
class Mat4(MatrixMixin):
    """4 by 4 matrix, ``fields[row][col]``, translation in row 3."""

    fields: tuple[tuple[float, ...], ...]

    _size = 4

    def _pair_terms(self):
        # 2x2 sub-determinants of the top (b00..b05) and bottom (b06..b11) row pairs.
        (a00, a01, a02, a03), (a10, a11, a12, a13), (a20, a21, a22, a23), (a30, a31, a32, a33) = self.fields
        return (
            a00 * a11 - a01 * a10,
            a00 * a12 - a02 * a10,
            a00 * a13 - a03 * a10,
            a01 * a12 - a02 * a11,
            a01 * a13 - a03 * a11,
            a02 * a13 - a03 * a12,
            a20 * a31 - a21 * a30,
            a20 * a32 - a22 * a30,
            a20 * a33 - a23 * a30,
            a21 * a32 - a22 * a31,
            a21 * a33 - a23 * a31,
            a22 * a33 - a23 * a32,
        )

    def determinant(self):
        b00, b01, b02, b03, b04, b05, b06, b07, b08, b09, b10, b11 = self._pair_terms()
        return b00 * b11 - b01 * b10 + b02 * b09 + b03 * b08 - b04 * b07 + b05 * b06

    def invert(self) -> Optional[Mat4]:
        """Closed-form 4x4 inverse, or None if |det| is below INVERT_EPSILON."""
        (a00, a01, a02, a03), (a10, a11, a12, a13), (a20, a21, a22, a23), (a30, a31, a32, a33) = self.fields
        b00, b01, b02, b03, b04, b05, b06, b07, b08, b09, b10, b11 = self._pair_terms()

        det = b00 * b11 - b01 * b10 + b02 * b09 + b03 * b08 - b04 * b07 + b05 * b06
        if abs(float(det)) < INVERT_EPSILON:
            logger.debug("mat4 has no inverse (det=%g)", float(det))
            return None
        k = 1 / det

        return type(self)((
            (
                (a11 * b11 - a12 * b10 + a13 * b09) * k,
                (a02 * b10 - a01 * b11 - a03 * b09) * k,
                (a31 * b05 - a32 * b04 + a33 * b03) * k,
                (a22 * b04 - a21 * b05 - a23 * b03) * k,
            ),
            (
                (a12 * b08 - a10 * b11 - a13 * b07) * k,
                (a00 * b11 - a02 * b08 + a03 * b07) * k,
                (a32 * b02 - a30 * b05 - a33 * b01) * k,
                (a20 * b05 - a22 * b02 + a23 * b01) * k,
            ),
            (
                (a10 * b10 - a11 * b08 + a13 * b06) * k,
                (a01 * b08 - a00 * b10 - a03 * b06) * k,
                (a30 * b04 - a31 * b02 + a33 * b00) * k,
                (a21 * b02 - a20 * b04 - a23 * b00) * k,
            ),
            (
                (a11 * b07 - a10 * b09 - a12 * b06) * k,
                (a00 * b09 - a01 * b07 + a02 * b06) * k,
                (a31 * b01 - a30 * b03 - a32 * b00) * k,
                (a20 * b03 - a21 * b01 + a22 * b00) * k,
            ),
        ))

    # Camera and projection, after GLM (left-handed, depth in [0, 1]).

    @classmethod
    def create_look(cls, eye, direction, up):
        """Camera transform located at eye, looking into direction.

        up points from the screen center to the upper screen border.
        """
        f = direction.normalize()
        s = up.cross(f).normalize()
        u = f.cross(s)

        m = np.eye(4, dtype=cls._real)
        m[0, 0] = s.x; m[1, 0] = s.y; m[2, 0] = s.z
        m[0, 1] = u.x; m[1, 1] = u.y; m[2, 1] = u.z
        m[0, 2] = f.x; m[1, 2] = f.y; m[2, 2] = f.z
        m[3, 0] = -s.dot(eye)
        m[3, 1] = -u.dot(eye)
        m[3, 2] = -f.dot(eye)
        return cls.from_array(m)

    @classmethod
    def create_look_at(cls, eye, center, up):
        """Camera transform located at eye, looking at center."""
        return cls.create_look(eye, center.sub(eye), up)

    @classmethod
    def create_perspective(cls, fov: float, aspect: float, near: float, far: float):
        """Perspective projection. fov is the vertical field of view in radians,
        aspect is width / height.
        """
        assert abs(aspect - PERSPECTIVE_ASPECT_EPSILON) > 0

        real = cls._real
        aspect = real(aspect)
        near = real(near)
        far = real(far)
        tan_half_fovy = real(np.tan(real(fov) / 2))

        m = np.zeros((4, 4), dtype=real)
        m[0, 0] = 1 / (aspect * tan_half_fovy)
        m[1, 1] = 1 / tan_half_fovy
        m[2, 2] = far / (far - near)
        m[2, 3] = 1
        m[3, 2] = -(far * near) / (far - near)
        return cls.from_array(m)

    @classmethod
    def create_angle_axis(cls, axis, angle: float):
        """Rotation around axis. The axis is not normalized here, unlike create_look."""
        (r00, r01, r02), (r10, r11, r12), (r20, r21, r22) = _rotation_rows(axis, angle, cls._real)
        return cls((
            (r00, r01, r02, 0),
            (r10, r11, r12, 0),
            (r20, r21, r22, 0),
            (0, 0, 0, 1),
        ))

    @classmethod
    def create_uniform_scale(cls, scale: float):
        return cls.create_scale(scale, scale, scale)

    @classmethod
    def create_scale(cls, x: float, y: float, z: float):
        return cls((
            (x, 0, 0, 0),
            (0, y, 0, 0),
            (0, 0, z, 0),
            (0, 0, 0, 1),
        ))

    @classmethod
    def create_translation_xyz(cls, x: float, y: float, z: float):
        return cls((
            (1, 0, 0, 0),
            (0, 1, 0, 0),
            (0, 0, 1, 0),
            (x, y, z, 1),
        ))

    @classmethod
    def create_translation(cls, v):
        return cls.create_translation_xyz(v.x, v.y, v.z)

    @classmethod
    def create_orthogonal(cls, left: float, right: float, bottom: float, top: float, near: float, far: float):
        """Orthographic projection between the given clip planes."""
        real = cls._real
        left, right, bottom, top, near, far = (real(v) for v in (left, right, bottom, top, near, far))

        m = np.eye(4, dtype=real)
        m[0, 0] = 2 / (right - left)
        m[1, 1] = 2 / (top - bottom)
        m[2, 2] = 1 / (far - near)
        m[3, 0] = -(right + left) / (right - left)
        m[3, 1] = -(top + bottom) / (top - bottom)
        m[3, 2] = -near / (far - near)
        return cls.from_array(m)
