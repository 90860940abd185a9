from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from vecmath.config import FORMAT_PRECISION
from vecmath.core.matrix import MatrixMixin
from vecmath.core.swizzle import is_selector, swizzle
from vecmath.exceptions import DimensionError, SwizzleError
from vecmath.util.math import approx_eq_abs, approx_eq_rel

_SCALAR_TYPES = (int, float, np.number)


class VectorMixin:
    """Component-wise operations shared by Vec2, Vec3 and Vec4.

    Every operation is written once against ``_fields``, the ordered
    component names of the concrete class, and returns a new value.
    ``_real`` (scalar type) and ``_space`` (the specialization the class
    belongs to) are bound by ``specialize_on``.
    """

    _fields: tuple[str, ...] = ()
    _real = None
    _space = None

    # Keep numpy scalars from broadcasting over vectors: `np.float32(2) * v`
    # falls through to __rmul__.
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        real = self._real
        if real is None:
            raise TypeError(f"{type(self).__name__} must be specialized before use (see vecmath.generic.specialize_on)")
        for name in self._fields:
            object.__setattr__(self, name, real(getattr(self, name)))

    @classmethod
    def _bind_constants(cls) -> None:
        n = len(cls._fields)
        cls.zero = cls(*([0] * n))
        cls.one = cls(*([1] * n))
        for i, name in enumerate(cls._fields):
            comps = [0] * n
            comps[i] = 1
            setattr(cls, f"unit_{name}", cls(*comps))

    def _components(self) -> tuple:
        return tuple(getattr(self, name) for name in self._fields)

    def _map(self, fn):
        return type(self)(*(fn(c) for c in self._components()))

    def _zip(self, other, fn):
        return type(self)(*(fn(a, b) for a, b in zip(self._components(), other._components())))

    def __iter__(self):
        return iter(self._components())

    def __len__(self) -> int:
        return len(self._fields)

    # --- component-wise algebra

    def add(self, other):
        """Add the components of other to the components of self."""
        return self._zip(other, lambda a, b: a + b)

    def sub(self, other):
        """Subtract the components of other from the components of self."""
        return self._zip(other, lambda a, b: a - b)

    def mul(self, other):
        """Multiply component-wise."""
        return self._zip(other, lambda a, b: a * b)

    def div(self, other):
        """Divide component-wise. A zero divisor gives inf/NaN for floats."""
        return self._zip(other, lambda a, b: a / b)

    def scale(self, k: float):
        """Multiply all components by scalar k."""
        return self._map(lambda a: a * k)

    def dot(self, other):
        """Sum of the products of all components."""
        result = self._real(0)
        for a, b in zip(self._components(), other._components()):
            result += a * b
        return self._real(result)

    def length2(self):
        """Squared magnitude."""
        return self.dot(self)

    def length(self):
        """Magnitude."""
        return self._real(np.sqrt(self.length2()))

    def normalize(self):
        """Vector of length 1 in the same direction, or zero if self has length 0."""
        length = self.length()
        if length != 0:
            return self.scale(1 / length)
        return self.zero

    def component_min(self, other):
        # a NaN in self yields the component of other
        return self._zip(other, lambda a, b: a if a < b else b)

    def component_max(self, other):
        return self._zip(other, lambda a, b: a if a > b else b)

    def lerp(self, other, f: float):
        """Linear interpolation, self at f=0 and other at f=1."""
        return self.add(other.sub(self).scale(f))

    def eql(self, other) -> bool:
        return self == other

    def approx_eq_abs(self, other, tolerance: float) -> bool:
        return all(approx_eq_abs(a, b, tolerance) for a, b in zip(self._components(), other._components()))

    def approx_eq_rel(self, other, tolerance: float) -> bool:
        return all(approx_eq_rel(a, b, tolerance) for a, b in zip(self._components(), other._components()))

    def swizzle(self, selector: str):
        """Build a scalar or vector from selected components.

        ``selector`` is 1-4 characters out of ``x``, ``y``, ``z``, ``w``,
        ``0`` and ``1``; letters must exist on this vector.

        - ``vec4(1, 2, 3, 4).swizzle("wzyx") == vec4(4, 3, 2, 1)``
        - ``vec4(1, 2, 3, 4).swizzle("xyx") == vec3(1, 2, 1)``
        - ``vec2(1, 2).swizzle("xyxy") == vec4(1, 2, 1, 2)``
        - ``vec2(3, 4).swizzle("xy01") == vec4(3, 4, 0, 1)``
        """
        return swizzle(self, selector)

    def transform(self, mat):
        """Multiply the row vector with a matrix of the same arity (v . M)."""
        n = len(self._fields)
        if getattr(mat, "_size", None) != n:
            raise DimensionError(f"vec{n} can only be transformed by a mat{n}", n, getattr(mat, "_size", None))
        return type(self).from_array(self.to_array() @ mat.to_array())

    # --- numpy interop

    @classmethod
    def from_array(cls, arr):
        a = np.asarray(arr)
        n = len(cls._fields)
        if a.shape != (n,):
            raise DimensionError(f"vec{n} needs {n} components, got shape {a.shape}", (n,), a.shape)
        return cls(*a.astype(cls._real, copy=False))

    def to_array(self) -> np.ndarray:
        return np.array(self._components(), dtype=self._real)

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        a = self.to_array()
        return a if dtype is None else a.astype(dtype)

    # --- text

    def format(self) -> str:
        comps = ", ".join(f"{float(c):.{FORMAT_PRECISION}f}" for c in self._components())
        return f"vec{len(self._fields)}({comps})"

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        comps = ", ".join(f"{name}={getattr(self, name).item()!r}" for name in self._fields)
        return f"{type(self).__name__}({comps})"

    def __reduce__(self):
        from vecmath.generic import rebuild

        return rebuild, (np.dtype(self._real).name, type(self).__name__, self._components())

    # --- operators

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.sub(other)

    def __neg__(self):
        return self._map(lambda a: -a)

    def __mul__(self, other):
        if type(other) is type(self):
            return self.mul(other)
        if isinstance(other, _SCALAR_TYPES):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, _SCALAR_TYPES):
            return self.scale(other)
        return NotImplemented

    def __truediv__(self, other):
        if type(other) is type(self):
            return self.div(other)
        if isinstance(other, _SCALAR_TYPES):
            return self._map(lambda a: a / other)
        return NotImplemented

    def __matmul__(self, other):
        if not isinstance(other, MatrixMixin) or other._size != len(self._fields):
            return NotImplemented
        return self.transform(other)

    def __getattr__(self, name: str):
        # Only reached for missing attributes: `v.zyx` is `v.swizzle("zyx")`.
        if name in self._fields or not is_selector(name):
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        try:
            return self.swizzle(name)
        except SwizzleError as exc:
            raise AttributeError(str(exc)) from exc


@dataclass(frozen=True, repr=False)
class Vec2(VectorMixin):
    """2-dimensional vector."""

    x: float
    y: float

    _fields = ("x", "y")


@dataclass(frozen=True, repr=False)
class Vec3(VectorMixin):
    """3-dimensional vector."""

    x: float
    y: float
    z: float

    _fields = ("x", "y", "z")

    def cross(self, other):
        """Cross product; the result is perpendicular to self and other."""
        return type(self)(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def to_affine_position(self):
        """Homogeneous position (w=1)."""
        return self._space.Vec4(self.x, self.y, self.z, 1)

    def to_affine_direction(self):
        """Homogeneous direction (w=0)."""
        return self._space.Vec4(self.x, self.y, self.z, 0)

    @classmethod
    def from_affine_position(cls, v):
        # perspective divide, w == 0 is not guarded
        return cls(v.x / v.w, v.y / v.w, v.z / v.w)

    @classmethod
    def from_affine_direction(cls, v):
        return cls(v.x, v.y, v.z)

    def transform_position(self, mat):
        """Transform a position with a 4x4 matrix, including the perspective divide."""
        return type(self).from_affine_position(self.to_affine_position().transform(mat))

    def transform_direction(self, mat):
        """Transform a direction with a 4x4 matrix; translation is ignored."""
        return type(self).from_affine_direction(self.to_affine_direction().transform(mat))


@dataclass(frozen=True, repr=False)
class Vec4(VectorMixin):
    """4-dimensional vector."""

    x: float
    y: float
    z: float
    w: float

    _fields = ("x", "y", "z", "w")
