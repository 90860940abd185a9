"""Bind the vector and matrix families to one scalar type."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from vecmath.core.matrix import Mat2, Mat3, Mat4
from vecmath.core.vector import Vec2, Vec3, Vec4
from vecmath.exceptions import ScalarTypeError

logger = logging.getLogger(__name__)

# float, signed int, unsigned int
_SUPPORTED_KINDS = "fiu"


@dataclass(frozen=True)
class Specialization:
    """Vector and matrix types whose components are all of type ``real``."""

    real: type
    Vec2: type
    Vec3: type
    Vec4: type
    Mat2: type
    Mat3: type
    Mat4: type

    def vec2(self, x: float, y: float):
        return self.Vec2(x, y)

    def vec3(self, x: float, y: float, z: float):
        return self.Vec3(x, y, z)

    def vec4(self, x: float, y: float, z: float, w: float):
        return self.Vec4(x, y, z, w)

    def vector_type(self, n: int) -> type:
        """Vector class with n components (2..4)."""
        if n == 2:
            return self.Vec2
        if n == 3:
            return self.Vec3
        if n == 4:
            return self.Vec4
        raise ValueError(f"no vector type with {n} components")


def specialize_on(real) -> Specialization:
    """Return the vector and matrix types specialized on scalar type ``real``.

    ``real`` is anything numpy accepts as a dtype of float or integer kind
    (``np.float32``, ``float``, ``"f8"``, ``np.int32``...). Repeated calls with
    the same scalar type return the same object.
    """
    if real is None:
        # np.dtype(None) would silently mean float64
        raise ScalarTypeError("cannot specialize on None: expected a float or integer type")
    try:
        dtype = np.dtype(real)
    except TypeError as exc:
        raise ScalarTypeError(f"cannot specialize on {real!r}: not a numpy scalar type") from exc
    if dtype.kind not in _SUPPORTED_KINDS:
        raise ScalarTypeError(f"cannot specialize on {dtype.name}: expected a float or integer type")
    return _specialize(dtype.type)


@lru_cache(maxsize=None)
def _specialize(real: type) -> Specialization:
    def bind(base: type) -> type:
        return type(base.__name__, (base,), {"_real": real, "__module__": base.__module__})

    space = Specialization(
        real=real,
        Vec2=bind(Vec2),
        Vec3=bind(Vec3),
        Vec4=bind(Vec4),
        Mat2=bind(Mat2),
        Mat3=bind(Mat3),
        Mat4=bind(Mat4),
    )
    for cls in (space.Vec2, space.Vec3, space.Vec4, space.Mat2, space.Mat3, space.Mat4):
        cls._space = space
        cls._bind_constants()

    logger.debug("specialized vectors and matrices on %s", np.dtype(real).name)
    return space


def rebuild(real_name: str, family: str, args: tuple):
    """Unpickle helper: construct ``family`` (e.g. "Vec3") of the ``real_name`` specialization."""
    return getattr(specialize_on(real_name), family)(*args)
