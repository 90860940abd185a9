"""Vectors and matrices on the default scalar type (float32).

Other precisions come from ``specialize_on``::

    from vecmath.linalg import specialize_on
    f64 = specialize_on(np.float64)
    v = f64.vec3(1, 2, 3)
"""
from __future__ import annotations

from vecmath.config import DEFAULT_REAL, REAL_ALIASES
from vecmath.generic import Specialization, specialize_on
from vecmath.util.math import to_degrees, to_radians

_default = specialize_on(REAL_ALIASES[DEFAULT_REAL])

Real = _default.real

Vec2 = _default.Vec2
Vec3 = _default.Vec3
Vec4 = _default.Vec4
Mat2 = _default.Mat2
Mat3 = _default.Mat3
Mat4 = _default.Mat4

vec2 = _default.vec2
vec3 = _default.vec3
vec4 = _default.vec4

__all__ = [
    "Real",
    "Specialization",
    "specialize_on",
    "to_degrees",
    "to_radians",
    "Vec2",
    "Vec3",
    "Vec4",
    "Mat2",
    "Mat3",
    "Mat4",
    "vec2",
    "vec3",
    "vec4",
]
