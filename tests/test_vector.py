"""
Tests for the vector family.

Validates:
    - construction coerces to the scalar type, constants per arity
    - component-wise algebra (add/sub/mul/div/scale, min/max, lerp)
    - dot/length/length2/normalize identities, normalize of zero
    - exact and approximate equality
    - operators, iteration, numpy interop, text format
"""

import numpy as np
import pytest

from vecmath.core.vector import Vec2 as GenericVec2
from vecmath.exceptions import DimensionError


# ═══════════════════════════════════════════════════════════════════════
# Construction and constants
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:
    """Components are stored as the specialization's scalar type."""

    def test_components_coerced(self, f32):
        v = f32.vec3(1, 2.5, -3)
        assert all(isinstance(c, np.float32) for c in v)
        assert (v.x, v.y, v.z) == (1.0, 2.5, -3.0)

    def test_field_order(self, f32):
        assert tuple(f32.vec4(1, 2, 3, 4)) == (1, 2, 3, 4)
        assert len(f32.vec4(1, 2, 3, 4)) == 4

    def test_immutable(self, f32):
        v = f32.vec2(1, 2)
        with pytest.raises(AttributeError):
            v.x = 5

    def test_hashable(self, f32):
        assert len({f32.vec2(1, 2), f32.vec2(1, 2), f32.vec2(2, 1)}) == 2

    def test_unspecialized_rejected(self):
        with pytest.raises(TypeError, match="specialized"):
            GenericVec2(1, 2)


class TestConstants:
    """zero, one and the standard basis exist for every arity."""

    def test_vec2(self, f32):
        V = f32.Vec2
        assert V.zero == f32.vec2(0, 0)
        assert V.one == f32.vec2(1, 1)
        assert V.unit_x == f32.vec2(1, 0)
        assert V.unit_y == f32.vec2(0, 1)

    def test_vec3(self, f32):
        V = f32.Vec3
        assert V.unit_z == f32.vec3(0, 0, 1)
        assert not hasattr(f32.Vec2, "unit_z")

    def test_vec4_unit_w(self, f32):
        assert f32.Vec4.unit_w == f32.vec4(0, 0, 0, 1)
        assert f32.Vec4.unit_z == f32.vec4(0, 0, 1, 0)

    def test_constants_are_shared(self, f32):
        assert f32.Vec3.zero is f32.Vec3.zero


# ═══════════════════════════════════════════════════════════════════════
# Component-wise algebra
# ═══════════════════════════════════════════════════════════════════════


class TestComponentWise:

    def test_add_sub(self, f32):
        a = f32.vec3(1, 2, 3)
        b = f32.vec3(4, 5, 6)
        assert a.add(b) == f32.vec3(5, 7, 9)
        assert b.sub(a) == f32.vec3(3, 3, 3)

    def test_mul_div(self, f32):
        a = f32.vec4(1, 2, 3, 4)
        b = f32.vec4(2, 4, 6, 8)
        assert a.mul(b) == f32.vec4(2, 8, 18, 32)
        assert b.div(a) == f32.vec4(2, 2, 2, 2)

    def test_div_by_zero_is_not_an_error(self, f32):
        with np.errstate(divide="ignore", invalid="ignore"):
            r = f32.vec2(1, 0).div(f32.vec2(0, 0))
        assert np.isinf(r.x)
        assert np.isnan(r.y)

    def test_scale(self, f32):
        assert f32.vec3(1, -2, 3).scale(2) == f32.vec3(2, -4, 6)

    def test_component_min_max(self, f32):
        a = f32.vec3(1, 5, -2)
        b = f32.vec3(3, 4, -7)
        assert a.component_min(b) == f32.vec3(1, 4, -7)
        assert a.component_max(b) == f32.vec3(3, 5, -2)

    def test_component_min_max_nan_takes_other(self, f64):
        # a NaN on the left gives the right-hand component, not NaN
        a = f64.vec2(np.nan, 1)
        b = f64.vec2(2, np.nan)
        assert a.component_min(b).x == 2
        assert np.isnan(a.component_min(b).y)
        assert a.component_max(b).x == 2
        assert np.isnan(a.component_max(b).y)

    def test_lerp(self, f32):
        a = f32.vec2(0, 0)
        b = f32.vec2(10, 20)
        assert a.lerp(b, 0.25) == f32.vec2(2.5, 5)
        assert a.lerp(b, 0) == a
        assert a.lerp(b, 1) == b

    def test_inputs_untouched(self, f32):
        a = f32.vec2(1, 2)
        a.add(f32.vec2(3, 4))
        assert a == f32.vec2(1, 2)


class TestLengthAndDot:

    def test_dot(self, f32):
        assert f32.vec3(1, 2, 3).dot(f32.vec3(4, -5, 6)) == 12

    def test_length2_is_self_dot(self, f64, rng):
        for _ in range(20):
            v = f64.Vec4.from_array(rng.standard_normal(4))
            assert v.length2() == v.dot(v)

    def test_length_is_sqrt_length2(self, f64, rng):
        for _ in range(20):
            v = f64.Vec3.from_array(rng.standard_normal(3))
            assert v.length() == np.sqrt(v.length2())

    def test_length_345(self, f32):
        assert f32.vec2(3, 4).length() == 5

    def test_normalize_unit_length(self, f32, rng):
        for _ in range(20):
            v = f32.Vec3.from_array(rng.standard_normal(3) * 10)
            assert abs(float(v.normalize().length()) - 1.0) < 1e-6

    def test_normalize_zero_is_zero(self, f32):
        assert f32.Vec3.zero.normalize() == f32.Vec3.zero
        assert f32.Vec2.zero.normalize() == f32.Vec2.zero

    def test_cross(self, f32):
        assert f32.vec3(1, 2, 3).cross(f32.vec3(-7, 8, 9)) == f32.vec3(-6, -30, 22)

    def test_cross_is_perpendicular(self, f64, rng):
        a = f64.Vec3.from_array(rng.standard_normal(3))
        b = f64.Vec3.from_array(rng.standard_normal(3))
        c = a.cross(b)
        assert abs(c.dot(a)) < 1e-12
        assert abs(c.dot(b)) < 1e-12


# ═══════════════════════════════════════════════════════════════════════
# Equality
# ═══════════════════════════════════════════════════════════════════════


class TestEquality:

    def test_eql_exact(self, f32):
        assert f32.vec2(1, 2).eql(f32.vec2(1, 2))
        assert not f32.vec2(1, 2).eql(f32.vec2(1, 2.0001))

    def test_approx_eq_abs(self, f32):
        a = f32.vec2(1, 2)
        assert a.approx_eq_abs(f32.vec2(1.05, 2), 0.1)
        assert not a.approx_eq_abs(f32.vec2(1.05, 2), 0.01)

    def test_approx_eq_needs_every_component(self, f32):
        a = f32.vec3(1, 2, 3)
        assert not a.approx_eq_abs(f32.vec3(1, 2, 4), 0.5)

    def test_approx_eq_rel(self, f64):
        a = f64.vec2(1000, 1)
        assert a.approx_eq_rel(f64.vec2(1001, 1), 1e-2)
        assert not a.approx_eq_rel(f64.vec2(1001, 1), 1e-4)

    def test_different_scalar_types_differ(self, f32, f64):
        assert f32.vec2(1, 2) != f64.vec2(1, 2)


# ═══════════════════════════════════════════════════════════════════════
# Operators and interop
# ═══════════════════════════════════════════════════════════════════════


class TestOperators:

    def test_arithmetic(self, f32):
        a = f32.vec3(1, 2, 3)
        b = f32.vec3(4, 5, 6)
        assert a + b == a.add(b)
        assert a - b == a.sub(b)
        assert a * b == a.mul(b)
        assert b / a == b.div(a)
        assert -a == f32.vec3(-1, -2, -3)

    def test_scalar(self, f32):
        a = f32.vec2(1, 2)
        assert a * 3 == f32.vec2(3, 6)
        assert 3 * a == f32.vec2(3, 6)
        assert a / 2 == f32.vec2(0.5, 1)

    def test_mismatched_arity(self, f32):
        with pytest.raises(TypeError):
            f32.vec2(1, 2) + f32.vec3(1, 2, 3)

    def test_matmul_transforms(self, f32):
        m = f32.Mat2.from_rows((1, 2), (3, 4))
        assert f32.vec2(1, 1) @ m == f32.vec2(1, 1).transform(m)


class TestInterop:

    def test_to_array(self, f32):
        a = f32.vec3(1, 2, 3).to_array()
        assert a.dtype == np.float32
        np.testing.assert_array_equal(a, [1, 2, 3])

    def test_asarray(self, f64):
        np.testing.assert_array_equal(np.asarray(f64.vec2(5, 6)), [5, 6])

    def test_from_array(self, f32):
        assert f32.Vec4.from_array([1, 2, 3, 4]) == f32.vec4(1, 2, 3, 4)

    def test_from_array_wrong_length(self, f32):
        with pytest.raises(DimensionError) as info:
            f32.Vec3.from_array([1, 2])
        assert info.value.expected == (3,)
        assert info.value.actual == (2,)


class TestFormat:

    def test_vec_format(self, f32):
        assert str(f32.vec2(1, 2)) == "vec2(1.00, 2.00)"
        assert f32.vec3(1, 2.5, -3).format() == "vec3(1.00, 2.50, -3.00)"
        assert str(f32.vec4(0.125, 0, 0, 1)) == "vec4(0.12, 0.00, 0.00, 1.00)"

    def test_repr(self, f64):
        assert repr(f64.vec2(1, 2)) == "Vec2(x=1.0, y=2.0)"
