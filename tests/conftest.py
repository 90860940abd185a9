"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from vecmath.generic import specialize_on


@pytest.fixture
def f32():
    """Default single-precision specialization."""
    return specialize_on(np.float32)


@pytest.fixture
def f64():
    """Double-precision specialization for numerically tight checks."""
    return specialize_on(np.float64)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def counting_matrix(f32):
    """Rows [1..4], [5..8], [9..12], [13..16]."""
    return f32.Mat4.from_rows(
        (1, 2, 3, 4),
        (5, 6, 7, 8),
        (9, 10, 11, 12),
        (13, 14, 15, 16),
    )
