"""
Exception hierarchy for vecmath.

Only usage errors raise. Numeric degeneracy (division by zero, w == 0,
degenerate projection bounds) is left to IEEE semantics, and a singular
matrix is reported by ``invert`` returning ``None``.
"""
from __future__ import annotations


class VecmathError(Exception):
    """Base exception for all vecmath errors."""


class SwizzleError(VecmathError, ValueError):
    """
    Swizzle selector is empty, too long, or references a component the
    source vector does not have.

    Attributes:
        selector: The offending selector string
        arity: Number of components of the source vector
    """

    def __init__(self, message: str, selector: str, arity: int) -> None:
        super().__init__(message)
        self.selector = selector
        self.arity = arity


class DimensionError(VecmathError, ValueError):
    """
    Wrong number of components for a vector or wrong shape for a matrix.

    Attributes:
        expected: Expected length or shape
        actual: Length or shape that was given
    """

    def __init__(self, message: str, expected: object = None, actual: object = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class ScalarTypeError(VecmathError, TypeError):
    """Scalar type cannot be used to specialize vectors and matrices."""
