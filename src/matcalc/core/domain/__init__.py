"""
Domain models and value objects.

Contains the Matrix value type and its dimension limits.
"""

from matcalc.core.domain.matrix import (
    DEFAULT_LIMITS,
    MAX_DIMENSION,
    MIN_DIMENSION,
    Matrix,
    MatrixLimits,
)

__all__ = [
    "DEFAULT_LIMITS",
    "MAX_DIMENSION",
    "MIN_DIMENSION",
    "Matrix",
    "MatrixLimits",
]
