"""
matcalc — точные операции над малыми плотными матрицами (1×1 … 5×5).

Сложение, вычитание, умножение, умножение на скаляр, транспонирование,
след, определитель (2×2 и 3×3), ранг и обратная матрица.
"""

from matcalc.core.domain.matrix import Matrix, MatrixLimits
from matcalc.core.errors import (
    DimensionMismatch,
    ErrorKind,
    InvalidDimensions,
    InvalidRequest,
    MatrixError,
    NotSquare,
    Singular,
    UnsupportedDimension,
)
from matcalc.core.math import (
    EliminationConfig,
    PivotMode,
    add,
    determinant,
    inverse,
    multiply,
    multiply_by_scalar,
    rank,
    subtract,
    trace,
    transpose,
)

__version__ = "0.1.0"

__all__ = [
    # Domain
    "Matrix",
    "MatrixLimits",
    # Errors
    "ErrorKind",
    "MatrixError",
    "InvalidDimensions",
    "DimensionMismatch",
    "NotSquare",
    "UnsupportedDimension",
    "Singular",
    "InvalidRequest",
    # Operations
    "add",
    "subtract",
    "multiply",
    "multiply_by_scalar",
    "transpose",
    "trace",
    "determinant",
    "rank",
    "inverse",
    # Elimination config
    "EliminationConfig",
    "PivotMode",
]
