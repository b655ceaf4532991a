"""
Core math modules для matcalc

Матричные операции, исключение Гаусса и численные примитивы.
"""

# Numerical Safeguards
from matcalc.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_PIVOT,
    # NaN/Inf checks
    all_finite,
    grid_is_finite,
    is_valid_float,
    # Epsilon comparisons
    is_close,
    is_zero,
    matrices_close,
    # Pivot threshold
    max_abs,
    scaled_pivot_eps,
)

# Matrix Ops
from matcalc.core.math.matrix_ops import (
    add,
    determinant,
    multiply,
    multiply_by_scalar,
    subtract,
    trace,
    transpose,
)

# Elimination
from matcalc.core.math.elimination import (
    DEFAULT_ELIMINATION,
    EliminationConfig,
    PivotMode,
    inverse,
    rank,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_PIVOT",
    # Numerical Safeguards — NaN/Inf checks
    "all_finite",
    "grid_is_finite",
    "is_valid_float",
    # Numerical Safeguards — Epsilon comparisons
    "is_close",
    "is_zero",
    "matrices_close",
    # Numerical Safeguards — Pivot threshold
    "max_abs",
    "scaled_pivot_eps",
    # Matrix Ops
    "add",
    "determinant",
    "multiply",
    "multiply_by_scalar",
    "subtract",
    "trace",
    "transpose",
    # Elimination — Config
    "DEFAULT_ELIMINATION",
    "EliminationConfig",
    "PivotMode",
    # Elimination — Functions
    "inverse",
    "rank",
]
