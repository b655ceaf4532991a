"""
Numerical Safeguards — Float-примитивы для матричных вычислений

Модуль содержит:
- Epsilon-константы для сравнений и режима с перестановкой строк
- Проверку валидности float (NaN/Inf)
- Сравнения float и матриц с учётом машинной точности
- Масштабируемый порог ведущего элемента

ВАЖНО: основные алгоритмы (Rank, Inverse в режиме NONE) сравнивают
ведущий элемент с нулём ТОЧНО, без epsilon. Пороги отсюда используются
только в явно выбранном режиме PivotMode.PARTIAL и в сравнениях результатов.
"""

import math
from typing import Final, Iterable, Sequence

from matcalc.core.domain.matrix import Matrix

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Порог ведущего элемента для режима с частичным выбором (масштабируется)
EPS_PIVOT: Final[float] = 1e-12

# Относительная толерантность сравнения float
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Абсолютная толерантность сравнения float
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Целое вне диапазона float считается невалидным.

    Returns:
        True если значение конечное
    """
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def all_finite(values: Iterable[float]) -> bool:
    """True если все значения конечные."""
    return all(is_valid_float(v) for v in values)


def grid_is_finite(grid: Sequence[Sequence[float]]) -> bool:
    """True если все элементы двумерной сетки конечные."""
    return all(all_finite(row) for row in grid)


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_zero(value: float, tol: float = EPS_FLOAT_COMPARE_ABS) -> bool:
    """True если abs(value) <= tol."""
    return abs(value) <= tol


def matrices_close(
    a: Matrix,
    b: Matrix,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Поэлементное сравнение матриц с толерантностью.

    Матрицы разных размеров никогда не равны.

    Examples:
        >>> m = Matrix.from_values([[1.0, 2.0]])
        >>> matrices_close(m, Matrix.from_values([[1.0, 2.0 + 1e-13]]))
        True
    """
    if a.shape != b.shape:
        return False
    return all(
        is_close(x, y, rel_tol=rel_tol, abs_tol=abs_tol)
        for row_a, row_b in zip(a.values, b.values)
        for x, y in zip(row_a, row_b)
    )


# =============================================================================
# ПОРОГ ВЕДУЩЕГО ЭЛЕМЕНТА
# =============================================================================


def max_abs(grid: Sequence[Sequence[float]]) -> float:
    """Максимальный модуль элемента сетки (0.0 для нулевой)."""
    mx = 0.0
    for row in grid:
        for v in row:
            av = abs(v)
            if av > mx:
                mx = av
    return mx


def scaled_pivot_eps(
    grid: Sequence[Sequence[float]], eps: float = EPS_PIVOT
) -> float:
    """
    Порог ведущего элемента, масштабированный по величине элементов.

    eps_eff = eps * max(1, max|a_ij|)

    Raises:
        ValueError: Если eps <= 0
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")
    return eps * max(1.0, max_abs(grid))
