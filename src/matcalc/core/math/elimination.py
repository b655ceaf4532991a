"""
Elimination — Ранг (метод Гаусса) и обратная матрица (Гаусс-Жордан)

Два режима (PivotMode):
- NONE (по умолчанию): воспроизводит исходный алгоритм один в один.
  Ведущий элемент сравнивается с нулём ТОЧНО, в Inverse нет перестановки строк.
- PARTIAL: явно выбираемый устойчивый вариант с частичным выбором
  ведущего элемента по модулю и масштабируемым порогом.

ИЗВЕСТНЫЕ ОГРАНИЧЕНИЯ РЕЖИМА NONE:
1. Inverse([[0, 1], [1, 0]]) → Singular, хотя матрица невырождена
2. Сравнение с нулём без epsilon: ранг чувствителен к ошибкам округления
3. Rank перебирает ведущие индексы до числа столбцов, а строки
   переставляет среди всех строк (асимметрия для неквадратных матриц)

Рабочие буферы (temp, aug) создаются заново при каждом вызове.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from matcalc.core.domain.matrix import Matrix
from matcalc.core.errors import NotSquare, Singular
from matcalc.core.math.numerical_safeguards import EPS_PIVOT, scaled_pivot_eps

LOG = logging.getLogger(__name__)


# =============================================================================
# КОНФИГУРАЦИЯ
# =============================================================================


class PivotMode(str, Enum):
    """Стратегия выбора ведущего элемента."""

    NONE = "none"
    PARTIAL = "partial"


@dataclass(frozen=True)
class EliminationConfig:
    """
    Конфигурация исключения.

    pivot_eps используется только в режиме PARTIAL.
    """

    pivot_mode: PivotMode = PivotMode.NONE
    pivot_eps: float = EPS_PIVOT


DEFAULT_ELIMINATION: EliminationConfig = EliminationConfig()


# =============================================================================
# RANK
# =============================================================================


def rank(a: Matrix, config: Optional[EliminationConfig] = None) -> int:
    """
    Ранг матрицы методом исключения.

    Args:
        a: Матрица
        config: Конфигурация исключения (default: PivotMode.NONE)

    Returns:
        Ранг в диапазоне [0, a.columns]

    ВНИМАНИЕ (строк меньше, чем столбцов): исходный алгоритм обращается
    к temp[row][row] при row >= числа строк и завершается ошибкой индекса.
    Здесь такой ведущий индекс считается нулевым без строк ниже: столбец
    исключается, ранг уменьшается. Результат не больше min(R, C), но поведение
    исходного алгоритма для этого случая не определено.

    Examples:
        >>> rank(Matrix.from_values([[1, 2, 3], [2, 4, 6], [1, 0, 1]]))
        2
    """
    config = config or DEFAULT_ELIMINATION
    if config.pivot_mode == PivotMode.PARTIAL:
        return _rank_partial(a, config.pivot_eps)
    return _rank_exact(a)


def _rank_exact(a: Matrix) -> int:
    temp = a.to_list()
    n_rows = a.rows
    rank_value = a.columns
    row = 0

    while row < rank_value:
        # При row >= n_rows диагонального элемента нет: столбец исключается
        pivot = temp[row][row] if row < n_rows else 0.0

        if pivot != 0:
            for r in range(n_rows):
                if r != row:
                    mult = temp[r][row] / temp[row][row]
                    for i in range(rank_value):
                        temp[r][i] -= mult * temp[row][i]
            row += 1
            continue

        swapped = False
        for i in range(row + 1, n_rows):
            if temp[i][row] != 0:
                for j in range(rank_value):
                    temp[row][j], temp[i][j] = temp[i][j], temp[row][j]
                LOG.debug("rank: swapped rows %d and %d", row, i)
                swapped = True
                break

        if not swapped:
            rank_value -= 1
            for r in range(n_rows):
                temp[r][row] = temp[r][rank_value]
            LOG.debug(
                "rank: column %d has no pivot, rank reduced to %d", row, rank_value
            )
        # Тот же ведущий индекс проверяется повторно

    return rank_value


def _rank_partial(a: Matrix, eps: float) -> int:
    temp = a.to_list()
    m, n = a.shape
    eps_eff = scaled_pivot_eps(temp, eps)

    pivot_row = 0
    for col in range(n):
        if pivot_row >= m:
            break

        best_row = max(range(pivot_row, m), key=lambda r: abs(temp[r][col]))
        if abs(temp[best_row][col]) <= eps_eff:
            continue

        if best_row != pivot_row:
            temp[pivot_row], temp[best_row] = temp[best_row], temp[pivot_row]

        pivot = temp[pivot_row][col]
        for r in range(m):
            if r == pivot_row:
                continue
            factor = temp[r][col] / pivot
            if factor == 0.0:
                continue
            for j in range(col, n):
                temp[r][j] -= factor * temp[pivot_row][j]

        pivot_row += 1

    return pivot_row


# =============================================================================
# INVERSE
# =============================================================================


def inverse(a: Matrix, config: Optional[EliminationConfig] = None) -> Matrix:
    """
    Обратная матрица методом Гаусса-Жордана по расширенной матрице [A | I].

    Args:
        a: Квадратная матрица
        config: Конфигурация исключения (default: PivotMode.NONE)

    Returns:
        A⁻¹ (правая половина приведённой расширенной матрицы)

    Raises:
        NotSquare: Если матрица не квадратная
        Singular: Если встречен нулевой ведущий элемент

    Examples:
        >>> inverse(Matrix.from_values([[2, 0], [0, 2]])).values
        ((0.5, 0.0), (0.0, 0.5))
    """
    if not a.is_square:
        raise NotSquare(
            f"Inverse exists only for square matrices, got {a.rows}x{a.columns}"
        )
    config = config or DEFAULT_ELIMINATION

    n = a.rows
    aug = _augment_with_identity(a)

    if config.pivot_mode == PivotMode.PARTIAL:
        _reduce_partial(aug, n, scaled_pivot_eps(a.values, config.pivot_eps))
    else:
        _reduce_exact(aug, n)

    return Matrix(values=tuple(tuple(aug[i][n:]) for i in range(n)))


def _augment_with_identity(a: Matrix) -> list[list[float]]:
    n = a.rows
    aug = []
    for i in range(n):
        identity_row = [0.0] * n
        identity_row[i] = 1.0
        aug.append(list(a.values[i]) + identity_row)
    return aug


def _eliminate_column(aug: list[list[float]], n: int, i: int) -> None:
    """Нормирует строку i и исключает столбец i из остальных строк."""
    width = 2 * n
    diag = aug[i][i]
    for j in range(width):
        aug[i][j] /= diag

    for k in range(n):
        if k != i:
            factor = aug[k][i]
            for j in range(width):
                aug[k][j] -= factor * aug[i][j]


def _reduce_exact(aug: list[list[float]], n: int) -> None:
    for i in range(n):
        if aug[i][i] == 0:
            LOG.debug("inverse: zero pivot at (%d, %d)", i, i)
            raise Singular("Matrix is singular, inverse does not exist")
        _eliminate_column(aug, n, i)


def _reduce_partial(aug: list[list[float]], n: int, eps_eff: float) -> None:
    for i in range(n):
        best_row = max(range(i, n), key=lambda r: abs(aug[r][i]))
        if abs(aug[best_row][i]) <= eps_eff:
            LOG.debug("inverse: no usable pivot in column %d", i)
            raise Singular("Matrix is singular, inverse does not exist")
        if best_row != i:
            aug[i], aug[best_row] = aug[best_row], aug[i]
        _eliminate_column(aug, n, i)
