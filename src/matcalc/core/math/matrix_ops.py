"""
Matrix Ops — Поэлементные и алгебраические операции над матрицами

Операции:
- add / subtract: поэлементно, размеры должны совпадать
- multiply: A (R×K) · B (K×C) → R×C
- multiply_by_scalar, transpose: всегда успешны
- trace: только квадратные матрицы
- determinant: только 2×2 и 3×3

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Входы не модифицируются, результат возвращается новым Matrix
2. Проверка размеров выполняется до любых вычислений
3. Определитель НЕ обобщается на N×N (1×1, 4×4, 5×5 → UnsupportedDimension)
"""

from matcalc.core.domain.matrix import Matrix
from matcalc.core.errors import DimensionMismatch, NotSquare, UnsupportedDimension


def _shape_str(m: Matrix) -> str:
    return f"{m.rows}x{m.columns}"


def _require_square(a: Matrix, operation: str) -> int:
    if not a.is_square:
        raise NotSquare(
            f"{operation} is defined only for square matrices, got {_shape_str(a)}"
        )
    return a.rows


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ
# =============================================================================


def add(a: Matrix, b: Matrix) -> Matrix:
    """
    Сумма A + B.

    Raises:
        DimensionMismatch: Если размеры A и B различаются
    """
    if a.shape != b.shape:
        raise DimensionMismatch(
            f"Matrix dimensions must match for addition: "
            f"{_shape_str(a)} vs {_shape_str(b)}"
        )
    return Matrix(
        values=tuple(
            tuple(x + y for x, y in zip(row_a, row_b))
            for row_a, row_b in zip(a.values, b.values)
        )
    )


def subtract(a: Matrix, b: Matrix) -> Matrix:
    """
    Разность A - B.

    Raises:
        DimensionMismatch: Если размеры A и B различаются
    """
    if a.shape != b.shape:
        raise DimensionMismatch(
            f"Matrix dimensions must match for subtraction: "
            f"{_shape_str(a)} vs {_shape_str(b)}"
        )
    return Matrix(
        values=tuple(
            tuple(x - y for x, y in zip(row_a, row_b))
            for row_a, row_b in zip(a.values, b.values)
        )
    )


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """
    Произведение A · B.

    Result[i][j] = Σ_k A[i][k] · B[k][j], накопление от 0.0 по возрастанию k.

    Raises:
        DimensionMismatch: Если A.columns != B.rows

    Examples:
        >>> a = Matrix.from_values([[1, 2], [3, 4]])
        >>> multiply(a, Matrix.identity(2)) == a
        True
    """
    if a.columns != b.rows:
        raise DimensionMismatch(
            f"Number of columns of A must equal number of rows of B: "
            f"{_shape_str(a)} vs {_shape_str(b)}"
        )
    result = []
    for i in range(a.rows):
        row = []
        for j in range(b.columns):
            acc = 0.0
            for k in range(a.columns):
                acc += a.values[i][k] * b.values[k][j]
            row.append(acc)
        result.append(tuple(row))
    return Matrix(values=tuple(result))


def multiply_by_scalar(a: Matrix, scalar: float) -> Matrix:
    """Произведение A · s (поэлементно)."""
    return Matrix(values=tuple(tuple(x * scalar for x in row) for row in a.values))


# =============================================================================
# ТРАНСПОНИРОВАНИЕ / СЛЕД / ОПРЕДЕЛИТЕЛЬ
# =============================================================================


def transpose(a: Matrix) -> Matrix:
    """Транспонированная матрица C × R."""
    return Matrix(values=tuple(zip(*a.values)))


def trace(a: Matrix) -> float:
    """
    След квадратной матрицы Σ A[i][i].

    Raises:
        NotSquare: Если матрица не квадратная
    """
    n = _require_square(a, "Trace")
    total = 0.0
    for i in range(n):
        total += a.values[i][i]
    return total


def determinant(a: Matrix) -> float:
    """
    Определитель матрицы 2×2 или 3×3.

    2×2: a00·a11 - a01·a10
    3×3: разложение по первой строке через три минора 2×2

    Raises:
        NotSquare: Если матрица не квадратная
        UnsupportedDimension: Если размер не 2 и не 3

    Examples:
        >>> determinant(Matrix.from_values([[1, 2], [3, 4]]))
        -2.0
    """
    n = _require_square(a, "Determinant")
    v = a.values

    if n == 2:
        return v[0][0] * v[1][1] - v[0][1] * v[1][0]

    if n == 3:
        return (
            v[0][0] * (v[1][1] * v[2][2] - v[1][2] * v[2][1])
            - v[0][1] * (v[1][0] * v[2][2] - v[1][2] * v[2][0])
            + v[0][2] * (v[1][0] * v[2][1] - v[1][1] * v[2][0])
        )

    raise UnsupportedDimension(
        f"Determinant is implemented only for 2x2 and 3x3 matrices, got {n}x{n}"
    )
