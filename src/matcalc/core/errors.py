"""
Matrix Errors — Таксономия ошибок матричных операций

Каждая ошибка является восстановимым результатом, а не падением процесса:
вызывающая сторона (UI-оболочка, калькулятор) получает тип ошибки
и человекочитаемое сообщение.

ИНВАРИАНТЫ:
1. Ошибка возбуждается ДО построения результата
2. Входные матрицы никогда не модифицируются перед ошибкой
"""

from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================


class ErrorKind(str, Enum):
    """Тип ошибки матричной операции."""

    INVALID_DIMENSIONS = "INVALID_DIMENSIONS"
    DIMENSION_MISMATCH = "DIMENSION_MISMATCH"
    NOT_SQUARE = "NOT_SQUARE"
    UNSUPPORTED_DIMENSION = "UNSUPPORTED_DIMENSION"
    SINGULAR = "SINGULAR"
    INVALID_REQUEST = "INVALID_REQUEST"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class MatrixError(Exception):
    """
    Базовая ошибка матричных операций.

    Attributes:
        kind: Тип ошибки (ErrorKind)
        message: Человекочитаемое сообщение
    """

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidDimensions(MatrixError, ValueError):
    """Размер матрицы вне диапазона [1, 5] или непрямоугольная сетка."""

    kind = ErrorKind.INVALID_DIMENSIONS


class DimensionMismatch(MatrixError, ValueError):
    """Несовместимые размеры операндов (Add/Subtract/Multiply)."""

    kind = ErrorKind.DIMENSION_MISMATCH


class NotSquare(MatrixError, ValueError):
    """Trace/Determinant/Inverse запрошены для неквадратной матрицы."""

    kind = ErrorKind.NOT_SQUARE


class UnsupportedDimension(MatrixError):
    """
    Определитель запрошен для квадратной матрицы размера не 2 и не 3.

    Это ограничение области применения, а не математическая ошибка:
    определитель реализован только для 2×2 и 3×3.
    """

    kind = ErrorKind.UNSUPPORTED_DIMENSION


class Singular(MatrixError):
    """
    Исключение Гаусса-Жордана встретило нулевой ведущий элемент.

    ВНИМАНИЕ: без перестановки строк это срабатывает и для невырожденных
    матриц с нулём на диагонали (например, [[0, 1], [1, 0]]).
    """

    kind = ErrorKind.SINGULAR


class InvalidRequest(MatrixError, ValueError):
    """Запрос калькулятора без обязательного операнда или с невалидными данными."""

    kind = ErrorKind.INVALID_REQUEST
