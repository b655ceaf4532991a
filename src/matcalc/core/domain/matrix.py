"""
Matrix — Плотная матрица малого размера (value type)

Immutable Pydantic модель: прямоугольная сетка float размером R × C.
Все операции создают новый экземпляр, исходная матрица не изменяется.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. R ≥ 1, C ≥ 1, все строки одинаковой длины
2. Размеры не меняются после создания (frozen=True)
3. Равенство по значению (размер + элементы), не по ссылке
4. Нет алиасинга с буфером вызывающей стороны (хранение — кортежи)

Диапазон [1, 5] проверяется в from_dimensions/identity. from_values
диапазон не проверяет, если не передан strict=True.
"""

from dataclasses import dataclass
from typing import Final, Sequence

from pydantic import BaseModel, Field, field_validator

from matcalc.core.errors import InvalidDimensions


# =============================================================================
# ОГРАНИЧЕНИЯ РАЗМЕРОВ
# =============================================================================

MIN_DIMENSION: Final[int] = 1
MAX_DIMENSION: Final[int] = 5


@dataclass(frozen=True)
class MatrixLimits:
    """Допустимый диапазон числа строк и столбцов."""

    min_dim: int = MIN_DIMENSION
    max_dim: int = MAX_DIMENSION

    def contains(self, rows: int, cols: int) -> bool:
        return (
            self.min_dim <= rows <= self.max_dim
            and self.min_dim <= cols <= self.max_dim
        )

    def check(self, rows: int, cols: int) -> None:
        """
        Проверка размеров.

        Raises:
            InvalidDimensions: Если rows или cols вне [min_dim, max_dim]
        """
        if not self.contains(rows, cols):
            raise InvalidDimensions(
                f"Matrix dimensions must be between {self.min_dim} and "
                f"{self.max_dim}, got {rows}x{cols}"
            )


DEFAULT_LIMITS: Final[MatrixLimits] = MatrixLimits()


# =============================================================================
# MATRIX MODEL
# =============================================================================


class Matrix(BaseModel):
    """
    Плотная матрица R × C.

    Хранение построчное: values[i][j] — элемент строки i, столбца j.
    Доступ по индексу: m[i, j].
    """

    values: tuple[tuple[float, ...], ...] = Field(
        ..., description="Элементы матрицы по строкам"
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("values")
    @classmethod
    def validate_rectangular(
        cls, v: tuple[tuple[float, ...], ...]
    ) -> tuple[tuple[float, ...], ...]:
        """Матрица непустая и прямоугольная."""
        if not v:
            raise ValueError("matrix must have at least one row")
        width = len(v[0])
        if width == 0:
            raise ValueError("matrix must have at least one column")
        for i, row in enumerate(v):
            if len(row) != width:
                raise ValueError(
                    f"row {i} has {len(row)} entries, expected {width}"
                )
        return v

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_dimensions(
        cls, rows: int, cols: int, limits: MatrixLimits = DEFAULT_LIMITS
    ) -> "Matrix":
        """
        Нулевая матрица rows × cols.

        Raises:
            InvalidDimensions: Если rows или cols вне [1, 5]
        """
        limits.check(rows, cols)
        return cls(values=tuple((0.0,) * cols for _ in range(rows)))

    @classmethod
    def from_values(
        cls,
        grid: Sequence[Sequence[float]],
        strict: bool = False,
        limits: MatrixLimits = DEFAULT_LIMITS,
    ) -> "Matrix":
        """
        Матрица из двумерной сетки чисел (копия, без алиасинга).

        Размеры берутся из формы сетки. Диапазон [1, 5] проверяется
        только при strict=True.

        Args:
            grid: Двумерная сетка (список строк)
            strict: Проверять ли диапазон размеров
            limits: Диапазон размеров для strict-проверки

        Raises:
            InvalidDimensions: Пустая или непрямоугольная сетка,
                либо (strict=True) размеры вне диапазона
        """
        rows = [tuple(float(x) for x in row) for row in grid]
        if not rows or not rows[0]:
            raise InvalidDimensions("Matrix must have at least one row and one column")
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise InvalidDimensions(
                    f"Row {i} has {len(row)} entries, expected {width}"
                )
        if strict:
            limits.check(len(rows), width)
        return cls(values=tuple(rows))

    @classmethod
    def identity(cls, n: int, limits: MatrixLimits = DEFAULT_LIMITS) -> "Matrix":
        """
        Единичная матрица n × n.

        Raises:
            InvalidDimensions: Если n вне [1, 5]
        """
        limits.check(n, n)
        return cls(
            values=tuple(
                tuple(1.0 if i == j else 0.0 for j in range(n)) for i in range(n)
            )
        )

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return len(self.values)

    @property
    def columns(self) -> int:
        return len(self.values[0])

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.columns

    @property
    def is_square(self) -> bool:
        return self.rows == self.columns

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        return self.values[i][j]

    def row(self, i: int) -> tuple[float, ...]:
        return self.values[i]

    def column(self, j: int) -> tuple[float, ...]:
        return tuple(row[j] for row in self.values)

    def to_list(self) -> list[list[float]]:
        """Новый изменяемый список строк (рабочая копия для алгоритмов)."""
        return [list(row) for row in self.values]

    def __str__(self) -> str:
        return "\n".join(" ".join(f"{x:g}" for x in row) for row in self.values)
