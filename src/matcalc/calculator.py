"""Calculator — диспетчер операций между UI-оболочкой и ядром.

Принимает запрос (операция + матрица A + опционально B и скаляр),
вызывает соответствующую операцию ядра и возвращает результат:
матрицу, скаляр или типизированную ошибку с сообщением.

Интеграция:
- UI-оболочка приводит нечисловые ячейки к 0 (coerce_cell / grid_from_cells)
- JSON-запросы проверяются по схеме calculation_request
- MatrixError никогда не пробрасывается наружу из evaluate
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from pydantic import BaseModel, Field

from matcalc.core.contracts import validate_calculation_request
from matcalc.core.domain.matrix import Matrix
from matcalc.core.errors import ErrorKind, InvalidRequest, MatrixError
from matcalc.core.math.elimination import EliminationConfig, inverse, rank
from matcalc.core.math.matrix_ops import (
    add,
    determinant,
    multiply,
    multiply_by_scalar,
    subtract,
    trace,
    transpose,
)
from matcalc.core.math.numerical_safeguards import grid_is_finite, is_valid_float

LOG = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class Operation(str, Enum):
    """Операция калькулятора."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    MULTIPLY_BY_SCALAR = "multiply_by_scalar"
    TRANSPOSE = "transpose"
    TRACE = "trace"
    DETERMINANT = "determinant"
    RANK = "rank"
    INVERSE = "inverse"


BINARY_OPERATIONS = frozenset({Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY})

# Подписи скалярных результатов для отображения
_SCALAR_LABELS = {
    Operation.TRACE: "Trace",
    Operation.DETERMINANT: "Determinant",
    Operation.RANK: "Rank",
}


# =============================================================================
# ВВОД ИЗ UI
# =============================================================================


def coerce_cell(text: str) -> float:
    """
    Значение ячейки UI: число или 0.0, если текст не разбирается.

    Запятая принимается как десятичный разделитель (русская локаль UI).

    Examples:
        >>> coerce_cell(" 2.5 ")
        2.5
        >>> coerce_cell("1,5")
        1.5
        >>> coerce_cell("abc")
        0.0
    """
    try:
        value = float(text.strip().replace(",", "."))
    except ValueError:
        return 0.0
    return value


def grid_from_cells(cells: Sequence[Sequence[str]]) -> list[list[float]]:
    """Сетка чисел из сетки текстов ячеек (нечисловые → 0.0)."""
    return [[coerce_cell(cell) for cell in row] for row in cells]


# =============================================================================
# REQUEST / RESULT
# =============================================================================


class CalculationRequest(BaseModel):
    """Запрос на вычисление."""

    operation: Operation = Field(..., description="Операция")
    a: Matrix = Field(..., description="Матрица A")
    b: Optional[Matrix] = Field(None, description="Матрица B (для бинарных операций)")
    scalar: Optional[float] = Field(None, description="Скаляр (для multiply_by_scalar)")

    model_config = {"frozen": True}

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "CalculationRequest":
        """
        Запрос из JSON-подобного словаря.

        Raises:
            jsonschema.ValidationError: Если payload не соответствует схеме
            InvalidDimensions: Если сетка непрямоугольная
            InvalidRequest: Если сетка или скаляр содержат NaN/Inf
                либо число вне диапазона float
        """
        validate_calculation_request(payload)

        grids = {name: payload[name] for name in ("a", "b") if name in payload}
        for name, grid in grids.items():
            if not grid_is_finite(grid):
                raise InvalidRequest(
                    f"Matrix {name.upper()} contains NaN or Inf "
                    f"(or a value out of float range)"
                )

        scalar = payload.get("scalar")
        if scalar is not None and not is_valid_float(scalar):
            raise InvalidRequest("Scalar is NaN or Inf (or out of float range)")

        return cls(
            operation=Operation(payload["operation"]),
            a=Matrix.from_values(grids["a"], strict=True),
            b=Matrix.from_values(grids["b"], strict=True) if "b" in grids else None,
            scalar=scalar,
        )


@dataclass(frozen=True)
class CalculationResult:
    """Результат вычисления: матрица, скаляр или ошибка."""

    operation: Operation
    matrix: Optional[Matrix] = None
    scalar: Optional[float] = None

    # Ошибка
    error_kind: Optional[ErrorKind] = None
    error_message: str = ""

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    def display_text(self) -> str:
        """Текст для показа пользователю."""
        if not self.ok:
            return f"Error: {self.error_message}"
        if self.matrix is not None:
            return str(self.matrix)
        return f"{_SCALAR_LABELS[self.operation]}: {self.scalar}"


# =============================================================================
# CALCULATOR
# =============================================================================


class MatrixCalculator:
    """Диспетчер операций.

    Stateless: конфигурация задаётся при создании и не меняется.
    """

    def __init__(self, elimination: Optional[EliminationConfig] = None):
        self.elimination = elimination or EliminationConfig()

    def evaluate(self, request: CalculationRequest) -> CalculationResult:
        """Выполнение операции.

        Args:
            request: запрос с операцией и операндами

        Returns:
            CalculationResult; MatrixError превращается в результат с ошибкой
        """
        try:
            return self._dispatch(request)
        except MatrixError as e:
            LOG.warning("%s failed: %s", request.operation.value, e.message)
            return CalculationResult(
                operation=request.operation,
                error_kind=e.kind,
                error_message=e.message,
            )

    def evaluate_payload(self, payload: Dict[str, Any]) -> CalculationResult:
        """Разбор JSON-запроса и выполнение операции.

        Ошибки схемы (jsonschema.ValidationError) пробрасываются.
        """
        try:
            request = CalculationRequest.from_payload(payload)
        except MatrixError as e:
            # Схема уже пройдена, операция валидна
            operation = Operation(payload["operation"])
            LOG.warning("%s rejected: %s", operation.value, e.message)
            return CalculationResult(
                operation=operation, error_kind=e.kind, error_message=e.message
            )
        return self.evaluate(request)

    def _dispatch(self, request: CalculationRequest) -> CalculationResult:
        op = request.operation
        a = request.a

        if op in BINARY_OPERATIONS:
            if request.b is None:
                raise InvalidRequest(f"Operation {op.value} requires matrix B")
            b = request.b
            if op == Operation.ADD:
                return CalculationResult(operation=op, matrix=add(a, b))
            if op == Operation.SUBTRACT:
                return CalculationResult(operation=op, matrix=subtract(a, b))
            return CalculationResult(operation=op, matrix=multiply(a, b))

        if op == Operation.MULTIPLY_BY_SCALAR:
            if request.scalar is None:
                raise InvalidRequest("Operation multiply_by_scalar requires a scalar")
            return CalculationResult(
                operation=op, matrix=multiply_by_scalar(a, request.scalar)
            )
        if op == Operation.TRANSPOSE:
            return CalculationResult(operation=op, matrix=transpose(a))
        if op == Operation.INVERSE:
            return CalculationResult(operation=op, matrix=inverse(a, self.elimination))
        if op == Operation.TRACE:
            return CalculationResult(operation=op, scalar=trace(a))
        if op == Operation.DETERMINANT:
            return CalculationResult(operation=op, scalar=determinant(a))
        return CalculationResult(operation=op, scalar=rank(a, self.elimination))
