"""Тесты для Calculator — диспетчер операций.

Покрывает:
- Все операции через evaluate
- Преобразование MatrixError в результат с ошибкой
- Отсутствующие операнды → INVALID_REQUEST
- Разбор JSON-запросов (схема, прямоугольность, NaN/Inf)
- Приведение ячеек UI к числам
- Текст для отображения
"""

import json
import logging
import math

import pytest

from matcalc.calculator import (
    BINARY_OPERATIONS,
    CalculationRequest,
    CalculationResult,
    MatrixCalculator,
    Operation,
    coerce_cell,
    grid_from_cells,
)
from matcalc.core.contracts import ValidationError
from matcalc.core.domain import Matrix
from matcalc.core.errors import ErrorKind, InvalidDimensions, InvalidRequest
from matcalc.core.math import EliminationConfig, PivotMode


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def calculator():
    return MatrixCalculator()


@pytest.fixture
def a_2x2():
    return Matrix.from_values([[1, 2], [3, 4]])


@pytest.fixture
def b_2x2():
    return Matrix.from_values([[5, 6], [7, 8]])


def _request(operation, a, b=None, scalar=None) -> CalculationRequest:
    return CalculationRequest(operation=operation, a=a, b=b, scalar=scalar)


# =============================================================================
# ТЕСТЫ: Ввод из UI
# =============================================================================


class TestCellCoercion:
    """Приведение текста ячеек к числам."""

    def test_numeric(self):
        assert coerce_cell("2.5") == 2.5
        assert coerce_cell(" -3 ") == -3.0
        assert coerce_cell("1e3") == 1000.0

    @pytest.mark.parametrize("text", ["", "abc", "1,2,3", "--1"])
    def test_non_numeric_is_zero(self, text):
        """Нечисловой текст → 0.0."""
        assert coerce_cell(text) == 0.0

    def test_comma_decimal_separator(self):
        """Запятая принимается как десятичный разделитель."""
        assert coerce_cell("1,5") == 1.5
        assert coerce_cell(" -0,25 ") == -0.25

    def test_grid_from_cells(self):
        assert grid_from_cells([["1", "x"], ["", "4"]]) == [[1.0, 0.0], [0.0, 4.0]]
        assert grid_from_cells([["2,5"]]) == [[2.5]]


# =============================================================================
# ТЕСТЫ: Операции
# =============================================================================


class TestEvaluate:
    """Выполнение операций через MatrixCalculator.evaluate."""

    def test_binary_operations(self):
        assert BINARY_OPERATIONS == {Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY}

    def test_add(self, calculator, a_2x2, b_2x2):
        result = calculator.evaluate(_request(Operation.ADD, a_2x2, b_2x2))
        assert result.ok
        assert result.matrix.values == ((6.0, 8.0), (10.0, 12.0))
        assert result.scalar is None

    def test_subtract(self, calculator, a_2x2, b_2x2):
        result = calculator.evaluate(_request(Operation.SUBTRACT, a_2x2, b_2x2))
        assert result.matrix.values == ((-4.0, -4.0), (-4.0, -4.0))

    def test_multiply(self, calculator, a_2x2, b_2x2):
        result = calculator.evaluate(_request(Operation.MULTIPLY, a_2x2, b_2x2))
        assert result.matrix.values == ((19.0, 22.0), (43.0, 50.0))

    def test_multiply_by_scalar(self, calculator, a_2x2):
        result = calculator.evaluate(
            _request(Operation.MULTIPLY_BY_SCALAR, a_2x2, scalar=-1.0)
        )
        assert result.matrix.values == ((-1.0, -2.0), (-3.0, -4.0))

    def test_transpose(self, calculator, a_2x2):
        result = calculator.evaluate(_request(Operation.TRANSPOSE, a_2x2))
        assert result.matrix.values == ((1.0, 3.0), (2.0, 4.0))

    def test_trace(self, calculator, a_2x2):
        result = calculator.evaluate(_request(Operation.TRACE, a_2x2))
        assert result.scalar == 5.0
        assert result.matrix is None

    def test_determinant(self, calculator, a_2x2):
        result = calculator.evaluate(_request(Operation.DETERMINANT, a_2x2))
        assert result.scalar == -2.0

    def test_rank(self, calculator):
        m = Matrix.from_values([[1, 2, 3], [4, 5, 6], [5, 7, 9]])
        result = calculator.evaluate(_request(Operation.RANK, m))
        assert result.scalar == 2

    def test_inverse(self, calculator):
        m = Matrix.from_values([[2, 0], [0, 2]])
        result = calculator.evaluate(_request(Operation.INVERSE, m))
        assert result.matrix == Matrix.from_values([[0.5, 0], [0, 0.5]])

    def test_b_ignored_for_unary(self, calculator, a_2x2, b_2x2):
        """Для унарных операций B не используется."""
        result = calculator.evaluate(_request(Operation.TRACE, a_2x2, b_2x2))
        assert result.scalar == 5.0


# =============================================================================
# ТЕСТЫ: Ошибки
# =============================================================================


class TestEvaluateErrors:
    """MatrixError превращается в результат с ошибкой."""

    def test_dimension_mismatch(self, calculator):
        a = Matrix.from_dimensions(2, 3)
        b = Matrix.from_dimensions(3, 2)
        result = calculator.evaluate(_request(Operation.ADD, a, b))
        assert not result.ok
        assert result.error_kind == ErrorKind.DIMENSION_MISMATCH
        assert "2x3 vs 3x2" in result.error_message
        assert result.matrix is None

    def test_unsupported_determinant(self, calculator):
        result = calculator.evaluate(_request(Operation.DETERMINANT, Matrix.identity(4)))
        assert result.error_kind == ErrorKind.UNSUPPORTED_DIMENSION

    def test_not_square(self, calculator):
        result = calculator.evaluate(_request(Operation.TRACE, Matrix.from_dimensions(1, 2)))
        assert result.error_kind == ErrorKind.NOT_SQUARE

    def test_singular(self, calculator):
        """Известное ограничение: [[0,1],[1,0]] → SINGULAR."""
        m = Matrix.from_values([[0, 1], [1, 0]])
        result = calculator.evaluate(_request(Operation.INVERSE, m))
        assert result.error_kind == ErrorKind.SINGULAR

    def test_partial_pivoting_config(self):
        """Явно выбранный режим PARTIAL обращает [[0,1],[1,0]]."""
        calculator = MatrixCalculator(EliminationConfig(pivot_mode=PivotMode.PARTIAL))
        m = Matrix.from_values([[0, 1], [1, 0]])
        result = calculator.evaluate(_request(Operation.INVERSE, m))
        assert result.ok
        assert result.matrix == m

    @pytest.mark.parametrize("operation", sorted(BINARY_OPERATIONS))
    def test_missing_b(self, calculator, a_2x2, operation):
        result = calculator.evaluate(_request(operation, a_2x2))
        assert result.error_kind == ErrorKind.INVALID_REQUEST
        assert "requires matrix B" in result.error_message

    def test_missing_scalar(self, calculator, a_2x2):
        result = calculator.evaluate(_request(Operation.MULTIPLY_BY_SCALAR, a_2x2))
        assert result.error_kind == ErrorKind.INVALID_REQUEST

    def test_error_logged(self, calculator, caplog):
        m = Matrix.from_values([[0, 1], [1, 0]])
        with caplog.at_level(logging.WARNING, logger="matcalc.calculator"):
            calculator.evaluate(_request(Operation.INVERSE, m))
        assert "inverse failed" in caplog.text


# =============================================================================
# ТЕСТЫ: JSON-запросы
# =============================================================================


class TestPayload:
    """Разбор и выполнение JSON-запросов."""

    def test_from_payload(self):
        request = CalculationRequest.from_payload(
            {"operation": "multiply_by_scalar", "a": [[1, 2]], "scalar": 3}
        )
        assert request.operation == Operation.MULTIPLY_BY_SCALAR
        assert request.a == Matrix.from_values([[1, 2]])
        assert request.b is None
        assert request.scalar == 3.0

    def test_from_payload_ragged(self):
        with pytest.raises(InvalidDimensions):
            CalculationRequest.from_payload({"operation": "rank", "a": [[1, 2], [3]]})

    def test_from_payload_nan(self):
        with pytest.raises(InvalidRequest, match="Matrix B contains NaN or Inf"):
            CalculationRequest.from_payload(
                {"operation": "add", "a": [[1.0]], "b": [[math.nan]]}
            )

    def test_from_payload_integer_out_of_float_range(self):
        """Целое из JSON, не помещающееся во float → InvalidRequest."""
        payload = json.loads('{"operation": "trace", "a": [[1' + "0" * 400 + "]]}")
        with pytest.raises(InvalidRequest, match="Matrix A contains NaN or Inf"):
            CalculationRequest.from_payload(payload)

    @pytest.mark.parametrize("scalar", [math.nan, math.inf, -math.inf, 10**400])
    def test_from_payload_non_finite_scalar(self, scalar):
        with pytest.raises(InvalidRequest, match="Scalar is NaN or Inf"):
            CalculationRequest.from_payload(
                {"operation": "multiply_by_scalar", "a": [[1.0]], "scalar": scalar}
            )

    def test_from_payload_schema_error(self):
        with pytest.raises(ValidationError):
            CalculationRequest.from_payload({"operation": "rank", "a": [[1]] * 6})

    def test_evaluate_payload(self, calculator):
        result = calculator.evaluate_payload(
            {"operation": "determinant", "a": [[6, 1, 1], [4, -2, 5], [2, 8, 7]]}
        )
        assert result.scalar == -306.0

    def test_evaluate_payload_ragged(self, calculator):
        """Непрямоугольная сетка → результат с ошибкой, не исключение."""
        result = calculator.evaluate_payload({"operation": "rank", "a": [[1, 2], [3]]})
        assert result.operation == Operation.RANK
        assert result.error_kind == ErrorKind.INVALID_DIMENSIONS

    def test_evaluate_payload_integer_out_of_float_range(self, calculator):
        """Переполнение при разборе → результат с ошибкой, не OverflowError."""
        result = calculator.evaluate_payload(
            {"operation": "determinant", "a": [[10**400]]}
        )
        assert result.error_kind == ErrorKind.INVALID_REQUEST

    def test_evaluate_payload_nan_scalar(self, calculator):
        result = calculator.evaluate_payload(
            {"operation": "multiply_by_scalar", "a": [[1, 2]], "scalar": math.nan}
        )
        assert not result.ok
        assert result.error_kind == ErrorKind.INVALID_REQUEST
        assert result.matrix is None

    def test_evaluate_payload_schema_error_propagates(self, calculator):
        with pytest.raises(ValidationError):
            calculator.evaluate_payload({"operation": "power", "a": [[1]]})


# =============================================================================
# ТЕСТЫ: Отображение
# =============================================================================


class TestDisplayText:
    """Текст результата для пользователя."""

    def test_matrix(self, calculator, a_2x2):
        result = calculator.evaluate(_request(Operation.TRANSPOSE, a_2x2))
        assert result.display_text() == "1 3\n2 4"

    def test_scalar(self, calculator, a_2x2):
        result = calculator.evaluate(_request(Operation.DETERMINANT, a_2x2))
        assert result.display_text() == "Determinant: -2.0"

    def test_rank(self, calculator, a_2x2):
        result = calculator.evaluate(_request(Operation.RANK, a_2x2))
        assert result.display_text() == "Rank: 2"

    def test_error(self):
        result = CalculationResult(
            operation=Operation.INVERSE,
            error_kind=ErrorKind.SINGULAR,
            error_message="Matrix is singular, inverse does not exist",
        )
        assert result.display_text() == "Error: Matrix is singular, inverse does not exist"
