"""
Contract Validation Module

Модуль для валидации JSON контрактов между UI-оболочкой и ядром matcalc.
"""

from .validators import (
    CalculationRequestValidator,
    ContractValidator,
    SchemaLoader,
    ValidationError,
    validate_calculation_request,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CalculationRequestValidator",
    # Errors
    "ValidationError",
    # Functions
    "validate_calculation_request",
]
