"""Due-date calculation engines: scalar calculator and JAX batch engine."""

from paydate.engine.calculator import (
    DEFAULT_MIN_DAYS_AFTER_FUNDING,
    CalculationRequest,
    DueDateCalculator,
    DueDateResult,
    calculate_due_date,
)
from paydate.engine.vectorized import BatchDueDateResult, calculate_due_dates_batch

__all__ = [
    "DEFAULT_MIN_DAYS_AFTER_FUNDING",
    "CalculationRequest",
    "DueDateCalculator",
    "DueDateResult",
    "calculate_due_date",
    "BatchDueDateResult",
    "calculate_due_dates_batch",
]
