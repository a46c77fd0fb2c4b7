"""paydate: loan repayment due-date calculator.

Given a funding date, a borrower's recurring pay schedule, a holiday list
and a deposit method, paydate computes the first valid repayment due date.

Basic usage:
    >>> from paydate import calculate_due_date
    >>> calculate_due_date("2024-05-01", ["2024-05-27"], "weekly", "2024-05-10", False)
    CalendarDate(year=2024, month=5, day=17)
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

from paydate.core import CalendarDate, PaySpan, normalize
from paydate.engine import (
    CalculationRequest,
    DueDateCalculator,
    DueDateResult,
    calculate_due_date,
    calculate_due_dates_batch,
)
from paydate.exceptions import (
    ConfigurationError,
    DateTimeError,
    InvalidPaySpanError,
    NoBusinessDayReachableError,
    PayDateException,
)
from paydate.logging_config import configure_logging, get_logger
from paydate.utilities import HolidaySet

# Public API
__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Values
    "CalendarDate",
    "HolidaySet",
    "PaySpan",
    "normalize",
    # Calculation
    "CalculationRequest",
    "DueDateCalculator",
    "DueDateResult",
    "calculate_due_date",
    "calculate_due_dates_batch",
    # Exceptions
    "PayDateException",
    "InvalidPaySpanError",
    "NoBusinessDayReachableError",
    "DateTimeError",
    "ConfigurationError",
    # Logging
    "configure_logging",
    "get_logger",
]
