"""Core value types: calendar dates and pay spans."""

from paydate.core.time import (
    CalendarDate,
    add_days,
    normalize,
    parse_iso_date,
)
from paydate.core.types import DateLike, PaySpan, PaySpanLike

__all__ = [
    # Dates
    "CalendarDate",
    "add_days",
    "normalize",
    "parse_iso_date",
    # Enumerations and aliases
    "DateLike",
    "PaySpan",
    "PaySpanLike",
]
