"""Calendar and pay-schedule utilities."""

from paydate.utilities.calendars import (
    DEFAULT_MAX_ADJUSTMENT_DAYS,
    BusinessDayCalendar,
    HolidayCalendar,
    HolidaySet,
    WeekendCalendar,
    adjust_for_weekends_and_holidays,
    is_holiday,
    is_weekend,
)
from paydate.utilities.date_array import DateArray
from paydate.utilities.schedules import (
    generate_pay_dates,
    next_pay_date_on_or_after,
    pay_dates_between,
)

__all__ = [
    # Calendars
    "DEFAULT_MAX_ADJUSTMENT_DAYS",
    "BusinessDayCalendar",
    "WeekendCalendar",
    "HolidayCalendar",
    "HolidaySet",
    "adjust_for_weekends_and_holidays",
    "is_holiday",
    "is_weekend",
    # Schedules
    "next_pay_date_on_or_after",
    "generate_pay_dates",
    "pay_dates_between",
    # Arrays
    "DateArray",
]
