"""Pytest configuration and shared fixtures for paydate tests."""

import pytest

from paydate.core.time import CalendarDate
from paydate.engine.calculator import DueDateCalculator
from paydate.logging_config import disable_logging
from paydate.utilities.calendars import HolidaySet


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging():
    """Keep test output free of package log records."""
    disable_logging()
    yield


@pytest.fixture
def us_holidays() -> HolidaySet:
    """Memorial Day and Independence Day 2024."""
    return HolidaySet([CalendarDate(2024, 5, 27), CalendarDate(2024, 7, 4)])


@pytest.fixture
def calculator() -> DueDateCalculator:
    """Calculator with default settings (10-day offset, 366-step cap)."""
    return DueDateCalculator()


@pytest.fixture
def every_day_2024() -> list[CalendarDate]:
    """Every calendar day of 2024, for degenerate holiday sets."""
    start = CalendarDate(2024, 1, 1)
    return [start.add_days(i) for i in range(366)]
