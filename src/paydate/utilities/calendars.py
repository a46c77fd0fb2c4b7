"""Business day calendars, holiday sets and weekend/holiday adjustment.

A business day is a day that is neither a Saturday/Sunday nor a listed
holiday. All navigation here walks one day at a time and is bounded by a
step cap, so a holiday set that blankets every day fails loudly instead of
looping forever.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from paydate.core.time import CalendarDate, normalize
from paydate.core.types import DateLike
from paydate.exceptions import DateTimeError, NoBusinessDayReachableError

# Upper bound on single-day steps taken while searching for a business day
DEFAULT_MAX_ADJUSTMENT_DAYS = 366


class HolidaySet:
    """Immutable set of holiday dates compared by calendar day.

    Members are normalized on entry and probes are normalized on lookup, so
    ``datetime(2024, 5, 27, 15, 0)`` is found in a set built from
    ``"2024-05-27"``.

    Example:
        >>> holidays = HolidaySet(["2024-05-27", date(2024, 7, 4)])
        >>> CalendarDate(2024, 7, 4) in holidays
        True
    """

    __slots__ = ("_dates",)

    def __init__(self, holidays: Iterable[DateLike] | None = None) -> None:
        self._dates: frozenset[CalendarDate] = frozenset(normalize(h) for h in holidays or ())

    @classmethod
    def coerce(cls, holidays: HolidaySet | Iterable[DateLike] | None) -> HolidaySet:
        """Return ``holidays`` unchanged if already a HolidaySet, else build one."""
        if isinstance(holidays, HolidaySet):
            return holidays
        return cls(holidays)

    def __contains__(self, value: object) -> bool:
        try:
            date = normalize(value)  # type: ignore[arg-type]
        except DateTimeError:
            return False
        return date in self._dates

    def __iter__(self) -> Iterator[CalendarDate]:
        return iter(sorted(self._dates))

    def __len__(self) -> int:
        return len(self._dates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HolidaySet):
            return NotImplemented
        return self._dates == other._dates

    def __hash__(self) -> int:
        return hash(self._dates)

    def __repr__(self) -> str:
        return f"HolidaySet([{', '.join(repr(d.to_iso()) for d in self)}])"

    def union(self, other: Iterable[DateLike]) -> HolidaySet:
        """Return a new set holding the holidays of both."""
        return HolidaySet([*self._dates, *HolidaySet.coerce(other)._dates])

    def ordinals(self) -> list[int]:
        """Sorted proleptic Gregorian ordinals of the holidays."""
        return [d.toordinal() for d in self]


class BusinessDayCalendar(ABC):
    """Abstract base class for business day calendars.

    A calendar decides which dates are business days and provides bounded
    navigation between them.
    """

    max_steps: int = DEFAULT_MAX_ADJUSTMENT_DAYS

    @abstractmethod
    def is_business_day(self, date: CalendarDate) -> bool:
        """Check if a date is a business day.

        Example:
            >>> WeekendCalendar().is_business_day(CalendarDate(2024, 5, 13))  # Monday
            True
        """

    def is_non_business_day(self, date: CalendarDate) -> bool:
        """Check if a date is a weekend day or holiday."""
        return not self.is_business_day(date)

    def _walk(self, date: CalendarDate, direction: int, max_steps: int | None) -> CalendarDate:
        limit = self.max_steps if max_steps is None else max_steps
        current = date
        steps = 0
        while not self.is_business_day(current):
            if steps >= limit:
                raise NoBusinessDayReachableError(
                    "No business day reachable within the adjustment limit",
                    context={
                        "start_date": date.to_iso(),
                        "direction": "forward" if direction > 0 else "backward",
                        "max_steps": limit,
                    },
                )
            current = current.add_days(direction)
            steps += 1
        return current

    def next_business_day(
        self, date: CalendarDate, max_steps: int | None = None
    ) -> CalendarDate:
        """Get the business day on or after the given date.

        Args:
            date: Starting date
            max_steps: Step cap (defaults to the calendar's ``max_steps``)

        Returns:
            Next business day (the same date if already a business day)

        Raises:
            NoBusinessDayReachableError: If the cap is exhausted

        Example:
            >>> WeekendCalendar().next_business_day(CalendarDate(2024, 5, 11))  # Saturday
            CalendarDate(year=2024, month=5, day=13)
        """
        return self._walk(date, 1, max_steps)

    def previous_business_day(
        self, date: CalendarDate, max_steps: int | None = None
    ) -> CalendarDate:
        """Get the business day on or before the given date.

        Example:
            >>> WeekendCalendar().previous_business_day(CalendarDate(2024, 5, 12))  # Sunday
            CalendarDate(year=2024, month=5, day=10)
        """
        return self._walk(date, -1, max_steps)

    def add_business_days(self, date: CalendarDate, days: int) -> CalendarDate:
        """Move ``days`` business days away from ``date`` (backward if negative).

        Example:
            >>> WeekendCalendar().add_business_days(CalendarDate(2024, 5, 10), 1)  # Friday
            CalendarDate(year=2024, month=5, day=13)
        """
        if days == 0:
            return date

        direction = 1 if days > 0 else -1
        current = date
        for _ in range(abs(days)):
            current = self._walk(current.add_days(direction), direction, None)
        return current

    def business_days_between(
        self, start: CalendarDate, end: CalendarDate, include_end: bool = False
    ) -> int:
        """Count business days in ``[start, end)`` (or ``[start, end]``).

        Negative when ``end`` precedes ``start``.
        """
        if start > end:
            return -self.business_days_between(end, start, include_end)

        count = 0
        current = start
        while current < end:
            if self.is_business_day(current):
                count += 1
            current = current.add_days(1)

        if include_end and self.is_business_day(end):
            count += 1

        return count


class WeekendCalendar(BusinessDayCalendar):
    """Calendar with Monday-Friday as business days and no holidays."""

    def is_business_day(self, date: CalendarDate) -> bool:
        return not is_weekend(date)


class HolidayCalendar(WeekendCalendar):
    """Calendar that also excludes a set of holidays.

    Args:
        holidays: Holiday dates (any date-like values)
        max_steps: Step cap for business day navigation
    """

    def __init__(
        self,
        holidays: HolidaySet | Iterable[DateLike] | None = None,
        max_steps: int = DEFAULT_MAX_ADJUSTMENT_DAYS,
    ) -> None:
        self.holidays = HolidaySet.coerce(holidays)
        self.max_steps = max_steps

    def is_business_day(self, date: CalendarDate) -> bool:
        return super().is_business_day(date) and date not in self.holidays


def is_weekend(date: DateLike) -> bool:
    """Check if a date falls on a Saturday or Sunday.

    The weekday is taken from the normalized calendar date itself, never
    from a time-zone shifted instant.

    Example:
        >>> is_weekend(CalendarDate(2024, 5, 11))  # Saturday
        True
        >>> is_weekend(CalendarDate(2024, 5, 13))  # Monday
        False
    """
    return normalize(date).weekday() >= 5


def is_holiday(date: DateLike, holidays: HolidaySet | Iterable[DateLike]) -> bool:
    """Check if a date matches any holiday by calendar day."""
    return normalize(date) in HolidaySet.coerce(holidays)


def adjust_for_weekends_and_holidays(
    date: DateLike,
    holidays: HolidaySet | Iterable[DateLike] | None,
    forward: bool,
    max_steps: int = DEFAULT_MAX_ADJUSTMENT_DAYS,
) -> CalendarDate:
    """Shift a date off weekends and holidays one day at a time.

    Args:
        date: Date to adjust
        holidays: Holiday dates to avoid
        forward: Step forward when True, backward when False
        max_steps: Maximum number of single-day steps

    Returns:
        The first business day reached (the date itself if already one)

    Raises:
        NoBusinessDayReachableError: If no business day lies within ``max_steps``

    Example:
        >>> adjust_for_weekends_and_holidays(CalendarDate(2024, 5, 27), ["2024-05-27"], True)
        CalendarDate(year=2024, month=5, day=28)
    """
    calendar = HolidayCalendar(holidays, max_steps=max_steps)
    start = normalize(date)
    if forward:
        return calendar.next_business_day(start)
    return calendar.previous_business_day(start)
