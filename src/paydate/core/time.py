"""Calendar date handling for due-date calculations.

This module provides the CalendarDate class and the helpers that turn
arbitrary date-like input into it. A CalendarDate has no time-of-day: it
stands for UTC midnight of its day, so equality and weekday computation
never drift with the caller's time zone.

Key features:
- Normalization of dates, naive/aware datetimes and ISO-8601 strings
- Day arithmetic via proleptic Gregorian ordinals
- Lenient (overflowing) construction for month-end detection
- JAX pytree registration
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

import jax

from paydate.exceptions import DateTimeError

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_ISO_DATETIME = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[T ](\d{2}):(\d{2})(?::(\d{2})(?:\.(\d{1,6}))?)?"
    r"(Z|[+-]\d{2}:?\d{2})?$"
)


@dataclass(frozen=True, order=True)
class CalendarDate:
    """Immutable calendar date anchored at UTC midnight.

    Ordering and equality follow (year, month, day), so two CalendarDates
    are equal exactly when they name the same calendar day.

    Attributes:
        year: Year (1-9999)
        month: Month (1-12)
        day: Day of month (1 to the month's length)

    Example:
        >>> CalendarDate(2024, 5, 10).add_days(14)
        CalendarDate(year=2024, month=5, day=24)
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        """Validate date components."""
        if not 1 <= self.year <= 9999:
            raise DateTimeError(f"Year must be 1-9999, got {self.year}")
        if not 1 <= self.month <= 12:
            raise DateTimeError(f"Month must be 1-12, got {self.month}")
        max_day = calendar.monthrange(self.year, self.month)[1]
        if not 1 <= self.day <= max_day:
            raise DateTimeError(
                f"Day must be 1-{max_day} for {self.year:04d}-{self.month:02d}, got {self.day}"
            )

    # -- Construction -------------------------------------------------------

    @classmethod
    def from_date(cls, value: date) -> CalendarDate:
        """Create from a ``datetime.date`` (time of day, if any, is dropped)."""
        return cls(value.year, value.month, value.day)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> CalendarDate:
        """Create from a proleptic Gregorian ordinal (1 = 0001-01-01)."""
        try:
            return cls.from_date(date.fromordinal(ordinal))
        except (ValueError, OverflowError) as e:
            raise DateTimeError(
                "Date arithmetic left the supported range", context={"ordinal": ordinal}
            ) from e

    @classmethod
    def from_iso(cls, iso_string: str) -> CalendarDate:
        """Parse an ISO-8601 date or datetime string.

        Example:
            >>> CalendarDate.from_iso("2024-05-01T23:30:00-04:00")
            CalendarDate(year=2024, month=5, day=2)
        """
        return parse_iso_date(iso_string)

    @classmethod
    def from_overflowing(cls, year: int, month: int, day: int) -> CalendarDate:
        """Build a date the way lenient calendar libraries do.

        A ``day`` past the end of ``month`` rolls forward into the following
        month, e.g. (2024, 2, 30) becomes 2024-03-01. Callers that must stay
        inside ``month`` detect the rollover by comparing ``result.month``.

        Args:
            year: Year
            month: Month (1-12)
            day: Day of month, 1 or greater; may exceed the month's length

        Returns:
            The resulting CalendarDate
        """
        first = cls(year, month, 1)
        return first.add_days(day - 1)

    # -- Conversion ---------------------------------------------------------

    def to_date(self) -> date:
        """Convert to ``datetime.date``."""
        return date(self.year, self.month, self.day)

    def to_datetime(self) -> datetime:
        """Return the canonical reference point: UTC midnight of this day."""
        return datetime(self.year, self.month, self.day, tzinfo=timezone.utc)

    def to_iso(self) -> str:
        """Format as ``YYYY-MM-DD``."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def toordinal(self) -> int:
        """Proleptic Gregorian ordinal, matching ``datetime.date.toordinal``."""
        return self.to_date().toordinal()

    def __str__(self) -> str:
        return self.to_iso()

    # -- Arithmetic and queries --------------------------------------------

    def add_days(self, days: int) -> CalendarDate:
        """Return the date ``days`` days later (earlier when negative)."""
        return CalendarDate.from_ordinal(self.toordinal() + days)

    def days_between(self, other: CalendarDate) -> int:
        """Days from this date to ``other`` (negative if ``other`` is earlier).

        Example:
            >>> CalendarDate(2024, 5, 10).days_between(CalendarDate(2024, 5, 11))
            1
        """
        return other.toordinal() - self.toordinal()

    def weekday(self) -> int:
        """Day of week, Monday = 0 ... Sunday = 6."""
        return self.to_date().weekday()

    def days_in_month(self) -> int:
        """Length of this date's month."""
        return calendar.monthrange(self.year, self.month)[1]

    def is_end_of_month(self) -> bool:
        """True if this is the last day of its month."""
        return self.day == self.days_in_month()


# Register CalendarDate as a JAX pytree so it can travel through jax transforms
def _calendar_date_flatten(d: CalendarDate) -> tuple[tuple[int, int, int], None]:
    return ((d.year, d.month, d.day), None)


def _calendar_date_unflatten(aux_data: None, children: tuple[int, int, int]) -> CalendarDate:
    return CalendarDate(*children)


jax.tree_util.register_pytree_node(
    CalendarDate,
    _calendar_date_flatten,
    _calendar_date_unflatten,
)


def parse_iso_date(iso_string: str) -> CalendarDate:
    """Parse an ISO-8601 string into a CalendarDate.

    Supports formats:
    - YYYY-MM-DD
    - YYYY-MM-DDTHH:MM[:SS[.ffffff]] with optional ``Z`` or ``±HH:MM`` offset
      (a space may replace the ``T``)

    Datetimes carrying an offset are converted to UTC before the time of day
    is discarded; datetimes without one are read as UTC.

    Args:
        iso_string: ISO-8601 formatted string

    Returns:
        CalendarDate instance

    Raises:
        DateTimeError: If the format or the components are invalid

    Example:
        >>> parse_iso_date("2024-05-10")
        CalendarDate(year=2024, month=5, day=10)
    """
    text = iso_string.strip()

    match = _ISO_DATE.match(text)
    if match:
        year, month, day = map(int, match.groups())
        return CalendarDate(year, month, day)

    match = _ISO_DATETIME.match(text)
    if match:
        year, month, day, hour, minute = map(int, match.groups()[:5])
        second = int(match.group(6) or 0)
        fraction = (match.group(7) or "").ljust(6, "0")
        offset = match.group(8)
        try:
            parsed = datetime(year, month, day, hour, minute, second, int(fraction or 0))
            if offset and offset != "Z":
                sign = 1 if offset[0] == "+" else -1
                digits = offset[1:].replace(":", "")
                hours, minutes = int(digits[:2]), int(digits[2:])
                if minutes >= 60:
                    raise ValueError(f"offset minutes out of range: {minutes}")
                delta = timedelta(hours=hours, minutes=minutes)
                parsed = parsed.replace(tzinfo=timezone(sign * delta))
            else:
                parsed = parsed.replace(tzinfo=timezone.utc)
        except ValueError as e:
            raise DateTimeError(
                f"Invalid ISO 8601 datetime: {iso_string}", context={"date_string": iso_string}
            ) from e
        return normalize(parsed)

    raise DateTimeError(
        f"Invalid ISO 8601 date format: {iso_string}. "
        f"Expected YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS",
        context={"date_string": iso_string},
    )


def normalize(value: CalendarDate | date | datetime | str) -> CalendarDate:
    """Strip time-of-day and time zone, returning the canonical CalendarDate.

    Aware datetimes are converted to UTC first; naive datetimes are read as
    UTC. Normalization is idempotent.

    Args:
        value: CalendarDate, date, datetime or ISO-8601 string

    Returns:
        The calendar day the value falls on in UTC

    Raises:
        DateTimeError: If the value cannot be interpreted as a date

    Example:
        >>> normalize(datetime(2024, 5, 1, 18, 45))
        CalendarDate(year=2024, month=5, day=1)
    """
    if isinstance(value, CalendarDate):
        return value
    # datetime is a subclass of date, so it must be checked first
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            value = value.astimezone(timezone.utc)
        return CalendarDate.from_date(value)
    if isinstance(value, date):
        return CalendarDate.from_date(value)
    if isinstance(value, str):
        return parse_iso_date(value)
    raise DateTimeError(
        f"Cannot interpret {type(value).__name__} as a calendar date",
        context={"value": repr(value)},
    )


def add_days(value: CalendarDate | date | datetime | str, days: int) -> CalendarDate:
    """Normalize ``value`` and add ``days`` days."""
    return normalize(value).add_days(days)
