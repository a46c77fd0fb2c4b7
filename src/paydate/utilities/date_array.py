"""JAX integer date arrays for batched due-date arithmetic.

:class:`DateArray` stores many dates as parallel int32 arrays (ordinals,
years, months, days). Every operation is integer arithmetic vectorised with
``jax.numpy``, which lets the batch engine project and adjust thousands of
pay dates without a Python loop per date.

Ordinal convention
------------------
``ordinal = 1`` is January 1, year 1 (proleptic Gregorian), the same as
``datetime.date.toordinal()`` and :meth:`CalendarDate.toordinal`. Weekday is
``(ordinal - 1) % 7`` with Monday = 0.

Ordinal <-> civil conversion follows Howard Hinnant's ``days_from_civil`` /
``civil_from_days``: the year is shifted to start on March 1 so the leap day
is the last day of the shifted year.
"""

from __future__ import annotations

from collections.abc import Sequence

import jax.numpy as jnp
import numpy as np

from paydate.core.time import CalendarDate

_DAYS_IN_MONTH_TABLE = jnp.array(
    [0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31], dtype=jnp.int32
)

# Days in a 400-year Gregorian era
_DAYS_PER_ERA = 146097
# Ordinal of March 1, year 0 in the shifted calendar is -305
_EPOCH_SHIFT = 305


def is_leap_year(years: jnp.ndarray) -> jnp.ndarray:
    """Vectorised Gregorian leap-year test."""
    return ((years % 4 == 0) & (years % 100 != 0)) | (years % 400 == 0)


def days_in_month(years: jnp.ndarray, months: jnp.ndarray) -> jnp.ndarray:
    """Vectorised month length (int32)."""
    base = _DAYS_IN_MONTH_TABLE[months]
    leap_day = jnp.where((months == 2) & is_leap_year(years), 1, 0).astype(jnp.int32)
    return base + leap_day


def ymd_to_ordinal(years: jnp.ndarray, months: jnp.ndarray, days: jnp.ndarray) -> jnp.ndarray:
    """Convert year/month/day int arrays to ordinals."""
    march_based = jnp.where(months <= 2, 1, 0).astype(jnp.int32)
    y = years - march_based
    m = months + 12 * march_based - 3  # Mar=0 ... Feb=11

    day_of_year = (153 * m + 2) // 5 + days - 1
    era = jnp.where(y >= 0, y // 400, (y - 399) // 400)
    year_of_era = y - era * 400
    day_of_era = 365 * year_of_era + year_of_era // 4 - year_of_era // 100 + day_of_year

    return (era * _DAYS_PER_ERA + day_of_era - _EPOCH_SHIFT).astype(jnp.int32)


def ordinal_to_ymd(
    ordinals: jnp.ndarray,
) -> tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray]:
    """Convert ordinals to ``(years, months, days)`` int32 arrays."""
    z = ordinals + _EPOCH_SHIFT
    era = jnp.where(z >= 0, z // _DAYS_PER_ERA, (z - _DAYS_PER_ERA + 1) // _DAYS_PER_ERA)
    day_of_era = z - era * _DAYS_PER_ERA

    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    shifted_month = (5 * day_of_year + 2) // 153

    days = day_of_year - (153 * shifted_month + 2) // 5 + 1
    months = shifted_month + jnp.where(shifted_month < 10, 3, -9)
    years = era * 400 + year_of_era + jnp.where(months <= 2, 1, 0)

    return years.astype(jnp.int32), months.astype(jnp.int32), days.astype(jnp.int32)


class DateArray:
    """Batch of calendar dates held as parallel int32 arrays.

    Attributes
    ----------
    ordinals : jnp.ndarray (int32)
        Days since January 1, year 1 (that day is 1).
    years, months, days : jnp.ndarray (int32)
        Calendar components.
    """

    __slots__ = ("ordinals", "years", "months", "days")

    def __init__(
        self,
        ordinals: jnp.ndarray,
        years: jnp.ndarray,
        months: jnp.ndarray,
        days: jnp.ndarray,
    ) -> None:
        self.ordinals = ordinals
        self.years = years
        self.months = months
        self.days = days

    @staticmethod
    def from_ymd(years: jnp.ndarray, months: jnp.ndarray, days: jnp.ndarray) -> DateArray:
        """Create from year/month/day arrays (components must form valid dates)."""
        return DateArray(ymd_to_ordinal(years, months, days), years, months, days)

    @staticmethod
    def from_ordinals(ordinals: jnp.ndarray) -> DateArray:
        y, m, d = ordinal_to_ymd(ordinals)
        return DateArray(ordinals, y, m, d)

    @staticmethod
    def from_calendar_dates(dates: Sequence[CalendarDate]) -> DateArray:
        """Pack a sequence of CalendarDates into a 1-D DateArray."""
        n = len(dates)
        yy = np.empty(n, dtype=np.int32)
        mm = np.empty(n, dtype=np.int32)
        dd = np.empty(n, dtype=np.int32)
        for i, d in enumerate(dates):
            yy[i] = d.year
            mm[i] = d.month
            dd[i] = d.day
        return DateArray.from_ymd(jnp.asarray(yy), jnp.asarray(mm), jnp.asarray(dd))

    def to_calendar_dates(self) -> list[CalendarDate]:
        """Unpack into a list of CalendarDates."""
        years = np.asarray(self.years).reshape(-1)
        months = np.asarray(self.months).reshape(-1)
        days = np.asarray(self.days).reshape(-1)
        return [
            CalendarDate(int(y), int(m), int(d)) for y, m, d in zip(years, months, days)
        ]

    @property
    def shape(self) -> tuple[int, ...]:
        return self.ordinals.shape

    def __len__(self) -> int:
        return self.ordinals.shape[0] if self.ordinals.ndim > 0 else 1

    def add_days(self, n: jnp.ndarray | int) -> DateArray:
        """Add ``n`` days (scalar or per-element)."""
        return DateArray.from_ordinals(self.ordinals + jnp.asarray(n, dtype=jnp.int32))

    def weekday(self) -> jnp.ndarray:
        """Monday = 0 ... Sunday = 6."""
        return (self.ordinals - 1) % 7

    def is_weekend(self) -> jnp.ndarray:
        return self.weekday() >= 5

    def days_in_month(self) -> jnp.ndarray:
        return days_in_month(self.years, self.months)

    def __lt__(self, other: DateArray) -> jnp.ndarray:
        return self.ordinals < other.ordinals

    def __le__(self, other: DateArray) -> jnp.ndarray:
        return self.ordinals <= other.ordinals

    def __gt__(self, other: DateArray) -> jnp.ndarray:
        return self.ordinals > other.ordinals

    def __ge__(self, other: DateArray) -> jnp.ndarray:
        return self.ordinals >= other.ordinals

    def __eq__(self, other: object) -> jnp.ndarray:  # type: ignore[override]
        if not isinstance(other, DateArray):
            return NotImplemented
        return self.ordinals == other.ordinals

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DateArray(shape={self.shape})"
