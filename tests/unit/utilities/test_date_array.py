"""Tests for the JAX integer DateArray."""

from __future__ import annotations

import datetime

import jax.numpy as jnp
import numpy as np
import pytest

from paydate.core.time import CalendarDate
from paydate.utilities.date_array import (
    DateArray,
    days_in_month,
    is_leap_year,
    ordinal_to_ymd,
    ymd_to_ordinal,
)

SAMPLE_DATES = [
    (1, 1, 1),
    (1900, 2, 28),
    (1900, 3, 1),
    (2000, 2, 29),
    (2023, 12, 31),
    (2024, 1, 1),
    (2024, 2, 29),
    (2024, 5, 27),
    (2024, 12, 31),
    (2099, 7, 4),
    (9999, 12, 31),
]


class TestOrdinalConversion:
    """Cross-validation against datetime.date.toordinal."""

    @pytest.mark.parametrize("ymd", SAMPLE_DATES)
    def test_matches_python(self, ymd):
        y, m, d = ymd
        ordinal = ymd_to_ordinal(jnp.int32(y), jnp.int32(m), jnp.int32(d))
        assert int(ordinal) == datetime.date(y, m, d).toordinal()

    def test_round_trip_vectorised(self):
        ords = jnp.asarray(
            np.array([datetime.date(*ymd).toordinal() for ymd in SAMPLE_DATES], dtype=np.int32)
        )
        years, months, days = ordinal_to_ymd(ords)
        got = list(
            zip(np.asarray(years).tolist(), np.asarray(months).tolist(), np.asarray(days).tolist())
        )
        assert got == SAMPLE_DATES


class TestCalendarHelpers:
    """Leap years and month lengths."""

    def test_is_leap_year(self):
        years = jnp.array([1900, 2000, 2023, 2024], dtype=jnp.int32)
        assert np.asarray(is_leap_year(years)).tolist() == [False, True, False, True]

    def test_days_in_month(self):
        years = jnp.array([2024, 2023, 2024, 2024], dtype=jnp.int32)
        months = jnp.array([2, 2, 4, 12], dtype=jnp.int32)
        assert np.asarray(days_in_month(years, months)).tolist() == [29, 28, 30, 31]


class TestDateArray:
    """DateArray construction, arithmetic and queries."""

    def test_from_and_to_calendar_dates(self):
        dates = [CalendarDate(2024, 5, 10), CalendarDate(2024, 2, 29)]
        arr = DateArray.from_calendar_dates(dates)
        assert len(arr) == 2
        assert arr.shape == (2,)
        assert arr.to_calendar_dates() == dates

    def test_ordinals_match_calendar_date(self):
        d = CalendarDate(2024, 5, 27)
        arr = DateArray.from_calendar_dates([d])
        assert int(arr.ordinals[0]) == d.toordinal()

    def test_add_days(self):
        arr = DateArray.from_calendar_dates([CalendarDate(2024, 2, 28), CalendarDate(2024, 12, 31)])
        assert arr.add_days(1).to_calendar_dates() == [
            CalendarDate(2024, 2, 29),
            CalendarDate(2025, 1, 1),
        ]

    def test_add_days_per_element(self):
        arr = DateArray.from_calendar_dates([CalendarDate(2024, 5, 1), CalendarDate(2024, 5, 1)])
        shifted = arr.add_days(jnp.array([10, -1], dtype=jnp.int32))
        assert shifted.to_calendar_dates() == [CalendarDate(2024, 5, 11), CalendarDate(2024, 4, 30)]

    def test_weekday_and_weekend(self):
        dates = [CalendarDate(2024, 5, 10 + i) for i in range(4)]  # Fri..Mon
        arr = DateArray.from_calendar_dates(dates)
        assert np.asarray(arr.weekday()).tolist() == [d.weekday() for d in dates]
        assert np.asarray(arr.is_weekend()).tolist() == [False, True, True, False]

    def test_days_in_month_method(self):
        arr = DateArray.from_calendar_dates([CalendarDate(2024, 2, 1), CalendarDate(2024, 4, 1)])
        assert np.asarray(arr.days_in_month()).tolist() == [29, 30]

    def test_comparisons(self):
        a = DateArray.from_calendar_dates([CalendarDate(2024, 5, 1), CalendarDate(2024, 5, 2)])
        b = DateArray.from_calendar_dates([CalendarDate(2024, 5, 2), CalendarDate(2024, 5, 2)])
        assert np.asarray(a < b).tolist() == [True, False]
        assert np.asarray(a <= b).tolist() == [True, True]
        assert np.asarray(a == b).tolist() == [False, True]
        assert np.asarray(b >= a).tolist() == [True, True]
        assert np.asarray(b > a).tolist() == [True, False]

    def test_empty(self):
        arr = DateArray.from_calendar_dates([])
        assert len(arr) == 0
        assert arr.to_calendar_dates() == []
