"""Tests for the batched JAX due-date engine."""

from __future__ import annotations

import jax.numpy as jnp
import numpy as np
import pytest

from paydate.core.time import CalendarDate
from paydate.engine.vectorized import (
    BatchDueDateResult,
    adjust_ordinals,
    calculate_due_dates_batch,
)
from paydate.exceptions import InvalidPaySpanError, NoBusinessDayReachableError

SCENARIOS = [
    # fund date, holidays, span, reference, direct deposit, expected
    ("2024-05-01", ["2024-05-27", "2024-07-04"], "bi-weekly", "2024-05-10", True, "2024-05-24"),
    ("2024-05-01", ["2024-05-27", "2024-07-04"], "weekly", "2024-05-10", False, "2024-05-17"),
    ("2024-06-01", ["2024-06-27"], "monthly", "2024-06-27", True, "2024-06-28"),
    ("2024-05-15", ["2024-05-27"], "monthly", "2024-05-27", True, "2024-05-28"),
]


class TestBatchScenarios:
    """Batch results agree with the reference scenarios."""

    @pytest.mark.parametrize("scenario", SCENARIOS)
    def test_single_row(self, scenario):
        fund, holidays, span, ref, deposit, expected = scenario
        result = calculate_due_dates_batch([fund], span, ref, deposit, holidays)
        assert result.to_calendar_dates() == [CalendarDate.from_iso(expected)]

    def test_mixed_rows_shared_calendar(self, calculator):
        holidays = ["2024-05-27", "2024-06-27", "2024-07-04"]
        funds = ["2024-05-01", "2024-05-01", "2024-06-01", "2024-05-15", "2024-05-01"]
        spans = ["bi-weekly", "weekly", "monthly", "monthly", "weekly"]
        refs = ["2024-05-10", "2024-05-10", "2024-06-27", "2024-05-27", "2024-05-05"]
        deposits = [True, False, True, True, False]

        result = calculate_due_dates_batch(funds, spans, refs, deposits, holidays)

        expected = [
            calculator.calculate_due_date(f, holidays, s, r, d)
            for f, s, r, d in zip(funds, spans, refs, deposits)
        ]
        assert result.to_calendar_dates() == expected

    def test_intermediate_dates(self):
        result = calculate_due_dates_batch(["2024-05-01"], "weekly", "2024-05-05", False)
        assert isinstance(result, BatchDueDateResult)
        assert result.num_dates == 1
        assert result.min_due_dates.to_calendar_dates() == [CalendarDate(2024, 5, 11)]
        assert result.pay_dates.to_calendar_dates() == [CalendarDate(2024, 5, 12)]
        assert result.to_calendar_dates() == [CalendarDate(2024, 5, 10)]

    def test_monthly_clamp(self):
        result = calculate_due_dates_batch(["2024-01-25"], "monthly", "2024-01-31", True)
        # Minimum 2024-02-04; clamped pay date Thu 2024-02-29
        assert result.pay_dates.to_calendar_dates() == [CalendarDate(2024, 2, 29)]

    def test_empty_batch(self):
        result = calculate_due_dates_batch([], "weekly", "2024-05-10", True)
        assert result.num_dates == 0
        assert result.to_calendar_dates() == []

    def test_custom_offset(self):
        result = calculate_due_dates_batch(
            ["2024-05-01"], "weekly", "2024-05-10", True, min_days_after_funding=0
        )
        assert result.to_calendar_dates() == [CalendarDate(2024, 5, 3)]


class TestBatchErrors:
    """Validation and failure modes."""

    def test_invalid_span(self):
        with pytest.raises(InvalidPaySpanError):
            calculate_due_dates_batch(
                ["2024-05-01", "2024-05-01"], ["weekly", "quarterly"], "2024-05-10", True
            )

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            calculate_due_dates_batch(["2024-05-01", "2024-05-02"], ["weekly"], "2024-05-10", True)

    def test_no_business_day(self, every_day_2024):
        with pytest.raises(NoBusinessDayReachableError) as exc_info:
            calculate_due_dates_batch(
                ["2024-01-01", "2024-05-01"],
                "weekly",
                "2024-05-10",
                True,
                every_day_2024,
                max_adjustment_days=20,
            )
        assert exc_info.value.context["row"] == 0
        assert exc_info.value.context["max_steps"] == 20


class TestAdjustOrdinals:
    """Array adjustment loop."""

    def test_steps_each_row_independently(self):
        saturday = CalendarDate(2024, 5, 11).toordinal()
        monday = CalendarDate(2024, 5, 27).toordinal()
        ordinals = jnp.array([saturday, saturday, monday], dtype=jnp.int32)
        holidays = jnp.array([monday], dtype=jnp.int32)
        forward = jnp.array([True, False, False])

        adjusted, blocked = adjust_ordinals(ordinals, holidays, forward, 366)

        assert [CalendarDate.from_ordinal(int(o)) for o in np.asarray(adjusted)] == [
            CalendarDate(2024, 5, 13),
            CalendarDate(2024, 5, 10),
            CalendarDate(2024, 5, 24),
        ]
        assert not np.asarray(blocked).any()

    def test_reports_blocked_rows(self):
        saturday = CalendarDate(2024, 5, 11).toordinal()
        adjusted, blocked = adjust_ordinals(
            jnp.array([saturday], dtype=jnp.int32),
            jnp.zeros((0,), dtype=jnp.int32),
            jnp.array([True]),
            1,
        )
        assert np.asarray(blocked).tolist() == [True]
        assert CalendarDate.from_ordinal(int(adjusted[0])) == CalendarDate(2024, 5, 12)
