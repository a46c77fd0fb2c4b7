"""Loan repayment due-date calculator.

The first due date of a loan is found in three steps:

1. The minimum due date is the fund date plus a fixed offset (10 days).
2. The borrower's pay schedule is projected forward from a known pay date
   to the first occurrence following that minimum.
3. That pay date is moved off weekends and holidays one day at a time:
   forward when the borrower has direct deposit, backward otherwise.

A backward adjustment may land before the minimum due date. Pay dates are
fixed commitments, so the result stays tied to the pay date rather than to
the minimum.

Example:
    >>> from paydate import calculate_due_date
    >>> calculate_due_date(
    ...     "2024-05-01", ["2024-05-27", "2024-07-04"], "bi-weekly", "2024-05-10", True
    ... )
    CalendarDate(year=2024, month=5, day=24)
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from paydate.core.time import CalendarDate, normalize
from paydate.core.types import DateLike, PaySpan, PaySpanLike
from paydate.exceptions import ConfigurationError
from paydate.logging_config import get_logger
from paydate.utilities.calendars import (
    DEFAULT_MAX_ADJUSTMENT_DAYS,
    HolidaySet,
    adjust_for_weekends_and_holidays,
)
from paydate.utilities.schedules import next_pay_date_on_or_after

logger = get_logger(__name__)

DEFAULT_MIN_DAYS_AFTER_FUNDING = 10
ENV_MAX_ADJUSTMENT_DAYS = "PAYDATE_MAX_ADJUSTMENT_DAYS"


@dataclass(frozen=True)
class CalculationRequest:
    """Inputs for one due-date calculation, normalized on construction.

    Attributes:
        fund_date: Date the loan is disbursed
        holidays: Holidays to avoid
        pay_span: Borrower's pay interval
        reference_pay_date: Any known pay date on the borrower's schedule
        has_direct_deposit: Adjust forward (True) or backward (False)
    """

    fund_date: CalendarDate
    holidays: HolidaySet
    pay_span: PaySpan
    reference_pay_date: CalendarDate
    has_direct_deposit: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "pay_span", PaySpan.parse(self.pay_span))
        object.__setattr__(self, "fund_date", normalize(self.fund_date))
        object.__setattr__(self, "reference_pay_date", normalize(self.reference_pay_date))
        object.__setattr__(self, "holidays", HolidaySet.coerce(self.holidays))
        deposit = self.has_direct_deposit
        if not isinstance(deposit, int) or deposit not in (0, 1):
            raise ConfigurationError(
                "has_direct_deposit must be a boolean",
                context={"has_direct_deposit": repr(deposit)},
            )
        object.__setattr__(self, "has_direct_deposit", bool(deposit))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CalculationRequest:
        """Build a request from plain (e.g. JSON-decoded) values.

        Keys: ``fund_date``, ``pay_span``, ``reference_pay_date``, and the
        optional ``holidays`` (default none) and ``has_direct_deposit``
        (default True).

        Raises:
            KeyError: If a required key is missing
            ConfigurationError: If has_direct_deposit is not a boolean
        """
        return cls(
            fund_date=data["fund_date"],
            holidays=data.get("holidays") or (),
            pay_span=data["pay_span"],
            reference_pay_date=data["reference_pay_date"],
            has_direct_deposit=data.get("has_direct_deposit", True),
        )


@dataclass(frozen=True)
class DueDateResult:
    """Due date together with the intermediate dates that produced it.

    Attributes:
        min_due_date: Fund date plus the minimum offset
        pay_date: Projected pay date before weekend/holiday adjustment
        due_date: Final due date (a business day)
    """

    min_due_date: CalendarDate
    pay_date: CalendarDate
    due_date: CalendarDate

    @property
    def days_shifted(self) -> int:
        """Signed number of days the adjustment moved the pay date."""
        return self.pay_date.days_between(self.due_date)

    def to_dict(self) -> dict[str, Any]:
        return {
            "min_due_date": self.min_due_date.to_iso(),
            "pay_date": self.pay_date.to_iso(),
            "due_date": self.due_date.to_iso(),
            "days_shifted": self.days_shifted,
        }


class DueDateCalculator:
    """Computes the first valid repayment due date for a loan.

    The calculator holds configuration only; it is safe to share between
    threads.

    Args:
        min_days_after_funding: Offset from the fund date to the minimum due date
        max_adjustment_days: Cap on single-day weekend/holiday adjustment steps

    Raises:
        ConfigurationError: If an argument is out of range
    """

    def __init__(
        self,
        min_days_after_funding: int = DEFAULT_MIN_DAYS_AFTER_FUNDING,
        max_adjustment_days: int = DEFAULT_MAX_ADJUSTMENT_DAYS,
    ) -> None:
        if min_days_after_funding < 0:
            raise ConfigurationError(
                "min_days_after_funding must not be negative",
                context={"min_days_after_funding": min_days_after_funding},
            )
        if max_adjustment_days <= 0:
            raise ConfigurationError(
                "max_adjustment_days must be positive",
                context={"max_adjustment_days": max_adjustment_days},
            )
        self.min_days_after_funding = min_days_after_funding
        self.max_adjustment_days = max_adjustment_days

    @classmethod
    def from_env(cls) -> DueDateCalculator:
        """Create a calculator, reading the adjustment cap from PAYDATE_MAX_ADJUSTMENT_DAYS."""
        raw = os.getenv(ENV_MAX_ADJUSTMENT_DAYS)
        if raw is None or raw.strip() == "":
            return cls()
        try:
            max_adjustment_days = int(raw)
        except ValueError as e:
            raise ConfigurationError(
                f"{ENV_MAX_ADJUSTMENT_DAYS} must be an integer",
                context={ENV_MAX_ADJUSTMENT_DAYS: raw},
            ) from e
        return cls(max_adjustment_days=max_adjustment_days)

    def __repr__(self) -> str:
        return (
            f"DueDateCalculator(min_days_after_funding={self.min_days_after_funding}, "
            f"max_adjustment_days={self.max_adjustment_days})"
        )

    def explain(
        self,
        fund_date: DateLike,
        holidays: HolidaySet | Iterable[DateLike] | None,
        pay_span: PaySpanLike,
        reference_pay_date: DateLike,
        has_direct_deposit: bool,
    ) -> DueDateResult:
        """Compute the due date and return it with its intermediate dates.

        Raises:
            InvalidPaySpanError: If ``pay_span`` is not weekly, bi-weekly or monthly
            NoBusinessDayReachableError: If the holidays leave no business day
                within ``max_adjustment_days`` of the pay date
        """
        span = PaySpan.parse(pay_span)
        min_due_date = normalize(fund_date).add_days(self.min_days_after_funding)
        pay_date = next_pay_date_on_or_after(min_due_date, span, reference_pay_date)
        due_date = adjust_for_weekends_and_holidays(
            pay_date,
            holidays,
            forward=has_direct_deposit,
            max_steps=self.max_adjustment_days,
        )
        result = DueDateResult(min_due_date=min_due_date, pay_date=pay_date, due_date=due_date)
        logger.debug(
            "Calculated due date %s (%s pay date %s, minimum %s)",
            due_date,
            span.value,
            pay_date,
            min_due_date,
            extra={"days_shifted": result.days_shifted},
        )
        return result

    def calculate_due_date(
        self,
        fund_date: DateLike,
        holidays: HolidaySet | Iterable[DateLike] | None,
        pay_span: PaySpanLike,
        reference_pay_date: DateLike,
        has_direct_deposit: bool,
    ) -> CalendarDate:
        """Compute the first valid repayment due date.

        Args:
            fund_date: Date the loan is disbursed
            holidays: Holidays to avoid
            pay_span: "weekly", "bi-weekly" or "monthly"
            reference_pay_date: Any known pay date on the borrower's schedule
            has_direct_deposit: Adjust forward when True, backward when False

        Returns:
            The due date, never a weekend day or holiday

        Raises:
            InvalidPaySpanError: If ``pay_span`` is not recognized
            NoBusinessDayReachableError: If no business day is reachable
        """
        return self.explain(
            fund_date, holidays, pay_span, reference_pay_date, has_direct_deposit
        ).due_date

    def calculate(self, request: CalculationRequest) -> CalendarDate:
        """Compute the due date for a prepared request."""
        return self.calculate_due_date(
            request.fund_date,
            request.holidays,
            request.pay_span,
            request.reference_pay_date,
            request.has_direct_deposit,
        )


_default_calculator = DueDateCalculator()


def calculate_due_date(
    fund_date: DateLike,
    holidays: HolidaySet | Iterable[DateLike] | None,
    pay_span: PaySpanLike,
    reference_pay_date: DateLike,
    has_direct_deposit: bool,
) -> CalendarDate:
    """Compute the due date with the default calculator settings."""
    return _default_calculator.calculate_due_date(
        fund_date, holidays, pay_span, reference_pay_date, has_direct_deposit
    )
