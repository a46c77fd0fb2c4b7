"""Type definitions and enumerations for pay-schedule calculations.

Enumerations inherit from str so they compare equal to their wire values
("weekly", "bi-weekly", "monthly") and serialize to JSON unchanged.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, TypeAlias

from paydate.exceptions import InvalidPaySpanError

if TYPE_CHECKING:
    from paydate.core.time import CalendarDate

# Anything normalize() accepts
DateLike: TypeAlias = "CalendarDate | date | datetime | str"
PaySpanLike: TypeAlias = "PaySpan | str"


class PaySpan(str, Enum):
    """Recurring interval of a borrower's pay schedule."""

    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"

    @property
    def period_days(self) -> int | None:
        """Fixed period length in days, or None for calendar-month spans."""
        return _PERIOD_DAYS[self]

    @property
    def index(self) -> int:
        """Stable integer code used by the array engine."""
        return _PAY_SPAN_INDEX[self]

    @classmethod
    def parse(cls, value: object) -> PaySpan:
        """Convert a member or its exact string value to a PaySpan.

        Args:
            value: PaySpan member or one of "weekly", "bi-weekly", "monthly"

        Returns:
            The matching PaySpan

        Raises:
            InvalidPaySpanError: If the value is not a recognized span

        Example:
            >>> PaySpan.parse("bi-weekly")
            <PaySpan.BI_WEEKLY: 'bi-weekly'>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError as e:
                raise InvalidPaySpanError(value) from e
        raise InvalidPaySpanError(value)


_PERIOD_DAYS: dict[PaySpan, int | None] = {
    PaySpan.WEEKLY: 7,
    PaySpan.BI_WEEKLY: 14,
    PaySpan.MONTHLY: None,
}

# Order matches the enum definition
_PAY_SPAN_INDEX: dict[PaySpan, int] = {member: i for i, member in enumerate(PaySpan)}
