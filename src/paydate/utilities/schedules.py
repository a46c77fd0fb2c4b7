"""Pay schedule projection.

A pay schedule is a single anchor date (a known pay date) plus a period:
7 or 14 days, or one calendar month on the anchor's day-of-month. This
module finds schedule occurrences relative to a given date.

Two projections are provided:
- :func:`next_pay_date_on_or_after` is analytic and O(1) in the distance
  between the anchor and the search date. It is the one the calculator uses.
- :func:`generate_pay_dates` steps through the schedule one period at a time
  from the anchor and is kept as an independent reference.
"""

from __future__ import annotations

from collections.abc import Iterator

from paydate.core.time import CalendarDate, normalize
from paydate.core.types import DateLike, PaySpan, PaySpanLike


def next_pay_date_on_or_after(
    after_date: DateLike,
    pay_span: PaySpanLike,
    reference_pay_date: DateLike,
) -> CalendarDate:
    """Find the schedule occurrence following ``after_date``.

    Weekly and bi-weekly spans round the elapsed days up to whole periods;
    an occurrence landing exactly on ``after_date`` is pushed one more
    period out, so the result is always strictly later than ``after_date``.

    Monthly spans use the anchor's day-of-month. The target month is the
    month of ``after_date`` when that day is still ahead of it, otherwise the
    following month. A day the target month does not have rolls over into
    the next month on construction; the rollover is detected and undone by
    walking back into the target month, which clamps to its last day.

    Args:
        after_date: Date to search from
        pay_span: "weekly", "bi-weekly" or "monthly"
        reference_pay_date: Any known pay date on the schedule

    Returns:
        The projected pay date

    Raises:
        InvalidPaySpanError: If ``pay_span`` is not recognized

    Example:
        >>> next_pay_date_on_or_after("2024-05-11", "bi-weekly", "2024-05-10")
        CalendarDate(year=2024, month=5, day=24)
    """
    span = PaySpan.parse(pay_span)
    after = normalize(after_date)
    anchor = normalize(reference_pay_date)

    if span.period_days is not None:
        period = span.period_days
        elapsed = anchor.days_between(after)
        periods = -(-elapsed // period)  # ceiling division
        pay_date = anchor.add_days(periods * period)
        if pay_date == after:
            pay_date = pay_date.add_days(period)
        return pay_date

    ref_day = anchor.day
    year, month = after.year, after.month
    if ref_day <= after.day:
        month += 1
        if month > 12:
            month = 1
            year += 1

    tentative = CalendarDate.from_overflowing(year, month, ref_day)

    # Undo month overflow (e.g. day 30 in February)
    while tentative.month != month:
        tentative = tentative.add_days(-1)

    is_same_month = tentative.month == after.month
    is_next_month = tentative.month == after.month % 12 + 1
    if not is_same_month and not is_next_month:
        tentative = tentative.add_days(-1)

    return tentative


def generate_pay_dates(
    pay_span: PaySpanLike,
    reference_pay_date: DateLike,
    after_date: DateLike,
    limit: int = 365,
) -> Iterator[CalendarDate]:
    """Step through the schedule from the anchor, yielding dates on or after ``after_date``.

    Monthly occurrences are computed from the anchor month each time (not
    chained), so a 31st anchor yields Jan 31, Feb 29, Mar 31 rather than
    drifting to the 29th.

    Args:
        pay_span: "weekly", "bi-weekly" or "monthly"
        reference_pay_date: Schedule anchor; the first candidate
        after_date: Earliest date to yield
        limit: Maximum number of dates to yield

    Yields:
        Schedule occurrences in chronological order

    Raises:
        InvalidPaySpanError: If ``pay_span`` is not recognized
        ValueError: If ``limit`` is not positive
    """
    span = PaySpan.parse(pay_span)
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")

    anchor = normalize(reference_pay_date)
    after = normalize(after_date)

    emitted = 0
    step = 0
    while emitted < limit:
        current = _nth_occurrence(anchor, span, step)
        if current >= after:
            yield current
            emitted += 1
        step += 1


def _nth_occurrence(anchor: CalendarDate, span: PaySpan, n: int) -> CalendarDate:
    if span.period_days is not None:
        return anchor.add_days(n * span.period_days)
    total = anchor.year * 12 + anchor.month - 1 + n
    year, month = divmod(total, 12)
    first = CalendarDate(year, month + 1, 1)
    return CalendarDate(year, month + 1, min(anchor.day, first.days_in_month()))


def pay_dates_between(
    pay_span: PaySpanLike,
    reference_pay_date: DateLike,
    start: DateLike,
    end: DateLike,
) -> list[CalendarDate]:
    """List schedule occurrences in ``[start, end]`` using the analytic projection.

    Example:
        >>> pay_dates_between("weekly", "2024-05-10", "2024-05-10", "2024-05-31")
        [CalendarDate(year=2024, month=5, day=10), CalendarDate(year=2024, month=5, day=17), \
CalendarDate(year=2024, month=5, day=24), CalendarDate(year=2024, month=5, day=31)]
    """
    span = PaySpan.parse(pay_span)
    first = normalize(start)
    last = normalize(end)

    dates: list[CalendarDate] = []
    current = _following(first.add_days(-1), span, reference_pay_date)
    while current < first:
        current = _following(current, span, reference_pay_date)
    while current <= last:
        dates.append(current)
        current = _following(current, span, reference_pay_date)
    return dates


def _following(date: CalendarDate, span: PaySpan, anchor: DateLike) -> CalendarDate:
    # A month-end clamped pay date projects onto itself; search from the next day
    candidate = next_pay_date_on_or_after(date, span, anchor)
    if candidate <= date:
        candidate = next_pay_date_on_or_after(date.add_days(1), span, anchor)
    return candidate
