"""Basic example: due date for a bi-weekly borrower with direct deposit."""

from paydate import CalendarDate, HolidaySet, calculate_due_date
from paydate.logging_config import configure_logging, get_logger

configure_logging(level="INFO")

logger = get_logger("paydate.examples.basic")


def main() -> None:
    """Run basic example."""
    holidays = HolidaySet([CalendarDate(2024, 5, 27)])  # Memorial Day

    due_date = calculate_due_date(
        fund_date=CalendarDate(2024, 5, 1),
        holidays=holidays,
        pay_span="bi-weekly",
        reference_pay_date=CalendarDate(2024, 5, 10),  # Friday
        has_direct_deposit=True,
    )
    logger.info("Calculated due date: %s", due_date)  # 2024-05-24


if __name__ == "__main__":
    main()
