"""Batch example: due dates for a small loan book in one vectorised pass."""

from paydate import calculate_due_dates_batch
from paydate.logging_config import configure_logging, get_logger

configure_logging(level="INFO")

logger = get_logger("paydate.examples.batch")

HOLIDAYS_2024 = ["2024-05-27", "2024-06-19", "2024-07-04", "2024-09-02"]


def main() -> None:
    """Run batch example."""
    loans = [
        # fund date, pay span, reference pay date, direct deposit
        ("2024-05-01", "bi-weekly", "2024-05-10", True),
        ("2024-05-01", "weekly", "2024-05-10", False),
        ("2024-06-01", "monthly", "2024-06-27", True),
        ("2024-08-20", "monthly", "2024-01-31", False),
    ]
    funds, spans, refs, deposits = (list(col) for col in zip(*loans))

    result = calculate_due_dates_batch(funds, spans, refs, deposits, HOLIDAYS_2024)

    for (fund, span, _, _), due in zip(loans, result.to_calendar_dates()):
        logger.info("Funded %s, paid %s: due %s", fund, span, due)


if __name__ == "__main__":
    main()
