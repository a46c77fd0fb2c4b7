"""Command-line interface for paydate.

Prints the due date for a single loan:

    paydate --fund-date 2024-05-01 --pay-span bi-weekly \\
        --reference-pay-date 2024-05-10 --holiday 2024-05-27

Exit codes: 0 on success, 2 for invalid input (pay span or date),
1 when no business day is reachable.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence

from paydate import __version__
from paydate.core.types import PaySpan
from paydate.engine.calculator import DueDateCalculator
from paydate.exceptions import (
    ConfigurationError,
    DateTimeError,
    InvalidPaySpanError,
    NoBusinessDayReachableError,
)
from paydate.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paydate",
        description="Calculate the first valid loan repayment due date.",
    )
    parser.add_argument("--fund-date", required=True, help="Loan funding date (YYYY-MM-DD)")
    parser.add_argument(
        "--pay-span",
        required=True,
        help=f"Pay interval: {', '.join(s.value for s in PaySpan)}",
    )
    parser.add_argument(
        "--reference-pay-date", required=True, help="Any known pay date (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--holiday",
        action="append",
        default=[],
        metavar="DATE",
        help="Holiday to avoid; repeat for several",
    )
    parser.add_argument(
        "--no-direct-deposit",
        dest="has_direct_deposit",
        action="store_false",
        help="Adjust backward off weekends/holidays instead of forward",
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Print the intermediate dates as JSON",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: WARNING)")
    parser.add_argument("--version", action="version", version=f"paydate {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    try:
        calculator = DueDateCalculator.from_env()
        result = calculator.explain(
            args.fund_date,
            args.holiday,
            args.pay_span,
            args.reference_pay_date,
            args.has_direct_deposit,
        )
    except (InvalidPaySpanError, DateTimeError, ConfigurationError) as e:
        logger.debug("Calculation failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2
    except NoBusinessDayReachableError as e:
        logger.debug("Calculation failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.explain:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result.due_date.to_iso())
    return 0


if __name__ == "__main__":
    sys.exit(main())
