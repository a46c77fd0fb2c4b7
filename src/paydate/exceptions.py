"""Custom exception classes for due-date calculation errors.

This module defines the exception hierarchy used throughout the paydate
package. All exceptions inherit from PayDateException, which keeps a
context dictionary alongside the message for diagnostics.
"""

from typing import Any


class PayDateException(Exception):
    """Base exception for all paydate errors.

    Attributes:
        message: Human-readable error description
        context: Additional context information about the error
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description
            context: Optional dictionary with additional error context
                    (e.g., pay_span, start_date, max_steps)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class InvalidPaySpanError(PayDateException):
    """Exception raised when a pay span is not weekly, bi-weekly or monthly.

    The offending value is kept on ``pay_span`` so callers can report it.

    Example:
        >>> raise InvalidPaySpanError("quarterly")
        Traceback (most recent call last):
        ...
        paydate.exceptions.InvalidPaySpanError: Invalid paySpan: quarterly (Context: ...)
    """

    def __init__(self, pay_span: object, context: dict[str, Any] | None = None) -> None:
        self.pay_span = pay_span
        merged = {"pay_span": pay_span, "supported": "weekly, bi-weekly, monthly"}
        merged.update(context or {})
        super().__init__(f"Invalid paySpan: {pay_span}", merged)


class NoBusinessDayReachableError(PayDateException):
    """Exception raised when weekend/holiday adjustment never lands on a business day.

    This happens only for degenerate holiday sets that, together with the
    weekends, cover every day within the adjustment cap.

    Example:
        >>> raise NoBusinessDayReachableError(
        ...     "No business day reachable",
        ...     context={"start_date": "2024-05-27", "direction": "forward", "max_steps": 366}
        ... )
    """


class DateTimeError(PayDateException):
    """Exception raised for date parsing or construction errors.

    This exception should be raised when:
    - A date string cannot be parsed
    - Date components are out of range
    - A value of an unsupported type is passed where a date is expected

    Example:
        >>> raise DateTimeError(
        ...     "Unable to parse ISO date string",
        ...     context={"date_string": "2024-13-45"}
        ... )
    """


class ConfigurationError(PayDateException):
    """Exception raised for configuration and initialization errors.

    This exception should be raised when:
    - Calculator parameters are out of range
    - Environment variables hold invalid values

    Example:
        >>> raise ConfigurationError(
        ...     "max_adjustment_days must be positive",
        ...     context={"max_adjustment_days": 0}
        ... )
    """
