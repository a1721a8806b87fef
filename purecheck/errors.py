"""Exceptions raised by purecheck outside of test outcomes."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from purecheck.models.report import Report


class PreconditionError(ValueError):
    """Raised when a test, suite or measurement is built with invalid arguments."""


class ValidatorError(RuntimeError):
    """Raised when a validator itself fails while classifying an attempt."""


class ReportAssertionError(AssertionError):
    """Raised by Report.assertion when any outcome did not pass.

    The full report is attached so callers can render it again.
    """

    def __init__(self, message: str, report: "Report") -> None:
        """Initialize with the summary message and the failing report."""
        super().__init__(message)
        self.report = report


def check_non_empty(value: str | None, what: str) -> str:
    """Return value if it is a non-empty string, otherwise raise."""
    if not isinstance(value, str) or not value:
        raise PreconditionError(f"{what} must be a non-empty string, got {value!r}")
    return value


def check_callable[F](value: F | None, what: str) -> F:
    """Return value if it is callable, otherwise raise."""
    if value is None or not callable(value):
        raise PreconditionError(f"{what} must be callable, got {value!r}")
    return value
