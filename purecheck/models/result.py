"""Models for the outcome of a single test execution."""

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, ClassVar, Literal

from purecheck.effect import Attempt, Raised
from purecheck.errors import check_non_empty
from purecheck.location import SourceLocation
from purecheck.validation import Rejection

type Status = Literal["success", "failure", "error", "disabled"]


class _OutcomeMixin:
    """Status predicates shared by every outcome variant."""

    status: ClassVar[Status]
    name: str

    def __post_init__(self) -> None:
        check_non_empty(self.name, "test name")

    @property
    def is_success(self) -> bool:
        return self.status == "success"

    @property
    def is_failure(self) -> bool:
        return self.status == "failure"

    @property
    def is_error(self) -> bool:
        return self.status == "error"

    @property
    def is_disabled(self) -> bool:
        return self.status == "disabled"


@dataclass(frozen=True, kw_only=True)
class Success[T](_OutcomeMixin):
    """The validator accepted the attempt.

    The attempt is a Raised error when the test expected the operation to
    raise.
    """

    status: ClassVar[Status] = "success"

    name: str
    given: Any = None
    attempt: Attempt[T]

    def map[R](self, fn: Callable[[T], R]) -> "Success[R]":
        """Transform the carried value, keeping the variant."""
        return replace(self, attempt=self.attempt.map(fn))  # type: ignore[arg-type]

    def assertion(self) -> None:
        """Successful outcomes never raise."""

    def __str__(self) -> str:
        return f"test '{self.name}' SUCCESS: '{self.attempt}'"


@dataclass(frozen=True, kw_only=True)
class Failure[T](_OutcomeMixin):
    """The validator rejected the attempt."""

    status: ClassVar[Status] = "failure"

    name: str
    given: Any = None
    location: SourceLocation
    attempt: Attempt[T]
    rejection: Rejection

    def map[R](self, fn: Callable[[T], R]) -> "Failure[R]":
        """Transform the carried value, keeping the variant."""
        return replace(self, attempt=self.attempt.map(fn))  # type: ignore[arg-type]

    def assertion(self) -> None:
        """Raise an AssertionError describing the rejection."""
        raise AssertionError(str(self))

    def __str__(self) -> str:
        return (
            f"test '{self.name}' FAILURE: expected '{self.rejection}' "
            f"but was '{self.attempt}' at {self.location}"
        )


@dataclass(frozen=True, kw_only=True)
class Error[T](_OutcomeMixin):
    """The operation raised when a value was expected, or the other way round.

    The attempt holds the unexpected error, or the value returned when an
    error was expected.
    """

    status: ClassVar[Status] = "error"

    name: str
    given: Any = None
    location: SourceLocation
    attempt: Attempt[T]

    def map[R](self, fn: Callable[[T], R]) -> "Error[R]":
        """Transform an unexpected value; an unexpected error is kept as is."""
        return replace(self, attempt=self.attempt.map(fn))  # type: ignore[arg-type]

    def assertion(self) -> None:
        """Raise an AssertionError chained to the unexpected error, if any."""
        if isinstance(self.attempt, Raised):
            raise AssertionError(str(self)) from self.attempt.error
        raise AssertionError(str(self))

    def __str__(self) -> str:
        if isinstance(self.attempt, Raised):
            detail = str(self.attempt)
        else:
            detail = f"expected an error but was '{self.attempt}'"
        return f"test '{self.name}' ERROR: {detail} at {self.location}"


@dataclass(frozen=True, kw_only=True)
class Disabled(_OutcomeMixin):
    """The test was skipped and its operation never ran."""

    status: ClassVar[Status] = "disabled"

    name: str
    reason: str

    def map(self, fn: Callable[[Any], Any]) -> "Disabled":
        return self

    def assertion(self) -> None:
        """Disabled outcomes never raise."""

    def __str__(self) -> str:
        return f"test '{self.name}' DISABLED: {self.reason}"


type Outcome[T] = Success[T] | Failure[T] | Error[T] | Disabled
