"""Classification of an attempt against the expectation of a test case."""

from typing import Any

from purecheck.effect import Attempt, Raised, Value
from purecheck.errors import ValidatorError
from purecheck.location import SourceLocation
from purecheck.models.result import Error, Failure, Outcome, Success
from purecheck.validation import Expectation, OnError, OnSuccess, Rejection, Validator


def _validate(name: str, validator: Validator[Any], subject: Any) -> Rejection | None:
    try:
        return validator.validate(subject)
    except Exception as exc:
        raise ValidatorError(f"validator of test '{name}' raised {exc!r}") from exc


def classify[T](
    name: str,
    given: Any,
    location: SourceLocation,
    attempt: Attempt[T],
    expectation: Expectation[T],
) -> Outcome[T]:
    """Turn an attempt into an outcome.

    Args:
        name: Test name
        given: Input the operation was called with
        location: Where the test was defined
        attempt: Value returned or error raised by the operation
        expectation: Which side of the attempt to validate, and how

    Returns:
        Success or Failure when the attempt is on the expected side (value or
        error) depending on the validator, Error otherwise.

    Raises:
        ValidatorError: If the validator itself raises

    """
    match expectation, attempt:
        case OnSuccess(validator=validator), Value(value=value):
            subject: Any = value
        case OnError(validator=validator), Raised(error=error):
            subject = error
        case _:
            return Error(name=name, given=given, location=location, attempt=attempt)

    rejection = _validate(name, validator, subject)
    if rejection is None:
        return Success(name=name, given=given, attempt=attempt)
    return Failure(
        name=name,
        given=given,
        location=location,
        attempt=attempt,
        rejection=rejection,
    )
