"""Validators and the expectations a test case checks its attempt against."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from purecheck.errors import PreconditionError, check_callable


class _Comparable(Protocol):
    def __lt__(self, other: Any, /) -> bool: ...

    def __gt__(self, other: Any, /) -> bool: ...


@dataclass(frozen=True)
class Rejection:
    """Why a validator did not accept a value."""

    messages: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.messages:
            raise PreconditionError("a rejection needs at least one message")

    def __add__(self, other: "Rejection") -> "Rejection":
        return Rejection(self.messages + other.messages)

    def join(self, separator: str = ", ") -> str:
        """Render all messages in a single line."""
        return separator.join(self.messages)

    def __str__(self) -> str:
        return self.join()


@dataclass(frozen=True)
class Validator[T]:
    """Checks a value and returns a Rejection when it is not acceptable.

    Validators are plain values: combine() accumulates the rejections of two
    validators and compose() validates a projection of the value instead of
    the value itself.
    """

    check: Callable[[T], Rejection | None]

    @staticmethod
    def of[R](predicate: Callable[[R], bool], message: str) -> "Validator[R]":
        """Build a validator from a predicate and the message to reject with."""
        check_callable(predicate, "predicate")
        rejection = Rejection((message,))
        return Validator(lambda value: None if predicate(value) else rejection)

    def validate(self, value: T) -> Rejection | None:
        """Return None when value is accepted, otherwise a Rejection."""
        return self.check(value)

    def __call__(self, value: T) -> Rejection | None:
        return self.check(value)

    def combine(self, other: "Validator[T]") -> "Validator[T]":
        """Validator accepting only values both validators accept."""

        def _check(value: T) -> Rejection | None:
            first = self.check(value)
            second = other.check(value)
            if first is None:
                return second
            if second is None:
                return first
            return first + second

        return Validator(_check)

    __and__ = combine

    def compose[S](self, fn: Callable[[S], T]) -> "Validator[S]":
        """Validate fn(value) instead of value."""
        check_callable(fn, "fn")
        return Validator(lambda value: self.check(fn(value)))


def _false_on_type_error[T](predicate: Callable[[T], bool]) -> Callable[[T], bool]:
    """Treat values the predicate cannot handle as rejected."""

    def _predicate(value: T) -> bool:
        try:
            return predicate(value)
        except TypeError:
            return False

    return _predicate


def combine[T](validator: Validator[T], *validators: Validator[T]) -> Validator[T]:
    """Combine validators, accumulating every rejection."""
    result = validator
    for other in validators:
        result = result.combine(other)
    return result


def equals_to(expected: Any) -> Validator[Any]:
    """Accept values equal to expected."""
    return Validator.of(lambda value: value == expected, f"equal to {expected!r}")


def not_equals_to(unexpected: Any) -> Validator[Any]:
    """Accept values different from unexpected."""
    return Validator.of(
        lambda value: value != unexpected, f"not equal to {unexpected!r}"
    )


def starts_with(prefix: str) -> Validator[Any]:
    """Accept strings starting with prefix."""
    return Validator.of(
        lambda value: isinstance(value, str) and value.startswith(prefix),
        f"starts with {prefix!r}",
    )


def ends_with(suffix: str) -> Validator[Any]:
    """Accept strings ending with suffix."""
    return Validator.of(
        lambda value: isinstance(value, str) and value.endswith(suffix),
        f"ends with {suffix!r}",
    )


def contains(item: Any) -> Validator[Any]:
    """Accept containers holding item."""
    return Validator.of(
        _false_on_type_error(lambda value: item in value), f"contains {item!r}"
    )


def instance_of(*types: type) -> Validator[Any]:
    """Accept instances of any of the given types."""
    if not types:
        raise PreconditionError("instance_of needs at least one type")
    names = " or ".join(t.__name__ for t in types)
    return Validator.of(lambda value: isinstance(value, types), f"instance of {names}")


def lower_than(bound: _Comparable, message: str | None = None) -> Validator[Any]:
    """Accept values strictly lower than bound."""
    return Validator.of(
        _false_on_type_error(lambda value: value < bound),
        message or f"lower than {bound}",
    )


def greater_than(bound: _Comparable, message: str | None = None) -> Validator[Any]:
    """Accept values strictly greater than bound."""
    return Validator.of(
        _false_on_type_error(lambda value: value > bound),
        message or f"greater than {bound}",
    )


def is_none() -> Validator[Any]:
    """Accept None."""
    return Validator.of(lambda value: value is None, "None")


def not_none() -> Validator[Any]:
    """Accept anything but None."""
    return Validator.of(lambda value: value is not None, "not None")


@dataclass(frozen=True)
class OnSuccess[T]:
    """Expect the operation to return a value accepted by validator."""

    validator: Validator[T]


@dataclass(frozen=True)
class OnError:
    """Expect the operation to raise an error accepted by validator."""

    validator: Validator[Exception]


type Expectation[T] = OnSuccess[T] | OnError
