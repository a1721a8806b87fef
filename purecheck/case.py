"""Builder DSL and decorators for test cases.

A case is declared in three steps and finalised by its expectation:

    should("add two numbers")
        .given(2)
        .when(lambda n: n + 2)
        .then(equals_to(4))

Every step and every decorator returns a new immutable value, so a case can
be shared, decorated differently and run any number of times.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any

from purecheck.classifier import classify
from purecheck.effect import Attempt, Effect, Raised
from purecheck.errors import PreconditionError, check_callable, check_non_empty
from purecheck.location import SourceLocation, capture_location
from purecheck.models.result import Disabled, Error, Outcome
from purecheck.property import PropertyTestCase
from purecheck.schedule import Schedule
from purecheck.validation import (
    Expectation,
    OnError,
    OnSuccess,
    Validator,
    instance_of,
)

log = logging.getLogger(__name__)


def should(name: str) -> "GivenStep":
    """Begin the declaration of a test case.

    Raises:
        PreconditionError: If name is empty

    """
    return GivenStep(name=check_non_empty(name, "test name"))


@dataclass(frozen=True, kw_only=True)
class GivenStep:
    """Binds the input of the operation under test."""

    name: str

    def given[I](self, value: I) -> "WhenStep[I]":
        """Use the same value as input on every run."""
        return WhenStep(name=self.name, given=lambda: value)

    def given_by[I](self, producer: Callable[[], I]) -> "WhenStep[I]":
        """Draw the input from producer, once per run."""
        return WhenStep(name=self.name, given=check_callable(producer, "producer"))

    def given_none(self) -> "WhenStep[None]":
        """Use None as input."""
        return self.given(None)

    def no_given(self) -> "WhenStep[None]":
        """Declare an operation that takes no meaningful input."""
        return self.given(None)


@dataclass(frozen=True, kw_only=True)
class WhenStep[I]:
    """Binds the operation under test."""

    name: str
    given: Callable[[], I]

    def when_effect[T](self, when: Callable[[I], Effect[T]]) -> "ThenStep[I, T]":
        """Use a function building the effect to run from the input."""
        return ThenStep(
            name=self.name, given=self.given, when=check_callable(when, "when")
        )

    def when[T](self, when: Callable[[I], T]) -> "ThenStep[I, T]":
        """Use a plain function of the input as the operation."""
        check_callable(when, "when")
        return self.when_effect(lambda given: Effect.defer(lambda: when(given)))

    def noop(self) -> "ThenStep[I, I]":
        """Use the input itself as the result."""
        return self.when(lambda given: given)

    def error(self, error: Exception) -> "ThenStep[I, Any]":
        """Use an operation that always raises error."""
        if not isinstance(error, Exception):
            raise PreconditionError(f"error must be an exception, got {error!r}")
        return self.when_effect(lambda _: Effect.raise_error(error))


@dataclass(frozen=True, kw_only=True)
class ThenStep[I, T]:
    """Binds the expectation and produces a runnable case."""

    name: str
    given: Callable[[], I]
    when: Callable[[I], Effect[T]]

    def expect(self, expectation: Expectation[T]) -> "TestCase[I, T]":
        """Finalise the case with an explicit OnSuccess/OnError expectation."""
        if not isinstance(expectation, OnSuccess | OnError):
            raise PreconditionError(
                f"expectation must be OnSuccess or OnError, got {expectation!r}"
            )
        return self._build(lambda _: expectation)

    def then(self, validator: Validator[T]) -> "TestCase[I, T]":
        """Expect a returned value accepted by validator."""
        expectation = OnSuccess(_check_validator(validator))
        return self._build(lambda _: expectation)

    def on_failure(self, validator: Validator[Exception]) -> "TestCase[I, T]":
        """Expect a raised error accepted by validator."""
        expectation = OnError(_check_validator(validator))
        return self._build(lambda _: expectation)

    def then_throws(
        self, expected: type[Exception] | Validator[Exception]
    ) -> "TestCase[I, T]":
        """Expect the operation to raise expected (a type or a validator)."""
        if isinstance(expected, type) and issubclass(expected, Exception):
            validator: Validator[Exception] = instance_of(expected)
        elif isinstance(expected, Validator):
            validator = expected
        else:
            raise PreconditionError(
                f"expected must be an exception type or a validator, got {expected!r}"
            )
        expectation = OnError(validator)
        return self._build(lambda _: expectation)

    def verify(
        self, matcher: Callable[[I, T], bool], message: str | None = None
    ) -> "TestCase[I, T]":
        """Expect matcher(input, result) to hold."""
        check_callable(matcher, "matcher")
        description = message or f"verified by {getattr(matcher, '__name__', matcher)}"

        def _expectation(given: I) -> Expectation[T]:
            return OnSuccess(
                Validator.of(lambda result: matcher(given, result), description)
            )

        return self._build(_expectation)

    def _build(
        self, expectation_for: Callable[[I], Expectation[T]]
    ) -> "TestCase[I, T]":
        location = capture_location()
        name = self.name
        when = self.when

        def _body(drawn: Attempt[I]) -> Effect[Outcome[T]]:
            if isinstance(drawn, Raised):
                log.debug("Input producer of test '%s' raised", name)
                return Effect.pure(
                    Error(name=name, given=None, location=location, attempt=drawn)
                )
            given = drawn.value
            return (
                Effect.suspend(lambda: when(given))
                .attempt()
                .map(
                    lambda attempt: classify(
                        name, given, location, attempt, expectation_for(given)
                    )
                )
            )

        return TestCase(name=name, location=location, given=self.given, body=_body)


def _check_validator[V: Validator[Any]](validator: V) -> V:
    if not isinstance(validator, Validator):
        raise PreconditionError(f"validator must be a Validator, got {validator!r}")
    return validator


@dataclass(frozen=True, kw_only=True)
class TestCase[I, T]:
    """A runnable test case.

    The input is drawn once per run() and its attempt is passed to body,
    which runs the operation and classifies the result, or yields an Error
    when the draw raised. Decorators wrap body, so retries reuse the input
    of the run they belong to (drawing again only after a failed draw) while
    repeat() draws a fresh input for every repetition.
    """

    __test__ = False

    name: str
    location: SourceLocation
    given: Callable[[], I] = field(repr=False)
    body: Callable[[Attempt[I]], Effect[Outcome[T]]] = field(repr=False)
    disabled_reason: str | None = None

    @property
    def is_disabled(self) -> bool:
        return self.disabled_reason is not None

    def run_effect(self) -> Effect[Outcome[T]]:
        """Describe a run without executing it."""
        if self.disabled_reason is not None:
            return Effect.pure(Disabled(name=self.name, reason=self.disabled_reason))
        return self._draw().flat_map(self.body)

    def _draw(self) -> Effect[Attempt[I]]:
        return Effect.defer(self.given).attempt()

    def run(self) -> Outcome[T]:
        """Run the case and return its outcome."""
        return self.run_effect().run()

    def disable(self, reason: str) -> "TestCase[I, T]":
        """Case that never runs and always yields Disabled with reason."""
        if self.is_disabled:
            return self
        return replace(self, disabled_reason=check_non_empty(reason, "reason"))

    def timed(self) -> "TestCase[I, tuple[timedelta, T]]":
        """Case carrying (elapsed, value) instead of value."""
        if self.is_disabled:
            return self  # type: ignore[return-value]
        body = self.body

        def _timed(drawn: Attempt[I]) -> Effect[Outcome[tuple[timedelta, T]]]:
            return (
                body(drawn)
                .timed()
                .map(lambda pair: pair[1].map(lambda value: (pair[0], value)))
            )

        return replace(self, body=_timed)  # type: ignore[arg-type]

    def retry_on_error(self, times: int) -> "TestCase[I, T]":
        """Run again, up to times more, while the outcome is an Error."""
        return self._retry(times, lambda outcome: outcome.is_error)

    def retry_on_failure(self, times: int) -> "TestCase[I, T]":
        """Run again, up to times more, while the outcome is a Failure."""
        return self._retry(times, lambda outcome: outcome.is_failure)

    def _retry(
        self, times: int, should_retry: Callable[[Outcome[T]], bool]
    ) -> "TestCase[I, T]":
        if times <= 0 or self.is_disabled:
            return self
        schedule = Schedule.recurs(times).while_result(should_retry)
        body = self.body
        draw = self._draw()

        def _retried(drawn: Attempt[I]) -> Effect[Outcome[T]]:
            current = drawn
            attempts = 0

            def _attempt() -> Outcome[T]:
                nonlocal current, attempts
                if attempts > 0 and isinstance(current, Raised):
                    current = draw.run()
                attempts += 1
                return body(current).run()

            return schedule.retry(Effect(_attempt))

        return replace(self, body=_retried)

    def repeat(self, times: int) -> PropertyTestCase[T]:
        """Property case running this case max(times, 1) times, in order."""
        schedule = Schedule.recurs(times - 1)
        repeated = PropertyTestCase(
            name=self.name, test=schedule.repeat(self.run_effect())
        )
        if self.disabled_reason is not None:
            return repeated.disable(self.disabled_reason)
        return repeated
