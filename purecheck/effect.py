"""Suspended computations and the value-or-error attempts they produce."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from purecheck.errors import check_callable


@dataclass(frozen=True)
class Value[T]:
    """Attempt that returned a value."""

    value: T

    def map[R](self, fn: Callable[[T], R]) -> "Value[R]":
        """Transform the carried value."""
        return Value(fn(self.value))

    def get(self) -> T:
        """Return the carried value."""
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Raised:
    """Attempt that raised an exception."""

    error: Exception

    def map(self, fn: Callable[[Any], Any]) -> "Raised":
        """Errors are never transformed."""
        return self

    def get(self) -> Any:
        """Re-raise the carried exception."""
        raise self.error

    def __str__(self) -> str:
        return repr(self.error)


type Attempt[T] = Value[T] | Raised


def elapsed_since(start_ns: int) -> timedelta:
    """Return the wall-clock time elapsed since a perf_counter_ns reading."""
    return timedelta(microseconds=(time.perf_counter_ns() - start_ns) / 1000)


@dataclass(frozen=True)
class Effect[T]:
    """A suspended computation.

    Nothing happens until run() is called, and every call runs the
    computation again from scratch. Exceptions raised by the thunk propagate
    from run(); use attempt() to capture them as a Raised value instead.
    """

    thunk: Callable[[], T]

    @staticmethod
    def defer[R](thunk: Callable[[], R]) -> "Effect[R]":
        """Suspend a zero-argument callable."""
        return Effect(check_callable(thunk, "thunk"))

    @staticmethod
    def pure[R](value: R) -> "Effect[R]":
        """Effect that always returns value."""
        return Effect(lambda: value)

    @staticmethod
    def raise_error(error: Exception) -> "Effect[Any]":
        """Effect that always raises error."""

        def _raise() -> Any:
            raise error

        return Effect(_raise)

    @staticmethod
    def suspend[R](producer: Callable[[], "Effect[R]"]) -> "Effect[R]":
        """Defer the construction of an effect until it is run.

        Exceptions raised while building the inner effect surface when the
        outer one runs, so attempt() captures them like any other error.
        """
        check_callable(producer, "producer")
        return Effect(lambda: producer().run())

    def run(self) -> T:
        """Run the computation and return its value, raising on error."""
        return self.thunk()

    def map[R](self, fn: Callable[[T], R]) -> "Effect[R]":
        """Transform the value produced by this effect."""
        return Effect(lambda: fn(self.thunk()))

    def flat_map[R](self, fn: Callable[[T], "Effect[R]"]) -> "Effect[R]":
        """Chain an effect computed from the value of this one."""
        return Effect(lambda: fn(self.thunk()).run())

    def attempt(self) -> "Effect[Attempt[T]]":
        """Capture exceptions raised by this effect as a Raised attempt."""

        def _attempt() -> Attempt[T]:
            try:
                return Value(self.thunk())
            except Exception as error:
                return Raised(error)

        return Effect(_attempt)

    def timed(self) -> "Effect[tuple[timedelta, T]]":
        """Pair the value of this effect with the wall-clock time it took."""

        def _timed() -> tuple[timedelta, T]:
            start = time.perf_counter_ns()
            value = self.thunk()
            return elapsed_since(start), value

        return Effect(_timed)
