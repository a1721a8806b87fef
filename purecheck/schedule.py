"""Bounded repetition policies driving the retry and repeat decorators."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from purecheck.effect import Effect
from purecheck.errors import check_callable

log = logging.getLogger(__name__)


class Decision(StrEnum):
    """Whether a schedule runs its effect once more."""

    CONTINUE = "continue"
    STOP = "stop"


@dataclass(frozen=True, kw_only=True)
class Schedule[A]:
    """Runs an effect once, then again while decide() says so.

    The bound counts extra runs: a schedule recurring n times runs its effect
    at most n + 1 times.
    """

    times: int
    predicate: Callable[[A], bool] | None = None

    @staticmethod
    def recurs[R](times: int) -> "Schedule[R]":
        """Recur up to times extra runs; negative bounds mean no recurrence."""
        return Schedule(times=max(times, 0))

    def while_result(self, predicate: Callable[[A], bool]) -> "Schedule[A]":
        """Only recur while predicate(last result) asks for another run."""
        check_callable(predicate, "predicate")
        return Schedule(times=self.times, predicate=predicate)

    def decide(self, attempt_index: int, last: A) -> Decision:
        """Decide after the run at attempt_index (0 is the first recurrence)."""
        if attempt_index >= self.times:
            return Decision.STOP
        if self.predicate is not None and not self.predicate(last):
            return Decision.STOP
        return Decision.CONTINUE

    def repeat(self, effect: Effect[A]) -> Effect[list[A]]:
        """Effect collecting the result of every run, in order."""

        def _repeat() -> list[A]:
            results = [effect.run()]
            while self.decide(len(results) - 1, results[-1]) is Decision.CONTINUE:
                log.debug(
                    "Repeating effect (run %d of %d)", len(results) + 1, self.times + 1
                )
                results.append(effect.run())
            return results

        return Effect(_repeat)

    def retry(self, effect: Effect[A]) -> Effect[A]:
        """Effect keeping only the result of the last run."""

        def _retry() -> A:
            result = effect.run()
            attempt_index = 0
            while self.decide(attempt_index, result) is Decision.CONTINUE:
                attempt_index += 1
                log.debug(
                    "Retrying effect (attempt %d of %d)", attempt_index, self.times
                )
                result = effect.run()
            return result

        return Effect(_retry)
