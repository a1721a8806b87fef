"""Performance cases: warm up, time repeated runs and compute statistics."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any

from purecheck.config import StatsConfig
from purecheck.effect import Effect
from purecheck.errors import PreconditionError, check_non_empty
from purecheck.models.stats import Stats
from purecheck.schedule import Schedule
from purecheck.stats import compute_stats

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class PerfCase[T]:
    """Measures the wall-clock time of a task over repeated runs."""

    name: str
    task: Effect[T] = field(repr=False)
    warmup_times: int = 0
    config: StatsConfig = field(default_factory=StatsConfig)

    def __post_init__(self) -> None:
        check_non_empty(self.name, "perf case name")
        if self.warmup_times < 0:
            raise PreconditionError(
                f"warmup times must not be negative, got {self.warmup_times}"
            )

    def warmup(self, times: int) -> "PerfCase[T]":
        """Run the task times times, discarding results, before measuring."""
        return replace(self, warmup_times=times)

    def run_effect(self, times: int) -> Effect[Stats]:
        """Describe a measurement of times timed runs without executing it.

        Raises:
            PreconditionError: If times is not positive

        """
        if times <= 0:
            raise PreconditionError(
                f"perf case '{self.name}' needs at least one run, got {times}"
            )
        samples = Schedule.recurs(times - 1).repeat(
            self.task.timed().map(lambda pair: pair[0])
        )
        return self._warmup().flat_map(lambda _: samples).map(self._compute)

    def run(self, times: int) -> Stats:
        """Measure times timed runs and return their statistics."""
        log.info(
            "Running perf case %s (%d warmup, %d timed run(s))",
            self.name,
            self.warmup_times,
            times,
        )
        return self.run_effect(times).run()

    def _warmup(self) -> Effect[Any]:
        if self.warmup_times == 0:
            return Effect.pure(None)
        return Schedule.recurs(self.warmup_times - 1).repeat(self.task)

    def _compute(self, durations: list[timedelta]) -> Stats:
        stats = compute_stats(self.name, durations, self.config)
        log.info(
            "Perf case %s completed %d run(s): %s", self.name, len(durations), stats
        )
        return stats


def perf_case[T](
    name: str,
    task: Effect[T] | Callable[[], T],
    config: StatsConfig | None = None,
) -> PerfCase[T]:
    """Create a perf case from an effect or a zero-argument callable."""
    effect = task if isinstance(task, Effect) else Effect.defer(task)
    return PerfCase(name=name, task=effect, config=config or StatsConfig())
