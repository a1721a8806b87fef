"""Tests for performance cases."""

from datetime import timedelta
from unittest.mock import Mock, patch

import pytest

from purecheck.case import should
from purecheck.config import StatsConfig
from purecheck.effect import Effect, Raised
from purecheck.errors import PreconditionError
from purecheck.models.result import Error
from purecheck.perf import PerfCase, perf_case
from purecheck.validation import lower_than


def clock(*ms: int) -> list[int]:
    """Build perf_counter_ns readings from milliseconds."""
    return [value * 1_000_000 for value in ms]


class TestPerfCase:
    """Tests for PerfCase."""

    def test_runs_warmup_and_timed_runs(self) -> None:
        """Calls the task warmup + times times and keeps times samples."""
        task = Mock(return_value=42)

        stats = perf_case("answer", task).warmup(2).run(3)

        assert task.call_count == 5
        assert stats.name == "answer"
        assert stats.percentiles.keys() == {50, 90, 95, 99}

    def test_deterministic_timing(self) -> None:
        """Statistics come from the measured durations only."""
        task = Mock()

        with patch("purecheck.effect.time") as time:
            time.perf_counter_ns.side_effect = clock(0, 10, 10, 30, 30, 60)
            stats = perf_case("sum", task).warmup(1).run(3)

        assert task.call_count == 4
        assert stats.total == timedelta(milliseconds=60)
        assert stats.min == timedelta(milliseconds=10)
        assert stats.max == timedelta(milliseconds=30)
        assert stats.mean == timedelta(milliseconds=20)
        assert stats.median == timedelta(milliseconds=20)
        assert stats.throughput == {"1s": 50, "1min": 3000}

    def test_accepts_effect(self) -> None:
        """An effect can be measured directly."""
        stats = perf_case("pure", Effect.pure(1)).run(1)

        assert stats.min == stats.max == stats.median == stats.total

    def test_custom_config(self) -> None:
        """Uses the given statistics configuration."""
        config = StatsConfig(percentiles=(50,), throughput_periods={})

        stats = perf_case("x", Mock(), config).run(2)

        assert stats.percentiles.keys() == {50}
        assert stats.throughput == {}

    def test_run_effect_is_lazy(self) -> None:
        """Building the measurement does not run the task."""
        task = Mock()

        effect = perf_case("lazy", task).warmup(3).run_effect(2)

        task.assert_not_called()
        effect.run()
        assert task.call_count == 5

    @pytest.mark.parametrize("times", [0, -1])
    def test_needs_a_run(self, times: int) -> None:
        """Raises PreconditionError without timed runs."""
        with pytest.raises(PreconditionError, match="at least one run"):
            perf_case("x", Mock()).run(times)

    def test_negative_warmup(self) -> None:
        """Raises PreconditionError for a negative warmup."""
        with pytest.raises(PreconditionError, match="warmup"):
            perf_case("x", Mock()).warmup(-1)

    def test_empty_name(self) -> None:
        """Raises PreconditionError for an empty name."""
        with pytest.raises(PreconditionError):
            PerfCase(name="", task=Effect.pure(None))

    def test_task_error_propagates(self) -> None:
        """Errors raised by the task propagate from run()."""
        task = Mock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError, match="boom"):
            perf_case("x", task).run(1)


class TestPerfInTestCase:
    """Tests for checking statistics from a test case."""

    def test_mean_within_budget(self) -> None:
        """A perf case can be validated like any other operation."""
        case = (
            should("be fast")
            .given(perf_case("noop", lambda: None))
            .when_effect(lambda perf: perf.run_effect(5))
            .then(lower_than(timedelta(seconds=1)).compose(lambda stats: stats.mean))
        )

        outcome = case.run()

        assert outcome.is_success

    def test_run_count_checked(self) -> None:
        """The total number of runs can be validated too."""
        task = Mock()
        case = (
            should("count runs")
            .given(perf_case("count", task).warmup(1))
            .when(lambda perf: perf.run(4))
            .then(lower_than(timedelta(hours=1)).compose(lambda stats: stats.total))
        )

        assert case.run().is_success
        assert task.call_count == 5

    def test_invalid_run_count_is_an_error(self) -> None:
        """A precondition violation while building the measurement is an Error."""
        case = (
            should("misconfigured")
            .given(perf_case("x", Mock()))
            .when_effect(lambda perf: perf.run_effect(0))
            .then(lower_than(timedelta(seconds=1)).compose(lambda stats: stats.mean))
        )

        outcome = case.run()

        assert isinstance(outcome, Error)
        assert isinstance(outcome.attempt, Raised)
        assert isinstance(outcome.attempt.error, PreconditionError)
