"""Reduction of timing samples into order statistics and throughput."""

import math
from collections.abc import Sequence
from datetime import timedelta

from purecheck.config import StatsConfig
from purecheck.errors import PreconditionError
from purecheck.models.stats import Stats

# Smallest mean used to estimate throughput; timedelta cannot go below it.
CLOCK_RESOLUTION = timedelta(microseconds=1)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (4.5 -> 5)."""
    return math.floor(value + 0.5)


def percentile(rank: float, ordered: Sequence[timedelta]) -> timedelta:
    """Return the nearest-rank percentile of an ascending sample.

    The index is round_half_up(rank / 100 * (count - 1)); no interpolation
    happens between neighbouring samples.
    """
    if not ordered:
        raise PreconditionError("cannot compute a percentile without samples")
    return ordered[round_half_up(rank / 100 * (len(ordered) - 1))]


def median(ordered: Sequence[timedelta]) -> timedelta:
    """Return the median of an ascending sample.

    Even-sized samples average their two center elements.
    """
    if not ordered:
        raise PreconditionError("cannot compute a median without samples")
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) // 2
    return ordered[middle]


def throughput(period: timedelta, mean: timedelta) -> int:
    """Estimate how many operations of the given mean fit in period, rounding down."""
    return period // max(mean, CLOCK_RESOLUTION)


def compute_stats(
    name: str,
    durations: Sequence[timedelta],
    config: StatsConfig | None = None,
) -> Stats:
    """Compute the statistics of a sequence of durations.

    Args:
        name: Name of the measured case
        durations: One duration per timed run, in run order
        config: Percentile ranks and throughput periods to report

    Returns:
        Immutable statistics for the sample

    Raises:
        PreconditionError: If durations is empty

    """
    if not durations:
        raise PreconditionError(f"perf case '{name}' produced no samples")
    config = config or StatsConfig()

    total = sum(durations, timedelta(0))
    mean = total // len(durations)
    ordered = sorted(durations)

    return Stats(
        name=name,
        total=total,
        min=min(durations),
        max=max(durations),
        mean=mean,
        median=median(ordered),
        percentiles={rank: percentile(rank, ordered) for rank in config.percentiles},
        throughput={
            label: throughput(period, mean)
            for label, period in config.throughput_periods.items()
        },
    )
