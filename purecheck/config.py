"""Configuration for statistics and parallel execution."""

from collections.abc import Mapping
from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PERCENTILES = (50, 90, 95, 99)


def _default_periods() -> dict[str, timedelta]:
    return {"1s": timedelta(seconds=1), "1min": timedelta(minutes=1)}


class StatsConfig(BaseModel):
    """Configuration for the statistics computed by a PerfCase."""

    model_config = ConfigDict(frozen=True)

    percentiles: tuple[int, ...] = Field(
        default=DEFAULT_PERCENTILES,
        description="Percentile ranks to report (0-100)",
    )
    throughput_periods: Mapping[str, timedelta] = Field(
        default_factory=_default_periods,
        description="Periods over which to estimate throughput, keyed by label",
    )

    @field_validator("percentiles")
    @classmethod
    def _check_percentiles(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        for rank in value:
            if not 0 <= rank <= 100:
                raise ValueError(f"percentile rank must be within 0-100, got {rank}")
        return value

    @field_validator("throughput_periods")
    @classmethod
    def _check_periods(cls, value: Mapping[str, timedelta]) -> Mapping[str, timedelta]:
        for label, period in value.items():
            if period <= timedelta(0):
                raise ValueError(f"throughput period {label!r} must be positive")
        return value


class ParallelConfig(BaseModel):
    """Configuration for running suites in parallel."""

    model_config = ConfigDict(frozen=True)

    max_workers: int | None = Field(
        default=None,
        gt=0,
        description="Worker threads for the default executor (None lets it decide)",
    )
