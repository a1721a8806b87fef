"""Models for the statistics of a performance measurement."""

from collections.abc import Mapping
from datetime import timedelta

from pydantic import Field

from purecheck.models.base import Model


class Stats(Model):
    """Order statistics and throughput of a sequence of timed runs."""

    name: str = Field(..., min_length=1, description="Name of the measured case")
    total: timedelta = Field(..., description="Sum of every sample")
    min: timedelta = Field(..., description="Fastest sample")
    max: timedelta = Field(..., description="Slowest sample")
    mean: timedelta = Field(..., description="Total divided by the sample count")
    median: timedelta = Field(..., description="Middle of the sorted samples")
    percentiles: Mapping[int, timedelta] = Field(
        ..., description="Nearest-rank percentile by rank (0-100)"
    )
    throughput: Mapping[str, int] = Field(
        ..., description="Estimated operations per period, keyed by period label"
    )

    def percentile(self, rank: int) -> timedelta:
        """Return the percentile computed for rank.

        Raises:
            KeyError: If rank was not part of the configured percentiles

        """
        return self.percentiles[rank]

    @property
    def p50(self) -> timedelta:
        return self.percentile(50)

    @property
    def p90(self) -> timedelta:
        return self.percentile(90)

    @property
    def p95(self) -> timedelta:
        return self.percentile(95)

    @property
    def p99(self) -> timedelta:
        return self.percentile(99)

    def __hash__(self) -> int:
        return hash(
            (
                self.name,
                self.total,
                self.min,
                self.max,
                self.mean,
                self.median,
                tuple(sorted(self.percentiles.items())),
                tuple(sorted(self.throughput.items())),
            )
        )

    def __str__(self) -> str:
        percentiles = ",".join(
            f"p{rank}={value}" for rank, value in sorted(self.percentiles.items())
        )
        throughput = ",".join(
            f"{label}={ops}" for label, ops in self.throughput.items()
        )
        return (
            f"Stats[name={self.name},total={self.total},min={self.min},"
            f"max={self.max},mean={self.mean},median={self.median},"
            f"{percentiles},throughput({throughput})]"
        )
