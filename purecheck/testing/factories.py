"""Test factories for generating test data."""

from datetime import timedelta

from polyfactory import Use
from polyfactory.factories import DataclassFactory
from polyfactory.factories.pydantic_factory import ModelFactory

from purecheck.config import DEFAULT_PERCENTILES
from purecheck.location import SourceLocation
from purecheck.models.stats import Stats


class SourceLocationFactory(DataclassFactory[SourceLocation]):
    """Factory for SourceLocation."""

    __model__ = SourceLocation


class StatsFactory(ModelFactory[Stats]):
    """Factory for Stats."""

    __model__ = Stats

    percentiles = Use(
        lambda: {rank: timedelta(milliseconds=rank) for rank in DEFAULT_PERCENTILES}
    )
    throughput = Use(lambda: {"1s": 1000, "1min": 60000})
