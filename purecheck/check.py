"""Aggregation of several suites into a single report."""

import asyncio
import logging
from collections.abc import Sequence
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field

from purecheck.config import ParallelConfig
from purecheck.errors import PreconditionError, check_non_empty
from purecheck.models.report import Report
from purecheck.suite import TestSuite

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class PureCheck:
    """A named, non-empty collection of suites."""

    name: str
    suites: Sequence[TestSuite]
    config: ParallelConfig = field(default_factory=ParallelConfig)

    def __post_init__(self) -> None:
        check_non_empty(self.name, "check name")
        if not self.suites:
            raise PreconditionError(f"check '{self.name}' needs at least one suite")

    def run(self) -> Report:
        """Run every suite sequentially."""
        log.info("Running %s (%d suite(s))", self.name, len(self.suites))
        return Report(name=self.name, results=tuple(s.run() for s in self.suites))

    async def par_run(self, executor: Executor | None = None) -> Report:
        """Run every suite, and every case within them, concurrently.

        All suites share executor, or a single thread pool created for this
        run when it is omitted.
        """
        log.info("Running %s in parallel (%d suite(s))", self.name, len(self.suites))
        if executor is not None:
            return await self._gather(executor)

        with ThreadPoolExecutor(
            max_workers=self.config.max_workers, thread_name_prefix="purecheck"
        ) as pool:
            return await self._gather(pool)

    async def _gather(self, executor: Executor) -> Report:
        reports = await asyncio.gather(
            *(s.par_run(executor) for s in self.suites), return_exceptions=True
        )
        for report in reports:
            # Suites log the errors of their own cases.
            if isinstance(report, BaseException):
                raise report
        return Report(name=self.name, results=tuple(reports))


def pure_check(name: str, suite: TestSuite, *suites: TestSuite) -> PureCheck:
    """Create a check from one or more suites."""
    return PureCheck(name=name, suites=(suite, *suites))
