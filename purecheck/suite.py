"""Test suites: non-empty, ordered collections of test cases."""

import asyncio
import logging
from collections.abc import Sequence
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from purecheck.case import TestCase
from purecheck.config import ParallelConfig
from purecheck.errors import PreconditionError, check_non_empty
from purecheck.models.report import Report
from purecheck.models.result import Outcome
from purecheck.property import PropertyTestCase

log = logging.getLogger(__name__)

type Runnable = TestCase[Any, Any] | PropertyTestCase[Any]


@dataclass(frozen=True, kw_only=True)
class TestSuite:
    """Runs its cases one by one with run(), or all at once with par_run().

    Both strategies produce a report in declaration order.
    """

    __test__ = False

    name: str
    tests: Sequence[Runnable]
    config: ParallelConfig = field(default_factory=ParallelConfig)

    def __post_init__(self) -> None:
        check_non_empty(self.name, "suite name")
        if not self.tests:
            raise PreconditionError(f"suite '{self.name}' needs at least one test")

    def add_all(self, other: "TestSuite") -> "TestSuite":
        """Suite holding the cases of this suite followed by those of other."""
        return TestSuite(
            name=f"{self.name} and {other.name}",
            tests=(*self.tests, *other.tests),
            config=self.config,
        )

    def run(self) -> Report:
        """Run every case sequentially, in declaration order."""
        log.info("Running suite %s (%d test(s))", self.name, len(self.tests))
        return self._report(tuple(test.run() for test in self.tests))

    async def par_run(self, executor: Executor | None = None) -> Report:
        """Run every case concurrently on executor.

        Args:
            executor: Executor running the cases; when omitted a thread pool
                sized by the suite configuration is used for this run only

        Returns:
            Report with the same ordering as run(), whatever the completion
            order of the cases

        """
        log.info(
            "Running suite %s in parallel (%d test(s))", self.name, len(self.tests)
        )
        if executor is not None:
            return self._report(await self._gather(executor))

        with ThreadPoolExecutor(
            max_workers=self.config.max_workers, thread_name_prefix="purecheck"
        ) as pool:
            return self._report(await self._gather(pool))

    async def _gather(self, executor: Executor) -> tuple[Outcome[Any] | Report, ...]:
        """Fan out every case and join the results by index."""
        loop = asyncio.get_running_loop()
        futures = [loop.run_in_executor(executor, test.run) for test in self.tests]
        results = await asyncio.gather(*futures, return_exceptions=True)
        return tuple(_raise_first(self.name, results))

    def _report(self, results: tuple[Outcome[Any] | Report, ...]) -> Report:
        report = Report(name=self.name, results=results)
        log.info("Suite %s completed: %s", self.name, report.summary())
        return report


def _raise_first[R](name: str, results: Sequence[R | BaseException]) -> Sequence[R]:
    """Return results, or raise the first exception after logging every one."""
    errors = [result for result in results if isinstance(result, BaseException)]
    for error in errors:
        log.error("Run of %s raised: %s", name, error, exc_info=error)
    if errors:
        raise errors[0]
    return results  # type: ignore[return-value]


def suite(name: str, test: Runnable, *tests: Runnable) -> TestSuite:
    """Create a suite from one or more cases."""
    return TestSuite(name=name, tests=(test, *tests))
