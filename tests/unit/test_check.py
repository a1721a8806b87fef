"""Tests for PureCheck."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from purecheck.case import should
from purecheck.check import PureCheck, pure_check
from purecheck.errors import PreconditionError
from purecheck.models.report import Report
from purecheck.suite import suite
from purecheck.validation import equals_to

FIRST = suite(
    "first",
    should("one").given(1).noop().then(equals_to(1)),
    should("two").given(2).noop().then(equals_to(3)),
)
SECOND = suite("second", should("three").given(3).noop().then(equals_to(3)))


class TestPureCheck:
    """Tests for PureCheck."""

    def test_run_nests_suite_reports(self) -> None:
        """Each suite contributes a nested report, in order."""
        report = pure_check("all", FIRST, SECOND).run()

        assert report.name == "all"
        assert [r.name for r in report.results] == ["first", "second"]
        assert all(isinstance(r, Report) for r in report.results)
        assert [o.name for o in report.outcomes()] == ["one", "two", "three"]
        assert report.summary()["failed"] == 1

    async def test_par_run_matches_run(self) -> None:
        """Parallel and sequential reports render identically."""
        check = pure_check("all", FIRST, SECOND)

        assert str(await check.par_run()) == str(check.run())

    async def test_par_run_with_executor(self) -> None:
        """Every suite shares the given executor."""
        with ThreadPoolExecutor(max_workers=2) as executor:
            report = await pure_check("all", FIRST, SECOND).par_run(executor)

        assert [o.name for o in report.outcomes()] == ["one", "two", "three"]

    def test_no_suites(self) -> None:
        """Raises PreconditionError without suites."""
        with pytest.raises(PreconditionError, match="at least one suite"):
            PureCheck(name="none", suites=())

    def test_empty_name(self) -> None:
        """Raises PreconditionError for an empty name."""
        with pytest.raises(PreconditionError, match="check name"):
            pure_check("", FIRST)
