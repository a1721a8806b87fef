"""Tests for Report."""

import logging

import pytest

from purecheck.effect import Raised, Value
from purecheck.errors import PreconditionError, ReportAssertionError
from purecheck.location import SourceLocation
from purecheck.models.report import Report
from purecheck.models.result import Disabled, Error, Failure, Success
from purecheck.validation import Rejection

LOCATION = SourceLocation(filename="test_math.py", lineno=3, function="test_it")
CAUSE = RuntimeError("boom")

PASSED = Success(name="2+2=4", given=2, attempt=Value(4))
FAILED = Failure(
    name="off-by-one",
    given=2,
    location=LOCATION,
    attempt=Value(4),
    rejection=Rejection(("equal to 5",)),
)
ERRORED = Error(name="raises", location=LOCATION, attempt=Raised(CAUSE))
SKIPPED = Disabled(name="later", reason="todo")


def test_str() -> None:
    """Renders one line per outcome between braces."""
    report = Report(name="math", results=(PASSED, SKIPPED))

    assert str(report) == (
        "math {\n"
        "  - test '2+2=4' SUCCESS: '4'\n"
        "  - test 'later' DISABLED: todo\n"
        "}"
    )


def test_str_nested() -> None:
    """Nested reports are indented under their parent."""
    nested = Report(name="repeat", results=(PASSED, PASSED))
    report = Report(name="math", results=(SKIPPED, nested))

    assert str(report) == (
        "math {\n"
        "  - test 'later' DISABLED: todo\n"
        "  - repeat {\n"
        "      - test '2+2=4' SUCCESS: '4'\n"
        "      - test '2+2=4' SUCCESS: '4'\n"
        "    }\n"
        "}"
    )


def test_outcomes_flatten_nested_reports() -> None:
    """outcomes() yields nested outcomes in place."""
    nested = Report(name="repeat", results=(FAILED, PASSED))
    report = Report(name="math", results=(PASSED, nested, ERRORED))

    assert list(report.outcomes()) == [PASSED, FAILED, PASSED, ERRORED]
    assert report.failures() == [FAILED, ERRORED]


def test_summary() -> None:
    """Counts outcomes by status."""
    report = Report(name="math", results=(PASSED, FAILED, ERRORED, SKIPPED, PASSED))

    assert report.summary() == {
        "total": 5,
        "passed": 2,
        "failed": 1,
        "errors": 1,
        "disabled": 1,
    }


def test_assertion_passes() -> None:
    """Successful and disabled outcomes never raise."""
    report = Report(name="math", results=(PASSED, SKIPPED))

    assert report.is_successful
    report.assertion()


def test_assertion_lists_every_failure(caplog: pytest.LogCaptureFixture) -> None:
    """Raises naming every case that did not pass and logs the whole report."""
    report = Report(name="math", results=(PASSED, FAILED, ERRORED))

    with caplog.at_level(logging.ERROR), pytest.raises(ReportAssertionError) as info:
        report.assertion()

    message = str(info.value)
    assert message.startswith("2 test(s) did not pass in 'math':")
    assert "off-by-one" in message
    assert "raises" in message
    assert "2+2=4" not in message
    assert info.value.report is report
    assert info.value.__cause__ is CAUSE
    assert "test '2+2=4' SUCCESS" in caplog.text


def test_assertion_without_raised_error() -> None:
    """Only failures leave the exception without a cause."""
    report = Report(name="math", results=(FAILED,))

    with pytest.raises(ReportAssertionError) as info:
        report.assertion()

    assert info.value.__cause__ is None
    assert isinstance(info.value, AssertionError)


def test_empty_name() -> None:
    """Raises PreconditionError for an empty name."""
    with pytest.raises(PreconditionError):
        Report(name="", results=())
