"""Models for the ordered report of a suite run."""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from purecheck.effect import Raised
from purecheck.errors import ReportAssertionError, check_non_empty
from purecheck.models.result import Error, Failure, Outcome

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Report:
    """Outcomes, or nested reports, in declaration order."""

    name: str
    results: Sequence["Outcome[Any] | Report"]

    def __post_init__(self) -> None:
        check_non_empty(self.name, "report name")

    def outcomes(self) -> Iterator[Outcome[Any]]:
        """Iterate over every outcome, flattening nested reports."""
        for result in self.results:
            if isinstance(result, Report):
                yield from result.outcomes()
            else:
                yield result

    def failures(self) -> Sequence[Failure[Any] | Error[Any]]:
        """Return the outcomes that did not pass, in order."""
        return [
            outcome
            for outcome in self.outcomes()
            if isinstance(outcome, Failure | Error)
        ]

    @property
    def is_successful(self) -> bool:
        return not self.failures()

    def summary(self) -> dict[str, int]:
        """Count outcomes by status."""
        outcomes = list(self.outcomes())
        return {
            "total": len(outcomes),
            "passed": sum(1 for o in outcomes if o.is_success),
            "failed": sum(1 for o in outcomes if o.is_failure),
            "errors": sum(1 for o in outcomes if o.is_error),
            "disabled": sum(1 for o in outcomes if o.is_disabled),
        }

    def assertion(self) -> None:
        """Raise if any outcome is a Failure or an Error.

        The whole report is logged before raising, so passing and disabled
        tests stay visible next to the ones that broke the run.

        Raises:
            ReportAssertionError: Listing every outcome that did not pass

        """
        failures = self.failures()
        if not failures:
            return

        log.error("%s", self)
        lines = "\n".join(f"  - {outcome}" for outcome in failures)
        cause = next(
            (
                outcome.attempt.error
                for outcome in failures
                if isinstance(outcome, Error) and isinstance(outcome.attempt, Raised)
            ),
            None,
        )
        raise ReportAssertionError(
            f"{len(failures)} test(s) did not pass in '{self.name}':\n{lines}",
            report=self,
        ) from cause

    def _lines(self) -> list[str]:
        lines = [f"{self.name} {{"]
        for result in self.results:
            if isinstance(result, Report):
                first, *rest = result._lines()
                lines.append(f"  - {first}")
                lines.extend(f"    {line}" for line in rest)
            else:
                lines.append(f"  - {result}")
        lines.append("}")
        return lines

    def __str__(self) -> str:
        return "\n".join(self._lines())
