"""Test cases that run repeatedly and report every outcome."""

from dataclasses import dataclass, field, replace

from purecheck.effect import Effect
from purecheck.errors import check_non_empty
from purecheck.models.report import Report
from purecheck.models.result import Disabled, Outcome


@dataclass(frozen=True, kw_only=True)
class PropertyTestCase[T]:
    """A case repeated over fresh inputs, yielding a report of all its runs."""

    name: str
    test: Effect[list[Outcome[T]]] = field(repr=False)
    disabled_reason: str | None = None

    def __post_init__(self) -> None:
        check_non_empty(self.name, "test name")

    @property
    def is_disabled(self) -> bool:
        return self.disabled_reason is not None

    def run_effect(self) -> Effect[Report]:
        """Describe a run without executing it."""
        if self.disabled_reason is not None:
            disabled = Disabled(name=self.name, reason=self.disabled_reason)
            return Effect.pure(Report(name=self.name, results=(disabled,)))
        return self.test.map(
            lambda outcomes: Report(name=self.name, results=tuple(outcomes))
        )

    def run(self) -> Report:
        """Run every repetition and return their outcomes in order."""
        return self.run_effect().run()

    def disable(self, reason: str) -> "PropertyTestCase[T]":
        """Property case that never runs."""
        if self.is_disabled:
            return self
        return replace(self, disabled_reason=check_non_empty(reason, "reason"))
