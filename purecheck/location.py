"""Capture of the source location where a test case is defined."""

import sys
from dataclasses import dataclass
from types import FrameType

_PACKAGE = __name__.partition(".")[0]


@dataclass(frozen=True, kw_only=True)
class SourceLocation:
    """File, line and function of a test definition."""

    filename: str
    lineno: int
    function: str

    def __str__(self) -> str:
        return f"{self.filename}:{self.lineno}"


UNKNOWN_LOCATION = SourceLocation(filename="<unknown>", lineno=0, function="<unknown>")


def _is_internal(frame: FrameType) -> bool:
    module = frame.f_globals.get("__name__", "")
    return module == _PACKAGE or module.startswith(f"{_PACKAGE}.")


def capture_location() -> SourceLocation:
    """Return the location of the nearest caller outside this package.

    Called by the builder when a case is finalised, so reports point at the
    line that declared the expectation rather than at the runner.
    """
    frame: FrameType | None = sys._getframe(1)
    while frame is not None and _is_internal(frame):
        frame = frame.f_back
    if frame is None:
        return UNKNOWN_LOCATION
    return SourceLocation(
        filename=frame.f_code.co_filename,
        lineno=frame.f_lineno,
        function=frame.f_code.co_name,
    )
