"""
structeq.adapters — Thin glue between the engine and a test host.

    • side_by_side(reporter, what, want, got)
          marks a failure (or logs a match) and logs the side-by-side
          report through two sinks: reporter.error and reporter.log.

    • assert_equal(want, got)
          raises AssertionError carrying the same report, for pytest.

    • EqMatcher(expected)
          an argument matcher for unittest.mock:

              mock.assert_called_once_with(EqMatcher(expected_request))
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from .core import equal
from .sidebyside import side_by_side_text


class Reporter(Protocol):
    """The two sinks the engine needs from a test framework."""

    def log(self, *args: Any) -> None: ...

    def error(self, *args: Any) -> None: ...


@dataclass
class LoggingReporter:
    """A Reporter writing to a logger and remembering failures."""
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("structeq.report"))
    failed: bool = False

    def log(self, *args: Any) -> None:
        self.logger.info(" ".join(str(a) for a in args))

    def error(self, *args: Any) -> None:
        self.failed = True
        self.logger.error(" ".join(str(a) for a in args))


def side_by_side(reporter: Reporter, what: str, want: Any, got: Any) -> bool:
    """
    Report want vs got side by side.

    Returns whether the two values are equal.
    """
    matched = equal(want, got)
    if matched:
        reporter.log("a match for expected and actual values of", what)
    else:
        reporter.error("mismatched expected and actual values of", what)
    reporter.log("\n" + side_by_side_text(want, got))
    return matched


def assert_equal(want: Any, got: Any, what: str = "value") -> None:
    """Assert deep equality, failing with a side-by-side report."""
    if equal(want, got):
        return
    raise AssertionError(
        f"mismatched expected and actual values of {what}\n"
        f"{side_by_side_text(want, got)}"
    )


class EqMatcher:
    """
    Matches candidates deeply equal to an expected value.

    The candidate must be of exactly the expected value's type before deep
    equality decides; an instance of a subclass never matches.
    """
    __slots__ = ("expected",)

    def __init__(self, expected: Any):
        self.expected = expected

    def matches(self, candidate: Any) -> bool:
        if self.expected is None or candidate is None:
            return equal(self.expected, candidate)
        if type(self.expected) is not type(candidate):
            return False
        return equal(self.expected, candidate)

    def __eq__(self, other: object) -> bool:
        return self.matches(other)

    def __ne__(self, other: object) -> bool:
        return not self.matches(other)

    __hash__ = None

    def __repr__(self) -> str:
        return repr(self.expected)

    def __str__(self) -> str:
        return str(self.expected)
