"""Models for reported browser results and session outcomes."""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from jspec_server.browsers import BrowserTag


@dataclass(frozen=True, kw_only=True)
class Result:
    """One browser's reported assertion counts.

    ``order`` is the arrival position assigned by the collector.
    """

    browser: BrowserTag
    failures: int
    passes: int
    order: int

    @property
    def passed(self) -> bool:
        """Whether the browser reported no failed assertions."""
        return self.failures == 0


@dataclass(frozen=True, kw_only=True)
class LaunchOutcome:
    """Result of attempting to launch a single browser."""

    browser: BrowserTag
    status: Literal["launched", "error"]
    message: str | None = None


type SessionStatus = Literal["complete", "timeout", "cancelled"]


@dataclass(frozen=True, kw_only=True)
class SessionOutcome:
    """Final state of a coordination run."""

    status: SessionStatus
    expected: Sequence[BrowserTag]
    results: Sequence[Result]

    @property
    def missing(self) -> Sequence[BrowserTag]:
        """Expected browsers that have no matching result, in expected order."""
        reported = Counter(result.browser for result in self.results)
        missing: list[BrowserTag] = []
        for browser in self.expected:
            if reported[browser] > 0:
                reported[browser] -= 1
            else:
                missing.append(browser)
        return missing

    @property
    def has_failures(self) -> bool:
        return any(not result.passed for result in self.results)
