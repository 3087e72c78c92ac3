"""Thread-safe accumulation of reported browser results."""

import logging
import threading
from collections.abc import Callable, Sequence
from typing import Any

from jspec_server.browsers import BrowserTag
from jspec_server.models.result import Result

log = logging.getLogger(__name__)

type ResultCallback = Callable[[Result], object]


def parse_count(value: Any) -> int:
    """Parse a reported assertion count, treating anything malformed as zero."""
    if value is None:
        return 0
    try:
        count = int(str(value).strip())
    except ValueError:
        log.warning("Malformed assertion count %r, recording 0", value)
        return 0
    return max(count, 0)


class ResultCollector:
    """Accumulates results in arrival order.

    Duplicate reports from the same browser are recorded as separate results
    and counted individually. All access to the record list goes through one
    lock, held only for the duration of a single append or read.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[Result] = []
        self._subscribers: list[ResultCallback] = []

    def submit(self, browser: BrowserTag, failures: int, passes: int) -> Result:
        """Record one result and notify subscribers.

        Args:
            browser: Tag of the reporting browser
            failures: Number of failed assertions
            passes: Number of passed assertions

        Returns:
            The recorded result, including its arrival order

        """
        with self._lock:
            result = Result(
                browser=browser,
                failures=max(failures, 0),
                passes=max(passes, 0),
                order=len(self._records),
            )
            self._records.append(result)
            subscribers = tuple(self._subscribers)

        log.debug("Recorded result #%d from %s", result.order, browser)

        for callback in subscribers:
            try:
                callback(result)
            except Exception:
                # The result is already recorded; the report must still succeed
                log.exception("Result subscriber %r failed", callback)

        return result

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def snapshot(self) -> Sequence[Result]:
        """Return the recorded results in arrival order."""
        with self._lock:
            return tuple(self._records)

    def subscribe(self, callback: ResultCallback) -> None:
        """Call ``callback`` with every result recorded from now on."""
        with self._lock:
            self._subscribers.append(callback)
