"""Fan-in synchronization: fire once every expected browser has reported."""

import asyncio
import logging
import threading
from collections.abc import Callable, Sequence
from typing import Literal

from jspec_server.collector import ResultCollector
from jspec_server.models.result import Result

log = logging.getLogger(__name__)

type MonitorState = Literal["waiting", "complete", "cancelled"]
type CompletionCallback = Callable[[Sequence[Result]], object]


class CompletionMonitor:
    """Watches a collector and invokes a callback exactly once on completion.

    The collector signals the monitor after each append, so completion is
    detected without polling. The waiting -> complete transition is a single
    check-and-set under a lock: only the caller that performs the transition
    invokes the callback, no matter how many threads race near the threshold.
    """

    def __init__(
        self,
        collector: ResultCollector,
        expected: int,
        on_complete: CompletionCallback,
    ) -> None:
        if expected < 0:
            raise ValueError(f"expected must be non-negative, got {expected}")
        self._collector = collector
        self._expected = expected
        self._on_complete = on_complete
        self._lock = threading.Lock()
        self._state: MonitorState = "waiting"
        self._waiters: list[tuple[asyncio.AbstractEventLoop, asyncio.Event]] = []
        collector.subscribe(lambda _result: self.check())

    @property
    def state(self) -> MonitorState:
        with self._lock:
            return self._state

    @property
    def expected(self) -> int:
        return self._expected

    def check(self) -> bool:
        """Complete the session if enough results have been collected.

        Returns:
            True only for the call that performed the transition to complete

        """
        with self._lock:
            if self._state != "waiting":
                return False
            if self._collector.count() < self._expected:
                return False
            self._state = "complete"
            waiters = self._take_waiters()

        log.info("All %d expected browser(s) reported", self._expected)
        self._wake(waiters)
        self._on_complete(self._collector.snapshot())
        return True

    def cancel(self) -> bool:
        """Stop waiting without invoking the completion callback.

        Returns:
            True if the monitor was still waiting and is now cancelled

        """
        with self._lock:
            if self._state != "waiting":
                return False
            self._state = "cancelled"
            waiters = self._take_waiters()

        log.info(
            "Completion monitor cancelled with %d of %d result(s)",
            self._collector.count(),
            self._expected,
        )
        self._wake(waiters)
        return True

    async def wait(self, timeout: float | None = None) -> MonitorState:
        """Wait until the monitor reaches a terminal state.

        Args:
            timeout: Maximum wait in seconds, None to wait indefinitely

        Returns:
            The terminal state, "complete" or "cancelled"

        Raises:
            TimeoutError: If no terminal state is reached within timeout

        """
        self.check()

        done = asyncio.Event()
        with self._lock:
            if self._state == "waiting":
                self._waiters.append((asyncio.get_running_loop(), done))
            else:
                done.set()

        try:
            async with asyncio.timeout(timeout):
                await done.wait()
        except TimeoutError:
            raise TimeoutError(
                f"Only {self._collector.count()} of {self._expected} browser(s) "
                f"reported within {timeout} seconds"
            ) from None

        return self.state

    def _take_waiters(self) -> list[tuple[asyncio.AbstractEventLoop, asyncio.Event]]:
        waiters, self._waiters = self._waiters, []
        return waiters

    @staticmethod
    def _wake(waiters: list[tuple[asyncio.AbstractEventLoop, asyncio.Event]]) -> None:
        for loop, event in waiters:
            if not loop.is_closed():
                loop.call_soon_threadsafe(event.set)
