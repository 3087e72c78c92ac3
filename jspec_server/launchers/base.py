"""Abstract base class for browser launchers."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from jspec_server.browsers import LaunchableBrowser

log = logging.getLogger(__name__)


class LaunchError(Exception):
    """Raised when a browser process cannot be started."""

    def __init__(self, browser: str, reason: str) -> None:
        super().__init__(f"Failed to launch {browser}: {reason}")
        self.browser = browser
        self.reason = reason


@dataclass(frozen=True, kw_only=True)
class BrowserLauncher(ABC):
    """Abstract base for launchers that open a URL in one browser family."""

    browser: LaunchableBrowser

    @abstractmethod
    def command(self, url: str) -> Sequence[str]:
        """Build the command line that opens ``url`` in this browser.

        Args:
            url: Fully qualified URL of the spec page

        Returns:
            Program and arguments to execute

        Raises:
            LaunchError: If the browser cannot be launched on this platform

        """

    async def launch(self, url: str) -> asyncio.subprocess.Process:
        """Start the browser process pointed at ``url``.

        The process is not awaited: some browsers keep running until the
        session ends, others hand the URL over to an existing instance and
        exit immediately.

        Raises:
            LaunchError: If the process cannot be spawned

        """
        argv = self.command(url)
        log.info("Launching %s: %s", self.browser, " ".join(argv))

        try:
            return await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as exc:
            raise LaunchError(self.browser, str(exc)) from exc
