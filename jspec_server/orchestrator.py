"""Launch orchestrator for starting every expected browser."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from jspec_server.browsers import LaunchableBrowser
from jspec_server.launchers.base import BrowserLauncher
from jspec_server.launchers.loading import load_launcher
from jspec_server.models.result import LaunchOutcome

log = logging.getLogger(__name__)


@dataclass(kw_only=True)
class LaunchOrchestrator:
    """Launches browsers independently and keeps track of their processes."""

    launcher_factory: Callable[[str], BrowserLauncher] = load_launcher
    processes: list[asyncio.subprocess.Process] = field(default_factory=list)

    async def launch_all(
        self,
        browsers: Sequence[LaunchableBrowser],
        url: str,
    ) -> Sequence[LaunchOutcome]:
        """Open ``url`` in every browser.

        Args:
            browsers: Browsers to launch, in order
            url: Fully qualified URL of the spec page

        Returns:
            One launch outcome per browser, in the same order

        """
        if not browsers:
            log.info("No browsers to launch")
            return []

        log.info("Running browsers: %s", ", ".join(browsers))
        tasks = [self._launch(browser, url) for browser in browsers]

        results = await asyncio.gather(*tasks, return_exceptions=True)

        return self._process_results(browsers, results)

    async def close(self) -> None:
        """Terminate launched processes that are still running."""
        for process in self.processes:
            if process.returncode is None:
                try:
                    process.terminate()
                except ProcessLookupError:
                    continue
                await process.wait()
        self.processes.clear()

    def _process_results(
        self,
        browsers: Sequence[LaunchableBrowser],
        results: Sequence[asyncio.subprocess.Process | BaseException],
    ) -> Sequence[LaunchOutcome]:
        """Convert launch results to outcomes, logging failures."""
        outcomes: list[LaunchOutcome] = []

        for browser, result in zip(browsers, results, strict=True):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                log.error("Browser launch failed: %s", result, exc_info=result)
                outcomes.append(
                    LaunchOutcome(browser=browser, status="error", message=str(result))
                )
            else:
                self.processes.append(result)
                outcomes.append(LaunchOutcome(browser=browser, status="launched"))

        return outcomes

    async def _launch(
        self, browser: LaunchableBrowser, url: str
    ) -> asyncio.subprocess.Process:
        launcher = self.launcher_factory(browser)
        return await launcher.launch(url)
