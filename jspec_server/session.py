"""A single coordination run: serve, launch, and wait for every browser."""

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from aiohttp import web
from yarl import URL

from jspec_server.collector import ResultCollector
from jspec_server.dispatcher import create_app
from jspec_server.models.config import ServerConfig
from jspec_server.models.result import Result, SessionOutcome, SessionStatus
from jspec_server.monitor import CompletionMonitor
from jspec_server.notifier import DesktopNotifier, Notifier, NullNotifier
from jspec_server.orchestrator import LaunchOrchestrator

log = logging.getLogger(__name__)


@dataclass(kw_only=True)
class Session:
    """Coordination session wiring listener, launches, and completion."""

    config: ServerConfig
    orchestrator: LaunchOrchestrator = field(default_factory=LaunchOrchestrator)
    notifier: Notifier = field(default_factory=NullNotifier)
    collector: ResultCollector = field(default_factory=ResultCollector)
    monitor: CompletionMonitor = field(init=False)
    url: URL | None = field(default=None, init=False)

    @classmethod
    def from_config(cls, config: ServerConfig) -> "Session":
        """Create a session with the notifier selected by the configuration."""
        notifier = DesktopNotifier() if config.notify else NullNotifier()
        return cls(config=config, notifier=notifier)

    def __post_init__(self) -> None:
        self.monitor = CompletionMonitor(
            self.collector, len(self.config.browsers), self._on_complete
        )

    async def run(self) -> SessionOutcome:
        """Run the session until completion, deadline, or shutdown.

        Raises:
            OSError: If the listener cannot bind to the configured address

        """
        app = create_app(self.config, self.collector, self.notifier)
        runner = web.AppRunner(app, access_log=None)
        await runner.setup()
        launch_task: asyncio.Task[None] | None = None

        try:
            site = web.TCPSite(runner, self.config.host, self.config.port)
            await site.start()

            self.url = self.page_url(runner)
            log.info("JSpec server started on %s", self.url.origin())

            if self.config.server_only:
                log.info("Server only mode, open %s to run the specs", self.url)
            else:
                launch_task = asyncio.create_task(self._launch(str(self.url)))

            try:
                state = await self.monitor.wait(self.config.deadline)
            except TimeoutError as exc:
                log.error("%s", exc)
                return self._outcome("timeout")

            return self._outcome("complete" if state == "complete" else "cancelled")
        finally:
            self.monitor.cancel()
            if launch_task is not None:
                launch_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await launch_task
            await self.orchestrator.close()
            await runner.cleanup()

    def shutdown(self) -> None:
        """Stop waiting for results without firing completion."""
        self.monitor.cancel()

    def page_url(self, runner: web.AppRunner) -> URL:
        """Build the spec page URL from the bound listener address.

        A fixed port is shared by every address the host name resolves to, so
        the configured host is kept. An ephemeral port may differ per address
        family, so the URL then names the first bound address literally.
        """
        host, port = runner.addresses[0][:2]
        if self.config.port:
            host = self.config.host
        return URL.build(
            scheme="http", host=host, port=port, path=self.config.spec_path
        )

    async def _launch(self, url: str) -> None:
        if self.config.startup_delay:
            await asyncio.sleep(self.config.startup_delay)
        await self.orchestrator.launch_all(self.config.browsers, url)

    def _on_complete(self, results: Sequence[Result]) -> None:
        log.info("Session complete with %d result(s)", len(results))

    def _outcome(self, status: SessionStatus) -> SessionOutcome:
        return SessionOutcome(
            status=status,
            expected=tuple(self.config.browsers),
            results=self.collector.snapshot(),
        )
