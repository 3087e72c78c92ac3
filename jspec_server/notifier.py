"""Desktop notifications for reported results."""

import asyncio
import contextlib
import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from jspec_server.models.result import Result

log = logging.getLogger(__name__)


def notification_message(result: Result) -> str:
    """Summarise a result the way it is shown in a notification body."""
    if result.failures:
        return f"failed {result.failures} assertions"
    return f"passed {result.passes} assertions"


class Notifier(ABC):
    """Best-effort sink for per-result notifications."""

    @abstractmethod
    async def notify(self, result: Result) -> None:
        """Announce a single result. May raise; callers ignore failures."""


class NullNotifier(Notifier):
    """Notifier that discards everything."""

    async def notify(self, result: Result) -> None:
        return None


@dataclass(frozen=True, kw_only=True)
class DesktopNotifier(Notifier):
    """Notifier backed by the platform's notification command.

    Uses ``osascript`` on macOS and ``notify-send`` everywhere else.
    """

    platform: str = sys.platform
    timeout: float = 5.0

    def command(self, result: Result) -> Sequence[str]:
        title = result.browser
        message = notification_message(result)
        if self.platform.startswith("darwin"):
            script = (
                f"display notification {_applescript_string(message)} "
                f"with title {_applescript_string(title)}"
            )
            return ["osascript", "-e", script]
        return ["notify-send", title, message]

    async def notify(self, result: Result) -> None:
        process = await asyncio.create_subprocess_exec(
            *self.command(result),
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            async with asyncio.timeout(self.timeout):
                _, stderr = await process.communicate()
        finally:
            if process.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
                await process.wait()

        if process.returncode != 0:
            raise RuntimeError(
                f"Notification command failed: {stderr.decode().strip()}"
            )


async def notify_safely(notifier: Notifier, result: Result) -> None:
    """Deliver a notification, ignoring every failure.

    Notifications are purely informational: an unavailable notification
    subsystem must never affect result collection or the HTTP response.
    """
    try:
        await notifier.notify(result)
    except Exception as exc:  # noqa: BLE001
        log.debug("Ignoring notification failure for %s: %s", result.browser, exc)


def _applescript_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
