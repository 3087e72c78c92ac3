"""Launcher that runs a per-platform command line."""

import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from jspec_server.launchers.base import BrowserLauncher, LaunchError


@dataclass(frozen=True, kw_only=True)
class CommandLauncher(BrowserLauncher):
    """Launches a browser by appending the URL to a platform specific command.

    ``commands`` is keyed by ``sys.platform`` prefix ("darwin", "linux",
    "win32"); the first key the current platform starts with is used.
    """

    commands: Mapping[str, Sequence[str]]
    platform: str = field(default=sys.platform, compare=False)

    def command(self, url: str) -> Sequence[str]:
        for prefix, argv in self.commands.items():
            if self.platform.startswith(prefix):
                return [*argv, url]
        raise LaunchError(self.browser, f"unsupported platform '{self.platform}'")
