"""Browser launcher plugins."""

from jspec_server.launchers.base import BrowserLauncher, LaunchError
from jspec_server.launchers.command import CommandLauncher
from jspec_server.launchers.loading import LauncherNotFoundError, load_launcher

__all__ = [
    "BrowserLauncher",
    "CommandLauncher",
    "LaunchError",
    "LauncherNotFoundError",
    "load_launcher",
]
