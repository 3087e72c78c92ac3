"""Resolution of browser tags to launchers registered as entry points."""

from importlib.metadata import entry_points

from jspec_server.browsers import LAUNCHABLE_BROWSERS
from jspec_server.launchers.base import BrowserLauncher

ENTRY_POINT_GROUP = "jspec_server.launchers"


class LauncherNotFoundError(Exception):
    """Raised when a browser tag has no usable launcher."""


def load_launcher(browser: str) -> BrowserLauncher:
    """Load the launcher for a launchable browser tag.

    Third-party packages may replace or add platform commands by registering
    a ``BrowserLauncher`` under the tag's name in the entry point group.

    Args:
        browser: A launchable browser tag (e.g., "Firefox", "InternetExplorer")

    Returns:
        The launcher instance for that browser

    Raises:
        LauncherNotFoundError: If the tag cannot be launched, nothing is
            registered for it, or the registered object launches another browser

    """
    if browser not in LAUNCHABLE_BROWSERS:
        raise LauncherNotFoundError(
            f"'{browser}' cannot be launched. "
            f"Launchable browsers: {', '.join(LAUNCHABLE_BROWSERS)}"
        )

    matches = entry_points(group=ENTRY_POINT_GROUP, name=browser)
    if not matches:
        raise LauncherNotFoundError(
            f"No launcher registered for {browser} "
            f"in entry point group '{ENTRY_POINT_GROUP}'"
        )

    entry = next(iter(matches))
    launcher = entry.load()
    if not isinstance(launcher, BrowserLauncher) or launcher.browser != browser:
        raise LauncherNotFoundError(
            f"Entry point '{entry.value}' is not a launcher for {browser}"
        )

    return launcher
