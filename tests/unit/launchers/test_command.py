"""Tests for CommandLauncher."""

import pytest

from jspec_server.launchers.base import LaunchError
from jspec_server.launchers.builtin import firefox, internet_explorer, safari
from jspec_server.launchers.command import CommandLauncher

URL = "http://localhost:4444/index.html"


@pytest.fixture
def launcher() -> CommandLauncher:
    """Create a launcher with commands for two platforms."""
    return CommandLauncher(
        browser="Firefox",
        commands={"darwin": ["open", "-a", "Firefox"], "linux": ["firefox"]},
        platform="linux",
    )


def test_command_appends_url(launcher: CommandLauncher) -> None:
    """Appends the URL to the platform command."""
    assert launcher.command(URL) == ["firefox", URL]


def test_command_matches_platform_prefix() -> None:
    """Selects the command whose key prefixes the platform name."""
    launcher = CommandLauncher(
        browser="Chrome",
        commands={"linux": ["google-chrome"]},
        platform="linux2",
    )

    assert launcher.command(URL) == ["google-chrome", URL]


def test_command_raises_for_unsupported_platform(launcher: CommandLauncher) -> None:
    """Raises LaunchError when no command exists for the platform."""
    unsupported = CommandLauncher(
        browser="Firefox", commands=launcher.commands, platform="sunos5"
    )

    with pytest.raises(LaunchError, match="unsupported platform 'sunos5'"):
        unsupported.command(URL)


async def test_launch_propagates_unsupported_platform() -> None:
    """Launching on an unsupported platform raises before spawning."""
    launcher = CommandLauncher(
        browser="InternetExplorer",
        commands=internet_explorer.commands,
        platform="linux",
    )

    with pytest.raises(LaunchError):
        await launcher.launch(URL)


def test_builtin_launchers_cover_macos() -> None:
    """Built-in Safari and Firefox launchers open the app on macOS."""
    mac_safari = CommandLauncher(
        browser="Safari", commands=safari.commands, platform="darwin"
    )
    mac_firefox = CommandLauncher(
        browser="Firefox", commands=firefox.commands, platform="darwin"
    )

    assert mac_safari.command(URL) == ["open", "-g", "-a", "Safari", URL]
    assert mac_firefox.command(URL) == ["open", "-g", "-a", "Firefox", URL]
