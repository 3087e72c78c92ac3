"""Launchers for the supported browsers, registered as entry points."""

from jspec_server.launchers.command import CommandLauncher

safari = CommandLauncher(
    browser="Safari",
    commands={
        "darwin": ["open", "-g", "-a", "Safari"],
    },
)

opera = CommandLauncher(
    browser="Opera",
    commands={
        "darwin": ["open", "-g", "-a", "Opera"],
        "linux": ["opera"],
        "win32": ["cmd", "/c", "start", "", "opera"],
    },
)

chrome = CommandLauncher(
    browser="Chrome",
    commands={
        "darwin": ["open", "-g", "-a", "Google Chrome"],
        "linux": ["google-chrome"],
        "win32": ["cmd", "/c", "start", "", "chrome"],
    },
)

firefox = CommandLauncher(
    browser="Firefox",
    commands={
        "darwin": ["open", "-g", "-a", "Firefox"],
        "linux": ["firefox"],
        "win32": ["cmd", "/c", "start", "", "firefox"],
    },
)

internet_explorer = CommandLauncher(
    browser="InternetExplorer",
    commands={
        "win32": ["cmd", "/c", "start", "", "iexplore"],
    },
)
