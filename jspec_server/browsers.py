"""Classify browser identity strings into canonical browser tags."""

import re
from collections.abc import Mapping, Sequence
from typing import Literal, get_args

type BrowserTag = Literal[
    "Safari",
    "Opera",
    "Chrome",
    "Firefox",
    "InternetExplorer",
    "Unknown",
]

type LaunchableBrowser = Literal[
    "Safari",
    "Opera",
    "Chrome",
    "Firefox",
    "InternetExplorer",
]

LAUNCHABLE_BROWSERS: Sequence[LaunchableBrowser] = get_args(LaunchableBrowser.__value__)

# Evaluated top to bottom, first match wins. Chrome and Opera user agents also
# carry a "Safari" token, so they classify as Safari.
BROWSER_RULES: Sequence[tuple[re.Pattern[str], BrowserTag]] = (
    (re.compile(r"safari", re.IGNORECASE), "Safari"),
    (re.compile(r"opera|opr/", re.IGNORECASE), "Opera"),
    (re.compile(r"chrome|google", re.IGNORECASE), "Chrome"),
    (re.compile(r"firefox", re.IGNORECASE), "Firefox"),
    (re.compile(r"msie|trident|microsoft", re.IGNORECASE), "InternetExplorer"),
)

BROWSER_ALIASES: Mapping[str, LaunchableBrowser] = {
    "safari": "Safari",
    "opera": "Opera",
    "chrome": "Chrome",
    "google-chrome": "Chrome",
    "firefox": "Firefox",
    "internetexplorer": "InternetExplorer",
    "internet-explorer": "InternetExplorer",
    "ie": "InternetExplorer",
    "msie": "InternetExplorer",
}


def resolve_browser(identity: str | None) -> BrowserTag:
    """Resolve a User-Agent style identity string to a browser tag.

    Args:
        identity: Raw identity string, usually the User-Agent header

    Returns:
        The tag of the first matching rule, or "Unknown" when none match

    """
    if not identity:
        return "Unknown"

    for pattern, tag in BROWSER_RULES:
        if pattern.search(identity):
            return tag

    return "Unknown"


def normalize_browser_name(name: str) -> LaunchableBrowser:
    """Map a user supplied browser name (e.g. "ie", "firefox") to its tag."""
    key = name.strip().lower()
    try:
        return BROWSER_ALIASES[key]
    except KeyError:
        raise ValueError(
            f"Unknown browser '{name}'. Available browsers: {list(LAUNCHABLE_BROWSERS)}"
        ) from None
