"""Browser name parsing and platform support rules."""

import sys
from collections.abc import Mapping
from dataclasses import dataclass, field

MOBILE_SUFFIX = "-mobile"

BROWSER_ALIASES: Mapping[str, str] = {
    "edge": "MicrosoftEdge",
    "ie": "internet explorer",
}

MOBILE_DEVICE_METRICS: Mapping[str, int] = {
    "width": 320,
    "height": 568,
    "pixelRatio": 2,
}

# Browsers that cannot be driven on a given platform. A remote endpoint is
# assumed to run Linux nodes.
_WINDOWS_ONLY = frozenset({"internet explorer", "MicrosoftEdge"})

UNSUPPORTED_BROWSERS: Mapping[str, frozenset[str]] = {
    "win32": frozenset({"safari"}),
    "darwin": _WINDOWS_ONLY,
    "linux": _WINDOWS_ONLY | {"safari"},
}


@dataclass(frozen=True, kw_only=True)
class Capabilities:
    """Browser requested for a session."""

    browser_name: str
    mobile_emulation: bool = False
    device_metrics: Mapping[str, int] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return browser_label(self.browser_name, self.mobile_emulation)


def normalize_browser_name(name: str) -> str:
    """Map short browser names to the names WebDriver expects."""
    return BROWSER_ALIASES.get(name, name)


def parse_browser(name: str) -> Capabilities:
    """Build capabilities from a browser name such as ``chrome-mobile``.

    A ``-mobile`` suffix enables mobile emulation with a small phone
    viewport; aliases are applied to the name without the suffix.
    """
    base, suffix, _ = name.partition(MOBILE_SUFFIX)
    if not suffix:
        return Capabilities(browser_name=normalize_browser_name(name))

    return Capabilities(
        browser_name=normalize_browser_name(base),
        mobile_emulation=True,
        device_metrics=dict(MOBILE_DEVICE_METRICS),
    )


def is_supported(
    browser_name: str,
    *,
    platform: str | None = None,
    remote: bool = False,
) -> bool:
    """Check whether ``browser_name`` can run on the platform.

    Args:
        browser_name: Normalized browser name (see ``normalize_browser_name``)
        platform: ``sys.platform`` value, defaults to the current one
        remote: True when sessions are created on a remote endpoint

    """
    if remote:
        platform = "linux"
    elif platform is None:
        platform = sys.platform

    return browser_name not in UNSUPPORTED_BROWSERS.get(platform, frozenset())


def browser_label(browser_name: str, mobile_emulation: bool) -> str:
    """Label used in log lines and failure reports."""
    return f"{browser_name}{MOBILE_SUFFIX}" if mobile_emulation else browser_name
