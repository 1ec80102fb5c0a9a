"""Lookup of installed browser drivers."""

from importlib.metadata import entry_points
from typing import Any

from webdriver_test_action.drivers.manifest import DriverManifest

ENTRY_POINT_GROUP = "webdriver_test_action.drivers"


class DriverNotFoundError(Exception):
    """Raised when no installed driver matches the requested key."""


def installed_drivers() -> list[str]:
    """Names of every driver registered by installed packages."""
    return sorted(entry.name for entry in entry_points(group=ENTRY_POINT_GROUP))


def load_driver_manifest(key: str) -> DriverManifest[Any]:
    """Load the manifest registered under ``key``.

    Drivers register themselves in the ``webdriver_test_action.drivers``
    entry point group; ``selenium`` ships with this package and other
    packages can add their own session factories next to it.

    Raises:
        DriverNotFoundError: If no installed package registers ``key``

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        raise DriverNotFoundError(
            f"Unknown driver {key!r}. Installed drivers: {installed_drivers()}"
        )

    manifest: DriverManifest[Any] = next(iter(matches)).load()
    return manifest
