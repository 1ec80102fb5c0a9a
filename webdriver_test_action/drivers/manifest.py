"""Driver manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel

from webdriver_test_action.capabilities import Capabilities
from webdriver_test_action.drivers.base import BrowserSession


@dataclass(frozen=True, kw_only=True)
class DriverManifest[ConfigT: BaseModel]:
    """Manifest describing a browser driver plugin.

    The manifest references the configuration class and the session
    factory, so drivers can be loaded lazily by key.
    """

    config_cls: type[ConfigT]
    session_factory: Callable[
        [ConfigT, Capabilities], AbstractAsyncContextManager[BrowserSession]
    ]
    # Used to decide whether local platform restrictions apply
    is_remote: Callable[[ConfigT], bool] = lambda config: False
