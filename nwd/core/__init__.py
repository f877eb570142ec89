"""Element proxy, page-script bridge and polling waits."""

from nwd.core.bridge import BridgeMethod, HelperRegistry, ScriptBridge, build_expression
from nwd.core.callbacks import CallbackElement
from nwd.core.contracts import Command, MouseButton, Offset, SearchParams, SessionConfig, Timeouts, WaitOptions
from nwd.core.element import WebElement
from nwd.core.errors import (
    CallerMisuseError,
    NoSuchElementError,
    StaleElementReferenceError,
    TransportError,
    WaitTimeoutError,
    WebDriverError,
)
from nwd.core.session import WebDriverSession
from nwd.core.transport import Transport
from nwd.core.waiting import detach_predicate, disappear_predicate, poll_until

__all__ = [
    "BridgeMethod",
    "CallbackElement",
    "CallerMisuseError",
    "Command",
    "HelperRegistry",
    "MouseButton",
    "NoSuchElementError",
    "Offset",
    "ScriptBridge",
    "SearchParams",
    "SessionConfig",
    "StaleElementReferenceError",
    "Timeouts",
    "Transport",
    "TransportError",
    "WaitOptions",
    "WaitTimeoutError",
    "WebDriverError",
    "WebDriverSession",
    "WebElement",
    "build_expression",
    "detach_predicate",
    "disappear_predicate",
    "poll_until",
]
