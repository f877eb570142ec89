from __future__ import annotations

from typing import Any


class WebDriverError(Exception):
    """Base class for every failure reported by a remote session."""

    status: int | None = None
    w3c_code: str = ""

    def __init__(self, message: str = "", status: int | None = None, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        self.payload = payload

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.message} (status: {self.status})"


class NoSuchElementError(WebDriverError):
    status = 7
    w3c_code = "no such element"


class StaleElementReferenceError(WebDriverError):
    status = 10
    w3c_code = "stale element reference"


class ElementNotVisibleError(WebDriverError):
    status = 11
    w3c_code = "element not visible"


class InvalidElementStateError(WebDriverError):
    status = 12
    w3c_code = "invalid element state"


class UnknownError(WebDriverError):
    status = 13
    w3c_code = "unknown error"


class ElementIsNotSelectableError(WebDriverError):
    status = 15
    w3c_code = "element not selectable"


class JavaScriptError(WebDriverError):
    status = 17
    w3c_code = "javascript error"


class ScriptTimeoutError(WebDriverError):
    status = 28
    w3c_code = "script timeout"


class InvalidSelectorError(WebDriverError):
    status = 32
    w3c_code = "invalid selector"


class MoveTargetOutOfBoundsError(WebDriverError):
    status = 34
    w3c_code = "move target out of bounds"


class TransportError(WebDriverError):
    """Network or HTTP level failure; the remote end never answered properly."""


class WaitTimeoutError(WebDriverError):
    """Polling exceeded its deadline."""

    def __init__(self, error_message: str, timeout_ms: int, element_id: str | None = None) -> None:
        super().__init__(f"Timeout of {timeout_ms}ms exceeded while {error_message}")
        self.error_message = error_message
        self.timeout_ms = timeout_ms
        self.element_id = element_id


class CallerMisuseError(TypeError):
    """A callback-style call was made without a completion callback."""


_REMOTE_ERRORS: tuple[type[WebDriverError], ...] = (
    NoSuchElementError,
    StaleElementReferenceError,
    ElementNotVisibleError,
    InvalidElementStateError,
    UnknownError,
    ElementIsNotSelectableError,
    JavaScriptError,
    ScriptTimeoutError,
    InvalidSelectorError,
    MoveTargetOutOfBoundsError,
)

_BY_STATUS = {error_cls.status: error_cls for error_cls in _REMOTE_ERRORS}
_BY_W3C_CODE = {error_cls.w3c_code: error_cls for error_cls in _REMOTE_ERRORS}
# W3C renamed a couple of codes; keep both spellings.
_BY_W3C_CODE["element not interactable"] = ElementNotVisibleError
_BY_W3C_CODE["invalid argument"] = UnknownError


def _message_of(value: Any) -> str:
    if isinstance(value, dict):
        return str(value.get("message") or value.get("error") or "")
    if value is None:
        return ""
    return str(value)


def error_from_response(status: int | str | None, value: Any = None) -> WebDriverError:
    """Build the error matching a remote status (legacy int or W3C string)."""
    message = _message_of(value)
    if isinstance(status, str):
        error_cls = _BY_W3C_CODE.get(status, UnknownError)
        return error_cls(message or status, payload=value)

    error_cls = _BY_STATUS.get(status) if status is not None else None
    if error_cls is None:
        return WebDriverError(message or "Unknown remote failure", status=status, payload=value)
    return error_cls(message, payload=value)
