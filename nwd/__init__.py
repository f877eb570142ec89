"""nwd: asyncio client-side proxy for remote WebDriver elements."""

from nwd.core import CallbackElement, SessionConfig, Timeouts, WebDriverSession, WebElement

__all__ = ["CallbackElement", "SessionConfig", "Timeouts", "WebDriverSession", "WebElement"]
