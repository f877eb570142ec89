from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from nwd.core.bridge import HelperRegistry
from nwd.core.contracts import Command, MouseButton, Timeouts, WaitOptions
from nwd.core.waiting import Predicate

if TYPE_CHECKING:
    from nwd.core.element import WebElement


@runtime_checkable
class Transport(Protocol):
    """What an element handle needs from its owning session."""

    timeouts: Timeouts
    helpers: HelperRegistry
    log_method_calls: bool

    async def _cmd(self, command: Command) -> Any: ...

    async def execute(self, script: str, args: list[Any] | None = None, is_async: bool = False) -> Any: ...

    async def get(
        self,
        selector: str,
        using: str | None = None,
        parent: "WebElement | None" = None,
    ) -> "WebElement": ...

    async def get_list(
        self,
        selector: str,
        using: str | None = None,
        parent: "WebElement | None" = None,
    ) -> list["WebElement"]: ...

    async def wait_for_element(
        self,
        selector: str,
        using: str | None = None,
        parent: "WebElement | None" = None,
        timeout_ms: int | None = None,
    ) -> "WebElement": ...

    async def wait_for(self, predicate: Predicate, options: WaitOptions, element_id: str | None = None) -> Any: ...

    async def mouse_down(self, button: MouseButton | str | int | None = None) -> Any: ...

    async def mouse_up(self, button: MouseButton | str | int | None = None) -> Any: ...
