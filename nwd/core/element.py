from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from nwd.core.bridge import BridgeMethod, ScriptBridge
from nwd.core.contracts import Command, MouseButton, Offset, WaitOptions
from nwd.core.instrumentation import log_method_calls
from nwd.core.keys import replace_key_strokes_with_codes
from nwd.core.scripts import IS_DISABLED_SOURCE
from nwd.core.waiting import detach_predicate, disappear_predicate

if TYPE_CHECKING:
    from nwd.core.transport import Transport

logger = logging.getLogger("nwd.element")


@log_method_calls("WebElement")
class WebElement:
    """Proxy for one remote DOM element.

    Commands that act on the element resolve to the element itself so calls
    can be chained; queries resolve to the requested value. A handle becomes
    stale once the page drops the node, after which every command raises
    ``StaleElementReferenceError``.
    """

    def __init__(self, id: str, driver: "Transport") -> None:
        self.id = id
        self.driver = driver
        self.log_method_calls = getattr(driver, "log_method_calls", False)
        self._bridge = ScriptBridge(self)

    @property
    def ELEMENT(self) -> str:
        return self.id

    def reference(self) -> dict[str, str]:
        return {"ELEMENT": self.id}

    def __repr__(self) -> str:
        return f"WebElement(id={self.id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WebElement):
            return NotImplemented
        return self.id == other.id and self.driver is other.driver

    def __hash__(self) -> int:
        return hash((self.id, id(self.driver)))

    def _path(self, suffix: str = "") -> str:
        return f"/element/{self.id}{suffix}"

    async def _perform(self, suffix: str, method: str = "POST", data: dict[str, Any] | None = None) -> "WebElement":
        await self.driver._cmd(Command(path=self._path(suffix), method=method, data=data))
        return self

    async def _query(self, suffix: str = "") -> Any:
        return await self.driver._cmd(Command(path=self._path(suffix), method="GET"))

    # Commands

    async def send_keys(self, value: str, clear: bool = False) -> "WebElement":
        if clear:
            await self.clear()
        keys = replace_key_strokes_with_codes(value)
        return await self._perform("/value", data={"value": list(keys)})

    async def clear(self) -> "WebElement":
        return await self._perform("/clear")

    async def click(self) -> "WebElement":
        return await self._perform("/click")

    async def move_to(self, offset: Offset | None = None) -> "WebElement":
        """Move the mouse to ``offset`` from the element's top-left corner.

        Without an offset the mouse goes to the centre of the element. The
        element is scrolled into view when needed.
        """
        offset = offset or Offset()
        await self.driver._cmd(
            Command(
                path="/moveto",
                method="POST",
                data={"element": self.id, "xoffset": offset.x, "yoffset": offset.y},
            )
        )
        return self

    async def mouse_down(
        self,
        button: MouseButton | str | int | None = None,
        offset: Offset | None = None,
    ) -> "WebElement":
        await self.move_to(offset)
        await self.driver.mouse_down(button)
        return self

    async def mouse_up(
        self,
        button: MouseButton | str | int | None = None,
        offset: Offset | None = None,
    ) -> "WebElement":
        await self.move_to(offset)
        await self.driver.mouse_up(button)
        return self

    # Lookups scoped to this element

    async def get(self, selector: str, using: str | None = None) -> "WebElement":
        return await self.driver.get(selector, using=using, parent=self)

    async def get_list(self, selector: str, using: str | None = None) -> list["WebElement"]:
        return await self.driver.get_list(selector, using=using, parent=self)

    async def wait_for_element(
        self,
        selector: str,
        using: str | None = None,
        timeout_ms: int | None = None,
    ) -> "WebElement":
        return await self.driver.wait_for_element(selector, using=using, parent=self, timeout_ms=timeout_ms)

    # Queries

    async def get_value(self) -> Any:
        return await self.get_attr("value")

    async def get_attr(self, name: str) -> Any:
        return await self._query(f"/attribute/{name}")

    async def get_text(self) -> str:
        return await self._query("/text")

    async def get_tag_name(self) -> str:
        return await self._query("/name")

    async def is_enabled(self) -> bool:
        # Only reliable for inputs; is_disabled() covers every native control.
        return await self._query("/enabled")

    async def is_disabled(self) -> bool:
        return await self.driver.execute(IS_DISABLED_SOURCE, [self.reference()], False)

    async def describe(self) -> Any:
        return await self._query()

    async def get_css_prop(self, name: str) -> str:
        return await self._query(f"/css/{name}")

    async def is_displayed(self) -> bool:
        return await self._query("/displayed")

    async def is_selected(self) -> bool:
        return await self._query("/selected")

    # Page utility library

    async def attr(self, name: str) -> Any:
        return await self._bridge.invoke(BridgeMethod.ATTR, name)

    async def prop(self, name: str) -> Any:
        return await self._bridge.invoke(BridgeMethod.PROP, name)

    async def css(self, name: str) -> Any:
        return await self._bridge.invoke(BridgeMethod.CSS, name)

    async def text(self) -> Any:
        return await self._bridge.invoke(BridgeMethod.TEXT)

    async def is_visible(self) -> bool:
        return await self._bridge.is_visible()

    # Waits; these resolve to the session because the element may be gone.

    async def wait_for_disappear(self) -> "Transport":
        await self.driver.wait_for(
            disappear_predicate(self),
            WaitOptions(
                error_message=f"waiting for element {self.id} disappear",
                timeout_ms=self.driver.timeouts.wait_for_element_disappear,
                interval_ms=self.driver.timeouts.poll_interval_ms,
            ),
            element_id=self.id,
        )
        return self.driver

    async def wait_for_detach(self) -> "Transport":
        await self.driver.wait_for(
            detach_predicate(self),
            WaitOptions(
                error_message=f"waiting for element {self.id} detach",
                timeout_ms=self.driver.timeouts.wait_for_detach,
                interval_ms=self.driver.timeouts.poll_interval_ms,
            ),
            element_id=self.id,
        )
        logger.debug(f"[Element] {self.id} detached")
        return self.driver
