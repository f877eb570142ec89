from __future__ import annotations

import json
import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from nwd.core.scripts import NEED_HELPER, VISIBILITY_HELPER, visibility_script

if TYPE_CHECKING:
    from nwd.core.element import WebElement

logger = logging.getLogger("nwd.bridge")


class BridgeMethod(Enum):
    """Page-side utility library methods callable against one element."""

    ATTR = ("attr", 1)
    PROP = ("prop", 1)
    CSS = ("css", 1)
    TEXT = ("text", 0)

    def __init__(self, method_name: str, arity: int) -> None:
        self.method_name = method_name
        self.arity = arity


def _literal(value: Any) -> str:
    return json.dumps(str(value))


def build_expression(method: BridgeMethod, args: tuple[Any, ...] = ()) -> str:
    if len(args) != method.arity:
        raise ValueError(f"{method.method_name}() takes {method.arity} argument(s), got {len(args)}")
    params = ",".join(_literal(arg) for arg in args)
    return f"return $(arguments[0]).{method.method_name}({params});"


class HelperRegistry:
    """Which page helpers are installed, per navigation epoch of one session.

    The page stays the source of truth: the visibility check always asks it
    first and installs on a ``needFunc`` reply. The registry only records
    installs so a helper that vanishes without navigation starts a new epoch.
    """

    def __init__(self) -> None:
        self._epoch = 0
        self._installed: set[str] = set()

    @property
    def epoch(self) -> int:
        return self._epoch

    def is_installed(self, name: str) -> bool:
        return name in self._installed

    def mark_installed(self, name: str) -> None:
        self._installed.add(name)

    def reset(self) -> None:
        self._epoch += 1
        self._installed.clear()

    def report_missing(self, name: str) -> None:
        if name not in self._installed:
            return
        logger.info(f"[Bridge] Page lost helper {name}; starting epoch {self._epoch + 1}")
        self.reset()


class ScriptBridge:
    def __init__(self, element: "WebElement") -> None:
        self._element = element

    @property
    def _driver(self):
        return self._element.driver

    async def invoke(self, method: BridgeMethod, *args: Any) -> Any:
        source = build_expression(method, args)
        return await self._driver.execute(source, [self._element.reference()], False)

    async def is_visible(self) -> bool:
        helpers: HelperRegistry = self._driver.helpers
        args = [self._element.reference()]

        result = await self._driver.execute(visibility_script(with_helper=False), args, False)
        if result != NEED_HELPER:
            return result

        helpers.report_missing(VISIBILITY_HELPER)
        logger.debug(f"[Bridge] Installing {VISIBILITY_HELPER} (epoch {helpers.epoch})")
        result = await self._driver.execute(visibility_script(with_helper=True), args, False)
        helpers.mark_installed(VISIBILITY_HELPER)
        return result
