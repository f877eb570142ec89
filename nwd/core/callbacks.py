"""Callback-style facade over :class:`WebElement`.

Every method takes its parameters followed by a completion callback
``callback(err, result)``; optional parameters may be left out::

    button.click(lambda err, el: el.get_text(print_text))

The operation runs as a task on the running event loop. Failures arrive as
the first callback argument, never as a raised exception, except when the
callback itself is missing.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Sequence

from nwd.core.arguments import Callback, replace_callback_with_return_self, return_self, split_callback
from nwd.core.contracts import Offset, SearchParams
from nwd.core.element import WebElement


def _offset(value: Any) -> Offset | None:
    if value is None or isinstance(value, Offset):
        return value
    if isinstance(value, dict):
        return Offset(x=value.get("x"), y=value.get("y"))
    raise TypeError(f"offset must be an Offset or a dict with x/y, got {type(value).__name__}")


# Facade calls are fire-and-forget; the loop only keeps weak references to tasks.
_pending: set[asyncio.Task] = set()


class CallbackElement:
    def __init__(self, element: WebElement) -> None:
        self.element = element

    @property
    def id(self) -> str:
        return self.element.id

    @property
    def driver(self):
        return self.element.driver

    def __repr__(self) -> str:
        return f"CallbackElement(id={self.id!r})"

    def _wrap(self, value: Any) -> Any:
        if isinstance(value, WebElement):
            return CallbackElement(value)
        if isinstance(value, list):
            return [self._wrap(item) for item in value]
        return value

    def _run(self, operation: Awaitable[Any], callback: Callback) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(operation)
        _pending.add(task)
        task.add_done_callback(_pending.discard)

        def deliver(done: asyncio.Task) -> None:
            if done.cancelled():
                callback(asyncio.CancelledError())
                return
            exc = done.exception()
            if exc is not None:
                callback(exc)
                return
            callback(None, self._wrap(done.result()))

        task.add_done_callback(deliver)
        return task

    def _chain(
        self,
        args: Sequence[Any],
        operation: Callable[..., Awaitable[Any]],
        required: int = 0,
        defaults: Sequence[Any] = (),
        substitute: Any = None,
    ) -> asyncio.Task:
        args = replace_callback_with_return_self(args, self if substitute is None else substitute)
        params, callback = split_callback(args, required=required, defaults=defaults)
        return self._run(operation(*params), callback)

    def _query(
        self,
        args: Sequence[Any],
        operation: Callable[..., Awaitable[Any]],
        required: int = 0,
        defaults: Sequence[Any] = (),
    ) -> asyncio.Task:
        params, callback = split_callback(args, required=required, defaults=defaults)
        return self._run(operation(*params), callback)

    # Commands resolving to this facade

    def send_keys(self, *args: Any) -> asyncio.Task:
        """send_keys(value, [params], callback) with ``params = {"clear": bool}``."""

        def operation(value: str, params: dict[str, Any] | None) -> Awaitable[Any]:
            return self.element.send_keys(value, clear=bool((params or {}).get("clear")))

        return self._chain(args, operation, required=1, defaults=(None,))

    def clear(self, *args: Any) -> asyncio.Task:
        return self._chain(args, self.element.clear)

    def click(self, *args: Any) -> asyncio.Task:
        return self._chain(args, self.element.click)

    def move_to(self, *args: Any) -> asyncio.Task:
        return self._chain(args, lambda offset: self.element.move_to(_offset(offset)), defaults=(None,))

    def mouse_down(self, *args: Any) -> asyncio.Task:
        return self._chain(args, self.element.mouse_down, defaults=(None,))

    def mouse_up(self, *args: Any) -> asyncio.Task:
        return self._chain(args, self.element.mouse_up, defaults=(None,))

    # Lookups scoped to this element

    def get(self, *args: Any) -> asyncio.Task:
        async def operation(selector: str, params: Any) -> WebElement:
            search = SearchParams.from_mapping(params)
            return await self.element.get(selector, using=search.using)

        return self._query(
            args,
            operation,
            required=1,
            defaults=(None,),
        )

    def get_list(self, *args: Any) -> asyncio.Task:
        async def operation(selector: str, params: Any) -> list[WebElement]:
            search = SearchParams.from_mapping(params)
            return await self.element.get_list(selector, using=search.using)

        return self._query(
            args,
            operation,
            required=1,
            defaults=(None,),
        )

    def wait_for_element(self, *args: Any) -> asyncio.Task:
        async def operation(selector: str, params: Any) -> WebElement:
            search = SearchParams.from_mapping(params)
            return await self.element.wait_for_element(selector, using=search.using, timeout_ms=search.timeout_ms)

        return self._query(
            args,
            operation,
            required=1,
            defaults=(None,),
        )

    # Queries resolving to raw values

    def get_value(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.get_value)

    def get_attr(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.get_attr, required=1)

    def get_text(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.get_text)

    def get_tag_name(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.get_tag_name)

    def is_enabled(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.is_enabled)

    def is_disabled(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.is_disabled)

    def describe(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.describe)

    def get_css_prop(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.get_css_prop, required=1)

    def is_displayed(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.is_displayed)

    def is_selected(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.is_selected)

    def attr(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.attr, required=1)

    def prop(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.prop, required=1)

    def css(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.css, required=1)

    def text(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.text)

    def is_visible(self, *args: Any) -> asyncio.Task:
        return self._query(args, self.element.is_visible)

    # Waits resolving to the session

    def wait_for_disappear(self, *args: Any) -> asyncio.Task:
        return self._chain(args, self.element.wait_for_disappear, substitute=self.driver)

    def wait_for_detach(self, *args: Any) -> asyncio.Task:
        return self._chain(args, self.element.wait_for_detach, substitute=self.driver)
