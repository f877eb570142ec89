from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

import aiohttp

from nwd.core.bridge import HelperRegistry
from nwd.core.contracts import Command, MouseButton, SessionConfig, Timeouts, WaitOptions
from nwd.core.element import WebElement
from nwd.core.errors import NoSuchElementError, TransportError, WebDriverError, error_from_response
from nwd.core.instrumentation import log_method_calls
from nwd.core.waiting import Predicate, poll_until

logger = logging.getLogger("nwd.session")

W3C_ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"


@log_method_calls("WebDriver")
class WebDriverSession:
    """HTTP transport bound to an already created remote session."""

    def __init__(
        self,
        config: SessionConfig,
        http_session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        if not config.session_id:
            raise ValueError("SessionConfig.session_id is required")
        self._config = config
        self._base_url = config.server_url.rstrip("/") + f"/session/{config.session_id}"
        self._http = http_session
        self._owns_http = http_session is None
        self.timeouts: Timeouts = config.timeouts
        self.helpers = HelperRegistry()
        self._script_timeout_set = False
        self.log_method_calls = config.log_method_calls

    @property
    def session_id(self) -> str:
        return self._config.session_id

    async def __aenter__(self) -> "WebDriverSession":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _client(self) -> aiohttp.ClientSession:
        if self._http is None or self._http.closed:
            self._http = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeouts.http_ms / 1000.0),
            )
            self._owns_http = True
        return self._http

    async def close(self) -> None:
        if self._owns_http and self._http is not None and not self._http.closed:
            await self._http.close()
        self._http = None

    async def _cmd(self, command: Command) -> Any:
        url = self._base_url + command.path
        data = command.data
        if data is None and command.method == "POST":
            data = {}
        logger.debug(f"[Session] {command.method} {command.path}")
        try:
            async with self._client().request(command.method, url, json=data) as response:
                body = await response.text()
                http_status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(f"{command.method} {command.path} failed: {exc}") from exc

        try:
            payload = json.loads(body) if body else {}
        except json.JSONDecodeError:
            raise TransportError(
                f"{command.method} {command.path} returned non-JSON body (HTTP {http_status})",
                payload=body[:240],
            ) from None

        if not isinstance(payload, dict):
            raise TransportError(f"{command.method} {command.path} returned unexpected payload", payload=payload)

        value = payload.get("value")
        status = payload.get("status")
        if status not in (None, 0):
            raise error_from_response(status, value)
        if isinstance(value, dict) and "error" in value:
            raise error_from_response(value["error"], value)
        if http_status >= 400:
            raise TransportError(f"{command.method} {command.path} failed with HTTP {http_status}", payload=payload)
        return value

    def _wrap(self, value: Any) -> Any:
        if isinstance(value, list):
            return [self._wrap(item) for item in value]
        if isinstance(value, dict):
            if "ELEMENT" in value:
                return WebElement(value["ELEMENT"], self)
            if W3C_ELEMENT_KEY in value:
                return WebElement(value[W3C_ELEMENT_KEY], self)
            return {key: self._wrap(item) for key, item in value.items()}
        return value

    async def set_script_timeout(self, ms: int | None = None) -> "WebDriverSession":
        """Bound how long the remote end lets an async script run before failing it."""
        ms = self.timeouts.script_ms if ms is None else ms
        await self._cmd(Command(path="/timeouts", method="POST", data={"type": "script", "ms": ms}))
        self._script_timeout_set = True
        return self

    async def execute(self, script: str, args: list[Any] | None = None, is_async: bool = False) -> Any:
        if is_async and not self._script_timeout_set:
            await self.set_script_timeout()
        path = "/execute_async" if is_async else "/execute"
        result = await self._cmd(Command(path=path, method="POST", data={"script": script, "args": args or []}))
        return self._wrap(result)

    def _lookup_path(self, multiple: bool, parent: WebElement | None) -> str:
        suffix = "/elements" if multiple else "/element"
        if parent is None:
            return suffix
        return f"/element/{parent.id}{suffix}"

    async def get(
        self,
        selector: str,
        using: str | None = None,
        parent: WebElement | None = None,
    ) -> WebElement:
        data = {"using": using or self._config.default_selector_strategy, "value": selector}
        result = await self._cmd(Command(path=self._lookup_path(False, parent), method="POST", data=data))
        element = self._wrap(result)
        if not isinstance(element, WebElement):
            raise WebDriverError(f"Lookup of {selector!r} returned no element reference", payload=result)
        return element

    async def get_list(
        self,
        selector: str,
        using: str | None = None,
        parent: WebElement | None = None,
    ) -> list[WebElement]:
        data = {"using": using or self._config.default_selector_strategy, "value": selector}
        result = await self._cmd(Command(path=self._lookup_path(True, parent), method="POST", data=data))
        return [item for item in self._wrap(result or []) if isinstance(item, WebElement)]

    async def wait_for_element(
        self,
        selector: str,
        using: str | None = None,
        parent: WebElement | None = None,
        timeout_ms: int | None = None,
    ) -> WebElement:
        found: list[WebElement] = []

        async def appeared() -> bool:
            try:
                found.append(await self.get(selector, using=using, parent=parent))
            except NoSuchElementError:
                return False
            return True

        await self.wait_for(
            appeared,
            WaitOptions(
                error_message=f"waiting for element {selector}",
                timeout_ms=timeout_ms if timeout_ms is not None else self.timeouts.wait_for_element,
                interval_ms=self.timeouts.poll_interval_ms,
            ),
        )
        return found[-1]

    async def wait_for(
        self,
        predicate: Predicate,
        options: WaitOptions,
        element_id: str | None = None,
    ) -> "WebDriverSession":
        await poll_until(predicate, options, element_id=element_id)
        return self

    async def mouse_down(self, button: MouseButton | str | int | None = None) -> "WebDriverSession":
        await self._cmd(Command(path="/buttondown", method="POST", data={"button": int(MouseButton.coerce(button))}))
        return self

    async def mouse_up(self, button: MouseButton | str | int | None = None) -> "WebDriverSession":
        await self._cmd(Command(path="/buttonup", method="POST", data={"button": int(MouseButton.coerce(button))}))
        return self

    async def navigate(self, url: str) -> "WebDriverSession":
        await self._cmd(Command(path="/url", method="POST", data={"url": url}))
        self.helpers.reset()
        logger.info(f"[Session] Navigated to {url}")
        return self

    async def get_url(self) -> str:
        return await self._cmd(Command(path="/url", method="GET"))
