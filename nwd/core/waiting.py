from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Awaitable, Callable

from nwd.core.contracts import WaitOptions
from nwd.core.errors import StaleElementReferenceError, WaitTimeoutError

if TYPE_CHECKING:
    from nwd.core.element import WebElement

logger = logging.getLogger("nwd.wait")

Predicate = Callable[[], Awaitable[bool]]

DEFAULT_INTERVAL_MS = 100


async def poll_until(
    predicate: Predicate,
    options: WaitOptions,
    *,
    element_id: str | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """Re-evaluate ``predicate`` until it holds, raises, or the deadline passes.

    Errors raised by the predicate propagate unchanged. A timeout only stops
    further iterations; an evaluation already in flight is awaited.
    """
    interval_ms = options.interval_ms if options.interval_ms is not None else DEFAULT_INTERVAL_MS
    deadline = clock() + options.timeout_ms / 1000.0
    attempts = 0

    while True:
        attempts += 1
        if await predicate():
            logger.debug(f"[Wait] Satisfied after {attempts} attempt(s): {options.error_message}")
            return

        remaining = deadline - clock()
        if remaining <= 0:
            logger.debug(f"[Wait] Timed out after {attempts} attempt(s): {options.error_message}")
            raise WaitTimeoutError(options.error_message, options.timeout_ms, element_id=element_id)
        await sleep(min(interval_ms / 1000.0, remaining))


def disappear_predicate(element: "WebElement") -> Predicate:
    async def predicate() -> bool:
        try:
            return not await element.is_visible()
        except StaleElementReferenceError:
            # A removed node is not visible.
            return True

    return predicate


def detach_predicate(element: "WebElement") -> Predicate:
    async def predicate() -> bool:
        try:
            await element.get_tag_name()
        except StaleElementReferenceError:
            return True
        except Exception as exc:
            logger.debug(f"[Wait] Element {element.id} still attached ({exc})")
        return False

    return predicate
