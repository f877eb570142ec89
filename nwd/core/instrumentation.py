from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable, TypeVar

logger = logging.getLogger("nwd.calls")

T = TypeVar("T", bound=type)


def _format_call(name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    parts = [repr(arg) for arg in args]
    parts.extend(f"{key}={value!r}" for key, value in kwargs.items())
    return f"{name}({', '.join(parts)})"


def _instrument(prefix: str, name: str, method: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(method)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        if not getattr(self, "log_method_calls", False):
            return await method(self, *args, **kwargs)

        call = _format_call(name, args, kwargs)
        logger.debug(f"[{prefix}] {call}")
        try:
            result = await method(self, *args, **kwargs)
        except Exception as exc:
            logger.debug(f"[{prefix}] {call} failed: {type(exc).__name__}: {exc}")
            raise
        logger.debug(f"[{prefix}] {call} -> {result!r}")
        return result

    return wrapper


def log_method_calls(prefix: str) -> Callable[[T], T]:
    """Class decorator logging every public coroutine method call at DEBUG.

    Logging is switched per instance through its ``log_method_calls`` flag.
    """

    def decorate(cls: T) -> T:
        for name, member in list(vars(cls).items()):
            if name.startswith("_") or not inspect.iscoroutinefunction(member):
                continue
            setattr(cls, name, _instrument(prefix, name, member))
        return cls

    return decorate
