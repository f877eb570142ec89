"""Helpers for variadic callback-style calls.

Callback-style operations accept optional middle parameters followed by a
completion callback ``callback(err, result)``. The callback is the first
callable found scanning the arguments left to right.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from nwd.core.errors import CallerMisuseError

Callback = Callable[..., Any]


def index_of_callable(args: Sequence[Any]) -> int:
    for index, value in enumerate(args):
        if callable(value):
            return index
    return -1


def return_self(callback: Callback, substitute: Any) -> Callback:
    """Wrap ``callback`` so success delivers ``substitute`` instead of the raw result.

    Errors are forwarded unchanged. Wrapping an already wrapped callback nests
    the wrappers, so the inner one still runs exactly once.
    """

    def wrapper(err: BaseException | None = None, *_: Any) -> Any:
        if err is not None:
            return callback(err)
        return callback(None, substitute)

    wrapper.__wrapped__ = callback  # type: ignore[attr-defined]
    return wrapper


def replace_callback_with_return_self(args: Sequence[Any], substitute: Any) -> list[Any]:
    rewritten = list(args)
    index = index_of_callable(rewritten)
    if index != -1:
        rewritten[index] = return_self(rewritten[index], substitute)
    return rewritten


def split_callback(
    args: Sequence[Any],
    required: int = 0,
    defaults: Sequence[Any] = (),
) -> tuple[list[Any], Callback]:
    """Return ``(params, callback)`` with omitted optional params set to ``defaults``.

    The first ``required`` arguments are mandatory; ``defaults`` holds the
    default of each optional parameter that may follow them. Extra arguments
    after the callback are ignored.
    """
    index = index_of_callable(args)
    if index == -1:
        raise CallerMisuseError("A completion callback is required")
    if index < required or index > required + len(defaults):
        raise CallerMisuseError(
            f"Expected {required} to {required + len(defaults)} argument(s) before the callback, got {index}"
        )
    params = list(args[:index]) + list(defaults[index - required :])
    return params, args[index]
