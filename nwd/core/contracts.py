from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Mapping


@dataclass(frozen=True)
class Command:
    """One remote call: path fragment below the session, HTTP method, payload."""

    path: str
    method: str = "GET"
    data: dict[str, Any] | None = None


@dataclass(frozen=True)
class Offset:
    x: int | None = None
    y: int | None = None


class MouseButton(int, Enum):
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2

    @classmethod
    def coerce(cls, button: "MouseButton | str | int | None") -> "MouseButton":
        if button is None:
            return cls.LEFT
        if isinstance(button, str):
            try:
                return cls[button.upper()]
            except KeyError:
                raise ValueError(f"Unknown mouse button: {button!r}") from None
        return cls(button)


@dataclass(frozen=True)
class SearchParams:
    """Options for element lookups.

    The searching element supplies the parent, so a caller-provided ``parent``
    is dropped.
    """

    using: str | None = None
    timeout_ms: int | None = None

    @classmethod
    def from_mapping(cls, params: "Mapping[str, Any] | SearchParams | None") -> "SearchParams":
        if params is None:
            return cls()
        if isinstance(params, SearchParams):
            return params
        if not isinstance(params, Mapping):
            raise TypeError(f"search params must be a mapping, got {type(params).__name__}")
        unknown = set(params) - {"using", "timeout", "timeout_ms", "parent"}
        if unknown:
            raise ValueError(f"Unknown search params: {sorted(unknown)}")
        timeout = params.get("timeout_ms", params.get("timeout"))
        return cls(using=params.get("using"), timeout_ms=None if timeout is None else int(timeout))


@dataclass(frozen=True)
class WaitOptions:
    error_message: str
    timeout_ms: int
    interval_ms: int | None = None


@dataclass(frozen=True)
class Timeouts:
    wait_for_element: int = 10_000
    wait_for_element_disappear: int = 10_000
    wait_for_detach: int = 10_000
    poll_interval_ms: int = 100
    script_ms: int = 5_000
    http_ms: int = 30_000

    @classmethod
    def from_env(cls, prefix: str = "NWD_TIMEOUT_") -> "Timeouts":
        overrides: dict[str, int] = {}
        for item in fields(cls):
            raw = os.environ.get(prefix + item.name.upper())
            if raw is None or raw.strip() == "":
                continue
            try:
                overrides[item.name] = int(raw)
            except ValueError:
                raise ValueError(f"{prefix}{item.name.upper()} must be an integer, got {raw!r}") from None
        return replace(cls(), **overrides)


@dataclass(frozen=True)
class SessionConfig:
    server_url: str = "http://127.0.0.1:4444/wd/hub"
    session_id: str = ""
    timeouts: Timeouts = field(default_factory=Timeouts)
    log_method_calls: bool = False
    default_selector_strategy: str = "css selector"
