"""Environment-driven settings shared by the runtime services."""

from __future__ import annotations

import os
from typing import Optional

ENV_PREFIX = "UNDO_HISTORY_"
DEFAULT_CAPACITY = 100


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int, *, minimum: Optional[int] = None) -> int:
    """Read an integer setting, rejecting malformed or out-of-range values."""

    raw = env(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if minimum is not None and value < minimum:
        raise ValueError(f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}")
    return value


def history_capacity() -> int:
    """Capacity for new history managers; ``0`` means unbounded."""

    return env_int("CAPACITY", DEFAULT_CAPACITY, minimum=0)


__all__ = [
    "ENV_PREFIX",
    "DEFAULT_CAPACITY",
    "env",
    "env_flag",
    "env_int",
    "history_capacity",
]
