"""Provide utility helpers for timestamps and id encoding."""

from __future__ import annotations

import time
from datetime import datetime
from typing import Protocol

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding requires a non-negative integer")
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def _format_local(ms: int) -> str:
    """Render epoch milliseconds as a local-time string."""
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


class Clock(Protocol):
    def now(self) -> int:
        """Return milliseconds since the epoch."""
        ...


class SystemClock:
    def now(self) -> int:
        return _now_ms()
