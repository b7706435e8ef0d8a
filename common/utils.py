from __future__ import annotations

from datetime import datetime, timezone
import time


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def iso_now_ms() -> str:
    """UTC ISO-8601 timestamp with millisecond precision."""
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso8601(ts: str) -> datetime:
    """Parse a strict ISO-8601 timestamp with optional 'Z'."""
    if ts.endswith("Z"):
        ts = ts[:-1] + "+00:00"
    return datetime.fromisoformat(ts)


def clamp(v: int, lo: int, hi: int) -> int:
    return int(min(hi, max(lo, v)))


def timer_ms(func):
    """
    Decorator that returns (result, elapsed_ms) for timing a single call.
    """
    def wrapper(*args, **kwargs):
        t0 = time.perf_counter()
        out = func(*args, **kwargs)
        dt_ms = (time.perf_counter() - t0) * 1e3
        return out, dt_ms
    return wrapper
