"""Time helpers for UTC timestamps and monotonic interval measurement."""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC datetime with timezone attached."""

    return datetime.now(timezone.utc)


def elapsed_ms(start_ns: int) -> float:
    """Return milliseconds elapsed since a ``time.perf_counter_ns()`` mark."""

    return (time.perf_counter_ns() - start_ns) / 1_000_000.0
