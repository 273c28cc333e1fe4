"""
Time-related utilities for the application.

All timestamps are generated in UTC. Object keys embed a Unix
millisecond timestamp that never repeats within a process, so two
uploads of the same file name under the same prefix get distinct keys.
"""

import threading
import time
from datetime import datetime, timezone

_last_millis = 0
_millis_lock = threading.Lock()


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()


def unix_millis() -> int:
    """Return the current Unix time in milliseconds, strictly increasing.

    When two calls land in the same millisecond the second one is bumped
    to the next free value.
    """
    global _last_millis

    now = time.time_ns() // 1_000_000
    with _millis_lock:
        _last_millis = max(now, _last_millis + 1)
        return _last_millis
