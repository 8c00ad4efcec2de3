"""Id and timestamp helpers"""

import threading
import time
from datetime import datetime, timezone

_id_lock = threading.Lock()
_last_id = 0


def generate_id() -> str:
    """
    Generate an opaque record id derived from a high-resolution timestamp.

    Ids are microseconds since the epoch, bumped by one when two calls land
    on the same tick so that ids issued by this process never repeat.

    Returns:
        Id string of decimal digits
    """
    global _last_id
    with _id_lock:
        candidate = time.time_ns() // 1000
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
    return str(candidate)


def utcnow() -> datetime:
    """Naive UTC timestamp for database columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
