from __future__ import annotations

import threading
import time

_lock = threading.Lock()
_last_issued = 0


def new_timestamp_id() -> str:
    """Millisecond-timestamp id, strictly increasing within this process."""
    global _last_issued
    with _lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_issued:
            candidate = _last_issued + 1
        _last_issued = candidate
        return str(candidate)
