import secrets
import threading
import time

_lock = threading.Lock()
_last_ns = 0


def time_ordered_key() -> str:
    """Generate a unique key that sorts by creation time.

    Lexicographic order of these keys matches generation order within a
    process, which is what cursor paging walks over.
    """
    global _last_ns
    with _lock:
        now = max(time.time_ns(), _last_ns + 1)
        _last_ns = now
    return f"{now:020d}{secrets.token_hex(4)}"
