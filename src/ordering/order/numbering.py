"""Human-readable order numbers: ``ORD-<TIME36>-<RAND5>``.

TIME36 is the upper-case base-36 epoch-milliseconds timestamp and RAND5 five
random base-36 characters. Within one process the timestamp part never
repeats: when several numbers are issued in the same millisecond, each takes
the next millisecond after the last one issued.
"""

import secrets
import string
import threading
import time

ALPHABET = string.digits + string.ascii_uppercase
SUFFIX_LENGTH = 5

_lock = threading.Lock()
_last_issued_ms = 0


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base-36 encoding needs a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(ALPHABET[remainder])
    return "".join(reversed(digits))


def _next_timestamp_ms() -> int:
    global _last_issued_ms
    with _lock:
        now_ms = time.time_ns() // 1_000_000
        _last_issued_ms = max(now_ms, _last_issued_ms + 1)
        return _last_issued_ms


def generate_order_number() -> str:
    suffix = "".join(secrets.choice(ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"ORD-{to_base36(_next_timestamp_ms())}-{suffix}"
