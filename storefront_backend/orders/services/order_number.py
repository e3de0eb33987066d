# orders/services/order_number.py

"""
ORDER NUMBER GENERATOR

Format: JF-<uppercase base36 ms timestamp>-<4 uppercase base36 random chars>

The timestamp part is forced to move forward within a process, so two calls
in the same millisecond (or after a clock step backwards) never share it.
The random suffix only has to separate concurrent processes.
"""

from __future__ import annotations

import secrets
import threading
import time

PREFIX = "JF"
SUFFIX_LENGTH = 4
ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

_lock = threading.Lock()
_last_ms = 0


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"

    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(ALPHABET[rem])
    return "".join(reversed(out))


def _next_timestamp_ms() -> int:
    global _last_ms

    with _lock:
        now = int(time.time() * 1000)
        if now <= _last_ms:
            now = _last_ms + 1
        _last_ms = now
        return now


def _random_suffix() -> str:
    return "".join(secrets.choice(ALPHABET) for _ in range(SUFFIX_LENGTH))


def generate_order_number() -> str:
    return f"{PREFIX}-{to_base36(_next_timestamp_ms())}-{_random_suffix()}"
