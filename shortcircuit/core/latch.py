"""One-shot latch guarding the settle-once contract."""

from __future__ import annotations

import threading


class SettleOnceLatch:
    """
    A flag that can be set exactly once.

    ``try_set`` returns True for the single caller that flips the latch and
    False for everyone after it, including callers racing on other threads.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._set = False

    def try_set(self) -> bool:
        with self._lock:
            if self._set:
                return False
            self._set = True
            return True

    @property
    def is_set(self) -> bool:
        return self._set

    def __repr__(self) -> str:
        return f"SettleOnceLatch(is_set={self._set})"
