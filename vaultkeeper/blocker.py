"""Temporary bans for misbehaving peer addresses."""

from __future__ import annotations

import threading
import time

TIME_BLOCK = 10


class Blocker:
    """Remembers when an address was banned and whether the ban still holds."""

    def __init__(self, block_minutes: int = TIME_BLOCK) -> None:
        self.block_seconds = block_minutes * 60
        self._prisons: dict[str, int] = {}
        self._lock = threading.Lock()

    def add_prison(self, addr: str, now: int | None = None) -> None:
        """Ban ``addr`` starting at ``now`` (Unix seconds, default the current time)."""
        stamp = int(time.time()) if now is None else int(now)
        with self._lock:
            self._prisons[addr] = stamp

    def has_prison(self, addr: str, now: int | None = None) -> bool:
        """True while ``addr`` is still within its ban period."""
        with self._lock:
            since = self._prisons.get(addr)
        if since is None:
            return False
        current = int(time.time()) if now is None else int(now)
        return current - since <= self.block_seconds