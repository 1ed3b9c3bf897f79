"""Accumulates log events and condenses them into per-code statistics."""

from __future__ import annotations

from collections import defaultdict

from vaultkeeper.events import InfoValue

MAX_LOG_READ = 250
MAX_SIZE_CODE = 32
LIMIT_ACCUMULATION_ADDR = 250

CONNECT = 100001
DISCONNECT = 100002
MAX_SESSION = 400001
AVERAGE_SESSION = 400002
SESSION_COUNT = 400004

COUNTED_CODES = (107, 402, 1001, 1003, 2001, 200001)


def _truncated_mean(values: list[int]) -> int:
    if not values:
        return 0
    total = sum(values)
    quotient = abs(total) // len(values)
    return quotient if total >= 0 else -quotient


class Compressor:
    """Collects (code, info) events and folds them into ``result``."""

    def __init__(self) -> None:
        self._pending: defaultdict[int, list[InfoValue]] = defaultdict(list)
        self.result: dict[int, int] = {}

    def insert(self, code: int, info: InfoValue) -> None:
        """Queue one event for the next compression."""
        self._pending[int(code)].append(info)

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._pending.values())

    def make_compress(self) -> None:
        """Fold queued events into the result, keeping only what is still unmatched."""
        for code in COUNTED_CODES:
            entries = self._pending.pop(code, None)
            if entries:
                self.result[code] = self.result.get(code, 0) + len(entries)

        if not len(self):
            return

        self._handle_time()

        if len(self) == LIMIT_ACCUMULATION_ADDR:
            self._pending.clear()

    def _handle_time(self) -> None:
        session_ends: dict[str, int] = {}
        for info in self._pending.get(DISCONNECT, []):
            session_ends.setdefault(info.addr, info.seconds)

        durations: list[int] = []
        unmatched: list[InfoValue] = []
        for info in self._pending.get(CONNECT, []):
            end = session_ends.get(info.addr)
            if end is None:
                unmatched.append(info)
            else:
                durations.append(end - info.seconds)

        self._pending.pop(DISCONNECT, None)
        if unmatched:
            self._pending[CONNECT] = unmatched
        else:
            self._pending.pop(CONNECT, None)

        longest = max([0, *durations])
        average = _truncated_mean(durations)
        self.result[SESSION_COUNT] = self.result.get(SESSION_COUNT, 0) + len(durations)
        self.result[MAX_SESSION] = max(self.result.get(MAX_SESSION, 0), longest)
        self.result[AVERAGE_SESSION] = max(self.result.get(AVERAGE_SESSION, 0), average)