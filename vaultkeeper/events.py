"""Log event records: when an event happened and which peer it concerns."""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(frozen=True)
class InfoValue:
    """Event details: Unix time in seconds, kept as text, and an optional peer address."""

    timestamp: str
    addr: str = ""

    @property
    def seconds(self) -> int:
        """The timestamp as an integer number of seconds."""
        return int(self.timestamp)

    def from_time_t(self) -> str:
        """The timestamp in ctime() form (local time), ending with a newline."""
        return time.ctime(self.seconds) + "\n"