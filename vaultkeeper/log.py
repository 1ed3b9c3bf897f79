"""Buffered, thread-safe event log written to binary note files."""

from __future__ import annotations

import re
import threading
import time
from pathlib import Path

from vaultkeeper.compressor import MAX_LOG_READ, Compressor
from vaultkeeper.events import InfoValue

MAX_BUFFER_QUEUE = 25

_SEPARATORS = re.compile("[\n\0]")


def to_dataline(line: str) -> tuple[int, InfoValue]:
    """Split a "time code [addr]" note into its code and details."""
    parts = line.split()
    if len(parts) < 2:
        raise ValueError(f"malformed log line: {line!r}")
    addr = parts[2] if len(parts) > 2 else ""
    return int(parts[1]), InfoValue(parts[0], addr)


class EventLog:
    """Queues timestamped notes and appends them to a file in ``directory``."""

    def __init__(self, directory) -> None:
        self.directory = Path(directory)
        self._queue: list[str] = []
        self._queued = 0
        self._queue_lock = threading.Lock()
        self._file_lock = threading.RLock()
        self.path = self.new_log_filename()

    def make_note(self, code) -> None:
        """Queue a note; the queue is written out once it grows past its limit."""
        with self._queue_lock:
            overflow = self._queued > MAX_BUFFER_QUEUE
            if overflow:
                self._queued = 0
        if overflow:
            self.flush()
        with self._queue_lock:
            self._queued += 1
            self._queue.append(f"{int(time.time())} {code}\n")

    def flush(self) -> None:
        """Append every queued note to the log file, followed by a NUL byte."""
        with self._queue_lock:
            notes, self._queue = self._queue, []
        with self._file_lock:
            with open(self.path, "ab") as fh:
                fh.write("".join(notes).encode())
                fh.write(b"\0")

    def read_all_notes(self, compressor: Compressor) -> None:
        """Feed every note in the current file to ``compressor``, then start a new file."""
        with self._queue_lock:
            pending = bool(self._queue)
        if pending:
            self.flush()

        with self._file_lock:
            try:
                data = self.path.read_bytes()
            except OSError:
                self.make_note("1007")
                self.new_log_filename()
                return

            for line in _SEPARATORS.split(data.decode(errors="replace")):
                if line:
                    compressor.insert(*to_dataline(line))
                if len(compressor) == MAX_LOG_READ:
                    compressor.make_compress()
            compressor.make_compress()
            self.new_log_filename()

    def new_log_filename(self) -> Path:
        """Choose the log file name from the current local time."""
        now = time.localtime()
        name = f"{now.tm_mday}-{now.tm_mon}_{now.tm_hour}:{now.tm_min}.bin"
        self.path = self.directory / name
        return self.path