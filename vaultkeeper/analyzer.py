"""Periodic summarising of the event log into report files."""

from __future__ import annotations

import threading
import time
from pathlib import Path

from vaultkeeper.codebook import CodeBook
from vaultkeeper.compressor import Compressor
from vaultkeeper.report import ResultGenerator

CHECK_INTERVAL = 3600
REPORT_PERIOD = 3600 * 24


class Analyzer:
    """Turns the accumulated log into a report once every ``period`` seconds."""

    def __init__(
        self,
        log,
        codes_path,
        results_dir,
        interval: float = CHECK_INTERVAL,
        period: float = REPORT_PERIOD,
    ) -> None:
        self.log = log
        self.codes_path = Path(codes_path)
        self.results_dir = Path(results_dir)
        self.interval = interval
        self.period = period

    def run_once(self) -> Path:
        """Read all log notes, write a report, and return the report's path."""
        compressor = Compressor()
        codebook = CodeBook(self.codes_path, self.log)
        self.log.read_all_notes(compressor)
        return ResultGenerator(compressor, codebook, self.results_dir).generate_report()

    def time_check(self, stop_event: threading.Event) -> None:
        """Every ``interval`` seconds, report if ``period`` has passed; stop on the event."""
        started = time.monotonic()
        while not stop_event.wait(self.interval):
            if time.monotonic() - started > self.period:
                started = time.monotonic()
                self.run_once()