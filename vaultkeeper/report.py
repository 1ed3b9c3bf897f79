"""Writes the daily summary report built from compressed log statistics."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path


class ResultGenerator:
    """Turns a compressor's result into a human-readable report file."""

    def __init__(self, compressor, translator, directory) -> None:
        self.compressor = compressor
        self.translator = translator
        self.directory = Path(directory)

    def generate_report(self, now: datetime | None = None) -> Path:
        """Write the report named after ``now`` (local time by default); return its path."""
        now = now or datetime.now()
        name = f"{now.day}-{now.month}_{now.hour}:{now.minute}.txt"
        lines = [
            f"Daily result on {now.day}-{now.month}-{now.year} {now.hour}:{now.minute}\n"
        ]
        lines.extend(
            f"{self.translator.definition(code)}: {count}\n"
            for code, count in self.compressor.result.items()
        )
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / name
        path.write_text("".join(lines), encoding="utf-8")
        return path