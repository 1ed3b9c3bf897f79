"""Descriptions of event codes, read from a "code:description" file."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CODES = (
    (101, "system error create socket"),
    (102, "system error bind"),
    (103, "system error listen"),
    (106, "memory error accept"),
    (107, "limit open descriptor for thread/system"),
    (108, "memory error select"),
    (109, "system error select"),
    (110, "impossible create a file"),
    (402, "error lose connection with data base"),
    (1001, "logic/signal error in select"),
    (1002, "firewall rules forbid connection"),
    (1003, "connection with client was lost"),
    (1004, "error create hash-object"),
    (2001, "error connect with Postgres Data Base"),
    (4001, "logic error in design with password-action"),
    (5001, "file with code-error designations is missing"),
    (10001, "error update with new funcs and lose new realizing"),
    (100001, "new connection"),
    (100002, "close connection"),
    (200001, "bad quiry-SQL"),
    (400001, "maximum communication time"),
    (400002, "average time"),
    (400003, "banned client"),
    (400004, "count connect-clients"),
)


def create_table_and_fill(path) -> None:
    """Write the default code table to ``path``."""
    with open(path, "w", encoding="utf-8") as fh:
        fh.writelines(f"{code}:{text}\n" for code, text in DEFAULT_CODES)


class CodeBook:
    """Maps event codes to their descriptions."""

    def __init__(self, path, log) -> None:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError:
            log.make_note("5001")
            create_table_and_fill(path)
            text = path.read_text(encoding="utf-8")

        self._definitions: dict[int, str] = {}
        for line in text.splitlines():
            code, _, definition = line.partition(":")
            self._definitions.setdefault(int(code), definition)

    def definition(self, code) -> str:
        """Description of ``code``; raises KeyError for an unknown code."""
        return self._definitions[int(code)]