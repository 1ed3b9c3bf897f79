"""Thin wrapper over a DB-API connection with error notes instead of exceptions."""

from __future__ import annotations

from typing import Any, Callable, Sequence

BAD_QUERY = "200001"
CONNECT_FAILED = "2001"


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


class Database:
    """Runs parameterised queries on a connection produced by ``connect``."""

    def __init__(self, connect: Callable[[], Any], log) -> None:
        self._factory = connect
        self._log = log
        self._conn = None

    def connect(self) -> bool:
        """Open a connection; on failure note it in the log and return False."""
        try:
            self._conn = self._factory()
        except Exception:
            self._conn = None
            self._log.make_note(CONNECT_FAILED)
            return False
        return True

    def disconnect(self) -> None:
        """Close the connection if one is open."""
        if self._conn is not None:
            self._conn.close()
        self._conn = None

    def is_connected(self) -> bool:
        return self._conn is not None and not getattr(self._conn, "closed", False)

    def fetch(self, query: str, params: Sequence[Any] = ()) -> list[list[str]]:
        """Rows of the query as lists of text; empty when unconnected or on error."""
        if self._conn is None:
            return []
        try:
            cursor = self._conn.cursor()
            cursor.execute(query, tuple(params))
            rows = cursor.fetchall()
            self._conn.commit()
        except Exception:
            self._rollback()
            self._log.make_note(BAD_QUERY)
            return []
        return [[_as_text(value) for value in row] for row in rows]

    def execute(self, query: str, params: Sequence[Any] = ()) -> bool:
        """Run a statement; False when unconnected or when it fails."""
        if self._conn is None:
            return False
        try:
            cursor = self._conn.cursor()
            cursor.execute(query, tuple(params))
            self._conn.commit()
        except Exception:
            self._rollback()
            self._log.make_note(BAD_QUERY)
            return False
        return True

    def _rollback(self) -> None:
        try:
            self._conn.rollback()
        except Exception:
            pass

    def __enter__(self) -> "Database":
        if not self.is_connected():
            self.connect()
        return self

    def __exit__(self, *args) -> None:
        self.disconnect()