"""Minimal stand-ins for psycopg2 connection and cursor objects."""

from typing import Any, Dict, List, Optional


class FakeCursor:
    """Cursor returning preset dictionary rows."""

    def __init__(self, rows: List[Dict[str, Any]], error: Optional[Exception] = None):
        self.rows = rows
        self.error = error
        self.executed: List[tuple] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    def execute(self, sql, params=None):
        self.executed.append((sql, params))
        if self.error is not None:
            raise self.error

    def fetchall(self):
        return self.rows


class FakeConnection:
    """Connection handing out a single FakeCursor."""

    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.session: Dict[str, Any] = {}
        self.closed = False

    def set_session(self, **kwargs):
        self.session.update(kwargs)

    def cursor(self, cursor_factory=None):
        return self._cursor

    def close(self):
        self.closed = True
