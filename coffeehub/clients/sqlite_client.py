import sqlite3
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WriteResult:
    """Outcome of an INSERT, UPDATE or DELETE statement."""

    lastrowid: Optional[int]
    rowcount: int


class SqliteClient:
    """SQLite database client with connection management."""

    def __init__(self, connection_string: str):
        self.connection_string = connection_string
        # Store methods call sqlite3 directly from the event loop thread, which need not be the main thread.
        self._connection = sqlite3.connect(self.connection_string, check_same_thread=False)
        self._connection.row_factory = sqlite3.Row

    def execute_query(self, query: str, params=None) -> list[sqlite3.Row]:
        """Execute a read query and return all rows."""
        cursor = self._connection.cursor()
        try:
            if params:
                cursor.execute(query, params)
            else:
                cursor.execute(query)
            return cursor.fetchall()
        finally:
            cursor.close()

    def execute_write(self, query: str, params=None) -> WriteResult:
        """Execute a write statement and commit it."""
        cursor = self._connection.cursor()
        try:
            if params:
                cursor.execute(query, params)
            else:
                cursor.execute(query)
            self._connection.commit()
            return WriteResult(lastrowid=cursor.lastrowid, rowcount=cursor.rowcount)
        except sqlite3.Error:
            self._connection.rollback()
            raise
        finally:
            cursor.close()

    def execute_script(self, script: str) -> None:
        """Execute several DDL statements at once."""
        self._connection.executescript(script)

    def close(self):
        """Close the database connection."""
        self._connection.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit with cleanup."""
        self.close()
        return False
