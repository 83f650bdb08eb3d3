import sqlite3


class SqliteClient:
    """SQLite database client with connection management.

    Reads go through execute_query, writes through execute_write which
    commits and reports the affected row count.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._connection = sqlite3.connect(self.db_path)

    def execute_query(self, query: str, params=None) -> list[tuple]:
        """Execute a read query and return all rows."""
        cursor = self._connection.cursor()
        try:
            cursor.execute(query, params or ())
            return cursor.fetchall()
        finally:
            cursor.close()

    def execute_write(self, query: str, params=None) -> int:
        """Execute a write statement, commit, and return the affected row count."""
        cursor = self._connection.cursor()
        try:
            cursor.execute(query, params or ())
            self._connection.commit()
            return cursor.rowcount
        except sqlite3.Error:
            self._connection.rollback()
            raise
        finally:
            cursor.close()

    def close(self):
        """Close the database connection."""
        self._connection.close()

