from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import List

from adapters.base import DatabaseAdapter
from adapters.errors import DatabaseConnectionError
from adapters.identifiers import quote_identifier
from adapters.results import QueryOutcome, TableColumn, outcome_from_cursor
from adapters.uri import sqlite_path


MEMORY_DATABASE = ":memory:"


class SQLiteAdapter(DatabaseAdapter):
    engine = "sqlite"
    dialect = "sqlite"
    driver_errors = (sqlite3.Error,)

    def _db_path(self) -> str:
        raw = sqlite_path(self.connection_uri)
        if raw == MEMORY_DATABASE:
            return raw
        db_path = Path(raw)
        if not db_path.exists():
            raise DatabaseConnectionError(f"SQLite database file does not exist: {db_path}")
        return str(db_path)

    def _open(self) -> sqlite3.Connection:
        # isolation_level=None keeps every statement in autocommit mode.
        return sqlite3.connect(self._db_path(), isolation_level=None)

    def _run(self, sql: str) -> QueryOutcome:
        cur = self._conn.cursor()
        try:
            cur.execute(sql)
            return outcome_from_cursor(cur)
        finally:
            cur.close()

    def _fetch_tables(self) -> List[str]:
        cur = self._conn.execute(
            """
            SELECT name
            FROM sqlite_master
            WHERE type = 'table'
              AND name NOT LIKE 'sqlite_%'
            """
        )
        return [row[0] for row in cur.fetchall()]

    def _fetch_columns(self, table: str) -> List[TableColumn]:
        cur = self._conn.execute(f"PRAGMA table_info({quote_identifier(table, self.dialect)})")
        return [TableColumn(field=row[1], type=str(row[2] or "")) for row in cur.fetchall()]
