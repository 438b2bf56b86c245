from __future__ import annotations

from typing import List

import psycopg

from adapters.base import DatabaseAdapter
from adapters.results import QueryOutcome, TableColumn, outcome_from_cursor


DEFAULT_SCHEMA = "public"


class PostgresAdapter(DatabaseAdapter):
    engine = "postgres"
    dialect = "postgres"
    driver_errors = (psycopg.Error,)

    def _open(self) -> psycopg.Connection:
        return psycopg.connect(self.connection_uri, autocommit=True)

    def _run(self, sql: str) -> QueryOutcome:
        with self._conn.cursor() as cur:
            cur.execute(sql)
            return outcome_from_cursor(cur)

    def _fetch_tables(self) -> List[str]:
        with self._conn.cursor() as cur:
            cur.execute(
                """
                SELECT table_name
                FROM information_schema.tables
                WHERE table_schema = %s
                  AND table_type = 'BASE TABLE'
                """,
                (DEFAULT_SCHEMA,),
            )
            return [row[0] for row in cur.fetchall()]

    def _fetch_columns(self, table: str) -> List[TableColumn]:
        with self._conn.cursor() as cur:
            cur.execute(
                """
                SELECT column_name, data_type
                FROM information_schema.columns
                WHERE table_schema = %s
                  AND table_name = %s
                ORDER BY ordinal_position
                """,
                (DEFAULT_SCHEMA, table),
            )
            return [TableColumn(field=name, type=data_type) for name, data_type in cur.fetchall()]
