from __future__ import annotations

from typing import Any, Callable, Dict, List

import pymysql

from adapters.base import DatabaseAdapter
from adapters.errors import DatabaseConnectionError
from adapters.identifiers import quote_identifier
from adapters.results import QueryOutcome, TableColumn, outcome_from_cursor
from adapters.uri import parse_server_uri


def _as_text(value: Any) -> str:
    # Some server versions send SHOW COLUMNS types as binary strings.
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _as_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


# URI query options passed to pymysql.connect under the same keyword.
CONNECT_OPTIONS: Dict[str, Callable[[str], Any]] = {
    "charset": str,
    "connect_timeout": int,
    "read_timeout": int,
    "write_timeout": int,
    "ssl_ca": str,
    "ssl_cert": str,
    "ssl_key": str,
    "ssl_verify_cert": _as_bool,
    "ssl_verify_identity": _as_bool,
    "ssl_disabled": _as_bool,
}


def connect_options(options: Dict[str, str]) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {}
    for name, raw in options.items():
        if name == "ssl":
            try:
                enabled = _as_bool(raw)
            except ValueError as exc:
                raise DatabaseConnectionError(f"Invalid connection option ssl: {exc}") from exc
            # Bare ssl=true asks for TLS; certificates come from the ssl_* options.
            if enabled:
                kwargs["ssl"] = {"check_hostname": False}
            else:
                kwargs["ssl_disabled"] = True
            continue
        converter = CONNECT_OPTIONS.get(name)
        if converter is None:
            raise DatabaseConnectionError(f"Unsupported connection option: {name}")
        try:
            kwargs[name] = converter(raw)
        except ValueError as exc:
            raise DatabaseConnectionError(f"Invalid connection option {name}: {exc}") from exc
    return kwargs


class MySQLAdapter(DatabaseAdapter):
    engine = "mysql"
    dialect = "mysql"
    driver_errors = (pymysql.MySQLError,)

    def _db_params(self) -> dict:
        params = parse_server_uri(self.connection_uri, schemes={"mysql", "mariadb"}, default_port=3306)
        db_params = {
            "host": params["host"],
            "port": int(params["port"]),
            "user": params["user"],
            "password": params["password"],
            "database": params["database"],
            "charset": "utf8mb4",
            "autocommit": True,
        }
        db_params.update(connect_options(params["options"]))
        return db_params

    def _open(self) -> pymysql.connections.Connection:
        return pymysql.connect(**self._db_params())

    def _error_message(self, exc: BaseException) -> str:
        # PyMySQL errors carry (errno, message); keep only the server text.
        if len(exc.args) >= 2 and isinstance(exc.args[1], str):
            return exc.args[1]
        return str(exc)

    def _run(self, sql: str) -> QueryOutcome:
        with self._conn.cursor() as cur:
            cur.execute(sql)
            return outcome_from_cursor(cur)

    def _fetch_tables(self) -> List[str]:
        with self._conn.cursor() as cur:
            cur.execute("SHOW FULL TABLES WHERE Table_type = 'BASE TABLE'")
            return [_as_text(row[0]) for row in cur.fetchall()]

    def _fetch_columns(self, table: str) -> List[TableColumn]:
        with self._conn.cursor() as cur:
            cur.execute(f"SHOW COLUMNS FROM {quote_identifier(table, self.dialect)}")
            return [TableColumn(field=_as_text(row[0]), type=_as_text(row[1])) for row in cur.fetchall()]
