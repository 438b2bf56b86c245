from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, Tuple, Type, TypeVar

from adapters.errors import DatabaseConnectionError, QueryError
from adapters.identifiers import sanitize_identifier
from adapters.results import QueryOutcome, QueryResult, TableColumn, normalize_outcome


logger = logging.getLogger(__name__)

T = TypeVar("T")


class DatabaseAdapter(ABC):
    """One live connection to one engine behind a uniform query/introspection API.

    Subclasses implement the driver-specific ``_open``, ``_run``,
    ``_fetch_tables`` and ``_fetch_columns`` hooks; this class owns the
    connection lifecycle and turns driver exceptions into ``AdapterError``
    subclasses without changing their message text.
    """

    engine: str = "unknown"
    dialect: str = "unknown"
    driver_errors: Tuple[Type[BaseException], ...] = ()

    def __init__(self, connection_uri: str):
        self.connection_uri = connection_uri
        self._conn: Optional[Any] = None

    def __enter__(self) -> "DatabaseAdapter":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.disconnect()
        return False

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> None:
        if self._conn is not None:
            return
        try:
            self._conn = self._open()
        except self.driver_errors as exc:
            logger.warning("%s connect failed: %s", self.engine, self._error_message(exc))
            raise DatabaseConnectionError(self._error_message(exc)) from exc
        logger.debug("%s connection opened", self.engine)

    def disconnect(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            self._close(conn)
        except self.driver_errors as exc:
            logger.warning("%s disconnect failed: %s", self.engine, self._error_message(exc))
            return
        logger.debug("%s connection closed", self.engine)

    def query(self, sql: str) -> QueryResult:
        outcome = self._call(self._run, sql)
        return normalize_outcome(outcome)

    def list_tables(self) -> List[str]:
        return self._call(self._fetch_tables)

    def list_columns(self, table: str) -> List[TableColumn]:
        safe_table = sanitize_identifier(table)
        return self._call(self._fetch_columns, safe_table)

    def _call(self, operation: Callable[..., T], *args: Any) -> T:
        self.connect()
        try:
            return operation(*args)
        except self.driver_errors as exc:
            raise QueryError(self._error_message(exc)) from exc

    def _error_message(self, exc: BaseException) -> str:
        return str(exc)

    def _close(self, conn: Any) -> None:
        conn.close()

    @abstractmethod
    def _open(self) -> Any:
        raise NotImplementedError

    @abstractmethod
    def _run(self, sql: str) -> QueryOutcome:
        raise NotImplementedError

    @abstractmethod
    def _fetch_tables(self) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def _fetch_columns(self, table: str) -> List[TableColumn]:
        raise NotImplementedError


@contextmanager
def adapter_session(adapter: DatabaseAdapter) -> Iterator[DatabaseAdapter]:
    try:
        adapter.connect()
        yield adapter
    finally:
        adapter.disconnect()
