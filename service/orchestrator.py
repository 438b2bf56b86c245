from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

from adapters.base import DatabaseAdapter, adapter_session
from adapters.errors import AdapterError, ConfigurationError
from adapters.factory import build_adapter
from adapters.identifiers import sanitize_identifier
from adapters.results import QueryResult, TableColumn
from adapters.uri import redact_uri


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ENGINE = "mysql"
QUERY_FAILED = "Failed to execute query"
SCHEMA_FAILED = "Failed to fetch schema"


@dataclass(frozen=True)
class ConnectionDescriptor:
    engine_kind: str
    connection_uri: str


@dataclass(frozen=True)
class ErrorEnvelope:
    error: str
    kind: str = "AdapterError"

    @classmethod
    def from_exception(cls, exc: BaseException, fallback: str) -> "ErrorEnvelope":
        return cls(error=str(exc) or fallback, kind=type(exc).__name__)

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.error}


SchemaListing = Union[List[str], List[TableColumn]]


class QueryOrchestrator:
    """Runs one adapter operation per call inside a connect/disconnect scope.

    Failures never escape: every exception is returned as an ``ErrorEnvelope``
    whose text is the raised exception's message, unchanged.
    """

    def __init__(
        self,
        default_descriptor: Optional[ConnectionDescriptor] = None,
        adapter_factory: Callable[[str, str], DatabaseAdapter] = build_adapter,
    ):
        self.default_descriptor = default_descriptor
        self.adapter_factory = adapter_factory

    def resolve_descriptor(
        self,
        engine_kind: Optional[str] = None,
        connection_uri: Optional[str] = None,
    ) -> ConnectionDescriptor:
        if connection_uri:
            if not engine_kind and self.default_descriptor is not None:
                engine_kind = self.default_descriptor.engine_kind
            return ConnectionDescriptor(engine_kind=engine_kind or DEFAULT_ENGINE, connection_uri=connection_uri)
        if self.default_descriptor is not None:
            return self.default_descriptor
        raise ConfigurationError("Database connection string not configured")

    def execute(
        self,
        sql: str,
        engine_kind: Optional[str] = None,
        connection_uri: Optional[str] = None,
    ) -> Union[QueryResult, ErrorEnvelope]:
        return self._run_operation(
            "query",
            lambda adapter: adapter.query(sql),
            engine_kind,
            connection_uri,
            fallback=QUERY_FAILED,
        )

    def describe_schema(
        self,
        table: Optional[str] = None,
        engine_kind: Optional[str] = None,
        connection_uri: Optional[str] = None,
    ) -> Union[SchemaListing, ErrorEnvelope]:
        if table is None:
            return self._run_operation(
                "list_tables",
                lambda adapter: adapter.list_tables(),
                engine_kind,
                connection_uri,
                fallback=SCHEMA_FAILED,
            )
        return self._run_operation(
            "list_columns",
            lambda adapter: adapter.list_columns(table),
            engine_kind,
            connection_uri,
            fallback=SCHEMA_FAILED,
            identifier=table,
        )

    def _run_operation(
        self,
        name: str,
        operation: Callable[[DatabaseAdapter], T],
        engine_kind: Optional[str],
        connection_uri: Optional[str],
        fallback: str,
        identifier: Optional[Any] = None,
    ) -> Union[T, ErrorEnvelope]:
        try:
            if identifier is not None:
                # Reject bad identifiers before a connection is ever opened.
                sanitize_identifier(identifier)
            descriptor = self.resolve_descriptor(engine_kind, connection_uri)
            adapter = self.adapter_factory(descriptor.engine_kind, descriptor.connection_uri)
            logger.info("Running %s on %s", name, adapter.engine)
            logger.debug("Connection target: %s", redact_uri(descriptor.connection_uri))
            with adapter_session(adapter):
                return operation(adapter)
        except AdapterError as exc:
            logger.warning("%s failed (%s): %s", name, type(exc).__name__, exc)
            return ErrorEnvelope.from_exception(exc, fallback)
        except Exception as exc:
            logger.exception("Unexpected error during %s", name)
            return ErrorEnvelope.from_exception(exc, fallback)
