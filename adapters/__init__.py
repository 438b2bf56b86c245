"""Database adapter layer for multi-engine query execution and schema introspection."""

from adapters.base import DatabaseAdapter, adapter_session
from adapters.errors import (
    AdapterError,
    ConfigurationError,
    DatabaseConnectionError,
    QueryError,
    UnsupportedEngineError,
    ValidationError,
)
from adapters.factory import build_adapter, supported_engines
from adapters.results import QueryResult, TableColumn

__all__ = [
    "AdapterError",
    "ConfigurationError",
    "DatabaseAdapter",
    "DatabaseConnectionError",
    "QueryError",
    "QueryResult",
    "TableColumn",
    "UnsupportedEngineError",
    "ValidationError",
    "adapter_session",
    "build_adapter",
    "supported_engines",
]
