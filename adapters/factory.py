from __future__ import annotations

from typing import Dict, List, Optional, Type

from adapters.base import DatabaseAdapter
from adapters.errors import UnsupportedEngineError
from adapters.mysql import MySQLAdapter
from adapters.postgres import PostgresAdapter
from adapters.sqlite import SQLiteAdapter


ADAPTER_REGISTRY: Dict[str, Type[DatabaseAdapter]] = {
    "mysql": MySQLAdapter,
    "postgres": PostgresAdapter,
    "sqlite": SQLiteAdapter,
}

ENGINE_ALIASES: Dict[str, str] = {
    "postgresql": "postgres",
    "mariadb": "mysql",
}


def normalize_engine(engine_kind: Optional[str]) -> str:
    engine = (engine_kind or "").strip().lower()
    engine = ENGINE_ALIASES.get(engine, engine)
    if engine not in ADAPTER_REGISTRY:
        raise UnsupportedEngineError(f"Unsupported database type: {engine_kind}")
    return engine


def build_adapter(engine_kind: Optional[str], connection_uri: str) -> DatabaseAdapter:
    adapter_cls = ADAPTER_REGISTRY[normalize_engine(engine_kind)]
    return adapter_cls(connection_uri)


def register_adapter(engine_kind: str, adapter_cls: Type[DatabaseAdapter]) -> None:
    ADAPTER_REGISTRY[engine_kind.strip().lower()] = adapter_cls


def supported_engines() -> List[str]:
    return sorted(ADAPTER_REGISTRY)
