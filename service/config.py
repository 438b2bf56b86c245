from __future__ import annotations

import os
from typing import Optional

from service.orchestrator import DEFAULT_ENGINE, ConnectionDescriptor
from utils.env_loader import load_environments


def load_default_descriptor(env_path: str = ".env") -> Optional[ConnectionDescriptor]:
    load_environments(env_path)
    connection_uri = (os.getenv("DATABASE_URL") or "").strip()
    if not connection_uri:
        return None
    engine_kind = (os.getenv("DB_ENGINE") or DEFAULT_ENGINE).strip().lower()
    return ConnectionDescriptor(engine_kind=engine_kind, connection_uri=connection_uri)


def log_level() -> str:
    load_environments()
    return (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
