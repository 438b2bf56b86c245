from __future__ import annotations

import re
from typing import Any

from adapters.errors import ValidationError


INVALID_TABLE_NAME = "Invalid table name"
IDENTIFIER_PATTERN = re.compile(r"[A-Za-z0-9_]+", re.ASCII)

_QUOTES = {
    "mysql": "`",
    "postgres": '"',
    "sqlite": '"',
}


def is_valid_identifier(name: Any) -> bool:
    return isinstance(name, str) and IDENTIFIER_PATTERN.fullmatch(name) is not None


def sanitize_identifier(name: Any) -> str:
    """Return ``name`` unchanged if it is letters, digits and underscores only.

    Drivers cannot bind identifiers as parameters, so this is the only thing
    standing between a caller-supplied table name and the query text.
    """
    if not is_valid_identifier(name):
        raise ValidationError(INVALID_TABLE_NAME)
    return name


def quote_identifier(name: Any, dialect: str) -> str:
    safe_name = sanitize_identifier(name)
    quote = _QUOTES.get(dialect, '"')
    return f"{quote}{safe_name}{quote}"
