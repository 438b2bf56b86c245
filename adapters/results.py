from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Union


MESSAGE_COLUMN = "Message"
MUTATION_MESSAGE = "Success. Affected Rows: {count}"


@dataclass(frozen=True)
class QueryResult:
    columns: List[str] = field(default_factory=list)
    rows: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"columns": list(self.columns), "rows": [dict(row) for row in self.rows]}


@dataclass(frozen=True)
class TableColumn:
    field: str
    type: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "type": self.type}


@dataclass(frozen=True)
class RowSet:
    """Raw row-returning outcome: column names plus value tuples in column order."""

    columns: Sequence[str]
    rows: Sequence[Sequence[Any]]


@dataclass(frozen=True)
class MutationHeader:
    """Raw outcome of a statement that reports only an affected-row count."""

    affected_rows: int


QueryOutcome = Union[RowSet, MutationHeader]


def mutation_result(affected_rows: int) -> QueryResult:
    # DB-API drivers report -1 when the count is not applicable (DDL).
    count = max(int(affected_rows or 0), 0)
    return QueryResult(
        columns=[MESSAGE_COLUMN],
        rows=[{MESSAGE_COLUMN: MUTATION_MESSAGE.format(count=count)}],
    )


def json_value(value: Any) -> Any:
    """Render driver values that have no JSON form; everything else passes through."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        # Same text form PostgreSQL uses for bytea output.
        return "\\x" + bytes(value).hex()
    return value


def normalize_outcome(outcome: QueryOutcome) -> QueryResult:
    if isinstance(outcome, MutationHeader):
        return mutation_result(outcome.affected_rows)
    if isinstance(outcome, RowSet):
        columns = [str(name) for name in outcome.columns]
        # Duplicate column names keep every entry in columns; the record keeps the last value.
        rows = [{columns[i]: json_value(row[i]) for i in range(len(columns))} for row in outcome.rows]
        return QueryResult(columns=columns, rows=rows)
    raise TypeError(f"Unknown query outcome: {type(outcome).__name__}")


def outcome_from_cursor(cursor: Any) -> QueryOutcome:
    """Classify a DB-API cursor after execute(): field metadata means a row set."""
    if cursor.description is None:
        return MutationHeader(affected_rows=cursor.rowcount)
    columns = [desc[0] for desc in cursor.description]
    return RowSet(columns=columns, rows=list(cursor.fetchall()))
