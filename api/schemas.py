from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1, description="Raw SQL, executed verbatim")
    db_type: Optional[str] = Field(default=None, description="Engine kind: mysql, postgres or sqlite")
    connection_string: Optional[str] = Field(default=None, description="Overrides the server default connection")


class QueryResponse(BaseModel):
    columns: List[str]
    rows: List[Dict[str, Any]]


class TableColumnResponse(BaseModel):
    field: str
    type: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    engines: List[str]
