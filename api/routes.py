import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Header, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from adapters.factory import supported_engines
from api.schemas import ErrorResponse, HealthResponse, QueryRequest, QueryResponse
from service.orchestrator import ErrorEnvelope, QueryOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()

_CLIENT_ERRORS = {"ValidationError", "UnsupportedEngineError"}


def get_orchestrator(request: Request) -> QueryOrchestrator:
    return request.app.state.orchestrator


def _error_response(envelope: ErrorEnvelope) -> JSONResponse:
    status_code = 400 if envelope.kind in _CLIENT_ERRORS else 500
    return JSONResponse(status_code=status_code, content=envelope.to_dict())


def _json_response(payload: Any) -> JSONResponse:
    try:
        content = jsonable_encoder(payload)
    except (TypeError, ValueError) as exc:
        logger.warning("Result could not be encoded as JSON: %s", exc)
        return _error_response(ErrorEnvelope.from_exception(exc, "Result could not be encoded as JSON"))
    return JSONResponse(content=content)


@router.get("/health", response_model=HealthResponse)
def health() -> dict:
    return {"status": "ok", "engines": supported_engines()}


@router.post(
    "/query",
    response_model=QueryResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def run_query(
    request: QueryRequest,
    orchestrator: QueryOrchestrator = Depends(get_orchestrator),
    x_db_type: Optional[str] = Header(default=None),
    x_connection_string: Optional[str] = Header(default=None),
):
    outcome = orchestrator.execute(
        request.query,
        engine_kind=request.db_type or x_db_type,
        connection_uri=request.connection_string or x_connection_string,
    )
    if isinstance(outcome, ErrorEnvelope):
        return _error_response(outcome)
    return _json_response(outcome.to_dict())


@router.get("/schema", responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def describe_schema(
    table: Optional[str] = Query(default=None),
    db_type: Optional[str] = Query(default=None),
    connection_string: Optional[str] = Query(default=None),
    orchestrator: QueryOrchestrator = Depends(get_orchestrator),
    x_db_type: Optional[str] = Header(default=None),
    x_connection_string: Optional[str] = Header(default=None),
):
    outcome = orchestrator.describe_schema(
        table=table or None,
        engine_kind=db_type or x_db_type,
        connection_uri=connection_string or x_connection_string,
    )
    if isinstance(outcome, ErrorEnvelope):
        return _error_response(outcome)
    return _json_response([item.to_dict() if hasattr(item, "to_dict") else item for item in outcome])
