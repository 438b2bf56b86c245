import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.routes import router
from service.config import load_default_descriptor, log_level
from service.orchestrator import QueryOrchestrator


def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return JSONResponse(status_code=400, content={"error": "; ".join(messages) or "Invalid request"})


def create_app(orchestrator: Optional[QueryOrchestrator] = None) -> FastAPI:
    logging.basicConfig(level=log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    application = FastAPI(
        title="SQL Console API",
        version="0.1.0",
        description="Raw SQL execution and schema browsing across MySQL, PostgreSQL and SQLite",
    )
    application.state.orchestrator = orchestrator or QueryOrchestrator(default_descriptor=load_default_descriptor())
    application.add_exception_handler(RequestValidationError, _validation_error_handler)
    application.include_router(router)
    return application


app = create_app()
