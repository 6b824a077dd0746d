# working_calendar/main.py
"""FastAPI application for the working calendar task service."""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from working_calendar import config
from working_calendar.database import create_db_and_tables
from working_calendar.errors import InternalError, NotFoundError, ValidationError
from working_calendar.owner import OWNER_HEADER
from working_calendar.routes.stats import router as stats_router
from working_calendar.routes.tasks import router as tasks_router

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Location prefixes FastAPI puts in front of the offending field name
_REQUEST_PARTS = {"body", "query", "path", "header"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup via SQLModel create_all."""
    create_db_and_tables()
    yield


app = FastAPI(title="Working Calendar", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization", OWNER_HEADER],
)

app.include_router(tasks_router)
app.include_router(stats_router)


def _validation_response(errors: list[dict]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Validation failed", "errors": errors},
    )


def _internal_response() -> JSONResponse:
    error_id = uuid.uuid4().hex
    logger.error("Internal error %s", error_id)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "details": error_id},
    )


@app.exception_handler(ValidationError)
async def handle_validation_error(request: Request, exc: ValidationError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return _validation_response([e.to_dict() for e in exc.errors])


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        path = [str(part) for part in err["loc"] if part not in _REQUEST_PARTS]
        errors.append({"field": ".".join(path) or "body", "reason": err["msg"]})
    return _validation_response(errors)


@app.exception_handler(NotFoundError)
async def handle_not_found(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"message": str(exc)})


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    message = "Resource not found" if exc.status_code == 404 else exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(InternalError)
async def handle_internal_error(request: Request, exc: InternalError):
    return _internal_response()


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _internal_response()


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "working-calendar-api"}
