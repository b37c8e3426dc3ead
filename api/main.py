"""
FastAPI application for the data receiver.

Exposes the received_data store via HTTP endpoints with auto-generated
OpenAPI documentation at /docs.
"""

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from typing import Optional

from database import DuplicateId, RecordStore, StorageFailure
from models import Record, RecordFilter, utc_now_iso
from utils import log

from .config import settings
from .models import (
    ErrorResponse,
    HealthResponse,
    RecordListResponse,
    SubmissionRequest,
    SubmissionResponse,
)
from .views import render_records

logger = log.setup_verbose_logging("receiver.api")

MISSING_FIELDS_MESSAGE = "Missing required fields (id, origin, mime_data)"
SAVE_FAILED_MESSAGE = "Failed to save data to the database"
FETCH_FAILED_MESSAGE = "Failed to retrieve data from the database"


class MissingFields(Exception):
    """A submission lacked one of id, origin, mime_data."""


def get_store(request: Request) -> RecordStore:
    """Shared store owned by the application lifecycle."""
    return request.app.state.store


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _wants_json(request: Request) -> bool:
    accept = request.headers.get("accept", "")
    return "application/json" in accept and "text/html" not in accept


# ----------------------------------------------------------------
# Data Endpoints
# ----------------------------------------------------------------

def create_record(
    body: SubmissionRequest,
    store: RecordStore = Depends(get_store),
):
    """
    Store a new record.

    The server assigns the `datetime` field; ids must be unique.
    """
    if not body.id or not body.origin or not body.mime_data:
        raise MissingFields(MISSING_FIELDS_MESSAGE)

    record = Record(
        id=body.id,
        origin=body.origin,
        mime_data=body.mime_data,
        datetime=utc_now_iso(),
    )
    try:
        store.insert(record)
    except DuplicateId as e:
        logger.warning(f"Rejected duplicate submission: ID={e.record_id}")
        raise

    logger.info(
        f"Data saved to database: ID={record.id}, Origin={record.origin}, "
        f'mime_data="{record.mime_data}", Datetime={record.datetime}'
    )
    return SubmissionResponse(
        message="Data received and saved successfully",
        data=record,
    )


def list_records(
    request: Request,
    origin: Optional[str] = Query(None, description="Exact origin match"),
    date: Optional[str] = Query(None, description="Calendar date of insertion (YYYY-MM-DD)"),
    store: RecordStore = Depends(get_store),
):
    """
    List stored records, optionally filtered by origin and/or date.

    Renders an HTML table; clients that accept only JSON get a JSON body.
    """
    try:
        records = store.query(RecordFilter(origin=origin, date=date))
    except StorageFailure:
        return _error(500, FETCH_FAILED_MESSAGE)

    if _wants_json(request):
        payload = RecordListResponse(count=len(records), data=records)
        return JSONResponse(content=payload.model_dump())
    return HTMLResponse(render_records(records, origin=origin, date=date))


def health(store: RecordStore = Depends(get_store)):
    """Service status and record count."""
    count = None
    status = "degraded"
    if store.is_ready:
        try:
            count = store.count()
            status = "healthy"
        except StorageFailure as e:
            logger.error(f"Health check failed: {e}")
    return HealthResponse(
        service=settings.API_TITLE,
        version=settings.API_VERSION,
        status=status,
        database_path=store.db_path,
        record_count=count,
    )


# ----------------------------------------------------------------
# Error Handlers
# ----------------------------------------------------------------

async def missing_fields_handler(request: Request, exc: MissingFields):
    logger.warning(f"Rejected submission: {exc}")
    return _error(400, MISSING_FIELDS_MESSAGE)


async def invalid_body_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected submission body: {exc.errors()}")
    return _error(400, MISSING_FIELDS_MESSAGE)


async def duplicate_id_handler(request: Request, exc: DuplicateId):
    return _error(409, str(exc))


async def storage_failure_handler(request: Request, exc: StorageFailure):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return _error(500, SAVE_FAILED_MESSAGE)


# ----------------------------------------------------------------
# Application
# ----------------------------------------------------------------

def create_app(db_path: str = None) -> FastAPI:
    """Build the application and the store it owns."""
    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = RecordStore(db_path)

    error_responses = {
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }
    app.add_api_route(
        "/data", create_record, methods=["POST"], status_code=201,
        response_model=SubmissionResponse, responses=error_responses, tags=["Data"],
    )
    app.add_api_route(
        "/data", list_records, methods=["GET"],
        response_class=HTMLResponse, responses={500: {"model": ErrorResponse}}, tags=["Data"],
    )
    app.add_api_route(
        "/health", health, methods=["GET"], response_model=HealthResponse, tags=["Health"],
    )

    app.add_exception_handler(MissingFields, missing_fields_handler)
    app.add_exception_handler(RequestValidationError, invalid_body_handler)
    app.add_exception_handler(DuplicateId, duplicate_id_handler)
    app.add_exception_handler(StorageFailure, storage_failure_handler)

    @app.on_event("startup")
    def startup_event():
        """Open the database before serving requests."""
        app.state.store.initialize()
        if not app.state.store.is_ready:
            logger.error("Database unavailable; requests will fail until restart")

    @app.on_event("shutdown")
    def shutdown_event():
        """Close database connection on shutdown."""
        app.state.store.shutdown()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    log.header(f"{settings.API_TITLE} v{settings.API_VERSION}")
    log.info(f"Database: {settings.DB_PATH}")
    log.ok(f"Starting server on {settings.HOST}:{settings.PORT}")
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level="info"
    )
