"""Main FastAPI application."""
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import inspect

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.core.database import engine
from app.api.v1 import router as v1_router
from app.models import account, warehouse, shipment  # noqa: F401  register models with Base
from app.services.exceptions import DirectoryError, ValidationError


# Setup logging
setup_logging(settings.DEBUG)
logger = get_logger(__name__)

REQUIRED_TABLES = ("accounts", "warehouses", "shipments")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"Starting {settings.APP_NAME}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    try:
        async with engine.connect() as conn:
            existing = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        missing = [t for t in REQUIRED_TABLES if t not in existing]
        if missing:
            logger.error(f"Database is missing tables: {missing}. Run 'alembic upgrade head'.")
        else:
            logger.info("Database schema check passed.")
    except Exception as e:
        # reachable-but-odd databases should not stop the worker from booting
        logger.error(f"Database schema check failed: {e}")

    yield
    logger.info(f"Shutting down {settings.APP_NAME}")
    await engine.dispose()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Per-account directory of pickup warehouses",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag each request with an id and log its outcome."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    request.state.request_id = request_id
    started = time.perf_counter()

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    response.headers["X-Request-ID"] = request_id
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms}ms)",
        extra={"request_id": request_id},
    )
    return response


# Include API router
app.include_router(v1_router, prefix="/api")


@app.exception_handler(DirectoryError)
async def directory_exception_handler(request: Request, exc: DirectoryError):
    """Map service errors to their HTTP status and error body."""
    log = logger.warning if exc.status_code >= 409 else logger.info
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests in the same shape as service validation errors."""
    errors = []
    for err in exc.errors():
        # drop the leading "body" / "query" / "path" segment
        loc = [str(part) for part in err.get("loc", ())[1:]]
        errors.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    logger.warning(
        f"Request validation failed: {[e['field'] for e in errors]}",
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(status_code=422, content=ValidationError(errors).to_dict())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        f"Unhandled error on {request.method} {request.url.path}",
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error_code": "INTERNAL_ERROR"},
    )


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.APP_NAME}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/api/docs",
    }
