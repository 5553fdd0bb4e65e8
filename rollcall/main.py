"""Main FastAPI application."""
from fastapi import FastAPI, HTTPException, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy import text

from rollcall.api.v1.router import api_router
from rollcall.api.deps import get_db
from rollcall.core.config import settings
from rollcall.core.exceptions import StoreError
from rollcall.core.rate_limit import limiter
from rollcall.core.logging_config import setup_logging, get_logger
from rollcall.middleware import LoggingMiddleware

# Initialize structured logging
setup_logging(level=settings.LOG_LEVEL, json_logs=settings.ENVIRONMENT == "production")
logger = get_logger(__name__)

if settings.ENVIRONMENT == "production":
    settings.validate_production_config()

logger.info(
    "application_starting",
    app_title=settings.APP_TITLE,
    app_version=settings.APP_VERSION,
    environment=settings.ENVIRONMENT,
    timezone=settings.TIMEZONE,
    session_ttl_seconds=settings.SESSION_TTL_SECONDS,
)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    """Last-resort translation for store failures an endpoint did not catch."""
    logger.error("unhandled_store_error", error_type=type(exc).__name__)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Must be added before other middleware for proper request tracking
app.add_middleware(LoggingMiddleware)


@app.middleware("http")
async def add_api_version_header(request: Request, call_next):
    """Add X-API-Version header to all responses for version tracking."""
    response = await call_next(request)
    response.headers["X-API-Version"] = settings.APP_VERSION
    return response


# Bearer-token auth, so no cookies cross origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-API-Version"],
)

app.include_router(api_router)


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns:
        - status: "healthy" or "unhealthy"
        - database: Database connection status and pool metrics
        - environment: Current environment setting

    Returns 503 if database is unreachable.
    """
    from rollcall.db.session import engine

    pool = engine.pool
    pool_stats = {}
    # Only QueuePool exposes counters; SQLite dev setups use other pools
    if hasattr(pool, "checkedout"):
        pool_stats = {
            "size": pool.size(),
            "checked_in": pool.checkedin(),
            "checked_out": pool.checkedout(),
            "overflow": pool.overflow(),
        }

    health_status = {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": settings.APP_VERSION,
        "database": {
            "status": "connected",
            "pool": pool_stats,
        }
    }

    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        health_status["status"] = "unhealthy"
        health_status["database"]["status"] = "error"
        logger.error("health_check_failed", error=str(e))
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
