"""
FastAPI application entry point for the Account Health API.

Configures logging, CORS, API routers, and the exception handlers that turn
the core error hierarchy into the dashboard's response envelope:

    { "success": false, "error": { "code": ..., "message": ..., "details": ... } }

Status mapping:
- InvalidIdentifierError (unknown intervention / segment axis / value): 400
- Request body or query validation failure: 400 INVALID_REQUEST
- RepositoryUnavailableError: 503
- Anything else: 500 SERVER_ERROR

Run locally:
    uvicorn account_health.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from account_health import __version__
from account_health.api import api_router
from account_health.core.config import Settings, get_settings
from account_health.core.database import close_db, execute_query, init_db
from account_health.core.dependencies import SettingsDep
from account_health.core.exceptions import (
    AccountHealthError,
    InvalidIdentifierError,
    RepositoryUnavailableError,
)
from account_health.models import HealthCheckResponse

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup and shutdown events.

    The asyncpg pool is only created for the postgres backend. A failed pool
    init is logged and startup continues; /segments and /interventions need
    no database, and data endpoints report 503 until the store is reachable.
    """
    settings = get_settings()
    logger.info(f"Account Health API starting (repository_backend={settings.repository_backend})")

    if settings.repository_backend == 'postgres':
        try:
            await init_db()
            logger.info("Database connection pool initialized")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")

    yield

    logger.info("Account Health API shutting down")
    try:
        await close_db()
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")


# =============================================================================
# Exception Handlers
# =============================================================================


def _error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None
) -> JSONResponse:
    error: Dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": False, "error": error}),
    )


async def invalid_identifier_handler(request: Request, exc: InvalidIdentifierError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return _error_response(400, exc.code, exc.message, exc.details)


async def repository_unavailable_handler(request: Request, exc: RepositoryUnavailableError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    return _error_response(503, exc.code, exc.message)


async def account_health_error_handler(request: Request, exc: AccountHealthError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    return _error_response(500, exc.code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} rejected: invalid request parameters")
    return _error_response(
        400,
        "INVALID_REQUEST",
        "Invalid request parameters",
        {"errors": exc.errors()},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _error_response(500, "SERVER_ERROR", "An unexpected error occurred")


# =============================================================================
# Application Factory
# =============================================================================


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to read CORS origins from. Defaults to get_settings().

    Returns:
        Configured FastAPI instance with routers and exception handlers.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Account Health API",
        version=__version__,
        description=(
            "Segment-level account health KPIs for real estate agents "
            "and a what-if intervention simulator."
        ),
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Starlette resolves handlers along the exception MRO
    app.add_exception_handler(InvalidIdentifierError, invalid_identifier_handler)
    app.add_exception_handler(RepositoryUnavailableError, repository_unavailable_handler)
    app.add_exception_handler(AccountHealthError, account_health_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router)

    @app.get("/health", response_model=HealthCheckResponse)
    async def health_check(settings: SettingsDep) -> HealthCheckResponse:
        """
        Health check endpoint for monitoring and load balancer probes.

        For the postgres backend the pool is probed with SELECT 1; the memory
        backend is always reported as connected.
        """
        database = "connected"
        if settings.repository_backend == 'postgres':
            try:
                await execute_query("SELECT 1")
            except Exception as e:
                logger.warning(f"Health check database probe failed: {e}")
                database = "disconnected"

        return HealthCheckResponse(
            status="healthy" if database == "connected" else "unhealthy",
            dependencies={"database": database},
            timestamp=datetime.now(timezone.utc),
        )

    @app.get("/")
    async def root() -> Dict[str, str]:
        """Root endpoint providing API information."""
        return {
            "name": "Account Health API",
            "version": __version__,
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "account_health.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
