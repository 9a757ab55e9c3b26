"""
FastAPI application entry point for the invoice dashboard backend.

This module creates the FastAPI app instance, registers all routers, and
owns the lifecycle of the storage client, auth bridge and view cache.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from invoicing.auth.bridge import AuthBridge, CredentialsProvider
from invoicing.config import settings
from invoicing.db.client import database_from_settings
from invoicing.routes.auth import router as auth_router
from invoicing.routes.health import router as health_router
from invoicing.routes.invoices import router as invoices_router
from invoicing.services.view_cache import ViewCache

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (none if unset)
    - Any other environment: Allows all origins for local dev

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the storage client at startup and close it at shutdown.

    The auth bridge and the view cache are built on top of the opened client
    and kept on app.state for the request dependencies.
    """
    database = database_from_settings()
    database.open()

    app.state.database = database
    app.state.view_cache = ViewCache()
    app.state.auth_bridge = AuthBridge(
        providers=[CredentialsProvider(database.client)],
        secret=settings.AUTH_SECRET,
        max_age_seconds=settings.SESSION_MAX_AGE_SECONDS,
    )
    logger.info("Application started")

    try:
        yield
    finally:
        app.state.view_cache.clear()
        database.close()
        logger.info("Application stopped")


# Create FastAPI app
app = FastAPI(
    title="Invoice Dashboard API",
    description="Form actions for invoices and accounts",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Custom validation error handler to log detailed errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors for debugging.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": exc.errors(),
        }
    )

# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(invoices_router)

logger.info("FastAPI app initialized successfully")
