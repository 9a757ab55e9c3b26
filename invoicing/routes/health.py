"""
Health check route for the invoice dashboard backend.

This endpoint is PUBLIC (no authentication required) and provides a simple
status check for load balancers, monitoring, and deployment verification.
"""

from fastapi import APIRouter, Request

from invoicing.schemas.health import HealthResponse
from invoicing.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description=(
        "Public health check endpoint (no authentication required). "
        "Reports whether the storage client has been opened."
    ),
    status_code=200,
)
async def health_check(request: Request) -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok",
            "database": "open"
        }
    """
    logger.debug("Health check endpoint called")

    database = getattr(request.app.state, "database", None)
    database_state = "open" if database is not None and database.is_open else "closed"

    return HealthResponse(status="ok", database=database_state)
