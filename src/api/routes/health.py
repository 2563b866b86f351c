"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core import config

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if the request log database is missing.
    """
    request_log_available = config.DB_PATH.exists()
    timestamp = datetime.now(timezone.utc).isoformat()

    if request_log_available:
        return HealthResponse(
            status="healthy",
            version=config.API_VERSION,
            request_log_available=True,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=config.API_VERSION,
                request_log_available=False,
                timestamp=timestamp,
                error="Request log database not found (run src/scripts/init_db.py)",
            ).model_dump(),
        )
