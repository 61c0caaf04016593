"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import get_mongodb_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


class DependencyStatus(BaseModel):
    status: str
    message: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    services: Dict[str, DependencyStatus]


def _check_mongodb() -> DependencyStatus:
    client = get_mongodb_client()
    if client is None:
        return DependencyStatus(status="unhealthy", message="Connection failed or not configured")
    try:
        client.admin.command('ping')
    except PyMongoError as e:
        logger.warning("MongoDB health check failed", extra={"error": str(e)[:200]})
        return DependencyStatus(status="unhealthy", message=f"Connection error: {str(e)[:200]}")
    return DependencyStatus(status="healthy", message="Connection successful")


@router.get(
    "",
    response_model=HealthResponse,
    summary="Report service and database status",
    responses={503: {"model": HealthResponse, "description": "A dependency is down"}},
)
def health():
    services = {"mongodb": _check_mongodb()}
    healthy = all(s.status == "healthy" for s in services.values())

    body = HealthResponse(
        status="healthy" if healthy else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        services=services,
    )
    return JSONResponse(
        content=body.model_dump(),
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
