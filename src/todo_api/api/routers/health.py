"""Health check router

Endpoints:
- GET /health: Service liveness and version

Does not touch the document store, so it stays green while MongoDB is down.
"""

from fastapi import APIRouter

from ...api.contracts import HealthResponse
from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """API health check"""
    return HealthResponse(status="healthy", service=settings.app_name, version=settings.app_version)
