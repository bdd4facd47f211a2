"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up
    - Not routed through the ResourcePipeline: probes must not depend on the auth gate
"""

import logging

from fastapi import APIRouter, status

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "restful-service",
        "version": "1.0.0",
    }
