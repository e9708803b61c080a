"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up

Design Decisions:
    - No readiness probe: the editor has no external dependency to wait for
"""

from fastapi import APIRouter, status

from flowedit import __version__

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "flowedit-api",
        "version": __version__,
    }
