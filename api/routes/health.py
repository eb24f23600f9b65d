"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from fastapi import APIRouter, Depends
from datetime import datetime, timezone
import platform

from api.dependencies import get_settings, get_supervisor


router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns system health status.
    """
    return {
        "status": "healthy",
        "service": "Barakah AI Agents API",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0",
        "python_version": platform.python_version(),
    }


@router.get("/health/ready")
async def readiness_check(settings=Depends(get_settings), supervisor=Depends(get_supervisor)):
    """
    Readiness check endpoint.

    Reports which optional collaborators are configured.
    """
    return {
        "status": "ready",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "api": "ok",
            "openai": "configured" if settings.llm.enabled else "mock",
            "database": "configured" if settings.database.enabled else "disabled",
        },
        "active_runs": supervisor.active_runs,
    }
