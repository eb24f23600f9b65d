"""
Analytics endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_agent_catalog, get_agent_coordinator, get_workflow_runner
from core.application.analytics import build_dashboard


router = APIRouter()


@router.get("/dashboard", summary="Dashboard analytics")
async def dashboard(
    userId: Optional[str] = None,
    timeframe: str = "30d",
    catalog=Depends(get_agent_catalog),
    coordinator=Depends(get_agent_coordinator),
    runner=Depends(get_workflow_runner),
):
    """
    Aggregate a user's runs.

    Without `userId` the totals are empty. Time and cost savings are
    estimates per completed run.
    """
    agent_runs = coordinator.list_by_user(userId) if userId else []
    workflow_runs = runner.list_by_user(userId) if userId else []
    return {
        "success": True,
        "data": build_dashboard(agent_runs, workflow_runs, catalog, timeframe),
    }
