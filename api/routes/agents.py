"""
Agent endpoints.

List built-in agents, start agent runs and poll their progress.
"""
from fastapi import APIRouter, Depends, Header, Query, status
from fastapi.responses import JSONResponse
import logging

from api.dependencies import (
    get_agent_catalog,
    get_agent_coordinator,
    get_text_generator,
)
from api.schemas import (
    ExecuteAgentRequest,
    agent_to_dict,
    execution_status_to_dict,
    execution_to_dict,
    paginate,
)
from core.application.catalog import AgentCatalog, sample_input_for


logger = logging.getLogger(__name__)
router = APIRouter()


# =============================================================================
# CATALOG
# =============================================================================

@router.get("", summary="List all agents")
async def list_agents(catalog: AgentCatalog = Depends(get_agent_catalog)):
    agents = catalog.all()
    return {
        "success": True,
        "data": [agent_to_dict(agent) for agent in agents],
        "count": len(agents),
    }


@router.get("/status", summary="System status")
async def system_status(generator=Depends(get_text_generator)):
    """
    Report whether the text-generation API is configured.

    Without a key every agent still runs, producing mock content.
    """
    openai_ready = generator.available
    return {
        "success": True,
        "data": {
            "openai": openai_ready,
            "integrations": True,
            "message": (
                "All systems operational"
                if openai_ready
                else "OpenAI API key missing - set OPENAI_API_KEY environment variable for full functionality"
            ),
        },
    }


@router.get("/{agent_id}", summary="Get agent by ID")
async def get_agent(agent_id: str, catalog: AgentCatalog = Depends(get_agent_catalog)):
    agent = catalog.require(agent_id)
    return {"success": True, "data": agent_to_dict(agent)}


# =============================================================================
# RUNS
# =============================================================================

@router.post("/{agent_id}/execute", summary="Execute an agent")
async def execute_agent(
    agent_id: str,
    request: ExecuteAgentRequest,
    x_user_id: str = Header(default="anonymous"),
    coordinator=Depends(get_agent_coordinator),
):
    """
    Start an agent run.

    **Headers:**
    - `x-user-id`: Initiating user (default: anonymous)

    **Returns:**
    - `executionId` to poll at `/api/agents/execution/{executionId}`
    """
    execution_id = await coordinator.start(agent_id, x_user_id, request.input, request.apiKeys)
    logger.info(f"Agent {agent_id} execution started: {execution_id}")
    return {
        "success": True,
        "data": {
            "executionId": execution_id,
            "status": "started",
            "message": "Agent execution started successfully",
        },
    }


@router.post("/{agent_id}/test", summary="Test agent with sample data")
async def test_agent(
    agent_id: str,
    catalog: AgentCatalog = Depends(get_agent_catalog),
    coordinator=Depends(get_agent_coordinator),
):
    catalog.require(agent_id)
    test_data = sample_input_for(agent_id)
    execution_id = await coordinator.start(agent_id, "test-user", test_data)
    return {
        "success": True,
        "data": {
            "executionId": execution_id,
            "testData": test_data,
            "message": "Test execution started successfully",
        },
    }


@router.get("/execution/{execution_id}", summary="Get execution status")
async def get_execution(execution_id: str, coordinator=Depends(get_agent_coordinator)):
    execution = coordinator.get_execution(execution_id)
    if execution is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "error": "Execution not found", "executionId": execution_id},
        )
    return {"success": True, "data": execution_status_to_dict(execution)}


@router.get("/executions/user/{user_id}", summary="List a user's executions")
async def list_user_executions(
    user_id: str,
    limit: int = Query(default=50, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    coordinator=Depends(get_agent_coordinator),
):
    executions = sorted(
        coordinator.list_by_user(user_id), key=lambda execution: execution.started_at, reverse=True
    )
    page = executions[offset:offset + limit]
    return {
        "success": True,
        "data": [execution_to_dict(execution) for execution in page],
        "pagination": paginate(executions, limit, offset),
    }
