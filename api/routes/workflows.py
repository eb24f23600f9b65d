"""
Workflow template endpoints.
"""
from fastapi import APIRouter, Depends, Header, Query, status
from fastapi.responses import JSONResponse
import logging

from api.dependencies import get_template_catalog, get_workflow_runner
from api.schemas import (
    ExecuteWorkflowRequest,
    paginate,
    template_to_dict,
    workflow_execution_to_dict,
    workflow_status_to_dict,
)
from core.application.catalog import TemplateCatalog


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/templates", summary="List workflow templates")
async def list_templates(catalog: TemplateCatalog = Depends(get_template_catalog)):
    templates = catalog.all()
    return {
        "success": True,
        "data": [template_to_dict(template) for template in templates],
        "count": len(templates),
    }


@router.get("/templates/{template_id}", summary="Get workflow template")
async def get_template(template_id: str, catalog: TemplateCatalog = Depends(get_template_catalog)):
    return {"success": True, "data": template_to_dict(catalog.require(template_id))}


@router.post("/execute", summary="Execute a workflow template")
async def execute_workflow(
    request: ExecuteWorkflowRequest,
    x_user_id: str = Header(default="anonymous"),
    runner=Depends(get_workflow_runner),
):
    execution_id = await runner.start(request.templateId, request.variables, x_user_id)
    logger.info(f"Workflow {request.templateId} execution started: {execution_id}")
    return {
        "success": True,
        "data": {
            "executionId": execution_id,
            "status": "started",
            "message": "Workflow execution started successfully",
        },
    }


@router.get("/execution/{execution_id}", summary="Get workflow execution status")
async def get_workflow_execution(
    execution_id: str,
    runner=Depends(get_workflow_runner),
    catalog: TemplateCatalog = Depends(get_template_catalog),
):
    execution = runner.get_execution(execution_id)
    if execution is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "error": "Execution not found", "executionId": execution_id},
        )
    template = catalog.get(execution.template_id)
    return {"success": True, "data": workflow_status_to_dict(execution, template)}


@router.get("/executions/user/{user_id}", summary="List a user's workflow executions")
async def list_user_workflow_executions(
    user_id: str,
    limit: int = Query(default=50, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    runner=Depends(get_workflow_runner),
):
    executions = sorted(
        runner.list_by_user(user_id), key=lambda execution: execution.started_at, reverse=True
    )
    page = executions[offset:offset + limit]
    return {
        "success": True,
        "data": [workflow_execution_to_dict(execution) for execution in page],
        "pagination": paginate(executions, limit, offset),
    }
