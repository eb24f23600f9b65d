"""
Request models and response serializers.

Responses use the camelCase field names the dashboard client reads.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from core.domain.entities import (
    AgentDefinition,
    Execution,
    IntegrationConfig,
    Step,
    StepTemplate,
    WorkflowExecution,
    WorkflowTemplate,
)
from core.domain.rounding import round_half_up


# =============================================================================
# REQUESTS
# =============================================================================

class ExecuteAgentRequest(BaseModel):
    input: Any = None
    apiKeys: Optional[Dict[str, str]] = None


class ExecuteWorkflowRequest(BaseModel):
    templateId: str
    variables: Dict[str, Any] = Field(default_factory=dict)


class IntegrationTestRequest(BaseModel):
    apiKeys: Dict[str, str] = Field(default_factory=dict)
    testData: Optional[Any] = None


class ValidateKeysRequest(BaseModel):
    integrationId: str
    apiKeys: Dict[str, str]


class GmailTestEmailRequest(BaseModel):
    gmail_email: Optional[str] = None
    gmail_app_password: Optional[str] = None
    recipient_email: Optional[str] = None
    test_message: Optional[str] = None


# =============================================================================
# SERIALIZERS
# =============================================================================

def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def agent_to_dict(agent: AgentDefinition) -> Dict[str, Any]:
    return {
        "id": agent.id,
        "name": agent.name,
        "description": agent.description,
        "systemPrompt": agent.system_prompt,
        "tools": list(agent.tools),
        "integrations": list(agent.integrations),
        "maxSteps": agent.max_steps,
        "timeout": agent.timeout_ms,
    }


def step_to_dict(step: Step) -> Dict[str, Any]:
    return {
        "id": step.id,
        "type": step.type.value,
        "description": step.description,
        "input": step.input,
        "output": step.output,
        "integration": step.integration,
        "status": step.status.value,
        "timestamp": _iso(step.timestamp),
        "error": step.error,
    }


def execution_to_dict(execution: Execution) -> Dict[str, Any]:
    return {
        "id": execution.id,
        "agentId": execution.agent_id,
        "userId": execution.user_id,
        "status": execution.status.value,
        "steps": [step_to_dict(step) for step in execution.steps],
        "startTime": _iso(execution.started_at),
        "endTime": _iso(execution.ended_at),
        "result": execution.result,
        "error": execution.error,
    }


def execution_status_to_dict(execution: Execution) -> Dict[str, Any]:
    """Execution record plus progress fields for status polling."""
    running = execution.running_step()
    data = execution_to_dict(execution)
    data["progress"] = execution.progress()
    data["currentStep"] = running.description if running else "Preparing..."
    data["estimatedTimeRemaining"] = "2-3 minutes" if not execution.status.is_terminal else None
    return data


def step_template_to_dict(step: StepTemplate) -> Dict[str, Any]:
    data = {
        "id": step.id,
        "name": step.name,
        "type": step.type.value,
        "config": step.config,
        "nextSteps": list(step.next_steps),
    }
    if step.conditions is not None:
        data["conditions"] = step.conditions
    return data


def template_to_dict(template: WorkflowTemplate) -> Dict[str, Any]:
    return {
        "id": template.id,
        "name": template.name,
        "description": template.description,
        "steps": [step_template_to_dict(step) for step in template.steps],
        "variables": template.variables,
        "triggers": list(template.triggers),
    }


def workflow_execution_to_dict(execution: WorkflowExecution) -> Dict[str, Any]:
    return {
        "id": execution.id,
        "templateId": execution.template_id,
        "userId": execution.user_id,
        "status": execution.status.value,
        "currentStep": execution.current_step,
        "variables": execution.variables,
        "results": execution.results,
        "startTime": _iso(execution.started_at),
        "endTime": _iso(execution.ended_at),
        "error": execution.error,
    }


def workflow_status_to_dict(
    execution: WorkflowExecution, template: Optional[WorkflowTemplate]
) -> Dict[str, Any]:
    total_steps = len(template.steps) if template and template.steps else 1
    completed_steps = len(execution.results)
    data = workflow_execution_to_dict(execution)
    data["progress"] = round_half_up(completed_steps / total_steps * 100)
    data["totalSteps"] = total_steps
    data["completedSteps"] = completed_steps
    data["estimatedTimeRemaining"] = (
        f"{max(1, total_steps - completed_steps)} minutes"
        if not execution.status.is_terminal
        else None
    )
    return data


def integration_to_dict(config: IntegrationConfig) -> Dict[str, Any]:
    return {
        "id": config.id,
        "name": config.name,
        "type": config.category.value,
        "requiredKeys": list(config.required_keys),
        "endpoints": config.endpoints,
    }


def paginate(records: List[Any], limit: int, offset: int) -> Dict[str, Any]:
    """Pagination block for a full, already sorted record list."""
    return {
        "total": len(records),
        "limit": limit,
        "offset": offset,
        "hasMore": offset + limit < len(records),
    }
