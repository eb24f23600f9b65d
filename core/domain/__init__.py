"""Domain layer - pure domain models and exceptions."""

from .entities import (
    AgentContext,
    AgentDefinition,
    Execution,
    IntegrationConfig,
    IntegrationResult,
    Step,
    StepTemplate,
    WorkflowExecution,
    WorkflowTemplate,
)
from .value_objects import ExecutionID

__all__ = [
    "AgentContext",
    "AgentDefinition",
    "Execution",
    "ExecutionID",
    "IntegrationConfig",
    "IntegrationResult",
    "Step",
    "StepTemplate",
    "WorkflowExecution",
    "WorkflowTemplate",
]
