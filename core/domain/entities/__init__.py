"""Domain entities."""

from .agent import AgentContext, AgentDefinition, Execution, Step
from .integration import IntegrationConfig, IntegrationResult
from .workflow import StepTemplate, WorkflowExecution, WorkflowTemplate

__all__ = [
    "AgentContext",
    "AgentDefinition",
    "Execution",
    "IntegrationConfig",
    "IntegrationResult",
    "Step",
    "StepTemplate",
    "WorkflowExecution",
    "WorkflowTemplate",
]
