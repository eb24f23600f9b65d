"""Domain enums."""

from .execution_status import ExecutionStatus, StepStatus
from .integration_category import IntegrationCategory
from .step_type import AgentStepType, TemplateStepType

__all__ = [
    "AgentStepType",
    "ExecutionStatus",
    "IntegrationCategory",
    "StepStatus",
    "TemplateStepType",
]
