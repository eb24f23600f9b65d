"""Orchestration layer - agent runs and workflow template runs with eventing."""

from .bus import EventBusProtocol, InMemoryEventBus
from .coordinator import AgentRunCoordinator
from .events import Event, EventMetadata
from .step_executor import StepExecutor
from .strategies import ExecuteStrategyTable, create_default_strategies
from .subscribers import ExecutionRecordingSubscriber
from .substitution import replace_variables
from .supervisor import RunSupervisor
from .template_runner import WorkflowTemplateRunner

__all__ = [
    "AgentRunCoordinator",
    "Event",
    "EventBusProtocol",
    "EventMetadata",
    "ExecuteStrategyTable",
    "ExecutionRecordingSubscriber",
    "InMemoryEventBus",
    "RunSupervisor",
    "StepExecutor",
    "WorkflowTemplateRunner",
    "create_default_strategies",
    "replace_variables",
]
