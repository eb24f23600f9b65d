"""
Workflow template entities.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from ..clock import utc_now
from ..enums import ExecutionStatus, TemplateStepType


@dataclass(frozen=True)
class StepTemplate:
    """A declared step of a workflow template."""
    id: str
    name: str
    type: TemplateStepType
    config: Dict[str, Any] = field(default_factory=dict)
    next_steps: Tuple[str, ...] = ()
    conditions: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class WorkflowTemplate:
    """Static, declarative multi-step process definition."""
    id: str
    name: str
    description: str
    steps: Tuple[StepTemplate, ...]
    variables: Dict[str, Any] = field(default_factory=dict)
    triggers: Tuple[str, ...] = ("manual",)

    @property
    def first_step_id(self) -> Optional[str]:
        return self.steps[0].id if self.steps else None

    def find_step(self, step_id: str) -> Optional[StepTemplate]:
        for step in self.steps:
            if step.id == step_id:
                return step
        return None


@dataclass
class WorkflowExecution:
    """One run of a workflow template."""
    id: str
    template_id: str
    user_id: str
    status: ExecutionStatus = ExecutionStatus.RUNNING
    current_step: Optional[str] = None
    variables: Dict[str, Any] = field(default_factory=dict)
    results: Dict[str, Any] = field(default_factory=dict)
    started_at: datetime = field(default_factory=utc_now)
    ended_at: Optional[datetime] = None
    error: Optional[str] = None

    @property
    def owner_id(self) -> str:
        return self.user_id

    def complete(self) -> bool:
        if self.status.is_terminal:
            return False
        self.status = ExecutionStatus.COMPLETED
        self.ended_at = utc_now()
        return True

    def fail(self, error: str) -> bool:
        if self.status.is_terminal:
            return False
        self.status = ExecutionStatus.FAILED
        self.error = error
        self.ended_at = utc_now()
        return True
