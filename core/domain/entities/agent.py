"""
Agent run entities.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from ..clock import utc_now
from ..enums import AgentStepType, ExecutionStatus, StepStatus
from ..rounding import round_half_up


# Phases a full run goes through when reporting progress
EXPECTED_PHASES = 5


@dataclass(frozen=True)
class AgentDefinition:
    """
    Built-in agent profile.

    Immutable: the instruction text and integration list are fixed at
    process start and looked up by id.
    """
    id: str
    name: str
    description: str
    system_prompt: str
    integrations: Tuple[str, ...] = ()
    tools: Tuple[str, ...] = ()
    max_steps: int = 10
    timeout_ms: int = 300_000


@dataclass
class Step:
    """One unit of work within an agent run."""
    id: str
    type: AgentStepType
    description: str
    input: Any = None
    integration: Optional[str] = None
    output: Any = None
    status: StepStatus = StepStatus.PENDING
    timestamp: datetime = field(default_factory=utc_now)
    error: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (StepStatus.COMPLETED, StepStatus.FAILED)


@dataclass
class Execution:
    """
    One run of an agent.

    Mutated in place while the run progresses so that status polling
    observes partial step lists.
    """
    id: str
    agent_id: str
    user_id: str
    status: ExecutionStatus = ExecutionStatus.RUNNING
    input: Any = None
    steps: List[Step] = field(default_factory=list)
    started_at: datetime = field(default_factory=utc_now)
    ended_at: Optional[datetime] = None
    result: Any = None
    error: Optional[str] = None

    @property
    def owner_id(self) -> str:
        return self.user_id

    def step_of(self, step_type: AgentStepType) -> Optional[Step]:
        """Return the first recorded step of the given type."""
        for step in self.steps:
            if step.type == step_type:
                return step
        return None

    def steps_of(self, step_type: AgentStepType) -> List[Step]:
        return [step for step in self.steps if step.type == step_type]

    def completed_step_count(self) -> int:
        return sum(1 for step in self.steps if step.status == StepStatus.COMPLETED)

    def running_step(self) -> Optional[Step]:
        for step in self.steps:
            if step.status == StepStatus.RUNNING:
                return step
        return None

    def complete(self, result: Any) -> bool:
        """Move to COMPLETED. Returns False if already terminal."""
        if self.status.is_terminal:
            return False
        self.status = ExecutionStatus.COMPLETED
        self.result = result
        self.ended_at = utc_now()
        return True

    def fail(self, error: str) -> bool:
        """Move to FAILED. Returns False if already terminal."""
        if self.status.is_terminal:
            return False
        self.status = ExecutionStatus.FAILED
        self.error = error
        self.ended_at = utc_now()
        return True

    def progress(self) -> int:
        """Percent of the expected phases completed, capped at 100."""
        return min(100, round_half_up(self.completed_step_count() / EXPECTED_PHASES * 100))

    def duration_ms(self) -> Optional[int]:
        if self.ended_at is None:
            return None
        return int((self.ended_at - self.started_at).total_seconds() * 1000)


@dataclass
class AgentContext:
    """Per-run data handed to step handlers; credentials never leave it."""
    agent: AgentDefinition
    execution: Execution
    credentials: Dict[str, str] = field(default_factory=dict, repr=False)
