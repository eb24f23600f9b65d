"""Orchestration events - Event, EventMetadata and lifecycle event names."""

from dataclasses import dataclass
from datetime import datetime

RUN_STARTED = "run.started"
RUN_COMPLETED = "run.completed"
RUN_FAILED = "run.failed"
STEP_COMPLETED = "step.completed"
STEP_FAILED = "step.failed"


@dataclass
class EventMetadata:
    """Metadata for an event."""

    execution_id: str
    run_kind: str
    subject_id: str
    timestamp: datetime


@dataclass
class Event:
    """Lifecycle event of an agent run or a workflow run."""

    name: str
    payload: dict[str, object]
    metadata: EventMetadata
