"""
Step Type Enums.

Tags used to dispatch agent steps and workflow template steps to handlers.
"""
from enum import Enum


class AgentStepType(str, Enum):
    """Phases of an agent run."""

    THINK = "think"
    PLAN = "plan"
    EXECUTE = "execute"
    INTEGRATE = "integrate"
    VERIFY = "verify"


class TemplateStepType(str, Enum):
    """Step kinds a workflow template may declare."""

    AI_GENERATION = "ai-generation"
    INTEGRATION = "integration"
    CONDITION = "condition"
    LOOP = "loop"
    WAIT = "wait"
    TRANSFORM = "transform"
