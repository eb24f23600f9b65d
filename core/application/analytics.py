"""
Dashboard analytics.

Savings figures are estimates: every completed run is credited a fixed
amount of time and money.
"""
from collections import Counter
from typing import Any, Dict, Iterable, List

from core.application.catalog import AgentCatalog
from core.domain.entities import Execution, WorkflowExecution
from core.domain.enums import AgentStepType, ExecutionStatus
from core.domain.rounding import round_half_up

TIME_SAVED_MINUTES_PER_RUN = 30
COST_SAVED_USD_PER_RUN = 50
POPULAR_AGENT_LIMIT = 5


def integration_success_counts(executions: Iterable[Execution]) -> Dict[str, int]:
    """Count successful integrate steps per integration id."""
    counts: Counter = Counter()
    for execution in executions:
        for step in execution.steps_of(AgentStepType.INTEGRATE):
            if step.integration and isinstance(step.output, dict) and step.output.get("success"):
                counts[step.integration] += 1
    return dict(counts)


def build_dashboard(
    agent_runs: List[Execution],
    workflow_runs: List[WorkflowExecution],
    catalog: AgentCatalog,
    timeframe: str = "30d",
) -> Dict[str, Any]:
    total = len(agent_runs) + len(workflow_runs)
    successful = sum(
        1 for run in [*agent_runs, *workflow_runs] if run.status == ExecutionStatus.COMPLETED
    )
    success_rate = round_half_up(successful / total * 100) if total else 0

    usage = Counter(run.agent_id for run in agent_runs)
    popular_agents = []
    for agent_id, count in usage.most_common(POPULAR_AGENT_LIMIT):
        agent = catalog.get(agent_id)
        popular_agents.append(
            {"agentId": agent_id, "name": agent.name if agent else agent_id, "executions": count}
        )

    return {
        "overview": {
            "totalExecutions": total,
            "successfulExecutions": successful,
            "successRate": success_rate,
            "timeSavedHours": round_half_up(successful * TIME_SAVED_MINUTES_PER_RUN / 60),
            "costSavings": successful * COST_SAVED_USD_PER_RUN,
            "activeAgents": len(catalog.all()),
        },
        "popularAgents": popular_agents,
        "integrationStats": integration_success_counts(agent_runs),
        "timeframe": timeframe,
    }
