"""
SQLAlchemy execution recorder.

Writes a copy of every finished agent run (and its steps) to the
``agent_executions`` / ``execution_steps`` tables.
"""
import json
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.application.analytics import COST_SAVED_USD_PER_RUN, TIME_SAVED_MINUTES_PER_RUN
from core.application.interfaces import IExecutionRecorder
from core.domain.entities import AgentDefinition, Execution
from core.domain.enums import AgentStepType, ExecutionStatus
from core.infrastructure.database.models import AgentExecutionModel, ExecutionStepModel


logger = logging.getLogger(__name__)


def _jsonable(value: Any) -> Any:
    """Round-trip through json so JSON columns never see datetimes or enums."""
    if value is None:
        return None
    return json.loads(json.dumps(value, default=str))


class SqlAlchemyExecutionRecorder(IExecutionRecorder):
    """
    SQLAlchemy implementation of IExecutionRecorder.

    Failures are logged and swallowed: the persisted copy is best effort and
    must never change the outcome of the run it describes.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def record_agent_execution(self, execution: Execution, agent: AgentDefinition) -> None:
        logger.info(f"Recording execution: {execution.id}")
        try:
            async with self.session_factory() as session:
                session.add(self._to_model(execution, agent))
                await session.commit()
            logger.info(f"✅ Recorded execution: {execution.id}")
        except Exception as exc:
            logger.error(f"Failed to record execution {execution.id}: {exc}", exc_info=True)

    def _to_model(self, execution: Execution, agent: AgentDefinition) -> AgentExecutionModel:
        completed = execution.status == ExecutionStatus.COMPLETED
        integrations_used = [
            step.integration
            for step in execution.steps_of(AgentStepType.INTEGRATE)
            if step.integration
        ]

        model = AgentExecutionModel(
            id=execution.id,
            user_id=execution.user_id,
            agent_id=agent.id,
            agent_name=agent.name,
            status=execution.status.value,
            progress=execution.progress(),
            input_data=_jsonable(execution.input),
            output_data=_jsonable(execution.result),
            error_message=execution.error,
            execution_time_ms=execution.duration_ms(),
            cost_saved_usd=COST_SAVED_USD_PER_RUN if completed else 0,
            time_saved_minutes=TIME_SAVED_MINUTES_PER_RUN if completed else 0,
            integrations_used=integrations_used,
            started_at=execution.started_at,
            completed_at=execution.ended_at,
        )
        model.steps = [
            ExecutionStepModel(
                id=step.id,
                execution_id=execution.id,
                position=position,
                step_name=step.description,
                step_type=step.type.value,
                status=step.status.value,
                integration=step.integration,
                output_data=_jsonable(step.output),
                error_message=step.error,
                started_at=step.timestamp,
            )
            for position, step in enumerate(execution.steps)
        ]
        return model
