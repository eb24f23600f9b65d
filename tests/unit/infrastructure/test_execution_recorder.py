"""
Unit tests for the SQLAlchemy execution recorder.
"""
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import selectinload
from sqlalchemy.pool import StaticPool

from core.domain.entities import AgentDefinition, Execution, Step
from core.domain.enums import AgentStepType, StepStatus
from core.infrastructure.database import (
    AgentExecutionModel,
    SqlAlchemyExecutionRecorder,
    close_database,
    create_session_factory,
    init_database,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

AGENT = AgentDefinition(
    id="blog-publisher",
    name="Blog Publisher Agent",
    description="Writes blog posts",
    system_prompt="You are a Blog Publisher Agent.",
    integrations=("linkedin",),
)


@pytest_asyncio.fixture
async def session_factory():
    """In-memory SQLite database with the execution tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_database(engine)
    yield create_session_factory(engine)
    await close_database(engine)


def _execution(with_failure=False):
    execution = Execution(
        id="exec_1_abc", agent_id=AGENT.id, user_id="user-1", input={"topic": "AI"}
    )
    execution.steps = [
        Step(
            id="exec_1_abc_think",
            type=AgentStepType.THINK,
            description="Analyzing task and gathering context",
            output={"analysis": "ok"},
            status=StepStatus.COMPLETED,
        ),
        Step(
            id="exec_1_abc_integrate_linkedin",
            type=AgentStepType.INTEGRATE,
            description="Integrating with linkedin",
            integration="linkedin",
            output={"success": True},
            status=StepStatus.COMPLETED,
        ),
    ]
    if with_failure:
        execution.fail("OpenAI API error: 500 - boom")
    else:
        execution.complete({"status": "completed"})
    return execution


async def _load(session_factory, execution_id):
    async with session_factory() as session:
        result = await session.execute(
            select(AgentExecutionModel)
            .options(selectinload(AgentExecutionModel.steps))
            .where(AgentExecutionModel.id == execution_id)
        )
        return result.scalar_one_or_none()


@pytest.mark.asyncio
async def test_completed_run_is_recorded_with_steps(session_factory):
    recorder = SqlAlchemyExecutionRecorder(session_factory)

    await recorder.record_agent_execution(_execution(), AGENT)

    row = await _load(session_factory, "exec_1_abc")
    assert row.status == "completed"
    assert row.agent_name == "Blog Publisher Agent"
    assert row.input_data == {"topic": "AI"}
    assert row.output_data == {"status": "completed"}
    assert row.integrations_used == ["linkedin"]
    assert row.progress == 40
    assert row.cost_saved_usd == Decimal("50")
    assert row.time_saved_minutes == 30
    assert [step.step_type for step in row.steps] == ["think", "integrate"]
    assert row.steps[1].integration == "linkedin"


@pytest.mark.asyncio
async def test_failed_run_records_no_savings(session_factory):
    recorder = SqlAlchemyExecutionRecorder(session_factory)

    await recorder.record_agent_execution(_execution(with_failure=True), AGENT)

    row = await _load(session_factory, "exec_1_abc")
    assert row.status == "failed"
    assert row.error_message == "OpenAI API error: 500 - boom"
    assert row.cost_saved_usd == 0
    assert row.time_saved_minutes == 0


@pytest.mark.asyncio
async def test_write_errors_are_swallowed(session_factory):
    recorder = SqlAlchemyExecutionRecorder(session_factory)
    await recorder.record_agent_execution(_execution(), AGENT)

    # Same primary key again: the insert fails but the call returns normally
    await recorder.record_agent_execution(_execution(), AGENT)

    assert (await _load(session_factory, "exec_1_abc")).status == "completed"
