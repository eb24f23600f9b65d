"""Tests for AgentRunCoordinator."""

import pytest

from core.application.catalog import AgentCatalog
from core.application.catalog.agents import BLOG_PUBLISHER
from core.domain.entities import AgentDefinition
from core.domain.enums import AgentStepType, ExecutionStatus, StepStatus
from core.domain.exceptions import AgentNotFoundError
from core.infrastructure.integrations import create_default_registry
from core.infrastructure.stores import InMemoryExecutionStore
from orchestration.coordinator import AgentRunCoordinator
from orchestration.step_executor import StepExecutor
from orchestration.supervisor import RunSupervisor

CREDENTIALS = {
    "wordpress_url": "https://blog.example.com",
    "wordpress_username": "editor",
    "wordpress_app_password": "app-pass",
    "linkedin_access_token": "li-token",
}

SHORT_BLOG_PUBLISHER = AgentDefinition(
    id="blog-publisher",
    name="Blog Publisher Agent",
    description="Writes blog posts AND publishes them",
    system_prompt=BLOG_PUBLISHER.system_prompt,
    integrations=("wordpress", "linkedin"),
)


def _coordinator(generator, event_bus, agents=(SHORT_BLOG_PUBLISHER,)):
    return AgentRunCoordinator(
        catalog=AgentCatalog(agents),
        executor=StepExecutor(generator, create_default_registry(delay=0)),
        store=InMemoryExecutionStore(),
        supervisor=RunSupervisor(),
        event_bus=event_bus,
    )


@pytest.mark.asyncio
async def test_blog_publisher_run_completes_with_six_steps(text_generator, event_bus):
    coordinator = _coordinator(text_generator, event_bus)

    execution_id = await coordinator.start("blog-publisher", "user-1", {"topic": "AI"}, CREDENTIALS)
    execution = await coordinator.wait(execution_id)

    assert execution.status == ExecutionStatus.COMPLETED
    assert [step.id for step in execution.steps] == [
        f"{execution_id}_think",
        f"{execution_id}_plan",
        f"{execution_id}_execute",
        f"{execution_id}_integrate_wordpress",
        f"{execution_id}_integrate_linkedin",
        f"{execution_id}_verify",
    ]
    assert all(step.status == StepStatus.COMPLETED for step in execution.steps)
    assert execution.result is execution.steps[-1].output
    assert execution.result["status"] == "completed"
    assert execution.result["integrations_successful"] == 2
    assert execution.result["total_integrations"] == 2
    assert execution.ended_at is not None
    assert execution.progress() == 100


@pytest.mark.asyncio
async def test_phase_outputs_are_chained_forward(text_generator, event_bus):
    coordinator = _coordinator(text_generator, event_bus)

    execution_id = await coordinator.start("blog-publisher", "user-1", {"topic": "AI"}, CREDENTIALS)
    execution = await coordinator.wait(execution_id)

    think, plan, execute, wordpress, linkedin, verify = execution.steps
    assert think.input == {"topic": "AI"}
    assert plan.input == {"context": think.output, "task": {"topic": "AI"}}
    assert execute.input == {"plan": plan.output, "context": think.output}
    assert wordpress.input == {"result": execute.output}
    assert wordpress.integration == "wordpress"
    assert verify.input == {"results": [wordpress.output, linkedin.output]}


@pytest.mark.asyncio
async def test_credentials_never_appear_in_step_inputs(text_generator, event_bus):
    coordinator = _coordinator(text_generator, event_bus)

    execution_id = await coordinator.start("blog-publisher", "user-1", {"topic": "AI"}, CREDENTIALS)
    execution = await coordinator.wait(execution_id)

    for step in execution.steps:
        assert "apiKeys" not in repr(step.input)
        assert "li-token" not in repr(step.input)


@pytest.mark.asyncio
async def test_unconfigured_generator_still_completes(unconfigured_generator, event_bus):
    coordinator = _coordinator(unconfigured_generator, event_bus)

    execution_id = await coordinator.start("blog-publisher", "user-1", {"topic": "AI"}, CREDENTIALS)
    execution = await coordinator.wait(execution_id)

    assert execution.status == ExecutionStatus.COMPLETED
    for step_type in (AgentStepType.THINK, AgentStepType.PLAN, AgentStepType.EXECUTE):
        assert execution.step_of(step_type).output["mock"] is True


@pytest.mark.asyncio
async def test_failed_integrations_do_not_fail_the_run(text_generator, event_bus):
    coordinator = _coordinator(text_generator, event_bus)

    execution_id = await coordinator.start("blog-publisher", "user-1", {"topic": "AI"}, api_keys={})
    execution = await coordinator.wait(execution_id)

    assert execution.status == ExecutionStatus.COMPLETED
    assert len(execution.steps) == 6
    integrations = execution.steps_of(AgentStepType.INTEGRATE)
    assert all(step.output["success"] is False for step in integrations)
    assert integrations[0].output["error"] == "Missing required API key: wordpress_url"
    assert execution.result["integrations_successful"] == 0
    assert execution.result["total_integrations"] == 2


@pytest.mark.asyncio
async def test_unregistered_integration_is_recorded_as_failure(text_generator, event_bus):
    agent = AgentDefinition(
        id="email-campaign",
        name="Email Campaign Agent",
        description="Creates email campaigns",
        system_prompt="You are an Email Campaign Agent.",
        integrations=("mailchimp",),
    )
    coordinator = _coordinator(text_generator, event_bus, agents=(agent,))

    execution_id = await coordinator.start("email-campaign", "user-1", {"topic": "AI"})
    execution = await coordinator.wait(execution_id)

    assert execution.status == ExecutionStatus.COMPLETED
    integrate = execution.step_of(AgentStepType.INTEGRATE)
    assert integrate.output["error"] == "Integration mailchimp not found"


@pytest.mark.asyncio
async def test_step_exception_fails_run_and_aborts_later_phases(text_generator, event_bus):
    text_generator.error = RuntimeError("OpenAI API error: 401 - Incorrect API key")
    coordinator = _coordinator(text_generator, event_bus)

    execution_id = await coordinator.start("blog-publisher", "user-1", {"topic": "AI"}, CREDENTIALS)
    execution = await coordinator.wait(execution_id)

    assert execution.status == ExecutionStatus.FAILED
    assert execution.error == "OpenAI API error: 401 - Incorrect API key"
    assert len(execution.steps) == 1
    assert execution.steps[0].status == StepStatus.FAILED
    assert execution.result is None
    assert execution.ended_at is not None


@pytest.mark.asyncio
async def test_start_registers_running_execution_before_phases(text_generator, event_bus):
    coordinator = _coordinator(text_generator, event_bus)

    execution_id = await coordinator.start("blog-publisher", "user-1", {"topic": "AI"}, CREDENTIALS)
    execution = coordinator.get_execution(execution_id)

    assert execution.status == ExecutionStatus.RUNNING
    assert execution.user_id == "user-1"
    assert execution_id.startswith("exec_")
    await coordinator.wait(execution_id)


@pytest.mark.asyncio
async def test_unknown_agent_raises(text_generator, event_bus):
    coordinator = _coordinator(text_generator, event_bus)

    with pytest.raises(AgentNotFoundError, match="Agent ghost not found"):
        await coordinator.start("ghost", "user-1", {})


@pytest.mark.asyncio
async def test_lifecycle_events_are_published(text_generator, event_bus):
    coordinator = _coordinator(text_generator, event_bus)

    execution_id = await coordinator.start("blog-publisher", "user-1", {"topic": "AI"}, CREDENTIALS)
    await coordinator.wait(execution_id)

    assert event_bus.names() == ["run.started"] + ["step.completed"] * 6 + ["run.completed"]
    assert all(event.metadata.execution_id == execution_id for event in event_bus.events)


@pytest.mark.asyncio
async def test_failed_run_publishes_step_failed_and_run_failed(text_generator, event_bus):
    text_generator.error = RuntimeError("boom")
    coordinator = _coordinator(text_generator, event_bus)

    execution_id = await coordinator.start("blog-publisher", "user-1", {"topic": "AI"})
    await coordinator.wait(execution_id)

    assert event_bus.names() == ["run.started", "step.failed", "run.failed"]


@pytest.mark.asyncio
async def test_list_by_user_filters_on_initiating_user(text_generator, event_bus):
    coordinator = _coordinator(text_generator, event_bus)

    first = await coordinator.start("blog-publisher", "alice", {"topic": "A"})
    second = await coordinator.start("blog-publisher", "bob", {"topic": "B"})
    await coordinator.wait(first)
    await coordinator.wait(second)

    assert [execution.id for execution in coordinator.list_by_user("alice")] == [first]
    assert [execution.id for execution in coordinator.list_by_user("bob")] == [second]
