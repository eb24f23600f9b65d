"""Agent run coordinator - the fixed think/plan/execute/integrate/verify run."""

from collections.abc import Mapping
from typing import Any

from core.application.catalog import AgentCatalog
from core.application.interfaces import IExecutionStore
from core.domain.clock import utc_now
from core.domain.entities import AgentContext, Execution, Step
from core.domain.enums import AgentStepType
from core.domain.value_objects import ExecutionID
from core.infrastructure.logging import get_logger

from .bus import EventBusProtocol
from .events import (
    RUN_COMPLETED,
    RUN_FAILED,
    RUN_STARTED,
    STEP_COMPLETED,
    STEP_FAILED,
    Event,
    EventMetadata,
)
from .step_executor import StepExecutor
from .supervisor import RunSupervisor

RUN_KIND = "agent"


class AgentRunCoordinator:
    """Starts agent runs and drives them through their phases.

    ``start`` registers the run and returns its id right away; the phases
    run under the supervisor. Any step exception aborts the remaining phases
    and fails the run. Failed integrations do not raise, so they never fail
    the run by themselves.
    """

    def __init__(
        self,
        catalog: AgentCatalog,
        executor: StepExecutor,
        store: IExecutionStore[Execution],
        supervisor: RunSupervisor,
        event_bus: EventBusProtocol,
    ) -> None:
        self._catalog = catalog
        self._executor = executor
        self._store = store
        self._supervisor = supervisor
        self._event_bus = event_bus
        self._logger = get_logger("orchestration.coordinator")

    async def start(
        self,
        agent_id: str,
        user_id: str,
        input_: Any,
        api_keys: Mapping[str, str] | None = None,
    ) -> str:
        """Start an agent run.

        Args:
            agent_id: Built-in agent id
            user_id: Initiating user
            input_: Task input handed to the think phase
            api_keys: Caller credentials, used only by the integrate phase

        Returns:
            Execution id

        Raises:
            AgentNotFoundError: If the agent id is unknown
        """
        agent = self._catalog.require(agent_id)
        execution = Execution(
            id=ExecutionID.generate("exec").value,
            agent_id=agent.id,
            user_id=user_id,
            input=input_,
        )
        self._store.put(execution)
        ctx = AgentContext(agent=agent, execution=execution, credentials=dict(api_keys or {}))

        self._logger.info(f"🚀 Starting agent execution: {execution.id} ({agent.name})")
        await self._publish(RUN_STARTED, execution, {"user_id": user_id})

        async def finish(result: object | None, error: BaseException | None) -> None:
            await self._transition(ctx, result, error)

        self._supervisor.spawn(execution.id, lambda: self._run_phases(ctx), finish)
        return execution.id

    def get_execution(self, execution_id: str) -> Execution | None:
        return self._store.get(execution_id)

    def list_by_user(self, user_id: str) -> list[Execution]:
        return self._store.list_by_owner(user_id)

    def all_executions(self) -> list[Execution]:
        return self._store.values()

    async def wait(self, execution_id: str) -> Execution | None:
        await self._supervisor.wait(execution_id)
        return self._store.get(execution_id)

    async def _run_phases(self, ctx: AgentContext) -> Any:
        execution = ctx.execution
        task = execution.input

        think = await self._run_step(
            ctx,
            Step(
                id=f"{execution.id}_think",
                type=AgentStepType.THINK,
                description="Analyzing task and gathering context",
                input=task,
            ),
        )
        plan = await self._run_step(
            ctx,
            Step(
                id=f"{execution.id}_plan",
                type=AgentStepType.PLAN,
                description="Creating detailed execution plan",
                input={"context": think, "task": task},
            ),
        )
        deliverable = await self._run_step(
            ctx,
            Step(
                id=f"{execution.id}_execute",
                type=AgentStepType.EXECUTE,
                description="Executing main workflow",
                input={"plan": plan, "context": think},
            ),
        )

        # Sequential on purpose: each integration waits for the previous one
        integration_results = []
        for integration in ctx.agent.integrations:
            output = await self._run_step(
                ctx,
                Step(
                    id=f"{execution.id}_integrate_{integration}",
                    type=AgentStepType.INTEGRATE,
                    description=f"Integrating with {integration}",
                    integration=integration,
                    input={"result": deliverable},
                ),
            )
            integration_results.append(output)

        return await self._run_step(
            ctx,
            Step(
                id=f"{execution.id}_verify",
                type=AgentStepType.VERIFY,
                description="Verifying workflow completion",
                input={"results": integration_results},
            ),
        )

    async def _run_step(self, ctx: AgentContext, step: Step) -> Any:
        try:
            output = await self._executor.run(step, ctx)
        except Exception as exc:
            await self._publish(
                STEP_FAILED, ctx.execution, {"step_id": step.id, "type": step.type.value, "error": str(exc)}
            )
            raise
        await self._publish(
            STEP_COMPLETED, ctx.execution, {"step_id": step.id, "type": step.type.value}
        )
        return output

    async def _transition(
        self, ctx: AgentContext, result: object | None, error: BaseException | None
    ) -> None:
        """Single terminal transition for success, failure and cancellation."""
        execution = ctx.execution
        if error is None:
            changed = execution.complete(result)
        else:
            changed = execution.fail(str(error) or error.__class__.__name__)
        if not changed:
            return

        if error is None:
            self._logger.info(f"✅ Agent execution completed: {execution.id}")
            await self._publish(RUN_COMPLETED, execution, {"duration_ms": execution.duration_ms()})
        else:
            self._logger.error(f"❌ Agent execution failed: {execution.id}: {execution.error}")
            await self._publish(RUN_FAILED, execution, {"error": execution.error})

    async def _publish(self, name: str, execution: Execution, payload: dict[str, object]) -> None:
        metadata = EventMetadata(
            execution_id=execution.id,
            run_kind=RUN_KIND,
            subject_id=execution.agent_id,
            timestamp=utc_now(),
        )
        await self._event_bus.publish(Event(name=name, payload=payload, metadata=metadata))
