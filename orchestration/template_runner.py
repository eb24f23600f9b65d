"""Workflow template runner - walks a template's step graph."""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from core.application.catalog import TemplateCatalog
from core.application.interfaces import IExecutionStore
from core.domain.clock import utc_now
from core.domain.entities import StepTemplate, WorkflowExecution, WorkflowTemplate
from core.domain.enums import TemplateStepType
from core.domain.exceptions import StepNotFoundError, UnknownStepTypeError
from core.domain.value_objects import ExecutionID
from core.infrastructure.logging import get_logger
from core.settings.modules.engine_settings import EngineSettings

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
from .substitution import replace_variables
from .supervisor import RunSupervisor

RUN_KIND = "workflow"

TemplateStepHandler = Callable[[StepTemplate, WorkflowExecution], Awaitable[Any]]


class WorkflowTemplateRunner:
    """Runs workflow templates step by step.

    The next step is always the first declared successor; declared
    conditions are carried but not evaluated. Any step failure is fatal to
    the run. There is no handler for ``loop`` steps.
    """

    def __init__(
        self,
        catalog: TemplateCatalog,
        store: IExecutionStore[WorkflowExecution],
        supervisor: RunSupervisor,
        event_bus: EventBusProtocol,
        engine_settings: EngineSettings | None = None,
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._supervisor = supervisor
        self._event_bus = event_bus
        self._settings = engine_settings or EngineSettings()
        self._handlers: dict[TemplateStepType, TemplateStepHandler] = {
            TemplateStepType.AI_GENERATION: self._ai_generation,
            TemplateStepType.INTEGRATION: self._integration,
            TemplateStepType.CONDITION: self._condition,
            TemplateStepType.WAIT: self._wait,
            TemplateStepType.TRANSFORM: self._transform,
        }
        self._logger = get_logger("orchestration.template_runner")

    def register_handler(self, step_type: TemplateStepType, handler: TemplateStepHandler) -> None:
        self._handlers[step_type] = handler

    async def start(
        self,
        template_id: str,
        variables: Mapping[str, Any] | None = None,
        user_id: str = "anonymous",
    ) -> str:
        """Start a workflow run.

        Args:
            template_id: Built-in template id
            variables: Caller values overlaid on the template defaults
            user_id: Initiating user

        Returns:
            Execution id

        Raises:
            TemplateNotFoundError: If the template id is unknown
        """
        template = self._catalog.require(template_id)
        execution = WorkflowExecution(
            id=ExecutionID.generate("workflow").value,
            template_id=template.id,
            user_id=user_id,
            current_step=template.first_step_id,
            variables={**template.variables, **(variables or {})},
        )
        self._store.put(execution)

        self._logger.info(f"🚀 Starting workflow execution: {execution.id} ({template.name})")
        await self._publish(RUN_STARTED, execution, {"user_id": user_id})

        async def finish(result: object | None, error: BaseException | None) -> None:
            await self._transition(execution, error)

        self._supervisor.spawn(execution.id, lambda: self._run(execution, template), finish)
        return execution.id

    def get_execution(self, execution_id: str) -> WorkflowExecution | None:
        return self._store.get(execution_id)

    def list_by_user(self, user_id: str) -> list[WorkflowExecution]:
        return self._store.list_by_owner(user_id)

    def all_executions(self) -> list[WorkflowExecution]:
        return self._store.values()

    async def wait(self, execution_id: str) -> WorkflowExecution | None:
        await self._supervisor.wait(execution_id)
        return self._store.get(execution_id)

    async def _run(self, execution: WorkflowExecution, template: WorkflowTemplate) -> None:
        step_id = execution.current_step

        while step_id:
            step = template.find_step(step_id)
            if step is None:
                raise StepNotFoundError(step_id)

            execution.current_step = step_id
            self._logger.info(f"📋 Executing step: {step.name}")

            try:
                handler = self._handlers.get(step.type)
                if handler is None:
                    raise UnknownStepTypeError(getattr(step.type, "value", str(step.type)))
                output = await handler(step, execution)
            except Exception as exc:
                await self._publish(STEP_FAILED, execution, {"step_id": step.id, "error": str(exc)})
                raise

            execution.results[step.id] = output
            await self._publish(STEP_COMPLETED, execution, {"step_id": step.id})

            step_id = step.next_steps[0] if step.next_steps else None
            if step_id:
                await self._sleep(self._settings.inter_step_delay)

    async def _transition(self, execution: WorkflowExecution, error: BaseException | None) -> None:
        if error is None:
            changed = execution.complete()
        else:
            changed = execution.fail(str(error) or error.__class__.__name__)
        if not changed:
            return

        if error is None:
            self._logger.info(f"✅ Workflow completed: {execution.id}")
            await self._publish(RUN_COMPLETED, execution, {"steps": len(execution.results)})
        else:
            self._logger.error(f"❌ Workflow execution failed: {execution.id}: {execution.error}")
            await self._publish(RUN_FAILED, execution, {"error": execution.error})

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _ai_generation(self, step: StepTemplate, execution: WorkflowExecution) -> dict[str, Any]:
        prompt = replace_variables(step.config.get("prompt", ""), execution.variables, execution.results)
        await self._sleep(self._settings.ai_step_delay)
        return {
            "content": f"AI generated content for: {prompt}",
            "model": step.config.get("model"),
            "timestamp": utc_now().isoformat(),
        }

    async def _integration(self, step: StepTemplate, execution: WorkflowExecution) -> dict[str, Any]:
        integration = step.config.get("integration")
        action = step.config.get("action")
        await self._sleep(self._settings.integration_step_delay)
        return {
            "integration": integration,
            "action": action,
            "success": True,
            "result": f"{integration} {action} completed successfully",
            "timestamp": utc_now().isoformat(),
        }

    async def _condition(self, step: StepTemplate, execution: WorkflowExecution) -> dict[str, Any]:
        return {
            "conditions_met": True,
            "evaluated_conditions": dict(step.conditions or {}),
            "timestamp": utc_now().isoformat(),
        }

    async def _wait(self, step: StepTemplate, execution: WorkflowExecution) -> dict[str, Any]:
        # Configured duration is reported, not slept
        await self._sleep(self._settings.wait_step_delay)
        return {
            "waited": True,
            "duration": step.config.get("duration"),
            "condition": step.config.get("condition"),
            "timestamp": utc_now().isoformat(),
        }

    async def _transform(self, step: StepTemplate, execution: WorkflowExecution) -> dict[str, Any]:
        return {"transformed": True, "timestamp": utc_now().isoformat()}

    @staticmethod
    async def _sleep(seconds: float) -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)

    async def _publish(self, name: str, execution: WorkflowExecution, payload: dict[str, object]) -> None:
        metadata = EventMetadata(
            execution_id=execution.id,
            run_kind=RUN_KIND,
            subject_id=execution.template_id,
            timestamp=utc_now(),
        )
        await self._event_bus.publish(Event(name=name, payload=payload, metadata=metadata))
