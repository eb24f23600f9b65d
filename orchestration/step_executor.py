"""Step executor - runs one agent step by type."""

from collections.abc import Awaitable, Callable
from typing import Any

from core.application.interfaces import ITextGenerator
from core.domain.clock import utc_now
from core.domain.entities import AgentContext, Step
from core.domain.enums import AgentStepType, StepStatus
from core.domain.exceptions import UnknownStepTypeError
from core.infrastructure.integrations import IntegrationRegistry
from core.infrastructure.logging import get_logger

from .strategies import ExecuteStrategyTable, create_default_strategies, to_json

THINK_MAX_TOKENS = 1000
PLAN_MAX_TOKENS = 1500

MOCK_NOTICE = "OpenAI API key not configured."

StepHandler = Callable[[Step, AgentContext], Awaitable[Any]]


class StepExecutor:
    """Dispatches agent steps to handlers keyed by step type.

    Generation steps fall back to flagged mock payloads when the text
    generator has no credential. Integrate steps never raise for a failed
    dispatch: the failure is returned as output data.
    """

    def __init__(
        self,
        text_generator: ITextGenerator,
        registry: IntegrationRegistry,
        strategies: ExecuteStrategyTable | None = None,
    ) -> None:
        self._generator = text_generator
        self._registry = registry
        self._strategies = strategies or create_default_strategies()
        self._handlers: dict[AgentStepType, StepHandler] = {
            AgentStepType.THINK: self._think,
            AgentStepType.PLAN: self._plan,
            AgentStepType.EXECUTE: self._execute,
            AgentStepType.INTEGRATE: self._integrate,
            AgentStepType.VERIFY: self._verify,
        }
        self._logger = get_logger("orchestration.step_executor")

    def register_handler(self, step_type: AgentStepType, handler: StepHandler) -> None:
        self._handlers[step_type] = handler

    async def run(self, step: Step, ctx: AgentContext) -> Any:
        """Run a step, recording it on the execution before it starts.

        Args:
            step: Step to run (appended to the execution's step list)
            ctx: Agent context carrying the run and its credentials

        Returns:
            Step output

        Raises:
            Exception: Whatever the handler raised, after marking the step failed
        """
        step.status = StepStatus.RUNNING
        step.timestamp = utc_now()
        ctx.execution.steps.append(step)

        try:
            handler = self._handlers.get(step.type)
            if handler is None:
                raise UnknownStepTypeError(getattr(step.type, "value", str(step.type)))
            output = await handler(step, ctx)
        except Exception as exc:
            step.status = StepStatus.FAILED
            step.error = str(exc)
            self._logger.error(f"❌ Step failed: {step.description}: {exc}")
            raise

        step.output = output
        step.status = StepStatus.COMPLETED
        self._logger.info(f"✅ Step completed: {step.description}")
        return output

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _think(self, step: Step, ctx: AgentContext) -> dict[str, Any]:
        if not self._generator.available:
            return {
                "analysis": f"Mock analysis for: {to_json(step.input)}. {MOCK_NOTICE}",
                "context": step.input,
                "timestamp": utc_now().isoformat(),
                "mock": True,
            }

        analysis = await self._generator.generate(
            ctx.agent.system_prompt,
            f"THINK about this task: {to_json(step.input)}. Provide analysis and context.",
            max_tokens=THINK_MAX_TOKENS,
        )
        return {"analysis": analysis, "context": step.input, "timestamp": utc_now().isoformat()}

    async def _plan(self, step: Step, ctx: AgentContext) -> dict[str, Any]:
        output: dict[str, Any] = {
            "steps": [],
            "timeline": utc_now().isoformat(),
            "requirements": list(ctx.agent.integrations),
        }
        if not self._generator.available:
            output["plan"] = f"Mock plan for: {to_json(step.input)}. {MOCK_NOTICE}"
            output["mock"] = True
            return output

        output["plan"] = await self._generator.generate(
            ctx.agent.system_prompt,
            f"PLAN the execution for: {to_json(step.input)}. Create detailed steps.",
            max_tokens=PLAN_MAX_TOKENS,
        )
        return output

    async def _execute(self, step: Step, ctx: AgentContext) -> dict[str, Any]:
        if not self._generator.available:
            return {
                "deliverable": f"Mock deliverable for: {to_json(step.input)}. {MOCK_NOTICE}",
                "type": ctx.agent.id,
                "ready_for_integration": True,
                "timestamp": utc_now().isoformat(),
                "mock": True,
            }

        strategy = self._strategies.resolve(ctx.agent.id)
        return await strategy(step.input, ctx.agent, self._generator)

    async def _integrate(self, step: Step, ctx: AgentContext) -> dict[str, Any]:
        result = await self._registry.dispatch(step.integration or "", step.input, ctx.credentials)
        if not result.success:
            self._logger.warning(f"Integration {result.integration} failed: {result.error}")
        return result.to_dict()

    async def _verify(self, step: Step, ctx: AgentContext) -> dict[str, Any]:
        results = (step.input or {}).get("results", [])
        return {
            "status": "completed",
            "integrations_successful": sum(
                1 for result in results if isinstance(result, dict) and result.get("success")
            ),
            "total_integrations": len(results),
            "summary": "Workflow executed successfully",
            "timestamp": utc_now().isoformat(),
        }
