"""Execute-phase strategies, selected by agent id."""

import json
from collections.abc import Awaitable, Callable
from typing import Any

from core.application.interfaces import ITextGenerator
from core.domain.clock import utc_now
from core.domain.entities import AgentDefinition

EXECUTE_MAX_TOKENS = 2000
PARENTING_TEMPERATURE = 0.8

ExecuteStrategy = Callable[[Any, AgentDefinition, ITextGenerator], Awaitable[dict[str, Any]]]

PARENTING_FOLLOW_UP = [
    "How did your child respond to this approach?",
    "What specific situations trigger these challenges?",
    "How can we involve the community in supporting your family?",
    "What has worked well for your family in the past?",
]

PARENTING_RESOURCES = [
    "Connect with local Somali Muslim families",
    "Reach out to Islamic family counselors",
    "Join online Somali parenting communities",
    "Consult with your local imam for Islamic guidance",
]

_LANGUAGE_NAMES = {"somali": "Somali", "arabic": "Arabic"}


def to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), default=str)


async def default_execute(
    input_: Any, agent: AgentDefinition, generator: ITextGenerator
) -> dict[str, Any]:
    """Generate the deliverable from the plan and context."""
    deliverable = await generator.generate(
        agent.system_prompt,
        f"EXECUTE this plan: {to_json(input_)}. Create the deliverable.",
        max_tokens=EXECUTE_MAX_TOKENS,
    )
    return {
        "deliverable": deliverable,
        "type": agent.id,
        "ready_for_integration": True,
        "timestamp": utc_now().isoformat(),
    }


def _parenting_context(input_: Any) -> dict[str, Any]:
    """Find the parent's request: the plan first, then the task echoed by think."""
    if not isinstance(input_, dict):
        return {}
    candidates = [input_.get("plan"), input_]
    think = input_.get("context")
    if isinstance(think, dict):
        candidates.append(think.get("context"))
    for candidate in candidates:
        if isinstance(candidate, dict) and (candidate.get("request") or candidate.get("message")):
            return candidate
    plan = input_.get("plan")
    return plan if isinstance(plan, dict) else input_


async def parenting_guidance(
    input_: Any, agent: AgentDefinition, generator: ITextGenerator
) -> dict[str, Any]:
    """Culturally grounded parenting guidance with follow-ups and resources."""
    context = _parenting_context(input_)
    request = context.get("request") or context.get("message")
    family_context = context.get("familyContext") or {}
    language = context.get("language") or "english"

    prompt = f"""You are providing personalized parenting guidance for a Somali Muslim family.

CONTEXT:
- Parent's question: "{request}"
- Language preference: {language}
- Family context: {to_json(family_context)}

Provide ultra-smart guidance that includes:
1. Empathetic understanding of their specific challenge
2. Islamic wisdom with relevant Quranic verses or Hadith
3. Cultural bridge advice for Somali families in the West
4. Specific action steps they can take
5. Follow-up questions to deepen support

Respond in {_LANGUAGE_NAMES.get(language, "English")}.
Start with "🤲 Assalamu Alaikum" and be warm, understanding, and practical."""

    response = await generator.generate(
        agent.system_prompt,
        prompt,
        max_tokens=EXECUTE_MAX_TOKENS,
        temperature=PARENTING_TEMPERATURE,
    )
    return {
        "deliverable": response,
        "type": "parenting-guidance",
        "language": language,
        "familyContext": family_context,
        "guidance": {
            "response": response,
            "followUp": list(PARENTING_FOLLOW_UP),
            "resources": list(PARENTING_RESOURCES),
        },
        "ready_for_integration": True,
        "timestamp": utc_now().isoformat(),
    }


class ExecuteStrategyTable:
    """Agent id -> execute strategy, falling back to ``default_execute``."""

    def __init__(
        self,
        strategies: dict[str, ExecuteStrategy] | None = None,
        default: ExecuteStrategy = default_execute,
    ) -> None:
        self._strategies: dict[str, ExecuteStrategy] = dict(strategies or {})
        self._default = default

    def register(self, agent_id: str, strategy: ExecuteStrategy) -> None:
        self._strategies[agent_id] = strategy

    def resolve(self, agent_id: str) -> ExecuteStrategy:
        return self._strategies.get(agent_id, self._default)


def create_default_strategies() -> ExecuteStrategyTable:
    return ExecuteStrategyTable({"waalid-legacy-parenting": parenting_guidance})
