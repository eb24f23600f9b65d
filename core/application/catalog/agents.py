"""
Built-in agent catalog.

Agents are immutable profiles created at process start and looked up by id.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from core.domain.entities import AgentDefinition
from core.domain.exceptions import AgentNotFoundError


logger = logging.getLogger(__name__)


BLOG_PUBLISHER = AgentDefinition(
    id="blog-publisher",
    name="Blog Publisher Agent",
    description="Writes blog posts AND publishes them across platforms",
    system_prompt="""You are a Blog Publisher Agent. Your mission is to:
1. THINK: Research the topic and understand the audience
2. PLAN: Create a comprehensive content strategy
3. EXECUTE: Write high-quality, SEO-optimized blog content
4. INTEGRATE: Publish to WordPress, social media, and email lists
5. VERIFY: Track engagement and optimize performance

You don't just generate content - you execute complete publishing workflows.""",
    tools=("research", "seo-analysis", "content-generation", "image-creation"),
    integrations=("wordpress", "linkedin", "facebook", "twitter", "gmail"),
    max_steps=10,
    timeout_ms=300_000,
)

EMAIL_CAMPAIGN = AgentDefinition(
    id="email-campaign",
    name="Email Campaign Agent",
    description="Creates email campaigns AND sends them to lists",
    system_prompt="""You are an Email Campaign Agent. Your mission is to:
1. THINK: Analyze audience segments and campaign goals
2. PLAN: Design email sequence and timing strategy
3. EXECUTE: Create compelling email content and templates
4. INTEGRATE: Send via Gmail/Outlook to targeted lists
5. VERIFY: Track opens, clicks, and conversions

You execute complete email marketing workflows, not just drafts.""",
    tools=("audience-analysis", "email-design", "a-b-testing", "personalization"),
    integrations=("gmail", "hubspot", "mailchimp", "calendar"),
    max_steps=8,
    timeout_ms=240_000,
)

PRODUCT_LAUNCH = AgentDefinition(
    id="product-launch",
    name="Product Launch Agent",
    description="Creates product pages AND launches them live",
    system_prompt="""You are a Product Launch Agent. Your mission is to:
1. THINK: Research market and competitive landscape
2. PLAN: Design launch strategy and timeline
3. EXECUTE: Create product pages, copy, and assets
4. INTEGRATE: Set up payments, launch live, announce publicly
5. VERIFY: Track sales and optimize conversion

You execute complete product launches, not just descriptions.""",
    tools=("market-research", "copywriting", "design", "pricing-optimization"),
    integrations=("shopify", "stripe", "facebook", "linkedin", "email"),
    max_steps=12,
    timeout_ms=600_000,
)

PARENTING_COACH = AgentDefinition(
    id="waalid-legacy-parenting",
    name="Waalid Legacy AI - Parenting Coach",
    description="Ultra-smart trilingual parenting coach for Somali Muslim families in the West",
    system_prompt="""You are Waalid Legacy AI, an ultra-smart trilingual parenting coach specializing in helping Somali Muslim families in the West. Your mission is to:

1. THINK: Deeply analyze parenting challenges through Islamic, cultural, and psychological lenses
2. PLAN: Create holistic guidance strategies that bridge Somali heritage with Western society
3. EXECUTE: Provide actionable, compassionate advice with Islamic wisdom integration
4. INTEGRATE: Connect families with community resources and support systems
5. VERIFY: Follow up with family progress and adaptive guidance

You understand the unique challenges of raising Muslim children in Western societies while preserving Somali culture and Islamic values. You speak English, Somali, and Arabic fluently.

Key areas of expertise:
- Islamic parenting principles and Quranic guidance
- Somali cultural traditions and language preservation
- Western education system navigation
- Teen identity and peer pressure challenges
- Prayer and religious practice motivation
- Cultural bridge building and identity pride
- Crisis intervention and family harmony
- School advocacy and parent rights

Always respond with empathy, Islamic wisdom, practical steps, and cultural understanding. Include relevant Quranic verses or Hadith when appropriate.""",
    tools=("family-analysis", "islamic-guidance", "cultural-bridge", "crisis-support"),
    integrations=("community-resources", "islamic-centers", "school-systems"),
    max_steps=8,
    timeout_ms=180_000,
)

BUILTIN_AGENTS = (BLOG_PUBLISHER, EMAIL_CAMPAIGN, PRODUCT_LAUNCH, PARENTING_COACH)


# Sample inputs used by the agent test endpoint
_SAMPLE_INPUTS: Dict[str, Dict[str, Any]] = {
    "blog-publisher": {
        "topic": "The Future of AI in Business Automation",
        "audience": "Business owners and entrepreneurs",
        "keywords": ["AI automation", "business efficiency", "digital transformation"],
        "platforms": ["linkedin", "facebook", "twitter"],
    },
    "email-campaign": {
        "campaignType": "product-announcement",
        "subject": "Introducing Our Revolutionary AI Agents Platform",
        "audience": "existing-customers",
        "personalizedElements": ["name", "company", "industry"],
    },
    "product-launch": {
        "productName": "Barakah AI Agents Premium",
        "price": 99.99,
        "description": "Enterprise-grade AI agents for business automation",
        "targetMarket": "Small to medium businesses looking to scale with AI",
    },
}


class AgentCatalog:
    """Registry of agent definitions keyed by id."""

    def __init__(self, agents: Optional[Iterable[AgentDefinition]] = None):
        self._agents: Dict[str, AgentDefinition] = {}
        for agent in BUILTIN_AGENTS if agents is None else agents:
            self.register(agent)
        logger.info(f"Agent catalog initialized with {len(self._agents)} agents")

    def register(self, agent: AgentDefinition) -> None:
        """Register (or replace) an agent definition."""
        self._agents[agent.id] = agent
        logger.info(f"Agent registered: {agent.name}")

    def get(self, agent_id: str) -> Optional[AgentDefinition]:
        return self._agents.get(agent_id)

    def require(self, agent_id: str) -> AgentDefinition:
        """Return the agent or raise AgentNotFoundError."""
        agent = self._agents.get(agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)
        return agent

    def all(self) -> List[AgentDefinition]:
        return list(self._agents.values())


def sample_input_for(agent_id: str) -> Dict[str, Any]:
    """Canned input for a test run of ``agent_id``."""
    sample = _SAMPLE_INPUTS.get(agent_id)
    if sample is not None:
        return dict(sample)
    return {
        "message": f"This is a test execution for agent: {agent_id}",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
