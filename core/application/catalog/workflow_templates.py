"""
Built-in workflow templates.

Successor ids must resolve inside the same template; nothing checks for
cycles, so templates are kept acyclic by hand.
"""
import logging
from typing import Dict, Iterable, List, Optional

from core.domain.entities import StepTemplate, WorkflowTemplate
from core.domain.enums import TemplateStepType
from core.domain.exceptions import TemplateNotFoundError


logger = logging.getLogger(__name__)

_AI = TemplateStepType.AI_GENERATION
_INTEGRATION = TemplateStepType.INTEGRATION
_SOCIAL_PLATFORMS = ["linkedin", "facebook", "twitter"]


BLOG_PUBLISHING = WorkflowTemplate(
    id="blog-publishing",
    name="Complete Blog Publishing Workflow",
    description="Research, write, publish, and promote blog content across all platforms",
    variables={"topic": "", "target_audience": "", "keywords": [], "platforms": []},
    triggers=("manual", "scheduled", "content-calendar"),
    steps=(
        StepTemplate(
            id="research",
            name="Topic Research",
            type=_AI,
            config={
                "prompt": "Research the topic: {topic} for audience: {target_audience}",
                "model": "gpt-4",
                "max_tokens": 1000,
            },
            next_steps=("keyword-analysis",),
        ),
        StepTemplate(
            id="keyword-analysis",
            name="SEO Keyword Analysis",
            type=_AI,
            config={
                "prompt": "Analyze SEO keywords for: {research_output}",
                "model": "gpt-4",
                "max_tokens": 500,
            },
            next_steps=("content-creation",),
        ),
        StepTemplate(
            id="content-creation",
            name="Blog Content Creation",
            type=_AI,
            config={
                "prompt": "Write SEO-optimized blog post about {topic} using keywords: {keywords}",
                "model": "gpt-4",
                "max_tokens": 2000,
            },
            next_steps=("wordpress-publish",),
        ),
        StepTemplate(
            id="wordpress-publish",
            name="Publish to WordPress",
            type=_INTEGRATION,
            config={"integration": "wordpress", "action": "create-post"},
            next_steps=("social-promotion",),
        ),
        StepTemplate(
            id="social-promotion",
            name="Social Media Promotion",
            type=_INTEGRATION,
            config={"integration": "social-media-multi", "platforms": _SOCIAL_PLATFORMS},
            next_steps=("email-notification",),
        ),
        StepTemplate(
            id="email-notification",
            name="Email Newsletter",
            type=_INTEGRATION,
            config={"integration": "gmail", "action": "send-newsletter"},
        ),
    ),
)

PRODUCT_LAUNCH = WorkflowTemplate(
    id="product-launch",
    name="Complete Product Launch Workflow",
    description="Create product, set up payments, launch marketing campaign",
    variables={"product_name": "", "price": 0, "description": "", "target_market": ""},
    triggers=("manual", "scheduled"),
    steps=(
        StepTemplate(
            id="market-research",
            name="Market Research",
            type=_AI,
            config={
                "prompt": "Research market for product: {product_name} targeting: {target_market}",
                "model": "gpt-4",
                "max_tokens": 1500,
            },
            next_steps=("product-copy",),
        ),
        StepTemplate(
            id="product-copy",
            name="Product Copy Creation",
            type=_AI,
            config={
                "prompt": "Write compelling product copy for: {product_name} based on research: {market_research}",
                "model": "gpt-4",
                "max_tokens": 2000,
            },
            next_steps=("stripe-setup",),
        ),
        StepTemplate(
            id="stripe-setup",
            name="Payment Setup",
            type=_INTEGRATION,
            config={"integration": "stripe", "action": "create-product-and-price"},
            next_steps=("landing-page",),
        ),
        StepTemplate(
            id="landing-page",
            name="Create Landing Page",
            type=_AI,
            config={
                "prompt": "Create HTML landing page for product: {product_name} with copy: {product_copy}",
                "model": "gpt-4",
                "max_tokens": 3000,
            },
            next_steps=("launch-campaign",),
        ),
        StepTemplate(
            id="launch-campaign",
            name="Launch Marketing Campaign",
            type=_INTEGRATION,
            config={
                "integration": "social-media-multi",
                "platforms": _SOCIAL_PLATFORMS,
                "action": "product-announcement",
            },
            next_steps=("email-campaign",),
        ),
        StepTemplate(
            id="email-campaign",
            name="Email Marketing Campaign",
            type=_INTEGRATION,
            config={"integration": "gmail", "action": "product-launch-email"},
        ),
    ),
)

LEAD_GENERATION = WorkflowTemplate(
    id="lead-generation",
    name="Automated Lead Generation and Nurturing",
    description="Find prospects, personalize outreach, and nurture into customers",
    variables={"industry": "", "company_size": "", "job_titles": [], "message_template": ""},
    triggers=("manual", "scheduled", "crm-trigger"),
    steps=(
        StepTemplate(
            id="prospect-research",
            name="Prospect Research",
            type=_AI,
            config={
                "prompt": "Research ideal prospects in {industry} with titles: {job_titles}",
                "model": "gpt-4",
                "max_tokens": 1000,
            },
            next_steps=("linkedin-search",),
        ),
        StepTemplate(
            id="linkedin-search",
            name="LinkedIn Prospect Search",
            type=_INTEGRATION,
            config={"integration": "linkedin", "action": "search-prospects"},
            next_steps=("personalize-outreach",),
        ),
        StepTemplate(
            id="personalize-outreach",
            name="Personalize Outreach Messages",
            type=_AI,
            config={
                "prompt": "Create personalized LinkedIn messages for prospects: {linkedin_prospects}",
                "model": "gpt-4",
                "max_tokens": 500,
            },
            next_steps=("send-connections",),
        ),
        StepTemplate(
            id="send-connections",
            name="Send LinkedIn Connections",
            type=_INTEGRATION,
            config={"integration": "linkedin", "action": "send-connection-requests"},
            next_steps=("wait-responses",),
        ),
        StepTemplate(
            id="wait-responses",
            name="Wait for Responses",
            type=TemplateStepType.WAIT,
            config={"duration": 24, "condition": "connection-accepted"},  # hours
            next_steps=("follow-up-email",),
        ),
        StepTemplate(
            id="follow-up-email",
            name="Follow-up Email Sequence",
            type=_INTEGRATION,
            config={"integration": "gmail", "action": "send-follow-up-sequence"},
            next_steps=("crm-update",),
        ),
        StepTemplate(
            id="crm-update",
            name="Update CRM",
            type=_INTEGRATION,
            config={"integration": "hubspot", "action": "create-or-update-contact"},
        ),
    ),
)

BUILTIN_TEMPLATES = (BLOG_PUBLISHING, PRODUCT_LAUNCH, LEAD_GENERATION)


class TemplateCatalog:
    """Registry of workflow templates keyed by id."""

    def __init__(self, templates: Optional[Iterable[WorkflowTemplate]] = None):
        self._templates: Dict[str, WorkflowTemplate] = {}
        for template in BUILTIN_TEMPLATES if templates is None else templates:
            self._templates[template.id] = template
        logger.info(f"Initialized {len(self._templates)} workflow templates")

    def register(self, template: WorkflowTemplate) -> None:
        self._templates[template.id] = template

    def get(self, template_id: str) -> Optional[WorkflowTemplate]:
        return self._templates.get(template_id)

    def require(self, template_id: str) -> WorkflowTemplate:
        template = self._templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    def all(self) -> List[WorkflowTemplate]:
        return list(self._templates.values())
