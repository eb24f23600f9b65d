"""
Integration Registry.

Maps an integration id to its static configuration and its adapter, and
normalizes every dispatch outcome into an IntegrationResult.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from core.application.interfaces import IIntegrationAdapter
from core.domain.entities import IntegrationConfig, IntegrationResult
from core.domain.enums import IntegrationCategory
from core.domain.exceptions import IntegrationNotFoundError


logger = logging.getLogger(__name__)


BUILTIN_INTEGRATIONS = (
    IntegrationConfig(
        id="gmail",
        name="Gmail",
        category=IntegrationCategory.EMAIL,
        required_keys=("gmail_email", "gmail_app_password"),
        endpoints={"smtp": "smtp.gmail.com"},
    ),
    IntegrationConfig(
        id="linkedin",
        name="LinkedIn",
        category=IntegrationCategory.SOCIAL,
        required_keys=("linkedin_access_token",),
        endpoints={
            "post": "https://api.linkedin.com/v2/ugcPosts",
            "profile": "https://api.linkedin.com/v2/people/~",
        },
    ),
    IntegrationConfig(
        id="facebook",
        name="Facebook",
        category=IntegrationCategory.SOCIAL,
        required_keys=("facebook_access_token", "facebook_page_id"),
        endpoints={
            "post": "https://graph.facebook.com/v18.0/{page-id}/feed",
            "pages": "https://graph.facebook.com/v18.0/me/accounts",
        },
    ),
    IntegrationConfig(
        id="twitter",
        name="Twitter",
        category=IntegrationCategory.SOCIAL,
        required_keys=("twitter_api_key", "twitter_access_token"),
        endpoints={
            "tweet": "https://api.twitter.com/2/tweets",
            "user": "https://api.twitter.com/2/users/me",
        },
    ),
    IntegrationConfig(
        id="stripe",
        name="Stripe",
        category=IntegrationCategory.PAYMENT,
        required_keys=("stripe_secret_key",),
        endpoints={
            "products": "https://api.stripe.com/v1/products",
            "prices": "https://api.stripe.com/v1/prices",
            "checkout": "https://api.stripe.com/v1/checkout/sessions",
        },
    ),
    IntegrationConfig(
        id="hubspot",
        name="HubSpot",
        category=IntegrationCategory.CRM,
        required_keys=("hubspot_api_key",),
        endpoints={
            "contacts": "https://api.hubapi.com/crm/v3/objects/contacts",
            "deals": "https://api.hubapi.com/crm/v3/objects/deals",
            "companies": "https://api.hubapi.com/crm/v3/objects/companies",
        },
    ),
    IntegrationConfig(
        id="wordpress",
        name="WordPress",
        category=IntegrationCategory.COMMUNICATION,
        required_keys=("wordpress_url", "wordpress_username", "wordpress_app_password"),
        endpoints={
            "posts": "{wordpress_url}/wp-json/wp/v2/posts",
            "media": "{wordpress_url}/wp-json/wp/v2/media",
        },
    ),
)


class IntegrationRegistry:
    """
    Registry of integrations.

    ``dispatch`` never raises: unknown ids, missing credentials and adapter
    exceptions all come back as failure results.
    """

    def __init__(
        self,
        configs: Iterable[IntegrationConfig] = (),
        adapters: Iterable[IIntegrationAdapter] = (),
    ):
        self._configs: Dict[str, IntegrationConfig] = {}
        self._adapters: Dict[str, IIntegrationAdapter] = {}
        for config in configs:
            self._configs[config.id] = config
        for adapter in adapters:
            self._adapters[adapter.integration_id] = adapter
        logger.info(f"Initialized {len(self._configs)} integrations")

    def register(self, config: IntegrationConfig, adapter: Optional[IIntegrationAdapter] = None) -> None:
        self._configs[config.id] = config
        if adapter is not None:
            self._adapters[config.id] = adapter

    def resolve(self, integration_id: str) -> Optional[IntegrationConfig]:
        return self._configs.get(integration_id)

    def require(self, integration_id: str) -> IntegrationConfig:
        config = self._configs.get(integration_id)
        if config is None:
            raise IntegrationNotFoundError(integration_id)
        return config

    def all(self) -> List[IntegrationConfig]:
        return list(self._configs.values())

    def by_category(self, category: str) -> List[IntegrationConfig]:
        return [config for config in self._configs.values() if config.category.value == category]

    async def dispatch(
        self,
        integration_id: str,
        payload: Mapping[str, Any],
        credentials: Optional[Mapping[str, str]] = None,
    ) -> IntegrationResult:
        """
        Validate credentials and run the integration's adapter.

        Args:
            integration_id: Registry id
            payload: Step input carrying ``result.deliverable``
            credentials: Caller-supplied credential map

        Returns:
            IntegrationResult (failure names the first missing key, if any)
        """
        config = self._configs.get(integration_id)
        if config is None:
            return IntegrationResult.failure(integration_id, f"Integration {integration_id} not found")

        credentials = credentials or {}
        missing_key = config.first_missing_key(credentials)
        if missing_key is not None:
            return IntegrationResult.failure(integration_id, f"Missing required API key: {missing_key}")

        adapter = self._adapters.get(integration_id)
        if adapter is None:
            return IntegrationResult.failure(integration_id, f"Integration {integration_id} not implemented")

        try:
            return await adapter.execute(payload, credentials)
        except Exception as exc:
            logger.error(f"Integration {integration_id} failed: {exc}", exc_info=True)
            return IntegrationResult.failure(integration_id, str(exc))


def create_default_registry(delay: float = 1.0) -> IntegrationRegistry:
    """
    Build the registry with every built-in integration and adapter.

    Args:
        delay: Seconds the simulated adapters wait in place of the external call
    """
    from core.infrastructure.integrations.gmail_adapter import GmailSmtpAdapter
    from core.infrastructure.integrations.simulated_adapters import (
        FacebookAdapter,
        HubSpotAdapter,
        LinkedInAdapter,
        StripeAdapter,
        TwitterAdapter,
        WordPressAdapter,
    )

    adapters = [
        GmailSmtpAdapter(),
        LinkedInAdapter(delay),
        FacebookAdapter(delay),
        TwitterAdapter(delay),
        StripeAdapter(delay),
        HubSpotAdapter(delay),
        WordPressAdapter(delay),
    ]
    return IntegrationRegistry(configs=BUILTIN_INTEGRATIONS, adapters=adapters)
