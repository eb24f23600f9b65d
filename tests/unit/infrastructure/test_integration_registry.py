"""
Unit tests for the integration registry.
"""
import pytest

from core.application.interfaces import IIntegrationAdapter
from core.domain.entities import IntegrationConfig, IntegrationResult
from core.domain.enums import IntegrationCategory
from core.domain.exceptions import IntegrationNotFoundError
from core.infrastructure.integrations import (
    BUILTIN_INTEGRATIONS,
    IntegrationRegistry,
    create_default_registry,
)

DELIVERABLE = {"result": {"deliverable": "Launch post for our new product"}}


class RecordingAdapter(IIntegrationAdapter):
    """Adapter recording calls; raises ``error`` when set."""

    integration_id = "stripe"

    def __init__(self, error=None):
        self.calls = []
        self.error = error

    async def execute(self, payload, credentials):
        self.calls.append((payload, dict(credentials)))
        if self.error is not None:
            raise self.error
        return IntegrationResult.ok(self.integration_id, {"created": True})


@pytest.fixture
def stripe_config():
    return next(config for config in BUILTIN_INTEGRATIONS if config.id == "stripe")


@pytest.mark.asyncio
async def test_missing_key_fails_without_calling_adapter(stripe_config):
    """Test that an empty credential map never reaches the adapter."""
    adapter = RecordingAdapter()
    registry = IntegrationRegistry(configs=[stripe_config], adapters=[adapter])

    result = await registry.dispatch("stripe", DELIVERABLE, {})

    assert result.success is False
    assert result.error == "Missing required API key: stripe_secret_key"
    assert adapter.calls == []


@pytest.mark.asyncio
async def test_empty_credential_value_counts_as_missing(stripe_config):
    registry = IntegrationRegistry(configs=[stripe_config], adapters=[RecordingAdapter()])

    result = await registry.dispatch("stripe", DELIVERABLE, {"stripe_secret_key": ""})

    assert result.error == "Missing required API key: stripe_secret_key"


@pytest.mark.asyncio
async def test_first_missing_key_is_reported_in_declared_order():
    registry = create_default_registry(delay=0)

    result = await registry.dispatch("wordpress", DELIVERABLE, {"wordpress_username": "editor"})

    assert result.error == "Missing required API key: wordpress_url"


@pytest.mark.asyncio
async def test_adapter_exception_becomes_failure(stripe_config):
    adapter = RecordingAdapter(error=RuntimeError("card network down"))
    registry = IntegrationRegistry(configs=[stripe_config], adapters=[adapter])

    result = await registry.dispatch("stripe", DELIVERABLE, {"stripe_secret_key": "sk_test"})

    assert result.success is False
    assert result.error == "card network down"
    assert len(adapter.calls) == 1


@pytest.mark.asyncio
async def test_unknown_integration_fails():
    result = await create_default_registry(delay=0).dispatch("mailchimp", DELIVERABLE, {})

    assert result.success is False
    assert result.error == "Integration mailchimp not found"


@pytest.mark.asyncio
async def test_registered_without_adapter_is_not_implemented():
    registry = IntegrationRegistry()
    registry.register(
        IntegrationConfig(
            id="slack",
            name="Slack",
            category=IntegrationCategory.COMMUNICATION,
            required_keys=("slack_token",),
        )
    )

    result = await registry.dispatch("slack", DELIVERABLE, {"slack_token": "xoxb"})

    assert result.error == "Integration slack not implemented"


@pytest.mark.asyncio
async def test_simulated_linkedin_post_succeeds():
    registry = create_default_registry(delay=0)

    result = await registry.dispatch("linkedin", DELIVERABLE, {"linkedin_access_token": "tok"})

    assert result.success is True
    assert result.data["published"] is True
    assert result.data["content"] == "Launch post for our new product"
    assert result.data["postId"].startswith("linkedin_")
    assert result.to_dict()["data"] == result.data


@pytest.mark.asyncio
async def test_missing_deliverable_is_reported_by_adapter():
    registry = create_default_registry(delay=0)

    result = await registry.dispatch("twitter", {"result": {}}, {
        "twitter_api_key": "key",
        "twitter_access_token": "token",
    })

    assert result.success is False
    assert result.error == "No Twitter content provided"
    assert "data" not in result.to_dict()


@pytest.mark.asyncio
async def test_wordpress_url_is_built_from_site_and_slug():
    registry = create_default_registry(delay=0)
    credentials = {
        "wordpress_url": "https://blog.example.com/",
        "wordpress_username": "editor",
        "wordpress_app_password": "pass",
    }

    result = await registry.dispatch(
        "wordpress", {"result": {"deliverable": "Hello World\n\nBody"}}, credentials
    )

    assert result.data["url"] == "https://blog.example.com/hello-world"
    assert result.data["title"] == "Hello World"


def test_require_unknown_raises():
    with pytest.raises(IntegrationNotFoundError, match="Integration ghost not found"):
        IntegrationRegistry().require("ghost")


def test_by_category_filters_configs():
    registry = create_default_registry(delay=0)

    social = [config.id for config in registry.by_category("social")]

    assert social == ["linkedin", "facebook", "twitter"]
    assert registry.by_category("unknown") == []
    assert len(registry.all()) == 7
