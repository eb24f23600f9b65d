"""
Simulated integration adapters.

These adapters validate and shape the content exactly as a live call would,
then wait a fixed delay in place of the external request.
"""
import asyncio
import time
from abc import abstractmethod
from typing import Any, Dict, Mapping

from core.application.interfaces import IIntegrationAdapter
from core.domain.clock import utc_now
from core.domain.entities import IntegrationResult
from core.domain.exceptions import IntegrationError
from core.infrastructure.integrations.content import (
    extract_deliverable,
    parse_blog_content,
    parse_facebook_content,
    parse_lead_content,
    parse_linkedin_content,
    parse_product_content,
    parse_twitter_content,
)


def _millis() -> int:
    return int(time.time() * 1000)


class SimulatedAdapter(IIntegrationAdapter):
    """Base class: extract deliverable, delay, build result data."""

    integration_id = ""
    missing_content_message = "No content provided"

    def __init__(self, delay: float = 1.0):
        self.delay = delay

    async def execute(
        self, payload: Mapping[str, Any], credentials: Mapping[str, str]
    ) -> IntegrationResult:
        deliverable = extract_deliverable(payload)
        if not deliverable:
            raise IntegrationError(self.missing_content_message)

        data = self.build_data(deliverable, credentials)
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        data["timestamp"] = utc_now().isoformat()
        return IntegrationResult.ok(self.integration_id, data)

    @abstractmethod
    def build_data(self, deliverable: str, credentials: Mapping[str, str]) -> Dict[str, Any]:
        """Shape the platform-specific result data."""


class LinkedInAdapter(SimulatedAdapter):
    integration_id = "linkedin"
    missing_content_message = "No LinkedIn content provided"

    def build_data(self, deliverable, credentials):
        post = parse_linkedin_content(deliverable)
        return {
            "postId": f"linkedin_{_millis()}",
            "content": post["text"],
            "published": True,
            "visibility": "PUBLIC",
        }


class FacebookAdapter(SimulatedAdapter):
    integration_id = "facebook"
    missing_content_message = "No Facebook content provided"

    def build_data(self, deliverable, credentials):
        post = parse_facebook_content(deliverable)
        return {
            "postId": f"facebook_{_millis()}",
            "pageId": credentials.get("facebook_page_id"),
            "message": post["text"],
            "published": True,
        }


class TwitterAdapter(SimulatedAdapter):
    integration_id = "twitter"
    missing_content_message = "No Twitter content provided"

    def build_data(self, deliverable, credentials):
        tweet = parse_twitter_content(deliverable)
        return {"tweetId": f"twitter_{_millis()}", "text": tweet["text"], "published": True}


class StripeAdapter(SimulatedAdapter):
    integration_id = "stripe"
    missing_content_message = "No product data provided"

    def build_data(self, deliverable, credentials):
        product = parse_product_content(deliverable)
        millis = _millis()
        return {
            "productId": f"prod_{millis}",
            "priceId": f"price_{millis}",
            "name": product["name"],
            "price": product["price"],
            "created": True,
        }


class HubSpotAdapter(SimulatedAdapter):
    integration_id = "hubspot"
    missing_content_message = "No HubSpot data provided"

    def build_data(self, deliverable, credentials):
        lead = parse_lead_content(deliverable)
        return {"contactId": f"hubspot_{_millis()}", "email": lead["email"], "created": True}


class WordPressAdapter(SimulatedAdapter):
    integration_id = "wordpress"
    missing_content_message = "No blog content provided"

    def build_data(self, deliverable, credentials):
        blog = parse_blog_content(deliverable)
        site = credentials.get("wordpress_url", "").rstrip("/")
        return {
            "postId": f"wp_{_millis()}",
            "title": blog["title"],
            "status": "published",
            "url": f"{site}/{blog['slug']}",
        }
