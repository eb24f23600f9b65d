"""
Integration endpoints.

Browse the integration registry, validate credentials and run single
integration tests synchronously.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
import logging

from api.dependencies import get_integration_registry
from api.schemas import (
    GmailTestEmailRequest,
    IntegrationTestRequest,
    ValidateKeysRequest,
    integration_to_dict,
)
from core.domain.exceptions import InvalidRequestError
from core.infrastructure.integrations import IntegrationRegistry


logger = logging.getLogger(__name__)
router = APIRouter()

DEFAULT_TEST_EMAIL = (
    "Subject: Test Email from Barakah AI Agents\n\n"
    "Hello! This is a test email sent by your AI Email Campaign Agent.\n\n"
    "If you received this, your Gmail integration is working perfectly!\n\n"
    "Best regards,\nYour AI Agent"
)


@router.get("", summary="List all integrations")
async def list_integrations(registry: IntegrationRegistry = Depends(get_integration_registry)):
    integrations = registry.all()
    return {
        "success": True,
        "data": [integration_to_dict(config) for config in integrations],
        "count": len(integrations),
    }


@router.get("/categories/{category}", summary="List integrations by category")
async def list_by_category(
    category: str, registry: IntegrationRegistry = Depends(get_integration_registry)
):
    integrations = registry.by_category(category)
    return {
        "success": True,
        "data": [integration_to_dict(config) for config in integrations],
        "count": len(integrations),
        "category": category,
    }


@router.get("/{integration_id}", summary="Get integration by ID")
async def get_integration(
    integration_id: str, registry: IntegrationRegistry = Depends(get_integration_registry)
):
    return {"success": True, "data": integration_to_dict(registry.require(integration_id))}


@router.post("/validate-keys", summary="Validate API keys for an integration")
async def validate_keys(
    request: ValidateKeysRequest, registry: IntegrationRegistry = Depends(get_integration_registry)
):
    """
    Check that every required key is present.

    Unlike a dispatch, all missing keys are reported at once.
    """
    config = registry.require(request.integrationId)
    missing_keys = config.missing_keys(request.apiKeys)
    if missing_keys:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "error": "Missing required API keys",
                "missingKeys": missing_keys,
                "requiredKeys": list(config.required_keys),
            },
        )
    return {
        "success": True,
        "data": {
            "valid": True,
            "integration": config.id,
            "providedKeys": list(request.apiKeys),
            "requiredKeys": list(config.required_keys),
        },
        "message": "API keys validation successful",
    }


@router.post("/gmail/test-email", summary="Send a Gmail test email")
async def gmail_test_email(
    request: GmailTestEmailRequest,
    registry: IntegrationRegistry = Depends(get_integration_registry),
):
    if not request.gmail_email or not request.gmail_app_password:
        raise InvalidRequestError("Missing Gmail credentials. Need gmail_email and gmail_app_password")

    recipient = request.recipient_email or request.gmail_email
    payload = {
        "result": {"deliverable": request.test_message or DEFAULT_TEST_EMAIL},
        "recipients": [recipient],
    }
    credentials = {
        "gmail_email": request.gmail_email,
        "gmail_app_password": request.gmail_app_password,
    }

    logger.info(f"🧪 Testing Gmail integration: {request.gmail_email} → {recipient}")
    result = await registry.dispatch("gmail", payload, credentials)
    logger.info(f"Gmail test result: {'SUCCESS' if result.success else 'FAILED'}")

    return {
        "success": result.success,
        "data": result.to_dict(),
        "message": (
            f"✅ Email sent successfully to {recipient}!"
            if result.success
            else f"❌ Email sending failed: {result.error}"
        ),
        "gmail_account": request.gmail_email,
        "recipient": recipient,
    }


@router.post("/{integration_id}/test", summary="Test an integration")
async def test_integration(
    integration_id: str,
    request: IntegrationTestRequest,
    registry: IntegrationRegistry = Depends(get_integration_registry),
):
    config = registry.require(integration_id)
    payload = {
        "result": {"deliverable": request.testData or f"Test data for {config.name} integration"}
    }
    result = await registry.dispatch(integration_id, payload, request.apiKeys)
    logger.info(f"Integration {integration_id} test executed: {'SUCCESS' if result.success else 'FAILED'}")
    return {
        "success": True,
        "data": result.to_dict(),
        "message": f"Integration {config.name} test completed",
    }
