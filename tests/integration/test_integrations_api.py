"""
Integration tests for integration endpoints.
"""
import smtplib

from api import dependencies
from core.infrastructure.integrations.gmail_adapter import GmailSmtpAdapter


def test_list_integrations(client):
    body = client.get("/api/integrations").json()

    assert body["count"] == 7
    gmail = body["data"][0]
    assert gmail == {
        "id": "gmail",
        "name": "Gmail",
        "type": "email",
        "requiredKeys": ["gmail_email", "gmail_app_password"],
        "endpoints": {"smtp": "smtp.gmail.com"},
    }


def test_list_by_category(client):
    body = client.get("/api/integrations/categories/social").json()

    assert body["category"] == "social"
    assert [integration["id"] for integration in body["data"]] == ["linkedin", "facebook", "twitter"]


def test_unknown_integration_returns_404(client):
    response = client.get("/api/integrations/myspace")

    assert response.status_code == 404
    assert response.json()["error"] == "Integration myspace not found"


def test_validate_keys_reports_every_missing_key(client):
    response = client.post(
        "/api/integrations/validate-keys",
        json={"integrationId": "wordpress", "apiKeys": {"wordpress_username": "editor"}},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["missingKeys"] == ["wordpress_url", "wordpress_app_password"]
    assert body["requiredKeys"] == ["wordpress_url", "wordpress_username", "wordpress_app_password"]


def test_validate_keys_success(client):
    response = client.post(
        "/api/integrations/validate-keys",
        json={"integrationId": "stripe", "apiKeys": {"stripe_secret_key": "sk_test"}},
    )

    assert response.status_code == 200
    assert response.json()["data"]["valid"] is True


def test_integration_test_uses_default_payload(client):
    response = client.post(
        "/api/integrations/twitter/test",
        json={"apiKeys": {"twitter_api_key": "k", "twitter_access_token": "t"}},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["success"] is True
    assert data["data"]["text"] == "Test data for Twitter integration"


def test_integration_test_reports_missing_key_as_data(client):
    response = client.post("/api/integrations/stripe/test", json={})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["success"] is False
    assert data["error"] == "Missing required API key: stripe_secret_key"


def test_gmail_test_email_requires_credentials(client):
    response = client.post("/api/integrations/gmail/test-email", json={"gmail_email": "a@gmail.com"})

    assert response.status_code == 400
    assert response.json()["error"] == (
        "Missing Gmail credentials. Need gmail_email and gmail_app_password"
    )


class RecordingSMTP:
    sent = []

    def __init__(self, host, port, timeout=None):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def login(self, user, password):
        if password == "wrong":
            raise smtplib.SMTPAuthenticationError(535, b"Username and Password not accepted")

    def send_message(self, message):
        RecordingSMTP.sent.append(message)


def _use_recording_smtp():
    RecordingSMTP.sent = []
    registry = dependencies.get_integration_registry()
    config = registry.require("gmail")
    registry.register(config, GmailSmtpAdapter(smtp_factory=RecordingSMTP))


def test_gmail_test_email_sends_to_recipient(client):
    _use_recording_smtp()

    response = client.post(
        "/api/integrations/gmail/test-email",
        json={
            "gmail_email": "owner@gmail.com",
            "gmail_app_password": "abcdabcdabcdabcd",
            "recipient_email": "friend@example.com",
        },
    )

    body = response.json()
    assert body["success"] is True
    assert body["recipient"] == "friend@example.com"
    assert body["message"] == "✅ Email sent successfully to friend@example.com!"
    assert RecordingSMTP.sent[0]["Subject"] == "Test Email from Barakah AI Agents"


def test_gmail_login_failure_is_reported(client):
    _use_recording_smtp()

    response = client.post(
        "/api/integrations/gmail/test-email",
        json={"gmail_email": "owner@gmail.com", "gmail_app_password": "wrong"},
    )

    body = response.json()
    assert body["success"] is False
    assert body["recipient"] == "owner@gmail.com"
    assert "Gmail login failed" in body["data"]["error"]
    assert RecordingSMTP.sent == []
