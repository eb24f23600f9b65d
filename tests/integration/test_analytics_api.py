"""
Integration tests for analytics and health endpoints.
"""
import pytest

from api import dependencies

LINKEDIN_KEYS = {"linkedin_access_token": "li-token"}


def test_dashboard_without_user_is_empty(client):
    data = client.get("/api/analytics/dashboard").json()["data"]

    assert data["overview"]["totalExecutions"] == 0
    assert data["overview"]["successRate"] == 0
    assert data["overview"]["activeAgents"] == 4
    assert data["popularAgents"] == []
    assert data["timeframe"] == "30d"


@pytest.mark.asyncio
async def test_dashboard_aggregates_user_runs(async_client, text_generator):
    text_generator.error = RuntimeError("boom")
    dependencies.set_text_generator(text_generator)
    failed = await async_client.post(
        "/api/agents/product-launch/execute", json={"input": {}}, headers={"x-user-id": "dash"}
    )
    await dependencies.get_supervisor().wait(failed.json()["data"]["executionId"])

    text_generator.error = None
    for _ in range(2):
        response = await async_client.post(
            "/api/agents/blog-publisher/execute",
            json={"input": {"topic": "AI"}, "apiKeys": LINKEDIN_KEYS},
            headers={"x-user-id": "dash"},
        )
        await dependencies.get_supervisor().wait(response.json()["data"]["executionId"])

    data = (
        await async_client.get("/api/analytics/dashboard", params={"userId": "dash", "timeframe": "7d"})
    ).json()["data"]

    assert data["overview"] == {
        "totalExecutions": 3,
        "successfulExecutions": 2,
        "successRate": 67,
        "timeSavedHours": 1,
        "costSavings": 100,
        "activeAgents": 4,
    }
    assert data["popularAgents"][0] == {
        "agentId": "blog-publisher",
        "name": "Blog Publisher Agent",
        "executions": 2,
    }
    assert data["integrationStats"] == {"linkedin": 2}
    assert data["timeframe"] == "7d"


def test_health(client):
    body = client.get("/health").json()

    assert body["status"] == "healthy"
    assert body["service"] == "Barakah AI Agents API"


def test_readiness_reports_optional_collaborators(client):
    body = client.get("/health/ready").json()

    assert body["checks"]["openai"] == "mock"
    assert body["checks"]["database"] == "disabled"
    assert body["active_runs"] == 0


def test_root(client):
    assert client.get("/").json()["docs"] == "/docs"
