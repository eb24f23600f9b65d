"""
Integration tests for workflow template endpoints.
"""
import pytest

from api import dependencies


def test_list_templates(client):
    body = client.get("/api/workflows/templates").json()

    assert body["count"] == 3
    assert [template["id"] for template in body["data"]] == [
        "blog-publishing",
        "product-launch",
        "lead-generation",
    ]
    research = body["data"][0]["steps"][0]
    assert research["type"] == "ai-generation"
    assert research["nextSteps"] == ["keyword-analysis"]


def test_get_unknown_template_returns_404(client):
    response = client.get("/api/workflows/templates/ghost")

    assert response.status_code == 404
    assert response.json()["error"] == "Workflow template ghost not found"


def test_execute_requires_template_id(client):
    response = client.post("/api/workflows/execute", json={"variables": {}})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request data"


def test_unknown_workflow_execution_returns_404(client):
    response = client.get("/api/workflows/execution/workflow_missing")

    assert response.status_code == 404
    assert response.json()["error"] == "Execution not found"


@pytest.mark.asyncio
async def test_blog_publishing_workflow_end_to_end(async_client):
    response = await async_client.post(
        "/api/workflows/execute",
        json={"templateId": "blog-publishing", "variables": {"topic": "Halal fintech"}},
        headers={"x-user-id": "writer"},
    )
    assert response.status_code == 200
    execution_id = response.json()["data"]["executionId"]
    assert execution_id.startswith("workflow_")

    await dependencies.get_supervisor().wait(execution_id)
    data = (await async_client.get(f"/api/workflows/execution/{execution_id}")).json()["data"]

    assert data["status"] == "completed"
    assert data["progress"] == 100
    assert data["completedSteps"] == data["totalSteps"] == 6
    assert data["variables"]["topic"] == "Halal fintech"
    assert data["variables"]["target_audience"] == ""
    assert data["results"]["research"]["content"].startswith(
        "AI generated content for: Research the topic: Halal fintech"
    )
    assert data["results"]["wordpress-publish"]["success"] is True


@pytest.mark.asyncio
async def test_lead_generation_wait_step_reports_configured_duration(async_client):
    response = await async_client.post("/api/workflows/execute", json={"templateId": "lead-generation"})
    execution_id = response.json()["data"]["executionId"]

    await dependencies.get_supervisor().wait(execution_id)
    data = (await async_client.get(f"/api/workflows/execution/{execution_id}")).json()["data"]

    assert data["status"] == "completed"
    assert data["results"]["wait-responses"]["waited"] is True


@pytest.mark.asyncio
async def test_user_workflow_executions_are_filtered(async_client):
    mine = await async_client.post(
        "/api/workflows/execute", json={"templateId": "product-launch"}, headers={"x-user-id": "me"}
    )
    await async_client.post(
        "/api/workflows/execute", json={"templateId": "product-launch"}, headers={"x-user-id": "you"}
    )

    body = (await async_client.get("/api/workflows/executions/user/me")).json()

    assert [execution["id"] for execution in body["data"]] == [mine.json()["data"]["executionId"]]
    assert body["pagination"]["total"] == 1
