import pytest
from httpx import AsyncClient, ASGITransport

from main import app
from app.core.dependencies import get_ai_service
from app.models.schemas import (
    EstimateEffortOutput,
    RecommendToolsOutput,
    SupportChatOutput,
    ToolRecommendation,
)
from app.repositories.interfaces.ai_service import AIServiceError


def test_health_check(test_client):
    """Test health check endpoint"""
    response = test_client.get("/api/v1/health/")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "2.0.0"
    assert "timestamp" in data
    assert "environment" in data


def test_readiness_check(test_client):
    """Test readiness check endpoint"""
    response = test_client.get("/api/v1/health/readiness")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] in ("ready", "degraded")
    assert data["checks"]["ai_provider"]
    assert "timestamp" in data


def test_recommend_curated(test_client):
    response = test_client.post("/api/v1/tools/recommend", json={"application_under_test": "web"})
    assert response.status_code == 200

    names = [r["tool_name"] for r in response.json()["recommendations"]]
    assert names == ["Functionize", "Playwright", "Selenium"]


def test_recommend_model_failure_is_bad_gateway(test_client, fake_ai):
    fake_ai.errors["recommend_tools"] = AIServiceError("quota exceeded")

    response = test_client.post("/api/v1/tools/recommend", json={"application_under_test": "api"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to get tool recommendations. quota exceeded"


def test_recommend_rejects_blank_filter(test_client):
    response = test_client.post("/api/v1/tools/recommend", json={"test_type": ""})
    assert response.status_code == 422


def test_recommend_and_compare(test_client, fake_ai):
    fake_ai.responses["recommend_tools"] = RecommendToolsOutput(recommendations=[
        ToolRecommendation(tool_name="Postman", score=90, justification="API"),
        ToolRecommendation(tool_name="Karate DSL", score=85, justification="BDD API"),
    ])

    response = test_client.post("/api/v1/tools/recommend-and-compare", json={"application_under_test": "api"})
    assert response.status_code == 200

    data = response.json()
    assert [r["tool_name"] for r in data["recommendations"]] == ["Postman", "Karate DSL"]
    assert set(data["comparison"]["tool_overviews"]) == {"Postman", "Karate DSL"}
    assert set(data["analyses"]) == {"Postman", "Karate DSL"}


def test_compare_fallback(test_client, fake_ai):
    fake_ai.errors["compare_tools"] = AIServiceError("down")

    response = test_client.post("/api/v1/tools/compare", json={"tool_names": ["Cypress", " Cypress ", "Selenium"]})
    assert response.status_code == 200

    data = response.json()
    assert len(data["comparison_table"]) == 9
    assert set(data["tool_overviews"]) == {"Cypress", "Selenium"}


@pytest.mark.parametrize("tool_names", [[], ["A", "B", "C", "D", "E", "F"], ["Cypress", "  "]])
def test_compare_validation(test_client, tool_names):
    response = test_client.post("/api/v1/tools/compare", json={"tool_names": tool_names})
    assert response.status_code == 422


def test_details_fallback(test_client):
    response = test_client.post("/api/v1/tools/details", json={"tool_name": "Gauge"})
    assert response.status_code == 200
    assert response.json()["tool_name"] == "Gauge (Error)"


def test_analysis_local_data(test_client, fake_ai):
    response = test_client.post("/api/v1/tools/analysis", json={"tool_name": "Cypress"})
    assert response.status_code == 200
    assert response.json()["strengths"]
    assert fake_ai.calls == []


def test_estimate_effort_zero(test_client):
    response = test_client.post("/api/v1/tools/estimate-effort", json={"automation_tool": "Selenium"})
    assert response.status_code == 200
    assert response.json()["confidence_score"] == 100


def test_estimate_effort_from_model(test_client, fake_ai):
    fake_ai.responses["estimate_effort"] = EstimateEffortOutput(
        estimated_effort_days=4.0, effort_days_min=3.6, effort_days_max=4.4,
        estimated_duration_days=2.0, explanation="steps", confidence_score=96,
    )

    response = test_client.post(
        "/api/v1/tools/estimate-effort",
        json={"complexity_medium": 30, "qa_team_size": 2},
    )

    assert response.status_code == 200
    assert response.json()["estimated_effort_days"] == 4.0


def test_estimate_effort_failure(test_client, fake_ai):
    fake_ai.errors["estimate_effort"] = AIServiceError("bad json")

    response = test_client.post("/api/v1/tools/estimate-effort", json={"complexity_low": 5})

    assert response.status_code == 502
    assert response.json()["detail"].startswith("Failed to get effort estimation.")


def test_estimate_effort_rejects_negative_counts(test_client):
    response = test_client.post("/api/v1/tools/estimate-effort", json={"complexity_low": -1})
    assert response.status_code == 422


def test_estimate_effort_baseline(test_client, fake_ai):
    response = test_client.post("/api/v1/tools/estimate-effort/baseline", json={"complexity_high": 10})
    assert response.status_code == 200
    assert response.json()["estimated_effort_days"] == 2.0
    assert fake_ai.calls == []


def test_reference_endpoints(test_client):
    catalog = test_client.get("/api/v1/tools/catalog")
    trends = test_client.get("/api/v1/tools/trends")

    assert "Selenium" in catalog.json()
    assert len(trends.json()) == 3


def test_documentation_link(test_client):
    response = test_client.get("/api/v1/tools/Playwright/documentation")
    assert response.status_code == 200
    assert response.json()["label"] == "View Playwright Docs"

    missing = test_client.get("/api/v1/tools/Nonexistent/documentation")
    assert missing.status_code == 404


def test_roi_projection(test_client):
    response = test_client.post(
        "/api/v1/tools/roi-projection",
        json={"recommendations": [{"tool_name": "Cypress", "score": 80, "justification": ""}]},
    )
    assert response.status_code == 200

    series = response.json()
    assert series[0]["tool_name"] == "Cypress"
    assert len(series[0]["points"]) == 7


def test_chat_reply(test_client, fake_ai):
    fake_ai.responses["support_chat"] = SupportChatOutput(response="Use Playwright.")

    response = test_client.post("/api/v1/chat", json={"messages": [{"role": "user", "content": "Hi"}]})

    assert response.status_code == 200
    assert response.json()["response"] == "Use Playwright."


def test_chat_failure_still_answers(test_client, fake_ai):
    fake_ai.errors["support_chat"] = AIServiceError("down")

    response = test_client.post("/api/v1/chat", json={"messages": [{"role": "user", "content": "Hi"}]})

    assert response.status_code == 200
    assert response.json()["response"].startswith("Sorry, I encountered an error")


def test_chat_requires_messages(test_client):
    response = test_client.post("/api/v1/chat", json={"messages": []})
    assert response.status_code == 422


def test_export_comparison_csv(test_client):
    payload = {
        "comparison": {
            "comparison_table": [{"criterion_name": "Ease of Use", "tool_values": {"Cypress": "Easy"}}],
            "tool_overviews": {"Cypress": "JS E2E."},
        },
        "recommendations": [{"tool_name": "Cypress", "score": 88, "justification": ""}],
    }

    response = test_client.post("/api/v1/exports/comparison.csv", json=payload)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="tool_comparison.csv"' in response.headers["content-disposition"]
    lines = response.text.splitlines()
    assert lines[0] == "Parameters,Cypress"
    assert lines[1] == "Score,8.8/10"


@pytest.mark.asyncio
async def test_compare_endpoint_async(fake_ai):
    """Same routes work through the async client"""
    app.dependency_overrides[get_ai_service] = lambda: fake_ai
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.post("/api/v1/tools/compare", json={"tool_names": ["Cypress"]})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json()["tool_overviews"]["Cypress"].startswith("Overview for Cypress")
