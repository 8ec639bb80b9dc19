"""
Integration Tests for FastAPI Backend

Tests for API endpoints: analysis, reference data, health checks.
Uses async httpx for ASGI app testing. The orchestrator is always replaced
with an unconfigured one so no request ever reaches Gemini.
"""
import pytest
import httpx
from typing import Dict, Any

from eternity.config import AnalysisSettings
from eternity.core.analysis import FAILURE_ADVISORY, DEMO_NOTICE, RiskAnalysisOrchestrator
from eternity.main import app


@pytest.fixture
async def async_client():
    """Create async test client with a demo-only orchestrator."""
    app.state.orchestrator = RiskAnalysisOrchestrator(AnalysisSettings(gemini_api_key=None))
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client


@pytest.fixture
def analysis_request() -> Dict[str, Any]:
    return {
        "family_history": [
            {
                "relationship": "father",
                "smoking": "past_smoker",
                "deceased": False,
                "diseases": [
                    {"name": "고혈압", "diagnosis_age": 45, "is_cause_of_death": False}
                ],
            }
        ],
        "personal_health": {
            "age": 35,
            "gender": "male",
            "height": 175,
            "weight": 70,
            "smoking": "non_smoker",
            "systolic_bp": 120,
            "diastolic_bp": 80,
            "fasting_glucose": 95,
            "total_cholesterol": 180,
            "ldl": 100,
            "hdl": 60,
            "triglycerides": 150,
            "location": "서울",
            "environmental_risk_score": 5,
        },
    }


@pytest.mark.asyncio
class TestHealthEndpoints:
    """Tests for health check endpoints."""

    async def test_root_endpoint(self, async_client):
        response = await async_client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert data["gemini_configured"] is False

    async def test_health_endpoint(self, async_client):
        response = await async_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
class TestReferenceEndpoints:

    async def test_default_personal_health(self, async_client):
        response = await async_client.get("/api/v1/defaults/personal-health")
        assert response.status_code == 200

        data = response.json()
        assert data["age"] == 35
        assert data["location"] == "서울"
        assert data["bmi"] == 22.9

    async def test_relationships(self, async_client):
        response = await async_client.get("/api/v1/reference/relationships")
        relationships = response.json()["relationships"]
        assert len(relationships) == 6
        assert {"value": "father", "label": "아버지"} in relationships

    async def test_smoking_statuses(self, async_client):
        response = await async_client.get("/api/v1/reference/smoking-statuses")
        values = [s["value"] for s in response.json()["smoking_statuses"]]
        assert values == ["non_smoker", "past_smoker", "current_smoker"]


@pytest.mark.asyncio
class TestAnalysisEndpoint:

    async def test_demo_analysis(self, async_client, analysis_request):
        response = await async_client.post("/api/v1/analysis", json=analysis_request)
        assert response.status_code == 200

        data = response.json()
        assert data["source"] == "fallback"
        assert data["degraded"] is True
        assert data["advisory"] == DEMO_NOTICE
        assert data["analysis"]["risk_scores"]["cardiovascular"] == 62
        assert len(data["analysis"]["prediction_timeline"]) == 3

    async def test_empty_family_history(self, async_client, analysis_request):
        analysis_request["family_history"] = []
        response = await async_client.post("/api/v1/analysis", json=analysis_request)
        assert response.status_code == 200

    async def test_service_failure_advisory(self, async_client, analysis_request, fake_llm, inference_client_for):
        app.state.orchestrator = RiskAnalysisOrchestrator(
            AnalysisSettings(gemini_api_key="test-key"),
            inference_client=inference_client_for(fake_llm(error=ConnectionError("HTTP 502"))),
        )
        response = await async_client.post("/api/v1/analysis", json=analysis_request)
        assert response.status_code == 200

        data = response.json()
        assert data["degraded"] is True
        assert data["advisory"] == FAILURE_ADVISORY

    async def test_unnamed_disease_rejected(self, async_client, analysis_request):
        analysis_request["family_history"][0]["diseases"][0]["name"] = ""
        response = await async_client.post("/api/v1/analysis", json=analysis_request)
        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "INPUT_VALIDATION_ERROR"

    async def test_invalid_relationship_rejected(self, async_client, analysis_request):
        analysis_request["family_history"][0]["relationship"] = "uncle"
        response = await async_client.post("/api/v1/analysis", json=analysis_request)
        assert response.status_code == 422

    async def test_negative_measurement_rejected(self, async_client, analysis_request):
        analysis_request["personal_health"]["ldl"] = -10
        response = await async_client.post("/api/v1/analysis", json=analysis_request)
        assert response.status_code == 422
