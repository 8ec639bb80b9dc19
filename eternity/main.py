"""
Eternity Risk Analysis - FastAPI Application

Main application entry point with API endpoints for:
- Health-risk analysis from family history and personal health data
- Reference data for the input forms
- Health checks
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from eternity import __version__
from eternity.config import AnalysisSettings
from eternity.core.analysis import RiskAnalysisOrchestrator
from eternity.models.api import AnalysisRequest, AnalysisResponse, HealthResponse
from eternity.models.health import (
    Relationship,
    SmokingStatus,
    default_personal_health,
    ensure_ready_for_analysis,
)
from eternity.utils import get_logger, setup_logging
from eternity.utils.exceptions import InputValidationError

logger = get_logger(__name__)

settings = AnalysisSettings.from_env()
START_TIME = datetime.now()


# ---- Application Lifespan ----

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and build the orchestrator once per process."""
    setup_logging(settings.log_level)
    app.state.orchestrator = RiskAnalysisOrchestrator(settings)
    if settings.gemini_configured:
        logger.info(f"Gemini analysis enabled (model: {settings.gemini_model})")
    else:
        logger.warning("GEMINI_API_KEY not set - analysis will serve demo data")
    logger.info("API ready to accept requests")
    yield
    logger.info("Eternity API shut down.")


# ---- FastAPI Application ----

app = FastAPI(
    title="Eternity Risk Analysis API",
    description="Family-history based health risk analysis with Gemini and a demo fallback",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_orchestrator(request: Request) -> RiskAnalysisOrchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        # Lifespan not run (e.g. transport without lifespan support)
        orchestrator = RiskAnalysisOrchestrator(settings)
        request.app.state.orchestrator = orchestrator
    return orchestrator


def _health_response(request: Request) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
        gemini_configured=_get_orchestrator(request).is_configured,
        timestamp=datetime.now().isoformat(),
    )


# ---- API Endpoints ----

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root(request: Request):
    """API root - health check."""
    return _health_response(request)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint."""
    return _health_response(request)


@app.post("/api/v1/analysis", response_model=AnalysisResponse, tags=["Analysis"])
async def run_analysis(payload: AnalysisRequest, request: Request):
    """
    Run the health-risk analysis.

    Always answers with a complete analysis; when Gemini is unavailable the
    demo analysis is returned with degraded=true and an advisory message.
    """
    try:
        family_history = [member.to_domain() for member in payload.family_history]
        personal_health = payload.personal_health.to_domain()
        ensure_ready_for_analysis(family_history)
    except InputValidationError as e:
        logger.warning(f"Analysis rejected: {e.message}")
        raise HTTPException(status_code=422, detail=e.to_dict())

    outcome = await _get_orchestrator(request).analyze_async(family_history, personal_health)
    return AnalysisResponse(**outcome.to_dict())


@app.get("/api/v1/defaults/personal-health", tags=["Reference"])
async def get_default_personal_health() -> Dict[str, Any]:
    """Initial personal health values for the form."""
    return default_personal_health().to_dict()


@app.get("/api/v1/reference/relationships", tags=["Reference"])
async def list_relationships() -> Dict[str, List[Dict[str, str]]]:
    """Family relationships with display labels."""
    return {
        "relationships": [{"value": r.value, "label": r.label} for r in Relationship]
    }


@app.get("/api/v1/reference/smoking-statuses", tags=["Reference"])
async def list_smoking_statuses() -> Dict[str, List[Dict[str, str]]]:
    """Smoking statuses with display labels."""
    return {
        "smoking_statuses": [{"value": s.value, "label": s.label} for s in SmokingStatus]
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("eternity.main:app", host="0.0.0.0", port=8000, reload=False)
