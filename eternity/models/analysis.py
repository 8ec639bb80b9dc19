"""
Analysis Result Models

The single output shape of the pipeline, produced either by Gemini or by the
fallback provider. Validation here is what turns a loosely-typed JSON payload
into a trustworthy result: any violation surfaces as a pydantic
ValidationError and is reported upstream as a schema violation.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

TIMELINE_LENGTH = 3

# Numeric strings are rejected rather than coerced; NaN and infinities are rejected too
Score = Annotated[float, Field(strict=True, allow_inf_nan=False, ge=0, le=100)]
Number = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class RiskScores(_StrictModel):
    """Risk scores per disease group, 0-100."""
    cardiovascular: Score
    respiratory: Score
    metabolic: Score


class RadarChartData(_StrictModel):
    """Parallel arrays comparing the user to an age-matched average."""
    labels: List[str]
    user_values: List[Number]
    age_group_avg: List[Number]

    @model_validator(mode="after")
    def _check_parallel_lengths(self) -> "RadarChartData":
        lengths = {len(self.labels), len(self.user_values), len(self.age_group_avg)}
        if len(lengths) != 1:
            raise ValueError(
                "radar_chart_data arrays must have equal length "
                f"(labels={len(self.labels)}, user_values={len(self.user_values)}, "
                f"age_group_avg={len(self.age_group_avg)})"
            )
        return self


class RiskAnalysisText(_StrictModel):
    cardiovascular: str
    respiratory: str
    metabolic: str


class PredictionPoint(_StrictModel):
    """One point of the projection: a year label, a status line and a score."""
    year: str
    status: str
    score: Score


class AnalysisResult(_StrictModel):
    """
    Complete health-risk analysis.

    prediction_timeline is positional: index 0 is the present, 1 the
    unmanaged 5-year projection, 2 the managed 5-year projection.
    """
    summary: str
    risk_scores: RiskScores
    radar_chart_data: RadarChartData
    risk_analysis_text: RiskAnalysisText
    prediction_timeline: List[PredictionPoint] = Field(
        ..., min_length=TIMELINE_LENGTH, max_length=TIMELINE_LENGTH
    )
    action_plan: List[str]
    comparison_with_family: str

    @property
    def current(self) -> PredictionPoint:
        return self.prediction_timeline[0]

    @property
    def unmanaged_projection(self) -> PredictionPoint:
        return self.prediction_timeline[1]

    @property
    def managed_projection(self) -> PredictionPoint:
        return self.prediction_timeline[2]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class AnalysisSource(str, Enum):
    """Which path produced the result."""
    GEMINI = "gemini"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class AnalysisOutcome:
    """What the orchestrator hands back: exactly one result plus degraded-mode info."""
    result: AnalysisResult
    source: AnalysisSource
    degraded: bool = False
    advisory: Optional[str] = None
    latency_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "analysis": self.result.to_dict(),
            "source": self.source.value,
            "degraded": self.degraded,
            "advisory": self.advisory,
            "latency_ms": round(self.latency_ms, 2),
        }
