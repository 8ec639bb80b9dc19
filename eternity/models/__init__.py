"""
Domain and API models for the risk analysis pipeline.
"""
from .health import (
    Relationship,
    SmokingStatus,
    Gender,
    DiseaseHistory,
    FamilyMember,
    PersonalHealth,
    default_personal_health,
    snapshot_family_history,
    ensure_ready_for_analysis,
)
from .analysis import (
    RiskScores,
    RadarChartData,
    RiskAnalysisText,
    PredictionPoint,
    AnalysisResult,
    AnalysisSource,
    AnalysisOutcome,
)

__all__ = [
    "Relationship",
    "SmokingStatus",
    "Gender",
    "DiseaseHistory",
    "FamilyMember",
    "PersonalHealth",
    "default_personal_health",
    "snapshot_family_history",
    "ensure_ready_for_analysis",
    "RiskScores",
    "RadarChartData",
    "RiskAnalysisText",
    "PredictionPoint",
    "AnalysisResult",
    "AnalysisSource",
    "AnalysisOutcome",
]
