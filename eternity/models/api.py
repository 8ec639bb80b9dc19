"""
Analysis API Models
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from eternity.models.health import (
    DiseaseHistory,
    FamilyMember,
    Gender,
    PersonalHealth,
    Relationship,
    SmokingStatus,
)


class DiseaseInput(BaseModel):
    """One disease entry of a family member."""
    name: str
    diagnosis_age: int = Field(..., ge=0)
    is_cause_of_death: bool = False
    death_age: Optional[int] = Field(default=None, ge=0)
    note: Optional[str] = None

    def to_domain(self) -> DiseaseHistory:
        return DiseaseHistory(**self.model_dump())


class FamilyMemberInput(BaseModel):
    """Family member as submitted by the form."""
    id: Optional[str] = None
    relationship: Relationship
    smoking: SmokingStatus = SmokingStatus.NON_SMOKER
    deceased: bool = False
    diseases: List[DiseaseInput] = []

    def to_domain(self) -> FamilyMember:
        member = FamilyMember(
            relationship=self.relationship,
            smoking=self.smoking,
            deceased=self.deceased,
            diseases=[d.to_domain() for d in self.diseases],
        )
        if self.id:
            member.id = self.id
        return member


class PersonalHealthInput(BaseModel):
    """Personal health record. Blood pressure in mmHg, lab values in mg/dL."""
    age: int = Field(..., gt=0)
    gender: Gender
    height: float = Field(..., ge=0, description="Height in cm")
    weight: float = Field(..., ge=0, description="Weight in kg")
    smoking: SmokingStatus = SmokingStatus.NON_SMOKER
    systolic_bp: float = Field(..., ge=0)
    diastolic_bp: float = Field(..., ge=0)
    fasting_glucose: float = Field(..., ge=0)
    total_cholesterol: float = Field(..., ge=0)
    ldl: float = Field(..., ge=0)
    hdl: float = Field(..., ge=0)
    triglycerides: float = Field(..., ge=0)
    location: str = ""
    environmental_risk_score: float = 0.0

    def to_domain(self) -> PersonalHealth:
        return PersonalHealth(**self.model_dump())


class AnalysisRequest(BaseModel):
    """Request for a health-risk analysis."""
    family_history: List[FamilyMemberInput] = []
    personal_health: PersonalHealthInput


class AnalysisResponse(BaseModel):
    """Analysis result plus degraded-mode information."""
    analysis: Dict[str, Any]
    source: str
    degraded: bool = False
    advisory: Optional[str] = None
    latency_ms: float = 0.0


class HealthResponse(BaseModel):
    """Health status response."""
    status: str
    version: str
    uptime_seconds: float
    gemini_configured: bool
    timestamp: str
