"""
Health Input Records

Family history and personal health records supplied by the form collaborator.
These are plain, mutable dataclasses; the pipeline snapshots them with
copy() before building a request.
"""
from __future__ import annotations

import copy as _copy
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from eternity.utils.exceptions import InputValidationError


class Relationship(str, Enum):
    """Ancestor relationship to the user."""
    FATHER = "father"
    MOTHER = "mother"
    PATERNAL_GRANDFATHER = "paternal_grandfather"
    PATERNAL_GRANDMOTHER = "paternal_grandmother"
    MATERNAL_GRANDFATHER = "maternal_grandfather"
    MATERNAL_GRANDMOTHER = "maternal_grandmother"

    @property
    def label(self) -> str:
        return _RELATIONSHIP_LABELS[self]


_RELATIONSHIP_LABELS = {
    Relationship.FATHER: "아버지",
    Relationship.MOTHER: "어머니",
    Relationship.PATERNAL_GRANDFATHER: "친할아버지",
    Relationship.PATERNAL_GRANDMOTHER: "친할머니",
    Relationship.MATERNAL_GRANDFATHER: "외할아버지",
    Relationship.MATERNAL_GRANDMOTHER: "외할머니",
}


class SmokingStatus(str, Enum):
    """Smoking history, shared by family members and the user."""
    NON_SMOKER = "non_smoker"
    PAST_SMOKER = "past_smoker"
    CURRENT_SMOKER = "current_smoker"

    @property
    def label(self) -> str:
        return _SMOKING_LABELS[self]


_SMOKING_LABELS = {
    SmokingStatus.NON_SMOKER: "비흡연",
    SmokingStatus.PAST_SMOKER: "과거 흡연",
    SmokingStatus.CURRENT_SMOKER: "현재 흡연",
}


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


def _require_non_negative(name: str, value: Optional[float]) -> None:
    if value is not None and value < 0:
        raise InputValidationError(f"{name} must be non-negative, got {value}", field=name)


@dataclass
class DiseaseHistory:
    """
    One diagnosed disease of a family member.

    An empty name is allowed while the record is being edited; see
    ensure_ready_for_analysis() for the pre-analysis check.
    """
    name: str = ""
    diagnosis_age: int = 50
    is_cause_of_death: bool = False
    death_age: Optional[int] = None
    note: Optional[str] = None

    def __post_init__(self):
        _require_non_negative("diagnosis_age", self.diagnosis_age)
        _require_non_negative("death_age", self.death_age)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "diagnosis_age": self.diagnosis_age,
            "is_cause_of_death": self.is_cause_of_death,
        }
        if self.death_age is not None:
            data["death_age"] = self.death_age
        if self.note:
            data["note"] = self.note
        return data


@dataclass
class FamilyMember:
    """A single ancestor with smoking and disease annotations."""
    relationship: Relationship = Relationship.FATHER
    smoking: SmokingStatus = SmokingStatus.NON_SMOKER
    deceased: bool = False
    diseases: List[DiseaseHistory] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self):
        self.relationship = Relationship(self.relationship)
        self.smoking = SmokingStatus(self.smoking)

    def to_dict(self, include_id: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "relationship": self.relationship.value,
            "relationship_label": self.relationship.label,
            "smoking": self.smoking.value,
            "deceased": self.deceased,
            "diseases": [d.to_dict() for d in self.diseases],
        }
        if include_id:
            data["id"] = self.id
        return data

    def copy(self) -> "FamilyMember":
        return _copy.deepcopy(self)


@dataclass
class PersonalHealth:
    """
    The user's own demographic, clinical and environmental data.

    Blood pressure in mmHg, glucose and lipids in mg/dL.
    """
    age: int
    gender: Gender
    height: float  # cm
    weight: float  # kg
    smoking: SmokingStatus
    systolic_bp: float
    diastolic_bp: float
    fasting_glucose: float
    total_cholesterol: float
    ldl: float
    hdl: float
    triglycerides: float
    location: str = ""
    environmental_risk_score: float = 0.0

    def __post_init__(self):
        self.gender = Gender(self.gender)
        self.smoking = SmokingStatus(self.smoking)
        if self.age <= 0:
            raise InputValidationError(f"age must be positive, got {self.age}", field="age")
        for name in (
            "height", "weight", "systolic_bp", "diastolic_bp", "fasting_glucose",
            "total_cholesterol", "ldl", "hdl", "triglycerides",
        ):
            _require_non_negative(name, getattr(self, name))

    @property
    def bmi(self) -> Optional[float]:
        """Body-mass index, None when height is unknown."""
        if not self.height:
            return None
        meters = self.height / 100.0
        return round(self.weight / (meters * meters), 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "age": self.age,
            "gender": self.gender.value,
            "height": self.height,
            "weight": self.weight,
            "bmi": self.bmi,
            "smoking": self.smoking.value,
            "smoking_label": self.smoking.label,
            "systolic_bp": self.systolic_bp,
            "diastolic_bp": self.diastolic_bp,
            "fasting_glucose": self.fasting_glucose,
            "total_cholesterol": self.total_cholesterol,
            "ldl": self.ldl,
            "hdl": self.hdl,
            "triglycerides": self.triglycerides,
            "location": self.location,
            "environmental_risk_score": self.environmental_risk_score,
        }

    def copy(self) -> "PersonalHealth":
        return _copy.deepcopy(self)


def default_personal_health() -> PersonalHealth:
    """Initial record shown to the user before they enter their own values."""
    return PersonalHealth(
        age=35,
        gender=Gender.MALE,
        height=175,
        weight=70,
        smoking=SmokingStatus.NON_SMOKER,
        systolic_bp=120,
        diastolic_bp=80,
        fasting_glucose=95,
        total_cholesterol=180,
        ldl=100,
        hdl=60,
        triglycerides=150,
        location="서울",
        environmental_risk_score=5,
    )


def snapshot_family_history(family_history: Sequence[FamilyMember]) -> List[FamilyMember]:
    """Deep copy so later edits by the caller cannot reach an in-flight analysis."""
    return [member.copy() for member in family_history]


def ensure_ready_for_analysis(family_history: Sequence[FamilyMember]) -> None:
    """
    Reject transient editing states that must not reach the analysis.

    Raises:
        InputValidationError: if any disease is still unnamed
    """
    for member in family_history:
        for index, disease in enumerate(member.diseases):
            if not disease.name.strip():
                raise InputValidationError(
                    f"Disease #{index + 1} of {member.relationship.value} has no name",
                    field="diseases.name",
                    details={"member_id": member.id, "disease_index": index},
                )
