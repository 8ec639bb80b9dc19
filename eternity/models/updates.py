"""
Typed Record Updates

Each edit the form can make to the family history or the personal health
record is its own small update type. apply_family_update() and
apply_personal_update() never mutate their input; they return the edited copy.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from eternity.models.health import (
    DiseaseHistory,
    FamilyMember,
    Gender,
    PersonalHealth,
    Relationship,
    SmokingStatus,
)
from eternity.utils.exceptions import InputValidationError


# ---- Family history updates ----

@dataclass(frozen=True)
class AddMember:
    member: FamilyMember = field(default_factory=FamilyMember)


@dataclass(frozen=True)
class RemoveMember:
    member_id: str


@dataclass(frozen=True)
class SetRelationship:
    member_id: str
    relationship: Relationship


@dataclass(frozen=True)
class SetMemberSmoking:
    member_id: str
    smoking: SmokingStatus


@dataclass(frozen=True)
class SetDeceased:
    member_id: str
    deceased: bool


@dataclass(frozen=True)
class AddDisease:
    member_id: str
    disease: DiseaseHistory = field(default_factory=DiseaseHistory)


@dataclass(frozen=True)
class RemoveDisease:
    member_id: str
    disease_index: int


@dataclass(frozen=True)
class UpdateDisease:
    """Replace only the given disease fields; None leaves a field untouched."""
    member_id: str
    disease_index: int
    name: Optional[str] = None
    diagnosis_age: Optional[int] = None
    is_cause_of_death: Optional[bool] = None
    death_age: Optional[int] = None
    note: Optional[str] = None


FamilyUpdate = Union[
    AddMember, RemoveMember, SetRelationship, SetMemberSmoking,
    SetDeceased, AddDisease, RemoveDisease, UpdateDisease,
]
_FAMILY_UPDATE_TYPES = (
    AddMember, RemoveMember, SetRelationship, SetMemberSmoking,
    SetDeceased, AddDisease, RemoveDisease, UpdateDisease,
)


def _find_member(history: List[FamilyMember], member_id: str) -> FamilyMember:
    for member in history:
        if member.id == member_id:
            return member
    raise InputValidationError(f"Unknown family member: {member_id}", field="member_id")


def _check_disease_index(member: FamilyMember, index: int) -> None:
    if not 0 <= index < len(member.diseases):
        raise InputValidationError(
            f"Disease index {index} out of range for member {member.id}",
            field="disease_index",
            details={"disease_count": len(member.diseases)},
        )


def apply_family_update(history: Sequence[FamilyMember], update: FamilyUpdate) -> List[FamilyMember]:
    """
    Apply one update to a family history.

    Args:
        history: Current family history (left untouched)
        update: One of the FamilyUpdate variants

    Returns:
        New family history list

    Raises:
        InputValidationError: unknown member id or disease index
    """
    if not isinstance(update, _FAMILY_UPDATE_TYPES):
        raise TypeError(f"Unsupported family update: {type(update).__name__}")

    result = [member.copy() for member in history]

    if isinstance(update, AddMember):
        result.append(update.member.copy())
        return result

    if isinstance(update, RemoveMember):
        _find_member(result, update.member_id)
        return [m for m in result if m.id != update.member_id]

    member = _find_member(result, update.member_id)

    if isinstance(update, SetRelationship):
        member.relationship = Relationship(update.relationship)
    elif isinstance(update, SetMemberSmoking):
        member.smoking = SmokingStatus(update.smoking)
    elif isinstance(update, SetDeceased):
        member.deceased = update.deceased
    elif isinstance(update, AddDisease):
        member.diseases.append(dataclasses.replace(update.disease))
    elif isinstance(update, RemoveDisease):
        _check_disease_index(member, update.disease_index)
        del member.diseases[update.disease_index]
    elif isinstance(update, UpdateDisease):
        _check_disease_index(member, update.disease_index)
        changes = {
            name: getattr(update, name)
            for name in ("name", "diagnosis_age", "is_cause_of_death", "death_age", "note")
            if getattr(update, name) is not None
        }
        member.diseases[update.disease_index] = dataclasses.replace(
            member.diseases[update.disease_index], **changes
        )

    return result


# ---- Personal health updates ----

@dataclass(frozen=True)
class SetDemographics:
    age: Optional[int] = None
    gender: Optional[Gender] = None
    height: Optional[float] = None
    weight: Optional[float] = None


@dataclass(frozen=True)
class SetSmoking:
    smoking: SmokingStatus


@dataclass(frozen=True)
class SetVitals:
    systolic_bp: Optional[float] = None
    diastolic_bp: Optional[float] = None
    fasting_glucose: Optional[float] = None


@dataclass(frozen=True)
class SetLipids:
    total_cholesterol: Optional[float] = None
    ldl: Optional[float] = None
    hdl: Optional[float] = None
    triglycerides: Optional[float] = None


@dataclass(frozen=True)
class SetLocation:
    location: str
    environmental_risk_score: Optional[float] = None


PersonalHealthUpdate = Union[SetDemographics, SetSmoking, SetVitals, SetLipids, SetLocation]


def apply_personal_update(record: PersonalHealth, update: PersonalHealthUpdate) -> PersonalHealth:
    """Return a copy of record with the update applied (re-validated)."""
    if not isinstance(update, (SetDemographics, SetSmoking, SetVitals, SetLipids, SetLocation)):
        raise TypeError(f"Unsupported personal health update: {type(update).__name__}")

    changes = {
        f.name: getattr(update, f.name)
        for f in dataclasses.fields(update)
        if getattr(update, f.name) is not None
    }
    # dataclasses.replace re-runs __post_init__ validation
    return dataclasses.replace(record, **changes)
