"""
Unit Tests for Domain Models

Input records (family history, personal health) and the AnalysisResult shape.
"""
import pytest
from pydantic import ValidationError

from eternity.core.analysis.fallback import DEMO_ANALYSIS_RESULT
from eternity.models.analysis import AnalysisOutcome, AnalysisResult, AnalysisSource
from eternity.models.health import (
    DiseaseHistory,
    FamilyMember,
    Gender,
    PersonalHealth,
    Relationship,
    SmokingStatus,
    default_personal_health,
    ensure_ready_for_analysis,
    snapshot_family_history,
)
from eternity.utils.exceptions import InputValidationError


class TestFamilyMember:
    """Tests for FamilyMember and DiseaseHistory."""

    def test_defaults(self):
        member = FamilyMember()
        assert member.relationship == Relationship.FATHER
        assert member.smoking == SmokingStatus.NON_SMOKER
        assert member.deceased is False
        assert member.diseases == []

    def test_ids_are_unique(self):
        ids = {FamilyMember().id for _ in range(50)}
        assert len(ids) == 50

    def test_enum_values_accepted_as_strings(self):
        member = FamilyMember(relationship="maternal_grandmother", smoking="current_smoker")
        assert member.relationship is Relationship.MATERNAL_GRANDMOTHER
        assert member.smoking is SmokingStatus.CURRENT_SMOKER

    def test_duplicate_relationships_allowed(self):
        history = [FamilyMember(relationship=Relationship.FATHER) for _ in range(2)]
        assert history[0].relationship == history[1].relationship

    def test_disease_default_is_editing_state(self):
        disease = DiseaseHistory()
        assert disease.name == ""
        assert disease.diagnosis_age == 50
        assert disease.is_cause_of_death is False

    def test_negative_diagnosis_age_rejected(self):
        with pytest.raises(InputValidationError) as exc_info:
            DiseaseHistory(name="당뇨", diagnosis_age=-1)
        assert exc_info.value.field == "diagnosis_age"

    def test_cause_of_death_on_living_member_is_permitted(self):
        member = FamilyMember(
            deceased=False,
            diseases=[DiseaseHistory(name="폐암", diagnosis_age=70, is_cause_of_death=True)],
        )
        assert member.diseases[0].is_cause_of_death

    def test_to_dict_keeps_disease_order(self, family_history):
        grandmother = family_history[1].to_dict()
        assert [d["name"] for d in grandmother["diseases"]] == ["당뇨", "뇌졸중"]
        assert grandmother["relationship_label"] == "외할머니"
        assert grandmother["diseases"][1]["death_age"] == 79

    def test_to_dict_without_id(self, father_with_hypertension):
        assert "id" not in father_with_hypertension.to_dict(include_id=False)
        assert father_with_hypertension.to_dict()["id"] == father_with_hypertension.id

    def test_snapshot_is_independent(self, family_history):
        snapshot = snapshot_family_history(family_history)
        family_history[0].diseases[0].name = "변경됨"
        assert snapshot[0].diseases[0].name == "고혈압"
        assert snapshot[0].id == family_history[0].id


class TestPersonalHealth:
    """Tests for PersonalHealth."""

    def test_default_record(self):
        record = default_personal_health()
        assert record.age == 35
        assert record.gender == Gender.MALE
        assert (record.systolic_bp, record.diastolic_bp) == (120, 80)
        assert record.location == "서울"

    def test_bmi(self, personal_health):
        assert personal_health.bmi == 22.9

    def test_bmi_unknown_without_height(self, personal_health):
        personal_health.height = 0
        assert personal_health.bmi is None

    def test_age_must_be_positive(self):
        with pytest.raises(InputValidationError):
            PersonalHealth(
                age=0, gender="female", height=160, weight=55, smoking="non_smoker",
                systolic_bp=110, diastolic_bp=70, fasting_glucose=90,
                total_cholesterol=170, ldl=90, hdl=65, triglycerides=100,
            )

    def test_negative_measurement_rejected(self):
        with pytest.raises(InputValidationError) as exc_info:
            PersonalHealth(
                age=40, gender="female", height=160, weight=55, smoking="non_smoker",
                systolic_bp=110, diastolic_bp=70, fasting_glucose=90,
                total_cholesterol=170, ldl=-5, hdl=65, triglycerides=100,
            )
        assert exc_info.value.field == "ldl"

    def test_copy_is_independent(self, personal_health):
        snapshot = personal_health.copy()
        personal_health.location = "부산"
        assert snapshot.location == "서울"


class TestReadiness:
    """Tests for ensure_ready_for_analysis."""

    def test_named_diseases_pass(self, family_history):
        ensure_ready_for_analysis(family_history)

    def test_empty_history_passes(self):
        ensure_ready_for_analysis([])

    def test_unnamed_disease_rejected(self):
        member = FamilyMember(diseases=[DiseaseHistory(name="  ")])
        with pytest.raises(InputValidationError) as exc_info:
            ensure_ready_for_analysis([member])
        assert exc_info.value.details["member_id"] == member.id
        assert exc_info.value.to_dict()["error"] == "INPUT_VALIDATION_ERROR"


class TestAnalysisResult:
    """Tests for AnalysisResult validation."""

    def test_valid_payload(self, analysis_payload):
        result = AnalysisResult.model_validate(analysis_payload)
        assert result.risk_scores.respiratory == 30.5
        assert result.current.year == "현재"
        assert result.unmanaged_projection.score == 70
        assert result.managed_projection.score == 35

    def test_radar_length_mismatch(self, make_payload):
        payload = make_payload(lambda p: p["radar_chart_data"]["user_values"].pop())
        with pytest.raises(ValidationError, match="equal length"):
            AnalysisResult.model_validate(payload)

    @pytest.mark.parametrize("length", [2, 4])
    def test_timeline_must_have_three_points(self, make_payload, length):
        def mutate(p):
            point = p["prediction_timeline"][0]
            p["prediction_timeline"] = [dict(point) for _ in range(length)]
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(make_payload(mutate))

    @pytest.mark.parametrize("score", [-1, 100.5])
    def test_score_out_of_range(self, make_payload, score):
        payload = make_payload(lambda p: p["risk_scores"].update(cardiovascular=score))
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(payload)

    def test_numeric_string_score_rejected(self, make_payload):
        payload = make_payload(lambda p: p["risk_scores"].update(metabolic="20"))
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(payload)

    def test_unknown_field_rejected(self, make_payload):
        payload = make_payload(lambda p: p.update(diagnosis="고혈압"))
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(payload)

    def test_result_is_immutable(self, analysis_payload):
        result = AnalysisResult.model_validate(analysis_payload)
        with pytest.raises(ValidationError):
            result.summary = "changed"

    def test_to_dict_round_trips(self, analysis_payload):
        result = AnalysisResult.model_validate(analysis_payload)
        assert AnalysisResult.model_validate(result.to_dict()) == result


class TestAnalysisOutcome:

    def test_to_dict(self):
        outcome = AnalysisOutcome(
            result=DEMO_ANALYSIS_RESULT,
            source=AnalysisSource.FALLBACK,
            degraded=True,
            advisory="notice",
            latency_ms=1.234,
        )
        data = outcome.to_dict()
        assert data["source"] == "fallback"
        assert data["degraded"] is True
        assert data["latency_ms"] == 1.23
        assert data["analysis"]["risk_scores"]["cardiovascular"] == 62
