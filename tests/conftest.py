"""
Pytest Configuration and Fixtures

Shared fixtures for risk analysis pipeline tests.
"""
import copy
import json
from typing import Any, Dict, List
from unittest.mock import AsyncMock, Mock

import pytest
from langchain_core.messages import AIMessage

from eternity.config import AnalysisSettings
from eternity.core.analysis.inference import AnalysisInferenceClient
from eternity.core.llm.gemini_client import GeminiClient, GeminiConfig
from eternity.models.health import (
    DiseaseHistory,
    FamilyMember,
    PersonalHealth,
    Relationship,
    SmokingStatus,
    default_personal_health,
)

TEST_API_KEY = "test-gemini-key"


@pytest.fixture
def personal_health() -> PersonalHealth:
    """Default record: 35-year-old male non-smoker living in Seoul."""
    return default_personal_health()


@pytest.fixture
def father_with_hypertension() -> FamilyMember:
    return FamilyMember(
        relationship=Relationship.FATHER,
        smoking=SmokingStatus.PAST_SMOKER,
        diseases=[DiseaseHistory(name="고혈압", diagnosis_age=45, is_cause_of_death=False)],
    )


@pytest.fixture
def family_history(father_with_hypertension) -> List[FamilyMember]:
    grandmother = FamilyMember(
        relationship=Relationship.MATERNAL_GRANDMOTHER,
        deceased=True,
        diseases=[
            DiseaseHistory(name="당뇨", diagnosis_age=60),
            DiseaseHistory(name="뇌졸중", diagnosis_age=78, is_cause_of_death=True, death_age=79),
        ],
    )
    return [father_with_hypertension, grandmother]


@pytest.fixture
def analysis_payload() -> Dict[str, Any]:
    """A well-formed Gemini analysis payload."""
    return {
        "summary": "가족력 대비 양호한 상태입니다.",
        "risk_scores": {"cardiovascular": 55, "respiratory": 30.5, "metabolic": 20},
        "radar_chart_data": {
            "labels": ["심혈관", "호흡기", "대사", "간", "면역"],
            "user_values": [55, 30.5, 20, 25, 30],
            "age_group_avg": [45, 30, 40, 38, 35],
        },
        "risk_analysis_text": {
            "cardiovascular": "부친의 고혈압 이력이 있으나 현재 혈압은 정상입니다.",
            "respiratory": "도심 대기질 영향이 있습니다.",
            "metabolic": "혈당 관리가 우수합니다.",
        },
        "prediction_timeline": [
            {"year": "현재", "status": "안정", "score": 40},
            {"year": "5년 후(관리 안 함)", "status": "주의", "score": 70},
            {"year": "5년 후(관리 함)", "status": "유지", "score": 35},
        ],
        "action_plan": ["유산소 운동", "저염식", "마스크 착용"],
        "comparison_with_family": "아버지보다 지표가 양호합니다.",
    }


@pytest.fixture
def make_payload(analysis_payload):
    """Build a payload variant: make_payload(lambda p: p.pop('summary'))."""
    def _make(mutate=None) -> Dict[str, Any]:
        payload = copy.deepcopy(analysis_payload)
        if mutate is not None:
            mutate(payload)
        return payload
    return _make


def _fake_llm(content: Any = "", error: Exception = None) -> Mock:
    llm = Mock()
    llm.ainvoke = AsyncMock()
    if error is not None:
        llm.invoke.side_effect = error
        llm.ainvoke.side_effect = error
    else:
        message = AIMessage(content=content)
        llm.invoke.return_value = message
        llm.ainvoke.return_value = message
    return llm


def _inference_client_for(llm: Mock, **config_overrides) -> AnalysisInferenceClient:
    config = GeminiConfig(api_key=TEST_API_KEY, **config_overrides)
    return AnalysisInferenceClient(config, gemini_client=GeminiClient(config, llm=llm))


@pytest.fixture
def fake_llm():
    """Factory for a stand-in LangChain chat model answering with content or raising error."""
    return _fake_llm


@pytest.fixture
def inference_client_for():
    """Factory: AnalysisInferenceClient wired to a given fake chat model."""
    return _inference_client_for


@pytest.fixture
def as_json():
    return lambda payload: json.dumps(payload, ensure_ascii=False)


@pytest.fixture
def configured_settings() -> AnalysisSettings:
    return AnalysisSettings(gemini_api_key=TEST_API_KEY)


@pytest.fixture
def unconfigured_settings() -> AnalysisSettings:
    return AnalysisSettings(gemini_api_key=None)
