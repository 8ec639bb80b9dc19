"""
Analysis Request Builder

Turns a family history and a personal health record into the single text
request sent to Gemini. Pure: identical inputs always give identical text.
"""
import json
from typing import Any, Dict, List, Sequence

from eternity.models.health import FamilyMember, PersonalHealth

SYSTEM_INSTRUCTION = """당신은 건강 리스크 분석 엔진 "Eternity AI"입니다.
사용자 데이터를 기반으로 질환 리스크를 분석하여 JSON으로만 응답하세요.
의학적 진단이 아닌 통계적 리스크 추정임을 전제로, 간결하고 핵심적인 정보 위주로 작성하세요."""

ANALYSIS_DIRECTIVES = (
    "유전적 취약성(가족력)을 베이스로 하고, 현재 지표(혈압/혈당/콜레스테롤 등)가 정상이면 완화, 비정상이면 증폭하세요.",
    "거주지의 환경 요인을 호흡기 리스크에 반영하세요.",
    "5년 후의 미래를 '관리 성공'과 '실패' 시나리오로 예측하세요.",
)

OUTPUT_FIELDS = (
    ("summary", "string", "핵심 3줄 요약"),
    ("risk_scores", "object{cardiovascular, respiratory, metabolic: number}", "심혈관, 호흡기, 대사 질환 점수 (0-100)"),
    ("radar_chart_data", "object{labels: string[], user_values: number[], age_group_avg: number[]}",
     "5개 항목(심혈관, 호흡기, 대사, 간, 면역) 점수 및 동나이대 평균, 세 배열의 길이는 동일"),
    ("risk_analysis_text", "object{cardiovascular, respiratory, metabolic: string}", "각 질환별 짧고 강렬한 분석 문구"),
    ("prediction_timeline", "array[3] of {year: string, status: string, score: number}",
     "순서대로 현재 / 5년후(미관리) / 5년후(관리)의 점수(0-100)와 상태"),
    ("action_plan", "string[]", "구체적 실행 방안 3가지"),
    ("comparison_with_family", "string", "가족력 대비 현재 상태 요약"),
)


def serialize_family_history(family_history: Sequence[FamilyMember]) -> List[Dict[str, Any]]:
    """Family members in input order, without their opaque ids."""
    return [member.to_dict(include_id=False) for member in family_history]


def _to_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, sort_keys=True)


def build_analysis_request(
    family_history: Sequence[FamilyMember],
    personal_health: PersonalHealth
) -> str:
    """
    Build the analysis request text.

    Args:
        family_history: Ancestors with disease and smoking annotations
        personal_health: The user's own record

    Returns:
        Request text embedding the data, the analysis directives and the
        required output fields
    """
    prompt = f"""[데이터]
가족력: {_to_json(serialize_family_history(family_history))}
현재상태: {_to_json(personal_health.to_dict())}

[분석 로직]
"""
    for index, directive in enumerate(ANALYSIS_DIRECTIVES, start=1):
        prompt += f"{index}. {directive}\n"

    prompt += "\n[JSON 필드]\n"
    for name, type_hint, description in OUTPUT_FIELDS:
        prompt += f"- {name} ({type_hint}): {description}\n"

    return prompt
