"""
Gemini response schema for AnalysisResult.

Written in the OpenAPI subset Gemini accepts for structured output. It must
stay field-for-field in step with eternity.models.analysis.AnalysisResult.
"""
from typing import Any, Dict

RESPONSE_MIME_TYPE = "application/json"


def _object(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "OBJECT",
        "properties": properties,
        "required": list(properties),
    }


def _array(items: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "ARRAY", "items": items}


_STRING = {"type": "STRING"}
_NUMBER = {"type": "NUMBER"}

_BY_DISEASE_GROUP = ("cardiovascular", "respiratory", "metabolic")


ANALYSIS_RESPONSE_SCHEMA: Dict[str, Any] = _object({
    "summary": _STRING,
    "risk_scores": _object({name: _NUMBER for name in _BY_DISEASE_GROUP}),
    "radar_chart_data": _object({
        "labels": _array(_STRING),
        "user_values": _array(_NUMBER),
        "age_group_avg": _array(_NUMBER),
    }),
    "risk_analysis_text": _object({name: _STRING for name in _BY_DISEASE_GROUP}),
    "prediction_timeline": _array(_object({
        "year": _STRING,
        "status": _STRING,
        "score": _NUMBER,
    })),
    "action_plan": _array(_STRING),
    "comparison_with_family": _STRING,
})
