"""
Risk Analysis Pipeline

Request builder, schema-validated Gemini inference, demo fallback and the
orchestrator that decides between them.
"""
from .prompt_builder import build_analysis_request, SYSTEM_INSTRUCTION
from .schema import ANALYSIS_RESPONSE_SCHEMA
from .inference import AnalysisInferenceClient, parse_analysis_payload
from .fallback import (
    FallbackProvider,
    DEMO_ANALYSIS_RESULT,
    DEMO_NOTICE,
    FAILURE_ADVISORY,
    INCOMPLETE_INPUT_ADVISORY,
)
from .orchestrator import RiskAnalysisOrchestrator, gemini_config_from_settings

__all__ = [
    "build_analysis_request",
    "SYSTEM_INSTRUCTION",
    "ANALYSIS_RESPONSE_SCHEMA",
    "AnalysisInferenceClient",
    "parse_analysis_payload",
    "FallbackProvider",
    "DEMO_ANALYSIS_RESULT",
    "DEMO_NOTICE",
    "FAILURE_ADVISORY",
    "INCOMPLETE_INPUT_ADVISORY",
    "RiskAnalysisOrchestrator",
    "gemini_config_from_settings",
]
