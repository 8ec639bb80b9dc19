"""
Schema-Validated Inference Client

Sends an analysis request to Gemini with the AnalysisResult response schema
attached, then parses and validates the payload independently. Gemini is
asked to conform; the result is only trusted once pydantic agrees.

One attempt per call. Retrying is not this layer's job.
"""
import dataclasses
import json
import re
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from eternity.core.analysis.prompt_builder import SYSTEM_INSTRUCTION
from eternity.core.analysis.schema import ANALYSIS_RESPONSE_SCHEMA, RESPONSE_MIME_TYPE
from eternity.core.llm.gemini_client import GeminiClient, GeminiConfig, GeminiResponse
from eternity.models.analysis import AnalysisResult
from eternity.utils import get_logger
from eternity.utils.exceptions import EmptyResponse, SchemaViolation

logger = get_logger(__name__)

_FENCE_PATTERN = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)


def schema_config(config: GeminiConfig) -> GeminiConfig:
    """Copy of config with the AnalysisResult schema and JSON mime type attached."""
    return dataclasses.replace(
        config,
        response_mime_type=RESPONSE_MIME_TYPE,
        response_schema=ANALYSIS_RESPONSE_SCHEMA,
    )


def _reject_constant(token: str) -> Any:
    # json.loads accepts NaN, Infinity and -Infinity, which are not JSON
    raise SchemaViolation(f"Response contains non-finite number {token}", details={"token": token})


def parse_analysis_payload(text: Optional[str]) -> AnalysisResult:
    """
    Parse a Gemini text payload into an AnalysisResult.

    Raises:
        EmptyResponse: no payload text
        SchemaViolation: payload is not JSON, not an object, or does not
            match the AnalysisResult shape
    """
    if text is None or not text.strip():
        raise EmptyResponse()

    match = _FENCE_PATTERN.match(text)
    if match:
        text = match.group(1)

    try:
        payload: Any = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise SchemaViolation(f"Response is not valid JSON: {e.msg}", details={"position": e.pos}) from e

    if not isinstance(payload, dict):
        raise SchemaViolation(f"Response must be a JSON object, got {type(payload).__name__}")

    try:
        return AnalysisResult.model_validate(payload)
    except PydanticValidationError as e:
        errors = [
            {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
            for err in e.errors()
        ]
        raise SchemaViolation(
            f"Response does not match AnalysisResult ({len(errors)} error(s))",
            errors=errors,
        ) from e


class AnalysisInferenceClient:
    """
    Runs one schema-constrained analysis call against Gemini.

    Stateless beyond its configuration; safe to share between concurrent calls.
    """

    def __init__(self, config: GeminiConfig, gemini_client: Optional[GeminiClient] = None):
        """
        Args:
            config: Gemini configuration including the credential
            gemini_client: Optional pre-built client (used by tests)
        """
        self.config = schema_config(config)
        self.gemini_client = gemini_client or GeminiClient(self.config)

    @property
    def is_configured(self) -> bool:
        return self.gemini_client.is_configured

    def _parse(self, response: GeminiResponse) -> AnalysisResult:
        result = parse_analysis_payload(response.text)
        logger.info(
            f"Gemini analysis parsed ({response.model}, {response.latency_ms:.0f}ms, "
            f"{response.completion_tokens} output tokens)"
        )
        return result

    def infer(self, request_text: str) -> AnalysisResult:
        """
        Execute the analysis request synchronously.

        Raises:
            ConfigurationMissing, ServiceUnavailable, EmptyResponse, SchemaViolation
        """
        response = self.gemini_client.generate(request_text, SYSTEM_INSTRUCTION)
        return self._parse(response)

    async def infer_async(self, request_text: str) -> AnalysisResult:
        """Async variant of infer(); same error contract."""
        response = await self.gemini_client.generate_async(request_text, SYSTEM_INSTRUCTION)
        return self._parse(response)
