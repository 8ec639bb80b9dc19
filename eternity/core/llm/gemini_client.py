"""
Gemini API Client

Wrapper for Google Gemini (via LangChain) with structured-output support,
a bounded wait and error classification.

Failures are raised, never papered over: the caller decides what a failed
call means.
"""
from dataclasses import dataclass
from typing import Dict, Any, List, Optional
from enum import Enum
import asyncio
from datetime import datetime

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from eternity.config import DEFAULT_TIMEOUT_SECONDS, is_configured_api_key
from eternity.utils import get_logger
from eternity.utils.exceptions import ConfigurationMissing, ServiceUnavailable

logger = get_logger(__name__)


class GeminiModel(str, Enum):
    """Gemini models the analysis has been run against."""
    FLASH_3_0_PREVIEW = "gemini-3-flash-preview"
    FLASH_2_5 = "gemini-2.5-flash"  # Stable standard
    FLASH_2_5_LITE = "gemini-2.5-flash-lite"
    PRO_2_5 = "gemini-2.5-pro"


@dataclass
class GeminiConfig:
    """Configuration for Gemini client. The API key is always passed in explicitly."""
    api_key: Optional[str] = None
    model: str = GeminiModel.FLASH_2_5.value
    temperature: float = 0.4

    max_output_tokens: int = 4096
    top_p: float = 0.9
    top_k: int = 40

    # Structured Output
    response_mime_type: Optional[str] = None
    response_schema: Optional[Dict[str, Any]] = None

    # 0 disables thinking; left unset for pro models, which cannot turn it off
    thinking_budget: Optional[int] = 0

    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def model_name(self) -> str:
        """Resolve model name whether model is a GeminiModel member or a plain string."""
        m = self.model
        return m.value if hasattr(m, "value") else str(m)

    @property
    def thinking_disabled_allowed(self) -> bool:
        """Gemini pro models always think and reject a zero thinking budget."""
        return "-pro" not in self.model_name

    def resolved_thinking_budget(self) -> Optional[int]:
        """Thinking budget to send, or None to leave the model default."""
        if self.thinking_budget == 0 and not self.thinking_disabled_allowed:
            return None
        return self.thinking_budget


@dataclass
class GeminiResponse:
    """Raw response from Gemini."""
    text: str
    model: str
    finish_reason: str = "STOP"
    prompt_tokens: int = 0
    completion_tokens: int = 0
    latency_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "model": self.model,
            "finish_reason": self.finish_reason,
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "latency_ms": round(self.latency_ms, 2)
        }


def _extract_text(content: Any) -> str:
    """LangChain returns either a string or a list of content parts."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts: List[str] = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return str(content)


class GeminiClient:
    """
    Client for Google Gemini API.

    Holds no per-request state, so one instance can serve concurrent calls.
    """

    def __init__(self, config: GeminiConfig, llm: Optional[Any] = None):
        """
        Initialize Gemini client.

        Args:
            config: Client configuration including the credential
            llm: Optional pre-built LangChain chat model (used by tests)
        """
        self.config = config
        self._llm = llm

        if self._llm is None and self.is_configured:
            self._llm = self._build_llm()

    def _build_llm(self) -> ChatGoogleGenerativeAI:
        """Create the LangChain Gemini model with the configured output schema."""
        kwargs: Dict[str, Any] = dict(
            model=self.config.model_name,
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_output_tokens,
            top_p=self.config.top_p,
            top_k=self.config.top_k,
            timeout=self.config.request_timeout_seconds,
            max_retries=0,
            google_api_key=self.config.api_key,
        )
        if self.config.response_mime_type:
            kwargs["response_mime_type"] = self.config.response_mime_type
        if self.config.response_schema is not None:
            kwargs["response_schema"] = self.config.response_schema
        thinking_budget = self.config.resolved_thinking_budget()
        if thinking_budget is not None:
            kwargs["thinking_budget"] = thinking_budget

        llm = ChatGoogleGenerativeAI(**kwargs)
        logger.info(f"LangChain Gemini client initialized with model: {self.config.model_name}")
        return llm

    @property
    def is_configured(self) -> bool:
        """True when a real (non-placeholder) API key is present."""
        return is_configured_api_key(self.config.api_key)

    def _require_llm(self) -> Any:
        if self._llm is None:
            raise ConfigurationMissing(details={"model": self.config.model_name})
        return self._llm

    @staticmethod
    def _build_messages(prompt: str, system_instruction: Optional[str]) -> list:
        messages = []
        if system_instruction:
            messages.append(SystemMessage(content=system_instruction))
        messages.append(HumanMessage(content=prompt))
        return messages

    def _to_response(self, response: Any, start_time: datetime) -> GeminiResponse:
        latency = (datetime.now() - start_time).total_seconds() * 1000
        text = _extract_text(response.content if hasattr(response, "content") else response)

        prompt_tokens = 0
        completion_tokens = 0
        usage = getattr(response, "usage_metadata", None)
        if usage:
            prompt_tokens = usage.get("input_tokens", 0)
            completion_tokens = usage.get("output_tokens", 0)

        finish_reason = "STOP"
        metadata = getattr(response, "response_metadata", None)
        if isinstance(metadata, dict) and metadata.get("finish_reason"):
            finish_reason = str(metadata["finish_reason"])

        return GeminiResponse(
            text=text,
            model=self.config.model_name,
            finish_reason=finish_reason,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            latency_ms=latency,
        )

    def generate(self, prompt: str, system_instruction: Optional[str] = None) -> GeminiResponse:
        """
        Generate a response from Gemini using LangChain.

        Args:
            prompt: The user prompt
            system_instruction: Optional system instruction

        Returns:
            GeminiResponse with generated text

        Raises:
            ConfigurationMissing: no usable API key
            ServiceUnavailable: transport, timeout or service-side failure
        """
        llm = self._require_llm()
        start_time = datetime.now()

        try:
            response = llm.invoke(self._build_messages(prompt, system_instruction))
        except Exception as e:
            logger.error(f"LangChain Gemini generation failed: {e}")
            raise ServiceUnavailable(
                f"Gemini request failed: {e}",
                details={"model": self.config.model_name, "error_type": type(e).__name__},
            ) from e

        return self._to_response(response, start_time)

    async def generate_async(self, prompt: str, system_instruction: Optional[str] = None) -> GeminiResponse:
        """
        True async generate using LangChain's ainvoke, bounded by the request timeout.

        Raises the same errors as generate(); asyncio cancellation propagates.
        """
        llm = self._require_llm()
        start_time = datetime.now()
        timeout = self.config.request_timeout_seconds

        try:
            response = await asyncio.wait_for(
                llm.ainvoke(self._build_messages(prompt, system_instruction)),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Async Gemini generation timed out after {timeout}s")
            raise ServiceUnavailable(
                f"Gemini request timed out after {timeout}s",
                details={"model": self.config.model_name, "timeout_seconds": timeout},
            ) from e
        except Exception as e:
            logger.error(f"Async Gemini generation failed: {e}")
            raise ServiceUnavailable(
                f"Gemini request failed: {e}",
                details={"model": self.config.model_name, "error_type": type(e).__name__},
            ) from e

        return self._to_response(response, start_time)
