"""
Risk Analysis Orchestrator

Single entry point of the pipeline. Per call:

    Start ──(no credential)──────────────► Fallback ─► Done
      │                                      ▲
      ├──(unnamed disease)───────────────────┤
      │                                      │
      └──► Inferring ──(any failure)─────────┘
               │
               └──(success)──────────────────────────► Done

Every call starts fresh: nothing is cached or retried, and no state is
shared between calls, so concurrent calls are safe. Failures never reach
the caller; they come back as a degraded outcome with an advisory.
"""
import asyncio
from datetime import datetime
from typing import Optional, Sequence

from eternity.config import AnalysisSettings
from eternity.core.analysis.fallback import (
    DEMO_NOTICE,
    FAILURE_ADVISORY,
    INCOMPLETE_INPUT_ADVISORY,
    FallbackProvider,
)
from eternity.core.analysis.inference import AnalysisInferenceClient
from eternity.core.analysis.prompt_builder import build_analysis_request
from eternity.core.llm.gemini_client import GeminiConfig
from eternity.models.analysis import AnalysisOutcome, AnalysisSource
from eternity.models.health import (
    FamilyMember,
    PersonalHealth,
    ensure_ready_for_analysis,
    snapshot_family_history,
)
from eternity.utils import get_logger
from eternity.utils.exceptions import InferenceError, InputValidationError

logger = get_logger(__name__)


def gemini_config_from_settings(settings: AnalysisSettings) -> GeminiConfig:
    """Map application settings onto a Gemini client config."""
    return GeminiConfig(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        temperature=settings.temperature,
        request_timeout_seconds=settings.request_timeout_seconds,
    )


class RiskAnalysisOrchestrator:
    """
    Chooses between live Gemini inference and the demo fallback.

    Configuration is injected at construction; the environment is never read here.
    """

    def __init__(
        self,
        settings: Optional[AnalysisSettings] = None,
        inference_client: Optional[AnalysisInferenceClient] = None,
        fallback: Optional[FallbackProvider] = None,
    ):
        """
        Args:
            settings: Credential, model and timeout settings. Defaults to an
                unconfigured AnalysisSettings, which always falls back.
            inference_client: Optional pre-built client (used by tests)
            fallback: Optional fallback provider
        """
        self.settings = settings or AnalysisSettings()
        self.inference_client = inference_client or AnalysisInferenceClient(
            gemini_config_from_settings(self.settings)
        )
        self.fallback = fallback or FallbackProvider()

    @property
    def is_configured(self) -> bool:
        return self.inference_client.is_configured

    def _fallback_outcome(self, advisory: str, start_time: datetime) -> AnalysisOutcome:
        return AnalysisOutcome(
            result=self.fallback.get_result(),
            source=AnalysisSource.FALLBACK,
            degraded=True,
            advisory=advisory,
            latency_ms=(datetime.now() - start_time).total_seconds() * 1000,
        )

    def _failure_outcome(self, error: Exception, start_time: datetime) -> AnalysisOutcome:
        if isinstance(error, InferenceError):
            logger.warning(f"Gemini analysis failed [{error.code}]: {error.message}")
        else:
            logger.exception(f"Unexpected error during Gemini analysis: {error}")
        return self._fallback_outcome(FAILURE_ADVISORY, start_time)

    def _incomplete_input_outcome(
        self,
        family_history: Sequence[FamilyMember],
        start_time: datetime
    ) -> Optional[AnalysisOutcome]:
        try:
            ensure_ready_for_analysis(family_history)
        except InputValidationError as e:
            logger.warning(f"Analysis input not ready: {e.message}")
            return self._fallback_outcome(INCOMPLETE_INPUT_ADVISORY, start_time)
        return None

    def _build_request(
        self,
        family_history: Sequence[FamilyMember],
        personal_health: PersonalHealth
    ) -> str:
        # Snapshot first: the caller may keep editing while we wait on Gemini
        return build_analysis_request(
            snapshot_family_history(family_history),
            personal_health.copy(),
        )

    def analyze(
        self,
        family_history: Sequence[FamilyMember],
        personal_health: PersonalHealth
    ) -> AnalysisOutcome:
        """
        Produce a health-risk analysis.

        Args:
            family_history: Ancestor records (may be empty)
            personal_health: The user's record

        Returns:
            AnalysisOutcome with exactly one complete AnalysisResult. A history
            with an unnamed disease is never sent to Gemini; it gets the demo
            result with INCOMPLETE_INPUT_ADVISORY.
        """
        start_time = datetime.now()

        if not self.is_configured:
            logger.info("Gemini API key not configured - serving demo analysis")
            return self._fallback_outcome(DEMO_NOTICE, start_time)

        incomplete = self._incomplete_input_outcome(family_history, start_time)
        if incomplete is not None:
            return incomplete

        try:
            request_text = self._build_request(family_history, personal_health)
            result = self.inference_client.infer(request_text)
        except Exception as e:
            return self._failure_outcome(e, start_time)

        return AnalysisOutcome(
            result=result,
            source=AnalysisSource.GEMINI,
            latency_ms=(datetime.now() - start_time).total_seconds() * 1000,
        )

    async def analyze_async(
        self,
        family_history: Sequence[FamilyMember],
        personal_health: PersonalHealth
    ) -> AnalysisOutcome:
        """
        Async variant of analyze() for use inside an event loop.

        Cancellation propagates to the awaiting caller; there is nothing to undo.
        """
        start_time = datetime.now()

        if not self.is_configured:
            logger.info("Gemini API key not configured - serving demo analysis")
            if self.settings.demo_delay_seconds > 0:
                await asyncio.sleep(self.settings.demo_delay_seconds)
            return self._fallback_outcome(DEMO_NOTICE, start_time)

        incomplete = self._incomplete_input_outcome(family_history, start_time)
        if incomplete is not None:
            return incomplete

        try:
            request_text = self._build_request(family_history, personal_health)
            result = await self.inference_client.infer_async(request_text)
        except Exception as e:
            return self._failure_outcome(e, start_time)

        return AnalysisOutcome(
            result=result,
            source=AnalysisSource.GEMINI,
            latency_ms=(datetime.now() - start_time).total_seconds() * 1000,
        )
