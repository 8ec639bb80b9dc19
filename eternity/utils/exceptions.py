"""
Custom Exception Hierarchy

Error taxonomy for the risk analysis pipeline. Every inference-path failure
derives from InferenceError so the orchestrator can absorb the whole family
at one boundary.
"""
from typing import Optional, Dict, Any


class RiskAnalysisError(Exception):
    """Base exception for all risk analysis errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class InputValidationError(RiskAnalysisError):
    """Family history or personal health input is invalid."""

    def __init__(
        self,
        message: str,
        field: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INPUT_VALIDATION_ERROR",
            details={"field": field, **(details or {})}
        )
        self.field = field


class InferenceError(RiskAnalysisError):
    """Errors during the Gemini inference call."""

    def __init__(
        self,
        message: str,
        code: str = "INFERENCE_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, code=code, details=details)


class ConfigurationMissing(InferenceError):
    """Credential absent or still the placeholder value."""

    def __init__(self, message: str = "Gemini API key is not configured", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="CONFIGURATION_MISSING", details=details)


class ServiceUnavailable(InferenceError):
    """Network, transport, timeout or service-side failure."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="SERVICE_UNAVAILABLE", details=details)


class EmptyResponse(InferenceError):
    """Service answered without any payload text."""

    def __init__(self, message: str = "No response text from Gemini", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="EMPTY_RESPONSE", details=details)


class SchemaViolation(InferenceError):
    """Payload present but does not match the AnalysisResult shape."""

    def __init__(
        self,
        message: str,
        errors: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="SCHEMA_VIOLATION",
            details={"errors": errors or [], **(details or {})}
        )
        self.errors = errors or []
