"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    RiskAnalysisError,
    InputValidationError,
    InferenceError,
    ConfigurationMissing,
    ServiceUnavailable,
    EmptyResponse,
    SchemaViolation,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "RiskAnalysisError",
    "InputValidationError",
    "InferenceError",
    "ConfigurationMissing",
    "ServiceUnavailable",
    "EmptyResponse",
    "SchemaViolation",
]
